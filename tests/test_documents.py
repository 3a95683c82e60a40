from fastapi import Depends

from expertax.domain.documents.file_store import LocalFileStore, get_file_store
from expertax.domain.documents.router import get_document_service
from expertax.domain.documents.service import DocumentService
from expertax.storage import Storage, get_storage

from .conftest import bearer

PDF = b"%PDF-1.4 fake w2 contents"


def upload(client, token="token-alice", name="w2-2024.pdf", contents=PDF,
           content_type="application/pdf", document_type="w2"):
    data = {"documentType": document_type} if document_type is not None else {}
    return client.post(
        "/api/documents",
        files={"file": (name, contents, content_type)},
        data=data,
        headers=bearer(token),
    )


def test_upload_records_document_for_the_caller(client):
    response = upload(client)

    assert response.status_code == 200, response.text
    document = response.json()["document"]
    assert document["clientEmail"] == "alice@example.com"
    assert document["fileName"] == "w2-2024.pdf"
    assert document["fileSize"] == len(PDF)
    assert document["documentType"] == "w2"
    assert document["status"] == "uploaded"
    assert document["fileUrl"] == f"/api/documents/{document['id']}/download"


def test_listing_only_shows_own_documents(client):
    mine = upload(client).json()["document"]
    upload(client, token="token-bob", name="receipt.png", content_type="image/png",
           document_type="receipt")

    listed = client.get("/api/documents", headers=bearer("token-alice")).json()

    assert [d["id"] for d in listed] == [mine["id"]]


def test_owner_can_download_original_file(client):
    document = upload(client).json()["document"]

    response = client.get(document["fileUrl"], headers=bearer("token-alice"))

    assert response.status_code == 200
    assert response.content == PDF
    assert "w2-2024.pdf" in response.headers["content-disposition"]


def test_other_clients_cannot_see_or_touch_a_document(client):
    document = upload(client).json()["document"]

    assert client.get(document["fileUrl"], headers=bearer("token-bob")).status_code == 404
    response = client.patch(
        f"/api/documents/{document['id']}/status",
        json={"status": "reviewed"},
        headers=bearer("token-bob"),
    )
    assert response.status_code == 404


def test_uploads_are_validated(client):
    assert upload(client, content_type="application/zip", name="w2.zip").status_code == 400
    assert upload(client, document_type="passport").status_code == 400
    assert upload(client, document_type=None).status_code == 400

    no_file = client.post("/api/documents", data={"documentType": "w2"}, headers=bearer("token-alice"))
    assert no_file.status_code == 400

    assert client.get("/api/documents", headers=bearer("token-alice")).json() == []


def test_oversized_upload_is_rejected(app, client):
    def small_limit_service(
        storage: Storage = Depends(get_storage),
        files: LocalFileStore = Depends(get_file_store),
    ) -> DocumentService:
        return DocumentService(storage, files, max_bytes=8)

    app.dependency_overrides[get_document_service] = small_limit_service

    response = upload(client, contents=b"0123456789")

    assert response.status_code == 400
    assert "exceeds" in response.json()["detail"]


def test_path_components_are_stripped_from_file_names(client):
    response = upload(client, name="../../etc/w2.pdf")
    assert response.json()["document"]["fileName"] == "w2.pdf"


def test_status_update(client):
    document = upload(client).json()["document"]

    response = client.patch(
        f"/api/documents/{document['id']}/status",
        json={"status": "processing"},
        headers=bearer("token-alice"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "processing"

    invalid = client.patch(
        f"/api/documents/{document['id']}/status",
        json={"status": "shredded"},
        headers=bearer("token-alice"),
    )
    assert invalid.status_code == 400


def test_documents_require_authentication(client):
    assert client.get("/api/documents").status_code == 401
    assert client.get("/api/documents", headers=bearer("forged")).status_code == 401
    assert upload(client, token="forged").status_code == 401


def test_unverified_email_cannot_reach_documents(client):
    upload(client)

    assert client.get("/api/documents", headers=bearer("token-alice-unverified")).status_code == 401
    assert upload(client, token="token-alice-unverified").status_code == 401
