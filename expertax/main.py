import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ALLOWED_ORIGINS, DATABASE_URL
from .domain.agents.router import router as agents_router
from .domain.appointments.router import router as appointments_router
from .domain.blog.router import router as blog_router
from .domain.contacts.router import router as contacts_router
from .domain.documents.router import router as documents_router
from .domain.testimonials.router import router as testimonials_router
from .routes.auth import router as auth_router
from .routes.calendly import router as calendly_router
from .storage import Storage, build_storage
from .storage.seed import seed_agents

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    if app.state.storage is None:
        app.state.storage = build_storage(DATABASE_URL)
    seed_agents(app.state.storage)
    yield
    logger.info("Application shutting down...")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report schema failures as 400 with per-field detail"""
    # Submitted values are left out of the log; they can include passwords
    summary = [{key: error.get(key) for key in ("loc", "msg", "type")} for error in exc.errors()]
    logger.warning(f"Validation error for {request.url.path}: {summary}")
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - Error: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    """Build the API. Without an explicit storage the backend is chosen from DATABASE_URL at startup."""
    app = FastAPI(title="ProVision ExperTax API", version="1.0.0", lifespan=lifespan)
    app.state.storage = storage

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,  # session cookie
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["*"],
    )

    # Routes
    app.include_router(auth_router)
    app.include_router(contacts_router)
    app.include_router(agents_router)
    app.include_router(appointments_router)
    app.include_router(calendly_router)
    app.include_router(documents_router)
    app.include_router(blog_router)
    app.include_router(testimonials_router)

    @app.get("/")
    def root():
        return {"message": "ProVision ExperTax API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()
