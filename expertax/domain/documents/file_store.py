"""Disk storage for uploaded client documents"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from ...config import UPLOAD_DIR

logger = logging.getLogger(__name__)


class LocalFileStore:
    """Files live under one directory with generated names; keys are bare file names"""

    def __init__(self, root: str):
        self.root = Path(root)

    def save(self, contents: bytes, extension: str = "") -> str:
        self.root.mkdir(parents=True, exist_ok=True)
        key = f"{uuid.uuid4()}{extension}"
        (self.root / key).write_bytes(contents)
        logger.info(f"✅ Stored upload as {key} ({len(contents)} bytes)")
        return key

    def path_for(self, key: str) -> Optional[Path]:
        """Resolve a key to a file path, or None if the file is gone"""
        path = self.root / os.path.basename(key)
        if not path.is_file():
            return None
        return path


def get_file_store() -> LocalFileStore:
    return LocalFileStore(UPLOAD_DIR)
