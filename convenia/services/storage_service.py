"""
Local disk storage for request documents
"""

import os
import random
import time
import logging
from typing import Dict, Any
from flask import current_app
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename
from convenia.utils.exceptions import FileUploadError, StorageError
from convenia.utils.helpers import ensure_directory_exists

logger = logging.getLogger(__name__)


class DocumentStorage:
    """Writes uploaded files under UPLOAD_FOLDER and removes them again"""

    @staticmethod
    def upload_folder() -> str:
        folder = current_app.config['UPLOAD_FOLDER']
        ensure_directory_exists(folder)
        return folder

    @staticmethod
    def is_allowed(mimetype: str) -> bool:
        return mimetype in current_app.config['ALLOWED_MIME_TYPES']

    @staticmethod
    def check_uploads(uploads) -> None:
        """
        Reject the whole batch before anything touches the disk

        Raises:
            FileUploadError: Too many files or an unsupported MIME type
        """
        limit = current_app.config['MAX_DOCUMENTS_PER_REQUEST']
        if len(uploads) > limit:
            raise FileUploadError(f"Too many files: at most {limit} documents per request")

        for upload in uploads:
            if not DocumentStorage.is_allowed(upload.mimetype):
                raise FileUploadError(f"Invalid file type: {upload.filename} ({upload.mimetype})")

    @staticmethod
    def build_filename(original_name: str) -> str:
        """Timestamp plus random suffix, keeping the original extension"""
        # Only the extension is sanitized; the stem may be in any script
        _, extension = os.path.splitext(original_name or '')
        extension = secure_filename(extension.lstrip('.')).lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
        return f"{unique_suffix}.{extension}" if extension else unique_suffix

    @staticmethod
    def save(upload: FileStorage) -> Dict[str, Any]:
        """
        Store one upload on disk

        Args:
            upload: File received in the multipart body

        Returns:
            Document metadata (file_name, file_path, file_size, mime_type)
        """
        path = os.path.join(DocumentStorage.upload_folder(), DocumentStorage.build_filename(upload.filename))
        try:
            upload.save(path)
            size = os.path.getsize(path)
        except OSError as e:
            raise StorageError(f"Could not store {upload.filename}") from e

        logger.debug("Stored %s at %s (%d bytes)", upload.filename, path, size)
        return {
            'file_name': upload.filename,
            'file_path': path,
            'file_size': size,
            'mime_type': upload.mimetype,
        }

    @staticmethod
    def remove(path: str) -> bool:
        """Best-effort delete; failures are logged, never raised"""
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            logger.warning("Document file already missing: %s", path)
        except OSError as e:
            logger.error("Failed to delete document file %s: %s", path, e)
        return False
