"""
Convention request service
"""

import logging
from datetime import datetime
from typing import List, Optional, Iterable

from sqlalchemy import or_
from werkzeug.datastructures import FileStorage

from convenia.models import db, ConventionRequest, RequestDocument
from convenia.models.convention import REQUEST_STATUSES, REQUEST_TYPES, STATUS_IN_PROGRESS
from convenia.services.storage_service import DocumentStorage
from convenia.utils.validators import validate_required_fields, validate_choice, validate_string_length
from convenia.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'type', 'description', 'teacherId')


def _like_pattern(query: str) -> str:
    escaped = query.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f"%{escaped}%"


def _newest_first(query):
    return query.order_by(ConventionRequest.created_at.desc(), ConventionRequest.id.desc())


class RequestService:
    """Create, list, search, decide on and delete convention requests"""

    @staticmethod
    def create(title: str, type: str, description: str, teacher_id,
               files: Optional[Iterable[FileStorage]] = None) -> ConventionRequest:
        """
        Persist a new request with its documents

        The status is always "In Progress". The request row and its document
        rows are committed together; if anything fails the transaction is
        rolled back and files already written are removed.

        Args:
            title: Request title
            type: One of REQUEST_TYPES
            description: Free text
            teacher_id: Id of the submitting account
            files: Uploaded documents (empty parts are ignored)

        Returns:
            The created request

        Raises:
            ValidationError: Missing field or unknown type
            FileUploadError: Too many files or unsupported MIME type
            StorageError: A file could not be written
        """
        validate_required_fields(
            {'title': title, 'type': type, 'description': description,
             'teacherId': None if teacher_id is None else str(teacher_id)},
            REQUIRED_FIELDS,
        )
        title = title.strip()
        validate_string_length(title, 1, 255, 'Title')
        validate_choice(type, REQUEST_TYPES, 'type')

        uploads = [f for f in (files or []) if f and f.filename]
        DocumentStorage.check_uploads(uploads)

        stored_paths = []
        try:
            convention = ConventionRequest(
                title=title,
                type=type,
                description=description,
                teacher_id=str(teacher_id).strip(),
                status=STATUS_IN_PROGRESS,
            )
            db.session.add(convention)
            for upload in uploads:
                meta = DocumentStorage.save(upload)
                stored_paths.append(meta['file_path'])
                convention.documents.append(RequestDocument(**meta))
            db.session.commit()
        except Exception:
            db.session.rollback()
            for path in stored_paths:
                DocumentStorage.remove(path)
            raise

        logger.info("Created request id=%s for teacher %s with %d document(s)",
                    convention.id, convention.teacher_id, len(uploads))
        return convention

    @staticmethod
    def list_all() -> List[ConventionRequest]:
        return _newest_first(ConventionRequest.query).all()

    @staticmethod
    def list_by_teacher(teacher_id) -> List[ConventionRequest]:
        return _newest_first(ConventionRequest.query.filter_by(teacher_id=str(teacher_id))).all()

    @staticmethod
    def get_by_id(request_id: int) -> ConventionRequest:
        convention = db.session.get(ConventionRequest, request_id)
        if convention is None:
            raise NotFoundError("Request not found")
        return convention

    @staticmethod
    def search(query: Optional[str] = None, status: Optional[str] = None,
               type: Optional[str] = None) -> List[ConventionRequest]:
        """
        Filter requests; every given filter must match

        Args:
            query: Case-insensitive substring of title or description
            status: Exact status
            type: Exact request type
        """
        q = ConventionRequest.query
        if query and query.strip():
            pattern = _like_pattern(query.strip())
            q = q.filter(or_(
                ConventionRequest.title.ilike(pattern, escape='\\'),
                ConventionRequest.description.ilike(pattern, escape='\\'),
            ))
        if status:
            q = q.filter(ConventionRequest.status == status)
        if type:
            q = q.filter(ConventionRequest.type == type)
        return _newest_first(q).all()

    @staticmethod
    def update_status(request_id: int, status: str) -> ConventionRequest:
        """
        Overwrite the status; any status may follow any other

        Raises:
            ValidationError: Status is not one of REQUEST_STATUSES
            NotFoundError: No such request
        """
        validate_choice(status, REQUEST_STATUSES, 'status')
        convention = RequestService.get_by_id(request_id)

        convention.status = status
        convention.updated_at = datetime.utcnow()
        db.session.commit()
        logger.info("Request id=%s status set to %s", convention.id, status)
        return convention

    @staticmethod
    def delete(request_id: int) -> None:
        """
        Delete the request and its documents, then their files

        The database row is authoritative; file removal is best-effort and
        failures are only logged.
        """
        convention = RequestService.get_by_id(request_id)
        paths = [doc.file_path for doc in convention.documents]

        db.session.delete(convention)
        db.session.commit()

        for path in paths:
            DocumentStorage.remove(path)
        logger.info("Deleted request id=%s and %d document(s)", request_id, len(paths))
