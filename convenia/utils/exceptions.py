"""
Custom exceptions for the Convenia application
"""


class ConveniaError(Exception):
    """Base exception for Convenia application"""
    status_code = 500


class ValidationError(ConveniaError):
    """Validation error"""
    status_code = 400


class AuthenticationError(ConveniaError):
    """Authentication error"""
    status_code = 401


class AuthorizationError(ConveniaError):
    """Authorization error"""
    status_code = 403


class NotFoundError(ConveniaError):
    """Requested record does not exist"""
    status_code = 404


class ConflictError(ConveniaError):
    """Duplicate record"""
    status_code = 409


class FileUploadError(ConveniaError):
    """File upload error"""
    status_code = 400


class StorageError(ConveniaError):
    """Filesystem storage error"""
    status_code = 500
