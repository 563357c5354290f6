"""
Utilities package initialization
"""

from convenia.utils.exceptions import (
    ConveniaError, ValidationError, AuthenticationError, AuthorizationError,
    NotFoundError, ConflictError, FileUploadError, StorageError
)
from convenia.utils.validators import (
    validate_email, validate_password, validate_required, validate_required_fields,
    validate_choice, validate_string_length
)
from convenia.utils.helpers import (
    setup_logging, log_error, log_info, get_role_dashboard, as_bool,
    ensure_directory_exists, create_response, error_response
)

__all__ = [
    'ConveniaError', 'ValidationError', 'AuthenticationError', 'AuthorizationError',
    'NotFoundError', 'ConflictError', 'FileUploadError', 'StorageError',
    'validate_email', 'validate_password', 'validate_required', 'validate_required_fields',
    'validate_choice', 'validate_string_length',
    'setup_logging', 'log_error', 'log_info', 'get_role_dashboard', 'as_bool',
    'ensure_directory_exists', 'create_response', 'error_response'
]
