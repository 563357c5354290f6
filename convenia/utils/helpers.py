"""
Helper utilities
"""

import os
import logging
from typing import Optional, Dict, Any, Tuple
from flask import current_app, jsonify, Response
from convenia.utils.exceptions import ConveniaError


def setup_logging() -> None:
    """Setup application logging"""
    if not current_app.debug:
        # Production logging
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )
    else:
        # Development logging
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s %(name)s %(message)s'
        )


def log_error(message: str, exception: Optional[Exception] = None) -> None:
    """
    Log error message

    Args:
        message: Error message
        exception: Exception object
    """
    if exception:
        current_app.logger.error(f"{message}: {str(exception)}")
    else:
        current_app.logger.error(message)


def log_info(message: str) -> None:
    """
    Log info message

    Args:
        message: Info message
    """
    current_app.logger.info(message)


def get_role_dashboard(role: str) -> str:
    """
    Get dashboard URL the client should render for a role

    Args:
        role: User role

    Returns:
        Dashboard URL
    """
    dashboard_map = {
        'admin': '/admin/dashboard',
        'teacher': '/dashboard',
        'enseignant': '/dashboard',
        'enseignant chercheur': '/dashboard',
    }
    return dashboard_map.get(role, '/dashboard')


def as_bool(value: Any, default: bool = False) -> bool:
    """Form and JSON flags: true, 1, on, yes"""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'on', 'yes')


def ensure_directory_exists(directory_path: str) -> None:
    """
    Ensure directory exists, create if it doesn't

    Args:
        directory_path: Path to directory
    """
    if not os.path.exists(directory_path):
        os.makedirs(directory_path, exist_ok=True)


def create_response(success: bool, message: str, data: Optional[Any] = None, **extra: Any) -> Dict[str, Any]:
    """
    Create standardized API response

    Args:
        success: Whether operation was successful
        message: Response message
        data: Optional data to include
        extra: Additional top-level keys (user, token, count...)

    Returns:
        Standardized response dictionary
    """
    response = {
        'success': success,
        'message': message
    }

    if data is not None:
        response['data'] = data

    response.update(extra)
    return response


def error_response(exc: ConveniaError) -> Tuple[Response, int]:
    """Render an application exception with its HTTP status"""
    return jsonify(create_response(False, str(exc))), exc.status_code
