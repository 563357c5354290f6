"""
Authentication service
"""

import logging
from datetime import datetime, timedelta
from functools import wraps
from typing import Optional, Dict, Any

import jwt
from flask import current_app, request, g

from convenia.models import db, User
from convenia.models.user import TEACHER_ROLE, TEACHER_ROLES
from convenia.services.user_service import UserService
from convenia.utils.validators import validate_password, validate_required
from convenia.utils.exceptions import ValidationError, AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Authentication service class"""

    @staticmethod
    def authenticate(email: str, password: str) -> User:
        """
        Authenticate a user

        Args:
            email: User email
            password: User password

        Returns:
            The matching active user

        Raises:
            ValidationError: A field is missing
            AuthenticationError: Same message for unknown email, wrong
                password or inactive account
        """
        validate_required(email, 'Email')
        validate_required(password, 'Password')

        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None or not user.check_password(password) or not user.active:
            logger.info("Failed login attempt for %s", email.strip().lower())
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user

    @staticmethod
    def token_lifetime(remember: bool = False) -> timedelta:
        if remember:
            return timedelta(days=current_app.config['REMEMBER_ME_DAYS'])
        return timedelta(minutes=current_app.config['JWT_EXPIRES_MIN'])

    @staticmethod
    def issue_token(user: User, remember: bool = False) -> str:
        """Signed session token; carries the user id only"""
        now = datetime.utcnow()
        payload = {
            'uid': user.id,
            'iat': now,
            'exp': now + AuthService.token_lifetime(remember),
        }
        return jwt.encode(payload, current_app.config['JWT_SECRET'],
                          algorithm=current_app.config['JWT_ALGORITHM'])

    @staticmethod
    def decode_token(token: str) -> Optional[Dict[str, Any]]:
        if not token:
            return None
        try:
            return jwt.decode(token, current_app.config['JWT_SECRET'],
                              algorithms=[current_app.config['JWT_ALGORITHM']])
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected session token: %s", e)
            return None

    @staticmethod
    def request_token() -> Optional[str]:
        """Bearer header first, then the httpOnly session cookie"""
        auth = request.headers.get('Authorization', '')
        if auth.lower().startswith('bearer '):
            return auth.split(' ', 1)[1].strip()
        return request.cookies.get(current_app.config['AUTH_COOKIE_NAME'])

    @staticmethod
    def get_current_user() -> Optional[User]:
        """Get the user behind the request's session token"""
        user = None
        token = AuthService.request_token()
        if token:
            payload = AuthService.decode_token(token)
            if payload is not None:
                try:
                    uid = int(payload.get('uid'))
                except (TypeError, ValueError):
                    uid = None
                if uid is not None:
                    user = db.session.get(User, uid)
                    # Role and active flag always come from the database
                    if user is not None and not user.active:
                        user = None

        return user

    @staticmethod
    def set_session_cookie(response, token: str, remember: bool = False) -> None:
        """httpOnly cookie for browser clients; lives as long as the token"""
        response.set_cookie(
            current_app.config['AUTH_COOKIE_NAME'], token,
            max_age=int(AuthService.token_lifetime(remember).total_seconds()),
            httponly=True,
            secure=current_app.config['AUTH_COOKIE_SECURE'],
            samesite='Lax',
        )

    @staticmethod
    def clear_session_cookie(response) -> None:
        response.delete_cookie(
            current_app.config['AUTH_COOKIE_NAME'],
            httponly=True,
            secure=current_app.config['AUTH_COOKIE_SECURE'],
            samesite='Lax',
        )

    @staticmethod
    def require_auth() -> User:
        """Require authentication - raise exception if not authenticated"""
        user = AuthService.get_current_user()
        if not user:
            raise AuthenticationError("Authentication required")
        return user

    @staticmethod
    def require_owner_or_admin(user: User, teacher_id) -> None:
        """Teachers may only touch their own requests"""
        if user.is_admin:
            return
        if str(user.id) != str(teacher_id):
            raise AuthorizationError("You can only access your own requests")

    @staticmethod
    def register(email: str, password: str, name: str, department: Optional[str] = None) -> User:
        """
        Self-registration; the account is always a teacher

        Raises:
            ValidationError: Missing or malformed field
            ConflictError: Email already registered
        """
        user = UserService.create_user(email, password, name, role=TEACHER_ROLE,
                                       department=department, active=True)
        logger.info("Self-registered user %s (id=%s)", user.email, user.id)
        return user

    @staticmethod
    def change_password(user: User, current_password: str, new_password: str) -> None:
        validate_required(current_password, 'Current password')
        validate_required(new_password, 'New password')
        if not validate_password(new_password):
            raise ValidationError("New password must be at least 6 characters")
        if not user.check_password(current_password):
            raise AuthenticationError("Current password is incorrect")

        user.set_password(new_password)
        db.session.commit()
        logger.info("Password changed for user id=%s", user.id)


def login_required(view):
    """Reject the call with 401 unless a valid session token is present

    The resolved user is left on g.current_user for the view.
    """
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.current_user = AuthService.require_auth()
        return view(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Reject the call with 403 unless the current user has one of roles"""
    allowed = set()
    for role in roles:
        allowed.update(TEACHER_ROLES if role == TEACHER_ROLE else (role,))

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            user = AuthService.require_auth()
            if user.role not in allowed:
                raise AuthorizationError("You are not allowed to perform this action")
            g.current_user = user
            return view(*args, **kwargs)
        return wrapper
    return decorator
