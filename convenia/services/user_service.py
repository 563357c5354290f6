"""
User administration service
"""

import logging
from typing import List, Optional
from convenia.models import db, User
from convenia.models.user import ADMIN_ROLE, TEACHER_ROLE, TEACHER_ROLES, USER_ROLES
from convenia.utils.validators import (
    validate_email, validate_password, validate_required, validate_choice
)
from convenia.utils.exceptions import ValidationError, NotFoundError, ConflictError

logger = logging.getLogger(__name__)


class UserService:
    """Account management used by the admin dashboard"""

    @staticmethod
    def create_user(email: str, password: str, name: str, role: str = TEACHER_ROLE,
                    department: Optional[str] = None, active: bool = True) -> User:
        """
        Add an account

        Raises:
            ValidationError: Missing or malformed field
            ConflictError: Email already used (case-insensitive)
        """
        validate_required(email, 'Email')
        validate_required(password, 'Password')
        validate_required(name, 'Name')
        if not validate_email(email):
            raise ValidationError("Invalid email format")
        if not validate_password(password):
            raise ValidationError("Password must be at least 6 characters")
        role = (role or TEACHER_ROLE).strip()
        validate_choice(role, USER_ROLES, 'role')

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise ConflictError("A user with this email already exists")

        user = User(email=email, name=name.strip(), role=role,
                    department=department, active=bool(active))
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        logger.info("Created user %s (id=%s, role=%s)", email, user.id, role)
        return user

    @staticmethod
    def get_user(user_id: int) -> User:
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_user_by_email(email: str) -> User:
        validate_required(email, 'Email')
        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def list_users() -> List[User]:
        return User.query.order_by(User.name, User.id).all()

    @staticmethod
    def list_teachers() -> List[User]:
        return User.query.filter(User.role.in_(TEACHER_ROLES)).order_by(User.name, User.id).all()

    @staticmethod
    def toggle_role(user_id: int, acting_user: Optional[User] = None) -> User:
        """Switch between teacher and admin"""
        user = UserService.get_user(user_id)
        UserService._refuse_self(user, acting_user)

        user.role = TEACHER_ROLE if user.role == ADMIN_ROLE else ADMIN_ROLE
        db.session.commit()
        logger.info("User id=%s role set to %s", user.id, user.role)
        return user

    @staticmethod
    def toggle_active(user_id: int, acting_user: Optional[User] = None) -> User:
        user = UserService.get_user(user_id)
        UserService._refuse_self(user, acting_user)

        user.active = not user.active
        db.session.commit()
        logger.info("User id=%s active=%s", user.id, user.active)
        return user

    @staticmethod
    def delete_user(user_id: int, acting_user: Optional[User] = None) -> None:
        """Hard delete; the user's requests are kept"""
        user = UserService.get_user(user_id)
        UserService._refuse_self(user, acting_user)

        db.session.delete(user)
        db.session.commit()
        logger.info("Deleted user id=%s", user_id)

    @staticmethod
    def _refuse_self(user: User, acting_user: Optional[User]) -> None:
        if acting_user is not None and acting_user.id == user.id:
            raise ValidationError("You cannot modify your own account")
