"""
Authentication routes
"""

from flask import Blueprint, request, jsonify, g
from convenia.models import db
from convenia.services import AuthService, UserService, login_required, role_required
from convenia.utils import (
    ConveniaError, AuthorizationError, log_error, log_info, create_response,
    error_response, get_role_dashboard, as_bool
)

auth_bp = Blueprint('auth', __name__)


def _payload():
    """JSON body, falling back to form fields"""
    return request.get_json(silent=True) or request.form


@auth_bp.route('/login', methods=['POST'])
def login():
    """Handle user login"""
    try:
        data = _payload()
        user = AuthService.authenticate(data.get('email', ''), data.get('password', ''))
        remember = as_bool(data.get('remember'))
        token = AuthService.issue_token(user, remember)
        log_info(f"User {user.email} logged in")

        response = jsonify(create_response(
            True, "Login successful",
            user=user.to_dict(),
            token=token,
            redirect=get_role_dashboard(user.role),
        ))
        AuthService.set_session_cookie(response, token, remember)
        return response

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Login error", e)
        return jsonify(create_response(False, "Login failed. Please try again.")), 500


@auth_bp.route('/register', methods=['POST'])
def register():
    """Self-registration of a teacher account"""
    try:
        data = _payload()
        user = AuthService.register(
            data.get('email'), data.get('password'), data.get('name'), data.get('department')
        )
        return jsonify(create_response(True, "User created successfully", user=user.to_dict())), 201

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Registration error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Registration failed")), 500


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Tokens are stateless; only the browser cookie is cleared"""
    response = jsonify(create_response(True, "Logged out successfully"))
    AuthService.clear_session_cookie(response)
    return response


@auth_bp.route('/me', methods=['GET'])
@login_required
def get_current_user():
    """Get current logged-in user"""
    user = g.current_user
    return jsonify(create_response(True, "User found", user=user.to_dict(),
                                   redirect=get_role_dashboard(user.role)))


@auth_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    try:
        data = _payload()
        AuthService.change_password(
            g.current_user, data.get('currentPassword'), data.get('newPassword')
        )
        return jsonify(create_response(True, "Password changed successfully"))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Change password error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to change password")), 500


@auth_bp.route('/user', methods=['GET'])
@login_required
def get_user_by_email():
    """Look up an account by email (admins, or the user themself)"""
    try:
        current = g.current_user
        email = request.args.get('email', '')
        if not current.is_admin and email.strip().lower() != current.email:
            raise AuthorizationError("You are not allowed to perform this action")

        user = UserService.get_user_by_email(email)
        return jsonify(create_response(True, "User found", user=user.to_dict()))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Get user error", e)
        return jsonify(create_response(False, "Failed to get user")), 500


@auth_bp.route('/teachers', methods=['GET'])
@role_required('admin')
def list_teachers():
    try:
        teachers = [user.to_dict() for user in UserService.list_teachers()]
        return jsonify(create_response(True, "Teachers retrieved", teachers, count=len(teachers)))

    except Exception as e:
        log_error("List teachers error", e)
        return jsonify(create_response(False, "Failed to get teachers")), 500
