"""
User administration routes (admin only)
"""

from flask import Blueprint, request, jsonify, g
from convenia.models import db
from convenia.services import UserService, role_required
from convenia.utils import ConveniaError, log_error, create_response, error_response, as_bool

user_bp = Blueprint('users', __name__)


@user_bp.route('', methods=['GET'])
@role_required('admin')
def list_users():
    try:
        users = [user.to_dict() for user in UserService.list_users()]
        return jsonify(create_response(True, "Users retrieved", users, count=len(users)))

    except Exception as e:
        log_error("List users error", e)
        return jsonify(create_response(False, "Failed to get users")), 500


@user_bp.route('', methods=['POST'])
@role_required('admin')
def add_user():
    """Admin "Add User" action"""
    try:
        data = request.get_json(silent=True) or request.form
        user = UserService.create_user(
            email=data.get('email'),
            password=data.get('password'),
            name=data.get('name'),
            role=data.get('role'),
            department=data.get('department'),
            active=as_bool(data.get('active'), default=True),
        )
        return jsonify(create_response(True, "User created successfully", user=user.to_dict())), 201

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Add user error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to create user")), 500


@user_bp.route('/<int:user_id>/role', methods=['PATCH'])
@role_required('admin')
def toggle_role(user_id):
    try:
        user = UserService.toggle_role(user_id, g.current_user)
        return jsonify(create_response(True, "Role updated", user=user.to_dict()))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Toggle role error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update role")), 500


@user_bp.route('/<int:user_id>/active', methods=['PATCH'])
@role_required('admin')
def toggle_active(user_id):
    try:
        user = UserService.toggle_active(user_id, g.current_user)
        return jsonify(create_response(True, "Account status updated", user=user.to_dict()))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Toggle active error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update account status")), 500


@user_bp.route('/<int:user_id>', methods=['DELETE'])
@role_required('admin')
def delete_user(user_id):
    try:
        UserService.delete_user(user_id, g.current_user)
        return jsonify(create_response(True, "User deleted successfully"))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Delete user error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to delete user")), 500
