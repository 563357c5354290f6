"""
Convention request routes
"""

from flask import Blueprint, request, jsonify, g
from convenia.models import db
from convenia.services import AuthService, RequestService, login_required, role_required
from convenia.utils import ConveniaError, log_error, log_info, create_response, error_response

request_bp = Blueprint('requests', __name__)


def _list_response(conventions, message):
    data = [convention.to_dict() for convention in conventions]
    return jsonify(create_response(True, message, data, count=len(data)))


@request_bp.route('', methods=['GET'])
@role_required('admin')
def get_all_requests():
    """All requests, newest first"""
    try:
        return _list_response(RequestService.list_all(), "Requests retrieved")
    except Exception as e:
        log_error("Get all requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@request_bp.route('/search', methods=['GET'])
@role_required('admin')
def search_requests():
    try:
        conventions = RequestService.search(
            query=request.args.get('query'),
            status=request.args.get('status'),
            type=request.args.get('type'),
        )
        return _list_response(conventions, "Requests retrieved")
    except Exception as e:
        log_error("Search requests error", e)
        return jsonify(create_response(False, "Failed to search requests")), 500


@request_bp.route('/teacher/<teacher_id>', methods=['GET'])
@login_required
def get_teacher_requests(teacher_id):
    try:
        AuthService.require_owner_or_admin(g.current_user, teacher_id)
        return _list_response(RequestService.list_by_teacher(teacher_id), "Requests retrieved")

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Get teacher requests error", e)
        return jsonify(create_response(False, "Failed to get requests")), 500


@request_bp.route('/<int:request_id>', methods=['GET'])
@login_required
def get_request(request_id):
    try:
        convention = RequestService.get_by_id(request_id)
        AuthService.require_owner_or_admin(g.current_user, convention.teacher_id)
        return jsonify(create_response(True, "Request retrieved", convention.to_dict()))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Get request error", e)
        return jsonify(create_response(False, "Failed to get request")), 500


@request_bp.route('', methods=['POST'])
@login_required
def create_request():
    """Submit a request: multipart fields plus up to five `documents` files"""
    try:
        data = request.form if request.form else (request.get_json(silent=True) or {})
        teacher_id = data.get('teacherId')
        if teacher_id not in (None, ''):
            AuthService.require_owner_or_admin(g.current_user, teacher_id)

        # A client-supplied status is ignored
        convention = RequestService.create(
            title=data.get('title'),
            type=data.get('type'),
            description=data.get('description'),
            teacher_id=teacher_id,
            files=request.files.getlist('documents'),
        )
        return jsonify(create_response(True, "Request created successfully", convention.to_dict())), 201

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Create request error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to create request")), 500


@request_bp.route('/<int:request_id>/status', methods=['PATCH'])
@role_required('admin')
def update_request_status(request_id):
    try:
        data = request.get_json(silent=True) or request.form
        convention = RequestService.update_status(request_id, data.get('status'))
        log_info(f"Request {request_id} set to {convention.status} by {g.current_user.email}")
        return jsonify(create_response(True, "Request status updated successfully", convention.to_dict()))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Update request status error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to update request status")), 500


@request_bp.route('/<int:request_id>', methods=['DELETE'])
@role_required('admin')
def delete_request(request_id):
    try:
        RequestService.delete(request_id)
        return jsonify(create_response(True, "Request deleted successfully"))

    except ConveniaError as e:
        return error_response(e)
    except Exception as e:
        log_error("Delete request error", e)
        db.session.rollback()
        return jsonify(create_response(False, "Failed to delete request")), 500
