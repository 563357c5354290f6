import pytest

from convenia.services import UserService
from convenia.utils import ConflictError, NotFoundError, ValidationError


NEW_USER = {
    'email': 'sami.ben.ali@enit.tn',
    'password': 'secret12',
    'name': 'Sami Ben Ali',
    'role': 'teacher',
    'department': 'Génie Civil',
}


def test_admin_adds_user(client, admin_headers):
    response = client.post('/api/users', json=NEW_USER, headers=admin_headers)

    assert response.status_code == 201
    user = response.get_json()['user']
    assert user['email'] == NEW_USER['email']
    assert user['department'] == 'Génie Civil'
    assert user['active'] is True

    login = client.post('/api/auth/login', json={'email': NEW_USER['email'], 'password': NEW_USER['password']})
    assert login.status_code == 200


def test_add_user_rejects_duplicates_and_bad_roles(client, admin_headers, teacher):
    duplicate = dict(NEW_USER, email=teacher['email'])
    assert client.post('/api/users', json=duplicate, headers=admin_headers).status_code == 409

    bad_role = dict(NEW_USER, role='superuser')
    assert client.post('/api/users', json=bad_role, headers=admin_headers).status_code == 400


def test_user_admin_endpoints_require_admin(client, teacher_headers, admin):
    assert client.get('/api/users').status_code == 401
    assert client.get('/api/users', headers=teacher_headers).status_code == 403
    assert client.post('/api/users', json=NEW_USER, headers=teacher_headers).status_code == 403
    assert client.delete(f"/api/users/{admin['id']}", headers=teacher_headers).status_code == 403


def test_list_users(client, admin_headers, teacher):
    response = client.get('/api/users', headers=admin_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['count'] == 2
    assert [user['name'] for user in body['data']] == ['Hazem Haddar', 'Meriem Balegi']


def test_toggle_role(client, admin_headers, teacher):
    response = client.patch(f"/api/users/{teacher['id']}/role", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['user']['role'] == 'admin'

    response = client.patch(f"/api/users/{teacher['id']}/role", headers=admin_headers)
    assert response.get_json()['user']['role'] == 'teacher'


def test_toggle_active_blocks_login(client, admin_headers, teacher):
    response = client.patch(f"/api/users/{teacher['id']}/active", headers=admin_headers)
    assert response.status_code == 200
    assert response.get_json()['user']['active'] is False

    login = client.post('/api/auth/login', json={'email': teacher['email'], 'password': teacher['password']})
    assert login.status_code == 401


def test_delete_user(client, admin_headers, teacher):
    assert client.delete(f"/api/users/{teacher['id']}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/users/{teacher['id']}", headers=admin_headers).status_code == 404


def test_admin_cannot_modify_own_account(client, admin, admin_headers):
    assert client.patch(f"/api/users/{admin['id']}/role", headers=admin_headers).status_code == 400
    assert client.patch(f"/api/users/{admin['id']}/active", headers=admin_headers).status_code == 400
    assert client.delete(f"/api/users/{admin['id']}", headers=admin_headers).status_code == 400


def test_user_service_email_is_case_insensitive(app_ctx):
    UserService.create_user('Ines@ENIT.tn', 'secret12', 'Ines')

    assert UserService.get_user_by_email('ines@enit.tn').name == 'Ines'
    with pytest.raises(ConflictError):
        UserService.create_user('INES@enit.tn', 'secret12', 'Ines again')


def test_user_service_unknown_ids(app_ctx):
    with pytest.raises(NotFoundError):
        UserService.get_user(404)
    with pytest.raises(NotFoundError):
        UserService.toggle_active(404)


def test_user_service_requires_name(app_ctx):
    with pytest.raises(ValidationError):
        UserService.create_user('someone@enit.tn', 'secret12', '')
