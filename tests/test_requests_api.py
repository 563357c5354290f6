import os
from datetime import datetime

from conftest import form_file
from convenia.models import ConventionRequest


def _submit(client, headers, teacher_id, files=None, **fields):
    data = {
        'title': 'Exchange Agreement',
        'type': 'Student Exchange',
        'description': 'pilot',
        'teacherId': str(teacher_id),
    }
    data.update(fields)
    if files:
        data['documents'] = files
    return client.post('/api/requests', data=data, headers=headers, content_type='multipart/form-data')


def test_submit_without_files(client, teacher, teacher_headers):
    response = _submit(client, teacher_headers, teacher['id'])

    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    assert body['data']['status'] == 'In Progress'
    assert body['data']['documents'] == []
    assert body['data']['title'] == 'Exchange Agreement'
    assert body['data']['teacherId'] == str(teacher['id'])


def test_submit_ignores_client_status(client, teacher, teacher_headers):
    response = _submit(client, teacher_headers, teacher['id'], status='Approved')

    assert response.status_code == 201
    assert response.get_json()['data']['status'] == 'In Progress'


def test_submit_with_documents(client, teacher, teacher_headers):
    files = [form_file('agreement.pdf'), form_file('budget.xlsx', b'PK..',
             'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet')]

    response = _submit(client, teacher_headers, teacher['id'], files=files)

    assert response.status_code == 201
    documents = response.get_json()['data']['documents']
    assert [doc['fileName'] for doc in documents] == ['agreement.pdf', 'budget.xlsx']
    assert all(os.path.exists(doc['filePath']) for doc in documents)


def test_submit_json_body(client, teacher, teacher_headers):
    response = client.post('/api/requests', headers=teacher_headers, json={
        'title': 'Double diplôme', 'type': 'Double Degree', 'description': 'ENIT / INSA', 'teacherId': teacher['id']
    })

    assert response.status_code == 201
    assert response.get_json()['data']['teacherId'] == str(teacher['id'])


def test_submit_json_body_with_non_string_fields(app, client, teacher, teacher_headers):
    response = client.post('/api/requests', headers=teacher_headers, json={
        'title': 42, 'type': 'Research', 'description': 'deep learning', 'teacherId': teacher['id']
    })

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Fields must be strings: title'
    with app.app_context():
        assert ConventionRequest.query.count() == 0


def test_submit_rejects_unsupported_file_type(client, teacher, teacher_headers):
    response = _submit(client, teacher_headers, teacher['id'],
                       files=[form_file('virus.exe', b'MZ', 'application/x-msdownload')])

    assert response.status_code == 400
    assert 'Invalid file type' in response.get_json()['message']


def test_submit_missing_fields(client, teacher, teacher_headers):
    response = _submit(client, teacher_headers, teacher['id'], description='')

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Missing required fields: description'


def test_submit_requires_login(client, teacher):
    assert _submit(client, {}, teacher['id']).status_code == 401


def test_teacher_cannot_file_for_someone_else(client, admin, teacher_headers):
    assert _submit(client, teacher_headers, admin['id']).status_code == 403


def test_admin_listing_newest_first(client, teacher, teacher_headers, admin_headers):
    _submit(client, teacher_headers, teacher['id'], title='Older')
    _submit(client, teacher_headers, teacher['id'], title='Newer')

    response = client.get('/api/requests', headers=admin_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body['count'] == 2
    assert [r['title'] for r in body['data']] == ['Newer', 'Older']


def test_listing_all_requests_is_admin_only(client, teacher_headers):
    assert client.get('/api/requests', headers=teacher_headers).status_code == 403
    assert client.get('/api/requests/search', headers=teacher_headers).status_code == 403


def test_teacher_sees_own_requests(client, admin, teacher, teacher_headers, admin_headers):
    _submit(client, teacher_headers, teacher['id'], title='Mine')
    _submit(client, admin_headers, admin['id'], title='Admin one')

    response = client.get(f"/api/requests/teacher/{teacher['id']}", headers=teacher_headers)
    assert response.status_code == 200
    assert [r['title'] for r in response.get_json()['data']] == ['Mine']

    assert client.get(f"/api/requests/teacher/{admin['id']}", headers=teacher_headers).status_code == 403
    assert client.get(f"/api/requests/teacher/{teacher['id']}", headers=admin_headers).status_code == 200


def test_get_single_request(client, admin, teacher, teacher_headers, admin_headers):
    own = _submit(client, teacher_headers, teacher['id']).get_json()['data']
    other = _submit(client, admin_headers, admin['id']).get_json()['data']

    response = client.get(f"/api/requests/{own['id']}", headers=teacher_headers)
    assert response.status_code == 200
    assert response.get_json()['data']['id'] == own['id']

    assert client.get(f"/api/requests/{other['id']}", headers=teacher_headers).status_code == 403
    assert client.get('/api/requests/999', headers=admin_headers).status_code == 404


def test_search_endpoint(client, teacher, teacher_headers, admin_headers):
    _submit(client, teacher_headers, teacher['id'], title='Projet IA', type='Research', description='deep learning')
    _submit(client, teacher_headers, teacher['id'], title='Projet Physique', type='Research', description='optics')

    response = client.get('/api/requests/search', query_string={'query': 'IA'}, headers=admin_headers)
    assert [r['title'] for r in response.get_json()['data']] == ['Projet IA']

    response = client.get('/api/requests/search', query_string={'query': '', 'status': 'In Progress',
                                                                 'type': 'Research'}, headers=admin_headers)
    assert response.get_json()['count'] == 2

    response = client.get('/api/requests/search', query_string={'type': 'Internship'}, headers=admin_headers)
    assert response.get_json()['data'] == []


def test_update_status_scenario(client, teacher, teacher_headers, admin_headers):
    created = _submit(client, teacher_headers, teacher['id']).get_json()['data']

    response = client.patch(f"/api/requests/{created['id']}/status", json={'status': 'Approved'}, headers=admin_headers)

    assert response.status_code == 200
    updated = response.get_json()['data']
    assert updated['status'] == 'Approved'
    assert datetime.fromisoformat(updated['updatedAt']) > datetime.fromisoformat(created['updatedAt'])

    missing = client.patch('/api/requests/999/status', json={'status': 'Approved'}, headers=admin_headers)
    assert missing.status_code == 404


def test_update_status_rejects_invalid_value(client, teacher, teacher_headers, admin_headers):
    created = _submit(client, teacher_headers, teacher['id']).get_json()['data']

    response = client.patch(f"/api/requests/{created['id']}/status", json={'status': 'Done'}, headers=admin_headers)
    assert response.status_code == 400

    stored = client.get(f"/api/requests/{created['id']}", headers=admin_headers).get_json()['data']
    assert stored['status'] == 'In Progress'


def test_update_status_is_admin_only(client, teacher, teacher_headers):
    created = _submit(client, teacher_headers, teacher['id']).get_json()['data']

    response = client.patch(f"/api/requests/{created['id']}/status", json={'status': 'Approved'},
                            headers=teacher_headers)
    assert response.status_code == 403


def test_delete_request_removes_files(client, teacher, teacher_headers, admin_headers):
    created = _submit(client, teacher_headers, teacher['id'],
                      files=[form_file('a.pdf'), form_file('b.txt', b'text', 'text/plain')]).get_json()['data']
    paths = [doc['filePath'] for doc in created['documents']]
    assert all(os.path.exists(path) for path in paths)

    assert client.delete(f"/api/requests/{created['id']}", headers=teacher_headers).status_code == 403
    assert client.delete(f"/api/requests/{created['id']}", headers=admin_headers).status_code == 200

    assert not any(os.path.exists(path) for path in paths)
    assert client.get(f"/api/requests/{created['id']}", headers=admin_headers).status_code == 404
    assert client.delete(f"/api/requests/{created['id']}", headers=admin_headers).status_code == 404


def test_unknown_route_returns_json(client):
    response = client.get('/api/nowhere')

    assert response.status_code == 404
    assert response.get_json()['success'] is False


def test_health(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.get_json()['success'] is True
