"""
Convenia - test configuration and fixtures
"""
import io

import pytest
from werkzeug.datastructures import FileStorage

from convenia import create_app
from convenia.models import db, User

ADMIN_PASSWORD = 'admin-secret'
TEACHER_PASSWORD = 'teacher-secret'


@pytest.fixture
def app(tmp_path):
    """Fresh app with an in-memory database and a private upload folder"""
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    """Application context for calling services directly"""
    with app.app_context():
        yield app


def make_user(app, email, password, name, role='teacher', department='TIC', active=True):
    """Insert an account and return its plain attributes"""
    with app.app_context():
        user = User(email=email, name=name, role=role, department=department, active=active)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return {'id': user.id, 'email': user.email, 'password': password, 'role': role, 'name': name}


@pytest.fixture
def admin(app):
    return make_user(app, 'hazem.haddar@enit.tn', ADMIN_PASSWORD, 'Hazem Haddar',
                     role='admin', department='Administration')


@pytest.fixture
def teacher(app):
    return make_user(app, 'meriem.balegi@enit.tn', TEACHER_PASSWORD, 'Meriem Balegi')


def login_headers(client, user):
    # Separate client, so the shared one carries no session cookie
    response = client.application.test_client().post('/api/auth/login', json={'email': user['email'], 'password': user['password']})
    assert response.status_code == 200, response.get_json()
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def admin_headers(client, admin):
    return login_headers(client, admin)


@pytest.fixture
def teacher_headers(client, teacher):
    return login_headers(client, teacher)


def upload(name='convention.pdf', content=b'%PDF-1.4 test', content_type='application/pdf'):
    """A FileStorage as Flask hands it to the service layer"""
    return FileStorage(stream=io.BytesIO(content), filename=name, content_type=content_type)


def form_file(name='convention.pdf', content=b'%PDF-1.4 test', content_type='application/pdf'):
    """A file tuple for the test client's multipart encoder"""
    return (io.BytesIO(content), name, content_type)
