"""
Pytest configuration and fixtures for testing.
Runs the real app against an in-memory SQLite database.
"""
import os

import pytest

# Set test environment variables BEFORE creating app
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'sfndsfojoriwew09rjfjndsknfkj'
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['SESSION_COOKIE_SECURE'] = 'false'
os.environ['SESSION_COOKIE_SAMESITE'] = 'Lax'
os.environ['EMAIL_SUPPRESS_SEND'] = 'true'
os.environ['EMAIL_ASYNC'] = 'false'
os.environ['INCLUDE_CORRECT_OPTIONS'] = 'false'
os.environ['FRONTEND_URL'] = 'http://localhost:5173'

from digitaltests import create_app, db  # noqa: E402
from digitaltests.auth.models import User  # noqa: E402
from digitaltests.auth.utils import hash_password  # noqa: E402
from digitaltests.common.context import ROLE_USER  # noqa: E402

PASSWORD = 'password123'


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture(autouse=True)
def database(app):
    """Fresh tables for every test."""
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield
    with app.app_context():
        db.session.remove()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Insert a user directly and return its id."""
    def _make_user(name='Test User', email=None, username=None, password=PASSWORD,
                   active=True, role=ROLE_USER):
        with app.app_context():
            user = User(
                name=name,
                email=email,
                username=username,
                password_hash=hash_password(password),
                active=active,
                role=role,
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def login_as(app, make_user):
    """
    Create a user and return (client, user_id) for a client holding
    that user's session cookie.
    """
    def _login_as(email='alice@example.com', name='Alice', active=True, role=ROLE_USER, username=None):
        user_id = make_user(name=name, email=email, username=username, active=active, role=role)
        user_client = app.test_client()
        credentials = {'email': email} if email else {'username': username}
        credentials['password'] = PASSWORD
        response = user_client.post('/api/auths/login', json=credentials)
        assert response.status_code == 200, response.get_json()
        return user_client, user_id
    return _login_as


@pytest.fixture
def owner(login_as):
    """An active, logged-in quiz author."""
    return login_as(email='owner@example.com', name='Owner')


@pytest.fixture
def taker(login_as):
    """A second active, logged-in user."""
    return login_as(email='taker@example.com', name='Taker')


@pytest.fixture
def create_quiz():
    def _create_quiz(user_client, **overrides):
        payload = {
            'title': 'Capitals',
            'description': 'World capitals',
            'time': 30,
            'visibility': 'public',
        }
        payload.update(overrides)
        response = user_client.post('/api/quizzes/create', json=payload)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _create_quiz


@pytest.fixture
def add_question():
    def _add_question(user_client, quiz_id, question='Capital of France?',
                      options=('Paris', 'Rome', 'Madrid'), correct_option=0):
        response = user_client.post('/api/questions/add', json={
            'quizId': quiz_id,
            'question': question,
            'options': list(options),
            'correctOption': correct_option,
        })
        assert response.status_code == 201, response.get_json()
        return response.get_json()['data']
    return _add_question
