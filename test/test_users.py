"""
Test cases for registration, activation and account management.
"""
from digitaltests import db
from digitaltests.auth.models import User
from digitaltests.auth.tokens import create_activation_token
from digitaltests.config import config
from digitaltests.quiz.models import LibraryEntry, Question, Quiz
from digitaltests.scores.models import Score
from digitaltests.users import routes as user_routes


def _capture_emails(monkeypatch, result=(True, None)):
    sent = []

    def fake_send_email(to_email, template_id, locale, variables, async_send=None):
        sent.append({'to': to_email, 'template': template_id, 'variables': variables})
        return result

    monkeypatch.setattr(user_routes, 'send_email', fake_send_email)
    return sent


class TestRegistration:
    """Test cases for user registration."""

    def test_register_with_email_sends_activation(self, client, app, monkeypatch):
        sent = _capture_emails(monkeypatch)
        response = client.post('/api/users/register', json={
            'name': 'Alice',
            'email': ' Alice@Example.com ',
            'password': 'password123',
        })
        assert response.status_code == 201
        assert 'email' in response.get_json()['message'].lower()
        assert [mail['template'] for mail in sent] == ['activation']
        assert sent[0]['to'] == 'alice@example.com'

        with app.app_context():
            user = User.query.filter_by(email='alice@example.com').first()
            assert user is not None
            assert user.active is False
            assert user.role == 'User'
            assert user.password_hash != 'password123'

    def test_register_with_username_only(self, client, monkeypatch):
        sent = _capture_emails(monkeypatch)
        response = client.post('/api/users/register', json={
            'name': 'Bob',
            'username': 'bob_99',
            'password': 'password123',
        })
        assert response.status_code == 201
        assert 'username' in response.get_json()['message'].lower()
        assert sent == []

    def test_register_requires_email_or_username(self, client):
        response = client.post('/api/users/register', json={
            'name': 'Bob',
            'password': 'password123',
        })
        assert response.status_code == 400

    def test_register_validation(self, client):
        cases = [
            {'name': 'B', 'username': 'bob', 'password': 'password123'},
            {'name': 'Bob', 'username': 'bo', 'password': 'password123'},
            {'name': 'Bob', 'username': 'bob smith', 'password': 'password123'},
            {'name': 'Bob', 'email': 'not-an-email', 'password': 'password123'},
            {'name': 'Bob', 'username': 'bob', 'password': '123'},
            {'name': 'Bob', 'username': 'bob', 'password': 'x' * 51},
        ]
        for payload in cases:
            response = client.post('/api/users/register', json=payload)
            assert response.status_code == 400, payload

    def test_register_duplicate_email(self, client, make_user):
        make_user(email='alice@example.com')
        response = client.post('/api/users/register', json={
            'name': 'Alice',
            'email': 'alice@example.com',
            'password': 'password123',
        })
        assert response.status_code == 409

    def test_register_duplicate_username(self, client, make_user):
        make_user(username='alice')
        response = client.post('/api/users/register', json={
            'name': 'Alice',
            'username': 'alice',
            'password': 'password123',
        })
        assert response.status_code == 409

    def test_register_while_logged_in(self, login_as):
        user_client, _ = login_as()
        response = user_client.post('/api/users/register', json={
            'name': 'Other',
            'username': 'other',
            'password': 'password123',
        })
        assert response.status_code == 401


class TestActivation:
    """Test cases for account activation."""

    def test_activate_account(self, client, app, make_user, monkeypatch):
        sent = _capture_emails(monkeypatch)
        user_id = make_user(email='new@example.com', active=False)

        response = client.get(f'/api/users/activate?token={create_activation_token(user_id)}')
        assert response.status_code == 200
        assert response.get_json()['data']['active'] is True
        assert [mail['template'] for mail in sent] == ['activation_success']

        with app.app_context():
            assert db.session.get(User, user_id).active is True

    def test_activate_already_active(self, client, make_user):
        user_id = make_user(email='alice@example.com', active=True)
        response = client.get(f'/api/users/activate?token={create_activation_token(user_id)}')
        assert response.status_code == 200

    def test_activate_missing_token(self, client):
        response = client.get('/api/users/activate')
        assert response.status_code == 400

    def test_activate_invalid_token(self, client):
        response = client.get('/api/users/activate?token=garbage')
        assert response.status_code == 401

    def test_activate_expired_token(self, client, make_user, monkeypatch):
        user_id = make_user(email='new@example.com', active=False)
        token = create_activation_token(user_id)
        monkeypatch.setattr(config, 'ACTIVATION_TOKEN_MINUTES', -1)
        response = client.get(f'/api/users/activate?token={token}')
        assert response.status_code == 401
        assert response.get_json()['message'] == 'Activation token has expired'

    def test_activate_deleted_user(self, client):
        response = client.get(f'/api/users/activate?token={create_activation_token(9999)}')
        assert response.status_code == 404

    def test_resend_activation_email(self, client, make_user, monkeypatch):
        sent = _capture_emails(monkeypatch)
        make_user(email='new@example.com', active=False)
        response = client.post('/api/users/resend-activation-email', json={'email': 'new@example.com'})
        assert response.status_code == 200
        assert [mail['template'] for mail in sent] == ['activation']

    def test_resend_activation_email_errors(self, client, make_user):
        make_user(email='alice@example.com', active=True)
        assert client.post('/api/users/resend-activation-email', json={}).status_code == 400
        assert client.post('/api/users/resend-activation-email',
                           json={'email': 'ghost@example.com'}).status_code == 404
        assert client.post('/api/users/resend-activation-email',
                           json={'email': 'alice@example.com'}).status_code == 400


class TestProfile:
    """Test cases for reading and updating the current user."""

    def test_get_user_requires_login(self, client):
        response = client.get('/api/users/user')
        assert response.status_code == 401

    def test_get_user(self, login_as):
        user_client, user_id = login_as()
        response = user_client.get('/api/users/user')
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['id'] == user_id
        assert data['email'] == 'alice@example.com'
        assert 'password_hash' not in data

    def test_update_name_and_username(self, login_as):
        user_client, _ = login_as()
        response = user_client.put('/api/users/update-user', json={'name': 'Alice B', 'username': 'alice_b'})
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['name'] == 'Alice B'
        assert data['username'] == 'alice_b'

    def test_update_username_taken(self, login_as, make_user):
        make_user(username='taken', email='other@example.com')
        user_client, _ = login_as()
        response = user_client.put('/api/users/update-user', json={'username': 'taken'})
        assert response.status_code == 409

    def test_update_email_taken(self, login_as, make_user):
        make_user(email='other@example.com')
        user_client, _ = login_as()
        response = user_client.put('/api/users/update-user', json={'email': 'other@example.com'})
        assert response.status_code == 409

    def test_update_email_deactivates_account(self, login_as, monkeypatch):
        sent = _capture_emails(monkeypatch)
        user_client, _ = login_as()
        response = user_client.put('/api/users/update-user', json={'email': 'new@example.com'})
        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['email'] == 'new@example.com'
        assert data['active'] is False
        assert [mail['to'] for mail in sent] == ['new@example.com']

    def test_update_email_send_failure_keeps_old_state(self, app, login_as, monkeypatch):
        _capture_emails(monkeypatch, result=(False, 'SMTP down'))
        user_client, user_id = login_as()
        response = user_client.put('/api/users/update-user', json={'name': 'Changed', 'email': 'new@example.com'})
        assert response.status_code == 500

        with app.app_context():
            user = db.session.get(User, user_id)
            assert user.email == 'alice@example.com'
            assert user.name == 'Alice'
            assert user.active is True


class TestDeleteAccount:
    """Test cases for deleting an account."""

    def test_delete_account_cascades(self, app, owner, taker, create_quiz, add_question):
        owner_client, owner_id = owner
        taker_client, taker_id = taker

        quiz = create_quiz(owner_client)
        add_question(owner_client, quiz['id'])
        taker_quiz = create_quiz(taker_client, title='Taker quiz')

        # The owner takes the taker's quiz; the taker takes the owner's quiz
        owner_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': taker_quiz['id']})
        taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})
        response = taker_client.post('/api/scores/submit', json={'quizId': quiz['id'], 'answers': [0]})
        assert response.status_code == 201

        response = owner_client.delete('/api/users/delete-account')
        assert response.status_code == 200
        assert 'access_token=;' in response.headers.get('Set-Cookie', '')

        with app.app_context():
            assert db.session.get(User, owner_id) is None
            assert Quiz.query.filter_by(user_id=owner_id).count() == 0
            assert Question.query.count() == 0
            assert Score.query.count() == 0
            assert LibraryEntry.query.filter_by(user_id=owner_id).count() == 0
            assert LibraryEntry.query.filter_by(quiz_id=quiz['id']).count() == 0
            # The other user's own quiz is untouched
            assert db.session.get(Quiz, taker_quiz['id']) is not None
            assert db.session.get(User, taker_id) is not None

        # The session cookie was cleared
        assert owner_client.get('/api/users/user').status_code == 401
