"""
Test cases for login, logout and password reset.
"""
from digitaltests.auth import routes as auth_routes
from digitaltests.auth.tokens import create_reset_token
from digitaltests.config import config


class TestLogin:
    """Test cases for the login endpoint."""

    def test_login_with_email_sets_cookie(self, client, make_user):
        make_user(email='alice@example.com')
        response = client.post('/api/auths/login', json={
            'email': 'alice@example.com',
            'password': 'password123',
        })
        assert response.status_code == 200
        body = response.get_json()
        assert body['data']['email'] == 'alice@example.com'
        assert 'password_hash' not in body['data']
        cookie = response.headers.get('Set-Cookie', '')
        assert 'access_token=' in cookie
        assert 'HttpOnly' in cookie

    def test_login_with_username(self, client, make_user):
        make_user(username='alice_1')
        response = client.post('/api/auths/login', json={
            'username': 'alice_1',
            'password': 'password123',
        })
        assert response.status_code == 200

    def test_login_does_not_require_active_account(self, client, make_user):
        make_user(email='new@example.com', active=False)
        response = client.post('/api/auths/login', json={
            'email': 'new@example.com',
            'password': 'password123',
        })
        assert response.status_code == 200
        assert response.get_json()['data']['active'] is False

    def test_login_missing_password(self, client):
        response = client.post('/api/auths/login', json={'email': 'alice@example.com'})
        assert response.status_code == 400

    def test_login_missing_identity(self, client):
        response = client.post('/api/auths/login', json={'password': 'password123'})
        assert response.status_code == 400

    def test_login_unknown_email(self, client):
        response = client.post('/api/auths/login', json={
            'email': 'ghost@example.com',
            'password': 'password123',
        })
        assert response.status_code == 404

    def test_login_unknown_username(self, client):
        response = client.post('/api/auths/login', json={
            'username': 'ghost',
            'password': 'password123',
        })
        assert response.status_code == 404

    def test_login_wrong_password(self, client, make_user):
        make_user(email='alice@example.com')
        response = client.post('/api/auths/login', json={
            'email': 'alice@example.com',
            'password': 'wrong-password',
        })
        assert response.status_code == 401
        assert 'access_token=' not in response.headers.get('Set-Cookie', '')

    def test_login_when_already_logged_in(self, login_as):
        user_client, _ = login_as()
        response = user_client.post('/api/auths/login', json={
            'email': 'alice@example.com',
            'password': 'password123',
        })
        assert response.status_code == 401


class TestLogout:
    """Test cases for the logout endpoint."""

    def test_logout_requires_session(self, client):
        response = client.post('/api/auths/logout')
        assert response.status_code == 401

    def test_logout_clears_cookie(self, login_as):
        user_client, _ = login_as()
        response = user_client.post('/api/auths/logout')
        assert response.status_code == 200

        # The cookie is gone, so protected routes reject the client again
        response = user_client.get('/api/users/user')
        assert response.status_code == 401

    def test_tampered_cookie_is_rejected(self, client):
        client.set_cookie('access_token', 'not-a-real-token')
        response = client.get('/api/users/user')
        assert response.status_code == 401


class TestForgetPassword:
    """Test cases for requesting a password reset email."""

    def test_email_required(self, client):
        response = client.post('/api/auths/forget-password', json={})
        assert response.status_code == 400

    def test_unknown_email(self, client):
        response = client.post('/api/auths/forget-password', json={'email': 'ghost@example.com'})
        assert response.status_code == 409

    def test_inactive_account(self, client, make_user):
        make_user(email='new@example.com', active=False)
        response = client.post('/api/auths/forget-password', json={'email': 'new@example.com'})
        assert response.status_code == 403

    def test_sends_reset_email(self, client, make_user, monkeypatch):
        sent = []
        monkeypatch.setattr(auth_routes, 'send_email', lambda *args, **kwargs: sent.append(args) or (True, None))
        make_user(email='alice@example.com')

        response = client.post('/api/auths/forget-password', json={'email': 'Alice@Example.com'})
        assert response.status_code == 200
        assert len(sent) == 1
        to_email, template_id, _locale, variables = sent[0]
        assert to_email == 'alice@example.com'
        assert template_id == 'forget_password'
        assert variables['token']


class TestResetPassword:
    """Test cases for resetting a password with a reset token."""

    def test_short_password(self, client):
        response = client.put('/api/auths/reset-password', json={
            'token': create_reset_token('alice@example.com'),
            'password': '123',
        })
        assert response.status_code == 400

    def test_invalid_token(self, client):
        response = client.put('/api/auths/reset-password', json={
            'token': 'garbage',
            'password': 'newpassword',
        })
        assert response.status_code == 401

    def test_expired_token(self, client, make_user, monkeypatch):
        make_user(email='alice@example.com')
        token = create_reset_token('alice@example.com')
        monkeypatch.setattr(config, 'RESET_TOKEN_MINUTES', -1)
        response = client.put('/api/auths/reset-password', json={
            'token': token,
            'password': 'newpassword',
        })
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.put('/api/auths/reset-password', json={
            'token': create_reset_token('ghost@example.com'),
            'password': 'newpassword',
        })
        assert response.status_code == 400

    def test_reset_then_login_with_new_password(self, app, make_user):
        make_user(email='alice@example.com')
        client = app.test_client()
        response = client.put('/api/auths/reset-password', json={
            'token': create_reset_token('alice@example.com'),
            'password': 'newpassword',
        })
        assert response.status_code == 200

        response = client.post('/api/auths/login', json={
            'email': 'alice@example.com',
            'password': 'password123',
        })
        assert response.status_code == 401

        response = client.post('/api/auths/login', json={
            'email': 'alice@example.com',
            'password': 'newpassword',
        })
        assert response.status_code == 200
