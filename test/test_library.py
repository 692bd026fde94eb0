"""
Test cases for libraries: share links, public quizzes and library reads.
"""
from digitaltests.auth.models import User
from digitaltests.auth.tokens import create_share_token
from digitaltests.common.context import ROLE_ADMIN
from digitaltests.config import config
from digitaltests.quiz.models import LibraryEntry


def _share_token(owner_client, quiz_id):
    response = owner_client.post('/api/quizzes/share-quiz', json={'quizId': quiz_id})
    assert response.status_code == 200
    link = response.get_json()['data']['quizLink']
    assert link.startswith('http://localhost:5173/dashboard/add-quiz-to-library/')
    return link.rsplit('/', 1)[1]


class TestShareQuiz:
    """Test cases for share links."""

    def test_share_requires_quiz_id(self, owner):
        owner_client, _ = owner
        assert owner_client.post('/api/quizzes/share-quiz', json={}).status_code == 400

    def test_share_only_own_quiz(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client)
        response = taker_client.post('/api/quizzes/share-quiz', json={'quizId': quiz['id']})
        assert response.status_code == 404

    def test_redeem_share_link(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client, visibility='private')
        token = _share_token(owner_client, quiz['id'])

        response = taker_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Quiz added to your library'

        library = taker_client.get('/api/quizzes/library').get_json()['data']
        assert [entry['id'] for entry in library] == [quiz['id']]
        assert library[0]['user']['name'] == 'Owner'
        assert library[0]['user']['email'] == 'owner@example.com'

    def test_redeem_twice_keeps_one_entry(self, app, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, taker_id = taker
        quiz = create_quiz(owner_client)
        token = _share_token(owner_client, quiz['id'])

        assert taker_client.post('/api/quizzes/add-to-library', json={'token': token}).status_code == 200
        response = taker_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Quiz is already in your library'

        with app.app_context():
            assert LibraryEntry.query.filter_by(user_id=taker_id).count() == 1

    def test_concurrent_redeem_hits_primary_key(self, app, owner, taker, create_quiz, monkeypatch):
        owner_client, _ = owner
        taker_client, taker_id = taker
        quiz = create_quiz(owner_client)
        token = _share_token(owner_client, quiz['id'])
        assert taker_client.post('/api/quizzes/add-to-library', json={'token': token}).status_code == 200

        # A request that raced the first one has not seen its entry yet
        monkeypatch.setattr(User, 'has_in_library', lambda self, quiz_id: False)
        response = taker_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Quiz is already in your library'

        with app.app_context():
            assert LibraryEntry.query.filter_by(user_id=taker_id).count() == 1

    def test_redeem_requires_token(self, taker):
        taker_client, _ = taker
        assert taker_client.post('/api/quizzes/add-to-library', json={}).status_code == 400

    def test_redeem_invalid_token(self, taker):
        taker_client, _ = taker
        response = taker_client.post('/api/quizzes/add-to-library', json={'token': 'garbage'})
        assert response.status_code == 401

    def test_redeem_expired_token(self, owner, taker, create_quiz, monkeypatch):
        owner_client, owner_id = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client)
        token = create_share_token(quiz['id'], owner_id)
        monkeypatch.setattr(config, 'SHARE_TOKEN_DAYS', -1)
        response = taker_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 401

    def test_redeem_token_for_deleted_quiz(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client)
        token = _share_token(owner_client, quiz['id'])
        owner_client.delete(f"/api/quizzes/{quiz['id']}")

        response = taker_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 404

    def test_admin_cannot_redeem(self, owner, login_as, create_quiz):
        owner_client, _ = owner
        admin_client, _ = login_as(email='admin@example.com', role=ROLE_ADMIN)
        quiz = create_quiz(owner_client)
        token = _share_token(owner_client, quiz['id'])

        response = admin_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 403

    def test_inactive_user_cannot_redeem(self, owner, login_as, create_quiz):
        owner_client, _ = owner
        inactive_client, _ = login_as(email='inactive@example.com', active=False)
        quiz = create_quiz(owner_client)
        token = _share_token(owner_client, quiz['id'])

        response = inactive_client.post('/api/quizzes/add-to-library', json={'token': token})
        assert response.status_code == 403


class TestAddPublicQuiz:
    """Test cases for adding public quizzes to a library."""

    def test_add_public_quiz(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client, visibility='public')

        response = taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})
        assert response.status_code == 200
        assert response.get_json()['data']['quizLink'] == f"http://localhost:5173/public-quiz/{quiz['id']}"

        profile = taker_client.get('/api/users/user').get_json()['data']
        assert profile['library'] == [quiz['id']]

    def test_add_public_quiz_twice(self, app, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, taker_id = taker
        quiz = create_quiz(owner_client)
        for _ in range(2):
            response = taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})
            assert response.status_code == 200

        with app.app_context():
            assert LibraryEntry.query.filter_by(user_id=taker_id).count() == 1

    def test_private_quiz_not_found(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client, visibility='private')
        response = taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})
        assert response.status_code == 404

    def test_missing_quiz(self, taker):
        taker_client, _ = taker
        assert taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': 999}).status_code == 404
        assert taker_client.post('/api/quizzes/library/add-public-quiz', json={}).status_code == 400

    def test_non_ascii_digit_id(self, taker):
        taker_client, _ = taker
        response = taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': '\u00b2'})
        assert response.status_code == 404

    def test_admin_cannot_add(self, owner, login_as, create_quiz):
        owner_client, _ = owner
        admin_client, _ = login_as(email='admin@example.com', role=ROLE_ADMIN)
        quiz = create_quiz(owner_client)
        response = admin_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})
        assert response.status_code == 403


class TestLibraryQuiz:
    """Test cases for reading and removing library quizzes."""

    def test_get_library_quiz_hides_answers_from_non_owner(self, owner, taker, create_quiz, add_question):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client)
        add_question(owner_client, quiz['id'])
        taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})

        response = taker_client.get(f"/api/quizzes/library/{quiz['id']}")
        assert response.status_code == 200
        question = response.get_json()['data']['questions'][0]
        assert question['question'] == 'Capital of France?'
        assert 'correctOption' not in question

    def test_get_library_quiz_shows_answers_when_configured(self, owner, taker, create_quiz, add_question,
                                                            monkeypatch):
        owner_client, _ = owner
        taker_client, _ = taker
        monkeypatch.setattr(config, 'INCLUDE_CORRECT_OPTIONS', True)
        quiz = create_quiz(owner_client)
        add_question(owner_client, quiz['id'])
        taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})

        question = taker_client.get(f"/api/quizzes/library/{quiz['id']}").get_json()['data']['questions'][0]
        assert question['correctOption'] == 0

    def test_quiz_not_in_library(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        quiz = create_quiz(owner_client)
        assert taker_client.get(f"/api/quizzes/library/{quiz['id']}").status_code == 404

    def test_remove_from_library(self, owner, taker, create_quiz):
        owner_client, _ = owner
        taker_client, _ = taker
        first = create_quiz(owner_client, title='First')
        second = create_quiz(owner_client, title='Second')
        for quiz in (first, second):
            taker_client.post('/api/quizzes/library/add-public-quiz', json={'quizId': quiz['id']})

        response = taker_client.delete(f"/api/quizzes/library/{first['id']}")
        assert response.status_code == 200
        assert response.get_json()['data']['library'] == [second['id']]

        assert taker_client.delete(f"/api/quizzes/library/{first['id']}").status_code == 404

    def test_library_requires_login(self, client):
        assert client.get('/api/quizzes/library').status_code == 401

    def test_empty_library(self, taker):
        taker_client, _ = taker
        response = taker_client.get('/api/quizzes/library')
        assert response.status_code == 200
        assert response.get_json()['data'] == []
