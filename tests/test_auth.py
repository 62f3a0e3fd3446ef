from urllib.parse import urlparse

import pytest
from sqlalchemy.exc import OperationalError

from blog.auth.services import verify, serialize_identity, deserialize_identity
from blog.errors import AuthStoreError, IdentityNotFound, InvalidCredentials, StoreError
from blog.extensions import db
from blog.models import User


def _location_path(response):
    return urlparse(response.headers['Location']).path


class _BrokenQuery:
    def __getattr__(self, name):
        raise OperationalError('SELECT', {}, Exception('database is gone'))


def test_verify_returns_stored_user(alice):
    user = verify('alice', 'secret')
    assert user.id == alice.id


def test_wrong_password_and_unknown_user_fail_alike(alice):
    with pytest.raises(InvalidCredentials) as wrong_password:
        verify('alice', 'wrong')
    with pytest.raises(InvalidCredentials) as unknown_user:
        verify('nobody', 'secret')

    assert type(wrong_password.value) is type(unknown_user.value)
    assert wrong_password.value.message == unknown_user.value.message


@pytest.mark.parametrize('username,password', [('', 'secret'), ('alice', ''), (None, None)])
def test_missing_credentials_rejected(alice, username, password):
    with pytest.raises(InvalidCredentials):
        verify(username, password)


def test_verify_fails_closed_on_store_error(alice, monkeypatch):
    monkeypatch.setattr(User, 'query', _BrokenQuery())
    with pytest.raises(AuthStoreError):
        verify('alice', 'secret')


def test_session_token_is_user_id(alice):
    assert serialize_identity(alice) == str(alice.id)
    assert alice.get_id() == str(alice.id)


def test_session_token_round_trip(alice):
    restored = deserialize_identity(serialize_identity(alice))
    assert restored.id == alice.id


def test_deserialize_missing_user(alice):
    token = serialize_identity(alice)
    db.session.delete(alice)
    db.session.commit()
    with pytest.raises(IdentityNotFound):
        deserialize_identity(token)


@pytest.mark.parametrize('token', ['abc', None, ''])
def test_deserialize_malformed_token(app, token):
    with pytest.raises(IdentityNotFound):
        deserialize_identity(token)


def test_deserialize_store_error(alice, monkeypatch):
    def broken_get(*args, **kwargs):
        raise OperationalError('SELECT', {}, Exception('database is gone'))

    monkeypatch.setattr(db.session, 'get', broken_get)
    with pytest.raises(StoreError):
        deserialize_identity(str(alice.id))


def test_login_page_renders(client):
    r = client.get('/login')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert '<form' in body
    assert 'name="username"' in body
    assert 'name="password"' in body


def test_login_success_redirects_to_posts(client, alice):
    r = client.post('/login', data={'username': 'alice', 'password': 'secret'})
    assert r.status_code == 302
    assert _location_path(r) == '/posts'

    r = client.get('/posts')
    assert r.status_code == 200


def test_login_wrong_password_redirects_with_flash(client, alice):
    r = client.post('/login', data={'username': 'alice', 'password': 'wrong'})
    assert r.status_code == 302
    assert _location_path(r) == '/login'

    body = client.get('/login').get_data(as_text=True)
    assert 'Invalid username or password.' in body


def test_login_unknown_user_gets_same_flash(client, alice):
    r = client.post('/login', data={'username': 'mallory', 'password': 'secret'}, follow_redirects=True)
    assert r.status_code == 200
    assert 'Invalid username or password.' in r.get_data(as_text=True)


def test_login_store_error_redirects_to_login(client, monkeypatch):
    def failing_verify(username, password):
        raise AuthStoreError('boom')

    monkeypatch.setattr('blog.auth.routes.verify', failing_verify)
    r = client.post('/login', data={'username': 'alice', 'password': 'secret'}, follow_redirects=True)
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert 'Sign-in is unavailable right now.' in body
    assert 'boom' not in body


def test_login_page_redirects_when_signed_in(auth_client):
    r = auth_client.get('/login')
    assert r.status_code == 302
    assert _location_path(r) == '/posts'


def test_unauthenticated_requests_redirect_to_login(client):
    for path in ('/posts', '/post/1', '/user/1'):
        r = client.get(path)
        assert r.status_code == 302
        assert _location_path(r) == '/login'

    r = client.post('/post', json={'title': 'x'})
    assert r.status_code == 302
    assert _location_path(r) == '/login'


def test_logout_ends_session(auth_client):
    r = auth_client.get('/logout')
    assert r.status_code == 302
    assert _location_path(r) == '/login'

    r = auth_client.get('/posts')
    assert r.status_code == 302


def test_deleted_user_session_is_logged_out(auth_client, alice):
    db.session.delete(alice)
    db.session.commit()

    r = auth_client.get('/posts')
    assert r.status_code == 302
    assert _location_path(r) == '/login'


def test_session_stores_only_user_id(auth_client, alice):
    with auth_client.session_transaction() as sess:
        assert sess['_user_id'] == str(alice.id)
        assert 'password' not in sess
        assert 'username' not in sess


def test_signed_in_requests_reload_user_from_session(auth_client, alice, monkeypatch):
    seen = []

    def recording_deserialize(token):
        seen.append(token)
        return deserialize_identity(token)

    monkeypatch.setattr('blog.auth.services.deserialize_identity', recording_deserialize)

    assert auth_client.get('/posts').status_code == 200
    assert auth_client.get(f'/user/{alice.id}').status_code == 200
    assert seen == [str(alice.id), str(alice.id)]
