import pytest
from flask.testing import FlaskClient

from blog import create_app
from blog.config import TestConfig
from blog.extensions import db
from blog.models import User, Post, Comment


class RequestScopedClient(FlaskClient):
    """Test client that runs every request in its own app context.

    The `app` fixture keeps a context open for setup and assertions. Without a
    fresh one per request, `g` (and Flask-Login's cached user) would leak from
    one request into the next and the session would never be reloaded.
    """

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    app.test_client_class = RequestScopedClient
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(username, password):
    user = User(username=username)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def alice(app):
    return make_user('alice', 'secret')


@pytest.fixture()
def auth_client(client, alice):
    r = client.post('/login', data={'username': 'alice', 'password': 'secret'})
    assert r.status_code == 302
    return client


@pytest.fixture()
def post_with_comments(alice):
    bob = make_user('bob', 'hunter2')
    post = Post(author_id=alice.id, title='Hello', body='First post')
    other = Post(author_id=bob.id, title='Other', body='Second post')
    db.session.add_all([post, other])
    db.session.commit()
    db.session.add_all([
        Comment(user_id=bob.id, post_id=post.id, body='Nice'),
        Comment(user_id=alice.id, post_id=post.id, body='Thanks'),
        Comment(user_id=alice.id, post_id=other.id, body='Elsewhere'),
    ])
    db.session.commit()
    return post
