import pytest
from fither.app import create_app, db
from fither.models.user import User, ROLE_ADMIN

PASSWORD = 'testpassword123'

MEASUREMENT = {
    'age': 30,
    'height': 165,
    'weight': 65,
    'neck': 32,
    'waist': 75,
    'hip': 95
}


@pytest.fixture
def app():
    """Create application for the tests."""
    app = create_app('testing')

    # Create tables
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory for users stored directly in the database."""
    def _make_user(email='test@example.com', name='Test User', is_active=True, role='user'):
        user = User(email=email, password=PASSWORD, name=name, is_active=is_active, role=role)
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


def login(client, email):
    response = client.post('/api/auth/login', json={'email': email, 'password': PASSWORD})
    assert response.status_code == 200
    return response.get_json()['access_token']


def auth_header(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def test_user(make_user):
    return make_user()


@pytest.fixture
def admin_user(make_user):
    return make_user(email='admin@example.com', name='Admin', role=ROLE_ADMIN)


@pytest.fixture
def user_headers(client, test_user):
    return auth_header(login(client, test_user.email))


@pytest.fixture
def admin_headers(client, admin_user):
    return auth_header(login(client, admin_user.email))


@pytest.fixture
def login_as(client):
    """Log in by email and return the Authorization header."""
    def _login_as(email):
        return auth_header(login(client, email))
    return _login_as


@pytest.fixture
def measurement_payload():
    return dict(MEASUREMENT)
