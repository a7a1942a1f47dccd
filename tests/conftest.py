import json
from unittest.mock import MagicMock

import pytest

from app import create_app
from models import get_class_session
from models.registration import Registration

SCRIPT_URL = 'https://script.google.com/macros/s/test-deployment/exec'


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SECRET_KEY': 'test',
        'ADMIN_PASSWORD': 'letmein',
        'DEFAULT_SCRIPT_URL': '',
        'REMOTE_TIMEOUT': 5,
        'GEMINI_API_KEY': '',
        'STUDIO_TIMEZONE': 'Asia/Taipei',
    })
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    res = client.post('/auth/login', json={'password': 'letmein'})
    assert res.status_code == 200
    return client


def make_response(status_code=200, body=None, text=None):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = json.dumps(body) if body is not None else ''
    response.text = text
    return response


def make_registration(name='Amy', class_id='yin-0', is_paid=False, last5=None, timestamp=1767225600000):
    session = get_class_session(class_id)
    return Registration.create(name, f'{name.lower()}_line', session, is_paid,
                               payment_last5=last5, timestamp=timestamp)
