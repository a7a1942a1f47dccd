import base64

import pytest

from models import get_value
from utils.endpoint_config import (
    API_URL_KEY, InvalidEndpointError, build_share_link, decode_param,
    import_from_param, resolve, save_url, validate_url
)

from conftest import SCRIPT_URL


def encode(url):
    return base64.b64encode(url.encode('utf-8')).decode('ascii')


def test_resolve_prefers_persisted_url(app):
    assert resolve('https://default/exec').api_url == 'https://default/exec'
    save_url(SCRIPT_URL)
    assert resolve('https://default/exec').api_url == SCRIPT_URL


def test_resolve_without_any_url(app):
    settings = resolve('')
    assert not settings.is_configured


def test_validate_url():
    assert validate_url(SCRIPT_URL)
    assert not validate_url('https://script.google.com/macros/s/x/dev')
    assert not validate_url('')


def test_save_url_rejects_bad_suffix(app):
    with pytest.raises(InvalidEndpointError):
        save_url('https://example.com/edit')
    assert get_value(API_URL_KEY) is None


def test_import_from_param_persists_url(app):
    assert import_from_param(encode(SCRIPT_URL)) == SCRIPT_URL
    assert get_value(API_URL_KEY) == SCRIPT_URL


def test_decode_param_restores_plus_signs():
    url = 'https://script.google.com/macros/s/AB?>/exec'
    encoded = encode(url)
    assert decode_param(encoded.replace('+', ' ')) == url


def test_decode_param_rejects_garbage():
    with pytest.raises(InvalidEndpointError):
        decode_param('***not base64***')


def test_share_link_round_trip():
    link = build_share_link('http://localhost/', SCRIPT_URL)
    assert link.startswith('http://localhost/?cfg=')


def test_decode_param_accepts_missing_padding():
    encoded = encode(SCRIPT_URL)
    assert decode_param(encoded.rstrip('=')) == SCRIPT_URL
    assert decode_param(encode('https://x.example/exec').rstrip('=')) == 'https://x.example/exec'
