"""Resolve, persist and provision the spreadsheet endpoint URL."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from models.stored_value import get_value, set_value
from utils.remote_client import REQUIRED_URL_SUFFIX

logger = logging.getLogger(__name__)

API_URL_KEY = 'yoga_api_url'
CONFIG_PARAM = 'cfg'


class InvalidEndpointError(ValueError):
    """A URL or provisioning parameter that cannot be used."""


@dataclass
class EndpointSettings:
    """The endpoint configuration handed explicitly to the sync layer."""
    api_url: str
    timeout: Optional[float] = None

    @property
    def is_configured(self):
        return bool(self.api_url)


def validate_url(url):
    """Syntactic sanity check only: Apps Script web apps end with /exec."""
    return bool(url) and url.strip().endswith(REQUIRED_URL_SUFFIX)


def resolve(default_url='', timeout=None):
    """Persisted override first, then the baked-in default."""
    return EndpointSettings(api_url=get_value(API_URL_KEY) or default_url or '', timeout=timeout)


def save_url(url):
    url = (url or '').strip()
    if url and not validate_url(url):
        raise InvalidEndpointError(
            f"Invalid URL: a Google Apps Script URL must end with '{REQUIRED_URL_SUFFIX}'."
        )
    set_value(API_URL_KEY, url)
    return url


def decode_param(encoded):
    # '+' arrives as a space when the link was not percent-encoded
    value = (encoded or '').strip().replace(' ', '+')
    value += '=' * (-len(value) % 4)
    try:
        return base64.b64decode(value, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise InvalidEndpointError('Invalid configuration parameter') from e


def import_from_param(encoded):
    """Decode and persist the URL carried by a provisioning link."""
    url = decode_param(encoded)
    set_value(API_URL_KEY, url)
    if not validate_url(url):
        logger.warning("Imported endpoint URL does not end with %s: %s", REQUIRED_URL_SUFFIX, url)
    logger.info("Configuration applied successfully")
    return url


def build_share_link(base_url, api_url):
    """Student registration link that provisions the endpoint on first visit."""
    encoded = base64.b64encode(api_url.encode('utf-8')).decode('ascii')
    return f"{base_url}?{urlencode({CONFIG_PARAM: encoded})}"
