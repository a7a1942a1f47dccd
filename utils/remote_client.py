"""Client for the Google Apps Script endpoint fronting the registration sheet."""

import json
import logging
from typing import List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from models.registration import Registration, registrations_from_list, registrations_to_list

logger = logging.getLogger(__name__)

REQUIRED_URL_SUFFIX = '/exec'
DELETE_ALL_ACTION = 'delete_all'

# The script parses the raw body from e.postData.contents
POST_HEADERS = {'Content-Type': 'text/plain;charset=utf-8'}

SCRIPT_OUTDATED_MESSAGE = (
    "The Apps Script deployment is out of date and does not recognise the "
    "delete command. Open the spreadsheet, go to Extensions > Apps Script and "
    "redeploy it (Deploy > Manage deployments > New version)."
)


class RemoteEndpointError(Exception):
    """Base class for every failure talking to the remote endpoint."""


class EndpointUnreachableError(RemoteEndpointError):
    """Network or transport failure."""


class EndpointStatusError(RemoteEndpointError):
    """The endpoint answered with a non-OK HTTP status."""

    def __init__(self, status_code):
        super().__init__(f'HTTP {status_code}')
        self.status_code = status_code


class EndpointResponseError(RemoteEndpointError):
    """The endpoint answered, but not with the JSON we expect."""


class ScriptVersionError(RemoteEndpointError):
    """An old script stored the delete command as a registration row."""

    def __init__(self, message=SCRIPT_OUTDATED_MESSAGE):
        super().__init__(message)


def describe_html_response(text: str) -> Optional[str]:
    """Return the page title if text is an HTML document, else None."""
    stripped = text.lstrip().lower()
    if not (stripped.startswith('<!doctype html') or stripped.startswith('<html')):
        return None
    soup = BeautifulSoup(text, 'html.parser')
    title = soup.find('title')
    return title.get_text(strip=True) if title else ''


def parse_json_body(text: str):
    """Parse a response body, classifying non-JSON replies."""
    try:
        return json.loads(text)
    except ValueError:
        title = describe_html_response(text)
        if title is not None:
            page = f" ('{title}')" if title else ''
            raise EndpointResponseError(
                f"Endpoint returned an HTML page{page} instead of JSON. "
                "Check that the script is deployed with access set to 'Anyone'."
            )
        raise EndpointResponseError('Invalid JSON response (check the script permissions)')


class RemoteEndpointClient:
    """Issues the three requests the spreadsheet script understands."""

    def __init__(self, url: str, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout

    def _get(self):
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise EndpointUnreachableError(f'Could not reach the endpoint: {e}') from e
        if response.status_code != requests.codes.ok:
            raise EndpointStatusError(response.status_code)
        return parse_json_body(response.text)

    def _post(self, payload):
        try:
            response = requests.post(
                self.url,
                data=json.dumps(payload).encode('utf-8'),
                headers=POST_HEADERS,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise EndpointUnreachableError(f'Could not reach the endpoint: {e}') from e
        if response.status_code != requests.codes.ok:
            raise EndpointStatusError(response.status_code)
        return response

    def fetch_all(self) -> List[Registration]:
        """GET every row stored in the sheet."""
        data = self._get()
        if not isinstance(data, list):
            raise EndpointResponseError('Endpoint returned JSON that is not a list of registrations')
        return registrations_from_list(data)

    def append(self, registrations: List[Registration]) -> None:
        """POST new rows. The reply body is not inspected."""
        self._post(registrations_to_list(registrations))

    def delete_all(self) -> None:
        """Ask the script to delete every row below the header."""
        response = self._post({'action': DELETE_ALL_ACTION})
        result = parse_json_body(response.text)
        if not isinstance(result, dict):
            raise EndpointResponseError('Unexpected reply to the delete command')

        # Old scripts append the command as a row: {status, count}.
        # Updated scripts reply {status, message}.
        if result.get('count') and not result.get('message'):
            raise ScriptVersionError()
        if result.get('status') == 'error':
            raise EndpointResponseError(result.get('message') or 'The script reported an error')

    def test_connection(self) -> Tuple[bool, str]:
        """Check the endpoint answers with JSON, in plain words."""
        if not self.url.endswith(REQUIRED_URL_SUFFIX):
            return False, f"Invalid URL: it must end with {REQUIRED_URL_SUFFIX}"
        try:
            self._get()
        except EndpointStatusError as e:
            return False, f'The server responded with an error: {e.status_code}'
        except EndpointResponseError as e:
            return False, str(e)
        except EndpointUnreachableError:
            return False, 'Could not connect (network error)'
        return True, 'Connected successfully!'
