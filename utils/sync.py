"""
Sync Coordinator
Write-through to the local cache, best-effort push to the spreadsheet, and
reads that fall back to the cache whenever the spreadsheet is unavailable.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from models.registration import Registration
from utils.local_cache import LocalCache
from utils.remote_client import RemoteEndpointClient, RemoteEndpointError, ScriptVersionError

logger = logging.getLogger(__name__)

SOURCE_CLOUD = 'cloud'
SOURCE_LOCAL = 'local'

UPLOAD_FAILED_WARNING = 'Could not upload to the cloud; saved on this device only.'
DELETE_FAILED_MESSAGE = (
    'Failed to delete cloud data. Check the network connection or the Apps Script setup.'
)


@dataclass
class SyncResult:
    """Registrations plus where they came from."""
    registrations: List[Registration] = field(default_factory=list)
    source: str = SOURCE_LOCAL
    error: Optional[str] = None

    @property
    def connected(self):
        return self.source == SOURCE_CLOUD

    def status_dict(self):
        return {
            'connected': self.connected,
            'source': self.source,
            'error': self.error,
        }


class SyncCoordinator:
    """Decides between the remote endpoint and the local cache."""

    def __init__(self, settings, cache=None, client=None):
        self.settings = settings
        self.cache = cache or LocalCache()
        if client is None and settings.is_configured:
            client = RemoteEndpointClient(settings.api_url, timeout=settings.timeout)
        self.client = client

    def read(self) -> SyncResult:
        if not self.client:
            return SyncResult(self.cache.load(), SOURCE_LOCAL)

        try:
            registrations = self.client.fetch_all()
        except RemoteEndpointError as e:
            logger.error("Cloud fetch failed: %s", e)
            return SyncResult(self.cache.load(), SOURCE_LOCAL, str(e))

        self.cache.replace(registrations)
        return SyncResult(registrations, SOURCE_CLOUD)

    def write(self, new_registrations: List[Registration]) -> Optional[str]:
        """Cache first, then push. Returns a warning if the push failed."""
        self.cache.append(new_registrations)

        if not self.client:
            return None
        try:
            self.client.append(new_registrations)
        except RemoteEndpointError as e:
            logger.warning("Cloud save failed: %s", e)
            return UPLOAD_FAILED_WARNING
        return None

    def clear_all(self) -> Tuple[bool, Optional[str]]:
        self.cache.clear()

        if not self.client:
            return True, None
        try:
            self.client.delete_all()
        except ScriptVersionError as e:
            logger.warning("Cloud delete rejected by outdated script")
            return False, str(e)
        except RemoteEndpointError as e:
            logger.error("Cloud delete failed: %s", e)
            return False, DELETE_FAILED_MESSAGE
        return True, None


def coordinator_from_config(config):
    """Build a coordinator from the app config and the persisted URL."""
    from utils.endpoint_config import resolve
    settings = resolve(config.get('DEFAULT_SCRIPT_URL', ''), config.get('REMOTE_TIMEOUT'))
    return SyncCoordinator(settings)
