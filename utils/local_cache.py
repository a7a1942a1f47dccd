import json
import logging
from typing import List

from models.stored_value import get_value, set_value, delete_value
from models.registration import Registration, registrations_from_list, registrations_to_list

logger = logging.getLogger(__name__)

CACHE_KEY = 'yoga_registrations'


class LocalCache:
    """Registrations kept as one serialized list under a fixed key."""

    def __init__(self, key=CACHE_KEY):
        self.key = key

    def load(self) -> List[Registration]:
        raw = get_value(self.key)
        if not raw:
            return []
        try:
            rows = json.loads(raw)
        except ValueError:
            logger.warning("Local cache under %r is corrupt, treating it as empty", self.key)
            return []
        if not isinstance(rows, list):
            logger.warning("Local cache under %r is not a list, treating it as empty", self.key)
            return []
        return registrations_from_list(rows)

    def replace(self, registrations: List[Registration]) -> None:
        set_value(self.key, json.dumps(registrations_to_list(registrations), ensure_ascii=False))

    def append(self, registrations: List[Registration]) -> List[Registration]:
        """Put new registrations in front of the cached ones."""
        updated = list(registrations) + self.load()
        self.replace(updated)
        return updated

    def clear(self) -> None:
        delete_value(self.key)
