import json
import secrets
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import quote

from . import log
from .config import VERSION
from .models import Event
from .template import stringify

LOG_TAG = "EventTokenFinder"

KEY_EVENT_TYPE = "~type"
KEY_EVENT_SOURCE = "~source"
KEY_TIMESTAMP_UNIX = "~timestampu"
KEY_TIMESTAMP_ISO8601 = "~timestampz"
KEY_TIMESTAMP_PLATFORM = "~timestampp"
KEY_SDK_VERSION = "~sdkver"
KEY_CACHEBUST = "~cachebust"
KEY_ALL_URL = "~all_url"
KEY_ALL_JSON = "~all_json"

RANDOM_INT_BOUNDARY = 100000000


def flatten(data: dict, prefix: str = "") -> dict[str, Any]:
    """Flatten nested dicts into dotted keys; lists are kept as values."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict):
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat


def _encode(text: str) -> str:
    return quote(text, safe="-_.~", errors="surrogatepass")


def to_query_string(data: dict[str, Any]) -> str:
    pairs = []
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(stringify(item) for item in value)
        pairs.append(f"{_encode(key)}={_encode(stringify(value))}")
    return "&".join(pairs)


class EventTokenFinder:
    """Resolves token paths against an event.

    ``~``-prefixed keys give event metadata and generated values; any other
    key is looked up in the event data, nested keys joined with ``.``.
    """

    def __init__(self, event: Event, now=None):
        self.event = event
        self._now = now or (lambda: datetime.now(timezone.utc))
        self._flat: Optional[dict[str, Any]] = None

    @property
    def flat_data(self) -> dict[str, Any]:
        if self._flat is None:
            self._flat = flatten(self.event.data) if self.event.data else {}
        return self._flat

    def get(self, path: str) -> Optional[Any]:
        key = (path or "").strip()
        if not key:
            return None
        if key == KEY_EVENT_TYPE:
            return self.event.type
        if key == KEY_EVENT_SOURCE:
            return self.event.source
        if key == KEY_TIMESTAMP_UNIX:
            return str(int(self._now().timestamp()))
        if key == KEY_TIMESTAMP_ISO8601:
            return self._now().astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        if key == KEY_TIMESTAMP_PLATFORM:
            return self._now().astimezone().isoformat(timespec="seconds")
        if key == KEY_SDK_VERSION:
            return VERSION
        if key == KEY_CACHEBUST:
            return str(secrets.randbelow(RANDOM_INT_BOUNDARY))
        if key == KEY_ALL_URL:
            if self.event.data is None:
                log.debug(LOG_TAG, "Event data is null, can not use it to generate an url query string")
                return ""
            return to_query_string(self.flat_data)
        if key == KEY_ALL_JSON:
            if self.event.data is None:
                log.debug(LOG_TAG, "Event data is null, can not use it to generate a json string")
                return ""
            try:
                return json.dumps(self.event.data)
            except (TypeError, ValueError) as e:
                log.debug(LOG_TAG, f"Failed to generate a json string {e}")
                return ""
        value = self.flat_data.get(key)
        if value is None:
            log.verbose(LOG_TAG, f"Unable to replace the token {key}, not found in event data")
        return value
