import threading
from typing import TYPE_CHECKING, Callable

from metatags.util.exceptions import InvalidMetatagsClassError
from metatags.util.inflection import split_path
from metatags.util.log import logger

if TYPE_CHECKING:
    from metatags.internal.base_metatags import BaseMetatags


def normalize_key(key: str) -> str:
    """``"Admin::Articles"``, ``"admin/articles"`` -> ``"admin.articles"``."""
    return ".".join(split_path(key))


class MetatagsRegistry:
    """Thread-safe mapping of provider keys to provider classes."""

    _providers: dict[str, type["BaseMetatags"]]
    _listeners: list[Callable[[], None]]
    _lock: threading.Lock
    _version: int

    def __init__(self):
        self._providers = {}
        self._listeners = []
        self._lock = threading.Lock()
        self._version = 0

    @property
    def version(self) -> int:
        """Incremented by every change, so readers can tell a scan went stale."""
        with self._lock:
            return self._version

    def add_listener(self, listener: Callable[[], None]):
        """Call ``listener`` after every change to the registry."""
        self._listeners.append(listener)

    def _changed(self):
        for listener in self._listeners:
            listener()

    def register(self, key: str, provider: type["BaseMetatags"]):
        from metatags.internal.base_metatags import BaseMetatags

        if not isinstance(provider, type) or not issubclass(provider, BaseMetatags):
            raise InvalidMetatagsClassError(provider)
        key = normalize_key(key)
        with self._lock:
            previous = self._providers.get(key)
            self._providers[key] = provider
            self._version += 1
        if previous is not None and previous is not provider:
            logger.warning(
                "Replacing metatags provider",
                key=key,
                previous=previous.__qualname__,
                provider=provider.__qualname__,
            )
        self._changed()

    def unregister(self, key: str) -> type["BaseMetatags"] | None:
        with self._lock:
            provider = self._providers.pop(normalize_key(key), None)
            self._version += 1
        self._changed()
        return provider

    def get(self, key: str) -> type["BaseMetatags"] | None:
        with self._lock:
            return self._providers.get(normalize_key(key))

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def providers(self) -> dict[str, type["BaseMetatags"]]:
        with self._lock:
            return dict(self._providers)

    def replace(self, providers: dict[str, type["BaseMetatags"]]):
        """Swap the whole mapping, e.g. to restore a saved ``providers()`` copy."""
        with self._lock:
            self._providers = dict(providers)
            self._version += 1
        self._changed()

    def clear(self):
        self.replace({})


registry = MetatagsRegistry()
