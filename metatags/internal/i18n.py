"""
Dotted-key string catalogs used for page titles and descriptions.

Catalogs are nested JSON objects, one file per locale (``en.json``,
``fr.json``...), for example::

    {"meta_tags": {"article": {"title": "%{title} | Devpost"}}}

Translations can also be stored at runtime with ``Translator.store``; stored
strings take precedence over the files.
"""
import json
import pathlib
import re
import threading
from functools import lru_cache
from typing import Any

from metatags.internal.env_settings import Settings, get_settings
from metatags.util.cache import ModificationTracker
from metatags.util.exceptions import handle_catalog_error, handle_interpolation_error
from metatags.util.log import logger

_PLACEHOLDER = re.compile(r"%%|%\{(\w+)\}")


def deep_merge(base: dict[str, Any], other: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``other`` into ``base`` in place and return it."""
    for key, value in other.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            deep_merge(base[key], value)
        elif isinstance(value, dict):
            base[key] = deep_merge({}, value)
        else:
            base[key] = value
    return base


def key_parts(key: str, scope: str | None = None) -> list[str]:
    """Split ``scope`` and ``key`` into lookup segments, dropping empty ones."""
    parts: list[str] = []
    for piece in (scope or "", key):
        parts.extend(segment for segment in piece.split(".") if segment)
    return parts


class Translator:
    locales_dir: pathlib.Path | None
    default_locale: str
    reload: bool
    _files: dict[str, dict[str, Any]]
    _stored: dict[str, dict[str, Any]]
    _lock: threading.RLock
    _tracker: ModificationTracker
    _loaded: bool

    def __init__(
        self,
        locales_dir: str | pathlib.Path | None = None,
        default_locale: str = "en",
        reload: bool = True,
    ):
        self.locales_dir = pathlib.Path(locales_dir) if locales_dir else None
        self.default_locale = default_locale
        self.reload = reload
        self._files = {}
        self._stored = {}
        self._lock = threading.RLock()
        self._tracker = ModificationTracker()
        self._loaded = False

    def _scan(self) -> dict[str, float]:
        if self.locales_dir is None or not self.locales_dir.is_dir():
            return {}
        return {
            str(path): path.stat().st_mtime
            for path in sorted(self.locales_dir.glob("*.json"))
        }

    def _load(self, paths: list[str]):
        catalogs: dict[str, dict[str, Any]] = {}
        for raw_path in paths:
            path = pathlib.Path(raw_path)
            locale = path.stem
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                if not isinstance(data, dict):
                    raise ValueError("catalog root must be a JSON object")
            except (OSError, ValueError) as e:
                handle_catalog_error(e, raw_path, locale=locale)
                continue
            deep_merge(catalogs.setdefault(locale, {}), data)
        self._files = catalogs
        logger.debug(
            "Loaded locale catalogs",
            locales=sorted(catalogs),
            locales_dir=str(self.locales_dir),
        )

    def _refresh(self):
        if self.locales_dir is None:
            return
        with self._lock:
            if self._loaded and not self.reload:
                return
            mtimes = self._scan()
            if self._tracker.has_changed(mtimes) or not self._loaded:
                self._load(list(mtimes))
            self._loaded = True

    def store(self, locale: str, data: dict[str, Any]):
        """Merge ``data`` into the runtime catalog for ``locale``."""
        with self._lock:
            deep_merge(self._stored.setdefault(locale, {}), data)

    def clear(self):
        """Forget stored translations and force the files to be read again."""
        with self._lock:
            self._stored = {}
            self._files = {}
            self._tracker.reset()
            self._loaded = False

    def available_locales(self) -> list[str]:
        self._refresh()
        with self._lock:
            return sorted(set(self._files) | set(self._stored))

    def lookup(self, locale: str, parts: list[str]) -> Any:
        """Raw value at ``parts`` for ``locale``, or None."""
        self._refresh()
        with self._lock:
            for catalog in (self._stored.get(locale), self._files.get(locale)):
                node: Any = catalog
                for part in parts:
                    if not isinstance(node, dict) or part not in node:
                        node = None
                        break
                    node = node[part]
                if node is not None:
                    return node
        return None

    def translate(
        self,
        key: str,
        scope: str | None = None,
        locale: str | None = None,
        default: str | None = None,
        **data: Any,
    ) -> str:
        """
        Look up ``scope.key`` and interpolate ``%{name}`` placeholders.

        The requested locale is tried first, then the default locale. Missing
        strings log a warning and return ``default`` or a
        ``translation missing: ...`` marker.
        """
        locale = locale or self.default_locale
        parts = key_parts(key, scope)
        full_key = ".".join(parts)

        for candidate in dict.fromkeys([locale, self.default_locale]):
            value = self.lookup(candidate, parts)
            if isinstance(value, str):
                return self.interpolate(value, data, full_key)

        logger.warning("Missing translation", key=full_key, locale=locale)
        if default is not None:
            return self.interpolate(default, data, full_key)
        return f"translation missing: {locale}.{full_key}"

    def interpolate(self, value: str, data: dict[str, Any], full_key: str) -> str:
        """Fill ``%{name}`` placeholders; ``%%`` is a literal ``%``."""

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is None:
                return "%"
            if name not in data:
                handle_interpolation_error(
                    KeyError(name), full_key, placeholder=name
                )
                return match.group(0)
            if data[name] is None:
                return ""
            return str(data[name])

        return _PLACEHOLDER.sub(replace, value)


@lru_cache
def translator_for(locales_dir: str, default_locale: str, reload: bool) -> Translator:
    """The shared translator of one catalog directory and default locale."""
    return Translator(
        locales_dir=locales_dir, default_locale=default_locale, reload=reload
    )


def get_translator(settings: Settings | None = None) -> Translator:
    """The translator configured by ``settings``, the process settings by default."""
    settings = settings or get_settings()
    return translator_for(
        settings.get_locales_dir(),
        settings.i18n.default_locale,
        settings.i18n.reload,
    )
