"""
Provider class resolution by naming convention.

Given a controller name, an optional explicit override and an optional domain
object type, ``resolve_metatags_class`` tries the following registry keys in
order and returns the first registered provider:

1. the override (a provider class, or a key that must be registered)
2. ``<controller namespace>.<type>`` for each type of the object's MRO,
   from the full controller name up to its top-level namespace
3. ``<type>`` for each type of the object's MRO
4. the controller name, then each enclosing namespace
5. ``BaseMetatags``

With controller ``admin/articles`` and an ``Article`` object, the keys are
``admin.articles.article``, ``admin.article``, ``article``,
``admin.articles`` and ``admin``.
"""
from typing import Any

from metatags.internal.base_metatags import BaseMetatags
from metatags.internal.env_settings import get_settings
from metatags.internal.registry import normalize_key, registry
from metatags.internal.view_context import ViewContext
from metatags.util.cache import CacheStats, SimpleCache
from metatags.util.exceptions import InvalidMetatagsClassError, UnknownMetatagsError
from metatags.util.inflection import split_path, strip_suffix, underscore
from metatags.util.log import logger

# Keyed by registry version too, so a scan that raced a registry change is
# stored under a version no later lookup asks for.
_resolution_cache: SimpleCache[type[BaseMetatags], int, str, type | None] = SimpleCache(
    maxsize=get_settings().resolver.cache_size
)
registry.add_listener(_resolution_cache.flush)


def controller_key(controller_name: str | None) -> str:
    """
    Normalise a controller name to a dotted key.

    ``Admin::ArticlesController``, ``admin/articles`` and
    ``admin.articles_controller`` all become ``admin.articles``.
    """
    if not controller_name:
        return ""
    parts = split_path(controller_name)
    if parts:
        last = strip_suffix(parts[-1], "controller")
        if last == "controller":
            parts.pop()
        else:
            parts[-1] = last
    return ".".join(parts)


def type_key(object_type: type) -> str:
    """Key of a domain class: its ``metatags_key`` attribute or its snake_case name."""
    explicit = object_type.__dict__.get("metatags_key")
    if isinstance(explicit, str) and explicit:
        return normalize_key(explicit)
    return underscore(object_type.__name__)


def _namespace_levels(key: str) -> list[str]:
    parts = key.split(".") if key else []
    return [".".join(parts[:size]) for size in range(len(parts), 0, -1)]


def resolution_candidates(
    controller_name: str | None = None,
    object_type: type | None = None,
) -> list[str]:
    """Ordered registry keys tried for a controller and object type."""
    controller = controller_key(controller_name)
    levels = _namespace_levels(controller)
    type_keys: list[str] = []
    if object_type is not None:
        type_keys = [
            type_key(klass) for klass in object_type.__mro__ if klass is not object
        ]

    candidates: list[str] = []
    for key in type_keys:
        candidates.extend(f"{level}.{key}" for level in levels)
    candidates.extend(type_keys)
    candidates.extend(levels)
    return list(dict.fromkeys(candidates))


def _resolve_override(override: Any) -> type[BaseMetatags]:
    if isinstance(override, type):
        if issubclass(override, BaseMetatags):
            return override
        raise InvalidMetatagsClassError(override)
    if isinstance(override, str) and override.strip():
        if normalize_key(override) == BaseMetatags.metatags_key():
            return BaseMetatags
        provider = registry.get(override)
        if provider is None:
            raise UnknownMetatagsError(
                normalize_key(override), list(registry.providers())
            )
        return provider
    raise InvalidMetatagsClassError(override)


def resolve_metatags_class(
    controller_name: str | None = None,
    override: type[BaseMetatags] | str | None = None,
    object_type: type | None = None,
) -> type[BaseMetatags]:
    """Pick the provider class for a page. See the module docstring for the order."""
    if override is not None:
        return _resolve_override(override)

    controller = controller_key(controller_name)
    version = registry.version
    cached = _resolution_cache.get(version, controller, object_type)
    if cached is not None:
        return cached

    provider: type[BaseMetatags] = BaseMetatags
    matched: str | None = None
    for candidate in resolution_candidates(controller, object_type):
        found = registry.get(candidate)
        if found is not None:
            provider, matched = found, candidate
            break

    logger.debug(
        "Resolved metatags provider",
        controller=controller or None,
        object_type=object_type.__qualname__ if object_type else None,
        key=matched,
        provider=provider.__qualname__,
    )
    _resolution_cache.set(provider, version, controller, object_type)
    return provider


def meta_tags_for(
    object: Any,
    view_context: ViewContext,
    controller_name: str | None = None,
    override: type[BaseMetatags] | str | None = None,
) -> BaseMetatags:
    """
    Build the metadata provider for ``object`` on the current page.

    ``controller_name`` defaults to the view context's controller. Passing
    ``None`` as the object skips the type-based candidates.
    """
    if controller_name is None:
        controller_name = view_context.controller_name
    provider = resolve_metatags_class(
        controller_name=controller_name,
        override=override,
        object_type=type(object) if object is not None else None,
    )
    return provider(object, view_context)


def resolution_cache_stats() -> CacheStats:
    """Hit, miss and eviction counts of the provider resolution cache."""
    return _resolution_cache.stats()


def flush_resolution_cache():
    logger.debug(
        "Flushing metatags resolution cache", **resolution_cache_stats().model_dump()
    )
    _resolution_cache.flush()
