"""
Page title, description and social meta tags for FastAPI applications.

A metadata provider (``BaseMetatags`` or a subclass) is picked for each page
by naming convention from the controller name and the page's domain object,
then exposed to templates as ``meta_tags``.
"""

from metatags.internal.base_metatags import BaseMetatags
from metatags.internal.controller import (
    build_default_meta_tags,
    build_meta_tags,
    get_meta_tags,
    use_controller_name,
)
from metatags.internal.i18n import Translator, get_translator
from metatags.internal.models import MetaTagsSnapshot
from metatags.internal.registry import registry
from metatags.internal.resolver import (
    meta_tags_for,
    resolution_cache_stats,
    resolution_candidates,
    resolve_metatags_class,
)
from metatags.internal.view_context import RequestViewContext, ViewContext
from metatags.util.exceptions import (
    InvalidMetatagsClassError,
    MetatagsError,
    UnknownMetatagsError,
)
from metatags.util.log import setup_logging, setup_logging_from_settings
from metatags.util.templates import (
    install_template_helpers,
    render_meta_tags,
)

__all__ = [
    "BaseMetatags",
    "InvalidMetatagsClassError",
    "MetaTagsSnapshot",
    "MetatagsError",
    "RequestViewContext",
    "Translator",
    "UnknownMetatagsError",
    "ViewContext",
    "build_default_meta_tags",
    "build_meta_tags",
    "get_meta_tags",
    "get_translator",
    "install_template_helpers",
    "meta_tags_for",
    "registry",
    "render_meta_tags",
    "resolution_cache_stats",
    "resolution_candidates",
    "resolve_metatags_class",
    "setup_logging",
    "setup_logging_from_settings",
    "use_controller_name",
]
