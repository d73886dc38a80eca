import pathlib
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from metatags.internal.base_metatags import BaseMetatags
from metatags.internal.controller import get_meta_tags

TEMPLATE_DIR = pathlib.Path(__file__).resolve().parent.parent / "templates"


def metatags_context(request: Request) -> dict[str, Any]:
    """Jinja2 context processor exposing the page's provider as ``meta_tags``."""
    return {"meta_tags": get_meta_tags(request)}


templates = Jinja2Templates(directory=TEMPLATE_DIR, context_processors=[metatags_context])


def render_meta_tags(meta_tags: BaseMetatags) -> Markup:
    """Render the provider's partial (``<to_partial_path>.html``) to HTML."""
    template = templates.get_template(f"{meta_tags.to_partial_path}.html")
    return Markup(template.render(meta_tags=meta_tags.snapshot()))


templates.env.globals["render_meta_tags"] = render_meta_tags  # pyright: ignore[reportArgumentType]


def install_template_helpers(host_templates: Jinja2Templates) -> Jinja2Templates:
    """Expose ``meta_tags`` and ``render_meta_tags`` to another app's templates."""
    if metatags_context not in host_templates.context_processors:
        host_templates.context_processors.append(metatags_context)
    host_templates.env.globals["render_meta_tags"] = render_meta_tags  # pyright: ignore[reportArgumentType]
    return host_templates

