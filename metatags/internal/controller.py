"""
FastAPI integration: build the page's metadata provider for each request.

Attach ``build_default_meta_tags`` to the app or a router so every page gets
the provider resolved from its controller name::

    router = APIRouter(
        prefix="/articles",
        dependencies=[Depends(build_default_meta_tags)],
    )

When the meta tags depend on a domain object, the default provider cannot be
used because it is built before the object is loaded. Declare the object
loader as usual and replace the provider with ``build_meta_tags``::

    async def find_article(article_id: int) -> Article: ...

    @router.get("/{article_id}")
    async def show(
        request: Request,
        article: Annotated[Article, Depends(find_article)],
        meta_tags: Annotated[BaseMetatags, Depends(build_meta_tags(find_article))],
    ):
        return templates.TemplateResponse(request, "articles/show.html", {"article": article})

FastAPI caches dependencies per request, so ``find_article`` runs once.
"""
from typing import Annotated, Any, Callable

from fastapi import Depends, Request

from metatags.internal.base_metatags import BaseMetatags
from metatags.internal.resolver import meta_tags_for
from metatags.internal.view_context import RequestViewContext, controller_name_for


def use_controller_name(name: str) -> Callable[..., Any]:
    """
    Dependency pinning the controller name for every route of a router.

    It may run before or after ``build_default_meta_tags``.
    """

    async def _use_controller_name(request: Request) -> None:
        request.state.controller_name = name

    return _use_controller_name


async def build_default_meta_tags(request: Request) -> BaseMetatags:
    """
    Store the provider resolved from the controller name alone.

    The stored provider stays provisional: when a dependency running later
    changes the controller name, e.g. a router's ``use_controller_name``
    after an app-wide default, ``get_meta_tags`` resolves it again.
    """
    return get_meta_tags(request)


def build_meta_tags(
    dependency: Callable[..., Any] | None = None,
    override: type[BaseMetatags] | str | None = None,
    controller_name: str | None = None,
) -> Callable[..., Any]:
    """
    Dependency factory replacing the default provider for a route.

    Args:
        dependency: Loader of the page's domain object, resolved by FastAPI.
            None builds a provider from the controller name alone.
        override: Provider class or registry key to use instead of resolving.
        controller_name: Controller name to resolve with, instead of the
            request's controller.
    """

    async def no_object() -> None:
        return None

    async def _build_meta_tags(
        request: Request,
        domain_object: Annotated[Any, Depends(dependency or no_object)],
    ) -> BaseMetatags:
        view_context = RequestViewContext(request, controller_name=controller_name)
        meta_tags = meta_tags_for(domain_object, view_context, override=override)
        request.state.meta_tags = meta_tags
        request.state.meta_tags_default = False
        return meta_tags

    return _build_meta_tags


def get_meta_tags(request: Request) -> BaseMetatags:
    """
    The provider built for this request, or the controller's default one.

    A default provider resolved under another controller name than the
    request's current one is resolved again.
    """
    meta_tags = getattr(request.state, "meta_tags", None)
    if meta_tags is not None and not _is_stale_default(request, meta_tags):
        return meta_tags

    view_context = RequestViewContext(request)
    meta_tags = meta_tags_for(None, view_context)
    request.state.meta_tags = meta_tags
    request.state.meta_tags_default = True
    return meta_tags


def _is_stale_default(request: Request, meta_tags: BaseMetatags) -> bool:
    if not getattr(request.state, "meta_tags_default", False):
        return False
    resolved_for = getattr(meta_tags.view_context, "controller_name", None)
    return resolved_for != controller_name_for(request)
