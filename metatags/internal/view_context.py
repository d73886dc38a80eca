from typing import Protocol

from starlette.requests import Request
from starlette.routing import NoMatchFound

from metatags.internal.env_settings import Settings, get_settings


class ViewContext(Protocol):
    """What a metadata provider needs to know about the page being rendered."""

    @property
    def original_url(self) -> str: ...

    @property
    def locale(self) -> str: ...

    @property
    def controller_name(self) -> str | None: ...

    def image_url(self, path: str) -> str: ...


def controller_name_for(request: Request, settings: Settings | None = None) -> str | None:
    """
    Derive the controller name of the matched route.

    ``request.state.controller_name`` wins when set. Otherwise the endpoint's
    module is used, relative to the configured routers package, so an endpoint
    defined in ``app.routers.admin.articles`` belongs to ``admin.articles``.
    """
    explicit = getattr(request.state, "controller_name", None)
    if explicit:
        return explicit

    endpoint = request.scope.get("endpoint")
    if endpoint is None:
        return None

    module: str = getattr(endpoint, "__module__", "") or ""
    prefix = (settings or get_settings()).app.routers_package.strip(".")
    if prefix and module == prefix:
        return None
    if prefix and module.startswith(prefix + "."):
        return module[len(prefix) + 1 :]
    return module.rsplit(".", 1)[-1] or None


class RequestViewContext:
    """ViewContext backed by a Starlette/FastAPI request."""

    request: Request
    settings: Settings
    _controller_name: str | None

    def __init__(
        self,
        request: Request,
        settings: Settings | None = None,
        controller_name: str | None = None,
    ):
        self.request = request
        self.settings = settings or get_settings()
        self._controller_name = controller_name

    @property
    def original_url(self) -> str:
        return str(self.request.url)

    @property
    def locale(self) -> str:
        return (
            getattr(self.request.state, "locale", None)
            or self.settings.i18n.default_locale
        )

    @property
    def controller_name(self) -> str | None:
        if self._controller_name is None:
            self._controller_name = controller_name_for(self.request, self.settings)
        return self._controller_name

    def image_url(self, path: str) -> str:
        """
        Absolute URL of a static image.

        Resolution order: the configured asset host, the configured base URL,
        the named static mount, and finally the request's own base URL.
        """
        app = self.settings.app
        path = path.lstrip("/")
        static_path = app.static_path.strip("/")

        if app.asset_host:
            return f"{app.asset_host.rstrip('/')}/{static_path}/{path}"
        if app.base_url:
            return f"{app.base_url.rstrip('/')}/{static_path}/{path}"
        if "router" in self.request.scope or "app" in self.request.scope:
            try:
                return str(self.request.url_for(app.static_route_name, path=path))
            except NoMatchFound:
                pass
        base = str(self.request.base_url).rstrip("/")
        return f"{base}/{static_path}/{path}"
