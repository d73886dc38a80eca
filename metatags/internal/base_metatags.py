"""
Default page title, description and social meta tags.

``BaseMetatags``, or one of its subclasses, is instantiated for every page.
When a page needs different meta tags, subclass it and override the relevant
properties. Subclasses register themselves under a key derived from their
name (``ArticleMetatags`` -> ``article``), prefixed by ``namespace`` when set,
unless they declare an explicit ``key`` or are marked ``abstract``::

    class ArticleMetatags(BaseMetatags):
        def i18n_title_data(self):
            return {"title": self.object.title}

        @property
        def image(self):
            return self.object.cover_url or super().image
"""
from typing import Any, ClassVar

from metatags.internal.env_settings import Settings, get_settings
from metatags.internal.i18n import Translator, get_translator
from metatags.internal.models import MetaTagsSnapshot
from metatags.internal.registry import normalize_key, registry
from metatags.internal.view_context import ViewContext
from metatags.util.inflection import strip_suffix, underscore


class BaseMetatags:
    key: ClassVar[str | None] = None
    """Registry key. Derived from the class name when not set on the class itself"""
    namespace: ClassVar[str | None] = None
    """Prefix of derived keys, e.g. 'hackathons' -> 'hackathons.software'"""
    abstract: ClassVar[bool] = False
    """Abstract providers are not registered"""

    object: Any
    view_context: ViewContext

    def __init__(self, object: Any, view_context: ViewContext):
        self.object = object
        self.view_context = view_context

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("abstract", False):
            return
        registry.register(cls.metatags_key(), cls)

    @classmethod
    def metatags_key(cls) -> str:
        explicit = cls.__dict__.get("key")
        if explicit:
            return normalize_key(explicit)
        name = strip_suffix(underscore(cls.__name__), "metatags")
        if cls.namespace:
            return f"{normalize_key(cls.namespace)}.{name}"
        return name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.metatags_key()!r} object={self.object!r}>"

    @property
    def settings(self) -> Settings:
        return getattr(self.view_context, "settings", None) or get_settings()

    @property
    def translator(self) -> Translator:
        return get_translator(self.settings)

    @property
    def title(self) -> str:
        return self.translate("title", self.i18n_title_data())

    @property
    def description(self) -> str:
        return self.translate("description", self.i18n_description_data())

    @property
    def url(self) -> str:
        return self.view_context.original_url

    @property
    def twitter_url(self) -> str:
        return self.url

    @property
    def image(self) -> str | None:
        return self.meta_tag_image_url(self.settings.tags.default_image)

    @property
    def type(self) -> str:
        return self.settings.tags.og_type

    @property
    def to_partial_path(self) -> str:
        return self.settings.tags.partial_path

    @property
    def twitter_card(self) -> str | None:
        return self.settings.tags.twitter_card

    @property
    def twitter_image_alt(self) -> str | None:
        return None

    @property
    def twitter_site(self) -> str | None:
        return self.settings.tags.twitter_site

    @property
    def twitter_creator(self) -> str | None:
        return None

    @property
    def facebook_app_id(self) -> str | None:
        return self.settings.tags.facebook_app_id

    @property
    def robots(self) -> str | None:
        return self.settings.tags.robots

    @property
    def theme_color(self) -> str | None:
        return self.settings.tags.theme_color

    @property
    def i18n_class_name(self) -> str:
        return self.metatags_key()

    @property
    def i18n_scope(self) -> str:
        return f"{self.settings.tags.i18n_root}.{self.i18n_class_name}"

    def with_scope(self, data: dict[str, Any] | None) -> dict[str, Any]:
        return {**(data or {}), "scope": self.i18n_scope}

    def i18n_title_data(self) -> dict[str, Any]:
        return {}

    def i18n_description_data(self) -> dict[str, Any]:
        return {}

    def translate(self, key: str, data: dict[str, Any] | None = None) -> str:
        options = self.with_scope(data)
        options.setdefault("locale", self.view_context.locale)
        return self.translator.translate(key, **options)

    def meta_tag_image_url(self, image_name: str) -> str:
        image_dir = self.settings.tags.image_dir.strip("/")
        return self.view_context.image_url(f"{image_dir}/{image_name}")

    def snapshot(self) -> MetaTagsSnapshot:
        return MetaTagsSnapshot(
            provider=self.metatags_key(),
            locale=self.view_context.locale,
            title=self.title,
            description=self.description,
            url=self.url,
            twitter_url=self.twitter_url,
            image=self.image,
            type=self.type,
            twitter_card=self.twitter_card,
            twitter_image_alt=self.twitter_image_alt,
            twitter_site=self.twitter_site,
            twitter_creator=self.twitter_creator,
            facebook_app_id=self.facebook_app_id,
            robots=self.robots,
            theme_color=self.theme_color,
        )
