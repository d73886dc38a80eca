import pathlib
from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApplicationSettings(BaseModel):
    debug: bool = False
    config_dir: str = "."
    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR)"""
    log_format: str = "text"
    """Log format: 'text' for human-readable, 'json' for machine-readable"""
    log_file: str | None = None
    """Optional log file path (relative to config_dir/logs/). If not set, logs to stdout only"""
    log_file_max_mb: int = 5
    """Size in megabytes at which the log file is rotated"""
    log_file_backups: int = 2
    """Rotated log files kept next to the current one"""
    base_url: str = ""
    """Public base URL of the site. Used for image URLs when set, instead of the request's base URL"""

    asset_host: str = ""
    """Optional CDN host for meta tag images, e.g. 'https://cdn.example.com'"""
    static_route_name: str = "static"
    """Name of the StaticFiles mount used to build image URLs"""
    static_path: str = "static"
    """URL path of the static mount, used when the route is not registered"""

    routers_package: str = "app.routers"
    """Module prefix stripped from endpoint modules to derive controller names"""


class TagSettings(BaseModel):
    og_type: str = "devpost:website"
    twitter_card: str = "summary_large_image"
    twitter_site: str | None = "@devpost"
    default_image: str = "og-main.jpg"
    """Image used by providers that do not pick their own"""
    image_dir: str = "meta_tags"
    """Directory under the static root holding meta tag images"""
    i18n_root: str = "meta_tags"
    """Top-level catalog key under which every provider's strings live"""
    partial_path: str = "title_and_meta_tags"
    facebook_app_id: str | None = None
    robots: str | None = None
    theme_color: str | None = None


class I18nSettings(BaseModel):
    locales_dir: str = "locales"
    """Directory holding <locale>.json catalogs. Relative paths resolve against config_dir"""
    default_locale: str = "en"
    reload: bool = True
    """Reload catalogs when files in locales_dir change"""


class ResolverSettings(BaseModel):
    cache_size: int = 256
    """Maximum number of (controller, object type) resolutions to memoise"""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        env_prefix="METATAGS_",
        env_nested_delimiter="__",
        nested_model_default_partial_update=True,
        env_file=(".env.local", ".env"),
        extra="ignore",
    )

    app: ApplicationSettings = ApplicationSettings()
    tags: TagSettings = TagSettings()
    i18n: I18nSettings = I18nSettings()
    resolver: ResolverSettings = ResolverSettings()

    def get_locales_dir(self):
        if self.i18n.locales_dir.startswith("/"):
            return self.i18n.locales_dir
        return str(pathlib.Path(self.app.config_dir) / self.i18n.locales_dir)


@lru_cache
def get_settings() -> Settings:
    return Settings()
