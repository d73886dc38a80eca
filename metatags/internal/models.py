from pydantic import BaseModel, ConfigDict


class MetaTagsSnapshot(BaseModel):
    """Every value a provider exposes, evaluated once."""

    model_config = ConfigDict(frozen=True)  # pyright: ignore[reportUnannotatedClassAttribute]

    provider: str
    locale: str
    title: str
    description: str
    url: str
    twitter_url: str
    image: str | None = None
    type: str
    twitter_card: str | None = None
    twitter_image_alt: str | None = None
    twitter_site: str | None = None
    twitter_creator: str | None = None
    facebook_app_id: str | None = None
    robots: str | None = None
    theme_color: str | None = None

    def open_graph(self) -> dict[str, str]:
        """``og:*`` properties with values, in document order."""
        tags = {
            "og:title": self.title,
            "og:description": self.description,
            "og:url": self.url,
            "og:image": self.image,
            "og:type": self.type,
            "fb:app_id": self.facebook_app_id,
        }
        return {name: value for name, value in tags.items() if value}

    def twitter(self) -> dict[str, str]:
        """``twitter:*`` names with values, in document order."""
        tags = {
            "twitter:card": self.twitter_card,
            "twitter:site": self.twitter_site,
            "twitter:creator": self.twitter_creator,
            "twitter:title": self.title,
            "twitter:description": self.description,
            "twitter:url": self.twitter_url,
            "twitter:image": self.image,
            "twitter:image:alt": self.twitter_image_alt,
        }
        return {name: value for name, value in tags.items() if value}
