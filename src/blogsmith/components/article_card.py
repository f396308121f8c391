"""Article preview cards used on listing pages."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import Field

from .base import Component, ComponentKind, ComponentOptions


if TYPE_CHECKING:  # pragma: no cover - typing only
    from blogsmith.adapters.html.renderer import HTMLRenderer


class ArticleCardOptions(ComponentOptions):
    src: str = Field(min_length=1)
    title: str | None = None
    summary: str | None = None
    coverimage: str | None = None
    date: datetime.date | None = None
    tags: list[str] = Field(default_factory=list)


class ArticleCard(Component):
    """Clickable card linking to a post."""

    kind = ComponentKind.ARTICLE_CARD
    content_hash = "O52t9XkNenZkTzIIyYttGQ=="
    Options: ClassVar[type[ComponentOptions]] = ArticleCardOptions
    template = (
        '<a class="article-card" href="{{ href }}" data-blogsmith-widget="article-card">'
        "{% if coverimage %}"
        '<img class="article-card__cover" src="{{ coverimage }}" alt="">'
        "{% endif %}"
        '<div class="article-card__body">'
        '<h3 class="article-card__title">{{ title or src }}</h3>'
        "{% if date %}"
        '<time class="article-card__date" datetime="{{ date.isoformat() }}">'
        "{{ date.strftime('%B %d, %Y') }}</time>"
        "{% endif %}"
        "{% if summary %}"
        '<p class="article-card__summary">{{ summary }}</p>'
        "{% endif %}"
        "{% if tags %}"
        '<ul class="article-card__tags">'
        "{% for tag in tags %}<li>{{ tag }}</li>{% endfor %}"
        "</ul>"
        "{% endif %}"
        "</div></a>"
    )

    def context(self, renderer: HTMLRenderer) -> dict[str, Any]:
        data = super().context(renderer)
        data["href"] = renderer.url(data["src"])
        if data.get("coverimage"):
            data["coverimage"] = renderer.url(data["coverimage"])
        return data


__all__ = ["ArticleCard", "ArticleCardOptions"]
