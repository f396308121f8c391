"""Author byline."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field, model_validator

from .base import Component, ComponentKind, ComponentOptions


class AuthorOptions(ComponentOptions):
    name: str = Field(min_length=1)
    github: str | None = None
    url: str | None = None
    avatar: str | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_github_links(cls, data: object) -> object:
        """Fill profile and avatar URLs from the GitHub handle."""
        if not isinstance(data, dict):
            return data
        handle = data.get("github")
        if not handle:
            return data
        derived = dict(data)
        derived.setdefault("url", f"https://github.com/{handle}")
        derived.setdefault("avatar", f"https://github.com/{handle}.png")
        return derived


class Author(Component):
    """Avatar and name of a post's author."""

    kind = ComponentKind.AUTHOR
    content_hash = "kRzsgnV+B7EQTskbovy+YA=="
    Options: ClassVar[type[ComponentOptions]] = AuthorOptions
    template = (
        '<div class="author" data-blogsmith-widget="author">'
        "{% if avatar %}"
        '<img class="author__avatar" src="{{ avatar }}" alt="{{ name }}">'
        "{% endif %}"
        "{% if url %}"
        '<a class="author__name" href="{{ url }}">{{ name }}</a>'
        "{% else %}"
        '<span class="author__name">{{ name }}</span>'
        "{% endif %}"
        "</div>"
    )


__all__ = ["Author", "AuthorOptions"]
