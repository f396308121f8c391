"""Configuration models describing the blog site.

SiteConfig

`theme` (`ThemeConfig`)
: Colour palette handed to rendered components. `light` and `dark` map CSS
  variable names to values.

`src` (`SourceConfig`)
: Where the Markdown posts live. Only `base` is recognised.

`dest` (`DestinationConfig`)
: Output layout. `namespace` prefixes every generated URL (set it when the
  site is served from a sub-path such as a GitHub Pages project site). `html`,
  `assets`, `bundle` and `styles` are directories relative to the project.

`page` (`PageConfig`)
: Page title base and favicon path.

`coding_blog` (`CodingBlogConfig`)
: Assets copied verbatim by the coding-blog plugin.

`github` (`GithubConfig | None`)
: Repository and user used to build author and "edit on GitHub" links.

`header` (`HeaderConfig | None`)
: Links displayed by the site header. When omitted no header is injected.

Destination layout

When the `GITHUB_BUILD` environment variable equals `true` the assets live in
`dist`, the bundle in `bundle` and the styles in `styles`. Locally the assets
stay at the project root, and the bundle and styles land under `dist/`.
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .exceptions import SiteConfigError


GITHUB_BUILD_ENV = "GITHUB_BUILD"


class ThemeConfig(BaseModel):
    """Light/dark palette overrides."""

    model_config = ConfigDict(extra="forbid")

    light: dict[str, str] = Field(default_factory=dict)
    dark: dict[str, str] = Field(default_factory=dict)

    def stylesheet(self) -> str:
        """Return CSS custom properties for both palettes, empty when unset.

        The light palette applies to ``:root`` and the dark one to
        ``body.dark-mode``.
        """
        blocks: list[str] = []
        for selector, palette in ((":root", self.light), ("body.dark-mode", self.dark)):
            if not palette:
                continue
            declarations = " ".join(
                f"--{name.lstrip('-')}: {value};" for name, value in palette.items()
            )
            blocks.append(f"{selector} {{ {declarations} }}")
        return "\n".join(blocks).replace("</", "<\\/")


class SourceConfig(BaseModel):
    """Location of the Markdown sources."""

    model_config = ConfigDict(extra="forbid")

    base: Path = Path("posts")


class DestinationConfig(BaseModel):
    """Output directories and URL namespace."""

    model_config = ConfigDict(extra="forbid")

    namespace: str = ""
    html: Path = Path("dist")
    assets: Path = Path(".")
    bundle: Path = Path("dist/bundle")
    styles: Path = Path("dist/styles")

    @field_validator("namespace")
    @classmethod
    def normalise_namespace(cls, value: str) -> str:
        """Return the namespace with a single leading slash and no trailing one."""
        stripped = value.strip().strip("/")
        return f"/{stripped}" if stripped else ""

    @classmethod
    def for_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> DestinationConfig:
        """Return the layout selected by the ``GITHUB_BUILD`` flag."""
        env = os.environ if environ is None else environ
        if env.get(GITHUB_BUILD_ENV) == "true":
            layout: dict[str, Any] = {"assets": "dist", "bundle": "bundle", "styles": "styles"}
        else:
            layout = {"assets": ".", "bundle": "dist/bundle", "styles": "dist/styles"}
        layout.update({key: value for key, value in overrides.items() if value is not None})
        return cls.model_validate(layout)

    def url(self, path: str) -> str:
        """Prefix an absolute site path with the namespace."""
        if not path.startswith("/"):
            return path
        return f"{self.namespace}{path}" if self.namespace else path


class TitleConfig(BaseModel):
    """Page title settings."""

    model_config = ConfigDict(extra="forbid")

    base: str = ""


class PageConfig(BaseModel):
    """Page-level metadata."""

    model_config = ConfigDict(extra="forbid")

    title: TitleConfig = Field(default_factory=TitleConfig)
    favicon: str | None = None


class CodingBlogConfig(BaseModel):
    """Options of the coding-blog plugin."""

    model_config = ConfigDict(extra="forbid")

    assets: list[str] = Field(default_factory=list)


class GithubConfig(BaseModel):
    """GitHub repository coordinates."""

    model_config = ConfigDict(extra="forbid")

    repo: str
    user: str

    @property
    def repo_url(self) -> str:
        """Return the repository URL."""
        return f"https://github.com/{self.user}/{self.repo}"


class HeaderConfig(BaseModel):
    """Links rendered by the site header."""

    model_config = ConfigDict(extra="forbid")

    site_url: str
    site_label: str
    home_url: str = "/"


class SiteConfig(BaseModel):
    """Top-level blog configuration."""

    model_config = ConfigDict(extra="forbid")

    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    src: SourceConfig = Field(default_factory=SourceConfig)
    dest: DestinationConfig = Field(default_factory=DestinationConfig.for_environment)
    page: PageConfig = Field(default_factory=PageConfig)
    coding_blog: CodingBlogConfig = Field(default_factory=CodingBlogConfig)
    github: GithubConfig | None = None
    header: HeaderConfig | None = None

    @field_validator("dest", mode="before")
    @classmethod
    def apply_environment_layout(cls, value: Any) -> Any:
        """Fill unspecified destination directories from the build environment."""
        if isinstance(value, Mapping):
            return DestinationConfig.for_environment(**dict(value))
        return value

    def client_payload(self) -> dict[str, Any]:
        """Return the settings published to the browser by ``ConfigTransport``."""
        return self.model_dump(mode="json", exclude_none=True)


def load_site_config(path: Path | str) -> SiteConfig:
    """Load a :class:`SiteConfig` from a YAML file."""
    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SiteConfigError(f"Unable to read site configuration '{config_path}'") from exc
    except yaml.YAMLError as exc:
        raise SiteConfigError(f"Malformed YAML in '{config_path}'") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise SiteConfigError(f"Site configuration '{config_path}' must be a mapping")

    try:
        return SiteConfig.model_validate(raw)
    except ValidationError as exc:
        raise SiteConfigError(f"Invalid site configuration '{config_path}': {exc}") from exc


__all__ = [
    "GITHUB_BUILD_ENV",
    "CodingBlogConfig",
    "DestinationConfig",
    "GithubConfig",
    "HeaderConfig",
    "PageConfig",
    "SiteConfig",
    "SourceConfig",
    "ThemeConfig",
    "TitleConfig",
    "load_site_config",
]
