"""HTML adapters: component renderer and page hydrator."""

from __future__ import annotations

from .hydrator import HydrationResult, PageHydrator
from .renderer import HTMLRenderer


__all__ = ["HTMLRenderer", "HydrationResult", "PageHydrator"]
