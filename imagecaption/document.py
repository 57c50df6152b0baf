"""Helpers for captioning whole documents parsed with BeautifulSoup."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from bs4 import BeautifulSoup, Tag

from .config import CaptionConfig
from .models import CaptionReport
from .rewriter import apply_captions

DEFAULT_SELECTOR = "img"


def select_targets(soup: BeautifulSoup, selector: str = DEFAULT_SELECTOR) -> List[Tag]:
    """Return the matching elements in document order as a fixed list."""
    return list(soup.select(selector))


def caption_soup(
    soup: BeautifulSoup,
    selector: str = DEFAULT_SELECTOR,
    config: Optional[CaptionConfig] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CaptionReport:
    """Caption every selected image of an already-parsed document."""
    targets = select_targets(soup, selector)
    return apply_captions(targets, config, overrides)


def caption_html(
    html: str,
    selector: str = DEFAULT_SELECTOR,
    config: Optional[CaptionConfig] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> str:
    """Parse ``html``, caption its images and return the serialized result."""
    soup = BeautifulSoup(html, "html.parser")
    caption_soup(soup, selector, config, overrides)
    return soup.decode()
