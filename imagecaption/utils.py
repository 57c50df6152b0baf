"""Attribute and class-token helpers shared by the rewriter."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from bs4 import Tag

PRESENTATION_ATTRIBUTES = ("align", "border", "style")
HYPERLINK_TAGS = frozenset({"a"})
PARAGRAPH_TAGS = frozenset({"p"})

WIDTH_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(?:px)?\s*$", re.IGNORECASE)


def is_captionable(title: Optional[str]) -> bool:
    """Only a missing attribute or the exact empty string disqualify a node."""
    return title is not None and title != ""


def read_title(node: Tag) -> Optional[str]:
    return node.get("title")


def class_tokens(node: Optional[Tag]) -> List[str]:
    if node is None:
        return []
    value = node.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def merge_classes(*groups: Iterable[str]) -> List[str]:
    """Concatenate token groups, dropping repeats but keeping first-seen order."""
    merged: List[str] = []
    for group in groups:
        for token in group:
            if token and token not in merged:
                merged.append(token)
    return merged


def add_classes(element: Tag, tokens: Iterable[str]) -> None:
    merged = merge_classes(class_tokens(element), tokens)
    if merged:
        element["class"] = merged


def remove_attributes(element: Tag, names: Iterable[str]) -> None:
    for name in names:
        if name in element.attrs:
            del element[name]


def sanitize_presentation_attributes(element: Tag) -> None:
    """Strip align/border/style; the caption container owns layout now."""
    remove_attributes(element, PRESENTATION_ATTRIBUTES)


def sanitize_clone_image(element: Tag) -> None:
    """Strip presentation attributes and classes from the cloned image."""
    remove_attributes(element, (*PRESENTATION_ATTRIBUTES, "class"))


def is_hyperlink(element: Optional[Tag]) -> bool:
    return isinstance(element, Tag) and element.name in HYPERLINK_TAGS


def is_paragraph(element: Optional[Tag]) -> bool:
    return isinstance(element, Tag) and element.name in PARAGRAPH_TAGS


def measure_width(element: Tag) -> Optional[float]:
    """Read the ``width`` attribute as pixels; ``None`` when not measurable."""
    raw = element.get("width")
    if raw is None or isinstance(raw, list):
        return None
    match = WIDTH_PATTERN.match(raw)
    if not match:
        return None
    return float(match.group(1))


def format_pixels(width: float) -> str:
    if float(width).is_integer():
        return f"{int(width)}px"
    return f"{width:g}px"
