"""Configuration objects and constants for caption rewriting."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag

CONTAINER_CLASS = "re-imagecaption-wrapper"
IMAGE_WRAPPER_CLASS = "re-imagecaption-image"
CAPTION_WRAPPER_CLASS = "re-imagecaption-caption"

# Historical option names accepted alongside the field names.
OPTION_ALIASES = {
    "captionContainer": "container",
    "imageWrapper": "image_wrapper",
    "captionWrapper": "caption_wrapper",
}
RECIPE_FIELDS = ("container", "image_wrapper", "caption_wrapper")


@dataclass(frozen=True)
class ElementRecipe:
    """Tag name plus the class tokens a freshly built element starts with."""

    tag: str
    classes: Tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> "ElementRecipe":
        """Build a recipe from ``tag.cls1.cls2`` shorthand or a markup snippet.

        Markup such as ``<span class="re-imagecaption-wrapper" />`` is read with
        BeautifulSoup; only the first element's name and classes are kept.
        """
        text = value.strip()
        if text.startswith("<"):
            soup = BeautifulSoup(text, "html.parser")
            element = soup.find(True)
            if not isinstance(element, Tag):
                raise ValueError(f"No element found in recipe markup: {value!r}")
            return cls(element.name, tuple(element.get("class") or ()))
        tag, *classes = text.split(".")
        if not tag:
            raise ValueError(f"Recipe is missing a tag name: {value!r}")
        return cls(tag, tuple(token for token in classes if token))

    def build(self, soup: BeautifulSoup) -> Tag:
        element = soup.new_tag(self.tag)
        if self.classes:
            element["class"] = list(self.classes)
        return element

    def __str__(self) -> str:
        return ".".join((self.tag, *self.classes))


SPAN_RECIPES = {
    "container": ElementRecipe("span", (CONTAINER_CLASS,)),
    "image_wrapper": ElementRecipe("span", (IMAGE_WRAPPER_CLASS,)),
    "caption_wrapper": ElementRecipe("span", (CAPTION_WRAPPER_CLASS,)),
}
DIV_RECIPES = {
    "container": ElementRecipe("div", (CONTAINER_CLASS,)),
    "image_wrapper": ElementRecipe("div", (IMAGE_WRAPPER_CLASS,)),
    "caption_wrapper": ElementRecipe("div", (CAPTION_WRAPPER_CLASS,)),
}

RecipeLike = Union[ElementRecipe, str]
WidthProbe = Callable[[Tag], Optional[float]]


class Variant(str, enum.Enum):
    """Historical plugin revisions, kept as configuration presets."""

    BASIC = "basic"
    COLLAPSING = "collapsing"
    WIDTH_AWARE = "width-aware"


def _coerce_recipe(value: RecipeLike) -> ElementRecipe:
    if isinstance(value, ElementRecipe):
        return value
    return ElementRecipe.parse(value)


@dataclass(frozen=True)
class CaptionConfig:
    """Per-invocation settings for the caption rewriter."""

    container: ElementRecipe = SPAN_RECIPES["container"]
    image_wrapper: ElementRecipe = SPAN_RECIPES["image_wrapper"]
    caption_wrapper: ElementRecipe = SPAN_RECIPES["caption_wrapper"]
    collapse_parent: bool = False
    apply_width: bool = False
    width_probe: Optional[WidthProbe] = field(default=None, compare=False)

    @classmethod
    def for_variant(cls, variant: Union[Variant, str]) -> "CaptionConfig":
        variant = Variant(variant)
        if variant is Variant.COLLAPSING:
            return cls(collapse_parent=True, **DIV_RECIPES)
        if variant is Variant.WIDTH_AWARE:
            return cls(apply_width=True)
        return cls()

    def with_overrides(
        self, overrides: Optional[Mapping[str, Any]] = None
    ) -> "CaptionConfig":
        """Return a copy with any subset of options replaced."""
        if not overrides:
            return self
        changes = {}
        for key, value in overrides.items():
            name = OPTION_ALIASES.get(key, key)
            if name in RECIPE_FIELDS:
                value = _coerce_recipe(value)
            changes[name] = value
        return dataclasses.replace(self, **changes)
