"""Replace titled images with a container pairing the image and its caption."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable, Mapping, Optional

from bs4 import BeautifulSoup, Tag

from .config import CaptionConfig
from .models import CaptionAssembly, CaptionReport, NodeState
from .utils import (
    add_classes,
    class_tokens,
    format_pixels,
    is_captionable,
    is_hyperlink,
    is_paragraph,
    measure_width,
    merge_classes,
    read_title,
    sanitize_clone_image,
    sanitize_presentation_attributes,
)

logger = logging.getLogger("imagecaption")


def _tree_root(node: Tag) -> Tag:
    root: Tag = node
    while root.parent is not None:
        root = root.parent
    return root


def _owner_document(node: Tag) -> BeautifulSoup:
    """Return the soup the node lives in, or a scratch one for loose tags."""
    root = _tree_root(node)
    if isinstance(root, BeautifulSoup):
        return root
    return BeautifulSoup("", "html.parser")


def build_assembly(
    node: Tag,
    title: str,
    config: CaptionConfig,
) -> CaptionAssembly:
    """Assemble the caption subtree off-tree without touching the document.

    The live node is expected to have been sanitized already; its classes and
    (optionally) width are read here and carried onto the container.
    """
    soup = _owner_document(node)
    classes = class_tokens(node)

    parent = node.parent
    unit = parent if is_hyperlink(parent) else node
    target = unit
    if config.collapse_parent and is_paragraph(unit.parent):
        target = unit.parent
        classes = merge_classes(classes, class_tokens(target))

    container = config.container.build(soup)
    add_classes(container, classes)

    media = config.image_wrapper.build(soup)
    clone = copy.copy(unit)
    media.append(clone)

    caption = config.caption_wrapper.build(soup)
    caption.string = title

    container.append(media)
    container.append(caption)

    # Every image inside the cloned link is stripped, not only the titled one.
    if unit is node:
        live_images, cloned_images = [node], [clone]
    else:
        live_images = unit.find_all(node.name)
        cloned_images = clone.find_all(node.name)
    for cloned in cloned_images:
        sanitize_clone_image(cloned)
    index = next(i for i, live in enumerate(live_images) if live is node)
    image = cloned_images[index]

    if config.apply_width:
        probe = config.width_probe or measure_width
        width = probe(node)
        if isinstance(width, (int, float)) and width > 0:
            container["style"] = f"width: {format_pixels(width)}"

    return CaptionAssembly(
        container=container,
        media=media,
        caption=caption,
        image=image,
        target=target,
    )


def rewrite(node: Tag, config: Optional[CaptionConfig] = None) -> Optional[Tag]:
    """Caption a single node in place.

    Returns the element detached from the document (the image, its link, or
    the collapsed paragraph), or ``None`` when the node has no usable title.
    """
    config = config or CaptionConfig()
    title = read_title(node)
    if not is_captionable(title):
        logger.debug("Skipping <%s> without a title", node.name)
        return None

    sanitize_presentation_attributes(node)
    assembly = build_assembly(node, title, config)
    assembly.target.replace_with(assembly.container)
    logger.debug(
        "Captioned <%s> (replaced <%s>) with %r",
        node.name,
        assembly.target.name,
        title,
    )
    return assembly.target


def apply_captions(
    selection: Iterable[Tag],
    config: Optional[CaptionConfig] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CaptionReport:
    """Rewrite every node of a selection in order and tally the outcome."""
    config = (config or CaptionConfig()).with_overrides(overrides)
    # Snapshot first: replacements must not change which nodes get visited.
    nodes = list(selection)
    roots = [_tree_root(node) for node in nodes]
    report = CaptionReport()
    for node, root in zip(nodes, roots):
        if _tree_root(node) is not root:
            # An earlier replacement in this pass took the node out of the tree.
            logger.debug("Skipping <%s> detached by an earlier caption", node.name)
            report.record(NodeState.SKIPPED)
            continue
        detached = rewrite(node, config)
        if detached is None:
            report.record(NodeState.SKIPPED)
            continue
        report.detached.append(detached)
        report.record(NodeState.TRANSFORMED)
    logger.info(
        "Captioned %d of %d images (%d skipped)",
        report.transformed,
        report.processed,
        report.skipped,
    )
    return report
