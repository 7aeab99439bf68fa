"""Fold raw image records into merged images, per platform then per digest."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from hubtags.summary.image import MergedImage
from hubtags.summary.platform import Platform

if TYPE_CHECKING:
    from hubtags.registry.models import HubImage, HubTag

logger = logging.getLogger(__name__)


def iter_images(tags: Iterable[HubTag]) -> Iterable[HubImage]:
    """Flatten tag records into their image records."""
    for tag in tags:
        yield from tag.images


def group_images(
    images: Iterable[HubImage],
) -> dict[Platform, dict[str, MergedImage]]:
    """Group raw image records by platform, then merge them by digest.

    Every record ends up in exactly one merged image; records sharing a
    platform and digest are always merged.

    Args:
        images: Raw image records, each attached to its tag.

    Returns:
        A mapping of platform to a mapping of digest to merged image.

    Raises:
        MergeError: If a record is folded into a mismatching image.
    """
    grouped: dict[Platform, dict[str, MergedImage]] = {}
    count = 0
    for record in images:
        by_digest = grouped.setdefault(record.platform, {})
        merged = by_digest.get(record.digest)
        if merged is None:
            by_digest[record.digest] = MergedImage.from_record(record)
        else:
            merged.add(record)
        count += 1

    logger.debug(
        "Grouped %d image records into %d platforms and %d images",
        count,
        len(grouped),
        sum(len(by_digest) for by_digest in grouped.values()),
    )
    return grouped
