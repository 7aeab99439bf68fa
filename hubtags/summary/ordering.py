"""Ranking of merged images for "most relevant first" display."""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Iterable, Iterator

from hubtags.summary.grouping import group_images, iter_images
from hubtags.summary.image import MergedImage
from hubtags.summary.platform import Platform
from hubtags.summary.ranking import cmp, compare_present

if TYPE_CHECKING:
    from hubtags.registry.models import HubTag


def _compare_present_images(a: MergedImage, b: MergedImage) -> int:
    a_tag, b_tag = a.dominant_tag, b.dominant_tag
    if a_tag is None and b_tag is None:
        return cmp(a.last_updated, b.last_updated)
    if a_tag is None:
        return -1
    if b_tag is None:
        return 1
    return a_tag.compare(b_tag) or cmp(a.last_updated, b.last_updated)


def compare_images(a: MergedImage, b: MergedImage | None) -> int:
    """Three-way comparison of two merged images.

    Images with a dominant tag always outrank images without one. Two
    tagged images compare by dominant tag, then by ``last_updated``; two
    untagged images by ``last_updated`` alone. A missing *b* ranks lower.
    """
    return compare_present(a, b, _compare_present_images)


def order_images(images: Iterable[MergedImage]) -> list[MergedImage]:
    """Return *images* sorted most relevant first."""
    return sorted(images, key=functools.cmp_to_key(compare_images), reverse=True)


@dataclass
class PlatformSummary:
    """Ordered images of a single platform."""

    platform: Platform
    images: list[MergedImage] = field(default_factory=list)

    def rows(self) -> Iterator[tuple[datetime, str]]:
        """Yield ``(last_updated, "tag, tag, ...")`` pairs, most relevant first."""
        for image in self.images:
            yield image.last_updated, ", ".join(image.tag_names)


def summarize(
    tags: Iterable[HubTag],
    architecture: str | None = "amd64",
    os: str | None = None,
) -> list[PlatformSummary]:
    """Group the images of *tags* and order each matching platform's images.

    Args:
        tags: Fully fetched tag records of a repository.
        architecture: Keep only platforms with this architecture
            (``None`` keeps all).
        os: Keep only platforms with this operating system (``None`` keeps all).

    Returns:
        One summary per matching platform, in first-seen order.
    """
    grouped = group_images(iter_images(tags))
    summaries = []
    for platform, by_digest in grouped.items():
        if architecture is not None and platform.architecture != architecture:
            continue
        if os is not None and platform.os != os:
            continue
        summaries.append(PlatformSummary(platform, order_images(by_digest.values())))
    return summaries
