"""Raw tag and image records as published by the Docker Hub API."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from hubtags.summary.platform import Platform

logger = logging.getLogger(__name__)

#: Timestamp used when the feed omits one; sorts as the oldest possible value.
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO-8601 timestamp from the Hub feed.

    Missing, empty or unparseable values yield :data:`EPOCH`. Naive
    timestamps are assumed to be UTC.
    """
    if not value:
        return EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        logger.warning("Unparseable timestamp %r, using epoch", value)
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _text(value: Any) -> str | None:
    """Normalize a platform field to a hashable string (or ``None``)."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


@dataclass(eq=False)
class HubTag:
    """One tag of a repository.

    Attributes:
        name: Tag name (e.g. ``1.25-alpine``).
        last_updated: When the tag was last updated.
        status: Tag status (``active``, ``inactive``...).
        images: One record per platform variant published under the tag.
    """

    name: str
    last_updated: datetime = EPOCH
    status: str | None = None
    images: list[HubImage] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> HubTag:
        """Build a tag and its images from one ``results`` entry.

        Images without a digest cannot be grouped and are skipped.
        """
        tag = cls(
            name=data["name"],
            last_updated=parse_timestamp(data.get("last_updated")),
            status=data.get("tag_status"),
        )
        for image_data in data.get("images") or []:
            if not image_data.get("digest"):
                logger.warning(
                    "Skipping image without digest in tag '%s' (%s/%s)",
                    tag.name,
                    image_data.get("os"),
                    image_data.get("architecture"),
                )
                continue
            tag.images.append(HubImage.from_json(image_data, tag))
        return tag


@dataclass(eq=False)
class HubImage:
    """One platform-specific image under a tag.

    ``tag`` points back at the owning :class:`HubTag`; it is only read.
    """

    digest: str
    tag: HubTag = field(repr=False)
    architecture: str | None = None
    features: str | None = None
    variant: str | None = None
    os: str | None = None
    os_features: str | None = None
    os_version: str | None = None
    status: str | None = None
    last_updated: datetime = EPOCH

    @classmethod
    def from_json(cls, data: dict[str, Any], tag: HubTag) -> HubImage:
        return cls(
            digest=data["digest"],
            tag=tag,
            architecture=_text(data.get("architecture")),
            features=_text(data.get("features")),
            variant=_text(data.get("variant")),
            os=_text(data.get("os")),
            os_features=_text(data.get("os_features")),
            os_version=_text(data.get("os_version")),
            status=data.get("status"),
            last_updated=parse_timestamp(data.get("last_pushed")),
        )

    @property
    def platform(self) -> Platform:
        return Platform.of(self)

    @property
    def pushed_or_updated(self) -> datetime:
        """Latest of the tag-level and image-level timestamps."""
        return max(self.tag.last_updated, self.last_updated)
