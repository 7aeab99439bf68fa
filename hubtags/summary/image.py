"""Merged images — every tag pointing at one digest on one platform."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Iterable

from hubtags.registry.models import EPOCH
from hubtags.summary.platform import Platform
from hubtags.summary.version import VersionKey, rank_tags

if TYPE_CHECKING:
    from hubtags.registry.models import HubImage

logger = logging.getLogger(__name__)


class MergeError(Exception):
    """Raised when a record is folded into an image it does not belong to.

    The grouping key is derived from exactly the fields being checked, so
    this signals a programming error rather than bad input.
    """


class MergedImage:
    """All tags sharing one ``(platform, digest)`` pair.

    Attributes:
        platform: Platform the image was built for.
        digest: Content digest of the image.
        tags: Unique tags, most representative first (see :func:`rank_tags`).
        last_updated: Latest timestamp seen across contributing records.
    """

    def __init__(
        self,
        platform: Platform,
        digest: str,
        tags: Iterable[VersionKey] = (),
        last_updated: datetime = EPOCH,
    ) -> None:
        self.platform = platform
        self.digest = digest
        self.tags: list[VersionKey] = rank_tags(tags)
        self.last_updated = last_updated

    @classmethod
    def from_record(cls, record: HubImage) -> MergedImage:
        """Seed a merged image from its first raw image record."""
        return cls(
            record.platform,
            record.digest,
            tags=[VersionKey(record.tag.name)],
            last_updated=record.pushed_or_updated,
        )

    @property
    def dominant_tag(self) -> VersionKey | None:
        """The tag chosen to represent this image, if it has any."""
        return self.tags[0] if self.tags else None

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags]

    def add(self, record: HubImage) -> None:
        """Fold another record for the same platform and digest into this image.

        Raises:
            MergeError: If the record's digest or platform differs. The image
                is left untouched.
        """
        if record.digest != self.digest:
            raise MergeError(
                f"Cannot add image with digest {record.digest} to {self.digest}"
            )
        platform = record.platform
        if platform != self.platform:
            raise MergeError(
                f"Cannot add image for platform {platform} to {self.platform} "
                f"({self.digest})"
            )

        key = VersionKey(record.tag.name)
        if key not in self.tags:
            self.tags = rank_tags([*self.tags, key])
            logger.debug("Merged tag '%s' into %s", key.name, self.digest)
        self.last_updated = max(self.last_updated, record.pushed_or_updated)

    def __repr__(self) -> str:
        return (
            f"MergedImage(platform={self.platform!s}, digest={self.digest!r}, "
            f"tags={self.tag_names!r}, last_updated={self.last_updated.isoformat()})"
        )
