"""Shared factories for building raw Hub records in tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from hubtags.registry.models import EPOCH, HubImage, HubTag


def ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone(timezone.utc)


def make_image(
    tag_name: str,
    digest: str = "sha256:aaa",
    *,
    architecture: str | None = "amd64",
    os: str | None = "linux",
    variant: str | None = None,
    tag_updated: datetime = EPOCH,
    pushed: datetime = EPOCH,
) -> HubImage:
    """Build a single image record attached to its own tag record."""
    tag = HubTag(name=tag_name, last_updated=tag_updated, status="active")
    image = HubImage(
        digest=digest,
        tag=tag,
        architecture=architecture,
        os=os,
        variant=variant,
        status="active",
        last_updated=pushed,
    )
    tag.images.append(image)
    return image


@pytest.fixture
def image_factory():
    return make_image
