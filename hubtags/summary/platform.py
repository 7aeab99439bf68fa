"""Platform key identifying a build target."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hubtags.registry.models import HubImage


@dataclass(frozen=True)
class Platform:
    """Hardware/OS variant an image was built for.

    Used only as an equality and grouping key; platforms are never ordered.
    Missing fields are ``None`` and equal only other missing fields.
    """

    architecture: str | None = None
    features: str | None = None
    variant: str | None = None
    os: str | None = None
    os_features: str | None = None
    os_version: str | None = None

    @classmethod
    def of(cls, image: HubImage) -> Platform:
        """Build the platform key of a raw image record."""
        return cls(
            architecture=image.architecture,
            features=image.features,
            variant=image.variant,
            os=image.os,
            os_features=image.os_features,
            os_version=image.os_version,
        )

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def __str__(self) -> str:
        parts = [self.os or "unknown", self.architecture or "unknown"]
        if self.variant:
            parts.append(self.variant)
        label = "/".join(parts)
        if self.os_version:
            label += f" ({self.os_version})"
        return label
