"""Version keys — tag names with an optional semantic version.

A tag such as ``1.2`` or ``3.19.1-alpine`` parses as a semantic version and is
compared by version precedence; tags like ``latest`` or ``v2`` do not and are
compared by name.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import Iterable

import semver

from hubtags.summary.ranking import cmp, compare_present

logger = logging.getLogger(__name__)

# Numeric components actually written in the tag ("1", "1.2", "1.2.3").
_CORE_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def _parse_version(name: str) -> semver.Version | None:
    try:
        return semver.Version.parse(name, optional_minor_and_patch=True)
    except (ValueError, TypeError):
        return None


@functools.total_ordering
class VersionKey:
    """A tag name paired with its parsed semantic version, if any.

    Two keys are equal when their names are equal, whatever the parsed
    version says.
    """

    __slots__ = ("name", "version")

    def __init__(self, name: str) -> None:
        self.name = name
        self.version = _parse_version(name)

    @property
    def is_versioned(self) -> bool:
        return self.version is not None

    def compare(self, other: VersionKey | None) -> int:
        """Three-way comparison against *other*.

        A missing *other* ranks lower. When either side has no version the
        names are compared lexically, otherwise ``(version, name)`` pairs are.
        """
        return compare_present(self, other, _compare_keys)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: VersionKey) -> bool:
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"VersionKey({self.name!r})"

    def __str__(self) -> str:
        return self.name


def _compare_keys(a: VersionKey, b: VersionKey) -> int:
    if a.version is None or b.version is None:
        return cmp(a.name, b.name)
    if a.version != b.version:
        return a.version.compare(b.version)
    return cmp(a.name, b.name)


class CompatibleRelease:
    """Pessimistic (``~>``) constraint derived from a versioned tag.

    The upper bound depends on how many components the tag spells out:

    * ``~> 1``, ``~> 1.2`` and ``~> 1.2-alpine`` admit anything below the next
      major version;
    * ``~> 1.2.3`` admits anything below the next minor version;
    * ``~> 1.2.3-rc.1`` admits later prereleases of ``1.2.3`` only.

    Prerelease candidates satisfy a constraint only when the reference is a
    prerelease itself.
    """

    def __init__(self, lower: semver.Version, upper: semver.Version) -> None:
        self.lower = lower
        self.upper = upper

    @classmethod
    def from_key(cls, key: VersionKey) -> CompatibleRelease:
        """Build the constraint ``~> key.name``.

        Raises:
            ValueError: If *key* is unversioned or carries build metadata.
        """
        version = key.version
        if version is None:
            raise ValueError(f"Tag '{key.name}' is not a semantic version")
        if version.build:
            raise ValueError(
                f"Cannot derive a version range from build metadata in '{key.name}'"
            )

        match = _CORE_RE.match(key.name)
        if match is None:
            raise ValueError(f"Cannot read version components from '{key.name}'")
        components = sum(1 for group in match.groups() if group is not None)

        if components < 3:
            upper = version.bump_major()
        elif version.prerelease:
            upper = version.finalize_version()
        else:
            upper = version.bump_minor()
        return cls(version, upper)

    def satisfies(self, version: semver.Version) -> bool:
        """Return True if *version* falls inside this constraint."""
        if version.prerelease and not self.lower.prerelease:
            return False
        return self.lower <= version < self.upper

    def __repr__(self) -> str:
        return f"CompatibleRelease(>={self.lower}, <{self.upper})"


def rank_tags(tags: Iterable[VersionKey]) -> list[VersionKey]:
    """Order *tags* so the most representative one comes first.

    Each versioned tag is scored by how many versioned tags (itself
    included) satisfy its compatible-release constraint. Broader tags such
    as ``1.2`` therefore outrank narrower ones such as ``1.2.3``. Ties go to
    the shorter name, then to the lexically smaller one. Unversioned tags,
    and versioned ones whose constraint cannot be built, follow in name
    order. Duplicate names are collapsed.

    The result only depends on the set of names, not on their order.
    """
    unique = list(dict.fromkeys(tags))
    versioned = [t for t in unique if t.version is not None]

    scored: list[tuple[VersionKey, int]] = []
    for tag in versioned:
        try:
            constraint = CompatibleRelease.from_key(tag)
        except ValueError as exc:
            logger.debug("Excluding tag from ranking: %s", exc)
            continue
        count = sum(1 for other in versioned if constraint.satisfies(other.version))
        scored.append((tag, count))

    scored.sort(key=lambda item: (-item[1], len(item[0].name), item[0].name))
    ranked = [tag for tag, _ in scored]

    ranked_names = {t.name for t in ranked}
    rest = sorted(
        (t for t in unique if t.name not in ranked_names), key=lambda t: t.name
    )
    return ranked + rest
