"""HTTP client for the Docker Hub tags API."""

from __future__ import annotations

import logging
from typing import Any, Iterator

import requests

from hubtags.config import HubSettings
from hubtags.registry.models import HubTag

logger = logging.getLogger(__name__)


class HubError(Exception):
    """Raised when a Docker Hub API call fails."""


class HubClient:
    """Client listing the tags of a Docker Hub repository.

    Args:
        repository: Full repository path (e.g. ``library/nginx``).
        settings: Base URL, page size and timeout to use.
    """

    def __init__(
        self,
        repository: str,
        settings: HubSettings | None = None,
    ) -> None:
        self.repository = repository
        self.settings = settings or HubSettings()
        self._session = requests.Session()

    @property
    def tags_url(self) -> str:
        return f"{self.settings.base_url}/repositories/{self.repository}/tags"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_tags(self) -> list[HubTag]:
        """Return every tag of the repository, following pagination.

        Raises:
            HubError: If any page cannot be fetched or decoded.
        """
        tags: list[HubTag] = []
        for page in self.iter_pages():
            for result in page.get("results") or []:
                try:
                    tags.append(HubTag.from_json(result))
                except (KeyError, TypeError, AttributeError) as exc:
                    raise HubError(
                        f"Malformed tag entry for {self.repository}: {exc!r}"
                    ) from exc
        logger.debug("Fetched %d tags for %s", len(tags), self.repository)
        return tags

    def iter_pages(self) -> Iterator[dict[str, Any]]:
        """Yield each page of the tag listing until ``next`` is empty."""
        url: str | None = self.tags_url
        params: dict[str, Any] | None = {"page_size": self.settings.page_size}
        while url:
            page = self._get(url, params=params)
            yield page
            url = page.get("next")
            # ``next`` already carries the query string.
            params = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _get(self, url: str, *, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET *url* and return its decoded JSON object."""
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, params=params, timeout=self.settings.timeout)
        except requests.RequestException as exc:
            raise HubError(f"Request to {url} failed: {exc}") from exc

        if resp.status_code != 200:
            raise HubError(
                f"Docker Hub returned {resp.status_code} for {url}: {resp.text[:200]}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise HubError(f"Docker Hub returned invalid JSON for {url}") from exc
        if not isinstance(data, dict):
            raise HubError(f"Unexpected response payload for {url}")
        return data
