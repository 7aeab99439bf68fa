"""Runtime settings for talking to Docker Hub."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hub.docker.com/v2"
DEFAULT_PAGE_SIZE = 100
DEFAULT_TIMEOUT = 30

# Docker Hub rejects larger pages.
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class HubSettings:
    """Connection settings for :class:`~hubtags.registry.client.HubClient`."""

    base_url: str = DEFAULT_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: int = DEFAULT_TIMEOUT


def resolve_settings(
    base_url: str | None = None,
    page_size: int | None = None,
    timeout: int | None = None,
) -> HubSettings:
    """Resolve settings from explicit values, the environment and defaults.

    Order of precedence:
    1. Explicit arguments (CLI options)
    2. Environment variables (HUBTAGS_BASE_URL, HUBTAGS_PAGE_SIZE, HUBTAGS_TIMEOUT)
    3. Built-in defaults

    Raises:
        ValueError: If a numeric setting is not a positive integer.
    """
    if base_url is None:
        base_url = os.environ.get("HUBTAGS_BASE_URL") or DEFAULT_BASE_URL
    if page_size is None:
        page_size = _env_int("HUBTAGS_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if timeout is None:
        timeout = _env_int("HUBTAGS_TIMEOUT", DEFAULT_TIMEOUT)

    if page_size <= 0 or page_size > MAX_PAGE_SIZE:
        raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
    if timeout <= 0:
        raise ValueError(f"Timeout must be a positive number of seconds, got {timeout}")

    settings = HubSettings(base_url=base_url.rstrip("/"), page_size=page_size, timeout=timeout)
    logger.debug("Resolved settings: %s", settings)
    return settings


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from exc
