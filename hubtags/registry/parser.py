"""Parse user input into a Docker Hub repository path."""

from __future__ import annotations

import re
from urllib.parse import urlparse

# Hosts that all designate Docker Hub.
_DOCKERHUB_HOSTS: set[str] = {
    "hub.docker.com",
    "docker.io",
    "index.docker.io",
    "registry-1.docker.io",
    "registry.hub.docker.com",
}

# Repository path like "nginx", "_/nginx", "r/nginxinc/nginx-unprivileged",
# with an optional ":tag" suffix which is ignored.
_REPO_PATH_RE = re.compile(
    r"^(?:r/|repository/docker/)?(?P<repo>[a-z0-9._/-]+?)(?::(?P<tag>[a-zA-Z0-9._-]+))?$"
)


def parse_repository(ref: str) -> str:
    """Turn a repository reference into a Docker Hub repository path.

    Supported formats:

    * ``nginx`` → ``library/nginx``
    * ``nginxinc/nginx-unprivileged``
    * ``nginx:alpine`` (the tag is ignored)
    * ``docker.io/library/nginx``
    * ``https://hub.docker.com/_/nginx``
    * ``https://hub.docker.com/r/nginxinc/nginx-unprivileged``

    Args:
        ref: The reference string.

    Returns:
        The repository path, always ``namespace/name``.

    Raises:
        ValueError: If *ref* is empty, malformed or names another registry.
    """
    ref = ref.strip()
    if not ref:
        raise ValueError("Repository reference is empty")

    if "://" in ref:
        parsed = urlparse(ref)
        host = parsed.hostname or ""
        path = parsed.path
    else:
        host, path = _split_host(ref)

    if host and host not in _DOCKERHUB_HOSTS:
        raise ValueError(f"Only Docker Hub repositories are supported, got host '{host}'")

    path = path.strip("/")
    if path.startswith("v2/repositories/"):
        path = path[len("v2/repositories/") :]
    match = _REPO_PATH_RE.match(path)
    if not match:
        raise ValueError(f"Cannot parse repository reference: {ref}")

    repo = match.group("repo").strip("/")
    if repo.startswith("_/"):
        repo = "library/" + repo[2:]
    elif "/" not in repo:
        repo = "library/" + repo

    if repo.count("/") != 1 or repo.endswith("/"):
        raise ValueError(f"Cannot parse repository reference: {ref}")
    return repo


def _split_host(ref: str) -> tuple[str, str]:
    """Split a bare reference into ``(host, path)``.

    The first segment is a host when it contains a dot or a colon followed
    by a port, as in ``docker.io/library/nginx``.
    """
    parts = ref.split("/", 1)
    if len(parts) == 2 and ("." in parts[0] or re.search(r":\d+$", parts[0])):
        return parts[0].split(":", 1)[0], parts[1]
    return "", ref
