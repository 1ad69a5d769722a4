"""Release lookup and semantic-version comparison for the update check.

Provides:
- ``parse_semver`` / ``compare_semver``: ``major.minor.patch`` ordering
- ``ReleaseClient``: fetches the latest published release tag
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional, Tuple

import httpx

from railway_cli.constants import GITHUB_API_RELEASE_URL, HTTP_TIMEOUT, RELEASE_USER_AGENT
from railway_cli.errors import UpdateCheckError

logger = logging.getLogger(__name__)

_SEMVER_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)")


def parse_semver(version: str) -> Optional[Tuple[int, int, int]]:
    """Parse a semver string into (major, minor, patch), or None."""
    m = _SEMVER_RE.match(version.strip())
    if not m:
        return None
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def compare_semver(current: str, latest: str) -> int:
    """Return -1, 0 or 1 as *current* is older than, equal to or newer than *latest*.

    Versions that cannot be parsed compare equal so they never produce
    an update notice. Pre-release and build suffixes are ignored.
    """
    cur = parse_semver(current)
    lat = parse_semver(latest)
    if cur is None or lat is None:
        return 0
    if cur < lat:
        return -1
    if cur > lat:
        return 1
    return 0


def newer_version(current: str, latest: str) -> Optional[str]:
    """Return *latest* if it is strictly newer than *current*, else None."""
    if compare_semver(current, latest) < 0:
        return latest
    return None


class ReleaseClient:
    """Async client for the release-metadata endpoint.

    The request and the body parsing are separate steps so callers can
    record that a check happened once a response arrived, before the body
    is interpreted.
    """

    def __init__(
        self,
        url: str = GITHUB_API_RELEASE_URL,
        *,
        timeout: float = HTTP_TIMEOUT,
    ) -> None:
        self.url = url
        self._timeout = timeout
        self._client: Any = None  # lazy httpx.AsyncClient

    def _ensure_client(self) -> Any:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": RELEASE_USER_AGENT},
                timeout=self._timeout,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self) -> Any:
        """``GET`` the latest release. Transport errors propagate."""
        client = self._ensure_client()
        logger.debug("Fetching latest release from %s", self.url)
        return await client.get(self.url)

    @staticmethod
    def parse_tag(resp: Any) -> str:
        """Extract the version from a release response, without a leading ``v``."""
        try:
            resp.raise_for_status()
            tag_name = resp.json()["tag_name"]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise UpdateCheckError(f"Invalid release metadata response: {exc}") from exc
        if not isinstance(tag_name, str):
            raise UpdateCheckError(f"Invalid release tag: {tag_name!r}")
        return tag_name.lstrip("v")
