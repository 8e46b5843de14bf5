"""Read and write the generated content file in a GitHub repository."""

import base64
import json
import logging
from typing import Any, Optional

import requests

from refresh_content.models import StoredArtifact

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.github.com"
REQUEST_TIMEOUT = 30


class StaleVersionError(Exception):
    """The file changed since it was read; the write was rejected."""


def encode_content(content: dict[str, Any]) -> str:
    """Encode an artifact as base64 JSON."""
    data = json.dumps(content, ensure_ascii=False).encode("utf-8")
    return base64.b64encode(data).decode("ascii")


def decode_content(encoded: str) -> dict[str, Any]:
    """Decode base64 JSON as returned by the contents API (may contain newlines)."""
    data = base64.b64decode(encoded.replace("\n", ""))
    if not data.strip():
        return {}
    return json.loads(data.decode("utf-8"))


class GithubContentStore:
    """One file in a GitHub repository, written with compare-and-swap on its blob sha."""

    def __init__(self, token: str, owner: str, repo: str, path: str, session: Optional[requests.Session] = None):
        self.owner = owner
        self.repo = repo
        self.path = path
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "collection-refresh/1.0",
        })

    @property
    def url(self) -> str:
        return f"{API_BASE_URL}/repos/{self.owner}/{self.repo}/contents/{self.path}"

    def read(self) -> StoredArtifact:
        """Read the current artifact and its version token (blob sha)."""
        response = self.session.get(self.url, timeout=REQUEST_TIMEOUT)

        if response.status_code == 404:
            logger.warning("No generated content at %s/%s:%s, starting empty", self.owner, self.repo, self.path)
            return StoredArtifact(content={}, sha=None)

        response.raise_for_status()
        data = response.json()
        return StoredArtifact(content=decode_content(data.get("content", "")), sha=data["sha"])

    def write(self, content: dict[str, Any], sha: Optional[str], message: str) -> str:
        """Replace the artifact if it is still at version sha.

        Returns:
            The new commit sha

        Raises:
            StaleVersionError: If the file changed since sha was read
        """
        body = {"message": message, "content": encode_content(content)}
        if sha:
            body["sha"] = sha

        response = self.session.put(self.url, json=body, timeout=REQUEST_TIMEOUT)

        if response.status_code == 409:
            raise StaleVersionError(
                f"{self.owner}/{self.repo}:{self.path} is no longer at version {sha}"
            )

        response.raise_for_status()
        return response.json()["commit"]["sha"]
