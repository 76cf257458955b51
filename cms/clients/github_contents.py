"""
Thin async client for the GitHub Contents API.

Only the four calls the post store needs are exposed: list a directory, read a
file together with its blob sha, create-or-update a file, and delete a file.
Every call is scoped to one repository and one branch taken from GitHubConfig.
"""

import base64
import logging
import urllib.parse
from typing import List, Optional

import httpx
from pydantic import BaseModel

from cms.exceptions import GitHubAPIError, GitHubConfigError

logger = logging.getLogger(__name__)

GITHUB_JSON = "application/vnd.github+json"
GITHUB_RAW = "application/vnd.github.raw"


class GitHubConfig(BaseModel):
    owner: str = ""
    repo: str = ""
    token: str = ""
    branch: str = "main"
    api_url: str = "https://api.github.com"
    user_agent: str = "ailodi-cms"

    def ensure_complete(self) -> None:
        missing = [
            name
            for name, value in (
                ("owner", self.owner),
                ("repo", self.repo),
                ("token", self.token),
            )
            if not value
        ]
        if missing:
            raise GitHubConfigError(
                f"GitHub configuration missing ({', '.join(missing)})"
            )


class RepoEntry(BaseModel):
    name: str
    path: str
    sha: str
    size: int = 0
    type: str = "file"


class RepoFile(BaseModel):
    path: str
    sha: str
    text: str


class GitHubContentsClient:
    def __init__(
        self,
        config: GitHubConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.api_url,
            headers={
                "Accept": GITHUB_JSON,
                "User-Agent": config.user_agent,
            },
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubContentsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_directory(self, path: str) -> Optional[List[RepoEntry]]:
        """List a directory. Returns None when the directory does not exist."""
        response = await self._request(
            "GET", path, params={"ref": self.config.branch}
        )
        if response.status_code == 404:
            return None
        _raise_for_status(response, f"list {path}")

        payload = response.json()
        if not isinstance(payload, list):
            raise GitHubAPIError(f"{path} is not a directory", response.status_code)
        return [RepoEntry(**item) for item in payload]

    async def get_file(self, path: str) -> Optional[RepoFile]:
        """Read a file and its blob sha. Returns None when the file is absent."""
        response = await self._request(
            "GET", path, params={"ref": self.config.branch}
        )
        if response.status_code == 404:
            return None
        _raise_for_status(response, f"fetch {path}")

        payload = response.json()
        if not isinstance(payload, dict) or payload.get("type", "file") != "file":
            raise GitHubAPIError(f"{path} is not a file", response.status_code)

        if payload.get("encoding") == "base64":
            text = base64.b64decode(payload.get("content", "")).decode("utf-8")
        else:
            # Files over 1 MB come back without inline content
            text = await self._get_raw(path)
        return RepoFile(path=payload.get("path", path), sha=payload["sha"], text=text)

    async def put_file(
        self,
        path: str,
        text: str,
        message: str,
        sha: Optional[str] = None,
    ) -> str:
        """Create or update a file. Pass the current sha to update. Returns the new sha."""
        body = {
            "message": message,
            "content": base64.b64encode(text.encode("utf-8")).decode("ascii"),
            "branch": self.config.branch,
        }
        if sha:
            body["sha"] = sha

        response = await self._request("PUT", path, json=body)
        _raise_for_status(response, f"write {path}")
        return response.json().get("content", {}).get("sha", "")

    async def delete_file(self, path: str, message: str, sha: str) -> None:
        body = {"message": message, "sha": sha, "branch": self.config.branch}
        response = await self._request("DELETE", path, json=body)
        _raise_for_status(response, f"delete {path}")

    async def _get_raw(self, path: str) -> str:
        response = await self._request(
            "GET",
            path,
            params={"ref": self.config.branch},
            headers={"Accept": GITHUB_RAW},
        )
        _raise_for_status(response, f"fetch raw {path}")
        return response.text

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        self.config.ensure_complete()
        headers = {"Authorization": f"Bearer {self.config.token}"}
        headers.update(kwargs.pop("headers", {}))
        url = self._contents_url(path)
        logger.debug(f"GitHub {method} {url}")
        return await self._client.request(method, url, headers=headers, **kwargs)

    def _contents_url(self, path: str) -> str:
        quoted = urllib.parse.quote(path.strip("/"), safe="/")
        return f"/repos/{self.config.owner}/{self.config.repo}/contents/{quoted}"


def _raise_for_status(response: httpx.Response, action: str) -> None:
    if response.is_success:
        return
    try:
        payload = response.json()
    except ValueError:
        payload = response.text
    detail = payload.get("message", "") if isinstance(payload, dict) else payload
    message = f"Failed to {action}"
    if detail:
        message = f"{message}: {detail}"
    raise GitHubAPIError(message, response.status_code)
