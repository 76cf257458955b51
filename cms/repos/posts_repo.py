import asyncio
import logging
from typing import List, Optional, Tuple

from cms.clients.github_contents import GitHubContentsClient, RepoFile
from cms.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = ".md"


class GitHubPostsRepo:
    def __init__(self, client: GitHubContentsClient, posts_dir: str = "posts"):
        self.client = client
        self.posts_dir = posts_dir.strip("/")

    def path_for(self, slug: str) -> str:
        return f"{self.posts_dir}/{slug}{MARKDOWN_EXTENSION}"

    async def list_post_files(self) -> List[Tuple[str, RepoFile]]:
        entries = await self.client.list_directory(self.posts_dir)
        if entries is None:
            logger.warning(
                f"Posts directory '{self.posts_dir}' not found in repository"
            )
            return []

        markdown = [
            entry
            for entry in entries
            if entry.type == "file" and entry.name.endswith(MARKDOWN_EXTENSION)
        ]
        files = await asyncio.gather(
            *(self._fetch_listed(entry.path) for entry in markdown)
        )
        return [
            (entry.name.removesuffix(MARKDOWN_EXTENSION), file)
            for entry, file in zip(markdown, files)
        ]

    async def get_post_file(self, slug: str) -> Optional[RepoFile]:
        return await self.client.get_file(self.path_for(slug))

    async def write_post_file(
        self, slug: str, text: str, message: str, sha: Optional[str] = None
    ) -> str:
        return await self.client.put_file(self.path_for(slug), text, message, sha=sha)

    async def delete_post_file(self, slug: str, message: str, sha: str) -> None:
        await self.client.delete_file(self.path_for(slug), message, sha)

    async def _fetch_listed(self, path: str) -> RepoFile:
        file = await self.client.get_file(path)
        if file is None:
            # Listed a moment ago; vanished before we could read it
            raise GitHubAPIError(f"Failed to fetch post: {path}", 404)
        return file
