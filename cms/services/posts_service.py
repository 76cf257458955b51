import datetime
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from cms.exceptions import PostConflictError, PostNotFoundError, PostValidationError
from cms.repos.posts_repo import GitHubPostsRepo
from cms.schemas.blog import CreatePostResult, OperationResult, Post, PostInput, split_list
from cms.services import frontmatter_codec

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
DEFAULT_AUTHOR = "Admin"
DEFAULT_STATUS = "published"


def utc_now_iso() -> str:
    """Current UTC time, millisecond precision, trailing Z."""
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PostsService:
    def __init__(self, repo: GitHubPostsRepo, now: Callable[[], str] = utc_now_iso):
        self.repo = repo
        self.now = now

    async def list_posts(self) -> List[Post]:
        files = await self.repo.list_post_files()
        posts = [parse_post_data(slug, file.text, now=self.now()) for slug, file in files]
        return sort_posts(posts)

    async def get_post(self, slug: str) -> Optional[Post]:
        file = await self.repo.get_post_file(slug)
        if file is None:
            return None
        return parse_post_data(slug, file.text, now=self.now())

    async def create_post(self, data: PostInput) -> CreatePostResult:
        title = _require_fields(data)
        slug = slugify(title)
        if not slug:
            raise PostValidationError("Title must contain letters or digits")

        if await self.repo.get_post_file(slug) is not None:
            raise PostConflictError(slug)

        metadata = build_frontmatter(data, title=title, date=self.now())
        await self.repo.write_post_file(
            slug,
            frontmatter_codec.compose(metadata, data.content),
            f"Add post: {title}",
        )
        logger.info(f"Created post {slug}")
        return CreatePostResult(slug=slug)

    async def update_post(self, slug: str, data: PostInput) -> OperationResult:
        title = _require_fields(data)
        existing = await self.repo.get_post_file(slug)
        if existing is None:
            raise PostNotFoundError(slug)

        now = self.now()
        previous = frontmatter_codec.decode(existing.text).metadata
        metadata = build_frontmatter(
            data,
            title=title,
            date=_as_text(previous.get("date")) or now,
            updated_at=now,
        )
        await self.repo.write_post_file(
            slug,
            frontmatter_codec.compose(metadata, data.content),
            f"Update post: {title}",
            sha=existing.sha,
        )
        logger.info(f"Updated post {slug}")
        return OperationResult()

    async def delete_post(self, slug: str) -> OperationResult:
        existing = await self.repo.get_post_file(slug)
        if existing is None:
            raise PostNotFoundError(slug)

        await self.repo.delete_post_file(slug, f"Delete post: {slug}", existing.sha)
        logger.info(f"Deleted post {slug}")
        return OperationResult()


def slugify(title: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", title.lower(), flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")


def build_frontmatter(
    data: PostInput, *, title: str, date: str, updated_at: Optional[str] = None
) -> Dict[str, Any]:
    metadata: Dict[str, Any] = {
        "title": title,
        "date": date,
        "author": data.author or DEFAULT_AUTHOR,
        "excerpt": data.excerpt or "",
        "tags": list(data.tags),
        "categories": list(data.categories),
        "image": data.image or "",
        "status": DEFAULT_STATUS,
    }
    if updated_at:
        metadata["updatedAt"] = updated_at
    return metadata


def parse_post_data(slug: str, text: str, *, now: str) -> Post:
    """Assemble a Post from a Markdown file, defaulting whatever the header lacks."""
    parsed = frontmatter_codec.decode(text)
    metadata = parsed.metadata

    date = _as_text(metadata.get("date")) or now
    excerpt = _as_text(metadata.get("excerpt"))
    return Post(
        id=slug,
        slug=slug,
        title=_as_text(metadata.get("title")) or DEFAULT_TITLE,
        author=_as_text(metadata.get("author")) or DEFAULT_AUTHOR,
        date=date,
        excerpt=excerpt,
        tags=_as_list(metadata.get("tags")),
        categories=_as_list(metadata.get("categories")),
        image=_as_text(metadata.get("image")),
        metaDescription=_as_text(metadata.get("metaDescription")) or excerpt,
        status=_as_text(metadata.get("status")) or DEFAULT_STATUS,
        publishDate=date,
        updatedAt=_as_text(metadata.get("updatedAt")) or date,
        content=parsed.content,
    )


def sort_posts(posts: List[Post]) -> List[Post]:
    """Newest first; posts whose date does not parse go last in listing order."""
    dated = []
    undated = []
    for post in posts:
        parsed = parse_date(post.date)
        if parsed is None:
            logger.warning(f"Unparseable date {post.date!r} on post {post.slug}")
            undated.append(post)
        else:
            dated.append((parsed, post))

    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [post for _, post in dated] + undated


def parse_date(value: str) -> Optional[datetime.datetime]:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed


def _require_fields(data: PostInput) -> str:
    title = data.title.strip()
    if not title or not data.content.strip():
        raise PostValidationError("Title and content are required")
    return title


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def _as_list(value) -> List[str]:
    if isinstance(value, (str, list)):
        return split_list(value)
    return []
