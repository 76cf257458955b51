import logging
from typing import List, Tuple

from cms.exceptions import InvalidRequestError
from cms.repos.comments_repo import CouchCommentsRepo
from cms.schemas.community import Comment, CommentCreate, CommentCreated
from cms.services.posts_service import utc_now_iso

logger = logging.getLogger(__name__)

STATUS_FILTERS = {"all": None, "pending": False, "approved": True}


class CommentsService:
    def __init__(self, repo: CouchCommentsRepo):
        self.repo = repo

    def list_public(self, post_slug: str) -> List[Comment]:
        """Approved comments for one post, newest first."""
        docs = self.repo.list_comments(post_slug=post_slug, approved=True)
        return [to_comment(doc) for doc in docs]

    def list_for_moderation(self, status: str = "all") -> List[Comment]:
        if status not in STATUS_FILTERS:
            raise InvalidRequestError(f"Unknown comment status filter: {status}")
        docs = self.repo.list_comments(approved=STATUS_FILTERS[status])
        return [to_comment(doc) for doc in docs]

    def submit(self, data: CommentCreate) -> CommentCreated:
        if not (data.postSlug and data.author.strip() and data.content.strip()):
            raise InvalidRequestError("Missing required fields")

        doc = self.repo.add_comment(
            {
                "postSlug": data.postSlug,
                "author": data.author.strip(),
                "email": data.email or "",
                "content": data.content,
                "parentId": data.parentId or None,
                # Visible only after an admin approves it
                "approved": False,
                "isAdmin": False,
                "createdAt": utc_now_iso(),
            }
        )
        logger.info(f"New comment {doc['_id']} on {data.postSlug} awaiting approval")
        return CommentCreated(
            id=doc["_id"],
            postSlug=doc["postSlug"],
            author=doc["author"],
            content=doc["content"],
            approved=False,
        )

    def approve(self, comment_id: str) -> Comment:
        doc = self.repo.set_approved(comment_id, True)
        logger.info(f"Approved comment {comment_id}")
        return to_comment(doc)

    def delete(self, comment_id: str) -> None:
        self.repo.delete_comment(comment_id)
        logger.info(f"Deleted comment {comment_id}")

    def counts(self) -> Tuple[int, int]:
        docs = self.repo.list_comments()
        pending = sum(1 for doc in docs if not doc.get("approved"))
        return len(docs), pending


def to_comment(doc: dict) -> Comment:
    return Comment(
        id=doc["_id"],
        postSlug=doc.get("postSlug", ""),
        author=doc.get("author", ""),
        email=doc.get("email") or "",
        content=doc.get("content", ""),
        parentId=doc.get("parentId"),
        approved=bool(doc.get("approved")),
        isAdmin=bool(doc.get("isAdmin")),
        createdAt=doc.get("createdAt"),
    )
