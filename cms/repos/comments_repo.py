import uuid
from typing import List, Optional

import pycouchdb

from cms.exceptions import CommentNotFoundError

COMMENT_TYPE = "comment"


class CouchCommentsRepo:
    def __init__(self, couch_db):
        self.db = couch_db

    def list_comments(
        self, post_slug: Optional[str] = None, approved: Optional[bool] = None
    ) -> List[dict]:
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        comments = [
            doc
            for doc in all_docs
            if doc.get("type") == COMMENT_TYPE
            and (post_slug is None or doc.get("postSlug") == post_slug)
            and (approved is None or bool(doc.get("approved")) == approved)
        ]
        comments.sort(key=lambda doc: doc.get("createdAt") or "", reverse=True)
        return comments

    def get_comment(self, comment_id: str) -> dict:
        try:
            doc = self.db.get(comment_id)
        except pycouchdb.exceptions.NotFound:
            raise CommentNotFoundError(f"Comment not found: {comment_id}")
        if doc.get("type") != COMMENT_TYPE:
            raise CommentNotFoundError(f"Comment not found: {comment_id}")
        return doc

    def add_comment(self, fields: dict) -> dict:
        doc = {"_id": uuid.uuid4().hex, "type": COMMENT_TYPE, **fields}
        return self.db.save(doc)

    def set_approved(self, comment_id: str, approved: bool = True) -> dict:
        doc = self.get_comment(comment_id)
        doc["approved"] = approved
        return self.db.save(doc)

    def delete_comment(self, comment_id: str) -> None:
        self.db.delete(self.get_comment(comment_id))
