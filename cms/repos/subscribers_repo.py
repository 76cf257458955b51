import uuid
from typing import List, Optional

import pycouchdb

from cms.exceptions import SubscriberNotFoundError

SUBSCRIBER_TYPE = "subscriber"


class CouchSubscribersRepo:
    def __init__(self, couch_db):
        self.db = couch_db

    def list_subscribers(self) -> List[dict]:
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        subscribers = [doc for doc in all_docs if doc.get("type") == SUBSCRIBER_TYPE]
        subscribers.sort(key=lambda doc: doc.get("subscribedAt") or "", reverse=True)
        return subscribers

    def find_by_email(self, email: str) -> Optional[dict]:
        wanted = email.lower()
        return next(
            (
                doc
                for doc in self.list_subscribers()
                if (doc.get("email") or "").lower() == wanted
            ),
            None,
        )

    def add_subscriber(self, fields: dict) -> dict:
        doc = {"_id": uuid.uuid4().hex, "type": SUBSCRIBER_TYPE, **fields}
        return self.db.save(doc)

    def delete_subscriber(self, subscriber_id: str) -> None:
        try:
            doc = self.db.get(subscriber_id)
        except pycouchdb.exceptions.NotFound:
            raise SubscriberNotFoundError(f"Subscriber not found: {subscriber_id}")
        if doc.get("type") != SUBSCRIBER_TYPE:
            raise SubscriberNotFoundError(f"Subscriber not found: {subscriber_id}")
        self.db.delete(doc)
