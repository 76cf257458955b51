import csv
import io
import logging
import re
from typing import List

from cms.exceptions import InvalidRequestError, SubscriberExistsError
from cms.repos.subscribers_repo import CouchSubscribersRepo
from cms.schemas.community import SubscribeRequest, SubscribeResult, Subscriber
from cms.services.posts_service import utc_now_iso

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")
CSV_COLUMNS = ["email", "postSlug", "subscribedAt"]


class SubscribersService:
    def __init__(self, repo: CouchSubscribersRepo):
        self.repo = repo

    def subscribe(self, data: SubscribeRequest) -> SubscribeResult:
        if not EMAIL_PATTERN.match(data.email):
            raise InvalidRequestError("Valid email is required")
        if self.repo.find_by_email(data.email):
            raise SubscriberExistsError("Email already subscribed")

        doc = self.repo.add_subscriber(
            {
                "email": data.email,
                "postSlug": data.postSlug or None,
                "subscribedAt": utc_now_iso(),
            }
        )
        logger.info(f"New subscriber {doc['_id']}")
        return SubscribeResult(
            message="Successfully subscribed to AI Lodi newsletter!",
            id=doc["_id"],
        )

    def list_subscribers(self) -> List[Subscriber]:
        return [to_subscriber(doc) for doc in self.repo.list_subscribers()]

    def delete(self, subscriber_id: str) -> None:
        self.repo.delete_subscriber(subscriber_id)
        logger.info(f"Removed subscriber {subscriber_id}")

    def export_csv(self) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for subscriber in self.list_subscribers():
            writer.writerow(
                [
                    subscriber.email,
                    subscriber.postSlug or "",
                    subscriber.subscribedAt or "",
                ]
            )
        return buffer.getvalue()

    def count(self) -> int:
        return len(self.repo.list_subscribers())


def to_subscriber(doc: dict) -> Subscriber:
    return Subscriber(
        id=doc["_id"],
        email=doc.get("email", ""),
        postSlug=doc.get("postSlug"),
        subscribedAt=doc.get("subscribedAt"),
    )
