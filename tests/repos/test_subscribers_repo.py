import pytest

from cms.exceptions import SubscriberNotFoundError
from cms.repos.subscribers_repo import CouchSubscribersRepo
from tests.conftest import FakeCouchDB


def subscriber(doc_id, email, subscribed_at="2024-01-01"):
    return {"_id": doc_id, "type": "subscriber", "email": email, "subscribedAt": subscribed_at}


def test_list_subscribers_newest_first():
    db = FakeCouchDB(
        {
            "1": subscriber("1", "a@x.io", "2024-01-01"),
            "2": subscriber("2", "b@x.io", "2024-02-01"),
            "c": {"_id": "c", "type": "comment"},
        }
    )

    assert [d["_id"] for d in CouchSubscribersRepo(db).list_subscribers()] == ["2", "1"]


def test_find_by_email_is_case_insensitive():
    repo = CouchSubscribersRepo(FakeCouchDB({"1": subscriber("1", "Ann@X.io")}))

    assert repo.find_by_email("ann@x.io")["_id"] == "1"
    assert repo.find_by_email("bob@x.io") is None


def test_add_and_delete_subscriber():
    db = FakeCouchDB()
    repo = CouchSubscribersRepo(db)

    saved = repo.add_subscriber({"email": "a@x.io"})
    repo.delete_subscriber(saved["_id"])

    assert db.docs == {}


def test_delete_missing_subscriber_raises():
    repo = CouchSubscribersRepo(FakeCouchDB({"c": {"_id": "c", "type": "comment"}}))

    with pytest.raises(SubscriberNotFoundError):
        repo.delete_subscriber("missing")
    with pytest.raises(SubscriberNotFoundError):
        repo.delete_subscriber("c")
