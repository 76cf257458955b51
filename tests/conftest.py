import base64
import itertools
import json
import urllib.parse

import httpx
import pycouchdb

from cms.clients.github_contents import GitHubConfig, GitHubContentsClient

OWNER = "acme"
REPO = "blog"


def make_config(**overrides) -> GitHubConfig:
    values = {"owner": OWNER, "repo": REPO, "token": "tok"}
    values.update(overrides)
    return GitHubConfig(**values)


class FakeGitHub:
    """
    In-memory GitHub Contents API, served through httpx.MockTransport.
    Every request is recorded as (method, path, json body or None).
    """

    def __init__(self, files: dict = None):
        self._shas = (f"sha-{n}" for n in itertools.count(1))
        self.files = {}
        for path, text in (files or {}).items():
            self.files[path] = {"text": text, "sha": next(self._shas)}
        self.requests = []
        self.failures = {}

    def client(self, **config_overrides) -> GitHubContentsClient:
        return GitHubContentsClient(
            make_config(**config_overrides), transport=httpx.MockTransport(self.handle)
        )

    def fail(self, method: str, path: str, status: int = 500):
        self.failures[(method, path)] = status

    def calls(self, method: str):
        return [path for m, path, _ in self.requests if m == method]

    def handle(self, request: httpx.Request) -> httpx.Response:
        prefix = f"/repos/{OWNER}/{REPO}/contents/"
        path = urllib.parse.unquote(request.url.path[len(prefix):])
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, path, body))

        status = self.failures.get((request.method, path))
        if status:
            return httpx.Response(status, json={"message": "Server Error"})

        if request.method == "GET":
            return self._get(path, request)
        if request.method == "PUT":
            return self._put(path, body)
        if request.method == "DELETE":
            return self._delete(path, body)
        return httpx.Response(405)

    def _get(self, path, request):
        if path in self.files:
            entry = self.files[path]
            if request.headers.get("accept") == "application/vnd.github.raw":
                return httpx.Response(200, text=entry["text"])
            encoded = base64.b64encode(entry["text"].encode("utf-8")).decode("ascii")
            return httpx.Response(
                200,
                json={
                    "type": "file",
                    "name": path.rsplit("/", 1)[-1],
                    "path": path,
                    "sha": entry["sha"],
                    "size": len(entry["text"]),
                    "encoding": "base64",
                    # GitHub wraps base64 at 60 columns
                    "content": "\n".join(
                        encoded[i : i + 60] for i in range(0, len(encoded), 60)
                    ),
                },
            )

        children = {}
        for file_path, entry in self.files.items():
            if not file_path.startswith(path + "/"):
                continue
            name, _, rest = file_path[len(path) + 1 :].partition("/")
            children[name] = {
                "name": name,
                "path": f"{path}/{name}",
                "sha": entry["sha"],
                "size": len(entry["text"]),
                "type": "dir" if rest else "file",
            }
        if not children:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=list(children.values()))

    def _put(self, path, body):
        existing = self.files.get(path)
        if existing and not body.get("sha"):
            return httpx.Response(422, json={"message": "sha wasn't supplied"})
        if existing and body["sha"] != existing["sha"]:
            return httpx.Response(409, json={"message": "does not match"})

        text = base64.b64decode(body["content"]).decode("utf-8")
        sha = next(self._shas)
        self.files[path] = {"text": text, "sha": sha}
        return httpx.Response(
            200 if existing else 201, json={"content": {"path": path, "sha": sha}}
        )

    def _delete(self, path, body):
        existing = self.files.get(path)
        if not existing:
            return httpx.Response(404, json={"message": "Not Found"})
        if body.get("sha") != existing["sha"]:
            return httpx.Response(409, json={"message": "does not match"})
        del self.files[path]
        return httpx.Response(200, json={"commit": {}})


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of get() calls.
    """

    def __init__(self, docs: dict = None, track_calls: bool = False):
        self.docs = docs if docs is not None else {}
        self.track_calls = track_calls
        self.calls = []
        self._revs = itertools.count(1)

    def get(self, doc_id: str) -> dict:
        if self.track_calls:
            self.calls.append(doc_id)
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return dict(self.docs[doc_id])

    def all(self, include_docs: bool = True):
        if self.track_calls:
            self.calls.append(f"all(include_docs={include_docs})")
        if include_docs:
            return [{"doc": dict(doc)} for doc in self.docs.values()]
        return list(self.docs.values())

    def save(self, doc: dict) -> dict:
        saved = {**doc, "_rev": f"{next(self._revs)}-x"}
        self.docs[saved["_id"]] = saved
        return dict(saved)

    def delete(self, doc_or_id):
        doc_id = doc_or_id["_id"] if isinstance(doc_or_id, dict) else doc_or_id
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        del self.docs[doc_id]


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, list_posts_return=None, get_post_return=None):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self.calls = []

    async def list_posts(self):
        return self._list_posts_return

    async def get_post(self, slug: str):
        return self._get_post_return

    async def create_post(self, data):
        self.calls.append(("create", data))
        return {"success": True, "slug": "new-post"}

    async def update_post(self, slug, data):
        self.calls.append(("update", slug, data))
        return {"success": True}

    async def delete_post(self, slug):
        self.calls.append(("delete", slug))
        return {"success": True}


def post_payload(**overrides) -> dict:
    post = {
        "id": "hello",
        "slug": "hello",
        "title": "Hello",
        "author": "Admin",
        "date": "2024-06-01T00:00:00.000Z",
        "excerpt": "",
        "tags": [],
        "categories": [],
        "image": "",
        "metaDescription": "",
        "status": "published",
        "publishDate": "2024-06-01T00:00:00.000Z",
        "updatedAt": "2024-06-01T00:00:00.000Z",
        "content": "hi",
    }
    post.update(overrides)
    return post
