import json
import re
from typing import Any, Dict, Tuple

import frontmatter
from frontmatter.default_handlers import BaseHandler

BOOLEAN_VALUES = {"true": True, "false": False}
QUOTES = ('"', "'")


class PostFrontmatterHandler(BaseHandler):
    """
    Flat ``key: value`` frontmatter as written by the admin dashboard.

    Not YAML: each line is split on its first colon and the value is decoded
    on its own (booleans, bracketed arrays, optionally quoted strings). Dates
    stay strings, which keeps a decode/encode cycle byte-stable.
    """

    FM_BOUNDARY = re.compile(r"\A---\n(?:(.*?)\n)?---\n\n?(.*)\Z", re.DOTALL)
    START_DELIMITER = END_DELIMITER = "---"

    def detect(self, text: str) -> bool:
        return bool(self.FM_BOUNDARY.match(text))

    def split(self, text: str) -> Tuple[str, str]:
        match = self.FM_BOUNDARY.match(text)
        if not match:
            raise ValueError("No frontmatter block")
        return match.group(1) or "", match.group(2)

    def load(self, fm: str) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {}
        for line in fm.split("\n"):
            key, sep, value = line.partition(":")
            if not sep or not key.strip():
                continue
            metadata[key.strip()] = decode_value(value.strip())
        return metadata

    def export(self, metadata: Dict[str, Any], **kwargs) -> str:
        return "\n".join(f"{key}: {encode_value(value)}" for key, value in metadata.items())


handler = PostFrontmatterHandler()


def decode_value(value: str) -> Any:
    lowered = value.lower()
    if lowered in BOOLEAN_VALUES:
        return BOOLEAN_VALUES[lowered]

    if value.startswith("[") and value.endswith("]"):
        try:
            items = json.loads(value)
        except ValueError:
            items = [item.strip() for item in value[1:-1].split(",")]
        return [item if isinstance(item, str) else str(item) for item in items]

    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        if value[0] == '"':
            # Escaped by encode_value; hand-written headers may not be
            try:
                return json.loads(value)
            except ValueError:
                pass
        return value[1:-1]
    return value


def encode_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_quote(str(item)) for item in value) + "]"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _quote(text: str) -> str:
    """Double-quoted with newlines, quotes and backslashes escaped."""
    return json.dumps(text, ensure_ascii=False)


def decode(text: str) -> frontmatter.Post:
    """
    Split a Markdown file into metadata and body. Never raises on bad input.

    Mirrors ``frontmatter.parse`` but without its ``strip()`` calls, which would
    eat leading and trailing whitespace of the body.
    """
    post = frontmatter.Post(text)
    if not handler.detect(text):
        return post

    fm, body = handler.split(text)
    post.content = body
    post.metadata.update(handler.load(fm))
    post.handler = handler
    return post


def encode(metadata: Dict[str, Any]) -> str:
    header = frontmatter.Post("")
    header.metadata.update(metadata)
    return frontmatter.dumps(header, handler=handler)


def compose(metadata: Dict[str, Any], body: str) -> str:
    return f"{encode(metadata)}\n\n{body}"
