"""
Blog API — BlogPost Document Model
===================================

What:  Mapping between the `posts` collection documents and Python objects.
Why:   Keeps the `_id` / ObjectId storage details out of routes and schemas.

Document Shape:
    {
        "_id":     ObjectId   (assigned on insert, never changed)
        "title":   str
        "content": str
    }

    No indexes beyond the default unique index on `_id` are required:
    every lookup is by primary key, and listing is a full scan in
    natural order.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId


@dataclass
class BlogPost:
    """
    A single blog post.

    `id` is None until the document has been inserted; afterwards it holds
    the ObjectId the server assigned.
    """

    title: str
    content: str
    id: Optional[ObjectId] = None

    def to_document(self) -> Dict[str, Any]:
        """Builds the document to store. `_id` is omitted so the driver assigns one."""
        doc: Dict[str, Any] = {"title": self.title, "content": self.content}
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "BlogPost":
        """
        Rebuilds a BlogPost from a stored document.

        Raises:
            KeyError: The document lacks `_id`, `title`, or `content`.
            TypeError: `title` or `content` is not a string.
        """
        title = doc["title"]
        content = doc["content"]
        if not isinstance(title, str) or not isinstance(content, str):
            raise TypeError(f"Malformed post document {doc.get('_id')!r}")
        return cls(id=doc["_id"], title=title, content=content)

    @property
    def hex_id(self) -> Optional[str]:
        return str(self.id) if self.id is not None else None


def parse_object_id(raw: str) -> ObjectId:
    """
    Converts a client-supplied identifier into an ObjectId.

    Only the 24-character hexadecimal form is accepted.

    Raises:
        bson.errors.InvalidId: `raw` is not a valid hex ObjectId.
    """
    if not isinstance(raw, str) or len(raw) != 24:
        raise InvalidId(f"{raw!r} is not a valid ObjectId")
    return ObjectId(raw)
