"""
Pydantic models and wire mapping for blog posts.

``PostCreate`` and ``PostUpdate`` validate request bodies, ``PostRead``
is the only shape a post ever has on the way out.  A stored post is a
plain document::

    {"id": "...", "title": "...", "content": "...",
     "author": {"firstName": "...", "lastName": "..."},
     "created": datetime}

The author is a composite in storage and a single display string on
the wire.  ``author_to_wire`` and ``author_from_wire`` are the only
places that translate between the two.
"""

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, Field, StringConstraints, field_validator

# Surrounding whitespace is dropped before the emptiness check.
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Author(BaseModel):
    """Author of a post.  Both names are required together."""

    first_name: NonBlankStr = Field(..., alias="firstName", examples=["Ada"])
    last_name: NonBlankStr = Field(..., alias="lastName", examples=["Lovelace"])

    model_config = {
        "populate_by_name": True,
    }


def author_to_wire(author: Author) -> str:
    """Flatten an author to its ``"firstName lastName"`` display string."""
    return f"{author.first_name} {author.last_name}"


def author_from_wire(display: str) -> Author:
    """Split a display string back into an ``Author``.

    The split happens on the first space, so a multi-word first name
    does not survive the round trip.  Raises ``ValueError`` if the
    string does not contain both names.
    """
    first_name, _, last_name = display.strip().partition(" ")
    last_name = last_name.strip()
    if not first_name or not last_name:
        raise ValueError("author must contain both a first and a last name")
    return Author(firstName=first_name, lastName=last_name)


def _coerce_author(value: Any) -> Any:
    # Accept the display form as input too.
    if isinstance(value, str):
        return author_from_wire(value)
    return value


class PostCreate(BaseModel):
    """Schema for creating a post.  Unknown keys are ignored."""

    title: NonBlankStr = Field(..., examples=["Ten tips for better naps"])
    content: str = Field(..., examples=["Lorem ipsum dolor sit amet."])
    author: Author

    @field_validator("author", mode="before")
    @classmethod
    def author_from_display(cls, value: Any) -> Any:
        return _coerce_author(value)


class PostUpdate(BaseModel):
    """Schema for updating a post.

    All fields are optional; only provided fields will be updated.
    ``id`` and ``created`` are not part of this schema, so any such
    keys in the request body are dropped.
    """

    title: Optional[NonBlankStr] = None
    content: Optional[str] = None
    author: Optional[Author] = None

    @field_validator("author", mode="before")
    @classmethod
    def author_from_display(cls, value: Any) -> Any:
        return _coerce_author(value)


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: str = Field(..., examples=["3f1c8a0e9b7d4c2a8e6f5d4c3b2a1f0e"])
    title: str
    content: str
    author: str = Field(..., examples=["Ada Lovelace"])
    created: datetime


class PostList(BaseModel):
    """Wrapper returned by ``GET /posts``."""

    posts: List[PostRead]


def post_to_wire(document: Dict[str, Any]) -> PostRead:
    """Convert a stored post document into its wire representation."""
    return PostRead(
        id=document["id"],
        title=document["title"],
        content=document["content"],
        author=author_to_wire(Author.model_validate(document["author"])),
        created=document["created"],
    )


def post_from_wire(data: PostCreate) -> Dict[str, Any]:
    """Build the document to insert from a validated create payload.

    ``id`` and ``created`` are left to the persistence layer.
    """
    return {
        "title": data.title,
        "content": data.content,
        "author": data.author.model_dump(by_alias=True),
    }


def update_from_wire(data: PostUpdate) -> Dict[str, Any]:
    """Return only the fields supplied in an update payload."""
    fields: Dict[str, Any] = {}
    if data.title is not None:
        fields["title"] = data.title
    if data.content is not None:
        fields["content"] = data.content
    if data.author is not None:
        fields["author"] = data.author.model_dump(by_alias=True)
    return fields
