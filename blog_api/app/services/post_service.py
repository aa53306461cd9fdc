"""
Business logic for blog posts.

``PostService`` validates nothing itself (pydantic does that at the
boundary); it turns validated payloads into documents, calls the
repository and turns documents back into wire models.
"""

import logging
from typing import List

from ..core.errors import PostNotFoundError
from ..repositories import PostRepository
from ..schemas.post import (
    PostCreate,
    PostRead,
    PostUpdate,
    post_from_wire,
    post_to_wire,
    update_from_wire,
)

logger = logging.getLogger(__name__)


class PostService:
    """Service for managing blog posts.

    The repository is injected at construction, so the same service
    runs against SQLite in production and an in-memory store in tests.
    """

    def __init__(self, repository: PostRepository) -> None:
        self.repository = repository

    async def list_posts(self) -> List[PostRead]:
        """Return every stored post.

        All documents are serialized before anything is returned, so a
        failure part way through never yields a partial list.
        """
        documents = await self.repository.find_all()
        return [post_to_wire(document) for document in documents]

    async def get_post(self, post_id: str) -> PostRead:
        """Return a single post.  Raises ``PostNotFoundError`` if absent."""
        document = await self.repository.find_by_id(post_id)
        if document is None:
            raise PostNotFoundError(post_id)
        return post_to_wire(document)

    async def create_post(self, data: PostCreate) -> PostRead:
        """Insert a new post and return it with its assigned id and timestamp."""
        document = await self.repository.insert(post_from_wire(data))
        logger.info("Created post %s '%s'", document["id"], document["title"])
        return post_to_wire(document)

    async def update_post(self, post_id: str, data: PostUpdate) -> None:
        """Apply the supplied fields to an existing post.

        The endpoint is a PUT but the semantics are partial: omitted
        fields are left untouched.  ``post_id`` always comes from the
        path.  Raises ``PostNotFoundError`` if the post does not exist
        and ``ValueError`` if there is nothing to update.
        """
        fields = update_from_wire(data)
        if not fields:
            raise ValueError("Request body must contain at least one of title, content, author")
        if await self.repository.find_by_id(post_id) is None:
            raise PostNotFoundError(post_id)
        await self.repository.update_by_id(post_id, fields)
        logger.info("Updated post %s (%s)", post_id, ", ".join(sorted(fields)))

    async def delete_post(self, post_id: str) -> None:
        """Delete a post.  Deleting an absent post is not an error."""
        await self.repository.delete_by_id(post_id)
        logger.info("Deleted post %s", post_id)
