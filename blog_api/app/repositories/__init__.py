"""
Persistence collaborators.

Services depend on the ``PostRepository`` protocol only; the concrete
store is chosen when the application is built.
"""

from .post_repository import (  # noqa: F401
    InMemoryPostRepository,
    PostRepository,
    SQLitePostRepository,
    build_repository,
)
