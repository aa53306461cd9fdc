"""
Document stores for blog posts.

A repository owns id and timestamp assignment: ``insert`` discards any
caller-supplied ``id`` or ``created`` and sets fresh ones.  Updates
only ever touch ``title``, ``content`` and ``author``.  Concurrent
writes to the same post are last-writer-wins.

Two implementations are provided: ``SQLitePostRepository`` keeps one
row per post in an SQLite file, ``InMemoryPostRepository`` keeps posts
in a dict and is used by the test suite and for throwaway runs.
"""

import copy
import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from ..core.db import get_connection, get_database_path, init_db
from ..core.errors import PersistenceError

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "content", "author")


def new_post_id() -> str:
    """Return a fresh opaque post id (32 lowercase hex characters)."""
    return uuid.uuid4().hex


class PostRepository(Protocol):
    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]: ...

    async def find_all(self) -> List[Dict[str, Any]]: ...

    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]: ...

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> None: ...

    async def delete_by_id(self, post_id: str) -> None: ...

    async def count(self) -> int: ...


class InMemoryPostRepository:
    """Dict-backed post store.  Insertion order is creation order."""

    def __init__(self) -> None:
        self._posts: Dict[str, Dict[str, Any]] = {}

    def init(self) -> None:
        """Nothing to prepare; present so both stores share a startup hook."""

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        document = {key: copy.deepcopy(record[key]) for key in UPDATABLE_FIELDS}
        document["id"] = new_post_id()
        document["created"] = datetime.now(timezone.utc)
        self._posts[document["id"]] = document
        return copy.deepcopy(document)

    async def find_all(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(document) for document in self._posts.values()]

    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        document = self._posts.get(post_id)
        return copy.deepcopy(document) if document is not None else None

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> None:
        document = self._posts.get(post_id)
        if document is None:
            return
        for key in UPDATABLE_FIELDS:
            if key in fields:
                document[key] = copy.deepcopy(fields[key])

    async def delete_by_id(self, post_id: str) -> None:
        self._posts.pop(post_id, None)

    async def count(self) -> int:
        return len(self._posts)

    async def drop_all(self) -> None:
        self._posts.clear()


class SQLitePostRepository:
    """Post store backed by the ``posts`` table of an SQLite database.

    Every call opens its own connection, so the repository holds no
    state besides the database path and is safe to share between
    requests.  Any ``sqlite3.Error`` is re-raised as
    ``PersistenceError``.
    """

    def __init__(self, database_path: str) -> None:
        self.database_path = database_path

    def init(self) -> None:
        """Create the ``posts`` table if needed."""
        try:
            init_db(self.database_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not initialise {self.database_path}: {e}") from e
        logger.info("Post store ready at %s", self.database_path)

    def _execute(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        try:
            conn = get_connection(self.database_path)
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not open {self.database_path}: {e}") from e
        try:
            rows = conn.execute(sql, params).fetchall()
            conn.commit()
            return rows
        except sqlite3.Error as e:
            raise PersistenceError(str(e)) from e
        finally:
            conn.close()

    @staticmethod
    def _row_to_document(row: sqlite3.Row) -> Dict[str, Any]:
        return {
            "id": row["id"],
            "title": row["title"],
            "content": row["content"],
            "author": json.loads(row["author"]),
            "created": datetime.fromisoformat(row["created"]),
        }

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        document = {key: record[key] for key in UPDATABLE_FIELDS}
        document["id"] = new_post_id()
        document["created"] = datetime.now(timezone.utc)
        self._execute(
            "INSERT INTO posts (id, title, content, author, created) VALUES (?, ?, ?, ?, ?)",
            (
                document["id"],
                document["title"],
                document["content"],
                json.dumps(document["author"]),
                document["created"].isoformat(),
            ),
        )
        return document

    async def find_all(self) -> List[Dict[str, Any]]:
        rows = self._execute(
            "SELECT id, title, content, author, created FROM posts ORDER BY created, rowid"
        )
        return [self._row_to_document(row) for row in rows]

    async def find_by_id(self, post_id: str) -> Optional[Dict[str, Any]]:
        rows = self._execute(
            "SELECT id, title, content, author, created FROM posts WHERE id = ?",
            (post_id,),
        )
        return self._row_to_document(rows[0]) if rows else None

    async def update_by_id(self, post_id: str, fields: Dict[str, Any]) -> None:
        assignments = []
        values: list = []
        for key in UPDATABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if key == "author":
                value = json.dumps(value)
            assignments.append(f"{key} = ?")
            values.append(value)
        if not assignments:
            return
        values.append(post_id)
        self._execute(f"UPDATE posts SET {', '.join(assignments)} WHERE id = ?", tuple(values))

    async def delete_by_id(self, post_id: str) -> None:
        self._execute("DELETE FROM posts WHERE id = ?", (post_id,))

    async def count(self) -> int:
        rows = self._execute("SELECT COUNT(*) AS total FROM posts")
        return int(rows[0]["total"])

    async def drop_all(self) -> None:
        self._execute("DELETE FROM posts")


def build_repository(database_url: str):
    """Return the repository matching ``database_url``.

    ``:memory:`` selects ``InMemoryPostRepository``; anything else is
    treated as an SQLite file path.
    """
    if database_url == ":memory:":
        return InMemoryPostRepository()
    return SQLitePostRepository(get_database_path(database_url))
