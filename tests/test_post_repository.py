import pytest

from blog_api.app.core.errors import PersistenceError
from blog_api.app.repositories import InMemoryPostRepository, SQLitePostRepository, build_repository

from .conftest import generate_post_data, seed_posts


@pytest.mark.asyncio
async def test_insert_assigns_id_and_created(empty_repository):
    data = generate_post_data()
    data["id"] = "client-id"

    document = await empty_repository.insert(data)

    assert document["id"] != "client-id"
    assert len(document["id"]) == 32
    assert document["created"] is not None
    assert await empty_repository.find_by_id(document["id"]) == document


@pytest.mark.asyncio
async def test_ids_are_unique(empty_repository):
    documents = await seed_posts(empty_repository, 20)

    assert len({document["id"] for document in documents}) == 20
    assert await empty_repository.count() == 20


@pytest.mark.asyncio
async def test_find_all_returns_posts_in_creation_order(empty_repository):
    documents = await seed_posts(empty_repository, 5)

    found = await empty_repository.find_all()

    assert [document["id"] for document in found] == [document["id"] for document in documents]


@pytest.mark.asyncio
async def test_update_only_touches_updatable_fields(empty_repository):
    document = await empty_repository.insert(generate_post_data())

    await empty_repository.update_by_id(
        document["id"], {"title": "new", "id": "other", "created": None}
    )

    updated = await empty_repository.find_by_id(document["id"])
    assert updated["title"] == "new"
    assert updated["id"] == document["id"]
    assert updated["created"] == document["created"]
    assert updated["content"] == document["content"]


@pytest.mark.asyncio
async def test_update_of_absent_post_is_a_no_op(empty_repository):
    await empty_repository.update_by_id("0" * 32, {"title": "new"})

    assert await empty_repository.count() == 0


@pytest.mark.asyncio
async def test_delete_is_idempotent(empty_repository):
    document = await empty_repository.insert(generate_post_data())

    await empty_repository.delete_by_id(document["id"])
    await empty_repository.delete_by_id(document["id"])

    assert await empty_repository.find_by_id(document["id"]) is None
    assert await empty_repository.count() == 0


@pytest.mark.asyncio
async def test_sqlite_failures_become_persistence_errors(tmp_path):
    # A directory cannot be opened as a database file.
    repository = SQLitePostRepository(str(tmp_path))

    with pytest.raises(PersistenceError):
        await repository.find_all()


def test_sqlite_init_failure_is_a_persistence_error(tmp_path):
    with pytest.raises(PersistenceError):
        SQLitePostRepository(str(tmp_path)).init()


def test_build_repository(tmp_path):
    assert isinstance(build_repository(":memory:"), InMemoryPostRepository)

    repository = build_repository(str(tmp_path / "posts.db"))
    assert isinstance(repository, SQLitePostRepository)
    assert repository.database_path == str(tmp_path / "posts.db")


@pytest.mark.asyncio
async def test_returned_documents_do_not_alias_the_store():
    repository = InMemoryPostRepository()
    data = generate_post_data()
    document = await repository.insert(data)

    data["author"]["firstName"] = "changed by caller"
    document["author"]["lastName"] = "changed by caller"
    (await repository.find_all())[0]["author"]["firstName"] = "changed by caller"
    (await repository.find_by_id(document["id"]))["title"] = "changed by caller"

    stored = await repository.find_by_id(document["id"])
    assert "changed by caller" not in stored["author"].values()
    assert stored["title"] != "changed by caller"


@pytest.mark.asyncio
async def test_updated_author_is_copied_into_the_store():
    repository = InMemoryPostRepository()
    document = await repository.insert(generate_post_data())
    author = {"firstName": "New", "lastName": "Name"}

    await repository.update_by_id(document["id"], {"author": author})
    author["firstName"] = "changed by caller"

    assert (await repository.find_by_id(document["id"]))["author"]["firstName"] == "New"
