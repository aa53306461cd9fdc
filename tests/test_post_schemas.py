from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from blog_api.app.schemas.post import (
    Author,
    PostCreate,
    PostUpdate,
    author_from_wire,
    author_to_wire,
    post_from_wire,
    post_to_wire,
    update_from_wire,
)

DOCUMENT = {
    "id": "0" * 32,
    "title": "Hello",
    "content": "World",
    "author": {"firstName": "Ada", "lastName": "Lovelace"},
    "created": datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
}


class TestAuthorMapping:
    def test_to_wire(self):
        assert author_to_wire(Author(firstName="Ada", lastName="Lovelace")) == "Ada Lovelace"

    def test_from_wire(self):
        author = author_from_wire("Ada Lovelace")

        assert author.first_name == "Ada"
        assert author.last_name == "Lovelace"

    def test_from_wire_splits_on_first_space(self):
        author = author_from_wire("Ada King Lovelace")

        assert author.first_name == "Ada"
        assert author.last_name == "King Lovelace"

    @pytest.mark.parametrize("display", ["Ada", "", "   "])
    def test_from_wire_needs_both_names(self, display):
        with pytest.raises(ValueError):
            author_from_wire(display)

    @pytest.mark.parametrize("names", [{"firstName": " ", "lastName": "B"}, {"firstName": "A", "lastName": "  "}])
    def test_blank_names_are_invalid(self, names):
        with pytest.raises(ValidationError):
            Author.model_validate(names)

    def test_wire_mapping_is_reversible(self):
        author = Author.model_validate({"firstName": " Ada ", "lastName": " Lovelace"})

        assert author_from_wire(author_to_wire(author)) == author

    def test_partial_author_is_invalid(self):
        with pytest.raises(ValidationError):
            Author.model_validate({"firstName": "Ada"})


class TestPostMapping:
    def test_post_to_wire_projects_exact_fields(self):
        wire = post_to_wire({**DOCUMENT, "internal": "hidden"}).model_dump(mode="json")

        assert set(wire) == {"id", "title", "content", "author", "created"}
        assert wire["author"] == "Ada Lovelace"
        assert wire["created"].startswith("2024-05-01T12:30:00")

    def test_post_from_wire(self):
        data = PostCreate.model_validate(
            {"title": "t", "content": "c", "author": {"firstName": "A", "lastName": "B"}, "id": "x"}
        )

        assert post_from_wire(data) == {
            "title": "t",
            "content": "c",
            "author": {"firstName": "A", "lastName": "B"},
        }

    def test_create_requires_title(self):
        with pytest.raises(ValidationError):
            PostCreate.model_validate({"content": "x", "author": {"firstName": "A", "lastName": "B"}})

    def test_update_from_wire_keeps_only_supplied_fields(self):
        assert update_from_wire(PostUpdate.model_validate({"title": "t2"})) == {"title": "t2"}
        assert update_from_wire(PostUpdate.model_validate({"id": "x", "created": "y"})) == {}

    def test_update_author_must_be_complete(self):
        with pytest.raises(ValidationError):
            PostUpdate.model_validate({"author": {"lastName": "B"}})

    def test_update_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            PostUpdate.model_validate({"title": "   "})
