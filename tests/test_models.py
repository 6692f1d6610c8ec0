import uuid
from types import SimpleNamespace

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from catalog.models import Book, Category


def _make_category(session, name="Fiction", parent=None):
    cat = Category(name=name, parent_id=parent.id if parent else None)
    session.add(cat)
    session.flush()
    return cat


def _make_book(session, name="Dune", category=None):
    book = Book(name=name, category_id=category.id if category else None)
    session.add(book)
    session.flush()
    return book


class TestCategoryModel:
    def test_top_level_category(self, session):
        cat = _make_category(session, "Fiction")
        assert cat.is_top_level is True
        assert cat.parent_id is None
        assert repr(cat) == "<Category Fiction>"

    def test_generates_uuid_and_timestamps(self, session):
        cat = _make_category(session)
        assert uuid.UUID(cat.id).version == 4
        assert cat.created_at is not None
        assert cat.updated_at is not None

    def test_subcategory(self, session):
        parent = _make_category(session, "Fiction")
        child = _make_category(session, "Science Fiction", parent=parent)
        assert child.is_top_level is False
        assert child.parent.name == "Fiction"
        assert [c.name for c in parent.children] == ["Science Fiction"]

    def test_children_ordered_by_name(self, session):
        parent = _make_category(session, "Fiction")
        _make_category(session, "Mystery", parent=parent)
        _make_category(session, "Fantasy", parent=parent)
        session.expire(parent)
        assert [c.name for c in parent.children] == ["Fantasy", "Mystery"]

    def test_name_unique_across_parents(self, session):
        p1 = _make_category(session, "Fiction")
        p2 = _make_category(session, "Non-Fiction")
        _make_category(session, "Classics", parent=p1)
        with pytest.raises(IntegrityError):
            _make_category(session, "Classics", parent=p2)

    def test_parent_must_exist(self, session):
        missing = SimpleNamespace(id=str(uuid.uuid4()))
        with pytest.raises(IntegrityError):
            _make_category(session, "Orphan", parent=missing)

    def test_database_cascades_to_children_and_books(self, session):
        parent = _make_category(session, "Fiction")
        child = _make_category(session, "Science Fiction", parent=parent)
        _make_book(session, "Dune", child)

        session.execute(delete(Category).where(Category.id == parent.id))
        assert session.scalar(select(func.count()).select_from(Category)) == 0
        assert session.scalar(select(func.count()).select_from(Book)) == 0

    def test_ancestors_default_empty(self, session):
        assert tuple(_make_category(session).ancestors) == ()


class TestBookModel:
    def test_create_book(self, session):
        cat = _make_category(session)
        book = _make_book(session, "Dune", cat)
        assert uuid.UUID(book.id)
        assert book.category.name == "Fiction"
        assert repr(book) == "<Book Dune>"
        assert [b.name for b in cat.books] == ["Dune"]

    def test_category_required(self, session):
        with pytest.raises(IntegrityError):
            _make_book(session, "Orphan", None)

    def test_name_unique(self, session):
        cat = _make_category(session)
        _make_book(session, "Dune", cat)
        with pytest.raises(IntegrityError):
            _make_book(session, "Dune", cat)
