import pytest

from catalog import create_app
from catalog.extensions import db as _db
from catalog.models.book import Book
from catalog.models.category import Category


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.rollback()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def session(db):
    yield db.session


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def make_category(session):
    """Factory for categories stored directly, bypassing the service layer."""

    def _make(name, parent=None):
        category = Category(name=name, parent_id=parent.id if parent else None)
        session.add(category)
        session.commit()
        return category

    return _make


@pytest.fixture
def make_book(session):
    def _make(name, category):
        book = Book(name=name, category_id=category.id)
        session.add(book)
        session.commit()
        return book

    return _make


@pytest.fixture
def chain(make_category):
    """Root > Mid > Leaf."""
    root = make_category("Root")
    mid = make_category("Mid", parent=root)
    leaf = make_category("Leaf", parent=mid)
    return root, mid, leaf
