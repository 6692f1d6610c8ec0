from flask import current_app
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from catalog.errors import (
    CatalogError,
    CategoryNotFound,
    DuplicateName,
    InternalError,
    NotFound,
)
from catalog.extensions import db
from catalog.models.book import Book
from catalog.models.category import Category
from catalog.services import category_service
from catalog.services import tree_repository as repo
from catalog.services.category_service import UNSET

BREADCRUMB_SEPARATOR = " > "


def create_book(name: str, category_id: str) -> Book:
    try:
        with repo.atomic():
            if _find_by_name(name) is not None:
                raise _duplicate(name)
            category = _resolve_category(category_id)
            repo.lock([category.id])

            book = Book(name=name, category_id=category.id)
            db.session.add(book)
            db.session.flush()
    except IntegrityError as exc:
        raise _constraint_error(name, category_id) from exc

    current_app.logger.info("Created book %s (%r) in %s", book.id, name, category_id)
    return book


def get_book(book_id: str) -> Book:
    book = db.session.get(Book, book_id)
    if book is None:
        raise NotFound(f"Book {book_id} not found")
    return book


def get_books(page: int = 1, limit: int | None = None) -> Pagination:
    """All books ordered by name, one page at a time."""
    return _paginate(_books().order_by(Book.name), page, limit)


def update_book(book_id: str, *, name=UNSET, category_id=UNSET) -> Book:
    try:
        with repo.atomic():
            book = get_book(book_id)

            if name is not UNSET and name != book.name:
                if _find_by_name(name) is not None:
                    raise _duplicate(name)
                book.name = name

            if category_id is not UNSET and category_id != book.category_id:
                category = _resolve_category(category_id)
                repo.lock([category.id])
                book.category = category

            db.session.flush()
    except IntegrityError as exc:
        raise _constraint_error(name, category_id) from exc

    current_app.logger.info("Updated book %s", book_id)
    return book


def delete_book(book_id: str) -> None:
    with repo.atomic():
        book = get_book(book_id)
        db.session.delete(book)
    current_app.logger.info("Deleted book %s", book_id)


def get_books_by_category(category_id: str) -> list[Book]:
    """Books filed under ``category_id`` or anywhere beneath it."""
    category_ids = _closure_ids(category_id)
    return (
        Book.query.options(joinedload(Book.category))
        .filter(Book.category_id.in_(category_ids))
        .order_by(Book.name)
        .all()
    )


def get_books_by_category_page(
    category_id: str, page: int = 1, limit: int | None = None
) -> Pagination:
    category_ids = _closure_ids(category_id)
    stmt = _books().where(Book.category_id.in_(category_ids)).order_by(Book.name)
    return _paginate(stmt, page, limit)


def get_breadcrumb(book: Book) -> str:
    """Root-first category names of ``book``, e.g. ``Fiction > Science Fiction``."""
    path = category_service.get_full_category_path(book.category_id)
    return BREADCRUMB_SEPARATOR.join(c.name for c in path)


def _books():
    return select(Book).options(joinedload(Book.category))


def _find_by_name(name: str) -> Book | None:
    return Book.query.filter_by(name=name).first()


def _resolve_category(category_id: str) -> Category:
    try:
        return category_service.get_category(category_id)
    except NotFound as exc:
        raise CategoryNotFound(f"Category {category_id} not found") from exc


def _closure_ids(category_id: str) -> list[str]:
    try:
        descendants = category_service.get_all_subcategories(category_id)
    except NotFound as exc:
        raise CategoryNotFound(f"Category {category_id} not found") from exc
    return [category_id] + [c.id for c in descendants]


def _paginate(stmt, page: int, limit: int | None) -> Pagination:
    if limit is None:
        limit = current_app.config["DEFAULT_PAGE_LIMIT"]
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    return db.paginate(
        stmt,
        page=page,
        per_page=limit,
        max_per_page=current_app.config["MAX_PAGE_LIMIT"],
        error_out=False,
    )


def _constraint_error(name, category_id) -> CatalogError:
    """Name the constraint a rolled-back write tripped.

    A category deleted between the lookup and the write fails the foreign
    key, not the unique name.
    """
    if category_id is not UNSET and repo.find_by_id(category_id) is None:
        return CategoryNotFound(f"Category {category_id} not found")
    if name is UNSET:
        return InternalError("Failed to update book")
    return _duplicate(name)


def _duplicate(name) -> DuplicateName:
    return DuplicateName(f"Book with name '{name}' already exists")
