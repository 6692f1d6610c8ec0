"""Storage primitives for the category tree.

Categories are stored as plain parent-pointer rows. Ancestor chains are read
with a recursive CTE and children are fetched a level at a time, so nothing
about the tree shape is stored redundantly.
"""

from contextlib import contextmanager

from flask import current_app
from sqlalchemy import delete, func, literal, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import aliased, joinedload, selectinload

from catalog.errors import InternalError
from catalog.extensions import db
from catalog.models.book import Book
from catalog.models.category import Category


@contextmanager
def atomic():
    """Run the enclosed reads and writes as a single transaction.

    Commits on success and rolls back on any error. ``IntegrityError`` is
    re-raised as is so callers can translate constraint violations; any other
    storage failure surfaces as ``InternalError``.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Storage failure, transaction rolled back")
        raise InternalError() from exc
    except Exception:
        db.session.rollback()
        raise


def find_by_id(category_id: str, *, for_update: bool = False) -> Category | None:
    return db.session.get(Category, category_id, with_for_update=for_update or None)


def find_by_name(name: str) -> Category | None:
    return Category.query.filter_by(name=name).first()


def find_all() -> list[Category]:
    return (
        Category.query.options(
            joinedload(Category.parent), selectinload(Category.children)
        )
        .order_by(Category.created_at, Category.name)
        .all()
    )


def find_children_of(parent_ids: list[str]) -> list[Category]:
    """Direct children of any of ``parent_ids``, ordered by name."""
    if not parent_ids:
        return []
    return (
        Category.query.filter(Category.parent_id.in_(parent_ids))
        .order_by(Category.name)
        .all()
    )


def find_ancestor_chain(category_id: str) -> list[Category]:
    """Ancestors of ``category_id``, root first, excluding the category itself."""
    chain = (
        select(Category.id, Category.parent_id, literal(0).label("depth"))
        .where(Category.id == category_id)
        .cte("ancestor_chain", recursive=True)
    )
    parent = aliased(Category)
    chain = chain.union_all(
        select(parent.id, parent.parent_id, chain.c.depth + 1).join(
            chain, parent.id == chain.c.parent_id
        )
    )
    stmt = (
        select(Category)
        .join(chain, Category.id == chain.c.id)
        .where(chain.c.depth > 0)
        .order_by(chain.c.depth.desc())
    )
    return list(db.session.scalars(stmt))


def lock(category_ids: list[str]) -> None:
    """Take row locks on the given categories until the transaction ends.

    A no-op on backends without ``SELECT ... FOR UPDATE`` (SQLite).
    """
    if not category_ids:
        return
    db.session.execute(
        select(Category.id)
        .where(Category.id.in_(category_ids))
        .order_by(Category.id)
        .with_for_update()
    )


def insert(category: Category) -> Category:
    db.session.add(category)
    db.session.flush()
    return category


def update(category: Category) -> Category:
    db.session.add(category)
    db.session.flush()
    return category


def delete_subtree(category_ids: list[str]) -> tuple[int, int]:
    """Bulk-delete the given categories and every book they own.

    Returns ``(categories_deleted, books_deleted)``.
    """
    # Counted up front: rows removed by ON DELETE CASCADE are not in rowcount.
    category_count = db.session.scalar(
        select(func.count()).select_from(Category).where(Category.id.in_(category_ids))
    )
    books = db.session.execute(delete(Book).where(Book.category_id.in_(category_ids)))
    db.session.execute(delete(Category).where(Category.id.in_(category_ids)))
    return category_count, books.rowcount
