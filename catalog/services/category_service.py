from types import SimpleNamespace

from flask import current_app
from sqlalchemy.exc import IntegrityError

from catalog.errors import (
    CatalogError,
    CircularReference,
    DuplicateName,
    InternalError,
    NotFound,
    ParentNotFound,
    SelfParent,
)
from catalog.models.category import Category
from catalog.services import tree_repository as repo

# Marks an update field the caller did not supply; ``None`` is a real value.
UNSET = object()


def create_category(name: str, parent_id: str | None = None) -> Category:
    try:
        with repo.atomic():
            if repo.find_by_name(name) is not None:
                raise _duplicate(name)

            if parent_id is not None:
                # Held until commit so the parent cannot be deleted under us.
                parent = repo.find_by_id(parent_id, for_update=True)
                if parent is None:
                    raise ParentNotFound(f"Parent category {parent_id} not found")

            category = repo.insert(Category(name=name, parent_id=parent_id))
    except IntegrityError as exc:
        raise _constraint_error(name, parent_id) from exc

    current_app.logger.info(
        "Created category %s (%r) under %s", category.id, name, parent_id
    )
    return category


def get_category(category_id: str) -> Category:
    """Load a category with its children and its root-first ancestors."""
    category = repo.find_by_id(category_id)
    if category is None:
        raise NotFound(f"Category {category_id} not found")
    category.ancestors = repo.find_ancestor_chain(category.id)
    return category


def get_categories() -> list[Category]:
    return repo.find_all()


def get_category_tree() -> list[SimpleNamespace]:
    """Every root category with its children nested at all depths.

    Built in memory from a single read; siblings are ordered by name.
    """
    categories = repo.find_all()
    nodes = {c.id: SimpleNamespace(category=c, children=[]) for c in categories}
    roots = []
    for category in categories:
        node = nodes[category.id]
        if category.parent_id is None or category.parent_id not in nodes:
            roots.append(node)
        else:
            nodes[category.parent_id].children.append(node)

    for node in nodes.values():
        node.children.sort(key=lambda n: n.category.name)
    roots.sort(key=lambda n: n.category.name)
    return roots


def update_category(category_id: str, *, name=UNSET, parent_id=UNSET) -> Category:
    """Rename and/or move a category.

    Passing ``parent_id=None`` detaches the category and makes it a root.
    """
    try:
        with repo.atomic():
            category = repo.find_by_id(category_id, for_update=True)
            if category is None:
                raise NotFound(f"Category {category_id} not found")

            if name is not UNSET and name != category.name:
                existing = repo.find_by_name(name)
                if existing is not None and existing.id != category.id:
                    raise _duplicate(name)
                category.name = name

            if parent_id is not UNSET and parent_id != category.parent_id:
                _reparent(category, parent_id)

            repo.update(category)
    except IntegrityError as exc:
        raise _constraint_error(name, parent_id) from exc

    current_app.logger.info("Updated category %s", category_id)
    return category


def _reparent(category: Category, parent_id: str | None) -> None:
    if parent_id is None:
        category.parent = None
        return

    if parent_id == category.id:
        raise SelfParent()

    parent = repo.find_by_id(parent_id, for_update=True)
    if parent is None:
        raise ParentNotFound(f"Parent category {parent_id} not found")

    # Serialize against concurrent moves touching the same chain.
    chain = repo.find_ancestor_chain(parent.id)
    repo.lock([category.id, parent.id] + [c.id for c in chain])

    descendant_ids = {d.id for d in _collect_descendants(category.id)}
    if parent.id in descendant_ids:
        current_app.logger.warning(
            "Rejected move of category %s under its descendant %s",
            category.id,
            parent.id,
        )
        raise CircularReference()

    category.parent = parent
    current_app.logger.info("Moved category %s under %s", category.id, parent.id)


def delete_category(category_id: str) -> None:
    """Delete a category, its whole subtree and every book in that subtree."""
    try:
        with repo.atomic():
            category = repo.find_by_id(category_id, for_update=True)
            if category is None:
                raise NotFound(f"Category {category_id} not found")

            subtree_ids = [category.id]
            subtree_ids.extend(d.id for d in _collect_descendants(category.id))
            removed_categories, removed_books = repo.delete_subtree(subtree_ids)
    except IntegrityError as exc:
        current_app.logger.exception("Cascading delete of %s failed", category_id)
        raise InternalError("Failed to delete category") from exc

    current_app.logger.info(
        "Deleted category %s: %d categories, %d books removed",
        category_id,
        removed_categories,
        removed_books,
    )


def get_all_subcategories(category_id: str) -> list[Category]:
    if repo.find_by_id(category_id) is None:
        raise NotFound(f"Category {category_id} not found")
    return _collect_descendants(category_id)


def get_ancestors(category: Category) -> list[Category]:
    """Ancestors of ``category``, root first."""
    return repo.find_ancestor_chain(category.id)


def get_full_category_path(category_id: str) -> list[Category]:
    """Root-to-node chain, ending with the category itself."""
    category = repo.find_by_id(category_id)
    if category is None:
        raise NotFound(f"Category {category_id} not found")
    return get_ancestors(category) + [category]


def _collect_descendants(category_id: str) -> list[Category]:
    """Breadth-first expansion of the subtree below ``category_id``.

    One query per level; within a level rows come back ordered by name.
    """
    descendants = []
    seen = {category_id}
    frontier = [category_id]
    while frontier:
        level = [c for c in repo.find_children_of(frontier) if c.id not in seen]
        seen.update(c.id for c in level)
        descendants.extend(level)
        frontier = [c.id for c in level]
    return descendants


def _constraint_error(name, parent_id) -> CatalogError:
    """Name the constraint a rolled-back write tripped.

    A parent deleted between the existence check and the write fails the
    foreign key, not the unique name.
    """
    if parent_id not in (None, UNSET) and repo.find_by_id(parent_id) is None:
        return ParentNotFound(f"Parent category {parent_id} not found")
    if name is UNSET:
        return InternalError("Failed to update category")
    return _duplicate(name)


def _duplicate(name) -> DuplicateName:
    return DuplicateName(f"Category with name '{name}' already exists")
