from catalog.extensions import db
from catalog.models.book import Book
from catalog.models.category import Category

# Category names are unique across the whole tree, not per parent.
DEFAULT_CATEGORIES = {
    "Fiction": {
        "Science Fiction": ["Space Opera", "Cyberpunk"],
        "Fantasy": ["Epic Fantasy", "Urban Fantasy"],
        "Mystery": ["Detective", "Thriller"],
    },
    "Non-Fiction": {
        "History": ["Ancient History", "Modern History"],
        "Science": ["Physics", "Biology"],
        "Biography": [],
    },
    "Children": {
        "Picture Books": [],
        "Young Adult": [],
    },
}

DEFAULT_BOOKS = [
    ("Dune", "Space Opera"),
    ("Neuromancer", "Cyberpunk"),
    ("The Lord of the Rings", "Epic Fantasy"),
    ("The Hound of the Baskervilles", "Detective"),
    ("SPQR", "Ancient History"),
    ("A Brief History of Time", "Physics"),
]


def _ensure_category(name: str, parent: Category | None, created: list) -> Category:
    category = Category.query.filter_by(name=name).first()
    if not category:
        category = Category(name=name, parent=parent)
        db.session.add(category)
        db.session.flush()
        created.append(category)
    return category


def seed_categories() -> list[Category]:
    """Seed the default category tree. Idempotent; skips existing names."""
    created = []
    for root_name, sections in DEFAULT_CATEGORIES.items():
        root = _ensure_category(root_name, None, created)
        for section_name, leaves in sections.items():
            section = _ensure_category(section_name, root, created)
            for leaf_name in leaves:
                _ensure_category(leaf_name, section, created)

    db.session.commit()
    return created


def seed_books() -> list[Book]:
    """Seed sample books into the default categories. Idempotent."""
    created = []
    for name, category_name in DEFAULT_BOOKS:
        category = Category.query.filter_by(name=category_name).first()
        if not category or Book.query.filter_by(name=name).first():
            continue
        book = Book(name=name, category=category)
        db.session.add(book)
        created.append(book)

    db.session.commit()
    return created


def seed_all() -> dict:
    """Seed all default data. Returns counts of created items."""
    categories = seed_categories()
    books = seed_books()
    return {
        "categories": len(categories),
        "books": len(books),
    }
