import pytest

from catalog.models import Book, Category
from catalog.services import book_service
from catalog.services.seed_service import (
    DEFAULT_BOOKS,
    DEFAULT_CATEGORIES,
    seed_all,
    seed_books,
    seed_categories,
)


def _expected_category_count():
    return sum(
        1 + len(sections) + sum(len(leaves) for leaves in sections.values())
        for sections in DEFAULT_CATEGORIES.values()
    )


class TestSeedCategories:
    def test_creates_all_top_level_categories(self, session):
        seed_categories()
        top_level = Category.query.filter_by(parent_id=None).all()
        assert {c.name for c in top_level} == set(DEFAULT_CATEGORIES.keys())

    @pytest.mark.parametrize(
        "root_name,sections",
        list(DEFAULT_CATEGORIES.items()),
        ids=list(DEFAULT_CATEGORIES.keys()),
    )
    def test_sections_per_root(self, session, root_name, sections):
        seed_categories()
        root = Category.query.filter_by(name=root_name).first()
        actual = {c.name for c in Category.query.filter_by(parent_id=root.id).all()}
        assert actual == set(sections)

    def test_idempotent(self, session):
        first = seed_categories()
        second = seed_categories()
        assert len(first) == _expected_category_count()
        assert len(second) == 0
        assert Category.query.count() == _expected_category_count()


class TestSeedBooks:
    def test_books_land_in_leaf_categories(self, session):
        seed_categories()
        seed_books()
        dune = Book.query.filter_by(name="Dune").first()
        assert book_service.get_breadcrumb(dune) == "Fiction > Science Fiction > Space Opera"

    def test_skips_without_categories(self, session):
        assert seed_books() == []

    def test_idempotent(self, session):
        seed_categories()
        assert len(seed_books()) == len(DEFAULT_BOOKS)
        assert seed_books() == []


class TestSeedAll:
    def test_seeds_everything(self, session):
        result = seed_all()
        assert result == {
            "categories": _expected_category_count(),
            "books": len(DEFAULT_BOOKS),
        }

    def test_cli_command(self, runner, session):
        result = runner.invoke(args=["seed"])
        assert result.exit_code == 0
        assert f"Seeded {_expected_category_count()} categories" in result.output
        assert Book.query.count() == len(DEFAULT_BOOKS)
