from catalog.models.category import Category
from catalog.models.book import Book

__all__ = [
    "Category",
    "Book",
]
