from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.extensions import db
from catalog.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class Category(UUIDPrimaryKeyMixin, TimestampMixin, db.Model):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), unique=True)
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), index=True
    )

    # Self-referencing relationship
    parent = relationship(
        "Category", remote_side="Category.id", back_populates="children"
    )
    children = relationship(
        "Category",
        back_populates="parent",
        order_by="Category.name",
        passive_deletes=True,
    )
    books = relationship(
        "Book",
        back_populates="category",
        order_by="Book.name",
        passive_deletes=True,
    )

    # Root-first chain, filled in by category_service.get_category
    ancestors = ()

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    def __repr__(self):
        return f"<Category {self.name}>"
