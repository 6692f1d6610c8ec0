from sqlalchemy import String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.extensions import db
from catalog.models.base import TimestampMixin, UUIDPrimaryKeyMixin


class Book(UUIDPrimaryKeyMixin, TimestampMixin, db.Model):
    __tablename__ = "books"

    name: Mapped[str] = mapped_column(String(255), unique=True)
    category_id: Mapped[str] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"), index=True
    )

    category = relationship("Category", back_populates="books")

    def __repr__(self):
        return f"<Book {self.name}>"
