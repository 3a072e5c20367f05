"""
Category model - display metadata for a listing category.
Listings reference categories by name; active counts are computed, not stored.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from aubazaar.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name})>"
