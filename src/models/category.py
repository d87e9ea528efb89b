"""Category model (legacy, kept while clients migrate to tags)."""
from sqlalchemy import Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, CreatedAtMixin, UUIDv7Mixin


class Category(Base, UUIDv7Mixin, CreatedAtMixin):
    """Category model - user-scoped names offered to clients that predate tags."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_categories_user_id_name"),
    )

    user_id: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
