"""Database entities of the item shop."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from . import models

# SQLite only auto-increments INTEGER primary keys.
_ID = BigInteger().with_variant(Integer(), "sqlite")


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base for all entities."""


class Admin(Base):
    __tablename__ = "admins"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    items: Mapped[List["Item"]] = relationship(back_populates="admin")
    email: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    avatar: Mapped[str] = mapped_column(String(256), nullable=False, default="", server_default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    admin_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("admins.id", onupdate="CASCADE", ondelete="SET NULL"), nullable=True
    )
    admin: Mapped[Optional[Admin]] = relationship(back_populates="items")
    name: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(String(128), nullable=False)
    picture: Mapped[str] = mapped_column(String(256), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_archive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    def to_item_model(self) -> models.Item:
        """Return the public view of this item."""
        return models.Item(
            id=self.id,
            name=self.name,
            description=self.description,
            picture=self.picture,
            price=self.price,
        )


class Player(Base):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    avatar: Mapped[str] = mapped_column(String(256), nullable=False, default="", server_default="")
    inventories: Mapped[List["Inventory"]] = relationship(
        back_populates="player", cascade="all, delete-orphan", passive_deletes=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now
    )


class Inventory(Base):
    __tablename__ = "inventories"

    id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("players.id", onupdate="CASCADE", ondelete="CASCADE"), nullable=False
    )
    player: Mapped[Player] = relationship(back_populates="inventories")
    item_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


class PlayerCoin(Base):
    __tablename__ = "player_coins"

    id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)


class PurchaseHistory(Base):
    __tablename__ = "purchase_histories"

    id: Mapped[int] = mapped_column(_ID, primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    item_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    item_name: Mapped[str] = mapped_column(String(64), nullable=False)
    item_description: Mapped[str] = mapped_column(String(128), nullable=False)
    item_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    item_picture: Mapped[str] = mapped_column(String(128), nullable=False)
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_buying: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_now)