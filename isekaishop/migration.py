"""Schema creation and seed data for the item shop database."""

from __future__ import annotations

import argparse
from typing import Sequence

from sqlalchemy.orm import Session

from .config import Config, get_config, load_config
from .database import Database, get_database
from .entities import Admin, Inventory, Item, Player, PlayerCoin, PurchaseHistory

_MIGRATED = (Player, Admin, Item, PlayerCoin, Inventory, PurchaseHistory)

SEED_ITEMS = (
    {
        "name": "Sword",
        "description": "A sword that can be used to fight enemies.",
        "price": 100,
        "picture": "https://images.example.com/items/sword.jpg",
    },
    {
        "name": "Shield",
        "description": "A shield that can be used to block enemy attacks.",
        "price": 50,
        "picture": "https://images.example.com/items/shield.jpg",
    },
    {
        "name": "Potion",
        "description": "A potion that can be used to heal wounds.",
        "price": 30,
        "picture": "https://images.example.com/items/potion.jpg",
    },
    {
        "name": "Bow",
        "description": "A bow that can be used to shoot enemies from afar.",
        "price": 80,
        "picture": "https://images.example.com/items/bow.jpg",
    },
    {
        "name": "Arrow",
        "description": "An arrow that can be used with a bow to shoot enemies from afar.",
        "price": 10,
        "picture": "https://images.example.com/items/arrow.jpg",
    },
)


def create_tables(session: Session) -> None:
    """Create every table of the shop within the session's transaction."""
    connection = session.connection()
    for entity in _MIGRATED:
        entity.__table__.create(bind=connection, checkfirst=False)


def seed_items(session: Session) -> list[Item]:
    """Add the starter items to the shop and return them."""
    items = [Item(**spec) for spec in SEED_ITEMS]
    session.add_all(items)
    session.flush()
    return items


def _open_database(argv: Sequence[str] | None, description: str) -> Database:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", help="path of the YAML configuration file")
    args = parser.parse_args(argv)
    conf: Config = get_config() if args.config is None else load_config(args.config)
    return get_database(conf.database)


def migrate_main(argv: Sequence[str] | None = None) -> int:
    """Create the database schema."""
    db = _open_database(argv, "Create the item shop tables.")
    print(db.engine)
    with db.session() as session, session.begin():
        create_tables(session)
    return 0


def seed_main(argv: Sequence[str] | None = None) -> int:
    """Insert the starter items."""
    db = _open_database(argv, "Add the starter items to the item shop.")
    with db.session() as session, session.begin():
        seed_items(session)
    return 0