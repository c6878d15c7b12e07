# Repository pattern: all SQL lives here, handlers and services stay query-free

from marketplace.db.repositories.item_repository import ItemRepository
from marketplace.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "ItemRepository"]
