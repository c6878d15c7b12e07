from marketplace.db.models.item import Item, ItemCategory, ItemCondition, ItemStatus, item_favorites
from marketplace.db.models.user import User

__all__ = ["User", "Item", "ItemCategory", "ItemCondition", "ItemStatus", "item_favorites"]
