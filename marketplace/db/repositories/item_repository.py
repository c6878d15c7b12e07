"""
Item repository - listing queries: filtered search, per-seller listing, view counter, favorites.
Seller is joined-loaded and favorites selectin-loaded by the model, so no N+1 on lists.
"""

from dataclasses import dataclass

from sqlalchemy import delete, func, insert, or_, select, update
from sqlalchemy.sql.elements import ColumnElement, UnaryExpression

from marketplace.db.models.item import Item, ItemCategory, ItemCondition, ItemStatus, item_favorites
from marketplace.db.repositories.base_repository import BaseRepository

# Public sort keys -> columns. camelCase aliases kept for clients of the old API.
SORTABLE_FIELDS = {
    "created_at": Item.created_at,
    "createdAt": Item.created_at,
    "updated_at": Item.updated_at,
    "updatedAt": Item.updated_at,
    "price": Item.price,
    "views": Item.views,
    "title": Item.title,
}


class InvalidSortError(ValueError):
    """Raised for a sort key that is not in SORTABLE_FIELDS."""


@dataclass
class ItemFilters:
    category: ItemCategory | None = None
    condition: ItemCondition | None = None
    min_price: float | None = None
    max_price: float | None = None
    search: str | None = None


def parse_sort(expression: str) -> list[UnaryExpression]:
    """Turn "-created_at,price" (comma or space separated) into ORDER BY clauses."""
    clauses = []
    for token in expression.replace(",", " ").split():
        descending = token.startswith("-")
        key = token.lstrip("+-")
        column = SORTABLE_FIELDS.get(key)
        if column is None:
            raise InvalidSortError(key)
        clauses.append(column.desc() if descending else column.asc())
    return clauses


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in the user's term matched literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _filter_conditions(filters: ItemFilters) -> list[ColumnElement[bool]]:
    conditions: list[ColumnElement[bool]] = [Item.status == ItemStatus.ACTIVE]
    if filters.category is not None:
        conditions.append(Item.category == filters.category)
    if filters.condition is not None:
        conditions.append(Item.condition == filters.condition)
    if filters.min_price is not None:
        conditions.append(Item.price >= filters.min_price)
    if filters.max_price is not None:
        conditions.append(Item.price <= filters.max_price)
    if filters.search:
        pattern = _like_pattern(filters.search.strip())
        conditions.append(
            or_(
                Item.title.ilike(pattern, escape="\\"),
                Item.description.ilike(pattern, escape="\\"),
                Item.brand.ilike(pattern, escape="\\"),
            )
        )
    return conditions


class ItemRepository(BaseRepository[Item]):

    def __init__(self, session):
        super().__init__(session, Item)

    async def search(
        self,
        filters: ItemFilters,
        *,
        sort: str = "-created_at",
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Item], int]:
        """Active items matching filters, one page of them plus the total match count."""
        conditions = _filter_conditions(filters)
        order_by = parse_sort(sort) + [Item.id.desc()]
        result = await self.session.execute(
            select(Item)
            .where(*conditions)
            .order_by(*order_by)
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        items = list(result.unique().scalars().all())
        total = await self.session.scalar(select(func.count(Item.id)).where(*conditions))
        return items, total or 0

    async def list_active_by_seller(self, seller_id: int) -> list[Item]:
        """All active items of one seller, newest first."""
        result = await self.session.execute(
            select(Item)
            .where(Item.seller_id == seller_id, Item.status == ItemStatus.ACTIVE)
            .order_by(Item.created_at.desc(), Item.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.unique().scalars().all())

    async def increment_views(self, item_id: int) -> None:
        """Atomic views = views + 1, so concurrent readers never lose a count."""
        await self.session.execute(
            update(Item)
            .where(Item.id == item_id)
            .values(views=Item.views + 1)
            .execution_options(synchronize_session=False)
        )

    async def is_favorited(self, item_id: int, user_id: int) -> bool:
        found = await self.session.scalar(
            select(item_favorites.c.item_id).where(
                item_favorites.c.item_id == item_id,
                item_favorites.c.user_id == user_id,
            )
        )
        return found is not None

    async def add_favorite(self, item_id: int, user_id: int) -> None:
        await self.session.execute(insert(item_favorites).values(item_id=item_id, user_id=user_id))

    async def remove_favorite(self, item_id: int, user_id: int) -> None:
        await self.session.execute(
            delete(item_favorites).where(
                item_favorites.c.item_id == item_id,
                item_favorites.c.user_id == user_id,
            )
        )

    async def count_favorites(self, item_id: int) -> int:
        count = await self.session.scalar(
            select(func.count()).select_from(item_favorites).where(item_favorites.c.item_id == item_id)
        )
        return count or 0
