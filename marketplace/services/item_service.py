"""
Item service - listing business rules, kept out of the route handlers.
Rules: at least one image, only the seller may edit or delete, only whitelisted fields
are updatable, favorites are a per-user toggle.
"""

import logging
import math

from pydantic import BaseModel

from marketplace.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from marketplace.db.models.item import Item
from marketplace.db.models.user import User
from marketplace.db.repositories.item_repository import InvalidSortError, ItemFilters, ItemRepository
from marketplace.schemas.item import (
    FavoriteToggleResponse,
    ItemCreate,
    ItemDetailResponse,
    ItemResponse,
    ItemUpdate,
    Pagination,
    SellerProfile,
    SellerSummary,
)

logger = logging.getLogger(__name__)

ITEM_NOT_FOUND = "Item not found"
IMAGES_REQUIRED = "At least one image is required"


def _item_to_response(item: Item, *, detailed: bool = False) -> ItemResponse:
    """Map model to API response; the detailed form carries the extended seller profile."""
    seller_schema: type[BaseModel] = SellerProfile if detailed else SellerSummary
    data = {
        "id": item.id,
        "title": item.title,
        "description": item.description,
        "price": item.price,
        "category": item.category,
        "condition": item.condition,
        "size": item.size,
        "brand": item.brand,
        "color": item.color,
        "location": item.location,
        "images": list(item.images or []),
        "status": item.status,
        "views": item.views,
        "seller": seller_schema.model_validate(item.seller),
        "favorites": item.favorite_ids,
        "created_at": item.created_at,
        "updated_at": item.updated_at,
    }
    if detailed:
        return ItemDetailResponse(**data)
    return ItemResponse(**data)


class ItemService:
    """Handles all item use cases. Raises AppError subclasses; handlers render them."""

    def __init__(self, item_repo: ItemRepository):
        self.item_repo = item_repo

    async def _get_or_404(self, item_id: int) -> Item:
        item = await self.item_repo.get_by_id(item_id)
        if item is None:
            raise NotFoundError(ITEM_NOT_FOUND)
        return item

    async def list_items(
        self,
        filters: ItemFilters,
        *,
        sort: str,
        page: int,
        limit: int,
    ) -> tuple[list[ItemResponse], Pagination]:
        try:
            items, total = await self.item_repo.search(
                filters, sort=sort, skip=(page - 1) * limit, limit=limit
            )
        except InvalidSortError as exc:
            raise BadRequestError(f"Unsupported sort field: {exc}") from exc
        pagination = Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
        return [_item_to_response(i) for i in items], pagination

    async def get_and_count_view(self, item_id: int) -> ItemDetailResponse:
        """Fetch one item (any status) and bump its view counter."""
        await self._get_or_404(item_id)
        await self.item_repo.increment_views(item_id)
        item = await self.item_repo.get_by_id(item_id)
        return _item_to_response(item, detailed=True)

    async def create(self, seller: User, data: ItemCreate) -> ItemResponse:
        if not data.images:
            raise BadRequestError(IMAGES_REQUIRED)
        item = Item(**data.model_dump(), seller_id=seller.id)
        item = await self.item_repo.add(item)
        logger.info("Item %s created by user %s", item.id, seller.id)
        item = await self.item_repo.get_by_id(item.id)
        return _item_to_response(item)

    async def update(self, item_id: int, user: User, data: ItemUpdate) -> ItemResponse:
        item = await self._get_or_404(item_id)
        if not item.is_owned_by(user.id):
            raise ForbiddenError("Not authorized to update this item")
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "images" in changes and not changes["images"]:
            raise BadRequestError(IMAGES_REQUIRED)
        for field, value in changes.items():
            setattr(item, field, value)
        await self.item_repo.save(item)
        logger.info("Item %s updated by user %s: %s", item_id, user.id, sorted(changes))
        item = await self.item_repo.get_by_id(item_id)
        return _item_to_response(item)

    async def delete(self, item_id: int, user: User) -> None:
        item = await self._get_or_404(item_id)
        if not item.is_owned_by(user.id):
            raise ForbiddenError("Not authorized to delete this item")
        await self.item_repo.delete(item)
        logger.info("Item %s deleted by user %s", item_id, user.id)

    async def toggle_favorite(self, item_id: int, user: User) -> FavoriteToggleResponse:
        await self._get_or_404(item_id)
        if await self.item_repo.is_favorited(item_id, user.id):
            await self.item_repo.remove_favorite(item_id, user.id)
            is_favorited = False
        else:
            await self.item_repo.add_favorite(item_id, user.id)
            is_favorited = True
        count = await self.item_repo.count_favorites(item_id)
        return FavoriteToggleResponse(is_favorited=is_favorited, favorites_count=count)

    async def list_by_seller(self, seller_id: int) -> list[ItemResponse]:
        items = await self.item_repo.list_active_by_seller(seller_id)
        return [_item_to_response(i) for i in items]
