"""
Item endpoints - browse, view, create, edit, delete and favorite listings.
Thin handlers: the service owns ownership checks and the update whitelist.
"""

from fastapi import APIRouter, Query, status

from marketplace.config import get_settings
from marketplace.core.dependencies import CurrentUser
from marketplace.db.models.item import ItemCategory, ItemCondition
from marketplace.db.repositories.item_repository import ItemFilters, ItemRepository
from marketplace.db.session import DbSession
from marketplace.schemas.common import MessageResponse
from marketplace.schemas.item import (
    FavoriteToggleResponse,
    ItemCreate,
    ItemDetailEnvelope,
    ItemEnvelope,
    ItemListResponse,
    ItemUpdate,
    SellerItemsResponse,
)
from marketplace.services.item_service import ItemService

router = APIRouter()
settings = get_settings()

# Keeps skip = (page - 1) * limit well inside a 64-bit OFFSET
MAX_PAGE = 10_000


def _get_item_service(session: DbSession) -> ItemService:
    return ItemService(ItemRepository(session))


@router.get("", response_model=ItemListResponse)
async def list_items(
    session: DbSession,
    category: ItemCategory | None = None,
    condition: ItemCondition | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    search: str | None = Query(None, max_length=200),
    sort: str = "-created_at",
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
):
    """Active listings with optional filters, e.g. GET /items?category=Shoes&sort=price&page=2."""
    filters = ItemFilters(
        category=category,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
        search=search,
    )
    items, pagination = await _get_item_service(session).list_items(
        filters, sort=sort, page=page, limit=limit
    )
    return ItemListResponse(items=items, pagination=pagination)


@router.get("/user/{user_id}", response_model=SellerItemsResponse)
async def list_seller_items(session: DbSession, user_id: int):
    """A seller's active listings, newest first."""
    items = await _get_item_service(session).list_by_seller(user_id)
    return SellerItemsResponse(items=items, count=len(items))


@router.get("/{item_id}", response_model=ItemDetailEnvelope)
async def get_item(session: DbSession, item_id: int):
    """Single listing with the seller's profile. Counts as a view."""
    item = await _get_item_service(session).get_and_count_view(item_id)
    return ItemDetailEnvelope(item=item)


@router.post("", response_model=ItemEnvelope, status_code=status.HTTP_201_CREATED)
async def create_item(session: DbSession, data: ItemCreate, user: CurrentUser):
    item = await _get_item_service(session).create(user, data)
    return ItemEnvelope(item=item)


@router.put("/{item_id}", response_model=ItemEnvelope)
async def update_item(session: DbSession, item_id: int, data: ItemUpdate, user: CurrentUser):
    """Owner-only edit of whitelisted fields."""
    item = await _get_item_service(session).update(item_id, user, data)
    return ItemEnvelope(item=item)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_item(session: DbSession, item_id: int, user: CurrentUser):
    await _get_item_service(session).delete(item_id, user)
    return MessageResponse(message="Item deleted")


@router.post("/{item_id}/favorite", response_model=FavoriteToggleResponse)
async def toggle_favorite(session: DbSession, item_id: int, user: CurrentUser):
    """Add the caller to the item's favorites, or remove them if already there."""
    return await _get_item_service(session).toggle_favorite(item_id, user)
