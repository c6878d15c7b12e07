"""Item request/response schemas - listing API contract."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, Field

from marketplace.db.models.item import ItemCategory, ItemCondition, ItemStatus
from marketplace.schemas.common import SuccessResponse


def _strip(value):
    return value.strip() if isinstance(value, str) else value


TrimmedStr = Annotated[str, BeforeValidator(_strip)]


def _drop_blank_urls(value):
    if not isinstance(value, list):
        return value
    return [_strip(url) for url in value if not (isinstance(url, str) and not url.strip())]


# Blank entries are dropped; an empty result is rejected by the service
ImageUrls = Annotated[list[str], BeforeValidator(_drop_blank_urls)]


class ItemCreate(BaseModel):
    """Fields a seller may set. Seller, status, views and favorites are never taken from the body."""

    title: TrimmedStr = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., ge=0)
    category: ItemCategory
    condition: ItemCondition
    size: str = Field("", max_length=50)
    brand: str = Field("", max_length=100)
    color: str = Field("", max_length=50)
    location: str = Field("", max_length=255)
    images: ImageUrls | None = None


class ItemUpdate(BaseModel):
    """Whitelist of mutable fields. Anything else in the body is ignored."""

    title: TrimmedStr | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=2000)
    price: float | None = Field(None, ge=0)
    category: ItemCategory | None = None
    condition: ItemCondition | None = None
    size: str | None = Field(None, max_length=50)
    brand: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=255)
    images: ImageUrls | None = None
    status: ItemStatus | None = None


class SellerSummary(BaseModel):
    id: int
    username: str
    avatar: str
    rating: float

    model_config = {"from_attributes": True}


class SellerProfile(SellerSummary):
    location: str
    created_at: datetime


class ItemResponse(BaseModel):
    id: int
    title: str
    description: str
    price: float
    category: ItemCategory
    condition: ItemCondition
    size: str
    brand: str
    color: str
    location: str
    images: list[str]
    status: ItemStatus
    views: int
    seller: SellerSummary
    favorites: list[int]
    created_at: datetime
    updated_at: datetime


class ItemDetailResponse(ItemResponse):
    seller: SellerProfile


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ItemEnvelope(SuccessResponse):
    item: ItemResponse


class ItemDetailEnvelope(SuccessResponse):
    item: ItemDetailResponse


class ItemListResponse(SuccessResponse):
    items: list[ItemResponse]
    pagination: Pagination


class SellerItemsResponse(SuccessResponse):
    items: list[ItemResponse]
    count: int


class FavoriteToggleResponse(SuccessResponse):
    is_favorited: bool
    favorites_count: int
