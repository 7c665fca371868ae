"""
Auto-parts shops API routes.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field

from db import SessionLocal
from domain.models import AutoPartsShop
from repositories import AutoPartsShopsRepository

router = APIRouter()
shops_repo = AutoPartsShopsRepository()
logger = logging.getLogger(__name__)


class AutoPartsShopCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(default="", max_length=500)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    rating: float = Field(default=0, ge=0, le=5)


class AutoPartsShopUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    address: Optional[str] = Field(default=None, max_length=500)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class AutoPartsShopResponse(BaseModel):
    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    rating: float
    created_at: datetime
    updated_at: Optional[datetime] = None


def shop_to_response(shop: AutoPartsShop) -> AutoPartsShopResponse:
    return AutoPartsShopResponse(
        id=shop.id,
        name=shop.name,
        address=shop.address,
        latitude=shop.latitude,
        longitude=shop.longitude,
        rating=shop.rating,
        created_at=shop.created_at,
        updated_at=shop.updated_at,
    )


def _not_found(shop_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Auto parts shop with ID {shop_id} not found")


@router.get("", response_model=List[AutoPartsShopResponse])
async def list_shops():
    logger.info("Fetching all auto parts shops")
    with SessionLocal() as session:
        return [shop_to_response(s) for s in shops_repo.list_shops(session)]


@router.get("/{shop_id}", response_model=AutoPartsShopResponse)
async def get_shop(shop_id: str):
    logger.info("Fetching auto parts shop with ID: %s", shop_id)
    with SessionLocal() as session:
        shop = shops_repo.get_shop(session, shop_id)
    if not shop:
        raise _not_found(shop_id)
    return shop_to_response(shop)


@router.post("", response_model=AutoPartsShopResponse, status_code=201)
async def create_shop(payload: AutoPartsShopCreate):
    logger.info("Creating new auto parts shop: %s", payload.name)
    shop = AutoPartsShop(id=AutoPartsShop.generate_id(), **payload.model_dump())
    with SessionLocal() as session:
        shop = shops_repo.create_shop(session, shop)
    return shop_to_response(shop)


@router.put("/{shop_id}", response_model=AutoPartsShopResponse)
async def update_shop(shop_id: str, payload: AutoPartsShopUpdate):
    logger.info("Updating auto parts shop with ID: %s", shop_id)
    with SessionLocal() as session:
        shop = shops_repo.update_shop(session, shop_id, payload.model_dump(exclude_none=True))
    if not shop:
        raise _not_found(shop_id)
    return shop_to_response(shop)


@router.delete("/{shop_id}", status_code=204)
async def delete_shop(shop_id: str):
    logger.info("Deleting auto parts shop with ID: %s", shop_id)
    with SessionLocal() as session:
        deleted = shops_repo.delete_shop(session, shop_id)
    if not deleted:
        raise _not_found(shop_id)
    return Response(status_code=204)
