"""
Garages API routes.

Plain CRUD plus the nearby search, top-rated listing and per-garage
statistics.
"""
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query, Response
from pydantic import BaseModel, Field

from db import SessionLocal
from domain.errors import InvalidSearchError, NotFoundError
from domain.models import (
    DEFAULT_SEARCH_RADIUS_KM,
    DEFAULT_TOP_RATED_COUNT,
    Garage,
    GarageStatistics,
    GarageWithDistance,
    SearchQuery,
)
from repositories import GaragesRepository
from services.garage_search import search_nearby_garages, top_rated_garages
from services.garage_statistics import build_garage_statistics

router = APIRouter()
garages_repo = GaragesRepository()
logger = logging.getLogger(__name__)


class GarageCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(default="", max_length=500)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    rating: float = Field(default=0, ge=0, le=5)


class GarageUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    address: Optional[str] = Field(default=None, max_length=500)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    rating: Optional[float] = Field(default=None, ge=0, le=5)


class GarageResponse(BaseModel):
    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    rating: float
    created_at: datetime
    updated_at: Optional[datetime] = None


class GarageWithDistanceResponse(GarageResponse):
    distance_km: float
    service_count: int


class CategoryCountResponse(BaseModel):
    category: str
    count: int


class GarageStatisticsResponse(BaseModel):
    garage_id: str
    garage_name: str
    rating: float
    total_services: int
    average_service_price: float
    min_service_price: float
    max_service_price: float
    total_revenue_potential: float
    most_expensive_service: str
    service_categories: List[CategoryCountResponse]
    created_at: datetime
    days_since_creation: int


def garage_to_response(garage: Garage) -> GarageResponse:
    """Convert domain Garage to API response."""
    return GarageResponse(
        id=garage.id,
        name=garage.name,
        address=garage.address,
        latitude=garage.latitude,
        longitude=garage.longitude,
        rating=garage.rating,
        created_at=garage.created_at,
        updated_at=garage.updated_at,
    )


def search_result_to_response(result: GarageWithDistance) -> GarageWithDistanceResponse:
    return GarageWithDistanceResponse(
        **garage_to_response(result.garage).model_dump(),
        distance_km=result.distance_km,
        service_count=result.service_count,
    )


def statistics_to_response(stats: GarageStatistics) -> GarageStatisticsResponse:
    return GarageStatisticsResponse(
        garage_id=stats.garage_id,
        garage_name=stats.garage_name,
        rating=stats.rating,
        total_services=stats.total_services,
        average_service_price=stats.average_service_price,
        min_service_price=stats.min_service_price,
        max_service_price=stats.max_service_price,
        total_revenue_potential=stats.total_revenue_potential,
        most_expensive_service=stats.most_expensive_service,
        service_categories=[
            CategoryCountResponse(category=c.category, count=c.count)
            for c in stats.service_categories
        ],
        created_at=stats.created_at,
        days_since_creation=stats.days_since_creation,
    )


def _not_found(garage_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Garage with ID {garage_id} not found")


@router.get("", response_model=List[GarageResponse])
async def list_garages():
    """List all garages."""
    logger.info("Fetching all garages")
    with SessionLocal() as session:
        return [garage_to_response(g) for g in garages_repo.list_garages(session)]


@router.get("/search", response_model=List[GarageWithDistanceResponse])
async def search_garages(
    latitude: float = Query(...),
    longitude: float = Query(...),
    radius_km: float = Query(DEFAULT_SEARCH_RADIUS_KM),
    min_rating: Optional[float] = Query(None),
):
    """Garages within radius_km of the given point, nearest first."""
    query = SearchQuery(
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        min_rating=min_rating,
    )
    logger.info(
        "Searching garages near (%s, %s) within %s km", latitude, longitude, radius_km
    )
    try:
        with SessionLocal() as session:
            results = search_nearby_garages(session, query)
    except InvalidSearchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [search_result_to_response(r) for r in results]


@router.get("/top-rated", response_model=List[GarageResponse])
async def list_top_rated(count: int = Query(DEFAULT_TOP_RATED_COUNT)):
    """Highest rated garages, newest first among equal ratings."""
    logger.info("Fetching top %s rated garages", count)
    try:
        with SessionLocal() as session:
            garages = top_rated_garages(session, count)
    except InvalidSearchError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return [garage_to_response(g) for g in garages]


@router.get("/{garage_id}", response_model=GarageResponse)
async def get_garage(garage_id: str):
    """Get a garage by ID."""
    logger.info("Fetching garage with ID: %s", garage_id)
    with SessionLocal() as session:
        garage = garages_repo.get_garage(session, garage_id)
    if not garage:
        raise _not_found(garage_id)
    return garage_to_response(garage)


@router.get("/{garage_id}/statistics", response_model=GarageStatisticsResponse)
async def get_garage_statistics(garage_id: str):
    """Service price statistics and category breakdown for a garage."""
    logger.info("Computing statistics for garage with ID: %s", garage_id)
    try:
        with SessionLocal() as session:
            stats = build_garage_statistics(session, garage_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return statistics_to_response(stats)


@router.post("", response_model=GarageResponse, status_code=201)
async def create_garage(payload: GarageCreate):
    """Create a new garage."""
    logger.info("Creating new garage: %s", payload.name)
    garage = Garage(id=Garage.generate_id(), **payload.model_dump())
    with SessionLocal() as session:
        garage = garages_repo.create_garage(session, garage)
    return garage_to_response(garage)


@router.put("/{garage_id}", response_model=GarageResponse)
async def update_garage(garage_id: str, payload: GarageUpdate):
    """Update the supplied fields of an existing garage."""
    logger.info("Updating garage with ID: %s", garage_id)
    with SessionLocal() as session:
        garage = garages_repo.update_garage(
            session, garage_id, payload.model_dump(exclude_none=True)
        )
    if not garage:
        raise _not_found(garage_id)
    return garage_to_response(garage)


@router.delete("/{garage_id}", status_code=204)
async def delete_garage(garage_id: str):
    """Delete a garage and its services."""
    logger.info("Deleting garage with ID: %s", garage_id)
    with SessionLocal() as session:
        deleted = garages_repo.delete_garage(session, garage_id)
    if not deleted:
        raise _not_found(garage_id)
    return Response(status_code=204)
