"""
Core domain models for the CarBuddy directory.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
import uuid


DEFAULT_SEARCH_RADIUS_KM = 10.0
DEFAULT_TOP_RATED_COUNT = 10
NO_SERVICE_SENTINEL = "N/A"


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the database columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class Garage:
    """A garage listed in the directory, searchable by location."""
    id: str
    name: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    rating: float = 0.0  # 0-5, two decimals
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())


@dataclass
class AutoPartsShop:
    """An auto-parts shop. Same shape as a garage but offers no services."""
    id: str
    name: str
    address: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    rating: float = 0.0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())


@dataclass
class Service:
    """A priced service offered by a garage."""
    id: str
    garage_id: str
    name: str
    description: str = ""
    price: float = 0.0
    created_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def generate_id() -> str:
        return str(uuid.uuid4())


@dataclass
class SearchQuery:
    """Caller location and radius for a nearby-garage search."""
    latitude: float
    longitude: float
    radius_km: float = DEFAULT_SEARCH_RADIUS_KM
    min_rating: Optional[float] = None


@dataclass
class GarageWithDistance:
    """
    A garage annotated for one search response.

    distance_km and service_count are derived per request and never stored.
    """
    garage: Garage
    distance_km: float
    service_count: int = 0


@dataclass
class CategoryCount:
    category: str
    count: int


@dataclass
class GarageStatistics:
    """Aggregates over a garage's services, computed fresh on every call."""
    garage_id: str
    garage_name: str
    rating: float
    total_services: int
    average_service_price: float
    min_service_price: float
    max_service_price: float
    total_revenue_potential: float
    most_expensive_service: str
    service_categories: List[CategoryCount] = field(default_factory=list)
    created_at: Optional[datetime] = None
    days_since_creation: int = 0
