"""
Nearby and top-rated garage lookups.

The rating filter and the per-garage service counts are evaluated by the
database. Distance filtering and ordering happen here, over the candidate set
the database already narrowed down.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from domain.errors import InvalidSearchError
from domain.models import DEFAULT_TOP_RATED_COUNT, Garage, GarageWithDistance, SearchQuery
from repositories import GaragesRepository, ServicesRepository
from services.geo import haversine_km

logger = logging.getLogger(__name__)
garages_repo = GaragesRepository()
services_repo = ServicesRepository()


def validate_search_query(query: SearchQuery) -> None:
    """Reject out-of-range coordinates, radius or rating threshold."""
    if not -90 <= query.latitude <= 90:
        raise InvalidSearchError(f"Latitude must be between -90 and 90, got {query.latitude}")
    if not -180 <= query.longitude <= 180:
        raise InvalidSearchError(f"Longitude must be between -180 and 180, got {query.longitude}")
    if not query.radius_km > 0:
        raise InvalidSearchError(f"Radius must be greater than 0, got {query.radius_km}")
    if query.min_rating is not None and not 0 <= query.min_rating <= 5:
        raise InvalidSearchError(f"Minimum rating must be between 0 and 5, got {query.min_rating}")


def search_nearby_garages(session: Session, query: SearchQuery) -> List[GarageWithDistance]:
    """
    Return garages within ``query.radius_km`` of the caller, nearest first.

    Distances are rounded to 2 decimals for output only; ordering and the
    radius check use the unrounded value. Equal distances are ordered by
    garage id.
    """
    validate_search_query(query)

    candidates = garages_repo.list_garages(session, min_rating=query.min_rating)
    service_counts = services_repo.count_by_garage(session)

    in_range = []
    for garage in candidates:
        distance = haversine_km(query.latitude, query.longitude, garage.latitude, garage.longitude)
        if distance <= query.radius_km:
            in_range.append((distance, garage))
    in_range.sort(key=lambda item: (item[0], item[1].id))

    logger.debug(
        "nearby search: candidates=%s in_range=%s radius_km=%s",
        len(candidates),
        len(in_range),
        query.radius_km,
    )
    return [
        GarageWithDistance(
            garage=garage,
            distance_km=round(distance, 2),
            service_count=service_counts.get(garage.id, 0),
        )
        for distance, garage in in_range
    ]


def top_rated_garages(session: Session, count: int = DEFAULT_TOP_RATED_COUNT) -> List[Garage]:
    """Highest rated garages first; equal ratings list the newest garage first."""
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise InvalidSearchError(f"Count must be a positive integer, got {count!r}")
    return garages_repo.top_rated(session, count)
