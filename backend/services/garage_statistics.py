"""
Per-garage service statistics.

Price aggregates come from a single database aggregate query. The category
breakdown is built here because it depends on tokenizing free-text names.
"""
import logging
from collections import Counter
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from domain.errors import NotFoundError
from domain.models import CategoryCount, GarageStatistics, NO_SERVICE_SENTINEL, utcnow
from repositories import GaragesRepository, ServicesRepository

logger = logging.getLogger(__name__)
garages_repo = GaragesRepository()
services_repo = ServicesRepository()


def _money(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return round(value, 2)


def _whole_days(delta: timedelta) -> int:
    """Whole days in delta, truncated toward zero."""
    return int(delta.total_seconds() / 86400)


def service_category(name: str) -> str:
    """First whitespace-separated word of a service name."""
    parts = name.split()
    return parts[0] if parts else ""


def categorize_service_names(names: Iterable[str]) -> List[CategoryCount]:
    """Group names by category, most common first (ties keep first-seen order)."""
    counts = Counter(service_category(name) for name in names)
    return [CategoryCount(category=c, count=n) for c, n in counts.most_common()]


def build_garage_statistics(
    session: Session, garage_id: str, now: Optional[datetime] = None
) -> GarageStatistics:
    """
    Compute the statistics report for one garage.

    Raises NotFoundError before running any aggregate if the garage does not
    exist. ``now`` defaults to the current UTC time and only affects
    ``days_since_creation``.
    """
    garage = garages_repo.get_garage(session, garage_id)
    if not garage:
        raise NotFoundError("Garage", garage_id)

    aggregates = services_repo.price_aggregates(session, garage_id)
    if aggregates.count > 0:
        most_expensive = services_repo.most_expensive_name(session, garage_id) or NO_SERVICE_SENTINEL
        categories = categorize_service_names(services_repo.names_for_garage(session, garage_id))
    else:
        most_expensive = NO_SERVICE_SENTINEL
        categories = []

    now = now or utcnow()
    logger.debug("statistics: garage=%s services=%s", garage_id, aggregates.count)
    return GarageStatistics(
        garage_id=garage.id,
        garage_name=garage.name,
        rating=garage.rating,
        total_services=aggregates.count,
        average_service_price=_money(aggregates.average),
        min_service_price=_money(aggregates.minimum),
        max_service_price=_money(aggregates.maximum),
        total_revenue_potential=_money(aggregates.total),
        most_expensive_service=most_expensive,
        service_categories=categories,
        created_at=garage.created_at,
        days_since_creation=_whole_days(now - garage.created_at),
    )
