from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest

from domain.errors import NotFoundError
from domain.models import CategoryCount, Garage, Service
from repositories import GaragesRepository, ServicesRepository
from services import garage_statistics
from services.garage_statistics import (
    build_garage_statistics,
    categorize_service_names,
    service_category,
)

garages_repo = GaragesRepository()
services_repo = ServicesRepository()
CREATED = datetime(2025, 1, 1, 9, 0, 0)


def _garage(session, gid: str = "g1") -> Garage:
    return garages_repo.create_garage(
        session,
        Garage(id=gid, name="Speedy Motors", latitude=41.0, longitude=-87.0, rating=4.25, created_at=CREATED),
    )


def _add_services(session, garage_id: str, items):
    for i, (name, price) in enumerate(items):
        services_repo.create_service(
            session,
            Service(
                id=f"{garage_id}-s{i}",
                garage_id=garage_id,
                name=name,
                price=price,
                created_at=CREATED + timedelta(minutes=i),
            ),
        )


def test_service_category_uses_first_word():
    assert service_category("Oil Change") == "Oil"
    assert service_category("  Tyre   rotation ") == "Tyre"
    assert service_category("Diagnostics") == "Diagnostics"
    assert service_category("") == ""


def test_categorize_orders_by_count_desc():
    names = ["Oil Change", "Oil Filter", "Brake Pad"]
    assert categorize_service_names(names) == [
        CategoryCount(category="Oil", count=2),
        CategoryCount(category="Brake", count=1),
    ]


def test_categorize_ties_keep_first_seen_order():
    names = ["Wash Basic", "Tyre Swap", "Wash Deluxe", "Tyre Repair", "Glass Fix"]
    assert [(c.category, c.count) for c in categorize_service_names(names)] == [
        ("Wash", 2),
        ("Tyre", 2),
        ("Glass", 1),
    ]


def test_statistics_over_services(session):
    _garage(session)
    _add_services(session, "g1", [("Oil Change", 40.0), ("Oil Filter", 15.5), ("Brake Pad", 120.25)])

    stats = build_garage_statistics(session, "g1", now=CREATED + timedelta(days=10, hours=5))

    assert stats.garage_id == "g1"
    assert stats.garage_name == "Speedy Motors"
    assert stats.rating == 4.25
    assert stats.total_services == 3
    assert stats.average_service_price == 58.58
    assert stats.min_service_price == 15.5
    assert stats.max_service_price == 120.25
    assert stats.total_revenue_potential == 175.75
    assert stats.most_expensive_service == "Brake Pad"
    assert [(c.category, c.count) for c in stats.service_categories] == [("Oil", 2), ("Brake", 1)]
    assert stats.created_at == CREATED
    assert stats.days_since_creation == 10


def test_statistics_only_counts_own_services(session):
    _garage(session, "g1")
    _garage(session, "g2")
    _add_services(session, "g1", [("Oil Change", 30.0)])
    _add_services(session, "g2", [("Brake Pad", 99.0), ("Brake Disc", 150.0)])

    stats = build_garage_statistics(session, "g1")

    assert stats.total_services == 1
    assert stats.max_service_price == 30.0
    assert [c.category for c in stats.service_categories] == ["Oil"]


def test_statistics_with_no_services(session):
    _garage(session)

    stats = build_garage_statistics(session, "g1", now=CREATED)

    assert stats.total_services == 0
    assert stats.average_service_price == 0
    assert stats.min_service_price == 0
    assert stats.max_service_price == 0
    assert stats.total_revenue_potential == 0
    assert stats.most_expensive_service == "N/A"
    assert stats.service_categories == []
    assert stats.days_since_creation == 0


def test_days_since_creation_is_recomputed(session):
    _garage(session)

    first = build_garage_statistics(session, "g1", now=CREATED + timedelta(days=1))
    later = build_garage_statistics(session, "g1", now=CREATED + timedelta(days=30, hours=23))

    assert first.days_since_creation == 1
    assert later.days_since_creation == 30


def test_unknown_garage_raises_without_aggregating(session, monkeypatch):
    aggregates = MagicMock()
    monkeypatch.setattr(garage_statistics.services_repo, "price_aggregates", aggregates)

    with pytest.raises(NotFoundError) as exc_info:
        build_garage_statistics(session, "missing")

    assert str(exc_info.value) == "Garage with ID missing not found"
    aggregates.assert_not_called()


def test_days_since_creation_truncates_toward_zero(session):
    _garage(session)

    stats = build_garage_statistics(session, "g1", now=CREATED - timedelta(hours=3))

    assert stats.days_since_creation == 0
