"""
Service repository backed by SQLAlchemy.

Besides CRUD, exposes the aggregate queries the search and statistics
services push down to the database.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from domain.models import Service, utcnow
from repositories.models import GarageORM, ServiceORM

_UPDATABLE_FIELDS = ("name", "description", "price")
_TWO_DECIMAL_FIELDS = ("price",)


@dataclass
class PriceAggregates:
    """Raw COUNT/AVG/MIN/MAX/SUM over one garage's service prices."""
    count: int
    average: Optional[float]
    minimum: Optional[float]
    maximum: Optional[float]
    total: Optional[float]


def _service_from_orm(orm: ServiceORM) -> Service:
    return Service(
        id=orm.id,
        garage_id=orm.garage_id,
        name=orm.name,
        description=orm.description,
        price=float(orm.price),
        created_at=orm.created_at,
    )


class ServicesRepository:
    """CRUD operations for services."""

    def list_services(self, session: Session) -> List[Service]:
        services = session.query(ServiceORM).all()
        return [_service_from_orm(s) for s in services]

    def list_by_garage(self, session: Session, garage_id: str) -> List[Service]:
        services = (
            session.query(ServiceORM)
            .filter(ServiceORM.garage_id == garage_id)
            .order_by(ServiceORM.created_at.asc(), ServiceORM.id.asc())
            .all()
        )
        return [_service_from_orm(s) for s in services]

    def get_service(self, session: Session, service_id: str) -> Optional[Service]:
        orm = session.get(ServiceORM, service_id)
        return _service_from_orm(orm) if orm else None

    def create_service(self, session: Session, service: Service) -> Service:
        if not session.get(GarageORM, service.garage_id):
            raise ValueError(f"Garage with ID {service.garage_id} not found")
        orm = ServiceORM(
            id=service.id,
            garage_id=service.garage_id,
            name=service.name,
            description=service.description,
            price=round(service.price, 2),
            created_at=service.created_at or utcnow(),
        )
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _service_from_orm(orm)

    def update_service(
        self, session: Session, service_id: str, changes: Dict[str, Any]
    ) -> Optional[Service]:
        orm = session.get(ServiceORM, service_id)
        if not orm:
            return None
        for key in _UPDATABLE_FIELDS:
            if changes.get(key) is not None:
                value = changes[key]
                setattr(orm, key, round(value, 2) if key in _TWO_DECIMAL_FIELDS else value)
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _service_from_orm(orm)

    def delete_service(self, session: Session, service_id: str) -> bool:
        orm = session.get(ServiceORM, service_id)
        if not orm:
            return False
        session.delete(orm)
        session.commit()
        return True

    def count_by_garage(self, session: Session) -> Dict[str, int]:
        rows = (
            session.query(ServiceORM.garage_id, func.count(ServiceORM.id))
            .group_by(ServiceORM.garage_id)
            .all()
        )
        return {garage_id: count for garage_id, count in rows}

    def price_aggregates(self, session: Session, garage_id: str) -> PriceAggregates:
        count, average, minimum, maximum, total = (
            session.query(
                func.count(ServiceORM.id),
                func.avg(ServiceORM.price),
                func.min(ServiceORM.price),
                func.max(ServiceORM.price),
                func.sum(ServiceORM.price),
            )
            .filter(ServiceORM.garage_id == garage_id)
            .one()
        )
        return PriceAggregates(
            count=count or 0,
            average=float(average) if average is not None else None,
            minimum=float(minimum) if minimum is not None else None,
            maximum=float(maximum) if maximum is not None else None,
            total=float(total) if total is not None else None,
        )

    def most_expensive_name(self, session: Session, garage_id: str) -> Optional[str]:
        return (
            session.query(ServiceORM.name)
            .filter(ServiceORM.garage_id == garage_id)
            .order_by(ServiceORM.price.desc(), ServiceORM.created_at.asc())
            .limit(1)
            .scalar()
        )

    def names_for_garage(self, session: Session, garage_id: str) -> List[str]:
        rows = (
            session.query(ServiceORM.name)
            .filter(ServiceORM.garage_id == garage_id)
            .order_by(ServiceORM.created_at.asc(), ServiceORM.id.asc())
            .all()
        )
        return [name for (name,) in rows]
