"""
Garage repository backed by SQLAlchemy.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from domain.models import Garage, utcnow
from repositories.models import GarageORM

_UPDATABLE_FIELDS = ("name", "address", "latitude", "longitude", "rating")
_TWO_DECIMAL_FIELDS = ("rating",)


def _garage_from_orm(orm: GarageORM) -> Garage:
    return Garage(
        id=orm.id,
        name=orm.name,
        address=orm.address,
        latitude=orm.latitude,
        longitude=orm.longitude,
        rating=float(orm.rating),
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


class GaragesRepository:
    """CRUD operations and store-side queries for garages."""

    def list_garages(self, session: Session, min_rating: Optional[float] = None) -> List[Garage]:
        query = session.query(GarageORM)
        if min_rating is not None:
            query = query.filter(GarageORM.rating >= min_rating)
        return [_garage_from_orm(g) for g in query.all()]

    def get_garage(self, session: Session, garage_id: str) -> Optional[Garage]:
        orm = session.get(GarageORM, garage_id)
        if not orm:
            return None
        return _garage_from_orm(orm)

    def top_rated(self, session: Session, count: int) -> List[Garage]:
        garages = (
            session.query(GarageORM)
            .order_by(GarageORM.rating.desc(), GarageORM.created_at.desc())
            .limit(count)
            .all()
        )
        return [_garage_from_orm(g) for g in garages]

    def create_garage(self, session: Session, garage: Garage) -> Garage:
        orm = GarageORM(
            id=garage.id,
            name=garage.name,
            address=garage.address,
            latitude=garage.latitude,
            longitude=garage.longitude,
            rating=round(garage.rating, 2),
            created_at=garage.created_at or utcnow(),
            updated_at=garage.updated_at,
        )
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _garage_from_orm(orm)

    def update_garage(
        self, session: Session, garage_id: str, changes: Dict[str, Any]
    ) -> Optional[Garage]:
        orm = session.get(GarageORM, garage_id)
        if not orm:
            return None
        for key in _UPDATABLE_FIELDS:
            if changes.get(key) is not None:
                value = changes[key]
                setattr(orm, key, round(value, 2) if key in _TWO_DECIMAL_FIELDS else value)
        orm.updated_at = utcnow()
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _garage_from_orm(orm)

    def delete_garage(self, session: Session, garage_id: str) -> bool:
        orm = session.get(GarageORM, garage_id)
        if not orm:
            return False
        session.delete(orm)
        session.commit()
        return True
