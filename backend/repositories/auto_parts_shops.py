"""
Auto-parts shop repository backed by SQLAlchemy.
"""
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from domain.models import AutoPartsShop, utcnow
from repositories.models import AutoPartsShopORM

_UPDATABLE_FIELDS = ("name", "address", "latitude", "longitude", "rating")
_TWO_DECIMAL_FIELDS = ("rating",)


def _shop_from_orm(orm: AutoPartsShopORM) -> AutoPartsShop:
    return AutoPartsShop(
        id=orm.id,
        name=orm.name,
        address=orm.address,
        latitude=orm.latitude,
        longitude=orm.longitude,
        rating=float(orm.rating),
        created_at=orm.created_at,
        updated_at=orm.updated_at,
    )


class AutoPartsShopsRepository:
    """CRUD operations for auto-parts shops."""

    def list_shops(self, session: Session) -> List[AutoPartsShop]:
        return [_shop_from_orm(s) for s in session.query(AutoPartsShopORM).all()]

    def get_shop(self, session: Session, shop_id: str) -> Optional[AutoPartsShop]:
        orm = session.get(AutoPartsShopORM, shop_id)
        return _shop_from_orm(orm) if orm else None

    def create_shop(self, session: Session, shop: AutoPartsShop) -> AutoPartsShop:
        orm = AutoPartsShopORM(
            id=shop.id,
            name=shop.name,
            address=shop.address,
            latitude=shop.latitude,
            longitude=shop.longitude,
            rating=round(shop.rating, 2),
            created_at=shop.created_at or utcnow(),
        )
        session.add(orm)
        session.commit()
        session.refresh(orm)
        return _shop_from_orm(orm)

    def update_shop(
        self, session: Session, shop_id: str, changes: Dict[str, Any]
    ) -> Optional[AutoPartsShop]:
        orm = session.get(AutoPartsShopORM, shop_id)
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
        return _shop_from_orm(orm)

    def delete_shop(self, session: Session, shop_id: str) -> bool:
        orm = session.get(AutoPartsShopORM, shop_id)
        if not orm:
            return False
        session.delete(orm)
        session.commit()
        return True
