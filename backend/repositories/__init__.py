from .garages import GaragesRepository
from .services import ServicesRepository
from .auto_parts_shops import AutoPartsShopsRepository
from . import models

__all__ = ["GaragesRepository", "ServicesRepository", "AutoPartsShopsRepository", "models"]
