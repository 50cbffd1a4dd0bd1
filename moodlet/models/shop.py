"""Shop catalog models"""
from enum import Enum
from typing import Optional, Union
from uuid import uuid4

from pydantic import BaseModel, Field


class AccessoryCategory(str, Enum):
    """Accessory slots. A companion wears at most one accessory per category."""
    EYES = "eyes"
    GLASSES = "glasses"
    HAT = "hat"
    TOP = "top"
    HELD_ITEM = "held_item"

    @property
    def layer_order(self) -> int:
        """Rendering order, lower is drawn first (behind)"""
        return _LAYER_ORDER[self]


_LAYER_ORDER = {
    AccessoryCategory.EYES: 1,
    AccessoryCategory.TOP: 2,
    AccessoryCategory.GLASSES: 3,
    AccessoryCategory.HAT: 4,
    AccessoryCategory.HELD_ITEM: 5,
}


class CatalogItem(BaseModel):
    """Fields shared by every purchasable item"""
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    image_name: str
    price: int = Field(gt=0)
    is_premium_only: bool = False
    required_streak_milestone: Optional[int] = Field(default=None, gt=0)


class Accessory(CatalogItem):
    """Wearable accessory"""
    category: AccessoryCategory


class Background(CatalogItem):
    """Scene background behind the companion"""
    pass


ShopItem = Union[Accessory, Background]
