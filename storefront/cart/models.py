from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_QUANTITY = 1
MAX_QUANTITY = 99

class AddToCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)
    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = Field(default=1, ge=MIN_QUANTITY, le=MAX_QUANTITY, strict=True)

    @field_validator("session_id", "product_id")
    @classmethod
    def strip_ids(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Identifiant requis")
        return v

class UpdateQuantityRequest(BaseModel):
    quantity: int = Field(ge=MIN_QUANTITY, le=MAX_QUANTITY, strict=True)

class ClearCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId", min_length=1)

class CartTotalLine(BaseModel):
    """Ligne de panier valorisée au prix courant du catalogue."""
    product_id: str
    quantity: int
    product: Dict[str, Any]
    unit_price: Decimal
    total_price: Decimal

class CartTotal(BaseModel):
    items: List[CartTotalLine] = Field(default_factory=list)
    total_amount: Decimal = Decimal("0.00")

    @property
    def is_empty(self) -> bool:
        return not self.items
