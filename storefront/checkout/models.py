from enum import Enum
from typing import Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictFloat, StrictInt, StrictStr, field_validator

class PaymentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    CANCELLED = "cancelled"
    FAILED = "failed"
    REFUNDED = "refunded"

class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

# Statuts qu'un webhook PixUp peut annoncer (refunded n'arrive pas par webhook)
WebhookStatus = Literal["pending", "approved", "cancelled", "failed"]

class Customer(BaseModel):
    name: Optional[str] = None
    email: Optional[Union[Literal[""], EmailStr]] = None
    phone: Optional[str] = None

class CheckoutRequest(BaseModel):
    """
    Corps de POST /checkout/create-payment.
    Aucun prix ni montant n'est accepté ici: tout est recalculé depuis le panier.
    """
    model_config = ConfigDict(populate_by_name=True)

    session_id: StrictStr = Field(alias="sessionId", min_length=1)
    customer: Optional[Customer] = None
    success_url: StrictStr
    cancel_url: StrictStr
    webhook_url: StrictStr

    @field_validator("session_id")
    @classmethod
    def session_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Session requise")
        return v

    @field_validator("success_url", "cancel_url", "webhook_url")
    @classmethod
    def absolute_url(cls, v: str) -> str:
        parsed = urlparse(v.strip())
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("URL absolue attendue")
        return v.strip()

class WebhookMetadata(BaseModel):
    order_id: Optional[StrictStr] = Field(default=None, alias="orderId")
    session_id: Optional[StrictStr] = Field(default=None, alias="sessionId")

class WebhookPayload(BaseModel):
    """Notification PixUp. Les champs inconnus sont ignorés."""
    payment_id: StrictStr = Field(min_length=1)
    status: WebhookStatus
    amount: Optional[Union[StrictInt, StrictFloat]] = None
    payment_method: Optional[StrictStr] = None
    metadata: Optional[WebhookMetadata] = None
