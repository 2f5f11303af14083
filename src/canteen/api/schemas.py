"""Pydantic request/response schemas for the canteen API.

These are external contracts, separate from the internal protean commands.
Amounts leave the API as decimal strings (``"19.97"``), never as floats.
"""

import json
from datetime import datetime

from pydantic import BaseModel, Field

from canteen.order.order import PaymentOutcome
from canteen.shared.money import CURRENCY, format_amount


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"item_id": "1"}]}}

    item_id: str = Field(..., min_length=1)


class SetCartItemQuantityRequest(BaseModel):
    quantity: int  # zero or negative removes the line


class ResolvePaymentRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"payment_method": "cash", "outcome": "success"}]}}

    payment_method: str = Field(..., min_length=1, max_length=50)
    outcome: PaymentOutcome


class AdvanceOrderStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ready"}]}}

    status: str
    reason: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class MenuItemResponse(BaseModel):
    item_id: str
    name: str
    price: str
    available: bool
    prep_time_minutes: int
    is_vegetarian: bool
    category: str | None = None

    @classmethod
    def from_item(cls, item) -> "MenuItemResponse":
        return cls(
            item_id=item.item_id,
            name=item.name,
            price=format_amount(item.unit_price_cents),
            available=item.available,
            prep_time_minutes=item.prep_time_minutes,
            is_vegetarian=item.is_vegetarian,
            category=item.category,
        )


class CartLineResponse(BaseModel):
    item_id: str
    name: str | None = None
    quantity: int
    unit_price: str
    subtotal: str
    available: bool


class CartResponse(BaseModel):
    user_id: str
    lines: list[CartLineResponse]
    item_count: int
    amount: str
    currency: str = CURRENCY

    @classmethod
    def from_snapshot(cls, snapshot) -> "CartResponse":
        return cls(
            user_id=snapshot.user_id,
            lines=[
                CartLineResponse(
                    item_id=line.item_id,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=format_amount(line.unit_price_cents),
                    subtotal=format_amount(line.subtotal_cents),
                    available=line.available,
                )
                for line in snapshot.lines
            ],
            item_count=snapshot.item_count,
            amount=format_amount(snapshot.amount_cents),
        )


class OrderLineResponse(BaseModel):
    item_id: str
    name: str
    quantity: int
    unit_price: str
    subtotal: str
    prep_time_minutes: int


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    status: str
    payment_status: str
    payment_method: str | None = None
    lines: list[OrderLineResponse]
    item_count: int
    total_amount: str
    currency: str = CURRENCY
    prep_time_minutes: int
    pickup_code: str | None = None
    cancellation_reason: str | None = None
    created_at: datetime | None = None
    paid_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            payment_status=order.payment_status,
            payment_method=order.payment_method,
            lines=[
                OrderLineResponse(
                    item_id=str(line.item_id),
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=format_amount(line.unit_price_cents),
                    subtotal=format_amount(line.subtotal_cents),
                    prep_time_minutes=line.prep_time_minutes,
                )
                for line in order.lines
            ],
            item_count=order.item_count,
            total_amount=format_amount(order.total_amount_cents),
            prep_time_minutes=order.prep_time_minutes,
            pickup_code=order.pickup_code,
            cancellation_reason=order.cancellation_reason,
            created_at=order.created_at,
            paid_at=order.paid_at,
            updated_at=order.updated_at,
        )


class OrderSummaryResponse(BaseModel):
    order_id: str
    user_id: str
    status: str
    payment_status: str
    item_count: int
    total_amount: str
    prep_time_minutes: int
    pickup_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_summary(cls, summary) -> "OrderSummaryResponse":
        return cls(
            order_id=str(summary.order_id),
            user_id=str(summary.user_id),
            status=summary.status,
            payment_status=summary.payment_status,
            item_count=summary.item_count,
            total_amount=format_amount(summary.total_amount_cents),
            prep_time_minutes=summary.prep_time_minutes,
            pickup_code=summary.pickup_code,
            created_at=summary.created_at,
            updated_at=summary.updated_at,
        )


class QueueLineResponse(BaseModel):
    item_id: str
    name: str
    quantity: int


class QueueEntryResponse(BaseModel):
    order_id: str
    status: str
    pickup_code: str | None = None
    prep_time_minutes: int
    item_count: int
    lines: list[QueueLineResponse]
    paid_at: datetime | None = None

    @classmethod
    def from_entry(cls, entry) -> "QueueEntryResponse":
        lines = json.loads(entry.lines) if entry.lines else []
        return cls(
            order_id=str(entry.order_id),
            status=entry.status,
            pickup_code=entry.pickup_code,
            prep_time_minutes=entry.prep_time_minutes,
            item_count=entry.item_count,
            lines=[QueueLineResponse(**line) for line in lines],
            paid_at=entry.paid_at,
        )


class FavoriteStatusResponse(BaseModel):
    item_id: str
    favorite: bool


class ErrorResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"error": "NotFound", "messages": {"order_id": ["Order 42 does not exist"]}}]
        }
    }

    error: str
    messages: dict
