"""FastAPI routes for the canteen: cart, orders, staff, menu and favorites."""

from fastapi import APIRouter, Depends, Header

from canteen.api.errors import ERROR_RESPONSES
from canteen.api.schemas import (
    AddCartItemRequest,
    AdvanceOrderStatusRequest,
    CartResponse,
    FavoriteStatusResponse,
    MenuItemResponse,
    OrderResponse,
    OrderSummaryResponse,
    QueueEntryResponse,
    ResolvePaymentRequest,
    SetCartItemQuantityRequest,
)
from canteen.cart.checkout import Checkout
from canteen.cart.items import AddItemToCart, RemoveCartItem, SetCartItemQuantity
from canteen.cart.management import ClearCart
from canteen.cart.snapshot import cart_snapshot
from canteen.catalog import get_catalog
from canteen.exceptions import Forbidden, Unauthenticated
from canteen.favorites.management import AddFavorite, RemoveFavorite
from canteen.favorites.queries import is_favorite, list_favorites
from canteen.identity import Caller, get_identity
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.order import Order
from canteen.order.payment import ResolvePayment
from canteen.order.queries import (
    find_by_pickup_code,
    get_order,
    list_all_orders,
    list_user_orders,
    staff_queue,
)
from canteen.utils.locks import process_serialized
from canteen.utils.logging import add_context


# ---------------------------------------------------------------------------
# Caller resolution
# ---------------------------------------------------------------------------
async def current_caller(authorization: str | None = Header(None)) -> Caller:
    """Resolve the ``Authorization: Bearer <token>`` header to a caller."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated({"authorization": ["A bearer token is required"]})
    caller = get_identity().resolve_caller(token.strip())
    add_context(user_id=caller.user_id, role=caller.role.value)
    return caller


async def staff_caller(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_staff:
        raise Forbidden({"role": ["Staff access required"]})
    return caller


def _readable_order(order_id: str, caller: Caller) -> Order:
    order = get_order(order_id)
    if not caller.is_staff and str(order.user_id) != caller.user_id:
        raise Forbidden({"order_id": ["You can only access your own orders"]})
    return order


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"], responses=ERROR_RESPONSES)


@cart_router.get("", response_model=CartResponse)
async def get_cart(caller: Caller = Depends(current_caller)) -> CartResponse:
    return CartResponse.from_snapshot(cart_snapshot(caller.user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddCartItemRequest, caller: Caller = Depends(current_caller)) -> CartResponse:
    process_serialized(AddItemToCart(user_id=caller.user_id, item_id=body.item_id))
    return CartResponse.from_snapshot(cart_snapshot(caller.user_id))


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def set_cart_item_quantity(
    item_id: str, body: SetCartItemQuantityRequest, caller: Caller = Depends(current_caller)
) -> CartResponse:
    process_serialized(SetCartItemQuantity(user_id=caller.user_id, item_id=item_id, quantity=body.quantity))
    return CartResponse.from_snapshot(cart_snapshot(caller.user_id))


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, caller: Caller = Depends(current_caller)) -> CartResponse:
    process_serialized(RemoveCartItem(user_id=caller.user_id, item_id=item_id))
    return CartResponse.from_snapshot(cart_snapshot(caller.user_id))


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(caller: Caller = Depends(current_caller)) -> CartResponse:
    process_serialized(ClearCart(user_id=caller.user_id))
    return CartResponse.from_snapshot(cart_snapshot(caller.user_id))


@cart_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout(caller: Caller = Depends(current_caller)) -> OrderResponse:
    order_id = process_serialized(Checkout(user_id=caller.user_id))
    return OrderResponse.from_order(get_order(order_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"], responses=ERROR_RESPONSES)


@order_router.get("", response_model=list[OrderSummaryResponse])
async def my_orders(caller: Caller = Depends(current_caller)) -> list[OrderSummaryResponse]:
    return [OrderSummaryResponse.from_summary(summary) for summary in list_user_orders(caller.user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_details(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    return OrderResponse.from_order(_readable_order(order_id, caller))


@order_router.post("/{order_id}/payment", response_model=OrderResponse)
async def resolve_payment(
    order_id: str, body: ResolvePaymentRequest, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    _readable_order(order_id, caller)
    process_serialized(
        ResolvePayment(
            order_id=order_id,
            payment_method=body.payment_method,
            outcome=body.outcome.value,
        )
    )
    return OrderResponse.from_order(get_order(order_id))


# ---------------------------------------------------------------------------
# Staff Router
# ---------------------------------------------------------------------------
staff_router = APIRouter(prefix="/staff", tags=["staff"], responses=ERROR_RESPONSES)


@staff_router.get("/orders", response_model=list[OrderSummaryResponse])
async def all_orders(caller: Caller = Depends(staff_caller)) -> list[OrderSummaryResponse]:
    return [OrderSummaryResponse.from_summary(summary) for summary in list_all_orders()]


@staff_router.get("/queue", response_model=list[QueueEntryResponse])
async def kitchen_queue(caller: Caller = Depends(staff_caller)) -> list[QueueEntryResponse]:
    return [QueueEntryResponse.from_entry(entry) for entry in staff_queue()]


@staff_router.get("/pickup/{code}", response_model=OrderResponse)
async def order_by_pickup_code(code: str, caller: Caller = Depends(staff_caller)) -> OrderResponse:
    return OrderResponse.from_order(find_by_pickup_code(code))


@staff_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def advance_order_status(
    order_id: str, body: AdvanceOrderStatusRequest, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    # The role check happens in the aggregate, after the order is found
    process_serialized(
        AdvanceOrderStatus(
            order_id=order_id,
            target_status=body.status,
            actor_role=caller.role.value,
            actor_id=caller.user_id,
            reason=body.reason,
        )
    )
    return OrderResponse.from_order(get_order(order_id))


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/menu", tags=["menu"], responses=ERROR_RESPONSES)


@menu_router.get("", response_model=list[MenuItemResponse])
async def menu() -> list[MenuItemResponse]:
    return [MenuItemResponse.from_item(item) for item in get_catalog().list_items()]


# ---------------------------------------------------------------------------
# Favorites Router
# ---------------------------------------------------------------------------
favorites_router = APIRouter(prefix="/favorites", tags=["favorites"], responses=ERROR_RESPONSES)


def _favorite_items(user_id) -> list[MenuItemResponse]:
    return [MenuItemResponse.from_item(item) for item in list_favorites(user_id)]


@favorites_router.get("", response_model=list[MenuItemResponse])
async def my_favorites(caller: Caller = Depends(current_caller)) -> list[MenuItemResponse]:
    return _favorite_items(caller.user_id)


@favorites_router.get("/{item_id}", response_model=FavoriteStatusResponse)
async def favorite_status(item_id: str, caller: Caller = Depends(current_caller)) -> FavoriteStatusResponse:
    return FavoriteStatusResponse(item_id=item_id, favorite=is_favorite(caller.user_id, item_id))


@favorites_router.put("/{item_id}", response_model=list[MenuItemResponse])
async def add_favorite(item_id: str, caller: Caller = Depends(current_caller)) -> list[MenuItemResponse]:
    process_serialized(AddFavorite(user_id=caller.user_id, item_id=item_id))
    return _favorite_items(caller.user_id)


@favorites_router.delete("/{item_id}", response_model=list[MenuItemResponse])
async def remove_favorite(item_id: str, caller: Caller = Depends(current_caller)) -> list[MenuItemResponse]:
    process_serialized(RemoveFavorite(user_id=caller.user_id, item_id=item_id))
    return _favorite_items(caller.user_id)
