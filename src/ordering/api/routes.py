"""FastAPI routes for the Ordering domain: the caller's cart and orders."""

from functools import partial

from fastapi import APIRouter, Depends, Response

from identity.api.dependencies import current_user_id
from ordering.api.schemas import CartResponse, OrderResponse, UpdateCartQuantityRequest
from ordering.cart.items import CartItemsService
from ordering.checkout.checkout import CheckoutService
from ordering.checkout.shipping import FlatRateShipping
from ordering.order.queries import OrderQueries
from ordering.uow import UnitOfWork
from shared.api import get_app_settings, get_database
from shared.config import Settings
from shared.db import Database


def get_cart_service(database: Database = Depends(get_database)) -> CartItemsService:
    return CartItemsService(partial(UnitOfWork, database))


def get_checkout_service(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> CheckoutService:
    return CheckoutService(partial(UnitOfWork, database), shipping=FlatRateShipping(settings.shipping_amount))


def get_order_queries(database: Database = Depends(get_database)) -> OrderQueries:
    return OrderQueries(partial(UnitOfWork, database))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
def get_cart(
    user_id: int = Depends(current_user_id),
    service: CartItemsService = Depends(get_cart_service),
) -> CartResponse:
    return CartResponse.from_cart(service.view(user_id))


@cart_router.post("/products/{product_id}", status_code=201, response_model=CartResponse)
def add_product_to_cart(
    product_id: int,
    user_id: int = Depends(current_user_id),
    service: CartItemsService = Depends(get_cart_service),
) -> CartResponse:
    return CartResponse.from_cart(service.add_product(user_id, product_id))


@cart_router.put("/products/{product_id}", status_code=204, response_class=Response)
def update_cart_quantity(
    product_id: int,
    body: UpdateCartQuantityRequest,
    user_id: int = Depends(current_user_id),
    service: CartItemsService = Depends(get_cart_service),
) -> Response:
    service.set_quantity(user_id, product_id, body.quantity)
    return Response(status_code=204)


@cart_router.delete("", response_model=CartResponse)
def clear_cart(
    user_id: int = Depends(current_user_id),
    service: CartItemsService = Depends(get_cart_service),
) -> CartResponse:
    return CartResponse.from_cart(service.clear(user_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
def checkout(
    user_id: int = Depends(current_user_id),
    service: CheckoutService = Depends(get_checkout_service),
) -> OrderResponse:
    return OrderResponse.from_order(service.checkout(user_id))


@order_router.get("", response_model=list[OrderResponse])
def list_orders(
    user_id: int = Depends(current_user_id),
    queries: OrderQueries = Depends(get_order_queries),
) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in queries.list_for_user(user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse)
def get_order(
    order_id: int,
    user_id: int = Depends(current_user_id),
    queries: OrderQueries = Depends(get_order_queries),
) -> OrderResponse:
    return OrderResponse.from_order(queries.get(user_id, order_id))
