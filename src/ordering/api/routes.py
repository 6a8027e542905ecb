"""FastAPI routes for the Ordering domain: cart, order history and catalog reads."""

from fastapi import APIRouter, Depends, Query

from ordering.api.auth import current_user_id
from ordering.api.schemas import CatalogItemResponse, ErrorResponse, OrderResponse, SetQuantityRequest
from ordering.cart.manager import CartManager
from ordering.catalogue.lookup import CatalogLookup, RepositoryCatalog
from ordering.history.reader import OrderHistoryReader


_error_responses = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def get_catalog() -> CatalogLookup:
    return RepositoryCatalog()


def get_cart_manager(catalog: CatalogLookup = Depends(get_catalog)) -> CartManager:
    return CartManager(catalog=catalog)


def get_history_reader(catalog: CatalogLookup = Depends(get_catalog)) -> OrderHistoryReader:
    return OrderHistoryReader(catalog=catalog)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"], responses=_error_responses)


@cart_router.get("", response_model=OrderResponse)
async def get_cart(
    user_id: str = Depends(current_user_id),
    manager: CartManager = Depends(get_cart_manager),
) -> OrderResponse:
    return OrderResponse.from_order(manager.get_cart(user_id))


@cart_router.post("/items/{item_id}", response_model=OrderResponse)
async def add_to_cart(
    item_id: str,
    qty: int = Query(default=1),
    user_id: str = Depends(current_user_id),
    manager: CartManager = Depends(get_cart_manager),
) -> OrderResponse:
    return OrderResponse.from_order(manager.add_item(user_id, item_id, qty))


@cart_router.put("/qty", response_model=OrderResponse)
async def set_item_qty_in_cart(
    body: SetQuantityRequest,
    user_id: str = Depends(current_user_id),
    manager: CartManager = Depends(get_cart_manager),
) -> OrderResponse:
    return OrderResponse.from_order(manager.set_item_quantity(user_id, body.item_id, body.new_qty))


@cart_router.post("/checkout", response_model=OrderResponse)
async def checkout(
    user_id: str = Depends(current_user_id),
    manager: CartManager = Depends(get_cart_manager),
) -> OrderResponse:
    return OrderResponse.from_order(manager.checkout(user_id))


# ---------------------------------------------------------------------------
# History Router
# ---------------------------------------------------------------------------
history_router = APIRouter(prefix="/history", tags=["history"], responses=_error_responses)


@history_router.get("", response_model=list[OrderResponse])
async def history(
    user_id: str = Depends(current_user_id),
    reader: OrderHistoryReader = Depends(get_history_reader),
) -> list[OrderResponse]:
    return [OrderResponse.from_order(order) for order in reader.list_orders(user_id)]


# ---------------------------------------------------------------------------
# Item Router
# ---------------------------------------------------------------------------
item_router = APIRouter(prefix="/items", tags=["items"], responses=_error_responses)


@item_router.get("", response_model=list[CatalogItemResponse])
async def list_items(catalog: CatalogLookup = Depends(get_catalog)) -> list[CatalogItemResponse]:
    return [CatalogItemResponse.from_item(item) for item in catalog.list_items()]


@item_router.get("/{item_id}", response_model=CatalogItemResponse)
async def show_item(item_id: str, catalog: CatalogLookup = Depends(get_catalog)) -> CatalogItemResponse:
    return CatalogItemResponse.from_item(catalog.lookup(item_id))
