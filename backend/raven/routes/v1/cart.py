# backend/raven/routes/v1/cart.py
"""
Cart routes - API v1

Endpoints:
    GET /{cart_key} - Cart contents with totals
    POST /{cart_key}/items - Add picked slots of one instructor
    DELETE /{cart_key}/items/{item_id} - Remove an item (no-op when absent)
    DELETE /{cart_key} - Empty the cart
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Path, status

from ...api.dependencies.services import get_cart_service
from ...core.exceptions import DomainException
from ...schemas.cart import (
    AddCartItemRequest,
    AddCartItemResponse,
    CartItemResponse,
    CartResponse,
    RemoveCartItemResponse,
)
from ...services.cart_service import CartService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cart"])

CART_KEY_PATTERN = r"^[A-Za-z0-9._:-]{1,128}$"


@router.get("/{cart_key}", response_model=CartResponse)
async def get_cart(
    cart_key: str = Path(..., pattern=CART_KEY_PATTERN),
    cart_service: CartService = Depends(get_cart_service),
) -> CartResponse:
    cart = await asyncio.to_thread(cart_service.get_cart, cart_key)
    return CartResponse(**cart_service.describe(cart))


@router.post(
    "/{cart_key}/items",
    response_model=AddCartItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "No slots, a slot outside the picked dates, or picks too far apart"},
        404: {"description": "Instructor not found"},
        409: {"description": "A selected slot is already booked"},
        422: {"description": "Instructor has no priced offer"},
    },
)
async def add_cart_item(
    payload: AddCartItemRequest,
    cart_key: str = Path(..., pattern=CART_KEY_PATTERN),
    cart_service: CartService = Depends(get_cart_service),
) -> AddCartItemResponse:
    picks = [(slot.date, slot.day_slot_id) for slot in payload.slots]
    try:
        item, cart = await asyncio.to_thread(
            cart_service.add_item, cart_key, payload.instructor_id, picks
        )
    except DomainException as exc:
        raise exc.to_http_exception() from exc

    cart_data = cart_service.describe(cart)
    item_data = next(entry for entry in cart_data["items"] if entry["id"] == item.id)
    return AddCartItemResponse(item=CartItemResponse(**item_data), cart=CartResponse(**cart_data))


@router.delete("/{cart_key}/items/{item_id}", response_model=RemoveCartItemResponse)
async def remove_cart_item(
    item_id: str,
    cart_key: str = Path(..., pattern=CART_KEY_PATTERN),
    cart_service: CartService = Depends(get_cart_service),
) -> RemoveCartItemResponse:
    removed, cart = await asyncio.to_thread(cart_service.remove_item, cart_key, item_id)
    return RemoveCartItemResponse(
        removed=removed, item_id=item_id, cart=CartResponse(**cart_service.describe(cart))
    )


@router.delete("/{cart_key}", response_model=CartResponse)
async def clear_cart(
    cart_key: str = Path(..., pattern=CART_KEY_PATTERN),
    cart_service: CartService = Depends(get_cart_service),
) -> CartResponse:
    cart = await asyncio.to_thread(cart_service.clear, cart_key)
    return CartResponse(**cart_service.describe(cart))
