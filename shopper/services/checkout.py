"""
Checkout Flow

Loads the stored cart and profile, keeps the shipping form state, and
places the order against the storefront:

1. start() validates stored state and seeds the form
2. update_field() / set_payment_method() edit the form
3. place_order() validates, submits and applies the outcome
"""

import logging
import uuid
from typing import Any, Callable, Optional

import httpx

from ..core.state import CART_KEY, USER_KEY, ClientStateStore
from ..models.cart import CartItem, ShippingDetails, cart_total
from ..models.order import OrderPayload, PaymentMethod
from .store_client import StoreClient
from .validation import validate_cart

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
CART_PATH = "/cart"
ORDERS_PATH = "/orders"

LOAD_ERROR = "Error loading cart data. Please try refreshing the page."
MISSING_SHIPPING = "Please fill in all shipping details"
EMPTY_CART = "Your cart is empty"
INVALID_ITEMS = (
    "Some items in your cart are invalid. "
    "Please try clearing your cart and adding the items again."
)
INVALID_RESPONSE = "Server returned invalid response format"
ORDER_FAILED = "Failed to place order"
CONNECTION_FAILED = "Error communicating with server"
ORDER_PLACED = "Order placed successfully!"


class CheckoutError(Exception):
    """A checkout failure carrying the message shown to the shopper"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CheckoutFlow:
    """
    Checkout controller for one visit to the checkout page.

    State and the storefront client are injected; navigation is reported
    through the optional ``navigate`` callback and recorded on ``location``.
    """

    def __init__(
        self,
        state: ClientStateStore,
        client: StoreClient,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        self.state = state
        self.client = client
        self._navigate = navigate

        self.loading = False
        self.error: Optional[str] = None
        self.notice: Optional[str] = None
        self.location: Optional[str] = None

        self.items: list[CartItem] = []
        self.total = 0.0
        self.shipping = ShippingDetails()
        self.payment_method = PaymentMethod.COD
        self.idempotency_key: Optional[str] = None
        self.last_order: Optional[dict[str, Any]] = None

    def _go(self, path: str) -> None:
        self.location = path
        if self._navigate:
            self._navigate(path)

    # ==================== Loading ====================

    def start(self) -> bool:
        """
        Load the stored profile and cart.

        Returns:
            True when the checkout form is ready, False when the flow
            redirected elsewhere
        """
        if self.state.get_item(USER_KEY) is None:
            self._go(LOGIN_PATH)
            return False

        if self.state.get_item(CART_KEY) is None:
            self._go(CART_PATH)
            return False

        try:
            profile = self.state.read_json(USER_KEY)
            if not isinstance(profile, dict):
                raise ValueError("Invalid user data")

            result = validate_cart(self.state.read_json(CART_KEY))
            if not result.ok:
                raise ValueError(f"Invalid cart data: {'; '.join(result.violations)}")
        except (ValueError, TypeError) as e:
            logger.error(f"Error parsing stored data: {e}")
            self.error = LOAD_ERROR
            self.state.remove_item(CART_KEY)
            self._go(CART_PATH)
            return False

        self.items = result.value
        self.total = cart_total(self.items)
        self.shipping = ShippingDetails(
            name=_text(profile.get("username")),
            email=_text(profile.get("email")),
            phone=_text(profile.get("phone")),
            address=_text(profile.get("address")),
        )
        self.idempotency_key = str(uuid.uuid4())
        return True

    # ==================== Form ====================

    def update_field(self, name: str, value: str) -> None:
        """Change one shipping field, leaving the others as they are"""
        if name not in ShippingDetails.model_fields:
            raise ValueError(f"Unknown shipping field: {name}")
        self.shipping = self.shipping.model_copy(update={name: value})

    def set_payment_method(self, method: PaymentMethod | str) -> None:
        self.payment_method = PaymentMethod(method)

    # ==================== Submission ====================

    async def place_order(self) -> bool:
        """
        Validate the form and cart, then submit the order.

        Ignored while a previous submission is in flight. Every failure ends
        up in ``error`` and leaves the stored cart and profile alone, except
        for structurally invalid cart items which clear the cart.

        Returns:
            True if the order was created
        """
        if self.loading:
            logger.debug("Order submission already in progress")
            return False

        self.loading = True
        self.error = None
        try:
            payload = self._build_payload()
            order = await self._submit(payload)
        except CheckoutError as e:
            logger.error(f"Error placing order: {e.message}")
            self.error = e.message
            return False
        except Exception:
            logger.exception("Unexpected error placing order")
            self.error = ORDER_FAILED
            return False
        else:
            self._complete(order)
            return True
        finally:
            self.loading = False

    def _build_payload(self) -> OrderPayload:
        if self.shipping.missing_fields():
            raise CheckoutError(MISSING_SHIPPING)

        if not self.items:
            raise CheckoutError(EMPTY_CART)

        # Items may have been altered since start()
        if any(not isinstance(item.id, str) or not item.id for item in self.items):
            self.state.remove_item(CART_KEY)
            raise CheckoutError(INVALID_ITEMS)

        return OrderPayload.build(self.shipping, self.items, self.payment_method)

    async def _submit(self, payload: OrderPayload) -> dict[str, Any]:
        logger.info(
            f"Sending order: {len(payload.products)} line(s), total={payload.total_amount}, "
            f"payment={payload.payment_method.value}"
        )
        try:
            response = await self.client.place_order(payload.to_wire(), self.idempotency_key)
        except httpx.HTTPError as e:
            logger.error(f"API error: {e!r}")
            raise CheckoutError(CONNECTION_FAILED) from e

        return self._read_response(response)

    @staticmethod
    def _read_response(response: httpx.Response) -> dict[str, Any]:
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            logger.error(f"Received non-JSON response ({response.status_code}): {response.text[:200]}")
            raise CheckoutError(INVALID_RESPONSE)

        try:
            data = response.json()
        except ValueError as e:
            raise CheckoutError(INVALID_RESPONSE) from e

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise CheckoutError(message if isinstance(message, str) and message else ORDER_FAILED)

        if not isinstance(data, dict):
            raise CheckoutError(INVALID_RESPONSE)
        return data

    def _complete(self, order: dict[str, Any]) -> None:
        self.state.remove_item(CART_KEY)
        self.state.merge(USER_KEY, {"address": self.shipping.address, "phone": self.shipping.phone})
        self.last_order = order
        self.notice = ORDER_PLACED
        logger.info(f"Order {order.get('_id')} placed")
        self._go(ORDERS_PATH)


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""
