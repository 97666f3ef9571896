"""Order payload models sent to the storefront"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from .cart import CartItem, ShippingDetails, cart_total


class PaymentMethod(str, Enum):
    COD = "cod"
    UPI = "upi"
    CARD = "card"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


def payment_status_for(method: PaymentMethod) -> PaymentStatus:
    """Cash on delivery is collected later; every other method counts as paid"""
    return PaymentStatus.PENDING if method == PaymentMethod.COD else PaymentStatus.PAID


class OrderContact(BaseModel):
    name: str
    email: str
    address: str
    phone: str


class OrderLine(BaseModel):
    product_id: str = Field(serialization_alias="productId")
    name: str
    price: float
    quantity: int


class OrderPayload(BaseModel):
    """Normalized request body for order placement"""
    user: OrderContact
    products: list[OrderLine]
    total_amount: float = Field(serialization_alias="totalAmount")
    status: str = "pending"
    order_date: str = Field(serialization_alias="orderDate")
    payment_method: PaymentMethod = Field(serialization_alias="paymentMethod")
    payment_status: PaymentStatus = Field(serialization_alias="paymentStatus")

    @classmethod
    def build(
        cls,
        shipping: ShippingDetails,
        items: list[CartItem],
        payment_method: PaymentMethod,
        order_date: datetime | None = None,
    ) -> "OrderPayload":
        order_date = order_date or datetime.now(timezone.utc)
        return cls(
            user=OrderContact(
                name=shipping.name,
                email=shipping.email,
                address=shipping.address,
                phone=shipping.phone,
            ),
            products=[
                OrderLine(product_id=item.id, name=item.name, price=item.price, quantity=item.quantity)
                for item in items
            ],
            total_amount=cart_total(items),
            order_date=order_date.isoformat(),
            payment_method=payment_method,
            payment_status=payment_status_for(payment_method),
        )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
