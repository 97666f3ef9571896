"""Order models for the storefront"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator


_TIMESTAMP = TypeAdapter(datetime)


class OrderStatus(str, Enum):
    PENDING = "pending"


class PaymentMethod(str, Enum):
    COD = "cod"
    UPI = "upi"
    CARD = "card"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class OrderContact(BaseModel):
    """Contact and shipping details of the buyer"""
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    address: str = Field(min_length=1)
    phone: str = Field(min_length=1)


class OrderLine(BaseModel):
    """Item in an order"""
    product_id: str = Field(alias="productId", min_length=1)
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(gt=0)

    class Config:
        populate_by_name = True


class OrderPayload(BaseModel):
    """Request body for order placement"""
    user: OrderContact
    products: list[OrderLine] = Field(min_length=1)
    total_amount: float = Field(alias="totalAmount", ge=0)
    status: OrderStatus = OrderStatus.PENDING
    order_date: str = Field(alias="orderDate")
    payment_method: PaymentMethod = Field(alias="paymentMethod")
    payment_status: PaymentStatus = Field(alias="paymentStatus")

    class Config:
        populate_by_name = True

    @field_validator("order_date")
    @classmethod
    def check_order_date(cls, value: str) -> str:
        # Stored as submitted; only checked for being a timestamp
        try:
            _TIMESTAMP.validate_python(value)
        except ValidationError:
            raise ValueError(f"orderDate is not an ISO-8601 timestamp: {value!r}") from None
        return value

    @model_validator(mode="after")
    def check_payment_status(self) -> "OrderPayload":
        expected = PaymentStatus.PENDING if self.payment_method == PaymentMethod.COD else PaymentStatus.PAID
        if self.payment_status != expected:
            raise ValueError(f"paymentStatus must be '{expected.value}' for paymentMethod '{self.payment_method.value}'")
        return self


class Order(OrderPayload):
    """Persisted order"""
    id: str = Field(alias="_id")
