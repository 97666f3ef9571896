"""Cart and shipping models"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class CartItem(BaseModel):
    """Validated line item read from the stored cart

    Strict: numbers stored as strings and booleans are rejected, not coerced.
    """
    id: str = Field(min_length=1, validation_alias=AliasChoices("id", "_id"))
    name: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(gt=0)
    image: Optional[str] = None

    class Config:
        strict = True

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class ShippingDetails(BaseModel):
    """Shipping form state"""
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""

    def missing_fields(self) -> list[str]:
        return [field for field, value in self.model_dump().items() if not value]


def cart_total(items: list[CartItem]) -> float:
    """Sum of price x quantity, in cart order"""
    return sum(item.price * item.quantity for item in items)
