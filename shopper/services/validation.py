"""Validation of client-held cart data"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from ..models.cart import CartItem

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ValidationResult(Generic[T]):
    """Either a validated value or the list of violations that prevented it"""
    value: Optional[T] = None
    violations: list[str] = field(default_factory=list)
    # Problems that were tolerated, e.g. cart items that were dropped
    dropped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.violations


def _describe(error: ValidationError) -> list[str]:
    violations = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        violations.append(f"{location}: {err['msg']}" if location else err["msg"])
    return violations


def validate_cart_item(raw: Any) -> ValidationResult[CartItem]:
    """Build a CartItem from untrusted stored data"""
    try:
        return ValidationResult(value=CartItem.model_validate(raw))
    except ValidationError as e:
        return ValidationResult(violations=_describe(e))


def validate_cart(raw: Any) -> ValidationResult[list[CartItem]]:
    """
    Validate a stored cart.

    Items failing validation are dropped. The result is a failure when the
    cart is not a list or when no item survives.
    """
    if not isinstance(raw, list):
        return ValidationResult(violations=[f"cart must be a list, got {type(raw).__name__}"])

    items: list[CartItem] = []
    dropped: list[str] = []
    for index, entry in enumerate(raw):
        result = validate_cart_item(entry)
        if result.ok:
            items.append(result.value)
        else:
            logger.warning(f"Invalid cart item at position {index}: {result.violations}")
            dropped.extend(f"[{index}] {v}" for v in result.violations)

    if not items:
        return ValidationResult(violations=dropped or ["cart has no items"])
    return ValidationResult(value=items, dropped=dropped)
