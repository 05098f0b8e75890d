"""Field constraint checks applied before a product is written."""
from __future__ import annotations

from decimal import Decimal

from catalog.schemas.product import ProductPayload
from catalog.services.exceptions import InvalidInputError

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
SKU_MIN_LENGTH = 3
SKU_MAX_LENGTH = 50
PRICE_INTEGER_DIGITS = 10
PRICE_FRACTION_DIGITS = 2


def _price_digits(price: Decimal) -> tuple[int, int]:
    """Return (integer digits, fraction digits) of a finite decimal.

    Trailing fractional zeros are not significant, so ``Decimal("1.500")``
    counts as one fraction digit.
    """
    _, digits, exponent = price.normalize().as_tuple()
    if exponent >= 0:
        return len(digits) + exponent, 0
    fraction = -exponent
    return max(len(digits) - fraction, 0), fraction


def validate_product(payload: ProductPayload) -> None:
    """Raise ``InvalidInputError`` with the first violated constraint.

    Args:
        payload: Incoming create or update body

    Raises:
        InvalidInputError: If any field is missing or out of bounds
    """
    if payload.name is None or not payload.name.strip():
        raise InvalidInputError("Product name is required")
    if not NAME_MIN_LENGTH <= len(payload.name) <= NAME_MAX_LENGTH:
        raise InvalidInputError(
            f"Product name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"
        )

    if payload.description is not None and len(payload.description) > DESCRIPTION_MAX_LENGTH:
        raise InvalidInputError(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    if payload.price is None:
        raise InvalidInputError("Price is required")
    if not payload.price.is_finite() or payload.price <= 0:
        raise InvalidInputError("Price must be greater than 0")
    integer_digits, fraction_digits = _price_digits(payload.price)
    if integer_digits > PRICE_INTEGER_DIGITS or fraction_digits > PRICE_FRACTION_DIGITS:
        raise InvalidInputError(
            f"Price must have at most {PRICE_INTEGER_DIGITS} integer digits "
            f"and {PRICE_FRACTION_DIGITS} decimal places"
        )

    if payload.quantity is None:
        raise InvalidInputError("Quantity is required")
    if payload.quantity < 0:
        raise InvalidInputError("Quantity cannot be negative")

    if payload.sku is None or not payload.sku.strip():
        raise InvalidInputError("SKU is required")
    if not SKU_MIN_LENGTH <= len(payload.sku) <= SKU_MAX_LENGTH:
        raise InvalidInputError(f"SKU must be between {SKU_MIN_LENGTH} and {SKU_MAX_LENGTH} characters")
