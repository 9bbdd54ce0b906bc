"""
Discount calculator: price after a percentage discount.
"""

from dataclasses import dataclass

from apps.calculator.amortization import to_number
from apps.calculator.exceptions import InvalidInputError


@dataclass(frozen=True)
class DiscountResult:
    original_price: float
    discount_percent: float
    saved_amount: float
    final_price: float


def compute_discount(original_price, discount_percent) -> DiscountResult:
    """
    Apply ``discount_percent`` to ``original_price``.

    Raises:
        InvalidInputError: If the price is not > 0 or the discount is
            outside [0, 100].
    """
    original_price = to_number('original_price', original_price)
    discount_percent = to_number(
        'discount_percent', discount_percent, allow_zero=True,
    )
    if discount_percent > 100:
        raise InvalidInputError('discount_percent', 'cannot exceed 100')

    saved_amount = original_price * discount_percent / 100
    return DiscountResult(
        original_price=original_price,
        discount_percent=discount_percent,
        saved_amount=saved_amount,
        final_price=original_price - saved_amount,
    )
