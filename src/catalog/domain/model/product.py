"""Product aggregate.

The only entity in the catalog. Its identity is assigned by the
repository on first save and never changes afterwards; every other
field is freely mutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from catalog.domain.exceptions import ValidationError


PRICE_PLACES = Decimal("0.01")


def to_decimal(value: str | float | int | Decimal) -> Decimal:
    """Coerce to Decimal through ``str`` so floats keep their printed value.

    Prices are stored with two decimal places; anything finer is rejected
    rather than rounded.
    """
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        exact = amount.is_finite() and amount == amount.quantize(PRICE_PLACES)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid price: {value!r}") from exc

    if not exact:
        raise ValidationError(f"Invalid price: {value!r} (at most 2 decimal places)")
    return amount


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is ``None`` until the product has been persisted.
    """

    name: str
    price: Decimal
    description: str = ""
    stock: int = 0
    id: int | None = None

    def __post_init__(self) -> None:
        self.price = to_decimal(self.price)
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.stock).__name__}"
            )

    def overwrite_with(self, details: Product) -> None:
        """Replace every mutable field with the values in ``details``.

        Empty strings and zeros are copied like any other value; there is
        no partial merge. The identity of this product is left alone.
        """
        self.name = details.name
        self.description = details.description
        self.price = details.price
        self.stock = details.stock
