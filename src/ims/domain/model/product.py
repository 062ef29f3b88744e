"""Product records held by the inventory store.

A record is either a standard product or an electronic product. Both kinds
share one dataclass and are told apart by ``kind``; the store only ever
talks to them through ``render_row()`` and ``to_csv_row()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ims.domain.exceptions import ValidationError

NO_WARRANTY = "No warranty"


class ProductKind(Enum):
    STANDARD = "STANDARD"
    ELECTRONIC = "ELECTRONIC"


@dataclass
class Product:
    """A stocked item.

    ``id`` is the *requested* identifier until the record is added to an
    ``Inventory``; the store may replace it (0 means "assign one for me").
    The ``__init__`` does not validate price or quantity so persisted rows
    can be reconstituted as they were written.
    """

    id: int
    name: str
    price: float
    quantity: int
    kind: ProductKind = ProductKind.STANDARD
    warranty: str | None = None

    def __post_init__(self) -> None:
        if self.name is None:
            self.name = ""
        if self.kind is ProductKind.ELECTRONIC and self.warranty is None:
            self.warranty = NO_WARRANTY

    @property
    def is_electronic(self) -> bool:
        return self.kind is ProductKind.ELECTRONIC

    @property
    def total_value(self) -> float:
        return self.price * self.quantity

    # --- Mutation ---------------------------------------------------------------

    def set_name(self, name: str | None) -> None:
        self.name = "" if name is None else name

    def set_price(self, price: float) -> None:
        if price < 0:
            raise ValidationError(f"Price cannot be negative, got {price}")
        self.price = price

    def set_quantity(self, quantity: int) -> None:
        self.quantity = quantity

    def set_warranty(self, warranty: str | None) -> None:
        if not self.is_electronic:
            raise ValidationError(
                f"Product #{self.id} '{self.name}' is not an electronic item"
            )
        self.warranty = NO_WARRANTY if warranty is None else warranty

    def replace_fields(self, name: str | None, price: float, quantity: int) -> None:
        """Overwrite name, price and quantity in one step.

        The price is checked before anything is assigned, so a rejected
        call leaves the record untouched.
        """
        if price < 0:
            raise ValidationError(f"Price cannot be negative, got {price}")
        self.name = "" if name is None else name
        self.price = price
        self.quantity = quantity

    # --- Capabilities -----------------------------------------------------------

    def render_row(self) -> str:
        row = (
            f"{self.id:>4} | {self.name:<30} | {self.quantity:>6} | "
            f"{self.price:>10.2f} | {self.total_value:>10.2f}"
        )
        if self.is_electronic:
            row += f" | {self.warranty:<12}"
        return row

    def to_csv_row(self) -> str:
        # Warranty is not part of the file format; electronic rows use the
        # same four columns as standard ones.
        return f"{self.id},{_csv_name(self.name)},{self.price!r},{self.quantity}"


def ElectronicProduct(
    id: int,
    name: str | None,
    price: float,
    quantity: int,
    warranty: str | None = None,
) -> Product:
    """Build an electronic record; a missing warranty becomes ``NO_WARRANTY``."""
    return Product(
        id=id,
        name=name,
        price=price,
        quantity=quantity,
        kind=ProductKind.ELECTRONIC,
        warranty=warranty,
    )


def render_header(with_warranty: bool = False) -> str:
    header = f"{'ID':>4} | {'Name':<30} | {'Qty':>6} | {'Price':>10} | {'Value':>10}"
    if with_warranty:
        header += f" | {'Warranty':<12}"
    return header


def _csv_name(name: str) -> str:
    if "," not in name:
        return name
    return '"' + name.replace('"', '""') + '"'
