"""Form-level validation.

Runs before any mutation: a form with errors never reaches a collection.
All problems found are reported together in one InputValidationError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from pricetable.application.dto import PriceForm, ProductForm
from pricetable.application.product_collection import ProductCollection
from pricetable.domain.exceptions import InputValidationError, ValidationError
from pricetable.domain.model.value_objects import positive_decimal

MAX_NAME_LENGTH = 100
MAX_UNIT_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 500


@dataclass(frozen=True)
class CleanPriceForm:
    price: Decimal
    quantity: Decimal
    store: str
    notes: str
    is_on_sale: bool
    purchase_date: date | None


def validate_product_form(
    form: ProductForm,
    products: ProductCollection,
    editing_id: str | None = None,
) -> ProductForm:
    """Return the form with whitespace stripped, or raise InputValidationError.

    The name must be unique among products (exact, case-sensitive); when
    editing, the product being edited is ignored.
    """
    name = (form.name or "").strip()
    unit = (form.unit or "").strip()
    description = (form.description or "").strip()
    errors: dict[str, str] = {}

    if not name:
        errors["name"] = "Product name is required"
    elif len(name) > MAX_NAME_LENGTH:
        errors["name"] = f"Product name must be at most {MAX_NAME_LENGTH} characters"
    elif products.exists(name, exclude_id=editing_id):
        errors["name"] = f"Product '{name}' already exists"

    if not unit:
        errors["unit"] = "Unit is required"
    elif len(unit) > MAX_UNIT_LENGTH:
        errors["unit"] = f"Unit must be at most {MAX_UNIT_LENGTH} characters"

    if len(description) > MAX_DESCRIPTION_LENGTH:
        errors["description"] = (
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )

    if errors:
        raise InputValidationError(errors)
    return ProductForm(name=name, unit=unit, description=description)


def validate_price_form(form: PriceForm) -> CleanPriceForm:
    errors: dict[str, str] = {}

    price = _positive(form.price, "price", errors)
    quantity = _positive(form.quantity, "quantity", errors)

    store = (form.store or "").strip()
    if not store:
        errors["store"] = "Store name is required"

    if errors:
        raise InputValidationError(errors)
    return CleanPriceForm(
        price=price,  # type: ignore[arg-type]
        quantity=quantity,  # type: ignore[arg-type]
        store=store,
        notes=(form.notes or "").strip(),
        is_on_sale=bool(form.is_on_sale),
        purchase_date=form.purchase_date,
    )


def _positive(raw: str, label: str, errors: dict[str, str]) -> Decimal | None:
    if raw is None or not str(raw).strip():
        errors[label] = f"Enter a {label} greater than zero"
        return None
    try:
        return positive_decimal(raw, label)
    except ValidationError:
        errors[label] = f"Enter a {label} greater than zero"
        return None
