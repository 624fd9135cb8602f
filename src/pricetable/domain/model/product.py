"""Product entity.

Products live independently of the prices recorded against them. A
product only carries what the user typed in: a name, the unit prices
are compared in, and an optional description.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime

from pricetable.domain.exceptions import ValidationError
from pricetable.domain.model.value_objects import generate_id, utc_now

# Fields a patch may touch. ``id`` and ``created_at`` are fixed at creation.
_PATCHABLE = frozenset({"name", "unit", "description"})


@dataclass(frozen=True)
class Product:
    """A trackable item.

    Instances are immutable: ``updated()`` returns a new Product so a
    collection can keep its last committed snapshot untouched.
    """

    id: str
    name: str
    unit: str
    description: str
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(name: str, unit: str = "", description: str = "") -> Product:
        """Build a brand-new product with a fresh id and timestamps."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        now = utc_now()
        return Product(
            id=generate_id(),
            name=name.strip(),
            unit=(unit or "").strip(),
            description=(description or "").strip(),
            created_at=now,
            updated_at=now,
        )

    def updated(self, **changes: str) -> Product:
        """Shallow-merge *changes* and refresh ``updated_at``."""
        unknown = set(changes) - _PATCHABLE
        if unknown:
            raise ValidationError(
                f"Cannot patch product field(s): {', '.join(sorted(unknown))}"
            )
        if "name" in changes and not (changes["name"] or "").strip():
            raise ValidationError("Product name is required")
        cleaned = {key: (value or "").strip() for key, value in changes.items()}
        return dataclasses.replace(self, **cleaned, updated_at=utc_now())
