"""
Partial product updates.

A PUT body names only the fields it changes.  ``ProductUpdate`` keeps one
slot per updatable field and uses the ``UNSET`` sentinel for "not in the
request", so that an absent description and ``description=None`` (clear
it) stay distinguishable.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, ClassVar

from inventory_engine.exceptions import ValidationError


class _Unset:
    """Marker for a field that was not supplied."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ProductUpdate:
    """
    Requested changes to a product's descriptive fields.

    Stock is deliberately absent: stock only moves through stock
    adjustments and recorded transactions.
    """

    name: Any = UNSET
    description: Any = UNSET
    price: Any = UNSET
    category_id: Any = UNSET

    # request body key -> field name
    BODY_KEYS: ClassVar[dict[str, str]] = {
        "name": "name",
        "description": "description",
        "price": "price",
        "categoryId": "category_id",
    }

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> ProductUpdate:
        """
        Build an update from the keys present in a request body.

        Keys other than the updatable fields are ignored, except ``stock``,
        which is rejected outright.
        """
        if "stock" in body:
            raise ValidationError(
                "Stock cannot be updated directly; record a transaction or adjust stock",
                ["stock"],
            )
        values = {
            attr: body[key] for key, attr in cls.BODY_KEYS.items() if key in body
        }
        return cls(**values)

    def present(self) -> dict[str, Any]:
        """Fields that were supplied, keyed by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }
