# rent_or_sell/core/normalize/__init__.py
from __future__ import annotations

from .form import (
    FORM_KEYS,
    NUMERIC_FIELDS,
    default_form,
    normalize_form,
    repaired_fields,
    to_form,
)

__all__ = [
    "FORM_KEYS",
    "NUMERIC_FIELDS",
    "default_form",
    "normalize_form",
    "repaired_fields",
    "to_form",
]
