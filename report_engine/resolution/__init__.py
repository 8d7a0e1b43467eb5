"""Resolution layer - field and label lookup against a data source schema."""

from report_engine.resolution.fields import (
    FieldRef,
    FieldResolver,
    ResolvedField,
    TableReconciliation,
)
from report_engine.resolution.labels import LabelResolver, label_for, unqualified

__all__ = [
    "FieldRef",
    "FieldResolver",
    "LabelResolver",
    "ResolvedField",
    "TableReconciliation",
    "label_for",
    "unqualified",
]
