"""Field resolution - map report references onto concrete schema columns."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from report_engine.domain.schema import ColumnDef, ColumnType, DataSource, Relation
from report_engine.errors import (
    NotExposedError,
    ResolutionError,
    TableNotFoundError,
    UnknownColumnError,
)
from report_engine.log import get_logger

logger = get_logger(__name__)


class FieldRef(Protocol):
    """Anything that points at a column: report columns, filters, sorts."""

    table_id: str
    column_id: str


@dataclass(frozen=True)
class ResolvedField:
    """A reference resolved to a concrete, exposed column."""

    relation: Relation
    column: ColumnDef

    @property
    def table_name(self) -> str:
        """Physical table/view name."""
        return self.relation.name

    @property
    def column_name(self) -> str:
        """Physical column name (never the alias)."""
        return self.column.name

    @property
    def column_alias(self) -> str | None:
        return self.column.alias

    @property
    def column_type(self) -> ColumnType | str:
        return self.column.type

    @property
    def is_view(self) -> bool:
        return self.relation.is_view


@dataclass
class TableReconciliation:
    """
    Outcome of grouping table references by the relation they point at.

    Attributes:
        relations: Physical relation name -> canonical (first resolvable) ref
        reconciled: Physical relation name -> every ref that mapped onto it,
            only for relations reached through more than one distinct ref
        unresolved: Refs that match no table or view
    """

    relations: dict[str, str] = field(default_factory=dict)
    reconciled: dict[str, list[str]] = field(default_factory=dict)
    unresolved: list[str] = field(default_factory=list)

    @property
    def relation_names(self) -> list[str]:
        return list(self.relations)

    @property
    def is_single_relation(self) -> bool:
        return len(self.relations) <= 1


class FieldResolver:
    """
    Resolve table/column references against a data source.

    References may be ids or names. Tables are searched before views, and an
    id match anywhere wins over a name match.
    """

    def __init__(self, data_source: DataSource) -> None:
        self.data_source = data_source

    def find_relation(self, table_ref: str) -> Relation | None:
        """Find a table or view by id, then by name. Ignores exposure."""
        relations = self.data_source.relations()
        for relation in relations:
            if relation.id == table_ref:
                return relation
        for relation in relations:
            if relation.name == table_ref:
                return relation
        return None

    def resolve_relation(self, table_ref: str, column_ref: str | None = None) -> Relation:
        """
        Find an exposed table or view.

        Raises:
            TableNotFoundError: No relation matches
            NotExposedError: The relation is not exposed for reporting
        """
        relation = self.find_relation(table_ref)
        if relation is None:
            raise TableNotFoundError(table_ref, column_ref)
        if not relation.exposed:
            raise NotExposedError(table_ref, column_ref)
        return relation

    def resolve(self, ref: FieldRef) -> ResolvedField:
        """
        Resolve a reference to its concrete column.

        Raises:
            TableNotFoundError, NotExposedError, UnknownColumnError
        """
        relation = self.resolve_relation(ref.table_id, ref.column_id)
        column = relation.find_column(ref.column_id)
        if column is None:
            raise UnknownColumnError(ref.table_id, ref.column_id)
        return ResolvedField(relation=relation, column=column)

    def try_resolve(self, ref: FieldRef) -> ResolvedField | None:
        """Resolve a reference, returning None instead of raising."""
        try:
            return self.resolve(ref)
        except ResolutionError:
            return None

    def reconcile(self, table_refs: Iterable[str]) -> TableReconciliation:
        """
        Group table references by the physical relation they point at.

        Upstream id generation can give one table several ids. Distinct refs
        that land on the same physical name are reconciled onto the first one
        instead of counting as separate tables. Relations that are not exposed
        count as unresolved.
        """
        result = TableReconciliation()
        seen_refs: dict[str, list[str]] = {}

        for ref in table_refs:
            relation = self.find_relation(ref)
            if relation is None or not relation.exposed:
                if ref not in result.unresolved:
                    result.unresolved.append(ref)
                continue
            refs = seen_refs.setdefault(relation.name, [])
            if ref not in refs:
                refs.append(ref)
            result.relations.setdefault(relation.name, ref)

        for name, refs in seen_refs.items():
            if len(refs) > 1:
                result.reconciled[name] = refs
                logger.warning(
                    f"Reconciled table references {refs} onto '{name}' "
                    f"(using '{result.relations[name]}')"
                )

        return result
