"""Label resolution - map returned field names back to human labels."""

from __future__ import annotations

from report_engine.domain.report import ReportColumn, ReportConfig
from report_engine.domain.schema import ColumnDef, DataSource, Relation
from report_engine.resolution.fields import FieldResolver

QUALIFIER_SEPARATOR = "."


def unqualified(field_name: str) -> str:
    """Trailing segment of a ``table.column`` style name."""
    if QUALIFIER_SEPARATOR in field_name:
        return field_name.rsplit(QUALIFIER_SEPARATOR, 1)[-1]
    return field_name


class LabelResolver:
    """
    Resolve display labels for raw field names returned by acquisition.

    Lookup order: report column alias, schema column alias (report relations
    first, then every exposed relation), then the unqualified raw name.
    Never raises.
    """

    def __init__(self, report: ReportConfig, data_source: DataSource | None) -> None:
        self.report = report
        self.data_source = data_source
        self._resolver = FieldResolver(data_source) if data_source is not None else None

    def label_for(self, raw_field_name: str) -> str:
        """Get the display label for a raw field name."""
        key = unqualified(str(raw_field_name))
        try:
            column = self.report_column_for(key)
            if column is not None and column.alias:
                return column.alias

            schema_column = self._schema_column_for(key)
            if schema_column is not None and schema_column.alias:
                return schema_column.alias
        except Exception:
            # Degrade to the raw name on any malformed schema/report input
            return key
        return key

    def report_column_for(self, key: str) -> ReportColumn | None:
        """Find the selected column a returned field belongs to."""
        for column in self.report.selected_columns:
            if column.column_id == key:
                return column
            if self._resolver is None:
                continue
            resolved = self._resolver.try_resolve(column)
            if resolved is not None and key in (resolved.column_name, resolved.column.id):
                return column
        return None

    def qualified_label(self, table_ref: str, column_ref: str) -> str:
        """
        ``Table.Column`` label using aliases where set.

        Unknown references fall back to the raw refs.
        """
        relation = self._resolver.find_relation(table_ref) if self._resolver else None
        column = relation.find_column(column_ref) if relation is not None else None
        table_label = relation.display_name if relation is not None else table_ref
        column_label = column.display_name if column is not None else column_ref
        return f"{table_label}{QUALIFIER_SEPARATOR}{column_label}"

    def _report_relations(self) -> list[Relation]:
        if self._resolver is None:
            return []
        relations: list[Relation] = []
        for ref in self.report.table_refs():
            relation = self._resolver.find_relation(ref)
            if relation is not None and relation.exposed and relation not in relations:
                relations.append(relation)
        return relations

    def _schema_column_for(self, key: str) -> ColumnDef | None:
        if self.data_source is None:
            return None
        candidates = [*self._report_relations(), *self.data_source.exposed_relations()]
        for relation in candidates:
            column = relation.find_column(key)
            if column is not None:
                return column
        return None


def label_for(
    raw_field_name: str,
    report: ReportConfig,
    data_source: DataSource | None,
) -> str:
    """Get the display label for a raw field name. Never raises."""
    return LabelResolver(report, data_source).label_for(raw_field_name)
