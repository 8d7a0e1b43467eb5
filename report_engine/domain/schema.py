"""Schema domain - data sources, tables, views and their columns."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ColumnType(str, Enum):
    """Semantic column types understood by the engine."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    CURRENCY = "currency"


class DataSourceType(str, Enum):
    """Backends a data source can point at."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SNOWFLAKE = "snowflake"
    CUSTOM = "custom"  # Generative, no live backend

    @property
    def is_generative(self) -> bool:
        """Check if this source type is served by the generative delegate."""
        return self is DataSourceType.CUSTOM


# Known types become ColumnType, anything else is kept verbatim as "unknown"
ColumnTypeValue = Annotated[ColumnType | str, Field(union_mode="left_to_right")]


class ColumnDef(BaseModel):
    """A column discovered in a table or view."""

    id: str
    name: str = Field(..., description="Physical field name")
    type: ColumnTypeValue
    alias: str | None = Field(None, description="User-friendly name")
    description: str | None = None
    sample_value: str | None = None

    is_pii: bool = False
    is_nullable: bool | None = None
    is_primary_key: bool | None = None
    is_unique: bool | None = None

    @property
    def display_name(self) -> str:
        """Alias when set, physical name otherwise."""
        return self.alias or self.name

    @property
    def column_type(self) -> ColumnType | None:
        """Known column type, or None for unknown type strings."""
        return self.type if isinstance(self.type, ColumnType) else None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class ForeignKey(BaseModel):
    """Foreign key metadata (tables only)."""

    id: str
    name: str
    column_name: str
    referenced_table: str
    referenced_column: str
    on_delete: str | None = None
    on_update: str | None = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class Index(BaseModel):
    """Index metadata (tables only)."""

    id: str
    name: str
    columns: list[str] = Field(default_factory=list)
    is_unique: bool = False
    is_primary: bool = False

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class Constraint(BaseModel):
    """Constraint metadata (tables only)."""

    id: str
    name: str
    type: str  # PRIMARY KEY, UNIQUE, CHECK, FOREIGN KEY, DEFAULT
    columns: list[str] = Field(default_factory=list)
    definition: str | None = None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class _Relation(BaseModel):
    """Shared shape of tables and views."""

    id: str
    name: str = Field(..., description="Physical table/view name")
    alias: str | None = None
    description: str | None = None
    columns: list[ColumnDef] = Field(default_factory=list)
    exposed: bool = Field(False, description="Admin toggle to expose for reporting")

    @property
    def display_name(self) -> str:
        """Alias when set, physical name otherwise."""
        return self.alias or self.name

    def find_column(self, ref: str) -> ColumnDef | None:
        """
        Find a column by id, falling back to physical name.

        An id match always wins over a name match on another column.
        """
        for column in self.columns:
            if column.id == ref:
                return column
        for column in self.columns:
            if column.name == ref:
                return column
        return None

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class TableDef(_Relation):
    """A physical table with optional key and constraint metadata."""

    foreign_keys: list[ForeignKey] = Field(default_factory=list)
    indexes: list[Index] = Field(default_factory=list)
    constraints: list[Constraint] = Field(default_factory=list)

    @property
    def is_view(self) -> bool:
        return False

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class ViewDef(_Relation):
    """A read-only view. Resolves exactly like a table."""

    definition: str | None = None

    @property
    def is_view(self) -> bool:
        return True

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


Relation = TableDef | ViewDef


class ConnectionDetails(BaseModel):
    """Connection parameters for a live data source."""

    host: str = ""
    port: str = ""
    database: str = ""
    username: str = ""
    password: str | None = Field(None, repr=False)

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}


class DataSource(BaseModel):
    """
    A data source and its discovered schema.

    A data source without an ``id`` is ephemeral: it has not been persisted
    yet, but is valid for one-shot resolution and acquisition.
    """

    id: str | None = None
    name: str = ""
    description: str = ""
    type: DataSourceType
    connection_details: ConnectionDetails | None = None
    tables: list[TableDef] = Field(default_factory=list)
    views: list[ViewDef] = Field(default_factory=list)
    created_at: str | None = None

    @property
    def is_ephemeral(self) -> bool:
        """Check if the source has no stable id assigned by the store."""
        return not self.id

    @property
    def is_generative(self) -> bool:
        """Check if the source is served by the generative delegate."""
        return self.type.is_generative

    def relations(self) -> list[Relation]:
        """All tables followed by all views."""
        return [*self.tables, *self.views]

    def exposed_relations(self) -> list[Relation]:
        """Tables and views exposed for reporting."""
        return [r for r in self.relations() if r.exposed]

    def source_descriptor(self) -> str | dict[str, Any]:
        """
        Identify the source for a live query.

        Persisted sources are identified by id; ephemeral ones carry their
        full payload so the backend can connect without a lookup.
        """
        if self.id:
            return self.id
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    model_config = {"frozen": True, "populate_by_name": True, "alias_generator": to_camel}
