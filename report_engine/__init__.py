"""
report-engine: Report resolution and presentation against discovered schemas.

Architecture:
    ReportConfig + DataSource → Dispatcher (resolve, validate) → Delegate → Rows → Presentation

Layers:
    - domain/: Schema, report and formatting types plus the type-operator matrix
    - resolution/: Field and label resolution against a schema
    - acquisition/: Dispatch to live or generative delegates, report-view sessions
    - presentation/: Type-aware value formatting and table/series shaping

Key Concepts:
    - References (table/column) may be ids or names; resolution accepts either
    - Unexposed tables and views are never resolvable
    - Custom data sources have no live backend and always go to the generative delegate
"""

__version__ = "0.1.0"
