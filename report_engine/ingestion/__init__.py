"""Ingestion layer - load declarations exported by the host application."""

from report_engine.ingestion.loader import DocumentLoader, load_data_source, load_report

__all__ = ["DocumentLoader", "load_data_source", "load_report"]
