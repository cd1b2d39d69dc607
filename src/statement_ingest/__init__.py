"""Bank statement ingestion: PDF/CSV parsing, description cleanup and import hand-off."""

__version__ = "0.1.0"
