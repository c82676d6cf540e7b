"""Vendor API — per-user vendor records over FastAPI + async SQLAlchemy."""

__version__ = "1.0.0"
