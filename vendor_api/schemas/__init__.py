"""Pydantic schemas package.

  common.py  — CamelModel base + small response bodies (health, session, status)
  vendor.py  — Vendor request DTOs and response models
"""
