"""Middleware package — request logging."""
