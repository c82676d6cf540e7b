"""Repositories package — owner-scoped data access (see base.OwnedRepository)."""
