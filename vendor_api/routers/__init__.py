"""Routers package — HTTP endpoint definitions.

  vendors.py      — owner-scoped vendor CRUD (/vendors)
  session.py      — current principal (/session)
  diagnostics.py  — store connectivity check (/diagnostics/store)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to vendor_api/services/.
"""
