"""Core package — configuration, errors, pagination, session gate."""
