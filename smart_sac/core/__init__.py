# smart_sac/core/__init__.py
"""Cross-cutting concerns: constants, exceptions, logging, middleware, pagination."""
