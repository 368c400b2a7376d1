"""Request correlation and structured logging.

Every request gets an ``x-request-id`` that is bound into structlog's
contextvars, so log lines emitted while handling it carry the same id.
"""
