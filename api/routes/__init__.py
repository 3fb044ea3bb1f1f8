"""API route handlers."""

from api.routes import health, tree, verify

__all__ = ["health", "tree", "verify"]
