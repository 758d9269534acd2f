"""Base exception for dojo."""


class DojoError(Exception):
    """Root of every error dojo raises on purpose."""
