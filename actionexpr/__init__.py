"""Types of workflow expression values, built-in signatures and glob filter validation."""

__version__ = "0.1.0"
__all__ = ["glob", "signatures", "types"]