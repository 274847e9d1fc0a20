"""Mini README: Core package initializer for the Budget View client.

This module exposes convenience imports so callers can reach shared
services without knowing the exact module structure. It stays lightweight
so importing the package never pulls in the web stack.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
