"""snapseal: Interface connections compiled into sandbox policy snippets."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
