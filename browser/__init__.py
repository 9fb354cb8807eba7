"""Browser automation package."""

from .controller import BrowserController, ViewportSize

__all__ = [
    "BrowserController",
    "ViewportSize",
]
