"""
Central version management for proton-usage.
"""

from __future__ import annotations

__all__ = ["__app_name__", "__version__", "__license__"]

__app_name__ = "proton-usage"
__version__ = "0.4.0"
__license__ = "MIT"
