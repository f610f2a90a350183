"""Report which compatibility tool each Steam app uses."""

from __future__ import annotations

from proton_usage.version import __version__

__all__ = ["__version__"]
