"""
Version information for the Allscreenshots Python SDK.
"""

from __future__ import annotations

__version__ = "0.1.0"
