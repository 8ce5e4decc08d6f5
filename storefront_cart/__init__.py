"""Stock-aware shopping cart state for storefront clients."""
from __future__ import annotations

__version__ = "1.0.0"
