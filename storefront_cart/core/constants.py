"""Application-wide constants and configuration defaults.

Centralizes the storage key, timeouts and endpoint defaults so the
cart service and its collaborators agree on them.
"""

# ============== STORAGE ==============
CART_STORAGE_KEY = "@RocketShoes:cart"
CART_TTL_SECONDS = 0  # 0 - entry never expires

# ============== CATALOG API ==============
DEFAULT_CATALOG_API_URL = "http://localhost:3333"
CATALOG_TIMEOUT_SECONDS = 10.0
STOCK_PATH = "stock"
PRODUCTS_PATH = "products"

# ============== REDIS ==============
REDIS_SOCKET_TIMEOUT_SECONDS = 5

# ============== CART ==============
MIN_ITEM_AMOUNT = 1
