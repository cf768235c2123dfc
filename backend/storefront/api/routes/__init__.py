"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Order placement logic lives in services/order_placement.py, not in the route
"""
