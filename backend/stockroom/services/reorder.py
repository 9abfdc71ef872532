import math
from stockroom.models import Sku

# suggested order brings stock to twice the reorder level's worth of units
SUGGESTED_ORDER_FACTOR = 2


def compute_shortage(qty: int, reorder_level: int) -> int:
    return reorder_level - qty


def compute_suggested_order(reorder_level: int) -> int:
    return reorder_level * SUGGESTED_ORDER_FACTOR


def round_currency(value) -> int:
    """Round half up to a whole currency unit."""
    return int(math.floor(float(value or 0) + 0.5))


def compute_reorder_fields(s: Sku) -> dict:
    qty = s.current_quantity or 0
    level = s.reorder_level or 0

    return {
        "shortage": compute_shortage(qty, level),
        "suggested_order_qty": compute_suggested_order(level),
    }
