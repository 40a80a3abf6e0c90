"""Helper functions

Small, pure helpers shared by the engine and the API layer.
"""

import random
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the DateTime columns are naive)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_uiorn(now: datetime = None, rng: random.Random = None) -> str:
    """Generate an order tracking code

    Format: UIORN{YY}{MM}{NNNN}, NNNN is a zero padded random number.
    """
    now = now or datetime.now()
    rng = rng or random
    suffix = rng.randrange(0, 9999)
    return f"UIORN{now:%y}{now:%m}{suffix:04d}"


def next_bom_version(existing_versions) -> str:
    """Return the next BOM version: highest existing + 0.1, or "1.0"

    Versions that cannot be parsed as numbers are ignored.
    """
    highest = None
    for raw in existing_versions:
        try:
            value = Decimal(str(raw))
        except (InvalidOperation, ValueError):
            continue
        if highest is None or value > highest:
            highest = value
    if highest is None:
        return "1.0"
    return str((highest + Decimal("0.1")).quantize(Decimal("0.1")))


def round_pct(value: float, digits: int = 2) -> float:
    """Round a percentage for display and messages"""
    return round(float(value), digits)
