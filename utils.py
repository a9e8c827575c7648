import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

import pytz


def round_half_up(value: float, places: int) -> float:
    """
    Round to `places` decimals, ties away from zero.

    Works on the exact binary value of the float, so 1.0625 -> 1.063 while
    1.0005 (really 1.000499...) -> 1.0. Non-finite values and magnitudes of
    1e21 and up pass through unchanged. Negative zero comes back as 0.0.
    """
    if not math.isfinite(value) or abs(value) >= 1e21:
        return value + 0.0
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)) + 0.0


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def iso_utc(ts: datetime) -> str:
    # naive values come back from databases that drop the zone; they are UTC
    if ts.tzinfo is None:
        ts = pytz.utc.localize(ts)
    ts = ts.astimezone(pytz.utc).replace(tzinfo=None)
    return ts.isoformat(timespec="milliseconds") + "Z"
