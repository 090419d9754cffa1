import time
import secrets
import string
from typing import Optional


BASE36_ALPHABET = string.digits + string.ascii_lowercase
ORDER_NUMBER_PREFIX = "ORD"


# ----------------------------
# Helpers
# ----------------------------
def now_ts() -> float:
    return time.time()


def to_base36(n: int) -> str:
    if n < 0:
        raise ValueError("negative numbers have no base36 form here")
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(BASE36_ALPHABET[rem])
    return "".join(reversed(digits))


def new_order_number(ts: Optional[float] = None) -> str:
    """ORD-<base36 millis>-<5 random base36 chars>, uppercased.

    Unique with high probability only; nothing checks it against stored
    orders before insertion.
    """
    millis = int((now_ts() if ts is None else ts) * 1000)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(5))
    return f"{ORDER_NUMBER_PREFIX}-{to_base36(millis)}-{suffix}".upper()
