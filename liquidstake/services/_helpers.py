"""Shared utilities for the service layer."""

import time
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation, localcontext

from web3 import Web3

SECONDS_PER_DAY: int = 24 * 60 * 60

# 9999-12-31T23:59:59Z, the last second datetime can render
MAX_TIMESTAMP: int = 253_402_300_799


def now_ts() -> int:
    """Current wall-clock time as whole epoch seconds."""
    return int(time.time())


def iso_from_ts(ts: int) -> str:
    """ISO-8601 UTC string with millisecond precision and a Z suffix."""
    dt: datetime = datetime.fromtimestamp(ts, tz=UTC)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_date(ts: int) -> str:
    return datetime.fromtimestamp(ts, tz=UTC).date().isoformat()


def parse_ether(raw: str | int | float | Decimal) -> int:
    """Decimal PEAQ amount to wei. Raises ValueError on anything non-numeric."""
    try:
        value: Decimal = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {raw!r}") from e
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {raw!r}")
    return int(Web3.to_wei(value, "ether"))


def format_ether(wei: int) -> str:
    """Wei to a plain decimal string, trailing zeros stripped."""
    with localcontext() as ctx:
        ctx.prec = 80
        return format(Decimal(wei).scaleb(-18).normalize(), "f")
