import re
from decimal import ROUND_HALF_UP, Decimal, localcontext


_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")

# Leading "-", "•" or "1." style markers. Best effort: "1.5 ETH ..." loses its
# number too.
_BULLET_RE = re.compile(r"^[-•\d.]+\s*")


def is_evm_address(address: str) -> bool:
    """EVM: 0x + 40 hex chars"""
    return bool(_EVM_ADDRESS_RE.match(address.strip()))


def short_address(address: str, chars: int = 6) -> str:
    """Truncate: 0x1234...abcd"""
    if len(address) <= chars * 2 + 3:
        return address
    return f"{address[:chars]}...{address[-chars:]}"


def format_units(value: int, decimals: int = 18) -> str:
    """Integer base units -> exact decimal string, always with a fraction ("1.0")."""
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(int(value)), 10 ** decimals)
    frac_digits = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{frac_digits or '0'}"


def format_token_amount(value: int, decimals: int = 18, places: int = 4) -> str:
    """Integer base units -> decimal string rounded to `places` fraction digits."""
    with localcontext() as ctx:
        ctx.prec = 100
        amount = Decimal(format_units(value, decimals))
        return str(amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def parse_bullets(text: str) -> list[str]:
    """Split a free-text reply into bullet lines with their markers stripped."""
    items: list[str] = []
    for line in text.split("\n"):
        line = line.strip()
        if not line:
            continue
        cleaned = _BULLET_RE.sub("", line, count=1)
        if cleaned:
            items.append(cleaned)
    return items
