"""AUD amount wrapper with mixed-arithmetic prevention.

AUD(100) + AUD(200) -> AUD(300)
AUD(100) + 200      -> TypeError
AUD(1200) / 12      -> AUD(100)       (scalar)
AUD(100) / AUD(50)  -> 2.0            (ratio = dimensionless)
sum([AUD(1), AUD(2)])-> AUD(3)        (via __radd__ with 0-check)
f"{AUD(1234.5):,.0f}" -> "1,234"      (via __format__)
format_aud(AUD(150000)) -> "$150,000"

Only the presentation side uses this; the engine works in plain floats.
"""

from __future__ import annotations

from calculator.formulas import round_amount


class AUD:
    """Australian dollar amount."""
    __slots__ = ('_val',)

    def __init__(self, value: float | int | AUD = 0.0):
        if isinstance(value, AUD):
            self._val = value._val
        else:
            self._val = float(value)

    @property
    def value(self) -> float:
        return self._val

    def whole(self) -> int:
        """Nearest whole dollar, halves up."""
        return round_amount(self._val)

    # ── Same-type arithmetic ────────────────────────────────────

    def __add__(self, other):
        # sum() starts with int 0
        if isinstance(other, (int, float)) and other == 0:
            return self
        if not isinstance(other, AUD):
            raise TypeError(f"Cannot add AUD and {type(other).__name__}")
        return AUD(self._val + other._val)

    __radd__ = __add__

    def __sub__(self, other):
        if not isinstance(other, AUD):
            raise TypeError(f"Cannot subtract {type(other).__name__} from AUD")
        return AUD(self._val - other._val)

    # ── Scalar multiplication / division ────────────────────────

    def __mul__(self, other):
        if isinstance(other, (int, float)):
            return AUD(self._val * other)
        raise TypeError(f"Cannot multiply AUD by {type(other).__name__}")

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, AUD):
            return self._val / other._val
        if isinstance(other, (int, float)):
            return AUD(self._val / other)
        raise TypeError(f"Cannot divide AUD by {type(other).__name__}")

    # ── Comparisons ─────────────────────────────────────────────

    def __eq__(self, other):
        if isinstance(other, AUD):
            return self._val == other._val
        if isinstance(other, (int, float)) and other == 0:
            return self._val == 0.0
        return NotImplemented

    def __lt__(self, other):
        if not isinstance(other, AUD):
            raise TypeError(f"'<' not supported between AUD and {type(other).__name__}")
        return self._val < other._val

    def __gt__(self, other):
        if not isinstance(other, AUD):
            raise TypeError(f"'>' not supported between AUD and {type(other).__name__}")
        return self._val > other._val

    def __neg__(self):
        return AUD(-self._val)

    def __bool__(self):
        return self._val != 0.0

    def __hash__(self):
        return hash(("AUD", self._val))

    # ── Display ─────────────────────────────────────────────────

    def __repr__(self):
        return f"AUD({self._val})"

    def __str__(self):
        return format_aud(self)

    def __format__(self, spec):
        return format(self._val, spec)


def format_aud(amount: AUD | float | int, symbol: str = "$") -> str:
    """Whole dollars with thousands separators: $150,000 / -$1,250."""
    whole = AUD(amount).whole()
    sign = "-" if whole < 0 else ""
    return f"{sign}{symbol}{abs(whole):,}"


ZERO_AUD = AUD(0.0)
