## arbitrary-precision binary floating point for exactgeom
## Copyright (c) 2026 the exactgeom authors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Arbitrary-precision binary floating point for exact geometric predicates.

====================
OVERVIEW
====================

``ExactFloat`` represents a value ``sign * mantissa * 2**bn_exp`` where the
mantissa is an unbounded non-negative Python ``int``.  Addition, subtraction
and multiplication are exact.  Values also carry the IEEE-754 special states
(signed zero, signed infinity, NaN), and the arithmetic reproduces the IEEE
rules for them.

The type exists to back the exact stage of the predicates in
:mod:`exactgeom.predicates`; it is not a general replacement for ``float``
and deliberately has no division or square root.  A result whose mantissa
would need more than ``MAX_PREC`` bits becomes NaN instead of being rounded,
so an inexact computation can never masquerade as an exact one.

Canonical form: the mantissa of a normal value is always odd (trailing zero
bits are folded into the exponent), so equal values have identical fields.

Rounding is never implicit.  It happens only when a caller asks for it, via
``round_to_max_bits``, the integer rounding methods or ``to_double``.
"""

from __future__ import annotations

import logging
import math
import sys
from enum import Enum
from typing import Tuple, Union

logger = logging.getLogger(__name__)

## number of mantissa bits in an IEEE double, including the hidden bit
DOUBLE_MANTISSA_BITS = 53

## limits on the exponent of a normal value; values whose exponent falls
## outside [MIN_EXP, MAX_EXP] underflow to zero or overflow to infinity
MAX_EXP = 200 * 1000 * 1000
MIN_EXP = -MAX_EXP

## maximum mantissa width in bits; wider results become NaN
MAX_PREC = 64 << 20

## fewest significant digits used by ``to_string``
MIN_SIGNIFICANT_DIGITS = 10

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

## values returned by ``ilogb`` for zero, NaN and infinity (glibc x86)
ILOGB0 = -(1 << 31)
ILOGBNAN = -(1 << 31)
ILOGBINF = (1 << 31) - 1

_LOG10_2 = math.log10(2.0)

Number = Union["ExactFloat", int, float]


class RoundingMode(Enum):
    """Rounding modes understood by ``ExactFloat.round_to_max_bits``."""

    TIES_TO_EVEN = "ties_to_even"
    TIES_AWAY_FROM_ZERO = "ties_away_from_zero"
    TOWARD_ZERO = "toward_zero"
    AWAY_FROM_ZERO = "away_from_zero"
    TOWARD_POSITIVE = "toward_positive"
    TOWARD_NEGATIVE = "toward_negative"


class Kind(Enum):
    """Classification of an ``ExactFloat`` value."""

    NORMAL = "normal"
    ZERO = "zero"
    INF = "inf"
    NAN = "nan"


def _low_zero_bits(n: int) -> int:
    """Number of trailing zero bits of a positive integer."""
    return (n & -n).bit_length() - 1


def _decimal_string(n: int) -> str:
    # str() refuses very long integers, so split large values in halves.
    if n.bit_length() <= 12000:
        return str(n)
    half = int(n.bit_length() * _LOG10_2) // 2
    hi, lo = divmod(n, 10 ** half)
    return _decimal_string(hi) + _decimal_string(lo).zfill(half)


def _increment_decimal_digits(digits: str) -> str:
    kept = digits.rstrip("9")
    nines = len(digits) - len(kept)
    if not kept:
        return "1" + "0" * nines
    return kept[:-1] + chr(ord(kept[-1]) + 1) + "0" * nines


class ExactFloat:
    """Immutable arbitrary-precision binary floating-point value.

    ``ExactFloat(x)`` converts an ``int``, a ``float`` or another
    ``ExactFloat`` exactly.  Plain ints and floats are also accepted as the
    other operand of every arithmetic and comparison operator.
    """

    __slots__ = ("_sign", "_kind", "_bn_exp", "_bn")

    def __init__(self, value: Number = 0):
        if isinstance(value, ExactFloat):
            src = value
        elif isinstance(value, int):
            src = ExactFloat._from_parts(1 if value >= 0 else -1, abs(value), 0)
        elif isinstance(value, float):
            src = ExactFloat._from_double(value)
        else:
            raise TypeError(
                f"cannot convert {type(value).__name__} to ExactFloat")
        self._sign = src._sign
        self._kind = src._kind
        self._bn_exp = src._bn_exp
        self._bn = src._bn

    ## construction helpers

    @classmethod
    def _raw(cls, sign: int, kind: Kind, bn_exp: int = 0, bn: int = 0) -> "ExactFloat":
        r = object.__new__(cls)
        r._sign = sign
        r._kind = kind
        r._bn_exp = bn_exp
        r._bn = bn
        return r

    @classmethod
    def _from_parts(cls, sign: int, bn: int, bn_exp: int) -> "ExactFloat":
        """Return the canonical form of ``sign * bn * 2**bn_exp``."""
        if bn == 0:
            return cls.signed_zero(sign)
        exp = bn_exp + bn.bit_length()
        if exp < MIN_EXP:
            return cls.signed_zero(sign)
        if exp > MAX_EXP:
            return cls.infinity(sign)
        shift = _low_zero_bits(bn)
        if shift:
            bn >>= shift
            bn_exp += shift
        if bn.bit_length() > MAX_PREC:
            logger.debug("ExactFloat result exceeds %d bits of precision", MAX_PREC)
            return cls.nan()
        return cls._raw(sign, Kind.NORMAL, bn_exp, bn)

    @classmethod
    def _from_double(cls, v: float) -> "ExactFloat":
        sign = -1 if math.copysign(1.0, v) < 0 else 1
        if math.isnan(v):
            return cls.nan()
        if math.isinf(v):
            return cls.infinity(sign)
        if v == 0.0:
            return cls.signed_zero(sign)
        # frexp() yields a fraction in [0.5, 1), which becomes an integer
        # once shifted left by the width of a double's mantissa.
        f, exp = math.frexp(abs(v))
        m = int(math.ldexp(f, DOUBLE_MANTISSA_BITS))
        return cls._from_parts(sign, m, exp - DOUBLE_MANTISSA_BITS)

    @classmethod
    def signed_zero(cls, sign: int = 1) -> "ExactFloat":
        return cls._raw(-1 if sign < 0 else 1, Kind.ZERO)

    @classmethod
    def infinity(cls, sign: int = 1) -> "ExactFloat":
        return cls._raw(-1 if sign < 0 else 1, Kind.INF)

    @classmethod
    def nan(cls) -> "ExactFloat":
        return cls._raw(1, Kind.NAN)

    @staticmethod
    def _coerce(value) -> "ExactFloat":
        if isinstance(value, ExactFloat):
            return value
        if isinstance(value, (int, float)):
            return ExactFloat(value)
        return NotImplemented

    def _with_sign(self, sign: int) -> "ExactFloat":
        return ExactFloat._raw(sign, self._kind, self._bn_exp, self._bn)

    ## classification

    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def sign(self) -> int:
        """+1 or -1, meaningful for zeros and infinities too."""
        return self._sign

    @property
    def mantissa(self) -> int:
        """The odd mantissa of a normal value, or 0."""
        return self._bn

    @property
    def bn_exp(self) -> int:
        """Exponent applied to ``mantissa``; 0 for special values."""
        return self._bn_exp

    def is_zero(self) -> bool:
        return self._kind is Kind.ZERO

    def is_inf(self) -> bool:
        return self._kind is Kind.INF

    def is_nan(self) -> bool:
        return self._kind is Kind.NAN

    def is_normal(self) -> bool:
        return self._kind is Kind.NORMAL

    def is_finite(self) -> bool:
        return self._kind in (Kind.NORMAL, Kind.ZERO)

    def signbit(self) -> bool:
        return self._sign < 0

    def sgn(self) -> int:
        """Return -1, 0 or +1.  NaN reports its sign bit, as ``signbit`` would."""
        if self._kind is Kind.ZERO:
            return 0
        return self._sign

    def prec(self) -> int:
        """Number of significant bits in the mantissa (0 for special values)."""
        return self._bn.bit_length()

    def exp(self) -> int:
        """Base-2 exponent for a mantissa scaled into [0.5, 1)."""
        if not self.is_normal():
            raise ValueError("exp() is only defined for normal values")
        return self._bn_exp + self._bn.bit_length()

    ## conversion

    def to_double(self) -> float:
        """Round to the nearest double, ties to even."""
        if self.prec() <= DOUBLE_MANTISSA_BITS:
            return self._to_double_helper()
        r = self.round_to_max_bits(DOUBLE_MANTISSA_BITS, RoundingMode.TIES_TO_EVEN)
        return r._to_double_helper()

    def _to_double_helper(self) -> float:
        if self._kind is Kind.ZERO:
            return math.copysign(0.0, self._sign)
        if self._kind is Kind.INF:
            return math.copysign(math.inf, self._sign)
        if self._kind is Kind.NAN:
            return math.copysign(math.nan, self._sign)
        try:
            return self._sign * math.ldexp(float(self._bn), self._bn_exp)
        except OverflowError:
            return math.copysign(math.inf, self._sign)

    def __float__(self) -> float:
        return self.to_double()

    def __bool__(self) -> bool:
        return self._kind is not Kind.ZERO

    ## rounding

    def round_to_max_bits(self, max_prec: int, mode: RoundingMode) -> "ExactFloat":
        """Round to at most ``max_prec`` significant bits using ``mode``."""
        # Ties-to-even needs two bits, otherwise both neighbours may be odd.
        if max_prec < 2 or max_prec > MAX_PREC:
            raise ValueError(f"max_prec must be in [2, {MAX_PREC}], got {max_prec}")
        shift = self.prec() - max_prec
        if shift <= 0:
            return self
        # Rounding up to a power of two can lengthen the mantissa by one bit,
        # but canonicalization then strips at least one zero bit again.
        return self.round_to_power_of2(self._bn_exp + shift, mode)

    def round_to_power_of2(self, bit_exp: int, mode: RoundingMode) -> "ExactFloat":
        """Round to a multiple of ``2**bit_exp`` using ``mode``."""
        if not isinstance(mode, RoundingMode):
            raise TypeError(f"unknown rounding mode {mode!r}")
        if not self.is_normal():
            return self
        shift = bit_exp - self._bn_exp
        if shift <= 0:
            return self

        if mode is RoundingMode.TOWARD_POSITIVE:
            mode = (RoundingMode.AWAY_FROM_ZERO if self._sign > 0
                    else RoundingMode.TOWARD_ZERO)
        elif mode is RoundingMode.TOWARD_NEGATIVE:
            mode = (RoundingMode.TOWARD_ZERO if self._sign > 0
                    else RoundingMode.AWAY_FROM_ZERO)

        bn = self._bn
        increment = False
        if mode is RoundingMode.TIES_AWAY_FROM_ZERO:
            # highest discarded bit set
            increment = bool((bn >> (shift - 1)) & 1)
        elif mode is RoundingMode.AWAY_FROM_ZERO:
            # any discarded bit set
            increment = _low_zero_bits(bn) < shift
        elif mode is RoundingMode.TIES_TO_EVEN:
            # w/xyz with w the lowest kept bit:
            #   ./0.*     fraction < 1/2, keep
            #   0/10*     tie, kept part even, keep
            #   1/10*     tie, kept part odd, increment
            #   ./1.*1.*  fraction > 1/2, increment
            increment = bool((bn >> (shift - 1)) & 1) and (
                bool((bn >> shift) & 1) or _low_zero_bits(bn) < shift - 1)
        r = (bn >> shift) + (1 if increment else 0)
        return ExactFloat._from_parts(self._sign, r, self._bn_exp + shift)

    def ceil(self) -> "ExactFloat":
        return self.round_to_power_of2(0, RoundingMode.TOWARD_POSITIVE)

    def floor(self) -> "ExactFloat":
        return self.round_to_power_of2(0, RoundingMode.TOWARD_NEGATIVE)

    def trunc(self) -> "ExactFloat":
        return self.round_to_power_of2(0, RoundingMode.TOWARD_ZERO)

    def round(self) -> "ExactFloat":
        """Round to an integer, ties away from zero (C ``round``)."""
        return self.round_to_power_of2(0, RoundingMode.TIES_AWAY_FROM_ZERO)

    def rint(self) -> "ExactFloat":
        """Round to an integer, ties to even (C ``rint``)."""
        return self.round_to_power_of2(0, RoundingMode.TIES_TO_EVEN)

    def to_integer(self, mode: RoundingMode) -> int:
        """Round with ``mode`` and clamp into the signed 64-bit range.

        NaN maps to ``INT64_MAX``, as the C library conversions do.
        """
        r = self.round_to_power_of2(0, mode)
        if r.is_nan():
            return INT64_MAX
        if r.is_zero():
            return 0
        if r.is_normal() and r.exp() < 64:
            value = r._sign * (r._bn << r._bn_exp)
            return max(INT64_MIN, min(INT64_MAX, value))
        return INT64_MIN if r._sign < 0 else INT64_MAX

    def lrint(self) -> int:
        return self.to_integer(RoundingMode.TIES_TO_EVEN)

    def lround(self) -> int:
        return self.to_integer(RoundingMode.TIES_AWAY_FROM_ZERO)

    ## exponent manipulation

    def copysign(self, other: Number) -> "ExactFloat":
        other = ExactFloat._coerce(other)
        return self._with_sign(other._sign)

    def ldexp(self, exp: int) -> "ExactFloat":
        """Return ``self * 2**exp``, saturating to zero or infinity."""
        if not self.is_normal():
            return self
        a_exp = self.exp()
        exp = min(MAX_EXP + 1 - a_exp, max(MIN_EXP - 1 - a_exp, exp))
        return ExactFloat._from_parts(self._sign, self._bn, self._bn_exp + exp)

    def frexp(self) -> Tuple["ExactFloat", int]:
        """Split into a fraction in [0.5, 1) and a power of two."""
        if not self.is_normal():
            return self, 0
        exp = self.exp()
        return self.ldexp(-exp), exp

    def ilogb(self) -> int:
        if self.is_zero():
            return ILOGB0
        if self.is_inf():
            return ILOGBINF
        if self.is_nan():
            return ILOGBNAN
        return self.exp() - 1

    def logb(self) -> "ExactFloat":
        if self.is_zero():
            return ExactFloat.infinity(-1)
        if self.is_inf():
            return ExactFloat.infinity(1)
        if self.is_nan():
            return self
        return ExactFloat(self.exp() - 1)

    ## arithmetic

    @staticmethod
    def _signed_sum(a_sign: int, a: "ExactFloat", b_sign: int, b: "ExactFloat") -> "ExactFloat":
        if not a.is_normal() or not b.is_normal():
            if a.is_nan():
                return a
            if b.is_nan():
                return b
            if a.is_inf():
                if b.is_inf() and a_sign != b_sign:
                    return ExactFloat.nan()
                return ExactFloat.infinity(a_sign)
            if b.is_inf():
                return ExactFloat.infinity(b_sign)
            if a.is_zero():
                if not b.is_zero():
                    return b._with_sign(b_sign)
                # -0 + -0 is -0, any other pair of zeros is +0
                return ExactFloat.signed_zero(a_sign if a_sign == b_sign else 1)
            return a._with_sign(a_sign)

        if a._bn_exp < b._bn_exp:
            a_sign, a, b_sign, b = b_sign, b, a_sign, a
        a_bn = a._bn << (a._bn_exp - b._bn_exp)
        if a_sign == b_sign:
            return ExactFloat._from_parts(a_sign, a_bn + b._bn, b._bn_exp)
        diff = a_bn - b._bn
        if diff == 0:
            return ExactFloat.signed_zero(1)
        if diff < 0:
            return ExactFloat._from_parts(b_sign, -diff, b._bn_exp)
        return ExactFloat._from_parts(a_sign, diff, b._bn_exp)

    def __add__(self, other):
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        return ExactFloat._signed_sum(self._sign, self, other._sign, other)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        return ExactFloat._signed_sum(self._sign, self, -other._sign, other)

    def __rsub__(self, other):
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        return ExactFloat._signed_sum(other._sign, other, -self._sign, self)

    def __mul__(self, other):
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        sign = self._sign * other._sign
        if not self.is_normal() or not other.is_normal():
            if self.is_nan():
                return self
            if other.is_nan():
                return other
            if self.is_inf() or other.is_inf():
                if self.is_zero() or other.is_zero():
                    return ExactFloat.nan()
                return ExactFloat.infinity(sign)
            return ExactFloat.signed_zero(sign)
        return ExactFloat._from_parts(sign, self._bn * other._bn,
                                      self._bn_exp + other._bn_exp)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self) -> "ExactFloat":
        return self._with_sign(-self._sign)

    def __pos__(self) -> "ExactFloat":
        return self

    def __abs__(self) -> "ExactFloat":
        return self._with_sign(1)

    ## comparison

    def __eq__(self, other) -> bool:
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        if self.is_nan() or other.is_nan():
            return False
        if self.is_zero() and other.is_zero():
            return True
        return (self._kind is other._kind and self._sign == other._sign
                and self._bn_exp == other._bn_exp and self._bn == other._bn)

    def _unsigned_less(self, other: "ExactFloat") -> bool:
        if self.is_inf() or other.is_zero():
            return False
        if self.is_zero() or other.is_inf():
            return True
        cmp = self.exp() - other.exp()
        if cmp != 0:
            return cmp < 0
        # same leading bit position: align the exponents and compare mantissas
        if self._bn_exp >= other._bn_exp:
            return (self._bn << (self._bn_exp - other._bn_exp)) < other._bn
        return self._bn < (other._bn << (other._bn_exp - self._bn_exp))

    def __lt__(self, other) -> bool:
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        if self.is_nan() or other.is_nan():
            return False
        if self.is_zero() and other.is_zero():
            return False
        if self._sign != other._sign:
            return self._sign < other._sign
        if self._sign > 0:
            return self._unsigned_less(other)
        return other._unsigned_less(self)

    def __le__(self, other) -> bool:
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        if self.is_nan() or other.is_nan():
            return False
        return not other < self

    def __gt__(self, other) -> bool:
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        return other < self

    def __ge__(self, other) -> bool:
        other = ExactFloat._coerce(other)
        if other is NotImplemented:
            return other
        return other <= self

    def __hash__(self) -> int:
        if self.is_nan():
            return object.__hash__(self)
        if self.is_zero():
            return hash(0)
        if self.is_inf():
            return hash(math.copysign(math.inf, self._sign))
        # Same reduction modulo sys.hash_info.modulus as int, float and
        # Fraction, so numerically equal values hash alike.
        modulus = sys.hash_info.modulus
        h = self._bn % modulus * pow(2, self._bn_exp, modulus) % modulus
        if self._sign < 0:
            h = -h
        return -2 if h == -1 else h

    ## formatting

    def _decimal_digits(self, max_digits: int) -> Tuple[str, int]:
        """Return at most ``max_digits`` significant digits and the decimal
        exponent for a mantissa in [0.1, 1)."""
        if self._bn_exp >= 0:
            bn = self._bn << self._bn_exp
            exp10 = 0
        else:
            # bn * 2**e == (bn * 5**-e) * 10**e
            bn = self._bn * 5 ** (-self._bn_exp)
            exp10 = self._bn_exp
        all_digits = _decimal_string(bn)
        num_digits = len(all_digits)
        if num_digits <= max_digits:
            digits = all_digits
        else:
            digits = all_digits[:max_digits]
            # printf rounding: ties go to the even digit
            next_digit = all_digits[max_digits]
            if next_digit > "5" or (next_digit == "5" and (
                    int(all_digits[max_digits - 1]) & 1
                    or all_digits[max_digits + 1:].strip("0"))):
                digits = _increment_decimal_digits(digits)
            exp10 += num_digits - max_digits
        stripped = digits.rstrip("0")
        exp10 += len(digits) - len(stripped)
        return stripped, exp10 + len(stripped)

    def to_string_with_max_digits(self, max_digits: int) -> str:
        """Format using at most ``max_digits`` significant digits.

        The output follows the ``%g`` conventions: fixed notation unless the
        exponent is below -4 or not less than ``max_digits``, and trailing
        zeros are dropped.
        """
        if max_digits <= 0:
            raise ValueError("max_digits must be positive")
        if not self.is_normal():
            if self.is_nan():
                return "nan"
            if self.is_zero():
                return "-0" if self._sign < 0 else "0"
            return "-inf" if self._sign < 0 else "inf"
        digits, exp10 = self._decimal_digits(max_digits)
        out = "-" if self._sign < 0 else ""
        if exp10 <= -4 or exp10 > max_digits:
            out += digits[0]
            if len(digits) > 1:
                out += "." + digits[1:]
            out += f"e{exp10 - 1:+02d}"
        elif exp10 > 0:
            if exp10 >= len(digits):
                out += digits + "0" * (exp10 - len(digits))
            else:
                out += digits[:exp10] + "." + digits[exp10:]
        else:
            out += "0." + "0" * (-exp10) + digits
        return out

    @staticmethod
    def num_significant_digits_for_prec(prec: int) -> int:
        """Decimal digits sufficient to represent ``prec`` bits exactly."""
        return int(1 + math.ceil(prec * _LOG10_2))

    def to_string(self) -> str:
        max_digits = max(MIN_SIGNIFICANT_DIGITS,
                         self.num_significant_digits_for_prec(self.prec()))
        return self.to_string_with_max_digits(max_digits)

    def to_unique_string(self) -> str:
        """Like ``to_string`` but tagged with the precision, e.g. ``0.5<1>``."""
        return f"{self.to_string()}<{self.prec()}>"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ExactFloat({self.to_string()})"


def fmax(a: Number, b: Number) -> ExactFloat:
    """Larger of ``a`` and ``b``; NaN loses to any number and +0 beats -0."""
    a, b = ExactFloat(a), ExactFloat(b)
    if a.is_nan():
        return b
    if b.is_nan():
        return a
    if a.sign != b.sign:
        return b if a.sign < b.sign else a
    return b if a < b else a


def fmin(a: Number, b: Number) -> ExactFloat:
    """Smaller of ``a`` and ``b``; NaN loses to any number and -0 beats +0."""
    a, b = ExactFloat(a), ExactFloat(b)
    if a.is_nan():
        return b
    if b.is_nan():
        return a
    if a.sign != b.sign:
        return a if a.sign < b.sign else b
    return a if a < b else b


def fdim(a: Number, b: Number) -> ExactFloat:
    """Positive difference ``max(a - b, 0)``, NaN if either input is NaN."""
    a, b = ExactFloat(a), ExactFloat(b)
    if a <= b:
        return ExactFloat(0)
    return a - b


__all__ = [
    "DOUBLE_MANTISSA_BITS",
    "ExactFloat",
    "Kind",
    "MAX_EXP",
    "MAX_PREC",
    "MIN_EXP",
    "RoundingMode",
    "fdim",
    "fmax",
    "fmin",
]
