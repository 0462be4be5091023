## working precisions for the triage stages of exactgeom
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

"""Rounding-error constants and the fixed-precision scalars used for triage.

Predicates first try ordinary doubles, then a 64-bit-mantissa scalar
(the width of an x87 ``long double``) before resorting to exact arithmetic.
The extended scalar is an ``mpmath`` context pinned at 64 bits, so its
rounding unit is known and independent of the platform.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

import mpmath

## rounding unit (half an ulp of 1.0) for a p-bit mantissa is 2**-p
DBL_ERR = 2.0 ** -53
LD_ERR = 2.0 ** -64

## machine epsilon of a double (distance from 1.0 to the next double)
DBL_EPSILON = 2.0 ** -52

SQRT3 = 1.7320508075688772935274463415058
SQRT1_2 = 0.70710678118654752440084436210485

LONG_DOUBLE_BITS = 64

_ld = mpmath.MPContext()
_ld.prec = LONG_DOUBLE_BITS


@dataclass(frozen=True)
class Precision:
    """A fixed-precision arithmetic in which triage formulas are evaluated.

    ``err`` is the rounding unit of the arithmetic; error bounds are written
    as multiples of it so one formula serves every precision.
    """

    name: str
    err: float
    scalar: Callable[[Any], Any]
    sqrt: Callable[[Any], Any]


DOUBLE = Precision("double", DBL_ERR, float, math.sqrt)
LONG_DOUBLE = Precision("long double", LD_ERR, _ld.mpf, _ld.sqrt)


__all__ = [
    "DBL_EPSILON",
    "DBL_ERR",
    "DOUBLE",
    "LD_ERR",
    "LONG_DOUBLE",
    "Precision",
    "SQRT1_2",
    "SQRT3",
]
