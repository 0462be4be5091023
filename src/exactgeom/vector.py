## three-component vectors over exact and inexact scalars
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

"""Three-component vectors over an arbitrary scalar type.

The same ``Vector3`` carries ``float`` coordinates for the fast stage,
64-bit ``mpmath`` values for the extended stage and
:class:`~exactgeom.exactfloat.ExactFloat` values for the exact stage, so
each predicate formula is written once.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

from exactgeom.exactfloat import ExactFloat
from exactgeom.precision import LONG_DOUBLE


@dataclass(frozen=True, order=True)
class Vector3:
    """Immutable XYZ vector.  Ordering is lexicographic by coordinate."""

    x: Any
    y: Any
    z: Any

    def __iter__(self) -> Iterator[Any]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, i: int) -> Any:
        return (self.x, self.y, self.z)[i]

    def __len__(self) -> int:
        return 3

    def __add__(self, v: "Vector3") -> "Vector3":
        return Vector3(self.x + v.x, self.y + v.y, self.z + v.z)

    def __sub__(self, v: "Vector3") -> "Vector3":
        return Vector3(self.x - v.x, self.y - v.y, self.z - v.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, s: Any) -> "Vector3":
        return Vector3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def dot(self, v: "Vector3") -> Any:
        return self.x * v.x + self.y * v.y + self.z * v.z

    def cross(self, v: "Vector3") -> "Vector3":
        return Vector3(self.y * v.z - self.z * v.y,
                       self.z * v.x - self.x * v.z,
                       self.x * v.y - self.y * v.x)

    def norm2(self) -> Any:
        return self.dot(self)

    def norm(self, sqrt: Callable[[Any], Any] = math.sqrt) -> Any:
        return sqrt(self.norm2())

    def abs(self) -> "Vector3":
        """Componentwise absolute value."""
        return Vector3(abs(self.x), abs(self.y), abs(self.z))

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0 and self.z == 0

    def cast(self, scalar: Callable[[Any], Any]) -> "Vector3":
        """Convert every coordinate with ``scalar`` (e.g. ``ExactFloat``)."""
        return Vector3(scalar(self.x), scalar(self.y), scalar(self.z))

    def to_exact(self) -> "Vector3":
        return self.cast(ExactFloat)

    def to_long_double(self) -> "Vector3":
        return self.cast(LONG_DOUBLE.scalar)


def cross_abs(u: Vector3, v: Vector3) -> Vector3:
    """Cross product with every subtraction replaced by an addition.

    Applied to componentwise absolute values this bounds the magnitude of
    each term that ``u.cross(v)`` sums, which is what rounding-error bounds
    are expressed in.
    """
    return Vector3(u.y * v.z + u.z * v.y,
                   u.z * v.x + u.x * v.z,
                   u.x * v.y + u.y * v.x)


def to_vector3(point_like: Sequence[float]) -> Vector3:
    """Return a float ``Vector3`` from any XYZ sequence."""

    if isinstance(point_like, Vector3):
        return point_like
    if len(point_like) != 3:
        raise ValueError("point must have exactly three components")
    return Vector3(float(point_like[0]), float(point_like[1]), float(point_like[2]))


__all__ = ["Vector3", "cross_abs", "to_vector3"]
