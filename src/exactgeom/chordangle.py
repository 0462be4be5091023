## chord-angle distances between points on the unit sphere
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

"""Angles stored as squared chord lengths.

The chord between two unit vectors separated by angle ``theta`` has length
``2 sin(theta / 2)``; its square lies in [0, 4] and can be compared with
dot and cross products without trigonometry.  Distance thresholds passed to
the predicates are ``ChordAngle`` values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from exactgeom.vector import to_vector3

MAX_LENGTH2 = 4.0


@dataclass(frozen=True, order=True)
class ChordAngle:
    """Angle in [0, 180] degrees represented by its squared chord length."""

    length2: float

    def __post_init__(self):
        if not 0.0 <= self.length2 <= MAX_LENGTH2:
            raise ValueError(f"length2 must be in [0, 4], got {self.length2}")

    @classmethod
    def from_length2(cls, length2: float) -> "ChordAngle":
        return cls(min(MAX_LENGTH2, float(length2)))

    @classmethod
    def from_radians(cls, radians: float) -> "ChordAngle":
        if radians < 0:
            raise ValueError("negative angles are not supported")
        if radians >= math.pi:
            return cls.straight()
        length = 2.0 * math.sin(0.5 * radians)
        return cls.from_length2(length * length)

    @classmethod
    def from_degrees(cls, degrees: float) -> "ChordAngle":
        return cls.from_radians(math.radians(degrees))

    @classmethod
    def from_points(cls, x: Sequence[float], y: Sequence[float]) -> "ChordAngle":
        """Chord angle between two unit-length points."""
        return cls.from_length2((to_vector3(x) - to_vector3(y)).norm2())

    @classmethod
    def zero(cls) -> "ChordAngle":
        return cls(0.0)

    @classmethod
    def right(cls) -> "ChordAngle":
        return cls(2.0)

    @classmethod
    def straight(cls) -> "ChordAngle":
        return cls(MAX_LENGTH2)

    def radians(self) -> float:
        return 2.0 * math.asin(0.5 * math.sqrt(self.length2))

    def degrees(self) -> float:
        return math.degrees(self.radians())


## 2 - sqrt(2) is the squared chord of a 45 degree angle
DEGREES_45 = ChordAngle(2.0 - math.sqrt(2.0))


__all__ = ["ChordAngle", "DEGREES_45"]
