## exact geometric predicates on the sphere for exactgeom
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

"""Exact geometric predicates for points on the unit sphere.

====================
OVERVIEW
====================

Every predicate in this module answers a sign question (-1, 0, +1) or a
three-way exclusion question about points given as XYZ triples.  Points are
expected to be unit length to within a few units of double rounding; the
answers are those the predicate would give if every point were projected
exactly onto the sphere.

Each predicate is evaluated as a cascade:

1. **triage**: the defining formula is evaluated in double precision
   together with a conservative bound on its rounding error.  If the
   computed value is farther from zero than the bound, its sign is final.
   When double precision is inconclusive the same formula is retried at
   64-bit mantissa precision (see :mod:`exactgeom.precision`).

2. **exact**: the formula is recomputed with
   :class:`~exactgeom.exactfloat.ExactFloat`, which never rounds.  A nonzero
   result is the true answer.

3. **symbolic perturbation**: an exact zero means the input is genuinely
   degenerate.  Predicates whose callers need a strict answer then break
   the tie by a fixed rule.

Perturbation rule
-----------------

Input points are totally ordered lexicographically by (x, y, z).  Point
number ``i`` in that order is treated as displaced by
``eps ** (3 ** (2 - i))`` times a unit basis vector, with ``eps``
infinitesimal, in the manner of *Simulation of Simplicity* (Edelsbrunner
and Muecke).  Expanding the perturbed determinant gives a fixed sequence of
minors and coordinates (see :func:`symbolically_perturbed_sign`); the first
nonzero term decides.  The answer depends only on the set of points, never
on the argument order beyond the permutation sign, so ``sign`` remains
antisymmetric and free of cycles on degenerate input.

Distance predicates use the "pedestal" form of the same idea: a point that
sorts earlier is raised by a much larger infinitesimal amount, so of two
exactly equidistant points the lexicographically smaller one is farther.
This is applied by :func:`compare_distances` only when ``perturb=True``;
by default an exact tie is reported as 0.

Triage error bounds
-------------------

``sign``, ``stable_sign`` and the distance comparisons use fixed error
constants.  The other predicates bound the rounding error of a polynomial
``f`` by ``k * err * |f|``, where ``|f|`` is ``f`` with every input replaced
by its absolute value and every subtraction by an addition, and ``k`` is
one more than the rounding count of ``f``: an input counts 0, a sum or
difference counts one more than its larger operand, and a product one more
than the total of its operands.  These formulas are homogeneous in each
input point, so their signs do not depend on how well the inputs are
normalized.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence, Tuple, Union

from exactgeom.chordangle import DEGREES_45, ChordAngle
from exactgeom.errors import IndeterminatePredicateError, PrecisionExhaustedError
from exactgeom.exactfloat import ExactFloat
from exactgeom.precision import (
    DBL_EPSILON,
    DBL_ERR,
    DOUBLE,
    LONG_DOUBLE,
    SQRT1_2,
    SQRT3,
    Precision,
)
from exactgeom.vector import Vector3, cross_abs, to_vector3

logger = logging.getLogger(__name__)

Point = Sequence[float]
Distance = Union[ChordAngle, float]

## maximum error of (a x b) . c for unit-length a, b, c in double precision
MAX_DET_ERROR = 1.8274 * DBL_EPSILON

## error of the longest-edge determinant in stable_sign(), per unit of
## sqrt(e1^2 * e2^2) where e1, e2 are the two shorter edges
DET_ERROR_MULTIPLIER = 3.2321 * DBL_EPSILON

## x . y error: relative part (input normalization plus rounding, in units
## of DBL_ERR) and absolute part (rounding, in units of the working precision)
COS_DISTANCE_REL_ERR = 9.5
COS_DISTANCE_ABS_ERR = 3.5

## |x cross y|^2 error, in units of DBL_ERR for input normalization
SIN2_DISTANCE_NORM_ERR = 10.0

## operation-chain lengths for the |f|-scaled bounds described above
DOT_SIGN_ERR = 4.0
EDGE_INTERIOR_ERR = 8.0
LINE_DISTANCE_ERR = 16.0
EDGE_DIRECTIONS_ERR = 8.0
CIRCUMCENTER_ERR = 14.0
CROSSING_ERR = 6.0
CROSSING_DOT_ERR = 9.0
VORONOI_COVERAGE_ERR = 17.0
VORONOI_OFFSET_ERR = 8.0
VORONOI_FAR_END_ERR = 19.0


class Excluded(Enum):
    """Result of :func:`voronoi_site_exclusion`."""

    FIRST = "first"
    SECOND = "second"
    NEITHER = "neither"


## shared helpers

def _triage_sign(value, error) -> int:
    if value > error:
        return 1
    if value < -error:
        return -1
    return 0


def _exact_sgn(value: ExactFloat) -> int:
    if value.is_nan():
        raise PrecisionExhaustedError(
            "exact evaluation produced NaN (precision exhausted or non-finite input)")
    return value.sgn()


def _to_ld(*points: Vector3) -> Tuple[Vector3, ...]:
    return tuple(p.to_long_double() for p in points)


def _to_exact(*points: Vector3) -> Tuple[Vector3, ...]:
    return tuple(p.to_exact() for p in points)


def _length2(r: Distance) -> float:
    if isinstance(r, ChordAngle):
        return r.length2
    return ChordAngle.from_length2(r).length2


def _sign_sqrt_sum(u: ExactFloat, v: ExactFloat, w: ExactFloat) -> int:
    """Sign of ``u + v * sqrt(w)`` for ``w >= 0``."""
    su = _exact_sgn(u)
    sv = _exact_sgn(v) if _exact_sgn(w) > 0 else 0
    if sv == 0:
        return su
    if su == 0 or su == sv:
        return sv
    return su * _exact_sgn(u * u - v * v * w)


def _sign_root_pair(p1, w1, p2, w2) -> int:
    """Sign of ``p1 * sqrt(w1) + p2 * sqrt(w2)`` for ``w1, w2 >= 0``."""
    s1 = _exact_sgn(p1) if _exact_sgn(w1) > 0 else 0
    s2 = _exact_sgn(p2) if _exact_sgn(w2) > 0 else 0
    if s1 == 0:
        return s2
    if s2 == 0 or s1 == s2:
        return s1
    return s1 * _exact_sgn(p1 * p1 * w1 - p2 * p2 * w2)


def _sign_root_triple(p1, w1, p2, w2, p3, w3) -> int:
    """Sign of ``p1 sqrt(w1) + p2 sqrt(w2) + p3 sqrt(w3)`` for ``wi >= 0``."""
    s12 = _sign_root_pair(p1, w1, p2, w2)
    s3 = _exact_sgn(p3) if _exact_sgn(w3) > 0 else 0
    if s12 == 0:
        return s3
    if s3 == 0 or s3 == s12:
        return s12
    # compare squares: (p1 sqrt(w1) + p2 sqrt(w2))^2 against p3^2 w3
    u = p1 * p1 * w1 + p2 * p2 * w2 - p3 * p3 * w3
    return s12 * _sign_sqrt_sum(u, 2 * p1 * p2, w1 * w2)


## orientation

def sign(a: Point, b: Point, c: Point) -> int:
    """Orientation of three points on the sphere.

    Returns +1 if ``a``, ``b``, ``c`` are counterclockwise (``c`` lies to
    the left of the great circle from ``a`` to ``b``), -1 if clockwise, and
    0 only if two of the points are identical.  Collinear distinct points
    get a nonzero answer from symbolic perturbation, so that
    ``sign(a, b, c) == -sign(b, a, c)`` and
    ``sign(a, b, c) == sign(b, c, a)`` always hold.
    """
    a, b, c = to_vector3(a), to_vector3(b), to_vector3(c)
    result = triage_sign(a, b, c)
    if result == 0:
        result = expensive_sign(a, b, c)
    return result


def unperturbed_sign(a: Point, b: Point, c: Point) -> int:
    """Like :func:`sign` but returns 0 for exactly collinear points."""
    a, b, c = to_vector3(a), to_vector3(b), to_vector3(c)
    result = triage_sign(a, b, c)
    if result == 0:
        result = expensive_sign(a, b, c, perturb=False)
    return result


def triage_sign(a: Vector3, b: Vector3, c: Vector3) -> int:
    det = a.cross(b).dot(c)
    return _triage_sign(det, MAX_DET_ERROR)


def expensive_sign(a: Vector3, b: Vector3, c: Vector3, perturb: bool = True) -> int:
    if a == b or b == c or c == a:
        return 0
    result = stable_sign(a, b, c)
    if result != 0:
        return result
    return exact_sign(a, b, c, perturb)


def stable_sign(a: Vector3, b: Vector3, c: Vector3) -> int:
    """Orientation from the determinant anchored at the longest edge.

    Computing the determinant from the two shorter edge vectors is much more
    accurate for small triangles than :func:`triage_sign`.
    """
    ab = b - a
    bc = c - b
    ca = a - c
    ab2 = ab.norm2()
    bc2 = bc.norm2()
    ca2 = ca.norm2()
    if ab2 >= bc2 and ab2 >= ca2:
        # AB is the longest edge: use (A - C) x (B - C)
        det = -(ca.cross(bc).dot(c))
        max_error = DET_ERROR_MULTIPLIER * (ca2 * bc2) ** 0.5
    elif bc2 >= ca2:
        det = -(ab.cross(ca).dot(a))
        max_error = DET_ERROR_MULTIPLIER * (ab2 * ca2) ** 0.5
    else:
        det = -(bc.cross(ab).dot(b))
        max_error = DET_ERROR_MULTIPLIER * (bc2 * ab2) ** 0.5
    return _triage_sign(det, max_error)


def exact_sign(a: Vector3, b: Vector3, c: Vector3, perturb: bool = True) -> int:
    """Exact orientation, optionally with symbolic perturbation.

    The points are sorted first so that the perturbation, and therefore the
    result on degenerate input, depends only on the set of points.
    """
    logger.debug("sign: exact evaluation for %s, %s, %s", a, b, c)
    perm_sign = 1
    pa, pb, pc = a, b, c
    if pa > pb:
        pa, pb = pb, pa
        perm_sign = -perm_sign
    if pb > pc:
        pb, pc = pc, pb
        perm_sign = -perm_sign
    if pa > pb:
        pa, pb = pb, pa
        perm_sign = -perm_sign

    xa, xb, xc = _to_exact(pa, pb, pc)
    xb_cross_xc = xb.cross(xc)
    det_sign = _exact_sgn(xa.dot(xb_cross_xc))
    if det_sign == 0 and perturb:
        logger.debug("sign: points are collinear, using symbolic perturbation")
        det_sign = symbolically_perturbed_sign(xa, xb, xc, xb_cross_xc)
        if det_sign == 0:
            raise IndeterminatePredicateError(
                f"sign({a}, {b}, {c}) is undecided after perturbation")
    return perm_sign * det_sign


def symbolically_perturbed_sign(a: Vector3, b: Vector3, c: Vector3,
                                b_cross_c: Vector3) -> int:
    """Sign of det(a, b, c) under infinitesimal perturbation.

    ``a < b < c`` lexicographically and the unperturbed determinant is
    exactly zero.  The terms below are the coefficients of the perturbed
    determinant in order of decreasing significance; each comment names the
    perturbation components the term multiplies.
    """
    det_sign = _exact_sgn(b_cross_c[2])                      # da[2]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(b_cross_c[1])                      # da[1]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(b_cross_c[0])                      # da[0]
    if det_sign != 0:
        return det_sign

    det_sign = _exact_sgn(c[0] * a[1] - c[1] * a[0])         # db[2]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(c[0])                              # db[2] * da[1]
    if det_sign != 0:
        return det_sign
    det_sign = -_exact_sgn(c[1])                             # db[2] * da[0]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(c[2] * a[0] - c[0] * a[2])         # db[1]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(c[2])                              # db[1] * da[0]
    if det_sign != 0:
        return det_sign

    # c is (0, 0, 0) once we get here
    det_sign = _exact_sgn(a[0] * b[1] - a[1] * b[0])         # dc[2]
    if det_sign != 0:
        return det_sign
    det_sign = -_exact_sgn(b[0])                             # dc[2] * da[1]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(b[1])                              # dc[2] * da[0]
    if det_sign != 0:
        return det_sign
    det_sign = _exact_sgn(a[0])                              # dc[2] * db[1]
    if det_sign != 0:
        return det_sign
    return 1                                                 # dc[2] * db[1] * da[0]


def ordered_ccw(a: Point, b: Point, c: Point, o: Point) -> bool:
    """True if the edges OA, OB, OC are met in that order going
    counterclockwise around O.  Returns true if A == B or B == C and
    false if A == C.
    """
    total = 0
    if sign(b, o, a) >= 0:
        total += 1
    if sign(c, o, b) >= 0:
        total += 1
    if sign(a, o, c) > 0:
        total += 1
    return total >= 2


## dot products

def triage_sign_dot_prod(a: Vector3, b: Vector3, p: Precision = DOUBLE) -> int:
    value = a.dot(b)
    error = DOT_SIGN_ERR * p.err * a.abs().dot(b.abs())
    return _triage_sign(value, error)


def exact_sign_dot_prod(a: Vector3, b: Vector3) -> int:
    return _exact_sgn(a.dot(b))


def sign_dot_prod(a: Point, b: Point) -> int:
    """Sign of ``a . b``; 0 only if the vectors are exactly perpendicular."""
    a, b = to_vector3(a), to_vector3(b)
    result = triage_sign_dot_prod(a, b)
    if result != 0:
        return result
    result = triage_sign_dot_prod(*_to_ld(a, b), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("sign_dot_prod: exact evaluation for %s, %s", a, b)
    return exact_sign_dot_prod(*_to_exact(a, b))


## distances between points

def _cos_distance(x: Vector3, y: Vector3, p: Precision):
    c = x.dot(y)
    error = COS_DISTANCE_REL_ERR * DBL_ERR * abs(c) + COS_DISTANCE_ABS_ERR * p.err
    return c, error


def _sin2_distance(x: Vector3, y: Vector3, p: Precision):
    # (x - y) x (x + y) == 2 (x cross y), with less cancellation
    n = (x - y).cross(x + y)
    d2 = 0.25 * n.norm2()
    error = ((SIN2_DISTANCE_NORM_ERR * DBL_ERR + (21 + 4 * SQRT3) * p.err) * d2
             + 32 * SQRT3 * DBL_ERR * p.err * p.sqrt(d2)
             + 768 * DBL_ERR * DBL_ERR * p.err)
    return d2, error


def triage_compare_cos_distances(x: Vector3, a: Vector3, b: Vector3,
                                 p: Precision = DOUBLE) -> int:
    cos_ax, cos_ax_error = _cos_distance(a, x, p)
    cos_bx, cos_bx_error = _cos_distance(b, x, p)
    diff = cos_ax - cos_bx
    error = cos_ax_error + cos_bx_error
    # larger cosine means smaller distance
    return -_triage_sign(diff, error)


def triage_compare_sin2_distances(x: Vector3, a: Vector3, b: Vector3,
                                  p: Precision = DOUBLE) -> int:
    sin2_ax, sin2_ax_error = _sin2_distance(a, x, p)
    sin2_bx, sin2_bx_error = _sin2_distance(b, x, p)
    diff = sin2_ax - sin2_bx
    error = sin2_ax_error + sin2_bx_error
    return _triage_sign(diff, error)


def _compare_sin2_distances(x: Vector3, a: Vector3, b: Vector3) -> int:
    result = triage_compare_sin2_distances(x, a, b)
    if result != 0:
        return result
    return triage_compare_sin2_distances(*_to_ld(x, a, b), LONG_DOUBLE)


def exact_compare_distances(x: Vector3, a: Vector3, b: Vector3) -> int:
    """Compare cos(XA) with cos(XB) as though all points were unit length."""
    cos_ax = x.dot(a)
    cos_bx = x.dot(b)
    a_sign = _exact_sgn(cos_ax)
    b_sign = _exact_sgn(cos_bx)
    if a_sign != b_sign:
        # cos(AX) > cos(BX) means AX < BX
        return -1 if a_sign > b_sign else 1
    cmp = cos_bx * cos_bx * a.norm2() - cos_ax * cos_ax * b.norm2()
    return a_sign * _exact_sgn(cmp)


def symbolic_compare_distances(x: Vector3, a: Vector3, b: Vector3) -> int:
    """Tie-break for exactly equidistant points: the lexicographically
    smaller point sits on the taller pedestal and is therefore farther."""
    if a < b:
        return 1
    if b < a:
        return -1
    return 0


def compare_distances(x: Point, a: Point, b: Point, perturb: bool = False) -> int:
    """Compare the distances XA and XB.

    Returns -1 if ``a`` is closer to ``x`` than ``b``, +1 if farther, and 0
    if the two distances are exactly equal.  With ``perturb=True`` an exact
    tie between distinct points is broken by symbolic perturbation, so 0 is
    returned only when ``a == b``.
    """
    x, a, b = to_vector3(x), to_vector3(a), to_vector3(b)
    # Cosines work over the whole range of angles, sin^2 only when both
    # angles are on the same side of 90 degrees.
    result = triage_compare_cos_distances(x, a, b)
    if result != 0:
        return result
    if a == b:
        return 0

    # The cosine test failed, so both angles are nearly equal and checking
    # one of them is enough to choose the better-conditioned formula.
    cos_ax = a.dot(x)
    if cos_ax > SQRT1_2:
        result = _compare_sin2_distances(x, a, b)
    elif cos_ax < -SQRT1_2:
        # sin^2 decreases past 90 degrees
        result = -_compare_sin2_distances(x, a, b)
    else:
        result = triage_compare_cos_distances(*_to_ld(x, a, b), LONG_DOUBLE)
    if result != 0:
        return result

    logger.debug("compare_distances: exact evaluation for %s, %s, %s", x, a, b)
    result = exact_compare_distances(*_to_exact(x, a, b))
    if result != 0 or not perturb:
        return result

    logger.debug("compare_distances: exact tie, using symbolic perturbation")
    result = symbolic_compare_distances(x, a, b)
    if result == 0:
        raise IndeterminatePredicateError(
            f"compare_distances({x}, {a}, {b}) is undecided after perturbation")
    return result


## distance against a threshold

def triage_compare_cos_distance(x: Vector3, y: Vector3, r2,
                                p: Precision = DOUBLE) -> int:
    cos_xy, cos_xy_error = _cos_distance(x, y, p)
    cos_r = 1 - 0.5 * r2
    cos_r_error = 2 * p.err * abs(cos_r)
    diff = cos_xy - cos_r
    error = cos_xy_error + cos_r_error
    return -_triage_sign(diff, error)


def triage_compare_sin2_distance(x: Vector3, y: Vector3, r2,
                                 p: Precision = DOUBLE) -> int:
    """Only valid for thresholds below 90 degrees (``r2 < 2``)."""
    sin2_xy, sin2_xy_error = _sin2_distance(x, y, p)
    sin2_r = r2 * (1 - 0.25 * r2)
    sin2_r_error = 3 * p.err * sin2_r
    diff = sin2_xy - sin2_r
    error = sin2_xy_error + sin2_r_error
    return _triage_sign(diff, error)


def exact_compare_distance(x: Vector3, y: Vector3, r2: ExactFloat) -> int:
    """Compare cos(XY) of the projected points with cos(r)."""
    cos_xy = x.dot(y)
    cos_r = 1 - ExactFloat(0.5) * r2
    xy_sign = _exact_sgn(cos_xy)
    r_sign = _exact_sgn(cos_r)
    if xy_sign != r_sign:
        return -1 if xy_sign > r_sign else 1
    cmp = cos_r * cos_r * x.norm2() * y.norm2() - cos_xy * cos_xy
    return xy_sign * _exact_sgn(cmp)


def compare_distance(x: Point, y: Point, r: Distance) -> int:
    """Compare the distance XY with ``r``: -1 if closer, 0 if equal, +1 if
    farther.  ``r`` is a :class:`ChordAngle` or a squared chord length."""
    x, y = to_vector3(x), to_vector3(y)
    r2 = _length2(r)
    result = triage_compare_cos_distance(x, y, r2)
    if result != 0:
        return result

    # Near 180 degrees the chord-angle representation itself is too coarse
    # for sin^2 to help, so it is only used below 45 degrees.
    if r2 < DEGREES_45.length2:
        result = triage_compare_sin2_distance(x, y, r2)
        if result == 0:
            result = triage_compare_sin2_distance(
                *_to_ld(x, y), LONG_DOUBLE.scalar(r2), LONG_DOUBLE)
    else:
        result = triage_compare_cos_distance(
            *_to_ld(x, y), LONG_DOUBLE.scalar(r2), LONG_DOUBLE)
    if result != 0:
        return result

    logger.debug("compare_distance: exact evaluation for %s, %s, r2=%r", x, y, r2)
    return exact_compare_distance(*_to_exact(x, y), ExactFloat(r2))


## distance from a point to an edge

def triage_compare_edge_distance(x: Vector3, a0: Vector3, a1: Vector3, r2,
                                 p: Precision = DOUBLE) -> int:
    m = a0.cross(a1)
    x_abs, a0_abs, a1_abs = x.abs(), a0.abs(), a1.abs()
    m_abs = cross_abs(a0_abs, a1_abs)

    # The closest point of the great circle lies inside the edge iff both
    # of these are positive.
    d0 = a0.cross(x).dot(m)
    d0_error = EDGE_INTERIOR_ERR * p.err * cross_abs(a0_abs, x_abs).dot(m_abs)
    d1 = x.cross(a1).dot(m)
    d1_error = EDGE_INTERIOR_ERR * p.err * cross_abs(x_abs, a1_abs).dot(m_abs)
    s0 = _triage_sign(d0, d0_error)
    s1 = _triage_sign(d1, d1_error)

    if s0 < 0 or s1 < 0:
        # an endpoint is closest
        e0 = triage_compare_cos_distance(x, a0, r2, p)
        e1 = triage_compare_cos_distance(x, a1, r2, p)
        if e0 < 0 or e1 < 0:
            return -1
        if e0 > 0 and e1 > 0:
            return 1
        return 0
    if s0 == 0 or s1 == 0:
        return 0

    if r2 >= 2:
        # an interior point is always within 90 degrees
        return -1
    sin2_r = r2 * (1 - 0.25 * r2)
    sin2_r_abs = r2 * (1 + 0.25 * r2)
    xm = x.dot(m)
    xm_abs = x_abs.dot(m_abs)
    value = xm * xm - sin2_r * x.norm2() * m.norm2()
    value_abs = xm_abs * xm_abs + sin2_r_abs * x.norm2() * m_abs.norm2()
    return _triage_sign(value, LINE_DISTANCE_ERR * p.err * value_abs)


def exact_compare_line_distance(x: Vector3, a0: Vector3, a1: Vector3,
                                r2: ExactFloat) -> int:
    """Compare the distance from X to the great circle through A0, A1
    with ``r``."""
    if r2 >= 2:
        return -1
    sin2_r = r2 * (1 - ExactFloat(0.25) * r2)
    n = a0.cross(a1)
    x_dot_n = x.dot(n)
    cmp = x_dot_n * x_dot_n - sin2_r * x.norm2() * n.norm2()
    return _exact_sgn(cmp)


def exact_compare_edge_distance(x: Vector3, a0: Vector3, a1: Vector3, r2: float) -> int:
    if (compare_edge_directions(a0, a1, a0, x) > 0
            and compare_edge_directions(a0, a1, x, a1) > 0):
        # closest point is interior to the edge
        return exact_compare_line_distance(*_to_exact(x, a0, a1), ExactFloat(r2))
    return min(compare_distance(x, a0, r2), compare_distance(x, a1, r2))


def compare_edge_distance(x: Point, a0: Point, a1: Point, r: Distance) -> int:
    """Compare the distance from X to the edge A0A1 with ``r``.

    Returns -1 if the edge passes closer than ``r``, 0 if the distance is
    exactly ``r`` and +1 otherwise.  The edge endpoints must not be
    antipodal.
    """
    x, a0, a1 = to_vector3(x), to_vector3(a0), to_vector3(a1)
    if a0 == -a1:
        raise ValueError("edge endpoints must not be antipodal")
    r2 = _length2(r)
    result = triage_compare_edge_distance(x, a0, a1, r2)
    if result != 0:
        return result
    if a0 == a1:
        return compare_distance(x, a0, r2)
    result = triage_compare_edge_distance(
        *_to_ld(x, a0, a1), LONG_DOUBLE.scalar(r2), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("compare_edge_distance: exact evaluation for %s, %s, %s", x, a0, a1)
    return exact_compare_edge_distance(x, a0, a1, r2)


## edge directions

def triage_compare_edge_directions(a0: Vector3, a1: Vector3, b0: Vector3,
                                   b1: Vector3, p: Precision = DOUBLE) -> int:
    na = a0.cross(a1)
    nb = b0.cross(b1)
    na_abs = cross_abs(a0.abs(), a1.abs())
    nb_abs = cross_abs(b0.abs(), b1.abs())
    cos_ab = na.dot(nb)
    error = EDGE_DIRECTIONS_ERR * p.err * na_abs.dot(nb_abs)
    return _triage_sign(cos_ab, error)


def exact_compare_edge_directions(a0: Vector3, a1: Vector3, b0: Vector3,
                                  b1: Vector3) -> int:
    return _exact_sgn(a0.cross(a1).dot(b0.cross(b1)))


def compare_edge_directions(a0: Point, a1: Point, b0: Point, b1: Point) -> int:
    """Compare the directions of edges A and B.

    Returns +1 if the normals of the two great circles are less than 90
    degrees apart, -1 if more, and 0 if the edges are exactly perpendicular
    or either edge is degenerate.
    """
    a0, a1, b0, b1 = (to_vector3(v) for v in (a0, a1, b0, b1))
    result = triage_compare_edge_directions(a0, a1, b0, b1)
    if result != 0:
        return result
    if a0 == a1 or b0 == b1:
        return 0
    result = triage_compare_edge_directions(*_to_ld(a0, a1, b0, b1), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("compare_edge_directions: exact evaluation")
    return exact_compare_edge_directions(*_to_exact(a0, a1, b0, b1))


## circumcenters

def triage_edge_circumcenter_sign(x0: Vector3, x1: Vector3, a: Vector3,
                                  b: Vector3, c: Vector3, abc_sign: int,
                                  p: Precision = DOUBLE) -> int:
    # Z = a^ x b^ + b^ x c^ + c^ x a^ points at the circumcenter of the
    # projected triangle; scaled by |a||b||c| its dot product with the edge
    # normal is dab |c| + dbc |a| + dca |b|.
    nx = x0.cross(x1)
    nx_abs = cross_abs(x0.abs(), x1.abs())
    a_abs, b_abs, c_abs = a.abs(), b.abs(), c.abs()
    dab = nx.dot(a.cross(b))
    dbc = nx.dot(b.cross(c))
    dca = nx.dot(c.cross(a))
    dab_abs = nx_abs.dot(cross_abs(a_abs, b_abs))
    dbc_abs = nx_abs.dot(cross_abs(b_abs, c_abs))
    dca_abs = nx_abs.dot(cross_abs(c_abs, a_abs))
    la = a.norm(p.sqrt)
    lb = b.norm(p.sqrt)
    lc = c.norm(p.sqrt)
    z = dab * lc + dbc * la + dca * lb
    z_abs = dab_abs * lc + dbc_abs * la + dca_abs * lb
    return abc_sign * _triage_sign(z, CIRCUMCENTER_ERR * p.err * z_abs)


def exact_edge_circumcenter_sign(x0: Vector3, x1: Vector3, a: Vector3,
                                 b: Vector3, c: Vector3, abc_sign: int) -> int:
    nx = x0.cross(x1)
    if nx.is_zero():
        return 0
    dab = nx.dot(a.cross(b))
    dbc = nx.dot(b.cross(c))
    dca = nx.dot(c.cross(a))
    return abc_sign * _sign_root_triple(dab, c.norm2(), dbc, a.norm2(),
                                        dca, b.norm2())


def symbolic_edge_circumcenter_sign(x0: Vector3, x1: Vector3, a: Vector3,
                                    b: Vector3, c: Vector3) -> int:
    """The circumcenter lies on X.  Perturbing the sites moves it toward the
    side of the lexicographically smallest site not on X."""
    for site in sorted((a, b, c)):
        result = unperturbed_sign(x0, x1, site)
        if result != 0:
            return result
    return 0


def edge_circumcenter_sign(x0: Point, x1: Point, a: Point, b: Point, c: Point) -> int:
    """Side of edge X on which the circumcenter of triangle ABC lies.

    Returns +1 if the circumcenter is to the left of the great circle from
    ``x0`` to ``x1``, -1 if to the right.  0 is returned only when the edge
    is degenerate, two of the sites coincide, or all three sites lie on X.
    """
    x0, x1, a, b, c = (to_vector3(v) for v in (x0, x1, a, b, c))
    abc_sign = sign(a, b, c)
    result = triage_edge_circumcenter_sign(x0, x1, a, b, c, abc_sign)
    if result != 0:
        return result
    if x0 == x1 or a == b or b == c or c == a:
        return 0
    result = triage_edge_circumcenter_sign(*_to_ld(x0, x1, a, b, c), abc_sign,
                                           LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("edge_circumcenter_sign: exact evaluation")
    result = exact_edge_circumcenter_sign(*_to_exact(x0, x1, a, b, c), abc_sign)
    if result != 0:
        return result
    logger.debug("edge_circumcenter_sign: circumcenter on edge, using symbolic perturbation")
    return symbolic_edge_circumcenter_sign(x0, x1, a, b, c)


## crossings of an edge with a great circle

def _triage_crossing(a: Vector3, b: Vector3, m: Vector3, p: Precision):
    """Crossing of edge AB with the great circle of normal ``m``.

    Returns ``(P, |P|)`` with P oriented to lie on the edge, or None when
    the orientation cannot be decided.
    """
    am = a.dot(m)
    bm = b.dot(m)
    a_abs, b_abs, m_abs = a.abs(), b.abs(), m.abs()
    am_abs = a_abs.dot(m_abs)
    bm_abs = b_abs.dot(m_abs)
    s = _triage_sign(bm, DOT_SIGN_ERR * p.err * bm_abs)
    if s == 0:
        s = -_triage_sign(am, DOT_SIGN_ERR * p.err * am_abs)
    if s == 0:
        return None
    crossing = (a * bm - b * am) * s
    crossing_abs = a_abs * bm_abs + b_abs * am_abs
    return crossing, crossing_abs


def _exact_crossing(a: Vector3, b: Vector3, m: Vector3) -> Vector3:
    am = a.dot(m)
    bm = b.dot(m)
    s = _exact_sgn(bm) or -_exact_sgn(am)
    return (a * bm - b * am) * s


def triage_circle_edge_intersection_sign(a: Vector3, b: Vector3, n: Vector3,
                                         x: Vector3, p: Precision = DOUBLE) -> int:
    crossing = _triage_crossing(a, b, n, p)
    if crossing is None:
        return 0
    point, point_abs = crossing
    value = point.dot(x)
    error = CROSSING_DOT_ERR * p.err * point_abs.dot(x.abs())
    return _triage_sign(value, error)


def exact_circle_edge_intersection_sign(a: Vector3, b: Vector3, n: Vector3,
                                        x: Vector3) -> int:
    return _exact_sgn(_exact_crossing(a, b, n).dot(x))


def circle_edge_intersection_sign(a: Point, b: Point, n: Point, x: Point) -> int:
    """Side of the great circle with normal ``x`` on which edge AB crosses
    the great circle with normal ``n``.

    Edge AB must cross circle N.  Returns +1 if the crossing point P has
    ``P . x > 0``, -1 if negative, and 0 if it lies exactly on circle X.
    """
    a, b, n, x = (to_vector3(v) for v in (a, b, n, x))
    result = triage_circle_edge_intersection_sign(a, b, n, x)
    if result != 0:
        return result
    result = triage_circle_edge_intersection_sign(*_to_ld(a, b, n, x), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("circle_edge_intersection_sign: exact evaluation")
    return exact_circle_edge_intersection_sign(*_to_exact(a, b, n, x))


def _triage_crossing_position(a: Vector3, b: Vector3, m: Vector3, n: Vector3,
                              p: Precision):
    """Return ``(P . n / |P|, error)`` for the crossing of AB with M."""
    crossing = _triage_crossing(a, b, m, p)
    if crossing is None:
        return None
    point, point_abs = crossing
    pn = point.dot(n)
    pn_error = CROSSING_DOT_ERR * p.err * point_abs.dot(n.abs())
    length = point.norm(p.sqrt)
    length_error = (CROSSING_ERR * p.err * point_abs.norm(p.sqrt)
                    + 3 * p.err * length)
    if length <= length_error:
        return None
    position = pn / length
    error = (pn_error / (length - length_error)
             + abs(pn) * length_error / (length * (length - length_error))
             + 2 * p.err * abs(position))
    return position, error


def triage_intersection_ordering(a: Vector3, b: Vector3, c: Vector3, d: Vector3,
                                 m: Vector3, n: Vector3, p: Precision = DOUBLE) -> int:
    first = _triage_crossing_position(a, b, m, n, p)
    second = _triage_crossing_position(c, d, m, n, p)
    if first is None or second is None:
        return 0
    diff = first[0] - second[0]
    error = first[1] + second[1] + 2 * p.err * (abs(first[0]) + abs(second[0]))
    return _triage_sign(diff, error)


def exact_intersection_ordering(a: Vector3, b: Vector3, c: Vector3, d: Vector3,
                                m: Vector3, n: Vector3) -> int:
    p = _exact_crossing(a, b, m)
    q = _exact_crossing(c, d, m)
    p2 = p.norm2()
    q2 = q.norm2()
    if p2.sgn() == 0 or q2.sgn() == 0:
        raise ValueError("both edges must cross the great circle M")
    # sign(P.n / |P| - Q.n / |Q|) == sign(P.n |Q| - Q.n |P|)
    return _sign_root_pair(p.dot(n), q2, -q.dot(n), p2)


def symbolic_intersection_ordering(a: Vector3, b: Vector3, c: Vector3,
                                   d: Vector3) -> int:
    """Equal crossings: the edge with the lexicographically smaller sorted
    endpoints comes first."""
    first = tuple(sorted((a, b)))
    second = tuple(sorted((c, d)))
    if first < second:
        return -1
    if second < first:
        return 1
    return 0


def intersection_ordering(a: Point, b: Point, c: Point, d: Point,
                          m: Point, n: Point) -> int:
    """Order the crossings of edges AB and CD with the great circle M.

    Both edges must cross M.  The crossing points are ranked by their
    (normalized) dot product with ``n``: -1 if AB crosses M before CD, +1
    if after.  Crossings at exactly the same point are ordered by the edges'
    endpoints, so 0 is returned only for identical edges.
    """
    a, b, c, d, m, n = (to_vector3(v) for v in (a, b, c, d, m, n))
    result = triage_intersection_ordering(a, b, c, d, m, n)
    if result != 0:
        return result
    result = triage_intersection_ordering(*_to_ld(a, b, c, d, m, n), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("intersection_ordering: exact evaluation")
    result = exact_intersection_ordering(*_to_exact(a, b, c, d, m, n))
    if result != 0:
        return result
    logger.debug("intersection_ordering: equal crossings, using symbolic perturbation")
    return symbolic_intersection_ordering(a, b, c, d)


## Voronoi site exclusion

def _sqrt_with_error(w, w_error, p: Precision):
    """Square root of a computed value and a bound on its error."""
    if w <= 0:
        return 0 * w, p.sqrt(w_error)
    root = p.sqrt(w)
    root_error = min(p.sqrt(w_error), w_error / root)
    return root, root_error + p.err * root


def triage_voronoi_coverage_end(s: Vector3, o: Vector3, x0: Vector3, x1: Vector3,
                                r2, p: Precision = DOUBLE) -> int:
    # The coverage interval of a site S on the great circle of X is centered
    # at the projection of S, with semi-width rs where
    # cos(rs) = cos(r) / cos(dist(S, X)).  Its end E in the direction from
    # x0 to x1 is strictly inside the disc of radius r around O iff
    # O^ . E > cos(r).  Multiplied through by Ps |O| this reads
    #     cos(r) C |S| - D sqrt(Qs) - cos(r) Ps |O| > 0
    # with n = x0 x x1, Ps = |S x n|^2, Qs = Ps - cos(r)^2 |S|^2 |n|^2,
    # C = |n|^2 (o . s) - (o . n)(s . n) and D = n . (o x s).
    n = x0.cross(x1)
    n_abs = cross_abs(x0.abs(), x1.abs())
    n2 = n.norm2()
    n2_abs = n_abs.norm2()
    s_abs, o_abs = s.abs(), o.abs()
    s2 = s.norm2()
    cos_r = 1 - 0.5 * r2
    cos_r_abs = 1 + 0.5 * r2

    ps = s.cross(n).norm2()
    ps_abs = cross_abs(s_abs, n_abs).norm2()
    qs = ps - cos_r * cos_r * s2 * n2
    qs_abs = ps_abs + cos_r_abs * cos_r_abs * s2 * n2_abs
    c = n2 * o.dot(s) - o.dot(n) * s.dot(n)
    c_abs = n2_abs * o_abs.dot(s_abs) + o_abs.dot(n_abs) * s_abs.dot(n_abs)
    d = n.dot(o.cross(s))
    d_error = VORONOI_OFFSET_ERR * p.err * n_abs.dot(cross_abs(o_abs, s_abs))

    root_q, root_q_error = _sqrt_with_error(qs, VORONOI_COVERAGE_ERR * p.err * qs_abs, p)
    root_s = p.sqrt(s2)
    root_o = p.sqrt(o.norm2())
    t1 = cos_r * c * root_s
    t2 = d * root_q
    t3 = cos_r * ps * root_o
    value = t1 - t2 - t3
    error = (VORONOI_FAR_END_ERR * p.err * cos_r_abs * (c_abs * root_s + ps_abs * root_o)
             + d_error * root_q + (abs(d) + d_error) * root_q_error
             + 3 * p.err * (abs(t1) + abs(t2) + abs(t3)))
    return _triage_sign(value, error)


def exact_voronoi_coverage_end(s: Vector3, o: Vector3, x0: Vector3, x1: Vector3,
                               r2: ExactFloat) -> int:
    n = x0.cross(x1)
    n2 = n.norm2()
    if _exact_sgn(n2) == 0:
        raise ValueError("edge endpoints must not be linearly dependent")
    s2 = s.norm2()
    cos_r = 1 - ExactFloat(0.5) * r2
    ps = s.cross(n).norm2()
    qs = ps - cos_r * cos_r * s2 * n2
    if _exact_sgn(qs) < 0:
        raise ValueError("both sites must be within distance r of the edge")
    c = n2 * o.dot(s) - o.dot(n) * s.dot(n)
    d = n.dot(o.cross(s))
    return _sign_root_triple(cos_r * c, s2, -d, qs, -(cos_r * ps), o.norm2())


def voronoi_coverage_end(s: Point, o: Point, x0: Point, x1: Point,
                         r: Distance) -> int:
    """Is the end of S's coverage interval inside O's coverage disc?

    The coverage interval of S is the part of the great circle through
    ``x0`` and ``x1`` within ``r`` of S.  Returns +1 if its end in the
    direction from ``x0`` to ``x1`` is strictly closer than ``r`` to O, 0 if
    exactly at distance ``r`` and -1 otherwise.  S must be within ``r`` of
    the great circle.
    """
    s, o, x0, x1 = (to_vector3(v) for v in (s, o, x0, x1))
    r2 = _length2(r)
    result = triage_voronoi_coverage_end(s, o, x0, x1, r2)
    if result != 0:
        return result
    result = triage_voronoi_coverage_end(*_to_ld(s, o, x0, x1),
                                         LONG_DOUBLE.scalar(r2), LONG_DOUBLE)
    if result != 0:
        return result
    logger.debug("voronoi_coverage_end: exact evaluation")
    return exact_voronoi_coverage_end(*_to_exact(s, o, x0, x1), ExactFloat(r2))


def voronoi_site_exclusion(a: Point, b: Point, x0: Point, x1: Point,
                           r: Distance) -> Excluded:
    """Decide whether site A or B drops out of the Voronoi diagram along X.

    Each site's Voronoi region is intersected with the disc of radius ``r``
    around it.  Returns ``FIRST`` if that intersection for ``a`` misses edge
    X0X1 entirely, ``SECOND`` if the one for ``b`` does, and ``NEITHER``
    otherwise; both cannot miss.  Requires ``a`` to be closer to ``x0`` than
    ``b`` is, both sites within ``r`` of the edge, ``r`` below 90 degrees
    and an edge shorter than 180 degrees.

    Along an edge shorter than 180 degrees the points closer to A than to
    B form an initial part of the edge, and the points closer to B the
    rest.  B is excluded when the last point it covers is still closer to
    A, and A when the first point it covers is already closer to B.  A
    coverage interval ending exactly on the other site's disc excludes
    neither site.
    """
    a, b, x0, x1 = (to_vector3(v) for v in (a, b, x0, x1))
    r2 = _length2(r)
    if r2 >= 2:
        raise ValueError("r must be less than 90 degrees")
    if x0 == x1 or x0 == -x1:
        raise ValueError("edge endpoints must be distinct and not antipodal")

    # A site closer to both endpoints is closer to the whole edge.
    if compare_distances(x1, a, b, perturb=True) < 0:
        return Excluded.SECOND
    # Past this point B is closer at x1 and keeps it if it covers it.
    if (compare_distance(x1, b, r2) > 0
            and voronoi_coverage_end(b, a, x0, x1, r2) > 0):
        return Excluded.SECOND
    # A is closer at x0 and keeps it if it covers it.
    if (compare_distance(x0, a, r2) > 0
            and voronoi_coverage_end(a, b, x1, x0, r2) > 0):
        return Excluded.FIRST
    return Excluded.NEITHER


__all__ = [
    "Excluded",
    "circle_edge_intersection_sign",
    "compare_distance",
    "compare_distances",
    "compare_edge_directions",
    "compare_edge_distance",
    "edge_circumcenter_sign",
    "exact_sign",
    "expensive_sign",
    "intersection_ordering",
    "ordered_ccw",
    "sign",
    "sign_dot_prod",
    "stable_sign",
    "symbolically_perturbed_sign",
    "triage_sign",
    "unperturbed_sign",
    "voronoi_coverage_end",
    "voronoi_site_exclusion",
]
