import itertools
import logging
import math

import mpmath
import numpy as np
import pytest

from exactgeom import predicates
from exactgeom.chordangle import ChordAngle
from exactgeom.errors import IndeterminatePredicateError, PrecisionExhaustedError
from exactgeom.exactfloat import ExactFloat
from exactgeom.precision import DOUBLE, LONG_DOUBLE
from exactgeom.predicates import (
    Excluded,
    circle_edge_intersection_sign,
    compare_distance,
    compare_distances,
    compare_edge_directions,
    compare_edge_distance,
    edge_circumcenter_sign,
    intersection_ordering,
    ordered_ccw,
    sign,
    sign_dot_prod,
    unperturbed_sign,
    voronoi_coverage_end,
    voronoi_site_exclusion,
)
from exactgeom.vector import to_vector3

## unit tests for the exactgeom predicate cascade


def latlng(lat, lng):
    """Unit vector for a latitude and longitude in degrees."""
    phi = math.radians(lat)
    theta = math.radians(lng)
    return (math.cos(phi) * math.cos(theta),
            math.cos(phi) * math.sin(theta),
            math.sin(phi))


def unit(v):
    n = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    return (v[0] / n, v[1] / n, v[2] / n)


def random_units(rng, count):
    pts = rng.normal(size=(count, 3))
    pts /= np.linalg.norm(pts, axis=1)[:, np.newaxis]
    return [tuple(float(c) for c in p) for p in pts]


def oracle_det_sign(a, b, c):
    with mpmath.workprec(400):
        a = [mpmath.mpf(v) for v in a]
        b = [mpmath.mpf(v) for v in b]
        c = [mpmath.mpf(v) for v in c]
        det = (a[0] * (b[1] * c[2] - b[2] * c[1])
               - a[1] * (b[0] * c[2] - b[2] * c[0])
               + a[2] * (b[0] * c[1] - b[1] * c[0]))
        return int(mpmath.sign(det))


def oracle_compare_distances(x, a, b):
    with mpmath.workprec(400):
        x = [mpmath.mpf(v) for v in x]
        a = [mpmath.mpf(v) for v in a]
        b = [mpmath.mpf(v) for v in b]
        cos_a = mpmath.fdot(x, a) / mpmath.sqrt(mpmath.fdot(a, a))
        cos_b = mpmath.fdot(x, b) / mpmath.sqrt(mpmath.fdot(b, b))
        return int(mpmath.sign(cos_b - cos_a))


def np_unit(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def random_direction(rng):
    return np_unit(rng.normal(size=3))


def perpendicular(rng, v):
    """Random unit vector perpendicular to ``v``."""
    return np_unit(np.cross(v, rng.normal(size=3)))


def as_point(v):
    return tuple(float(c) for c in v)


def stage_points(*points):
    """The points as double, 64-bit and exact vectors."""
    double = [to_vector3(p) for p in points]
    return (double, [v.to_long_double() for v in double],
            [v.to_exact() for v in double])


def assert_triage_agrees(triage, exact_result, double_args, ld_args):
    """A triage result at either precision is 0 or the exact result.
    Returns True when double precision was undecided."""
    result = triage(*double_args, DOUBLE)
    assert result in (0, exact_result)
    ld_result = triage(*ld_args, LONG_DOUBLE)
    assert ld_result in (0, exact_result)
    return result == 0


## 400-bit oracles; none of them use the package's arithmetic

def mp_vector(v):
    return [mpmath.mpf(c) for c in v]


def mp_dot(u, v):
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def mp_cross(u, v):
    return [u[1] * v[2] - u[2] * v[1],
            u[2] * v[0] - u[0] * v[2],
            u[0] * v[1] - u[1] * v[0]]


def mp_unit(v):
    length = mpmath.sqrt(mp_dot(v, v))
    return [c / length for c in v]


def oracle_compare_edge_distance(x, a0, a1, r2):
    with mpmath.workprec(400):
        x, a0, a1 = mp_unit(mp_vector(x)), mp_unit(mp_vector(a0)), mp_unit(mp_vector(a1))
        r2 = mpmath.mpf(r2)
        m = mp_cross(a0, a1)
        if mp_dot(mp_cross(a0, x), m) > 0 and mp_dot(mp_cross(x, a1), m) > 0:
            if r2 >= 2:
                return -1
            sin2_r = r2 * (1 - r2 / 4)
            xm = mp_dot(x, m)
            return int(mpmath.sign(xm * xm - sin2_r * mp_dot(m, m)))
        cos_r = 1 - r2 / 2
        return min(int(mpmath.sign(cos_r - mp_dot(x, y))) for y in (a0, a1))


def oracle_compare_edge_directions(a0, a1, b0, b1):
    with mpmath.workprec(400):
        a0, a1, b0, b1 = (mp_vector(v) for v in (a0, a1, b0, b1))
        return int(mpmath.sign(mp_dot(mp_cross(a0, a1), mp_cross(b0, b1))))


def oracle_edge_circumcenter_sign(x0, x1, a, b, c):
    with mpmath.workprec(400):
        x0, x1 = mp_vector(x0), mp_vector(x1)
        a, b, c = (mp_unit(mp_vector(v)) for v in (a, b, c))
        ab, bc, ca = mp_cross(a, b), mp_cross(b, c), mp_cross(c, a)
        center = [ab[i] + bc[i] + ca[i] for i in range(3)]
        orientation = mpmath.sign(mp_dot(ab, c))
        return int(orientation * mpmath.sign(mp_dot(mp_cross(x0, x1), center)))


def _oracle_crossing(a, b, n):
    an, bn = mp_dot(a, n), mp_dot(b, n)
    s = mpmath.sign(bn) or -mpmath.sign(an)
    return [s * (a[i] * bn - b[i] * an) for i in range(3)]


def oracle_circle_edge_intersection_sign(a, b, n, x):
    with mpmath.workprec(400):
        a, b, n, x = (mp_vector(v) for v in (a, b, n, x))
        return int(mpmath.sign(mp_dot(_oracle_crossing(a, b, n), x)))


def oracle_intersection_ordering(a, b, c, d, m, n):
    with mpmath.workprec(400):
        a, b, c, d, m, n = (mp_vector(v) for v in (a, b, c, d, m, n))
        p = mp_unit(_oracle_crossing(a, b, m))
        q = mp_unit(_oracle_crossing(c, d, m))
        return int(mpmath.sign(mp_dot(p, n) - mp_dot(q, n)))


def oracle_voronoi_coverage_end(s, o, x0, x1, r2):
    """Locate the end of the coverage interval of s and measure its distance
    to o directly."""
    with mpmath.workprec(400):
        s, o, x0, x1 = (mp_unit(mp_vector(v)) for v in (s, o, x0, x1))
        cos_r = 1 - mpmath.mpf(r2) / 2
        normal = mp_unit(mp_cross(x0, x1))
        sn = mp_dot(s, normal)
        foot = mp_unit([s[i] - sn * normal[i] for i in range(3)])
        cos_rs = cos_r / mpmath.sqrt(1 - sn * sn)
        sin_rs = mpmath.sqrt(1 - cos_rs * cos_rs)
        tangent = mp_cross(normal, foot)
        end = [cos_rs * foot[i] + sin_rs * tangent[i] for i in range(3)]
        return int(mpmath.sign(mp_dot(o, end) - cos_r))


def sampled_edge_margins(a, b, x0, x1, cos_r, samples=20001):
    """Sample edge X0X1 densely.

    Returns the largest margin by which a sample lies in the part of A's
    Voronoi region within r of A, the same for B, the largest margins by
    which a sample is within r of A and of B, and the sample spacing.  The
    margins change by at most 2 per radian along the edge.
    """
    a, b, x0, x1 = (np.asarray(v, dtype=float) for v in (a, b, x0, x1))
    normal = np_unit(np.cross(x0, x1))
    toward = np.cross(normal, x0)
    length = math.atan2(np.dot(x1, toward), np.dot(x1, x0))
    t = np.linspace(0.0, length, samples)
    pts = np.outer(np.cos(t), x0) + np.outer(np.sin(t), toward)
    fa = pts @ a
    fb = pts @ b
    return (np.minimum(fa - cos_r, fa - fb).max(),
            np.minimum(fb - cos_r, fb - fa).max(),
            fa.max() - cos_r,
            fb.max() - cos_r,
            length / (samples - 1))


E1 = (1.0, 0.0, 0.0)
E2 = (0.0, 1.0, 0.0)
E3 = (0.0, 0.0, 1.0)


class TestSign:

    def test_simple_orientation(self):
        assert sign(E3, E1, E2) == 1
        assert sign(E3, E2, E1) == -1
        assert sign(E1, E2, E3) == 1

    def test_identical_points(self):
        assert sign(E1, E1, E2) == 0
        assert sign(E1, E2, E2) == 0
        assert sign(E2, E1, E2) == 0

    def test_collinear_points_are_perturbed(self):
        c = unit((1.0, 1.0, 0.0))
        assert unperturbed_sign(E1, E2, c) == 0
        s = sign(E1, E2, c)
        assert s == -1
        # the same answer every time, for every ordering
        assert sign(E1, E2, c) == s
        assert sign(E2, c, E1) == s
        assert sign(c, E1, E2) == s
        assert sign(E2, E1, c) == -s
        assert sign(c, E2, E1) == -s

    def test_near_collinear_against_oracle(self):
        rng = np.random.default_rng(7)
        checked = 0
        for _ in range(200):
            a, b = random_units(rng, 2)
            c = unit((a[0] + b[0], a[1] + b[1], a[2] + b[2]))
            expected = oracle_det_sign(a, b, c)
            s = sign(a, b, c)
            assert s != 0
            assert sign(b, a, c) == -s
            assert sign(b, c, a) == s
            if expected != 0:
                assert s == expected
                checked += 1
        assert checked > 0

    def test_random_points_against_oracle(self):
        rng = np.random.default_rng(11)
        pts = random_units(rng, 60)
        for a, b, c in zip(pts[0::3], pts[1::3], pts[2::3]):
            assert sign(a, b, c) == oracle_det_sign(a, b, c)

    def test_perturbation_failure_is_an_assertion(self, monkeypatch):
        monkeypatch.setattr(predicates, "symbolically_perturbed_sign",
                            lambda *args: 0)
        with pytest.raises(IndeterminatePredicateError):
            sign(E1, E2, unit((1.0, 1.0, 0.0)))
        with pytest.raises(AssertionError):
            sign(E1, E2, unit((1.0, 1.0, 0.0)))

    def test_non_finite_input(self):
        with pytest.raises(PrecisionExhaustedError):
            sign((math.inf, 0.0, 0.0), E2, E3)

    def test_exact_fallback_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="exactgeom.predicates")
        sign(E1, E2, unit((1.0, 1.0, 0.0)))
        assert "symbolic perturbation" in caplog.text

    def test_accepts_vector_like_input(self):
        assert sign(np.array(E3), [1, 0, 0], (0, 1, 0)) == 1
        with pytest.raises(ValueError):
            sign((1.0, 0.0), E2, E3)


class TestOrderedCCW:

    def test_order_around_pole(self):
        a = latlng(0, 0)
        b = latlng(0, 90)
        c = latlng(0, 200)
        assert ordered_ccw(a, b, c, E3)
        assert not ordered_ccw(c, b, a, E3)

    def test_repeated_edges(self):
        a = latlng(0, 0)
        b = latlng(0, 90)
        assert ordered_ccw(a, a, b, E3)
        assert ordered_ccw(a, b, b, E3)
        assert not ordered_ccw(a, b, a, E3)


class TestSignDotProd:

    def test_obvious_signs(self):
        assert sign_dot_prod((1.0, 1.0, 0.0), E1) == 1
        assert sign_dot_prod((-1.0, 1.0, 0.0), E1) == -1
        assert sign_dot_prod(E1, E2) == 0
        assert sign_dot_prod((1e-200, 1.0, 0.0), E1) == 1

    def test_cancellation(self):
        tiny = 2.0 ** -60
        assert sign_dot_prod((1.0, tiny, 0.0), (tiny, -1.0, 0.0)) == 0
        # the true value is 2**-113, too small for double-precision triage
        b = (tiny, -1.0 + 2.0 ** -53, 0.0)
        assert sign_dot_prod((1.0, tiny, 0.0), b) == 1


class TestCompareDistances:

    ## x is exactly equidistant from a and b
    A = (0.6, 0.8, 0.0)
    B = (0.8, 0.6, 0.0)
    X = (0.5, 0.5, math.sqrt(0.5))

    def test_simple(self):
        assert compare_distances(E1, E1, E2) == -1
        assert compare_distances(E1, E2, E1) == 1
        assert compare_distances(E1, E2, E3) == 0
        assert compare_distances(E1, E2, E2) == 0

    def test_exact_tie(self):
        assert compare_distances(self.X, self.A, self.B) == 0
        assert compare_distances(self.X, self.B, self.A) == 0

    def test_perturbed_tie(self):
        r = compare_distances(self.X, self.A, self.B, perturb=True)
        assert r != 0
        assert compare_distances(self.X, self.B, self.A, perturb=True) == -r
        assert compare_distances(self.X, self.A, self.A, perturb=True) == 0

    def test_near_ties_against_oracle(self):
        bx = self.B[0]
        for _ in range(5):
            bx = math.nextafter(bx, 2.0)
            b = (bx, self.B[1], self.B[2])
            expected = oracle_compare_distances(self.X, self.A, b)
            assert expected != 0
            assert compare_distances(self.X, self.A, b) == expected
            assert compare_distances(self.X, b, self.A) == -expected

    def test_random_against_oracle(self):
        rng = np.random.default_rng(3)
        pts = random_units(rng, 90)
        for x, a, b in zip(pts[0::3], pts[1::3], pts[2::3]):
            assert compare_distances(x, a, b) == oracle_compare_distances(x, a, b)

    def test_antipodal_range(self):
        # both points nearly opposite x, where sin^2 decreases
        x = E1
        a = unit((-1.0, 1e-3, 0.0))
        b = unit((-1.0, 2e-3, 0.0))
        assert compare_distances(x, a, b) == 1
        assert compare_distances(x, b, a) == -1


class TestCompareDistance:

    def test_equal_points(self):
        assert compare_distance(E1, E1, ChordAngle.zero()) == 0
        assert compare_distance(E1, E1, 0.0) == 0

    def test_right_angle(self):
        assert compare_distance(E1, E2, ChordAngle.right()) == 0
        assert compare_distance(E1, E2, ChordAngle.from_degrees(80)) == 1
        assert compare_distance(E1, E2, ChordAngle.from_degrees(100)) == -1

    def test_small_and_large_angles(self):
        x = latlng(0, 0)
        y = latlng(0, 10)
        assert compare_distance(x, y, ChordAngle.from_degrees(11)) == -1
        assert compare_distance(x, y, ChordAngle.from_degrees(9)) == 1
        z = latlng(0, 170)
        assert compare_distance(x, z, ChordAngle.from_degrees(175)) == -1
        assert compare_distance(x, z, ChordAngle.straight()) == -1


class TestCompareEdgeDistance:

    def test_interior_closest_point(self):
        x = latlng(10, 45)
        assert compare_edge_distance(x, E1, E2, ChordAngle.from_degrees(15)) == -1
        assert compare_edge_distance(x, E1, E2, ChordAngle.from_degrees(5)) == 1

    def test_endpoint_closest(self):
        x = latlng(0, 120)
        assert compare_edge_distance(x, E1, E2, ChordAngle.from_degrees(40)) == -1
        assert compare_edge_distance(x, E1, E2, ChordAngle.from_degrees(20)) == 1

    def test_point_on_edge(self):
        assert compare_edge_distance(E1, E1, E2, ChordAngle.zero()) == 0

    def test_degenerate_edge(self):
        x = latlng(0, 10)
        assert compare_edge_distance(x, E1, E1, ChordAngle.from_degrees(11)) == -1
        assert compare_edge_distance(x, E1, E1, ChordAngle.from_degrees(9)) == 1

    def test_antipodal_edge(self):
        with pytest.raises(ValueError):
            compare_edge_distance(E3, E1, (-1.0, 0.0, 0.0), ChordAngle.right())


class TestCompareEdgeDirections:

    def test_directions(self):
        assert compare_edge_directions(E1, E2, E1, E2) == 1
        assert compare_edge_directions(E1, E2, E2, E1) == -1
        assert compare_edge_directions(E1, E2, E1, E3) == 0

    def test_degenerate_edges(self):
        assert compare_edge_directions(E1, E1, E1, E2) == 0
        assert compare_edge_directions(E1, E2, E3, E3) == 0


class TestEdgeCircumcenterSign:

    SITES = (latlng(60, 0), latlng(60, 120), latlng(60, 240))

    def test_circumcenter_at_pole(self):
        a, b, c = self.SITES
        assert edge_circumcenter_sign(E1, E2, a, b, c) == 1
        assert edge_circumcenter_sign(E1, E2, a, c, b) == 1
        assert edge_circumcenter_sign(E2, E1, a, b, c) == -1

    def test_circumcenter_on_edge(self):
        # symmetric about the equator, so the circumcenter is on it
        a = latlng(10, 0)
        b = latlng(-10, 0)
        c = latlng(0, 30)
        # b is the smallest site off the edge and lies to its right
        assert edge_circumcenter_sign(E1, E2, a, b, c) == -1
        assert edge_circumcenter_sign(E1, E2, c, a, b) == -1

    def test_degenerate_input(self):
        a, b, c = self.SITES
        assert edge_circumcenter_sign(E1, E1, a, b, c) == 0
        assert edge_circumcenter_sign(E1, E2, a, a, c) == 0


class TestCrossings:

    ## edges crossing the equator at longitude 10 and 20
    AB = (latlng(-10, 10), latlng(10, 10))
    CD = (latlng(-10, 20), latlng(10, 20))

    def test_intersection_ordering(self):
        assert intersection_ordering(*self.AB, *self.CD, E3, E2) == -1
        assert intersection_ordering(*self.CD, *self.AB, E3, E2) == 1

    def test_edge_direction_does_not_matter(self):
        a, b = self.AB
        c, d = self.CD
        assert intersection_ordering(b, a, d, c, E3, E2) == -1

    def test_same_edge(self):
        a, b = self.AB
        assert intersection_ordering(a, b, b, a, E3, E2) == 0

    def test_circle_edge_intersection_sign(self):
        a, b = self.AB
        assert circle_edge_intersection_sign(a, b, E3, E2) == 1
        assert circle_edge_intersection_sign(a, b, E3, (0.0, -1.0, 0.0)) == -1

    def test_crossing_on_circle(self):
        a, b = self.AB
        x = (-a[1], a[0], 0.0)
        assert circle_edge_intersection_sign(a, b, E3, x) == 0


class TestVoronoiSiteExclusion:

    R = ChordAngle.from_degrees(20)

    def test_neither(self):
        a = latlng(0, 10)
        b = latlng(0, 80)
        assert voronoi_site_exclusion(a, b, E1, E2, self.R) is Excluded.NEITHER

    def test_second_excluded(self):
        # b's coverage interval lies inside a's
        a = latlng(0, 30)
        b = latlng(19, 35)
        assert voronoi_site_exclusion(a, b, E1, E2, self.R) is Excluded.SECOND

    def test_first_excluded(self):
        a = latlng(19, 55)
        b = latlng(0, 60)
        assert voronoi_site_exclusion(a, b, E1, E2, self.R) is Excluded.FIRST

    def test_closer_to_both_endpoints(self):
        a = latlng(0, 45)
        b = latlng(10, 45)
        assert voronoi_site_exclusion(a, b, E1, E2, self.R) is Excluded.SECOND

    def test_long_edge(self):
        # a 147 degree edge; b covers x1, and a's whole interval is closer
        # to b even though a is closer to x0
        a = (-0.46748635457801396, 0.14668924269423367, -0.8717446726887131)
        b = (-0.37639535085297904, -0.11672178095375389, -0.9190770183761786)
        x0 = (-0.039149243294172735, -0.17146730770215146, 0.984411651261234)
        x1 = (-0.44726263658612714, -0.09066823367905132, -0.8897951479501037)
        r = ChordAngle.from_degrees(36.919)
        assert compare_distances(x0, a, b) < 0
        assert voronoi_site_exclusion(a, b, x0, x1, r) is Excluded.FIRST

    def test_radius_limit(self):
        a = latlng(0, 10)
        b = latlng(0, 80)
        with pytest.raises(ValueError):
            voronoi_site_exclusion(a, b, E1, E2, ChordAngle.right())

    def test_degenerate_edge(self):
        a = latlng(0, 10)
        b = latlng(0, 15)
        with pytest.raises(ValueError):
            voronoi_site_exclusion(a, b, E1, E1, self.R)
        with pytest.raises(ValueError):
            voronoi_site_exclusion(a, b, E1, (-1.0, 0.0, 0.0), self.R)

    def test_coverage_end_stages_agree(self):
        r2 = self.R.length2
        cases = [
            # (s, o, x0, x1, expected)
            (latlng(19, 35), latlng(0, 30), E1, E2, 1),
            (latlng(0, 80), latlng(0, 10), E1, E2, -1),
            (latlng(0, 60), latlng(19, 55), E1, E2, -1),
            (latlng(19, 55), latlng(0, 60), E2, E1, 1),
        ]
        for s, o, x0, x1, expected in cases:
            double, ld, exact_pts = stage_points(s, o, x0, x1)
            assert predicates.triage_voronoi_coverage_end(*double, r2) == expected
            assert predicates.triage_voronoi_coverage_end(
                *ld, LONG_DOUBLE.scalar(r2), LONG_DOUBLE) == expected
            assert predicates.exact_voronoi_coverage_end(
                *exact_pts, ExactFloat(r2)) == expected
            assert voronoi_coverage_end(s, o, x0, x1, self.R) == expected

    def test_against_sampled_edges(self):
        rng = np.random.default_rng(12)
        seen = set()
        checked = 0
        for _ in range(400):
            x0 = random_direction(rng)
            w = perpendicular(rng, x0)
            length = rng.uniform(0.3, 3.05)
            x1 = math.cos(length) * x0 + math.sin(length) * w
            normal = np.cross(x0, w)
            radius = ChordAngle.from_radians(rng.uniform(0.1, 1.0))
            r = radius.radians()
            t = rng.uniform(0.0, length)
            sites = []
            for ts in (t, t + rng.normal(scale=0.3)):
                phi = rng.uniform(-r, r)
                foot = math.cos(ts) * x0 + math.sin(ts) * w
                sites.append(math.cos(phi) * foot + math.sin(phi) * normal)
            a, b, x0, x1 = (as_point(v) for v in (*sites, x0, x1))
            gap = np.dot(a, x0) - np.dot(b, x0)
            if abs(gap) < 1e-9:
                continue
            if gap < 0:
                a, b = b, a

            cos_r = 1 - 0.5 * radius.length2
            region_a, region_b, cover_a, cover_b, step = sampled_edge_margins(
                a, b, x0, x1, cos_r)
            if cover_a <= 1e-9 or cover_b <= 1e-9:
                continue
            if region_a > 1e-9 and region_b > 1e-9:
                expected = Excluded.NEITHER
            elif region_a < -2 * step and region_b > 1e-9:
                expected = Excluded.FIRST
            elif region_b < -2 * step and region_a > 1e-9:
                expected = Excluded.SECOND
            else:
                continue
            assert voronoi_site_exclusion(a, b, x0, x1, radius) is expected
            seen.add(expected)
            checked += 1
        assert checked > 100
        assert seen == set(Excluded)


class TestStageAgreement:
    """Near-degenerate inputs: a triage stage that decides must agree with
    the exact stage, and the predicates must agree with a 400-bit oracle."""

    def test_compare_edge_distance(self):
        rng = np.random.default_rng(101)
        undecided = checked = 0
        for i in range(150):
            a0, a1 = random_direction(rng), random_direction(rng)
            normal = np_unit(np.cross(a0, a1))
            rho = rng.uniform(0.02, 1.2)
            if i % 2:
                # closest point inside the edge
                f = rng.uniform(0.1, 0.9)
                foot = np_unit((1 - f) * a0 + f * a1)
                side = rng.choice((-1.0, 1.0))
                x = math.cos(rho) * foot + math.sin(rho) * side * normal
            else:
                # on the extension of the edge beyond a0
                toward = np_unit(np.cross(normal, a0))
                x = math.cos(rho) * a0 - math.sin(rho) * toward
            x, a0, a1 = as_point(x), as_point(a0), as_point(a1)
            r2 = ChordAngle.from_radians(rho).length2

            double, ld, _ = stage_points(x, a0, a1)
            exact = predicates.exact_compare_edge_distance(*double, r2)
            undecided += assert_triage_agrees(
                predicates.triage_compare_edge_distance, exact,
                (*double, r2), (*ld, LONG_DOUBLE.scalar(r2)))
            expected = oracle_compare_edge_distance(x, a0, a1, r2)
            if expected != 0:
                assert exact == expected
                assert compare_edge_distance(x, a0, a1, r2) == expected
                checked += 1
        assert undecided > 0
        assert checked > 100

    def test_compare_edge_directions(self):
        rng = np.random.default_rng(102)
        undecided = checked = 0
        for _ in range(150):
            a0, a1, b0 = (random_direction(rng) for _ in range(3))
            # b turns toward the normal of a, so the normals are nearly
            # perpendicular
            normal = np_unit(np.cross(a0, a1))
            step = rng.uniform(0.2, 2.0) * rng.choice((-1.0, 1.0))
            b1 = np_unit(b0 + step * normal)
            pts = [as_point(v) for v in (a0, a1, b0, b1)]

            double, ld, exact_pts = stage_points(*pts)
            exact = predicates.exact_compare_edge_directions(*exact_pts)
            undecided += assert_triage_agrees(
                predicates.triage_compare_edge_directions, exact, double, ld)
            expected = oracle_compare_edge_directions(*pts)
            assert exact == expected
            assert compare_edge_directions(*pts) == expected
            checked += expected != 0
        assert undecided > 0
        assert checked > 100

    def test_edge_circumcenter_sign(self):
        rng = np.random.default_rng(103)
        undecided = checked = 0
        for _ in range(120):
            x0, x1 = random_direction(rng), random_direction(rng)
            # three sites on a circle centered on the edge's great circle
            center = np_unit(x0 + x1)
            u = np_unit(x0 - x1)
            v = np.cross(center, u)
            rho = rng.uniform(0.1, 1.0)
            sites = [math.cos(rho) * center
                     + math.sin(rho) * (math.cos(t) * u + math.sin(t) * v)
                     for t in rng.uniform(0.0, 2 * math.pi, size=3)]
            pts = [as_point(p) for p in (x0, x1, *sites)]
            abc_sign = sign(*pts[2:])

            double, ld, exact_pts = stage_points(*pts)
            exact = predicates.exact_edge_circumcenter_sign(*exact_pts, abc_sign)
            undecided += assert_triage_agrees(
                predicates.triage_edge_circumcenter_sign, exact,
                (*double, abc_sign), (*ld, abc_sign))
            expected = oracle_edge_circumcenter_sign(*pts)
            if expected != 0:
                assert exact == expected
                assert edge_circumcenter_sign(*pts) == expected
                checked += 1
        assert undecided > 0
        assert checked > 80

    def test_circle_edge_intersection_sign(self):
        rng = np.random.default_rng(104)
        undecided = 0
        for _ in range(150):
            n, a, b = (random_direction(rng) for _ in range(3))
            if np.dot(a, n) * np.dot(b, n) > 0:
                b = -b
            # x is perpendicular to the crossing point
            crossing = a * np.dot(b, n) - b * np.dot(a, n)
            x = perpendicular(rng, crossing)
            pts = [as_point(v) for v in (a, b, n, x)]

            double, ld, exact_pts = stage_points(*pts)
            exact = predicates.exact_circle_edge_intersection_sign(*exact_pts)
            undecided += assert_triage_agrees(
                predicates.triage_circle_edge_intersection_sign, exact, double, ld)
            expected = oracle_circle_edge_intersection_sign(*pts)
            assert exact == expected
            assert circle_edge_intersection_sign(*pts) == expected
        assert undecided > 0

    def test_intersection_ordering(self):
        rng = np.random.default_rng(105)
        undecided = checked = 0
        for _ in range(150):
            m, n = random_direction(rng), random_direction(rng)
            # two edges through the same point of circle M
            point = perpendicular(rng, m)
            edges = []
            for _ in range(2):
                d = np_unit(m + rng.normal(scale=0.5, size=3))
                d = np_unit(d - np.dot(d, point) * point)
                alpha, beta = rng.uniform(0.1, 1.0, size=2)
                edge = [math.cos(alpha) * point + math.sin(alpha) * d,
                        math.cos(beta) * point - math.sin(beta) * d]
                if rng.random() < 0.5:
                    edge.reverse()
                edges.extend(edge)
            pts = [as_point(v) for v in (*edges, m, n)]

            double, ld, exact_pts = stage_points(*pts)
            exact = predicates.exact_intersection_ordering(*exact_pts)
            undecided += assert_triage_agrees(
                predicates.triage_intersection_ordering, exact, double, ld)
            expected = oracle_intersection_ordering(*pts)
            if expected != 0:
                assert exact == expected
                assert intersection_ordering(*pts) == expected
                checked += 1
        assert undecided > 0
        assert checked > 100

    def test_voronoi_coverage_end(self):
        rng = np.random.default_rng(106)
        undecided = checked = 0
        for _ in range(150):
            x0 = random_direction(rng)
            w = perpendicular(rng, x0)
            length = rng.uniform(0.2, 3.0)
            x1 = math.cos(length) * x0 + math.sin(length) * w
            normal = np.cross(x0, w)
            radius = ChordAngle.from_radians(rng.uniform(0.1, 1.2))
            r = radius.radians()
            t = rng.uniform(-0.3, length + 0.3)
            phi = rng.uniform(-0.9, 0.9) * r
            foot = math.cos(t) * x0 + math.sin(t) * w
            s = math.cos(phi) * foot + math.sin(phi) * normal
            # o is at distance r from the end of s's coverage interval
            rs = math.acos(math.cos(r) / math.cos(phi))
            end = math.cos(rs) * foot + math.sin(rs) * np.cross(normal, foot)
            o = math.cos(r) * end + math.sin(r) * perpendicular(rng, end)
            pts = [as_point(v) for v in (s, o, x0, x1)]
            r2 = radius.length2

            double, ld, exact_pts = stage_points(*pts)
            exact = predicates.exact_voronoi_coverage_end(*exact_pts, ExactFloat(r2))
            undecided += assert_triage_agrees(
                predicates.triage_voronoi_coverage_end, exact,
                (*double, r2), (*ld, LONG_DOUBLE.scalar(r2)))
            expected = oracle_voronoi_coverage_end(*pts, r2)
            if expected != 0:
                assert exact == expected
                assert voronoi_coverage_end(*pts, radius) == expected
                checked += 1
        assert undecided > 0
        assert checked > 100


class TestSymbolicConsistency:

    def test_circumcenter_on_edge_ignores_site_order(self):
        sites = (latlng(10, 0), latlng(-10, 0), latlng(0, 30))
        results = {edge_circumcenter_sign(E1, E2, *p)
                   for p in itertools.permutations(sites)}
        assert results == {-1}

    def test_symbolic_circumcenter_sign_ignores_site_order(self):
        rng = np.random.default_rng(108)
        for _ in range(30):
            x0, x1, a, b, c = (to_vector3(p) for p in random_units(rng, 5))
            results = {predicates.symbolic_edge_circumcenter_sign(x0, x1, *p)
                       for p in itertools.permutations((a, b, c))}
            assert len(results) == 1
            assert results != {0}

    def test_shared_crossing_ordering(self):
        # both edges cross the equator exactly at E1
        a, b = latlng(-10, 0), latlng(10, 0)
        c, d = latlng(-20, 0), latlng(30, 0)
        assert intersection_ordering(a, b, c, d, E3, E2) == 1
        assert intersection_ordering(b, a, c, d, E3, E2) == 1
        assert intersection_ordering(a, b, d, c, E3, E2) == 1
        assert intersection_ordering(c, d, a, b, E3, E2) == -1
        assert intersection_ordering(d, c, b, a, E3, E2) == -1

    def test_symbolic_ordering_is_antisymmetric(self):
        rng = np.random.default_rng(109)
        for _ in range(30):
            a, b, c, d = (to_vector3(p) for p in random_units(rng, 4))
            s = predicates.symbolic_intersection_ordering(a, b, c, d)
            assert s != 0
            assert predicates.symbolic_intersection_ordering(b, a, c, d) == s
            assert predicates.symbolic_intersection_ordering(a, b, d, c) == s
            assert predicates.symbolic_intersection_ordering(c, d, a, b) == -s
            assert predicates.symbolic_intersection_ordering(d, c, b, a) == -s
            assert predicates.symbolic_intersection_ordering(a, b, b, a) == 0
