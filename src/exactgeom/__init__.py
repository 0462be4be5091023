"""Exact geometric predicates on the unit sphere.

The predicates answer orientation, distance and ordering questions about
points given as XYZ triples, and never give an answer that rounding error
could have flipped.  See :mod:`exactgeom.predicates` for the evaluation
cascade and :mod:`exactgeom.exactfloat` for the arbitrary-precision number
behind it.
"""

from importlib.metadata import PackageNotFoundError, version

from exactgeom.chordangle import ChordAngle
from exactgeom.errors import (
    ExactGeomError,
    IndeterminatePredicateError,
    PrecisionExhaustedError,
)
from exactgeom.exactfloat import ExactFloat, RoundingMode
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
from exactgeom.vector import Vector3

try:
    __version__ = version("exactgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"
