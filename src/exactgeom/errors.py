"""Exceptions raised by the predicate core."""


class ExactGeomError(Exception):
    """Base class for exactgeom errors."""


class PrecisionExhaustedError(ExactGeomError):
    """An exact computation produced NaN because it needed more than
    ``MAX_PREC`` bits of mantissa."""


class IndeterminatePredicateError(ExactGeomError, AssertionError):
    """Symbolic perturbation failed to decide a predicate.

    This signals a broken perturbation rule, never bad input, so it is an
    ``AssertionError`` and should not be caught.
    """
