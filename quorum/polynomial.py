"""
Polynomials
One polynomial type, three interchangeable representations.

  COEFFICIENTS  (c0, c1, ..., cn)  meaning  c0 + c1*x + ... + cn*x^n
  ROOTS         (r0, ..., rn)      meaning  (x - r0) * ... * (x - rn)
  POINTS        ((x0, y0), ...)    samples of a polynomial, not a polynomial

The representation is a tag on a single immutable value rather than a class
hierarchy: the set of forms is closed and every operation switches on it.
POINTS has to go through interpolate() before it can be evaluated.

Arithmetic is whatever the values provide. Use FieldElement (or Fraction)
for anything that must be exact; interpolation divides.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from quorum.errors import ConstructionError, DomainPrecondition, DuplicateEvaluationPoint

logger = logging.getLogger(__name__)


class Representation(Enum):
    """How a Polynomial stores its terms."""
    COEFFICIENTS = "coefficients"
    ROOTS = "roots"
    POINTS = "points"


@dataclass(frozen=True)
class Polynomial:
    """
    An immutable polynomial in one of three representations.

    Build one with from_coefficients(), from_roots() or from_points(),
    never by hand.
    """
    representation: Representation
    terms: tuple

    @classmethod
    def from_coefficients(cls, coefficients) -> "Polynomial":
        """Store the coefficients verbatim, lowest power first."""
        return cls(Representation.COEFFICIENTS, tuple(coefficients))

    @classmethod
    def from_roots(cls, roots) -> "Polynomial":
        """
        Build prod(x - r) over the distinct roots.

        A repeated root is kept once, so [3, 2, 3] is (x - 3)(x - 2).
        No roots at all gives the constant polynomial 1.
        """
        return cls(Representation.ROOTS, tuple(dict.fromkeys(roots)))

    @classmethod
    def from_points(cls, points) -> "Polynomial":
        """Keep (x, y) samples for a later interpolate()."""
        return cls(Representation.POINTS, tuple((x, y) for x, y in points))

    @property
    def coefficients(self) -> tuple:
        if self.representation is not Representation.COEFFICIENTS:
            raise ConstructionError(
                f"{self.representation.value} polynomial has no stored coefficients; "
                f"call to_coefficients() first"
            )
        return self.terms

    @property
    def roots(self) -> tuple:
        if self.representation is not Representation.ROOTS:
            raise ConstructionError(f"{self.representation.value} polynomial has no stored roots")
        return self.terms

    @property
    def points(self) -> tuple:
        if self.representation is not Representation.POINTS:
            raise ConstructionError(f"{self.representation.value} polynomial has no stored points")
        return self.terms

    def eval(self, x):
        """
        Evaluate the polynomial at x.

        Coefficients use Horner's method from the highest power down.
        Roots multiply out (x - r) left to right.

        Raises:
            ConstructionError: For POINTS, which must be interpolated first.
        """
        if self.representation is Representation.COEFFICIENTS:
            if not self.terms:
                return x * 0
            result = self.terms[-1]
            for coeff in reversed(self.terms[:-1]):
                result = result * x + coeff
            return result

        if self.representation is Representation.ROOTS:
            result = x * 0 + 1
            for root in self.terms:
                result = result * (x - root)
            return result

        if self.representation is Representation.POINTS:
            raise ConstructionError(
                "Cannot evaluate a points representation; interpolate() it first"
            )

        raise ConstructionError(f"Unsupported representation: {self.representation!r}")

    __call__ = eval

    def degree(self) -> int:
        """
        Number of stored coefficients, or number of distinct roots.

        This is a length, not the true degree: a trailing zero coefficient
        still counts.
        """
        if self.representation is Representation.COEFFICIENTS:
            return len(self.terms)
        if self.representation is Representation.ROOTS:
            return len(self.terms)
        raise ConstructionError(
            f"{self.representation.value} polynomial has no degree until interpolated"
        )

    def to_coefficients(self) -> "Polynomial":
        """Convert any representation to COEFFICIENTS."""
        if self.representation is Representation.COEFFICIENTS:
            return self
        if self.representation is Representation.POINTS:
            return interpolate(self.terms)
        if self.representation is Representation.ROOTS:
            if not self.terms:
                return Polynomial.from_coefficients([1])
            first = self.terms[0]
            zero = first - first
            coeffs = [zero + 1]
            for root in self.terms:
                coeffs = _times_linear(coeffs, root, zero)
            return Polynomial.from_coefficients(coeffs)
        raise ConstructionError(f"Unsupported representation: {self.representation!r}")


def _times_linear(coeffs: list, root, zero) -> list:
    """Multiply a coefficient list by (x - root)."""
    shifted = [zero] + list(coeffs)
    return [
        shifted[k] - root * (coeffs[k] if k < len(coeffs) else zero)
        for k in range(len(shifted))
    ]


def _exact_points(points: list) -> list:
    """
    Make sure division over the points is exact.

    Points made only of plain ints are lifted to Fraction. Floats are refused.
    """
    values = [v for point in points for v in point]
    for value in values:
        if isinstance(value, float):
            raise ConstructionError(
                f"Cannot interpolate exactly over floating point value {value!r}"
            )
    if all(isinstance(value, int) for value in values):
        return [(Fraction(x), Fraction(y)) for x, y in points]
    return points


def interpolate(points, count: int | None = None) -> Polynomial:
    """
    Find the unique polynomial of degree < n through n points.

    Lagrange form, expanded to coefficients. The master polynomial
    prod(x - x_j) is built once and each basis numerator is recovered from
    it by synthetic division, so the whole thing costs O(n^2) operations.

    Args:
        points: (x, y) pairs with pairwise distinct x.
        count: Use only the first `count` points.

    Returns:
        A COEFFICIENTS polynomial with exactly n coefficients. All-int
        input gives Fraction coefficients.

    Raises:
        DomainPrecondition: No points, or count outside 1..len(points).
        DuplicateEvaluationPoint: Two points share an x-coordinate.
        ConstructionError: A float coordinate.
    """
    points = _exact_points([(x, y) for x, y in points])
    if count is not None:
        if count < 1:
            raise DomainPrecondition(f"count must be at least 1, got {count}")
        if count > len(points):
            raise DomainPrecondition(f"Asked for {count} points, only {len(points)} given")
        points = points[:count]

    n = len(points)
    if n < 1:
        raise DomainPrecondition("Interpolation needs at least one point")

    xs = [x for x, _ in points]
    for i in range(n):
        for j in range(i):
            if xs[i] == xs[j]:
                raise DuplicateEvaluationPoint(xs[i])

    zero = xs[0] - xs[0]
    one = zero + 1

    master = [one]
    for xj in xs:
        master = _times_linear(master, xj, zero)

    result = [zero] * n
    for i, (xi, yi) in enumerate(points):
        # master / (x - xi)
        basis = [zero] * n
        carry = zero
        for k in range(n, 0, -1):
            carry = master[k] + carry * xi
            basis[k - 1] = carry

        denominator = one
        for j, xj in enumerate(xs):
            if j != i:
                denominator = denominator * (xi - xj)

        scale = yi / denominator
        for k in range(n):
            result[k] = result[k] + basis[k] * scale

    logger.debug("Interpolated %d points", n)
    return Polynomial.from_coefficients(result)
