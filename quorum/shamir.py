"""
Shamir's Secret Sharing
Split a secret into N shares where any T can reconstruct it.

The secret is the constant term of a random polynomial of degree T-1 over a
prime field. Each share is one evaluation of that polynomial at a non-zero x.
T points pin the polynomial down exactly; T-1 points are consistent with
every possible secret, so they say nothing about it.

The polynomial only lives for the duration of split(). Whoever calls split()
must hand out the shares and drop the polynomial.
"""

import logging
import secrets
from dataclasses import dataclass

from quorum.errors import (
    ConstructionError,
    DomainPrecondition,
    DuplicateEvaluationPoint,
    InsufficientShares,
)
from quorum.field import DEFAULT_FIELD, FieldElement, PrimeField
from quorum.polynomial import Polynomial, interpolate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Share:
    """A single share of a split secret: one point on the polynomial."""
    x: FieldElement   # Never 0; 0 is where the secret sits
    y: FieldElement

    def __post_init__(self):
        if not (isinstance(self.x, FieldElement) and isinstance(self.y, FieldElement)):
            raise ConstructionError(
                "Share coordinates must be field elements; lift ints with PrimeField(...)"
            )
        if self.x.field != self.y.field:
            raise DomainPrecondition("Share coordinates come from different fields")

    def __iter__(self):
        yield self.x
        yield self.y

    def to_hex(self) -> str:
        """Serialize to a portable string, x in decimal and y in fixed-width hex."""
        width = (self.y.field.bit_length + 3) // 4
        return f"{int(self.x)}:{int(self.y):0{width}x}"

    @classmethod
    def from_hex(cls, hex_str: str, field: PrimeField = DEFAULT_FIELD) -> "Share":
        """Deserialize from to_hex() output."""
        parts = hex_str.strip().split(":")
        if len(parts) != 2:
            raise ValueError(f"Malformed share: {hex_str!r}")
        return cls(x=field(int(parts[0])), y=field(int(parts[1], 16)))


@dataclass(frozen=True)
class SchemeParameters:
    """N shares, any T of which reconstruct. Requires 1 <= T <= N."""
    shares: int
    threshold: int

    def __post_init__(self):
        if self.threshold < 1:
            raise DomainPrecondition("Threshold must be at least 1")
        if self.threshold > self.shares:
            raise DomainPrecondition("Threshold cannot exceed number of shares")


def _lift_secret(secret, field: PrimeField) -> FieldElement:
    if isinstance(secret, FieldElement):
        return field(secret)
    if not 0 <= secret < field.modulus:
        raise DomainPrecondition("Secret too large for the prime field")
    return field(secret)


def random_polynomial(constant: FieldElement, degree: int, rng, field: PrimeField) -> Polynomial:
    """
    Sample constant + r1*x + ... + r_degree*x^degree.

    The coefficients are drawn from rng in order, lowest power first.
    """
    coefficients = [constant]
    for _ in range(degree):
        coefficients.append(field.random(rng))
    return Polynomial.from_coefficients(coefficients)


def split(
    secret,
    n: int,
    t: int,
    rng=None,
    field: PrimeField = DEFAULT_FIELD,
) -> tuple[Polynomial, list[Share]]:
    """
    Split a secret into shares using Shamir's Secret Sharing.

    Args:
        secret: An int in [0, p) or an element of `field`.
        n: Total shares to generate.
        t: Minimum shares needed to reconstruct.
        rng: Randomness source with randrange(). Defaults to secrets.SystemRandom().
            Pass a seeded random.Random only in tests.
        field: The prime field to share over.

    Returns:
        (polynomial, shares). Shares are evaluated at x = 1..n. The polynomial
        is returned so a dealer can commit to it; do not keep it.

    Raises:
        DomainPrecondition: If parameters are invalid.
    """
    params = SchemeParameters(shares=n, threshold=t)
    if params.shares >= field.modulus:
        raise DomainPrecondition(f"Field of order {field.modulus} cannot hold {n} distinct shares")

    rng = rng if rng is not None else secrets.SystemRandom()
    secret = _lift_secret(secret, field)

    polynomial = random_polynomial(secret, params.threshold - 1, rng, field)

    shares = []
    for i in range(1, params.shares + 1):
        x = field(i)
        shares.append(Share(x=x, y=polynomial.eval(x)))

    logger.debug("Split secret into %d shares (threshold %d)", n, t)
    return polynomial, shares


def reconstruct(shares, t: int) -> FieldElement:
    """
    Reconstruct a secret from T or more shares using Lagrange interpolation.

    When more than T shares are given, the T with the smallest x are used.
    Shares are not checked against any commitment here; verify them first.

    Args:
        shares: Shares with distinct, non-zero x.
        t: The threshold the secret was split with.

    Returns:
        The secret, as a field element.

    Raises:
        InsufficientShares: Fewer than t shares.
        DuplicateEvaluationPoint: Two shares with the same x.
        DomainPrecondition: t < 1, or a share at x = 0.
    """
    shares = list(shares)
    if t < 1:
        raise DomainPrecondition("Threshold must be at least 1")
    if len(shares) < t:
        raise InsufficientShares(got=len(shares), needed=t)

    ordered = sorted(shares, key=lambda share: int(share.x))
    for previous, share in zip(ordered, ordered[1:]):
        if previous.x == share.x:
            raise DuplicateEvaluationPoint(share.x)
    if ordered[0].x == 0:
        raise DomainPrecondition("x = 0 is reserved for the secret and cannot be a share")

    chosen = ordered[:t]
    polynomial = interpolate(chosen)
    logger.debug("Reconstructed from %d of %d shares", t, len(shares))
    return polynomial.eval(chosen[0].x * 0)
