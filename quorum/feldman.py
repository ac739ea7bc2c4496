"""
Feldman Verifiable Secret Sharing
Shamir shares plus public commitments that let every holder check their share.

The dealer publishes C_i = g^c_i for each coefficient c_i of the sharing
polynomial. Because exponentiation is a homomorphism,

    g^f(x) = prod_i g^(c_i * x^i) = prod_i C_i^(x^i)

so a participant holding (x, y) can confirm y = f(x) from the commitments
alone. (Groups here are written additively: "prod" is add(), "^" is
repeated add.)

The commitments hide the secret only computationally: C_0 = g^secret.
Exponents live in the scalar field of the group, so shares must be taken
over PrimeField(group.order).
"""

import logging
from dataclasses import dataclass, field

from quorum.errors import DomainPrecondition, VerificationFailure
from quorum.exponent import doubling_table, exponentiate
from quorum.field import FieldElement
from quorum.group import SECP256K1, Group
from quorum.polynomial import Polynomial
from quorum.shamir import Share, reconstruct, split

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitmentVector:
    """
    The dealer's public commitments, one per coefficient, lowest power first.

    Produced once when the secret is split and broadcast to every participant.
    """
    elements: tuple
    group: Group = field(default=SECP256K1, compare=False)

    def __post_init__(self):
        if not self.elements:
            raise DomainPrecondition("A commitment vector needs at least one element")

    def __len__(self):
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __getitem__(self, index):
        return self.elements[index]

    def to_hex(self) -> str:
        """Serialize as comma-separated hex group encodings."""
        return ",".join(self.group.encode(element).hex() for element in self.elements)

    @classmethod
    def from_hex(cls, hex_str: str, group: Group = SECP256K1) -> "CommitmentVector":
        """Deserialize from to_hex() output."""
        elements = tuple(
            group.decode(bytes.fromhex(part))
            for part in hex_str.strip().split(",")
            if part
        )
        return cls(elements=elements, group=group)


def _exponent_width(group: Group) -> int:
    return max((group.order - 1).bit_length(), 2)


def _exponent(value, group: Group) -> int:
    """Turn a scalar into an exponent for `group`, refusing mismatched fields."""
    if isinstance(value, FieldElement):
        if value.field.modulus != group.order:
            raise DomainPrecondition(
                f"Scalar from F_{value.field.modulus} used with a group of order {group.order}"
            )
        return int(value)
    if not 0 <= value < group.order:
        raise DomainPrecondition(f"Exponent {value} outside [0, {group.order})")
    return value


def commit(polynomial: Polynomial, group: Group = SECP256K1, generator=None) -> CommitmentVector:
    """
    Commit to every coefficient of a sharing polynomial.

    Args:
        polynomial: A COEFFICIENTS polynomial over group.scalar_field().
        group: The commitment group.
        generator: Base for the commitments. Defaults to group.generator.

    Returns:
        [g^c0, g^c1, ..., g^cn].

    Raises:
        ConstructionError: If the polynomial is not in coefficient form.
        DomainPrecondition: If there are no coefficients, or they are not in the
            group's scalar field.
    """
    coefficients = polynomial.coefficients
    if generator is None:
        generator = group.generator

    table = doubling_table(group, generator, _exponent_width(group))
    elements = tuple(
        exponentiate(group, _exponent(coeff, group), table)
        for coeff in coefficients
    )
    logger.debug("Committed to %d coefficients", len(elements))
    return CommitmentVector(elements=elements, group=group)


def verify_share(share: Share, commitments: CommitmentVector, generator=None) -> bool:
    """
    Check a share against the dealer's commitments.

    Tests g^y == sum_i (x^i mod q) * C_i in the commitment group.

    Returns:
        True only if the identity holds exactly.
    """
    group = commitments.group
    if generator is None:
        generator = group.generator
    width = _exponent_width(group)

    x = _exponent(share.x, group)
    y = _exponent(share.y, group)

    expected = exponentiate(group, y, doubling_table(group, generator, width))

    combined = group.identity()
    power = 1
    for element in commitments:
        table = doubling_table(group, element, width)
        combined = group.add(combined, exponentiate(group, power, table))
        power = (power * x) % group.order

    if combined != expected:
        logger.warning("Share at x=%d does not match the commitments", x)
        return False
    return True


def require_valid_share(share: Share, commitments: CommitmentVector, generator=None) -> Share:
    """
    Like verify_share(), but raise instead of returning False.

    Raises:
        VerificationFailure: If the share does not match the commitments.
    """
    if not verify_share(share, commitments, generator):
        raise VerificationFailure(
            f"Share at x={int(share.x)} does not match the dealer's commitments"
        )
    return share


def verify_secret(secret, commitments: CommitmentVector, generator=None) -> bool:
    """Check a reconstructed secret against C_0 = g^secret."""
    group = commitments.group
    if generator is None:
        generator = group.generator
    table = doubling_table(group, generator, _exponent_width(group))
    return exponentiate(group, _exponent(secret, group), table) == commitments[0]


def deal(
    secret,
    n: int,
    t: int,
    group: Group = SECP256K1,
    rng=None,
    generator=None,
) -> tuple[list[Share], CommitmentVector]:
    """
    Split a secret and commit to the sharing polynomial.

    The polynomial is dropped before returning; only the shares (private, one
    per participant) and the commitments (public) leave this function.

    Args:
        secret: An int in [0, group.order) or an element of group.scalar_field().
        n: Total shares to generate.
        t: Minimum shares needed to reconstruct.
        group: The commitment group. Its order fixes the sharing field.
        rng: Randomness source with randrange().
        generator: Commitment base. Defaults to group.generator.

    Returns:
        (shares, commitments)
    """
    polynomial, shares = split(secret, n, t, rng=rng, field=group.scalar_field())
    commitments = commit(polynomial, group, generator)
    del polynomial
    logger.info("Dealt %d verifiable shares (threshold %d)", n, t)
    return shares, commitments


def reconstruct_verified(shares, t: int, commitments: CommitmentVector, generator=None) -> FieldElement:
    """
    Verify every share, reconstruct, then check the result against C_0.

    Any bad share aborts the whole call; nothing is dropped or swapped
    behind the caller's back.

    Raises:
        VerificationFailure: A share, or the recovered secret, does not match.
        InsufficientShares: Fewer than t shares.
    """
    shares = [require_valid_share(share, commitments, generator) for share in shares]
    secret = reconstruct(shares, t)
    if not verify_secret(secret, commitments, generator):
        raise VerificationFailure("Reconstructed secret does not match the commitments")
    return secret
