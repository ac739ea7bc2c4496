"""
Fixed-base exponentiation
Raise a group element to a scalar power from a table of its doublings.

    table[0] = identity
    table[1] = P
    table[i] = 2 * table[i - 1]

so table[i + 1] holds 2^i * P, and P^e is the sum of table[i + 1] over the
set bits i of e. Building the table costs bit_width doublings once; each
exponentiation after that is at most bit_width additions.
"""

from quorum.errors import DomainPrecondition
from quorum.group import Group


def doubling_table(group: Group, point, bit_width: int) -> tuple:
    """
    Precompute the doublings of a point.

    Args:
        group: The group the point lives in.
        point: The base.
        bit_width: Largest exponent width the table must serve.

    Returns:
        A tuple of bit_width + 1 elements, identity first.

    Raises:
        DomainPrecondition: If bit_width < 2.
    """
    if bit_width < 2:
        raise DomainPrecondition(f"bit_width must be at least 2, got {bit_width}")

    table = [group.identity(), point]
    for _ in range(bit_width - 1):
        table.append(group.double(table[-1]))
    return tuple(table)


def exponentiate(group: Group, exponent: int, table: tuple):
    """
    Compute base^exponent from a doubling table of base.

    Raises:
        DomainPrecondition: If exponent is negative or wider than the table.
    """
    width = len(table) - 1
    if exponent < 0:
        raise DomainPrecondition(f"Exponent must be non-negative, got {exponent}")
    if exponent.bit_length() > width:
        raise DomainPrecondition(
            f"Exponent needs {exponent.bit_length()} bits, table covers {width}"
        )

    result = group.identity()
    for i in range(width):
        if (exponent >> i) & 1:
            result = group.add(result, table[i + 1])
    return result


def scalar_multiply(group: Group, point, scalar: int):
    """One-off point^scalar, with the scalar reduced mod the group order."""
    scalar = int(scalar) % group.order
    table = doubling_table(group, point, max(group.order.bit_length(), 2))
    return exponentiate(group, scalar, table)
