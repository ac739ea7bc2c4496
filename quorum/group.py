"""
Groups
The cyclic groups that commitments live in.

The sharing code only needs four things from a group: its identity, addition,
doubling and a generator (plus the group order, which fixes the scalar field
that exponents are taken from). Anything that provides them can be plugged in.

Two groups ship here:
  SchnorrGroup   : the order-q subgroup of Z_p^* (written multiplicatively,
                   so "add" is a modular product)
  Secp256k1Group : points on the secp256k1 curve, affine coordinates

Neither is constant-time. They are meant for commitments to public data,
not for handling private keys.
"""

from abc import ABC, abstractmethod

from quorum.errors import DomainPrecondition
from quorum.field import PrimeField


class Group(ABC):
    """Abstract interface every commitment group implements."""

    @abstractmethod
    def identity(self):
        """The neutral element."""

    @abstractmethod
    def add(self, a, b):
        """Combine two elements with the group law."""

    @abstractmethod
    def double(self, a):
        """Combine an element with itself."""

    @property
    @abstractmethod
    def generator(self):
        """The fixed public generator."""

    @property
    @abstractmethod
    def order(self) -> int:
        """Prime order of the generator's subgroup."""

    @abstractmethod
    def contains(self, element) -> bool:
        """Check that a value is a valid element of this group."""

    @abstractmethod
    def encode(self, element) -> bytes:
        """Serialize an element."""

    @abstractmethod
    def decode(self, data: bytes):
        """Parse an element produced by encode()."""

    def scalar_field(self) -> PrimeField:
        """The field exponents are reduced into."""
        return PrimeField(self.order)


class SchnorrGroup(Group):
    """
    The subgroup of order q inside the multiplicative group mod p.

    Args:
        p: Prime modulus.
        q: Prime dividing p - 1.
        g: An element of order q.
    """

    def __init__(self, p: int, q: int, g: int):
        if (p - 1) % q != 0:
            raise DomainPrecondition(f"q={q} does not divide p-1")
        if g % p in (0, 1) or pow(g, q, p) != 1:
            raise DomainPrecondition(f"g={g} does not generate a subgroup of order {q}")
        self.p = p
        self.q = q
        self.g = g % p
        self._width = (p.bit_length() + 7) // 8

    def identity(self) -> int:
        return 1

    def add(self, a: int, b: int) -> int:
        return (a * b) % self.p

    def double(self, a: int) -> int:
        return (a * a) % self.p

    @property
    def generator(self) -> int:
        return self.g

    @property
    def order(self) -> int:
        return self.q

    def contains(self, element) -> bool:
        return (
            isinstance(element, int)
            and 0 < element < self.p
            and pow(element, self.q, self.p) == 1
        )

    def encode(self, element: int) -> bytes:
        return element.to_bytes(self._width, "big")

    def decode(self, data: bytes) -> int:
        element = int.from_bytes(data, "big")
        if not self.contains(element):
            raise ValueError("Encoded value is not in the group")
        return element

    def __repr__(self):
        return f"SchnorrGroup(p={self.p}, q={self.q}, g={self.g})"


# secp256k1 domain parameters (SEC 2, section 2.4.1)
SECP256K1_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_B = 7
SECP256K1_G = (
    0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
)


class Secp256k1Group(Group):
    """
    The secp256k1 curve y^2 = x^3 + 7 over F_p.

    Points are (x, y) tuples of ints; the point at infinity is None.
    Encoding is SEC1 compressed (33 bytes), with a single 0x00 byte for
    infinity.
    """

    def identity(self):
        return None

    def add(self, a, b):
        if a is None:
            return b
        if b is None:
            return a
        p = SECP256K1_P
        x1, y1 = a
        x2, y2 = b
        if x1 == x2:
            if (y1 + y2) % p == 0:
                return None
            return self.double(a)
        slope = (y2 - y1) * pow(x2 - x1, p - 2, p) % p
        x3 = (slope * slope - x1 - x2) % p
        y3 = (slope * (x1 - x3) - y1) % p
        return (x3, y3)

    def double(self, a):
        if a is None:
            return None
        p = SECP256K1_P
        x, y = a
        if y == 0:
            return None
        slope = 3 * x * x * pow(2 * y, p - 2, p) % p
        x3 = (slope * slope - 2 * x) % p
        y3 = (slope * (x - x3) - y) % p
        return (x3, y3)

    @property
    def generator(self):
        return SECP256K1_G

    @property
    def order(self) -> int:
        return SECP256K1_N

    def contains(self, element) -> bool:
        if element is None:
            return True
        x, y = element
        p = SECP256K1_P
        if not (0 <= x < p and 0 <= y < p):
            return False
        return (y * y - x * x * x - SECP256K1_B) % p == 0

    def encode(self, element) -> bytes:
        if element is None:
            return b"\x00"
        x, y = element
        prefix = b"\x03" if y & 1 else b"\x02"
        return prefix + x.to_bytes(32, "big")

    def decode(self, data: bytes):
        if data == b"\x00":
            return None
        if len(data) != 33 or data[0] not in (2, 3):
            raise ValueError("Expected a 33-byte compressed secp256k1 point")
        p = SECP256K1_P
        x = int.from_bytes(data[1:], "big")
        if x >= p:
            raise ValueError("Point x-coordinate out of range")
        rhs = (pow(x, 3, p) + SECP256K1_B) % p
        # p = 3 mod 4, so a square root is a single exponentiation
        y = pow(rhs, (p + 1) // 4, p)
        if (y * y) % p != rhs:
            raise ValueError("Point is not on secp256k1")
        if (y & 1) != (data[0] & 1):
            y = p - y
        return (x, y)

    def __repr__(self):
        return "Secp256k1Group()"


SECP256K1 = Secp256k1Group()
