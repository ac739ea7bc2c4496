"""
Prime Field
Integers modulo a prime, as an exact number type.

Every layer above this one (polynomials, shares, commitments) only relies on
+, -, *, / and equality, so the same code runs over FieldElement,
fractions.Fraction or plain ints. Secrets are only ever shared over a
PrimeField: floating point cannot recover a secret exactly.
"""

from quorum.errors import DomainPrecondition

# Order of the secp256k1 group. Prime, and larger than any 255-bit secret.
DEFAULT_PRIME = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def _mod_inverse(a: int, p: int) -> int:
    """Modular multiplicative inverse using Fermat's little theorem."""
    if a % p == 0:
        raise ZeroDivisionError("Cannot invert zero")
    return pow(a, p - 2, p)


class FieldElement:
    """
    A single element of a PrimeField.

    Elements are immutable. Arithmetic with a plain int lifts the int into
    the same field; arithmetic with an element of another field is an error.
    """

    __slots__ = ("_value", "_field")

    def __init__(self, value: int, field: "PrimeField"):
        self._value = int(value) % field.modulus
        self._field = field

    @property
    def value(self) -> int:
        return self._value

    @property
    def field(self) -> "PrimeField":
        return self._field

    def _coerce(self, other):
        if isinstance(other, FieldElement):
            if other._field.modulus != self._field.modulus:
                raise ValueError(
                    f"Cannot mix elements of F_{self._field.modulus} "
                    f"and F_{other._field.modulus}"
                )
            return other
        if isinstance(other, int):
            return FieldElement(other, self._field)
        return NotImplemented

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return FieldElement(self._value + other._value, self._field)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return FieldElement(self._value - other._value, self._field)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return FieldElement(other._value - self._value, self._field)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return FieldElement(self._value * other._value, self._field)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self * other.inverse()

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other * self.inverse()

    def __neg__(self):
        return FieldElement(-self._value, self._field)

    def __pow__(self, exponent: int):
        if exponent < 0:
            return self.inverse() ** -exponent
        return FieldElement(pow(self._value, exponent, self._field.modulus), self._field)

    def inverse(self) -> "FieldElement":
        """Multiplicative inverse. Raises ZeroDivisionError for zero."""
        return FieldElement(_mod_inverse(self._value, self._field.modulus), self._field)

    def __eq__(self, other):
        if isinstance(other, FieldElement):
            return (
                self._field.modulus == other._field.modulus
                and self._value == other._value
            )
        if isinstance(other, int):
            # Only the canonical representative: hash(self) == hash(other)
            return self._value == other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __bool__(self):
        return self._value != 0

    def __int__(self):
        return self._value

    def __repr__(self):
        return f"FieldElement({self._value}, p={self._field.modulus})"

    def __str__(self):
        return str(self._value)


class PrimeField:
    """
    The field of integers modulo a prime.

    The modulus is trusted to be prime; it is not tested here.

    Args:
        modulus: The prime p.
    """

    def __init__(self, modulus: int = DEFAULT_PRIME):
        if modulus < 2:
            raise DomainPrecondition(f"Field modulus must be at least 2, got {modulus}")
        self.modulus = modulus

    def __call__(self, value) -> FieldElement:
        """Lift an int (or an element of this field) into the field."""
        if isinstance(value, FieldElement):
            if value.field.modulus != self.modulus:
                raise ValueError(
                    f"Element of F_{value.field.modulus} is not in F_{self.modulus}"
                )
            return value
        return FieldElement(value, self)

    @property
    def zero(self) -> FieldElement:
        return FieldElement(0, self)

    @property
    def one(self) -> FieldElement:
        return FieldElement(1, self)

    @property
    def bit_length(self) -> int:
        """Bits needed to write any element of the field."""
        return (self.modulus - 1).bit_length()

    def random(self, rng) -> FieldElement:
        """
        Draw a uniformly random element.

        Args:
            rng: Any object with randrange() (random.Random, secrets.SystemRandom).
        """
        return FieldElement(rng.randrange(self.modulus), self)

    def __eq__(self, other):
        if not isinstance(other, PrimeField):
            return NotImplemented
        return self.modulus == other.modulus

    def __hash__(self):
        return hash(("PrimeField", self.modulus))

    def __repr__(self):
        return f"PrimeField({self.modulus})"


DEFAULT_FIELD = PrimeField(DEFAULT_PRIME)
