"""
Tests for the polynomial core: representations, evaluation, interpolation.
"""

import dataclasses
import sys
from fractions import Fraction
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from quorum.errors import ConstructionError, DomainPrecondition, DuplicateEvaluationPoint
from quorum.field import DEFAULT_FIELD, PrimeField
from quorum.polynomial import Polynomial, Representation, interpolate

F = DEFAULT_FIELD


def test_horner_evaluation():
    """3 + 2x + x^2 evaluated with plain ints."""
    print("Testing Horner evaluation...", end=" ")
    poly = Polynomial.from_coefficients([3, 2, 1])
    assert poly.eval(0) == 3
    assert poly.eval(1) == 6
    assert poly.eval(10) == 123
    assert poly(10) == 123
    print("PASS")


def test_horner_matches_power_sum_in_field():
    """Horner agrees with the textbook sum over a prime field."""
    print("Testing Horner in F_p...", end=" ")
    small = PrimeField(101)
    coeffs = [small(c) for c in (17, 0, 99, 45, 3)]
    poly = Polynomial.from_coefficients(coeffs)
    for x in range(101):
        expected = sum(c.value * x ** i for i, c in enumerate(coeffs)) % 101
        assert poly.eval(small(x)) == expected
    print("PASS")


def test_roots_evaluation():
    """A polynomial built from roots vanishes on each of them."""
    print("Testing roots evaluation...", end=" ")
    poly = Polynomial.from_roots([1, 2, 3])
    assert poly.eval(1) == 0
    assert poly.eval(2) == 0
    assert poly.eval(3) == 0
    assert poly.eval(4) == 6
    assert Polynomial.from_roots([]).eval(5) == 1
    print("PASS")


def test_degree_semantics():
    """Degree counts coefficients, or distinct roots."""
    print("Testing degree...", end=" ")
    assert Polynomial.from_coefficients([3, 2, 1]).degree() == 3
    assert Polynomial.from_roots([3, 2, 1]).degree() == 3
    assert Polynomial.from_roots([3, 2, 3]).degree() == 2
    # Trailing zeros are not stripped
    assert Polynomial.from_coefficients([3, 2, 0]).degree() == 3
    print("PASS")


def test_points_must_be_interpolated():
    """Points are samples: no eval, no degree, until converted."""
    print("Testing points representation...", end=" ")
    poly = Polynomial.from_points([(F(1), F(6)), (F(2), F(13)), (F(3), F(22))])
    assert poly.representation is Representation.POINTS

    try:
        poly.eval(F(10))
        assert False, "eval on points should have raised"
    except ConstructionError:
        pass

    try:
        poly.degree()
        assert False, "degree on points should have raised"
    except ConstructionError:
        pass

    converted = poly.to_coefficients()
    assert converted.representation is Representation.COEFFICIENTS
    assert converted.eval(F(10)) == 141
    print("PASS")


def test_roots_to_coefficients():
    """(x-1)(x-2)(x-3) expands to x^3 - 6x^2 + 11x - 6."""
    print("Testing roots expansion...", end=" ")
    poly = Polynomial.from_roots([1, 2, 3]).to_coefficients()
    assert list(poly.coefficients) == [-6, 11, -6, 1]
    assert Polynomial.from_roots([]).to_coefficients().coefficients == (1,)
    print("PASS")


def test_interpolation_round_trip():
    """Samples of 1 + 4x + x^2 rebuild the same polynomial."""
    print("Testing interpolation...", end=" ")
    points = [(F(1), F(6)), (F(2), F(13)), (F(3), F(22))]
    poly = interpolate(points)
    assert poly.eval(F(10)) == 141
    assert list(poly.coefficients) == [1, 4, 1]

    # Exact rationals work the same way
    rational = interpolate([(Fraction(1), Fraction(6)), (Fraction(2), Fraction(13)), (Fraction(3), Fraction(22))])
    assert rational.eval(Fraction(10)) == 141
    print("PASS")


def test_interpolation_count():
    """count keeps only the first points."""
    print("Testing interpolation count...", end=" ")
    points = [(F(1), F(6)), (F(2), F(13)), (F(3), F(22)), (F(4), F(999))]
    poly = interpolate(points, count=3)
    assert poly.degree() == 3
    assert poly.eval(F(10)) == 141

    try:
        interpolate(points, count=5)
        assert False, "count beyond the input should have raised"
    except DomainPrecondition:
        pass
    print("PASS")


def test_interpolation_with_plain_ints_is_exact():
    """All-int samples interpolate over the rationals, never floats."""
    print("Testing exact interpolation over ints...", end=" ")
    poly = interpolate([(1, 6), (2, 13), (3, 22)])
    assert poly.coefficients == (1, 4, 1)
    assert all(isinstance(c, Fraction) for c in poly.coefficients)
    assert poly.eval(10) == 141

    # Large values stay exact where floats would round
    big = 2 ** 200 + 12345
    line = interpolate([(1, big + 7), (2, big + 14)])
    assert line.eval(0) == big
    assert not isinstance(line.eval(0), float)
    print("PASS")


def test_interpolation_rejects_floats():
    """Floating point cannot interpolate exactly."""
    print("Testing float rejection...", end=" ")
    try:
        interpolate([(1.0, 6.0), (2.0, 13.0)])
        assert False, "floats should have raised ConstructionError"
    except ConstructionError:
        pass
    print("PASS")


def test_interpolation_rejects_bad_count():
    """count below 1 never drops points silently."""
    print("Testing non-positive count...", end=" ")
    points = [(F(1), F(6)), (F(2), F(13)), (F(3), F(22))]
    for count in (0, -1):
        try:
            interpolate(points, count=count)
            assert False, f"count={count} should have raised"
        except DomainPrecondition:
            pass
    print("PASS")


def test_field_equality_matches_hash():
    """Equal values hash alike, so mixed roots collapse."""
    print("Testing field element equality and hashing...", end=" ")
    small = PrimeField(11)
    assert small(3) == 3
    assert hash(small(3)) == hash(3)
    assert small(3) != 3 + 11
    assert small(3) != -8
    assert Polynomial.from_roots([small(3), 3, small(14)]).degree() == 1
    print("PASS")


def test_interpolation_single_point():
    """One point gives the constant polynomial."""
    print("Testing single-point interpolation...", end=" ")
    poly = interpolate([(F(7), F(42))])
    assert poly.coefficients == (42,)
    assert poly.eval(F(0)) == 42
    print("PASS")


def test_interpolation_rejects_duplicates():
    """Two samples at the same x make the system singular."""
    print("Testing duplicate x rejection...", end=" ")
    try:
        interpolate([(2, 5), (2, 9)])
        assert False, "should have raised DuplicateEvaluationPoint"
    except DuplicateEvaluationPoint as e:
        assert e.x == 2
    print("PASS")


def test_interpolation_rejects_empty():
    """No points, no polynomial."""
    print("Testing empty interpolation...", end=" ")
    try:
        interpolate([])
        assert False, "should have raised DomainPrecondition"
    except DomainPrecondition:
        pass
    print("PASS")


def test_polynomial_is_immutable():
    """Polynomials cannot be changed after construction."""
    print("Testing immutability...", end=" ")
    coeffs = [3, 2, 1]
    poly = Polynomial.from_coefficients(coeffs)
    coeffs.append(99)
    assert poly.degree() == 3
    try:
        poly.terms = (1,)
        assert False, "assignment should have raised"
    except dataclasses.FrozenInstanceError:
        pass
    print("PASS")


def main():
    print("=" * 50)
    print("  Polynomial Core Tests")
    print("=" * 50)
    print()

    tests = [
        test_horner_evaluation,
        test_horner_matches_power_sum_in_field,
        test_roots_evaluation,
        test_degree_semantics,
        test_points_must_be_interpolated,
        test_roots_to_coefficients,
        test_interpolation_round_trip,
        test_interpolation_count,
        test_interpolation_with_plain_ints_is_exact,
        test_interpolation_rejects_floats,
        test_interpolation_rejects_bad_count,
        test_field_equality_matches_hash,
        test_interpolation_single_point,
        test_interpolation_rejects_duplicates,
        test_interpolation_rejects_empty,
        test_polynomial_is_immutable,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"FAIL: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print()
    print(f"Results: {passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
