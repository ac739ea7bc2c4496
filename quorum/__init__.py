"""
Quorum: Threshold Secret Sharing
Split a secret so that any T of N holders can rebuild it, and prove to each
holder that their piece is genuine.

Quorum provides two layers on one polynomial core:
1. Shamir: split a secret into shares, reconstruct it from any T of them
2. Feldman: publish commitments so every share can be checked on its own

Fewer than T shares reveal nothing about the secret. A share that does not
match the dealer's commitments is reported, never silently accepted.

Usage:
    from quorum import deal, reconstruct_verified
    shares, commitments = deal(secret, n=5, t=3)
    secret = reconstruct_verified(shares[:3], 3, commitments)
"""

from quorum.errors import (
    QuorumError,
    ConstructionError,
    DuplicateEvaluationPoint,
    InsufficientShares,
    VerificationFailure,
    DomainPrecondition,
)
from quorum.field import PrimeField, FieldElement, DEFAULT_FIELD, DEFAULT_PRIME
from quorum.polynomial import Polynomial, Representation, interpolate
from quorum.group import Group, SchnorrGroup, Secp256k1Group, SECP256K1
from quorum.exponent import doubling_table, exponentiate, scalar_multiply
from quorum.shamir import split, reconstruct, Share, SchemeParameters
from quorum.feldman import (
    CommitmentVector,
    commit,
    verify_share,
    require_valid_share,
    verify_secret,
    deal,
    reconstruct_verified,
)

__version__ = "0.1.0"
__all__ = [
    "QuorumError",
    "ConstructionError",
    "DuplicateEvaluationPoint",
    "InsufficientShares",
    "VerificationFailure",
    "DomainPrecondition",
    "PrimeField",
    "FieldElement",
    "DEFAULT_FIELD",
    "DEFAULT_PRIME",
    "Polynomial",
    "Representation",
    "interpolate",
    "Group",
    "SchnorrGroup",
    "Secp256k1Group",
    "SECP256K1",
    "doubling_table",
    "exponentiate",
    "scalar_multiply",
    "split",
    "reconstruct",
    "Share",
    "SchemeParameters",
    "CommitmentVector",
    "commit",
    "verify_share",
    "require_valid_share",
    "verify_secret",
    "deal",
    "reconstruct_verified",
]
