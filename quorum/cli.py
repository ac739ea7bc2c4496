"""Command line interface: split, combine and verify secrets."""

import argparse
import logging
import random
import sys

from quorum.errors import QuorumError
from quorum.feldman import CommitmentVector, deal, reconstruct_verified, verify_share
from quorum.field import DEFAULT_FIELD
from quorum.group import SECP256K1
from quorum.shamir import Share, reconstruct, split

logger = logging.getLogger(__name__)


def _cmd_split(args) -> int:
    rng = random.Random(args.seed) if args.seed is not None else None
    secret = int(args.secret, 0)
    if args.verifiable:
        shares, commitments = deal(secret, args.shares, args.threshold, group=SECP256K1, rng=rng)
    else:
        _, shares = split(secret, args.shares, args.threshold, rng=rng, field=DEFAULT_FIELD)
        commitments = None

    for share in shares:
        print(share.to_hex())
    if commitments is not None:
        print(f"commitments: {commitments.to_hex()}")
    return 0


def _cmd_combine(args) -> int:
    shares = [Share.from_hex(text, DEFAULT_FIELD) for text in args.share]
    if args.commitments:
        commitments = CommitmentVector.from_hex(args.commitments, SECP256K1)
        secret = reconstruct_verified(shares, args.threshold, commitments)
    else:
        secret = reconstruct(shares, args.threshold)
    print(int(secret))
    return 0


def _cmd_verify(args) -> int:
    commitments = CommitmentVector.from_hex(args.commitments, SECP256K1)
    failed = 0
    for text in args.share:
        share = Share.from_hex(text, DEFAULT_FIELD)
        ok = verify_share(share, commitments)
        print(f"{int(share.x)}: {'OK' if ok else 'FAIL'}")
        failed += not ok
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quorum", description="Threshold secret sharing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_split = sub.add_parser("split", help="Split a secret into shares")
    p_split.add_argument("secret", help="Integer secret (decimal or 0x-prefixed hex)")
    p_split.add_argument("-n", "--shares", type=int, required=True)
    p_split.add_argument("-t", "--threshold", type=int, required=True)
    p_split.add_argument("--seed", type=int, help="Deterministic randomness (testing only)")
    p_split.add_argument("--verifiable", action="store_true", help="Also print Feldman commitments")
    p_split.set_defaults(func=_cmd_split)

    p_combine = sub.add_parser("combine", help="Reconstruct a secret from shares")
    p_combine.add_argument("share", nargs="+")
    p_combine.add_argument("-t", "--threshold", type=int, required=True)
    p_combine.add_argument("--commitments", help="Verify shares and result against these first")
    p_combine.set_defaults(func=_cmd_combine)

    p_verify = sub.add_parser("verify", help="Check shares against commitments")
    p_verify.add_argument("share", nargs="+")
    p_verify.add_argument("--commitments", required=True)
    p_verify.set_defaults(func=_cmd_verify)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (QuorumError, ValueError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
