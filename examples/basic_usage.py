"""
Quorum: Basic Usage Example

Demonstrates a verifiable 3-of-5 split. The dealer publishes commitments;
every participant checks their own share before anyone reconstructs.
"""

import secrets
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from quorum import DEFAULT_PRIME, Share, deal, reconstruct_verified, verify_share
from quorum import InsufficientShares, VerificationFailure
from quorum.envelope import derive_participant_key, generate_dealer_key, open_share, seal_all


def main():
    print("=" * 50)
    print("  Quorum - Verifiable Threshold Sharing")
    print("=" * 50)

    secret = secrets.randbelow(DEFAULT_PRIME)
    print(f"\nSecret: {secret:064x}")

    # Dealer: split, commit, forget the polynomial
    shares, commitments = deal(secret, n=5, t=3)
    print(f"Dealt {len(shares)} shares, threshold 3")
    print(f"Published {len(commitments)} commitments")

    # Each share travels in its own sealed envelope
    dealer_key = generate_dealer_key()
    envelopes = seal_all(shares, dealer_key)

    # Participants: open and check their own share
    received = []
    for envelope in envelopes:
        share = open_share(envelope, derive_participant_key(dealer_key, envelope["x"]))
        status = "OK" if verify_share(share, commitments) else "FAIL"
        print(f"  [{status}] share {int(share.x)}")
        received.append(share)

    # Any three reconstruct
    recovered = reconstruct_verified([received[0], received[2], received[4]], 3, commitments)
    print(f"\nRecovered from shares 1, 3, 5: {int(recovered):064x}")
    print(f"Match: {recovered == secret}")

    # Two are not enough
    print("\nAttempting reconstruction with 2 shares...")
    try:
        reconstruct_verified(received[:2], 3, commitments)
        print("  ERROR: Should have failed!")
    except InsufficientShares as e:
        print(f"  Correctly rejected: {e}")

    # A forged share is caught before it is used
    print("\nAttempting reconstruction with a forged share...")
    forged = Share(x=received[1].x, y=received[1].y + 1)
    try:
        reconstruct_verified([received[0], forged, received[2]], 3, commitments)
        print("  ERROR: Should have failed!")
    except VerificationFailure as e:
        print(f"  Correctly rejected: {e}")


if __name__ == "__main__":
    main()
