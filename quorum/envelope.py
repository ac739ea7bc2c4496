"""
Share Envelopes
AES-256-GCM sealing for shares on their way from the dealer to a participant.

Every participant gets their own key, derived from one dealer key:

  Dealer key + share x → Participant key (via HKDF)
  Participant key      → seals / opens that participant's share

The share's x-coordinate is bound in as associated data, so an envelope
cannot be replayed under another participant's index. Commitments are public
and need no envelope.
"""

import base64
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from quorum.errors import VerificationFailure
from quorum.field import DEFAULT_FIELD, PrimeField
from quorum.shamir import Share

NONCE_SIZE = 12  # AES-256-GCM standard
KEY_SIZE = 32    # 256 bits

_PARTICIPANT_CONTEXT = b"quorum-share-envelope-v1"


def generate_dealer_key() -> bytes:
    """Generate a random dealer key."""
    return AESGCM.generate_key(bit_length=256)


def derive_participant_key(dealer_key: bytes, x: int) -> bytes:
    """Derive the key for the participant holding the share at x."""
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=None,
        info=_PARTICIPANT_CONTEXT + b":" + str(int(x)).encode(),
    )
    return hkdf.derive(dealer_key)


def seal_share(share: Share, key: bytes) -> dict:
    """Encrypt a share with AES-256-GCM. Returns x + nonce + ciphertext."""
    nonce = os.urandom(NONCE_SIZE)
    aad = str(int(share.x)).encode()
    ciphertext = AESGCM(key).encrypt(nonce, share.to_hex().encode(), aad)
    return {
        "x": int(share.x),
        "nonce": base64.b64encode(nonce).decode(),
        "ciphertext": base64.b64encode(ciphertext).decode(),
    }


def open_share(envelope: dict, key: bytes, field: PrimeField = DEFAULT_FIELD) -> Share:
    """
    Decrypt a sealed share.

    Raises:
        VerificationFailure: Wrong key, or the envelope was tampered with.
    """
    nonce = base64.b64decode(envelope["nonce"])
    ciphertext = base64.b64decode(envelope["ciphertext"])
    aad = str(int(envelope["x"])).encode()
    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, aad)
    except InvalidTag as e:
        raise VerificationFailure(f"Envelope for x={envelope['x']} failed authentication") from e

    share = Share.from_hex(plaintext.decode("utf-8"), field)
    if share.x != envelope["x"]:
        raise VerificationFailure("Envelope index does not match the sealed share")
    return share


def seal_all(shares: list[Share], dealer_key: bytes) -> list[dict]:
    """Seal each share under its own participant key."""
    return [
        seal_share(share, derive_participant_key(dealer_key, int(share.x)))
        for share in shares
    ]
