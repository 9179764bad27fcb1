"""
One ECDSA signature valid for two messages

Works backwards from the signature equation: instead of choosing the private
key first, a random nonce k fixes R = k*G and r = R.x, and the private key x
is solved so that

    s*k = h1 + x*r   and   s*(-k) = h2 + x*r   (mod n)

both hold. Adding the two equations eliminates s and k:

    x = -(h1 + h2) / 2r   (mod n)

The second message is signed by the nonce -k, whose point -R has the same
x-coordinate and the opposite y parity, so the two 65-byte signatures share
(r, s) and differ only in the recovery byte.

Based on Pointcheval & Stern's duplicate signature construction. The keys
produced here are public by construction and must never hold funds.
"""

import logging
import secrets
from dataclasses import dataclass

from .exceptions import CancellingDigestsError, DegenerateNonceError, IdenticalDigestError, InternalConsistencyError
from .hashing import digest_to_int, hash_message
from .secp256k1 import G, group_order, half_order, modinv, multiply, private_key_to_address, recover_address
from .signature import RECOVERY_IDS, encode_signature, to_hex

logger = logging.getLogger(__name__)

MAX_NONCE_ATTEMPTS = 8


@dataclass(frozen=True)
class QuirkedResult:
    private_key: int
    address: str
    r: int
    s: int
    signature1: bytes
    signature2: bytes

    @property
    def private_key_hex(self):
        return '0x' + self.private_key.to_bytes(32, 'big').hex()

    @property
    def signature1_hex(self):
        return to_hex(self.signature1)

    @property
    def signature2_hex(self):
        return to_hex(self.signature2)


def default_random_scalar():
    """Uniform nonce in [1, n-1] from the OS entropy source"""
    return secrets.randbelow(group_order - 1) + 1


def derive_components(digest1, digest2, k):
    """
    Solve (x, r, s) for a fixed nonce k

    Pure function of its inputs. Raises DegenerateNonceError when k yields
    a value that cannot form a recoverable signature.
    """
    R = multiply(G, k)
    r = R[0] % group_order
    if r == 0:
        raise DegenerateNonceError("nonce point has r = 0")
    # v = 27/28 only describes nonce points whose x-coordinate is below n
    if R[0] >= group_order:
        raise DegenerateNonceError("nonce point x-coordinate exceeds the group order")

    denom = modinv(2 * r, group_order)
    x = (group_order - ((digest1 + digest2) * denom % group_order)) % group_order
    if x == 0:
        raise DegenerateNonceError("derived private key is zero")

    s = (modinv(k, group_order) * (digest1 + x * r)) % group_order
    if s == 0:
        raise DegenerateNonceError("derived s is zero")

    # low-s form, applied once
    if s > half_order:
        s = group_order - s

    return x, r, s


def _first_unrecoverable(address, digest1, signature1, digest2, signature2):
    """Index (1 or 2) of the first signature that does not recover to address, else None"""
    if recover_address(digest1, signature1) != address:
        return 1
    if recover_address(digest2, signature2) != address:
        return 2
    return None


def solve(digest1, digest2, random_scalar=default_random_scalar, max_attempts=MAX_NONCE_ATTEMPTS):
    """
    Build a key pair and a single (r, s) that signs both digests

    digest1 and digest2 are 256-bit integers. random_scalar returns a fresh
    nonce in [1, n-1] on every call; a new one is drawn for each invocation
    and only resampled when it turns out degenerate.
    """
    if digest1 % group_order == digest2 % group_order:
        raise IdenticalDigestError("both messages have the same digest modulo n")
    if (digest1 + digest2) % group_order == 0:
        raise CancellingDigestsError("digests sum to zero modulo n")

    last_error = None
    for attempt in range(max_attempts):
        k = random_scalar()
        try:
            x, r, s = derive_components(digest1, digest2, k)
            break
        except DegenerateNonceError as e:
            logger.warning("Degenerate nonce on attempt %d: %s", attempt + 1, e)
            last_error = e
    else:
        raise DegenerateNonceError(
            f"no usable nonce after {max_attempts} attempts") from last_error

    address = private_key_to_address(x)

    sig1 = encode_signature(r, s, RECOVERY_IDS[0])
    sig2 = encode_signature(r, s, RECOVERY_IDS[1])

    if recover_address(digest1, sig1) != address:
        sig1, sig2 = sig2, sig1
    logger.debug("Message1 uses recovery byte %d", sig1[-1])

    failed = _first_unrecoverable(address, digest1, sig1, digest2, sig2)
    if failed is not None:
        raise InternalConsistencyError(
            f"signature{failed} does not recover to {address}")

    return QuirkedResult(
        private_key=x,
        address=address,
        r=r,
        s=s,
        signature1=sig1,
        signature2=sig2,
    )


def quirk(message1, message2, eip191=False, random_scalar=default_random_scalar):
    """Hash two messages the same way and solve for a shared signature"""
    digest1 = digest_to_int(hash_message(message1, eip191))
    digest2 = digest_to_int(hash_message(message2, eip191))
    logger.debug("Hashed messages (eip191=%s)", eip191)
    return solve(digest1, digest2, random_scalar=random_scalar)
