"""
secp256k1 primitives used by the signature collision construction

Thin layer over py_ecc's secp256k1 module: curve parameters, scalar
multiplication, key and address derivation, plain ECDSA verification and
Ethereum-style public key recovery (v in {27, 28}).
"""

from eth_utils import keccak, to_checksum_address
from py_ecc.secp256k1.secp256k1 import G, N, P, add, ecdsa_raw_recover, multiply, privtopub

from .signature import decode_signature

# Curve parameters
group_order = N
field_modulus = P
half_order = N // 2


def modinv(a, modulus=N):
    """Modular inverse, raises ValueError if a is not invertible"""
    return pow(a, -1, modulus)


def private_key_to_bytes(priv_key):
    if not 0 < priv_key < N:
        raise ValueError("private key must be in [1, n-1]")
    return priv_key.to_bytes(32, 'big')


def private_key_to_public_key(priv_key):
    return privtopub(private_key_to_bytes(priv_key))


def public_key_to_address(pub_key):
    """
    Ethereum address of an affine public key

    keccak256 of the 64-byte uncompressed point (without the 0x04 prefix),
    last 20 bytes, EIP-55 checksummed.
    """
    x, y = pub_key
    raw = x.to_bytes(32, 'big') + y.to_bytes(32, 'big')
    return to_checksum_address(keccak(raw)[-20:])


def private_key_to_address(priv_key):
    return public_key_to_address(private_key_to_public_key(priv_key))


def ecdsa_verify(pub_key, msg_hash, sig):
    """
    ECDSA signature verification
    Returns True if signature is valid, False otherwise
    """
    r, s = sig

    # Boundary Checks
    if r >= group_order or s >= group_order or r <= 0 or s <= 0:
        return False

    w = modinv(s)
    u1 = (msg_hash * w) % group_order
    u2 = (r * w) % group_order
    point = add(multiply(G, u1), multiply(pub_key, u2))
    return point[0] % group_order == r


def recover_public_key(msg_hash, v, r, s):
    """
    Recover the signer's public key from a digest and (v, r, s)

    v = 27 selects the nonce point with even y, v = 28 the odd one.
    Returns None when v is not 27 or 28 or the signature does not describe a
    point on the curve.
    """
    if v not in (27, 28):
        return None
    if not (0 < r < group_order and 0 < s < group_order):
        return None

    point = ecdsa_raw_recover(msg_hash.to_bytes(32, 'big'), (v, r, s))
    # py_ecc signals an invalid signature with False
    if not point:
        return None
    return point


def recover_address(msg_hash, signature):
    """Address that signed msg_hash with a 65-byte signature, or None"""
    try:
        r, s, v = decode_signature(signature)
    except ValueError:
        # malformed encoding
        return None
    pub_key = recover_public_key(msg_hash, v, r, s)
    if pub_key is None:
        return None
    return public_key_to_address(pub_key)
