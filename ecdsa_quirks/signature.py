"""65-byte Ethereum signature encoding: r (32) || s (32) || v (1)"""

RECOVERY_IDS = (27, 28)
SIGNATURE_LENGTH = 65


def encode_signature(r, s, v):
    if v not in RECOVERY_IDS:
        raise ValueError(f"recovery id must be one of {RECOVERY_IDS}, got {v}")
    return r.to_bytes(32, 'big') + s.to_bytes(32, 'big') + bytes([v])


def decode_signature(signature):
    """
    Split a signature into (r, s, v)

    Accepts raw bytes or a 0x-prefixed hex string. A recovery byte of 0/1 is
    normalised to 27/28.
    """
    if isinstance(signature, str):
        signature = bytes.fromhex(signature[2:] if signature.startswith('0x') else signature)

    if len(signature) != SIGNATURE_LENGTH:
        raise ValueError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")

    r = int.from_bytes(signature[:32], 'big')
    s = int.from_bytes(signature[32:64], 'big')
    v = signature[64]
    if v in (0, 1):
        v += 27
    if v not in RECOVERY_IDS:
        raise ValueError(f"invalid recovery id {v}")
    return r, s, v


def to_hex(data):
    return '0x' + data.hex()
