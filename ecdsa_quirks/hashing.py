"""
Message digests

Either plain keccak256 over the UTF-8 bytes of a message, or the EIP-191
personal message digest ("version 0x45") that wallets produce for
personal_sign.
"""

from eth_utils import keccak

EIP191_PREFIX = b'\x19Ethereum Signed Message:\n'


def keccak256(data):
    return keccak(data)


def eip191_digest(data):
    return keccak(EIP191_PREFIX + str(len(data)).encode('ascii') + data)


def hash_message(message, eip191=False):
    """Digest of a text message as 32 bytes"""
    data = message.encode('utf-8')
    if eip191:
        return eip191_digest(data)
    return keccak256(data)


def digest_to_int(digest):
    return int.from_bytes(digest, 'big')
