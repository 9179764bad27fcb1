class QuirkError(Exception):
    """Base class for errors raised by ecdsa_quirks"""


class UsageError(QuirkError):
    """Required command-line input is missing"""


class IdenticalDigestError(QuirkError, ValueError):
    """Both messages hash to the same digest, which would force s = 0"""


class DegenerateNonceError(QuirkError):
    """The nonce produced an r, x or s that cannot form a signature"""


class InternalConsistencyError(QuirkError, RuntimeError):
    """A constructed signature failed to recover to the derived address"""


class CancellingDigestsError(QuirkError, ValueError):
    """The digests sum to zero modulo n, which forces a zero private key"""
