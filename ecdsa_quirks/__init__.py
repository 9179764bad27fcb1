"""Craft one ECDSA signature that is valid for two different messages."""

from .exceptions import (
    CancellingDigestsError,
    DegenerateNonceError,
    IdenticalDigestError,
    InternalConsistencyError,
    QuirkError,
    UsageError,
)
from .quirk import QuirkedResult, derive_components, solve

__version__ = "0.1.0"
