"""Data models for the OneSig core."""

from onesig.models.leaf import LeafData, LeafGenerator, StaticLeafGenerator
from onesig.models.signing import SigningOptions

__all__ = [
    "LeafData",
    "LeafGenerator",
    "StaticLeafGenerator",
    "SigningOptions",
]
