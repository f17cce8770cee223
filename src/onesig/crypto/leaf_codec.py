"""Leaf encoding — turns one leaf descriptor into a 32-byte tree leaf.

Wire layout of the 49-byte header:

    [0]      format flag, always 0x01
    [1:9]    one_sig_id, big-endian uint64
    [9:41]   target OneSig address, 32 bytes
    [41:49]  nonce, big-endian uint64

The header is followed by the generator-defined call payload. The leaf
is keccak256(keccak256(header || payload)); the second round keeps a
leaf from ever being read as an internal node of the tree.
"""

from __future__ import annotations

from eth_utils import encode_hex, keccak

from onesig.errors import ErrorCode, OneSigCoreError
from onesig.models.leaf import LeafGenerator

LEAF_FORMAT_FLAG = 1
LEAF_HEADER_LENGTH = 49
ADDRESS_LENGTH = 32
UINT64_MAX = 2**64 - 1


def _encode_uint64(value: int, name: str) -> bytes:
    if not 0 <= value <= UINT64_MAX:
        raise OneSigCoreError(
            ErrorCode.INVALID_HEADER,
            f"{name} must fit in an unsigned 64-bit integer, got {value}",
        )
    return value.to_bytes(8, "big")


def encode_leaf_header(one_sig_id: int, nonce: int, target_one_sig_address: bytes) -> bytes:
    """Encode the fixed 49-byte leaf header."""
    if len(target_one_sig_address) != ADDRESS_LENGTH:
        raise OneSigCoreError(
            ErrorCode.INVALID_HEADER,
            f"Contract address must be 32 bytes, got {len(target_one_sig_address)}",
        )

    header = (
        bytes([LEAF_FORMAT_FLAG])
        + _encode_uint64(one_sig_id, "one_sig_id")
        + bytes(target_one_sig_address)
        + _encode_uint64(nonce, "nonce")
    )
    return header


def encode_leaf_data(generator: LeafGenerator, index: int) -> bytes:
    """Return the leaf preimage (header + payload) at ``index``."""
    if not 0 <= index < len(generator.leafs):
        raise OneSigCoreError(ErrorCode.LEAF_NOT_FOUND, f"Leaf {index} does not exist")

    leaf = generator.leafs[index]
    header = encode_leaf_header(
        one_sig_id=leaf.one_sig_id,
        nonce=leaf.nonce,
        target_one_sig_address=generator.encode_address(leaf.target_one_sig_address),
    )
    return header + generator.encode_calls(leaf.calls)


def encode_leaf(generator: LeafGenerator, index: int) -> bytes:
    """Return the 32-byte digest of the leaf at ``index``."""
    return keccak(keccak(encode_leaf_data(generator, index)))


def hex_leaf(generator: LeafGenerator, index: int) -> str:
    """0x-prefixed hex form of ``encode_leaf``."""
    return encode_hex(encode_leaf(generator, index))
