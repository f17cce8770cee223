"""Concatenated ECDSA signatures in canonical signer order.

A ``Signature`` wraps one or more 65-byte r||s||v signatures laid end to
end. The on-chain verifier recovers a signer from every 65-byte chunk
and requires the signers to be strictly ascending, which makes the
duplicate check linear. ``Signature.concatenate`` produces that order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from eth_account import Account
from eth_utils import encode_hex, is_0x_prefixed, is_hex, to_bytes

from onesig.crypto.addresses import sort_key
from onesig.errors import ErrorCode, OneSigCoreError

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 65


@dataclass(frozen=True)
class NoSort:
    """Keep the input order."""


@dataclass(frozen=True)
class ByAddresses:
    """Order by the signer address at the same index as each signature."""
    addresses: tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.addresses, str):
            raise TypeError("ByAddresses takes a sequence of addresses, not a single string")
        object.__setattr__(self, "addresses", tuple(self.addresses))


@dataclass(frozen=True)
class ByDigest:
    """Order by the address recovered from each signature over ``digest``."""
    digest: bytes

    def __post_init__(self) -> None:
        if isinstance(self.digest, str):
            object.__setattr__(self, "digest", to_bytes(hexstr=self.digest))


SortMode = Union[NoSort, ByAddresses, ByDigest]
SignatureLike = Union[bytes, bytearray, memoryview, str, "Signature"]


class Signature:
    """One or more 65-byte signatures, concatenated.

    Accepts raw bytes, 0x-prefixed hex text, or another Signature.
    """

    __slots__ = ("_value",)

    def __init__(self, value: SignatureLike) -> None:
        if isinstance(value, Signature):
            value = value.get()

        if isinstance(value, str):
            if not is_0x_prefixed(value):
                raise OneSigCoreError(
                    ErrorCode.INVALID_SIGNATURE_INPUT,
                    "Signature takes in hex encoded strings prefixed with 0x only",
                )
            if not is_hex(value) or len(value) % 2 or any(c.isspace() for c in value):
                raise OneSigCoreError(
                    ErrorCode.INVALID_SIGNATURE_INPUT, "Signature is not valid hex"
                )
            value = to_bytes(hexstr=value)
        elif not isinstance(value, (bytes, bytearray, memoryview)):
            raise OneSigCoreError(
                ErrorCode.INVALID_SIGNATURE_INPUT,
                f"Signature takes bytes or hex text, got {type(value).__name__}",
            )

        value = bytes(value)
        if not value or len(value) % SIGNATURE_LENGTH != 0:
            raise OneSigCoreError(
                ErrorCode.INVALID_SIGNATURE_INPUT,
                f"Each signature must be {SIGNATURE_LENGTH} bytes long, got {len(value)} bytes",
            )
        self._value = value

    def get(self) -> bytes:
        return self._value

    def __bytes__(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"Signature(count={self.signature_count}, {self.to_hex_string()})"

    def to_hex_string(self) -> str:
        return encode_hex(self._value)

    @property
    def signature_count(self) -> int:
        return len(self._value) // SIGNATURE_LENGTH

    def split(self) -> list[bytes]:
        """The individual 65-byte signatures, in stored order."""
        return [
            self._value[i:i + SIGNATURE_LENGTH]
            for i in range(0, len(self._value), SIGNATURE_LENGTH)
        ]

    @classmethod
    def concatenate(cls, signatures: Sequence[SignatureLike], mode: SortMode) -> "Signature":
        """Concatenate single signatures, ordered according to ``mode``."""
        chunks: list[bytes] = []
        for item in signatures:
            signature = Signature(item)
            if signature.signature_count != 1:
                raise OneSigCoreError(
                    ErrorCode.CANNOT_CONCAT_INPUT,
                    "Cannot concatenate pre-concatenated signatures",
                )
            chunks.append(signature.get())

        if isinstance(mode, NoSort):
            ordered = chunks
        elif isinstance(mode, (ByAddresses, ByDigest)):
            if isinstance(mode, ByDigest):
                addresses = [recover_signer(mode.digest, chunk) for chunk in chunks]
            else:
                addresses = list(mode.addresses)

            if len(addresses) != len(chunks):
                raise OneSigCoreError(
                    ErrorCode.ADDRESS_SIGNATURE_LENGTH_MISMATCH,
                    f"Mismatch in addresses provided signatures: "
                    f"{len(addresses)} addresses for {len(chunks)} signatures",
                )

            order = sorted(range(len(chunks)), key=lambda i: sort_key(addresses[i]))
            logger.debug("Signer order: %s", [addresses[i] for i in order])
            ordered = [chunks[i] for i in order]
        else:
            raise TypeError(f"Unknown sort mode: {mode!r}")

        return cls(b"".join(ordered))


def recover_signer(digest: bytes, signature: SignatureLike) -> str:
    """Checksum address of the key that produced ``signature`` over ``digest``."""
    raw = Signature(signature).get()
    if len(raw) != SIGNATURE_LENGTH:
        raise OneSigCoreError(
            ErrorCode.CANNOT_CONCAT_INPUT, "Can only recover a signer from a single signature"
        )
    return Account._recover_hash(bytes(digest), signature=raw)

