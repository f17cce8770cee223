"""Leaf descriptors and the generator interface that encodes them.

A leaf describes one bundle of calls to be executed by one OneSig
account (``one_sig_id``) at one replay ``nonce``. How the target address
and the calls turn into bytes depends on the chain family, so that
encoding lives on a ``LeafGenerator`` rather than on the leaf itself.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Generic, Sequence, TypeVar

AddressT = TypeVar("AddressT")
CallT = TypeVar("CallT")


@dataclass(frozen=True)
class LeafData(Generic[AddressT, CallT]):
    """One transaction bundle targeted at a single OneSig account."""
    nonce: int
    one_sig_id: int
    target_one_sig_address: AddressT
    calls: tuple[CallT, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Lists are accepted for convenience but stored immutably.
        if not isinstance(self.calls, tuple):
            object.__setattr__(self, "calls", tuple(self.calls))

    @property
    def nonce_id(self) -> tuple[int, int]:
        """The (nonce, one_sig_id) pair that must be unique per tree."""
        return (self.nonce, self.one_sig_id)


class LeafGenerator(abc.ABC, Generic[AddressT, CallT]):
    """A set of leafs plus the chain-specific encoders for them."""

    def __init__(self, leafs: Sequence[LeafData[AddressT, CallT]]) -> None:
        self._leafs = tuple(leafs)

    @property
    def leafs(self) -> tuple[LeafData[AddressT, CallT], ...]:
        return self._leafs

    def __len__(self) -> int:
        return len(self._leafs)

    @abc.abstractmethod
    def encode_address(self, address: AddressT) -> bytes:
        """Encode a target OneSig address into exactly 32 bytes."""

    @abc.abstractmethod
    def encode_calls(self, calls: Sequence[CallT]) -> bytes:
        """Encode the call list into the opaque leaf payload."""


class StaticLeafGenerator(LeafGenerator[bytes, Any]):
    """Generator for leafs whose address and calls are already bytes.

    The payload is the concatenation of the call byte strings.
    """

    def encode_address(self, address: bytes) -> bytes:
        return bytes(address)

    def encode_calls(self, calls: Sequence[Any]) -> bytes:
        return b"".join(bytes(call) for call in calls)
