"""Leaf generator for EVM OneSig deployments.

Target addresses are 20-byte hex strings left-padded to 32 bytes. Calls
are ABI-encoded as a single ``(address to,uint256 value,bytes data)[]``
argument, which is what the EVM OneSig contract decodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from eth_abi import encode
from eth_utils import to_bytes, to_checksum_address

from onesig.models.leaf import LeafData, LeafGenerator

CALLS_ABI_TYPE = "(address,uint256,bytes)[]"


@dataclass(frozen=True)
class Call:
    """One EVM call executed by the OneSig contract."""
    to: str
    value: int = 0
    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "to", to_checksum_address(self.to))
        if isinstance(self.data, str):
            object.__setattr__(self, "data", to_bytes(hexstr=self.data))
        object.__setattr__(self, "value", int(self.value))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Call":
        return cls(to=raw["to"], value=int(raw.get("value", 0)), data=raw.get("data", "0x"))

    def to_dict(self) -> dict[str, Any]:
        return {"to": self.to, "value": self.value, "data": "0x" + self.data.hex()}


EvmLeafData = LeafData[str, Call]


class EvmLeafGenerator(LeafGenerator[str, Call]):
    """Encodes leafs for EVM chains."""

    def encode_address(self, address: str) -> bytes:
        return bytes.fromhex(address.removeprefix("0x").rjust(64, "0"))

    def encode_calls(self, calls: Sequence[Call]) -> bytes:
        return encode([CALLS_ABI_TYPE], [[(call.to, call.value, call.data) for call in calls]])


def evm_leaf_generator(leafs: Sequence[EvmLeafData]) -> EvmLeafGenerator:
    return EvmLeafGenerator(leafs)


def evm_leaf_from_dict(raw: Mapping[str, Any]) -> EvmLeafData:
    """Parse one leaf from its JSON form.

    ``{"nonce": 0, "oneSigId": 5, "targetOneSigAddress": "0x...",
    "calls": [{"to": "0x...", "value": 0, "data": "0x"}]}``
    """
    return LeafData(
        nonce=int(raw["nonce"]),
        one_sig_id=int(raw["oneSigId"]),
        target_one_sig_address=raw["targetOneSigAddress"],
        calls=tuple(Call.from_dict(call) for call in raw.get("calls", [])),
    )
