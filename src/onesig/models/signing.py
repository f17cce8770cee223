"""Caller-supplied options bound into the signed message."""

from __future__ import annotations

from dataclasses import dataclass

from eth_utils import is_0x_prefixed, to_bytes


@dataclass(frozen=True)
class SigningOptions:
    """Seed and expiry passed unchanged to signers and the verifier.

    ``seed`` may be given as 32 raw bytes or as 0x-prefixed hex text;
    ``expiry`` as an int or a decimal string. Both are normalised on
    construction.
    """
    seed: bytes
    expiry: int

    def __post_init__(self) -> None:
        seed = self.seed
        if isinstance(seed, str):
            if not is_0x_prefixed(seed):
                raise ValueError("Seed hex strings must be 0x-prefixed")
            seed = to_bytes(hexstr=seed)
        seed = bytes(seed)
        if len(seed) != 32:
            raise ValueError(f"Seed must be 32 bytes, got {len(seed)}")
        object.__setattr__(self, "seed", seed)

        expiry = int(self.expiry)
        if expiry < 0:
            raise ValueError("Expiry must be a non-negative unix timestamp")
        object.__setattr__(self, "expiry", expiry)
