"""Runtime configuration for the OneSig tools.

Read from the environment, optionally seeded from a ``.env`` file:

    ONESIG_PRIVATE_KEYS       comma-separated hex keys signed with locally
    ONESIG_RPC_URL            JSON-RPC endpoint for remote signers
    ONESIG_SIGNER_ADDRESSES   comma-separated accounts unlocked at ONESIG_RPC_URL
    ONESIG_LOG_LEVEL          logging level name (default WARNING)

The core library never reads configuration; only the CLI does.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from onesig.signers import LocalAccountSigner, TypedDataSigner, Web3Signer


def _split(value: Optional[str]) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    private_keys: tuple[str, ...] = ()
    rpc_url: Optional[str] = None
    signer_addresses: tuple[str, ...] = ()
    log_level: str = "WARNING"

    @classmethod
    def from_env(
        cls,
        env_file: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "Settings":
        """Load settings. ``env_file`` values never override the real environment."""
        if environ is None:
            if env_file is not None:
                load_dotenv(env_file)
            environ = os.environ

        return cls(
            private_keys=_split(environ.get("ONESIG_PRIVATE_KEYS")),
            rpc_url=environ.get("ONESIG_RPC_URL") or None,
            signer_addresses=_split(environ.get("ONESIG_SIGNER_ADDRESSES")),
            log_level=(environ.get("ONESIG_LOG_LEVEL") or "WARNING").upper(),
        )

    def build_signers(self) -> list[TypedDataSigner]:
        if self.signer_addresses and not self.rpc_url:
            raise ValueError("ONESIG_SIGNER_ADDRESSES requires ONESIG_RPC_URL")
        signers: list[TypedDataSigner] = [LocalAccountSigner.from_key(key) for key in self.private_keys]
        if self.rpc_url:
            signers.extend(Web3Signer.from_rpc_url(self.rpc_url, address) for address in self.signer_addresses)
        return signers
