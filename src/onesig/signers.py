"""External signer capabilities.

The signing protocol only needs ``sign_typed_data``; where the key lives
is up to the implementation. Two are provided: an in-process
``eth_account`` key, and a node or wallet reached over JSON-RPC.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol, Union, runtime_checkable

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import encode_hex, to_checksum_address

from onesig.crypto.signing import DOMAIN_TYPES

logger = logging.getLogger(__name__)

RawSignature = Union[bytes, str]


@runtime_checkable
class TypedDataSigner(Protocol):
    """Anything that can sign EIP-712 typed data."""

    @property
    def address(self) -> str: ...

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        message: dict[str, Any],
    ) -> RawSignature: ...


class LocalAccountSigner:
    """Signs with a private key held in memory."""

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @classmethod
    def from_key(cls, private_key: str | bytes) -> "LocalAccountSigner":
        return cls(Account.from_key(private_key))

    @classmethod
    def create(cls) -> "LocalAccountSigner":
        """A signer with a freshly generated random key."""
        return cls(Account.create())

    @property
    def address(self) -> str:
        return self._account.address

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        message: dict[str, Any],
    ) -> bytes:
        signed = self._account.sign_typed_data(
            domain_data=domain,
            message_types=types,
            message_data=message,
        )
        return bytes(signed.signature)


class Web3Signer:
    """Asks a JSON-RPC endpoint to sign with one of its unlocked accounts.

    Usage:
        w3 = AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:8545"))
        signer = Web3Signer(w3, "0xf39F...")
    """

    def __init__(self, w3: Any, address: str) -> None:
        self._w3 = w3
        self._address = to_checksum_address(address)

    @classmethod
    def from_rpc_url(cls, rpc_url: str, address: str) -> "Web3Signer":
        from web3 import AsyncHTTPProvider, AsyncWeb3

        return cls(AsyncWeb3(AsyncHTTPProvider(rpc_url)), address)

    @property
    def address(self) -> str:
        return self._address

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        message: dict[str, Any],
    ) -> RawSignature:
        primary_type = next(iter(types))
        typed_data = {
            "types": {**DOMAIN_TYPES, **types},
            "primaryType": primary_type,
            "domain": domain,
            "message": {
                key: encode_hex(value) if isinstance(value, bytes) else value
                for key, value in message.items()
            },
        }
        logger.debug("Requesting eth_signTypedData_v4 from %s", self._address)
        response = await self._w3.provider.make_request(
            "eth_signTypedData_v4", [self._address, json.dumps(typed_data)]
        )
        if "error" in response:
            raise RuntimeError(f"Signer {self._address} failed: {response['error']}")
        return response["result"]
