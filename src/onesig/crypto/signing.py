"""EIP-712 signing of a OneSig merkle root.

Signers attest to the typed message

    SignMerkleRoot(bytes32 seed,bytes32 merkleRoot,uint256 expiry)

under a fixed domain. The domain is part of the protocol and is not
configurable: the verifier contract recomputes the digest from the same
constants, then recovers one signer per 65-byte chunk of the signature.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Sequence, Union

from eth_abi import encode
from eth_utils import encode_hex, keccak, to_checksum_address

from onesig.crypto.merkle import MerkleTree
from onesig.crypto.signature import ByDigest, Signature
from onesig.errors import ErrorCode, OneSigCoreError
from onesig.models.signing import SigningOptions

if TYPE_CHECKING:
    from onesig.signers import TypedDataSigner

logger = logging.getLogger(__name__)

# Mainnet chain id and a dead verifying contract: the domain only
# separates OneSig messages, it does not bind them to a deployment.
DOMAIN_NAME = "OneSig"
DOMAIN_VERSION = "0.0.1"
DOMAIN_CHAIN_ID = 1
DOMAIN_VERIFYING_CONTRACT = to_checksum_address("0x000000000000000000000000000000000000dead")

PRIMARY_TYPE = "SignMerkleRoot"

DOMAIN_TYPES: dict[str, list[dict[str, str]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
}

PRIMARY_TYPES: dict[str, list[dict[str, str]]] = {
    PRIMARY_TYPE: [
        {"name": "seed", "type": "bytes32"},
        {"name": "merkleRoot", "type": "bytes32"},
        {"name": "expiry", "type": "uint256"},
    ],
}

EIP712_DOMAIN_TYPEHASH = keccak(
    b"EIP712Domain(string name,string version,uint256 chainId,address verifyingContract)"
)
SIGN_MERKLE_ROOT_TYPEHASH = keccak(b"SignMerkleRoot(bytes32 seed,bytes32 merkleRoot,uint256 expiry)")

RootLike = Union[MerkleTree, bytes, str]


def get_domain() -> dict[str, Any]:
    return {
        "name": DOMAIN_NAME,
        "version": DOMAIN_VERSION,
        "chainId": DOMAIN_CHAIN_ID,
        "verifyingContract": DOMAIN_VERIFYING_CONTRACT,
    }


def domain_separator() -> bytes:
    return keccak(encode(
        ["bytes32", "bytes32", "bytes32", "uint256", "address"],
        [
            EIP712_DOMAIN_TYPEHASH,
            keccak(text=DOMAIN_NAME),
            keccak(text=DOMAIN_VERSION),
            DOMAIN_CHAIN_ID,
            DOMAIN_VERIFYING_CONTRACT,
        ],
    ))


@dataclass(frozen=True)
class SigningData:
    """Arguments for a typed-data signer: domain, types and message."""
    domain: dict[str, Any]
    types: dict[str, list[dict[str, str]]]
    message: dict[str, Any]

    def to_typed_data(self) -> dict[str, Any]:
        """Full ``eth_signTypedData_v4`` payload, JSON-serialisable."""
        return {
            "types": {**DOMAIN_TYPES, **self.types},
            "primaryType": PRIMARY_TYPE,
            "domain": dict(self.domain),
            "message": {
                "seed": encode_hex(self.message["seed"]),
                "merkleRoot": encode_hex(self.message["merkleRoot"]),
                "expiry": self.message["expiry"],
            },
        }


def _root_bytes(root: RootLike) -> bytes:
    if isinstance(root, MerkleTree):
        return root.root
    if isinstance(root, str):
        root = bytes.fromhex(root.removeprefix("0x"))
    root = bytes(root)
    if len(root) != 32:
        raise ValueError(f"Merkle root must be 32 bytes, got {len(root)}")
    return root


def get_signing_data(root: RootLike, options: SigningOptions) -> SigningData:
    return SigningData(
        domain=get_domain(),
        types={name: list(fields) for name, fields in PRIMARY_TYPES.items()},
        message={
            "seed": options.seed,
            "merkleRoot": _root_bytes(root),
            "expiry": options.expiry,
        },
    )


def get_typed_data(root: RootLike, options: SigningOptions) -> dict[str, Any]:
    return get_signing_data(root, options).to_typed_data()


def hash_struct(root: RootLike, options: SigningOptions) -> bytes:
    return keccak(encode(
        ["bytes32", "bytes32", "bytes32", "uint256"],
        [SIGN_MERKLE_ROOT_TYPEHASH, options.seed, _root_bytes(root), options.expiry],
    ))


def get_digest_to_sign(root: RootLike, options: SigningOptions) -> bytes:
    """The 32-byte EIP-712 digest every signer signs."""
    return keccak(b"\x19\x01" + domain_separator() + hash_struct(root, options))


async def sign_one_sig_tree(
    tree: RootLike,
    signers: Sequence["TypedDataSigner"],
    options: SigningOptions,
    encoding: str = "string",
) -> Union[Signature, str]:
    """Collect one signature per signer and order them by signer address.

    Signers run concurrently; the first failure propagates as raised.
    ``encoding`` selects the return type: ``"string"`` for 0x hex,
    ``"signature"`` for a Signature.
    """
    if encoding not in ("string", "signature"):
        raise ValueError(f"Invalid encoding: {encoding!r}")
    if len(signers) == 0:
        raise OneSigCoreError(ErrorCode.ONE_SIGNER_REQUIRED, "1+ signer must be provided")

    data = get_signing_data(tree, options)
    logger.debug("Requesting %d signatures over root %s", len(signers), encode_hex(data.message["merkleRoot"]))

    raw_signatures = await asyncio.gather(
        *(signer.sign_typed_data(data.domain, data.types, data.message) for signer in signers)
    )
    signatures = [Signature(raw) for raw in raw_signatures]

    digest = get_digest_to_sign(tree, options)
    combined = Signature.concatenate(signatures, ByDigest(digest))

    if encoding == "signature":
        return combined
    return combined.to_hex_string()
