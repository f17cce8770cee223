"""OneSig core — merkle commitments and multi-signatures for batched transactions."""

from onesig.crypto import (
    ByAddresses,
    ByDigest,
    CommitmentBuilder,
    MerkleTree,
    NoSort,
    Signature,
    compare_addresses,
    encode_leaf,
    encode_leaf_header,
    get_digest_to_sign,
    get_signing_data,
    get_typed_data,
    make_one_sig_tree,
    recover_signer,
    sign_one_sig_tree,
)
from onesig.errors import ErrorCode, OneSigCoreError
from onesig.models import LeafData, LeafGenerator, SigningOptions, StaticLeafGenerator

__version__ = "0.1.0"

__all__ = [
    "ByAddresses",
    "ByDigest",
    "CommitmentBuilder",
    "MerkleTree",
    "NoSort",
    "Signature",
    "compare_addresses",
    "encode_leaf",
    "encode_leaf_header",
    "get_digest_to_sign",
    "get_signing_data",
    "get_typed_data",
    "make_one_sig_tree",
    "recover_signer",
    "sign_one_sig_tree",
    "ErrorCode",
    "OneSigCoreError",
    "LeafData",
    "LeafGenerator",
    "SigningOptions",
    "StaticLeafGenerator",
]
