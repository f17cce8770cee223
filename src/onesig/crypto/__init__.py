"""Cryptographic core — leaf encoding, merkle trees, signatures, signing."""

from onesig.crypto.addresses import compare_addresses
from onesig.crypto.commitment_builder import CommitmentBuilder, make_one_sig_tree
from onesig.crypto.leaf_codec import encode_leaf, encode_leaf_header
from onesig.crypto.merkle import MerkleTree
from onesig.crypto.signature import ByAddresses, ByDigest, NoSort, Signature, recover_signer
from onesig.crypto.signing import (
    get_digest_to_sign,
    get_signing_data,
    get_typed_data,
    sign_one_sig_tree,
)

__all__ = [
    "compare_addresses",
    "CommitmentBuilder",
    "make_one_sig_tree",
    "encode_leaf",
    "encode_leaf_header",
    "MerkleTree",
    "ByAddresses",
    "ByDigest",
    "NoSort",
    "Signature",
    "recover_signer",
    "get_digest_to_sign",
    "get_signing_data",
    "get_typed_data",
    "sign_one_sig_tree",
]
