"""Sorted-pair Merkle tree over 32-byte leaf digests.

Uses keccak256. Leaves keep their insertion order (the leaf index is
meaningful to callers), but every internal node hashes its two children
in ascending byte order, so a proof is just the list of sibling digests
with no left/right markers. A trailing odd node is promoted to the next
level unchanged.

Verification is a static function: anyone holding (proof, leaf, root)
can recompute the root without the tree, which is what the on-chain
verifier does.
"""

from __future__ import annotations

import logging
from typing import Sequence

from eth_utils import encode_hex, keccak

from onesig.errors import ErrorCode, OneSigCoreError

logger = logging.getLogger(__name__)


class MerkleTree:
    """An immutable sorted-pair Merkle tree.

    Usage:
        tree = MerkleTree([leaf_a, leaf_b, leaf_c])
        root = tree.root
        proof = tree.get_proof(leaf_a)
        assert MerkleTree.verify(proof, leaf_a, root)
    """

    def __init__(self, leaves: Sequence[bytes]) -> None:
        if not leaves:
            raise OneSigCoreError(ErrorCode.LEAF_NOT_FOUND, "Cannot build a tree without leaves")

        self._leaves: tuple[bytes, ...] = tuple(bytes(leaf) for leaf in leaves)
        self._index: dict[bytes, int] = {}
        for i, leaf in enumerate(self._leaves):
            if leaf in self._index:
                raise OneSigCoreError(
                    ErrorCode.LEAF_SEEN_TWICE,
                    f"Leaf {encode_hex(leaf)} appears at index {self._index[leaf]} and {i}",
                )
            self._index[leaf] = i

        self._layers: list[tuple[bytes, ...]] = [self._leaves]
        current_level = self._leaves
        while len(current_level) > 1:
            next_level: list[bytes] = []
            for i in range(0, len(current_level), 2):
                if i + 1 == len(current_level):
                    next_level.append(current_level[i])  # Promote
                else:
                    next_level.append(_hash_pair(current_level[i], current_level[i + 1]))
            current_level = tuple(next_level)
            self._layers.append(current_level)

        logger.debug(
            "Built merkle tree: %d leaves, %d layers, root %s",
            len(self._leaves), len(self._layers), encode_hex(self.root),
        )

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def leaves(self) -> tuple[bytes, ...]:
        return self._leaves

    @property
    def root(self) -> bytes:
        return self._layers[-1][0]

    @property
    def hex_root(self) -> str:
        return encode_hex(self.root)

    def get_leaf_index(self, leaf: bytes) -> int:
        """Index of ``leaf`` in insertion order. Raises LEAF_NOT_FOUND."""
        try:
            return self._index[bytes(leaf)]
        except KeyError:
            raise OneSigCoreError(
                ErrorCode.LEAF_NOT_FOUND, f"Leaf {encode_hex(leaf)} is not in the tree"
            ) from None

    def get_proof(self, leaf: bytes) -> list[bytes]:
        """Sibling digests from ``leaf`` up to (excluding) the root."""
        return self.get_proof_by_index(self.get_leaf_index(leaf))

    def get_proof_by_index(self, index: int) -> list[bytes]:
        if not 0 <= index < len(self._leaves):
            raise OneSigCoreError(ErrorCode.LEAF_NOT_FOUND, f"Leaf {index} does not exist")

        proof: list[bytes] = []
        for level in self._layers[:-1]:
            sibling = index - 1 if index % 2 else index + 1
            # A promoted node has no sibling at this level.
            if sibling < len(level):
                proof.append(level[sibling])
            index //= 2
        return proof

    def get_hex_proof(self, leaf: bytes) -> list[str]:
        return [encode_hex(node) for node in self.get_proof(leaf)]

    @staticmethod
    def verify(proof: Sequence[bytes], leaf: bytes, root: bytes) -> bool:
        """Recompute the root from ``leaf`` and ``proof``; compare to ``root``."""
        node = bytes(leaf)
        for sibling in proof:
            node = _hash_pair(node, bytes(sibling))
        return node == bytes(root)


def _hash_pair(left: bytes, right: bytes) -> bytes:
    """Hash two nodes in ascending byte order."""
    if right < left:
        left, right = right, left
    return keccak(left + right)
