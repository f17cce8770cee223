"""Commitment builder — turns leaf generators into one OneSig tree.

Leafs are numbered source-major: every leaf of the first generator,
then every leaf of the second, and so on. That global order is the leaf
order of the tree.

Each (nonce, one_sig_id) pair may appear once per build. An account
executes exactly one bundle per nonce, so a repeated pair would put two
competing bundles under one signature.
"""

from __future__ import annotations

import logging
from typing import Iterable

from onesig.crypto.leaf_codec import encode_leaf
from onesig.crypto.merkle import MerkleTree
from onesig.errors import ErrorCode, OneSigCoreError
from onesig.models.leaf import LeafGenerator

logger = logging.getLogger(__name__)


class CommitmentBuilder:
    """Accumulates leaf generators and builds the tree.

    Usage:
        builder = CommitmentBuilder()
        builder.add_generator(evm_leaf_generator(evm_leafs))
        builder.add_generator(other_chain_generator)
        tree = builder.build()
    """

    def __init__(self, generators: Iterable[LeafGenerator] = ()) -> None:
        self._generators: list[LeafGenerator] = list(generators)

    def add_generator(self, generator: LeafGenerator) -> None:
        self._generators.append(generator)

    @property
    def generators(self) -> tuple[LeafGenerator, ...]:
        return tuple(self._generators)

    def encoded_leaves(self) -> list[bytes]:
        """Leaf digests in global order, enforcing (nonce, id) uniqueness."""
        encoded: list[bytes] = []
        seen_nonce_ids: set[tuple[int, int]] = set()

        for generator in self._generators:
            for i, leaf in enumerate(generator.leafs):
                if leaf.nonce_id in seen_nonce_ids:
                    raise OneSigCoreError(
                        ErrorCode.NONCE_ID_SEEN_TWICE,
                        "Two calls should not be made for the same chain/nonce twice "
                        f"(nonce={leaf.nonce}, one_sig_id={leaf.one_sig_id})",
                    )
                seen_nonce_ids.add(leaf.nonce_id)
                encoded.append(encode_leaf(generator, i))

        return encoded

    def build(self) -> MerkleTree:
        leaves = self.encoded_leaves()
        logger.debug(
            "Building OneSig tree from %d generators, %d leaves",
            len(self._generators), len(leaves),
        )
        return MerkleTree(leaves)


def make_one_sig_tree(generators: Iterable[LeafGenerator]) -> MerkleTree:
    """Build the OneSig tree for ``generators`` in one call."""
    return CommitmentBuilder(generators).build()
