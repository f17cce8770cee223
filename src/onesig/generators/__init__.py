"""Chain-specific leaf generators."""

from onesig.generators.evm import Call, EvmLeafGenerator, evm_leaf_generator

__all__ = ["Call", "EvmLeafGenerator", "evm_leaf_generator"]
