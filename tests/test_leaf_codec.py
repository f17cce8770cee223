"""Tests for the leaf header layout and leaf digests."""

import pytest
from eth_utils import keccak

from onesig.crypto.leaf_codec import (
    LEAF_HEADER_LENGTH,
    UINT64_MAX,
    encode_leaf,
    encode_leaf_data,
    encode_leaf_header,
    hex_leaf,
)
from onesig.errors import ErrorCode, OneSigCoreError
from onesig.models.leaf import LeafData, StaticLeafGenerator

ADDRESS = bytes(range(32))


def _generator() -> StaticLeafGenerator:
    return StaticLeafGenerator([
        LeafData(nonce=0, one_sig_id=5, target_one_sig_address=ADDRESS, calls=[b"\x01\x02"]),
        LeafData(nonce=1, one_sig_id=5, target_one_sig_address=ADDRESS, calls=[b"\x03", b"\x04"]),
    ])


class TestLeafHeader:
    def test_layout(self) -> None:
        header = encode_leaf_header(one_sig_id=5, nonce=1, target_one_sig_address=ADDRESS)
        assert len(header) == LEAF_HEADER_LENGTH
        assert header[0] == 1
        assert header[1:9] == bytes.fromhex("0000000000000005")
        assert header[9:41] == ADDRESS
        assert header[41:49] == bytes.fromhex("0000000000000001")

    def test_big_endian_full_width(self) -> None:
        header = encode_leaf_header(
            one_sig_id=0x0102030405060708, nonce=UINT64_MAX, target_one_sig_address=ADDRESS,
        )
        assert header[1:9] == bytes([1, 2, 3, 4, 5, 6, 7, 8])
        assert header[41:49] == b"\xff" * 8

    @pytest.mark.parametrize("address", [b"", b"\x00" * 20, b"\x00" * 33])
    def test_address_must_be_32_bytes(self, address: bytes) -> None:
        with pytest.raises(OneSigCoreError) as excinfo:
            encode_leaf_header(one_sig_id=1, nonce=0, target_one_sig_address=address)
        assert excinfo.value.code is ErrorCode.INVALID_HEADER

    @pytest.mark.parametrize("one_sig_id, nonce", [(UINT64_MAX + 1, 0), (0, UINT64_MAX + 1), (-1, 0), (0, -1)])
    def test_values_must_fit_uint64(self, one_sig_id: int, nonce: int) -> None:
        with pytest.raises(OneSigCoreError) as excinfo:
            encode_leaf_header(one_sig_id=one_sig_id, nonce=nonce, target_one_sig_address=ADDRESS)
        assert excinfo.value.code is ErrorCode.INVALID_HEADER


class TestEncodeLeaf:
    def test_preimage_is_header_then_payload(self) -> None:
        gen = _generator()
        data = encode_leaf_data(gen, 1)
        assert data[:LEAF_HEADER_LENGTH] == encode_leaf_header(5, 1, ADDRESS)
        assert data[LEAF_HEADER_LENGTH:] == b"\x03\x04"

    def test_double_keccak(self) -> None:
        gen = _generator()
        leaf = encode_leaf(gen, 0)
        assert len(leaf) == 32
        assert leaf == keccak(keccak(encode_leaf_data(gen, 0)))
        assert leaf != keccak(encode_leaf_data(gen, 0))

    def test_hex_leaf(self) -> None:
        gen = _generator()
        assert hex_leaf(gen, 0) == "0x" + encode_leaf(gen, 0).hex()

    @pytest.mark.parametrize("index", [2, 100, -1])
    def test_missing_leaf(self, index: int) -> None:
        with pytest.raises(OneSigCoreError) as excinfo:
            encode_leaf(_generator(), index)
        assert excinfo.value.code is ErrorCode.LEAF_NOT_FOUND

    def test_distinct_nonces_distinct_leaves(self) -> None:
        gen = StaticLeafGenerator([
            LeafData(nonce=0, one_sig_id=5, target_one_sig_address=ADDRESS, calls=[b"same"]),
            LeafData(nonce=1, one_sig_id=5, target_one_sig_address=ADDRESS, calls=[b"same"]),
        ])
        assert encode_leaf(gen, 0) != encode_leaf(gen, 1)
