"""OneSig CLI — build, sign and check OneSig merkle commitments.

Usage:
    python -m onesig.cli tree leafs.json
    python -m onesig.cli digest leafs.json --seed 0x... --expiry 1767225600
    python -m onesig.cli sign leafs.json --seed 0x... --expiry 1767225600
    python -m onesig.cli verify --leaf 0x... --root 0x... --proof 0x... 0x...
    python -m onesig.cli order --digest 0x... 0xSIG1 0xSIG2

Leaf files hold a JSON list of EVM leafs:
    [{"nonce": 0, "oneSigId": 5, "targetOneSigAddress": "0x...",
      "calls": [{"to": "0x...", "value": 0, "data": "0x"}]}]

Signers for ``sign`` come from the environment (see onesig.settings).
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from eth_utils import encode_hex, to_bytes

from onesig.crypto.commitment_builder import make_one_sig_tree
from onesig.crypto.leaf_codec import encode_leaf
from onesig.crypto.merkle import MerkleTree
from onesig.crypto.signature import ByDigest, Signature
from onesig.crypto.signing import get_digest_to_sign, get_typed_data, sign_one_sig_tree
from onesig.errors import OneSigCoreError
from onesig.generators.evm import EvmLeafGenerator, evm_leaf_from_dict, evm_leaf_generator
from onesig.models.signing import SigningOptions
from onesig.settings import Settings


def _load_generator(path: Path) -> EvmLeafGenerator:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw["leafs"]
    return evm_leaf_generator([evm_leaf_from_dict(item) for item in raw])


def _options(args: argparse.Namespace) -> SigningOptions:
    return SigningOptions(seed=args.seed, expiry=args.expiry)


def cmd_tree(args: argparse.Namespace) -> int:
    gen = _load_generator(args.leafs)
    tree = make_one_sig_tree([gen])
    leaves = []
    for i in range(len(gen.leafs)):
        leaf = encode_leaf(gen, i)
        leaves.append({"index": i, "leaf": encode_hex(leaf), "proof": tree.get_hex_proof(leaf)})
    print(json.dumps({"leafCount": tree.leaf_count, "root": tree.hex_root, "leaves": leaves}, indent=2))
    return 0


def cmd_digest(args: argparse.Namespace) -> int:
    tree = make_one_sig_tree([_load_generator(args.leafs)])
    options = _options(args)
    print(json.dumps({
        "root": tree.hex_root,
        "digest": encode_hex(get_digest_to_sign(tree, options)),
        "typedData": get_typed_data(tree, options),
    }, indent=2))
    return 0


def cmd_sign(args: argparse.Namespace) -> int:
    settings = Settings.from_env(args.env_file)
    signers = settings.build_signers()
    tree = make_one_sig_tree([_load_generator(args.leafs)])
    options = _options(args)
    signature = asyncio.run(sign_one_sig_tree(tree, signers, options, "signature"))
    print(json.dumps({
        "root": tree.hex_root,
        "seed": encode_hex(options.seed),
        "expiry": options.expiry,
        "signers": [signer.address for signer in signers],
        "signatureCount": signature.signature_count,
        "signature": signature.to_hex_string(),
    }, indent=2))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    valid = MerkleTree.verify(
        [to_bytes(hexstr=node) for node in args.proof],
        to_bytes(hexstr=args.leaf),
        to_bytes(hexstr=args.root),
    )
    print("valid" if valid else "invalid")
    return 0 if valid else 1


def cmd_order(args: argparse.Namespace) -> int:
    combined = Signature.concatenate(args.signatures, ByDigest(to_bytes(hexstr=args.digest)))
    print(combined.to_hex_string())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="onesig",
        description="Build, sign and verify OneSig merkle commitments",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Path to a .env file with signer settings (default: .env)",
    )
    sub = parser.add_subparsers(dest="command")

    # tree
    p_tree = sub.add_parser("tree", help="Print root and proofs for a leaf file")
    p_tree.add_argument("leafs", type=Path, help="JSON leaf file")

    # digest / sign
    for name, help_text in (("digest", "Print the EIP-712 digest to sign"), ("sign", "Sign a leaf file")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("leafs", type=Path, help="JSON leaf file")
        p.add_argument("--seed", required=True, help="32-byte seed, 0x hex")
        p.add_argument("--expiry", required=True, type=int, help="Expiry unix timestamp")

    # verify
    p_verify = sub.add_parser("verify", help="Check a merkle proof")
    p_verify.add_argument("--leaf", required=True, help="Leaf digest, 0x hex")
    p_verify.add_argument("--root", required=True, help="Merkle root, 0x hex")
    p_verify.add_argument("--proof", nargs="*", default=[], help="Sibling digests, 0x hex")

    # order
    p_order = sub.add_parser("order", help="Concatenate signatures in signer order")
    p_order.add_argument("--digest", required=True, help="Signed digest, 0x hex")
    p_order.add_argument("signatures", nargs="+", help="65-byte signatures, 0x hex")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "tree": cmd_tree,
        "digest": cmd_digest,
        "sign": cmd_sign,
        "verify": cmd_verify,
        "order": cmd_order,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    try:
        level = logging.DEBUG if args.verbose else Settings.from_env(args.env_file).log_level
        logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
        return handler(args)
    except (OneSigCoreError, ValueError) as error:
        print(f"Failed: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
