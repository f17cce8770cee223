"""Tests for environment-driven settings."""

from pathlib import Path

import pytest
from eth_account import Account

from onesig.settings import Settings
from onesig.signers import LocalAccountSigner, Web3Signer

KEY_A = "0x" + "0a" * 32
KEY_B = "0x" + "0b" * 32


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env(environ={})
        assert settings.private_keys == ()
        assert settings.rpc_url is None
        assert settings.signer_addresses == ()
        assert settings.log_level == "WARNING"
        assert settings.build_signers() == []

    def test_parses_lists(self) -> None:
        settings = Settings.from_env(environ={
            "ONESIG_PRIVATE_KEYS": f" {KEY_A}, {KEY_B},",
            "ONESIG_LOG_LEVEL": "debug",
        })
        assert settings.private_keys == (KEY_A, KEY_B)
        assert settings.log_level == "DEBUG"

    def test_local_signers(self) -> None:
        signers = Settings(private_keys=(KEY_A, KEY_B)).build_signers()
        assert all(isinstance(s, LocalAccountSigner) for s in signers)
        assert [s.address for s in signers] == [
            Account.from_key(KEY_A).address,
            Account.from_key(KEY_B).address,
        ]

    def test_remote_signers(self) -> None:
        address = Account.from_key(KEY_A).address
        settings = Settings.from_env(environ={
            "ONESIG_RPC_URL": "http://127.0.0.1:8545",
            "ONESIG_SIGNER_ADDRESSES": address.lower(),
        })
        (signer,) = settings.build_signers()
        assert isinstance(signer, Web3Signer)
        assert signer.address == address

    def test_remote_addresses_need_rpc(self) -> None:
        settings = Settings.from_env(environ={"ONESIG_SIGNER_ADDRESSES": "0x" + "00" * 20})
        assert settings.signer_addresses == ("0x" + "00" * 20,)
        with pytest.raises(ValueError, match="ONESIG_RPC_URL"):
            settings.build_signers()

    def test_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        # Registered with monkeypatch so the value load_dotenv sets is undone.
        monkeypatch.setenv("ONESIG_PRIVATE_KEYS", "")
        monkeypatch.delenv("ONESIG_PRIVATE_KEYS")
        env_file = tmp_path / ".env"
        env_file.write_text(f"ONESIG_PRIVATE_KEYS={KEY_A}\n", encoding="utf-8")
        settings = Settings.from_env(env_file)
        assert settings.private_keys == (KEY_A,)

    def test_environment_wins_over_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ONESIG_PRIVATE_KEYS", KEY_B)
        env_file = tmp_path / ".env"
        env_file.write_text(f"ONESIG_PRIVATE_KEYS={KEY_A}\n", encoding="utf-8")
        assert Settings.from_env(env_file).private_keys == (KEY_B,)
