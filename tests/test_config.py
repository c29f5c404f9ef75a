"""
Unit tests for settings loading.
"""

import pytest

from blockchain.config import HashAuthSettings
from blockchain.registry import DEFAULT_ABI_PATH


@pytest.fixture
def env_file(tmp_path, clean_env):
    """Empty .env so settings come only from the patched environment."""
    path = tmp_path / ".env"
    path.write_text("")
    return str(path)


def test_defaults(env_file, monkeypatch):
    monkeypatch.setenv("HASH_AUTH_RPC_URL", "https://xapi1.fantom.network/lachesis")
    monkeypatch.setenv("HASH_AUTH_CONTRACT_ADDRESS", "0xd1728b465e62abe6550179ba03d52130c1960274")

    settings = HashAuthSettings.from_env(env_file)

    assert settings.rpc_url == "https://xapi1.fantom.network/lachesis"
    assert settings.sender_address is None
    assert settings.private_key is None
    assert settings.abi_path == DEFAULT_ABI_PATH
    assert settings.gas_limit == 2500000
    assert settings.signing_rules == "petersburg"
    assert settings.receipt_timeout == 120


def test_values_from_env_file(tmp_path, clean_env):
    path = tmp_path / ".env"
    path.write_text(
        "HASH_AUTH_RPC_URL=ws://127.0.0.1:7545\n"
        "HASH_AUTH_CONTRACT_ADDRESS=0xd1728b465e62abe6550179ba03d52130c1960274\n"
        "HASH_AUTH_GAS_LIMIT=300000\n"
        "HASH_AUTH_SIGNING_RULES=london\n"
        "HASH_AUTH_ABI_PATH=abis/custom.json\n"
    )

    settings = HashAuthSettings.from_env(str(path))

    assert settings.rpc_url == "ws://127.0.0.1:7545"
    assert settings.gas_limit == 300000
    assert settings.signing_rules == "london"
    assert str(settings.abi_path) == "abis/custom.json"


def test_missing_required_settings(env_file, monkeypatch):
    monkeypatch.setenv("HASH_AUTH_RPC_URL", "http://127.0.0.1:7545")

    with pytest.raises(ValueError, match="HASH_AUTH_CONTRACT_ADDRESS"):
        HashAuthSettings.from_env(env_file)


def test_malformed_gas_limit(env_file, monkeypatch):
    monkeypatch.setenv("HASH_AUTH_RPC_URL", "http://127.0.0.1:7545")
    monkeypatch.setenv("HASH_AUTH_CONTRACT_ADDRESS", "0xd1728b465e62abe6550179ba03d52130c1960274")
    monkeypatch.setenv("HASH_AUTH_GAS_LIMIT", "lots")

    with pytest.raises(ValueError, match="HASH_AUTH_GAS_LIMIT"):
        HashAuthSettings.from_env(env_file)


def test_unknown_signing_rules(env_file, monkeypatch):
    monkeypatch.setenv("HASH_AUTH_RPC_URL", "http://127.0.0.1:7545")
    monkeypatch.setenv("HASH_AUTH_CONTRACT_ADDRESS", "0xd1728b465e62abe6550179ba03d52130c1960274")
    monkeypatch.setenv("HASH_AUTH_SIGNING_RULES", "homestead")

    with pytest.raises(ValueError, match="homestead"):
        HashAuthSettings.from_env(env_file)


def test_require_signing():
    settings = HashAuthSettings(rpc_url="http://127.0.0.1:7545", contract_address="0x0")

    with pytest.raises(ValueError, match="HASH_AUTH_PRIVATE_KEY"):
        settings.require_signing()
