"""Shared fixtures for the registry client tests."""

import os

import pytest

from blockchain.registry import HashAuthRegistry, load_abi
from blockchain.signer import LocalAccountSigner
from products.record import ProductRecord
from tests.fake_chain import FakeChain

# Throwaway key, never funded on any network
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
OTHER_PRIVATE_KEY = "0x" + "11" * 32
REGISTRY_ADDRESS = "0xd1728b465e62abe6550179ba03d52130c1960274"


@pytest.fixture
def product():
    """Fixed product record."""
    return ProductRecord(
        name="Viribus",
        batch_no="2020.01.151615",
        barcode_no="202001151615",
        expiry_date=1767139200,
        production_date=1590364800,
        fda_no=73737373,
        producer_name="Factorem Productum",
        scan_location="Forum Loco",
        scan_status="ok",
        scan_time=1700000000,
        scan_date=1700000000,
    )


@pytest.fixture
def signer():
    return LocalAccountSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def abi():
    return load_abi()


@pytest.fixture
def fake_chain(abi, signer):
    """Simulated node whose registry only accepts the test signer."""
    return FakeChain(REGISTRY_ADDRESS, abi, manager=signer.address)


@pytest.fixture
def registry(fake_chain, abi):
    return HashAuthRegistry(fake_chain, REGISTRY_ADDRESS, abi)


ENV_VARS = (
    "HASH_AUTH_RPC_URL",
    "HASH_AUTH_CONTRACT_ADDRESS",
    "HASH_AUTH_SENDER_ADDRESS",
    "HASH_AUTH_PRIVATE_KEY",
    "HASH_AUTH_ABI_PATH",
    "HASH_AUTH_GAS_LIMIT",
    "HASH_AUTH_SIGNING_RULES",
    "HASH_AUTH_RECEIPT_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Private copy of the environment without HASH_AUTH_* settings (load_dotenv writes into it)."""
    environ = {key: value for key, value in os.environ.items() if key not in ENV_VARS}
    monkeypatch.setattr(os, "environ", environ)
    return environ
