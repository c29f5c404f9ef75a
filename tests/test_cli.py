"""
Command line tests against the simulated node.
"""

import json

import pytest

from blockchain.cli import main
from products.samples import static_product
from tests.conftest import REGISTRY_ADDRESS, TEST_PRIVATE_KEY


@pytest.fixture
def env_file(tmp_path, clean_env, signer):
    path = tmp_path / ".env"
    path.write_text(
        "HASH_AUTH_RPC_URL=http://127.0.0.1:7545\n"
        f"HASH_AUTH_CONTRACT_ADDRESS={REGISTRY_ADDRESS}\n"
        f"HASH_AUTH_SENDER_ADDRESS={signer.address}\n"
        f"HASH_AUTH_PRIVATE_KEY={TEST_PRIVATE_KEY[2:]}\n"
    )
    return str(path)


def test_check(env_file, fake_chain, capsys):
    assert main(["--env-file", env_file, "check"], chain_client=fake_chain) == 0

    output = capsys.readouterr().out
    assert "Current block height: 1000" in output
    assert "Chain ID: 4002" in output


def test_add_then_test_static_product(env_file, fake_chain, capsys):
    assert main(["--env-file", env_file, "test"], chain_client=fake_chain) == 0
    assert "Unknown product Viribus" in capsys.readouterr().out

    assert main(["--env-file", env_file, "add", "--static"], chain_client=fake_chain) == 0
    output = capsys.readouterr().out
    assert "Product Viribus has been added with block #1001" in output

    assert main(["--env-file", env_file, "test"], chain_client=fake_chain) == 0
    output = capsys.readouterr().out
    assert "Product Viribus has been added 20" in output
    assert "Unknown product Rebus" in output


def test_products_file(env_file, fake_chain, tmp_path, capsys):
    products_file = tmp_path / "products.json"
    products_file.write_text(json.dumps([static_product(now=1700000000).to_dict()]))

    args = ["--env-file", env_file, "--products", str(products_file)]
    assert main(args + ["add"], chain_client=fake_chain) == 0
    assert main(args + ["test"], chain_client=fake_chain) == 0

    assert "✓ Product Viribus has been added 20" in capsys.readouterr().out


def test_add_requires_signing_settings(env_file, fake_chain, capsys):
    with open(env_file, "w") as f:
        f.write(
            "HASH_AUTH_RPC_URL=http://127.0.0.1:7545\n"
            f"HASH_AUTH_CONTRACT_ADDRESS={REGISTRY_ADDRESS}\n"
        )

    assert main(["--env-file", env_file, "add"], chain_client=fake_chain) == 1
    assert "HASH_AUTH_PRIVATE_KEY" in capsys.readouterr().out


def test_node_failure_exit_code(env_file, fake_chain, capsys):
    fake_chain.failing.add("get_chain_id")

    assert main(["--env-file", env_file, "add"], chain_client=fake_chain) == 1
    assert "❌" in capsys.readouterr().out


def test_invalid_product_file(env_file, fake_chain, tmp_path, capsys):
    products_file = tmp_path / "products.json"
    products_file.write_text(json.dumps([{"name": "Incomplete"}]))

    assert main(["--env-file", env_file, "--products", str(products_file), "test"], chain_client=fake_chain) == 1
    assert "batchNo" in capsys.readouterr().out
