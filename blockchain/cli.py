"""
Registry Command Line

Adds sample products to the registry contract and tests whether products
are known to it.

Usage:
    python scripts/hash_auth.py check
    python scripts/hash_auth.py add [--static]
    python scripts/hash_auth.py --products products.json test
"""

import argparse
import logging
import sys
from typing import List, Optional

from blockchain.chain_client import ChainClient, NodeUnavailable, Web3ChainClient
from blockchain.config import HashAuthSettings
from blockchain.registry import HashAuthRegistry, load_abi
from blockchain.response import format_timestamp, is_known
from blockchain.signer import InvalidKey, LocalAccountSigner
from products.errors import InvalidField
from products.record import ProductRecord
from products.samples import load_products, random_product, static_product


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Data Hashing Record Authentication registry client')
    parser.add_argument('--env-file', help='.env file with HASH_AUTH_* settings', default=None)
    parser.add_argument('--products', help='JSON file with a list of products', default=None)
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('check', help='Check the node connection')
    add_parser = subparsers.add_parser('add', help='Add products to the registry')
    add_parser.add_argument('--static', action='store_true', help='Add the static sample product')
    subparsers.add_parser('test', help='Test whether products are known to the registry')
    return parser


def select_products(args: argparse.Namespace) -> List[ProductRecord]:
    if args.products:
        return load_products(args.products)
    if args.command == 'add':
        return [static_product() if args.static else random_product()]
    return [random_product(), static_product()]


def check_connection(client: ChainClient) -> None:
    block_number = client.get_block_number()
    chain_id = client.get_chain_id()
    print(f"✓ Node connection is active")
    print(f"  Current block height: {block_number}")
    print(f"  Chain ID: {chain_id}")


def add_products(registry: HashAuthRegistry, settings: HashAuthSettings, products: List[ProductRecord]) -> None:
    settings.require_signing()
    signer = LocalAccountSigner(settings.private_key)

    for product in products:
        print(f"Adding product {product.name} to contract {registry.contract_address}")
        result = registry.add_product(
            product,
            signer,
            sender_address=settings.sender_address,
            gas_limit=settings.gas_limit,
            signing_rules=settings.signing_rules
        )
        print(f"✓ Product {product.name} has been added with block #{result['blockNumber']}")
        print(f"  Transaction: {result['transactionHash']}")


def test_products(registry: HashAuthRegistry, products: List[ProductRecord]) -> None:
    for product in products:
        print(f"Testing product: {product.name}")
        response = registry.test_product(product)
        if is_known(response):
            print(f"✓ Product {product.name} has been added {format_timestamp(response)}")
        else:
            print(f"❌ Unknown product {product.name}")


def main(argv: Optional[List[str]] = None, chain_client: Optional[ChainClient] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        settings = HashAuthSettings.from_env(args.env_file)
        if chain_client is None:
            chain_client = Web3ChainClient(settings.rpc_url, receipt_timeout=settings.receipt_timeout)

        if args.command == 'check':
            check_connection(chain_client)
            return 0

        registry = HashAuthRegistry(chain_client, settings.contract_address, load_abi(settings.abi_path))
        products = select_products(args)

        if args.command == 'add':
            add_products(registry, settings, products)
        else:
            test_products(registry, products)
        return 0

    except (InvalidField, InvalidKey, NodeUnavailable, ValueError, OSError) as e:
        print(f"❌ {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
