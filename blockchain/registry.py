"""
Data Hashing Record Authentication Registry

Client for the registry contract that stores a content hash of a product
record together with the block timestamp at which it was added.

- add_product: encode record → build and sign transaction → submit
- test_product: encode record → read-only authProduct call → (hash, timestamp)

The contract is immutable, so its ABI never changes. Two deployed
generations exist: addProduct/authProduct (mainnet) and add/auth (testnet);
the function names are picked from whichever ABI is loaded.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from web3 import Web3

from blockchain.chain_client import ChainClient, NodeUnavailable
from blockchain.response import NOT_FOUND, AuthResponse, format_timestamp, is_known
from blockchain.signer import TransactionSigner
from blockchain.transactions import (
    DEFAULT_GAS_LIMIT,
    DEFAULT_SIGNING_RULES,
    build_signed_transaction,
)
from products.encoder import encode_record, to_hex_params
from products.record import ProductRecord

logger = logging.getLogger(__name__)

ABI_DIR = Path(__file__).parent / "abis"
DEFAULT_ABI_PATH = ABI_DIR / "DataHashAuth.json"

ADD_FUNCTION_NAMES = ("addProduct", "add")
AUTH_FUNCTION_NAMES = ("authProduct", "auth")


def load_abi(path: Path = DEFAULT_ABI_PATH) -> List[Dict[str, Any]]:
    """
    Load a contract ABI from JSON.
    
    Handles both a bare ABI list and a build artifact of the form {"abi": [...]}.
    """
    with open(path, 'r', encoding='utf-8') as f:
        contract_data = json.load(f)
    abi = contract_data if isinstance(contract_data, list) else contract_data.get('abi')
    if not isinstance(abi, list):
        raise ValueError(f"No contract ABI found in {path}")
    return abi


def resolve_function_name(abi: Sequence[Dict[str, Any]], candidates: Sequence[str]) -> str:
    """Return the first candidate name that the ABI declares as a function."""
    declared = {entry.get('name') for entry in abi if entry.get('type') == 'function'}
    for name in candidates:
        if name in declared:
            return name
    raise ValueError(f"Contract ABI declares none of: {', '.join(candidates)}")


class HashAuthRegistry:
    """Registry contract client working through a ChainClient."""

    def __init__(
        self,
        chain_client: ChainClient,
        contract_address: str,
        abi: Optional[List[Dict[str, Any]]] = None
    ):
        """
        Args:
            chain_client: Node capability used for reads, calls and submission
            contract_address: Address the registry contract is deployed at
            abi: Contract ABI (defaults to the bundled mainnet ABI)
        """
        self.chain_client = chain_client
        self.contract_address = Web3.to_checksum_address(contract_address)
        self.abi = abi if abi is not None else load_abi()

        self.add_function = resolve_function_name(self.abi, ADD_FUNCTION_NAMES)
        self.auth_function = resolve_function_name(self.abi, AUTH_FUNCTION_NAMES)

        # Only used to encode call data, never to reach a node
        self.contract = Web3().eth.contract(address=self.contract_address, abi=self.abi)

    def encode_add_call(self, record: ProductRecord) -> str:
        """
        Encode the mutating call that registers a product.
        
        Returns:
            0x-hex call data
        
        Raises:
            InvalidField: If the record cannot be encoded
        """
        encoded = encode_record(record)
        return self.contract.encode_abi(self.add_function, args=list(encoded))

    def encode_auth_call(self, record: ProductRecord) -> str:
        """Encode the read-only call that looks a product up."""
        encoded = encode_record(record)
        logger.debug(f"Product params: {to_hex_params(encoded)}")
        return self.contract.encode_abi(self.auth_function, args=list(encoded))

    def add_product(
        self,
        record: ProductRecord,
        signer: TransactionSigner,
        sender_address: Optional[str] = None,
        gas_limit: int = DEFAULT_GAS_LIMIT,
        signing_rules: str = DEFAULT_SIGNING_RULES
    ) -> Dict[str, Any]:
        """
        Register a product hash on-chain.
        
        Args:
            record: Product to add
            signer: Signing capability of the contract manager account
            sender_address: Sending account (defaults to the signer's address)
            gas_limit: Fixed gas ceiling for the transaction
            signing_rules: Fork rule set used to sign
        
        Returns:
            Dict with 'blockNumber' and 'transactionHash'
        
        Raises:
            InvalidField: If the record cannot be encoded
            InvalidKey: If the signer does not control sender_address
            NodeUnavailable: If a node read or the submission fails
        """
        logger.info(f"Adding product {record.name} to contract {self.contract_address}")

        call_data = self.encode_add_call(record)
        raw_transaction = build_signed_transaction(
            sender_address or signer.address,
            signer,
            self.contract_address,
            call_data,
            self.chain_client,
            gas_limit=gas_limit,
            signing_rules=signing_rules
        )
        result = self.chain_client.send_signed_transaction(raw_transaction)

        logger.info(f"Product {record.name} has been added with block #{result['blockNumber']}")
        logger.info(f"Transaction: {result['transactionHash']}")
        return result

    def test_product(self, record: ProductRecord) -> AuthResponse:
        """
        Look a product up in the registry.
        
        A failing call is treated as "not found" and returns NOT_FOUND.
        
        Returns:
            AuthResponse(hash, timestamp); timestamp 0 means unknown product
        
        Raises:
            InvalidField: If the record cannot be encoded
        """
        call_data = self.encode_auth_call(record)

        try:
            raw = self.chain_client.call({'to': self.contract_address, 'data': call_data})
            response = AuthResponse.decode(raw)
        except (NodeUnavailable, DecodingError) as e:
            logger.error(f"Product {record.name} not found: {e}", exc_info=True)
            return NOT_FOUND

        if is_known(response):
            logger.info(f"Product {record.name} has been added {format_timestamp(response)}")
        else:
            logger.info(f"Unknown product {record.name}")
        return response

    def manager(self) -> str:
        """
        Address of the contract manager (the only account allowed to add products).
        
        Raises:
            NodeUnavailable: If the call fails
        """
        call_data = self.contract.encode_abi('manager')
        raw = self.chain_client.call({'to': self.contract_address, 'data': call_data})
        try:
            (address,) = abi_decode(['address'], raw)
        except DecodingError as e:
            raise NodeUnavailable(f"Unexpected manager() result: {raw.hex()}") from e
        return Web3.to_checksum_address(address)
