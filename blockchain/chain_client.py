"""
Chain Client

Capability interface over the blockchain node used by the registry client,
plus the web3.py backend (JSON-RPC over HTTP or WebSocket).

The transaction builder only needs the node for three reads (nonce, gas
price, chain id); the registry additionally submits signed transactions
and performs read-only contract calls. Any backend implementing ChainClient
is interchangeable, which is how the test suite runs against a simulated
node.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from requests.exceptions import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

logger = logging.getLogger(__name__)

# Failures that mean "the node could not serve this request"
NODE_ERRORS = (Web3Exception, RequestException, OSError)


class NodeUnavailable(Exception):
    """Raised when a node read, call, or submission fails."""
    pass


class ChainClient(ABC):
    """
    Node operations required by the registry client.
    
    Implementations must raise NodeUnavailable for any node failure and
    must not retry internally; retry policy belongs to the caller.
    """

    @abstractmethod
    def get_block_number(self) -> int:
        """Current block height; used as a connectivity check."""
        pass

    @abstractmethod
    def get_transaction_count(self, address: str) -> int:
        """Next transaction sequence number (nonce) for an address."""
        pass

    @abstractmethod
    def get_gas_price(self) -> int:
        """Current network gas price in wei."""
        pass

    @abstractmethod
    def get_chain_id(self) -> int:
        """Network identifier used for replay protection."""
        pass

    @abstractmethod
    def send_signed_transaction(self, raw_transaction: str) -> Dict[str, Any]:
        """
        Submit a 0x-hex signed transaction and wait for it to be mined.
        
        Returns:
            Dict with 'blockNumber' and 'transactionHash'
        """
        pass

    @abstractmethod
    def call(self, transaction: Dict[str, Any]) -> bytes:
        """Execute a read-only contract call (eth_call) and return the raw result."""
        pass


class Web3ChainClient(ChainClient):
    """ChainClient backed by a web3.py connection."""

    def __init__(self, rpc_url: Optional[str] = None, receipt_timeout: int = 120, w3: Optional[Web3] = None):
        """
        Connect to a node.
        
        Args:
            rpc_url: http(s):// or ws(s):// endpoint of the node
            receipt_timeout: Seconds to wait for a submitted transaction to be mined
            w3: Already configured Web3 instance (used instead of rpc_url)
        """
        if w3 is None:
            if not rpc_url:
                raise ValueError("Either rpc_url or w3 is required")
            w3 = Web3(self._provider_for(rpc_url))

        self.rpc_url = rpc_url
        self.w3 = w3
        self.receipt_timeout = receipt_timeout

    @staticmethod
    def _provider_for(rpc_url: str):
        if rpc_url.startswith(("ws://", "wss://")):
            return Web3.LegacyWebSocketProvider(rpc_url)
        if rpc_url.startswith(("http://", "https://")):
            return Web3.HTTPProvider(rpc_url)
        raise ValueError(f"Unsupported RPC URL scheme: {rpc_url}")

    @classmethod
    def from_web3(cls, w3: Web3, receipt_timeout: int = 120) -> "Web3ChainClient":
        """Wrap an already configured Web3 instance."""
        return cls(receipt_timeout=receipt_timeout, w3=w3)

    def get_block_number(self) -> int:
        try:
            return self.w3.eth.block_number
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Failed to read block number: {e}") from e

    def get_transaction_count(self, address: str) -> int:
        try:
            return self.w3.eth.get_transaction_count(Web3.to_checksum_address(address))
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Failed to read nonce for {address}: {e}") from e

    def get_gas_price(self) -> int:
        try:
            return self.w3.eth.gas_price
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Failed to read gas price: {e}") from e

    def get_chain_id(self) -> int:
        try:
            return self.w3.eth.chain_id
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Failed to read chain id: {e}") from e

    def send_signed_transaction(self, raw_transaction: str) -> Dict[str, Any]:
        try:
            tx_hash = self.w3.eth.send_raw_transaction(raw_transaction)
            logger.info(f"Transaction sent: {Web3.to_hex(tx_hash)}")
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Transaction submission failed: {e}") from e

        tx_hash_hex = Web3.to_hex(receipt["transactionHash"])
        if receipt.get("status") == 0:
            raise NodeUnavailable(f"Transaction {tx_hash_hex} reverted in block {receipt['blockNumber']}")

        return {
            "blockNumber": receipt["blockNumber"],
            "transactionHash": tx_hash_hex,
        }

    def call(self, transaction: Dict[str, Any]) -> bytes:
        try:
            return bytes(self.w3.eth.call(transaction))
        except NODE_ERRORS as e:
            raise NodeUnavailable(f"Contract call failed: {e}") from e
