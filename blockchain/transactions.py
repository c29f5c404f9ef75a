"""
Transaction Builder

Builds and signs the mutating registry call (adding a product hash).

Flow:
1. Read nonce, gas price and chain id from the node (fresh on every build)
2. Assemble the envelope: zero value, fixed gas ceiling, call data
3. Bind the chain id into the signature (EIP-155 replay protection)
4. Sign with the sender's TransactionSigner
5. Return the serialized transaction as 0x-prefixed hex

Nothing is retried here. A nonce that goes stale between build and
submission surfaces as a submission failure for the caller to handle.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from web3 import Web3

from blockchain.chain_client import ChainClient
from blockchain.signer import InvalidKey, TransactionSigner

logger = logging.getLogger(__name__)

# Conservative ceiling, comfortably above observed usage of addProduct
DEFAULT_GAS_LIMIT = 2500000

# Fork rule set that decides the envelope format. Pinned for deterministic
# output; moving to a newer rule set is a configuration change.
DEFAULT_SIGNING_RULES = "petersburg"

# Rule sets signing legacy (type 0) transactions with EIP-155 chain binding
LEGACY_SIGNING_RULES = (
    "spuriousDragon",
    "byzantium",
    "constantinople",
    "petersburg",
    "istanbul",
    "muirGlacier",
    "berlin",
)

# Rule sets signing EIP-1559 (type 2) transactions; chain id is part of the payload
FEE_MARKET_SIGNING_RULES = (
    "london",
    "paris",
    "shanghai",
    "cancun",
)


@dataclass(frozen=True)
class ChainParameters:
    """Live chain state needed to build one transaction. Never cached."""
    nonce: int
    gas_price: int
    chain_id: int


def validate_signing_rules(signing_rules: str) -> str:
    """Return the rule set name, or raise ValueError if it is not supported."""
    if signing_rules not in LEGACY_SIGNING_RULES + FEE_MARKET_SIGNING_RULES:
        supported = ", ".join(LEGACY_SIGNING_RULES + FEE_MARKET_SIGNING_RULES)
        raise ValueError(f"Unsupported signing rules '{signing_rules}' (supported: {supported})")
    return signing_rules


def fetch_chain_parameters(chain_client: ChainClient, sender_address: str) -> ChainParameters:
    """
    Read nonce, gas price and chain id from the node, one after the other.
    
    Raises:
        NodeUnavailable: If any of the reads fails
    """
    nonce = chain_client.get_transaction_count(sender_address)
    gas_price = chain_client.get_gas_price()
    chain_id = chain_client.get_chain_id()

    logger.info(f"Using network chain ID: {chain_id}")
    logger.info(f"Current sender's nonce is: {nonce}")
    logger.info(f"Current gas price is: {gas_price} WEI")

    return ChainParameters(nonce=nonce, gas_price=gas_price, chain_id=chain_id)


def build_envelope(
    params: ChainParameters,
    contract_address: str,
    call_data: str,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    signing_rules: str = DEFAULT_SIGNING_RULES
) -> Dict[str, Any]:
    """
    Assemble the unsigned transaction envelope.
    
    Args:
        params: Chain parameters read for this transaction
        contract_address: Registry contract address
        call_data: 0x-hex encoded contract call
        gas_limit: Fixed gas ceiling (not estimated)
        signing_rules: Fork rule set deciding the envelope format
    
    Returns:
        Envelope dict accepted by eth-account's sign_transaction
    """
    validate_signing_rules(signing_rules)

    envelope = {
        "nonce": params.nonce,
        "to": Web3.to_checksum_address(contract_address),
        "value": 0,
        "gas": gas_limit,
        "data": call_data,
        "chainId": params.chain_id,
    }

    if signing_rules in FEE_MARKET_SIGNING_RULES:
        envelope["maxFeePerGas"] = params.gas_price
        envelope["maxPriorityFeePerGas"] = params.gas_price
    else:
        envelope["gasPrice"] = params.gas_price

    return envelope


def build_signed_transaction(
    sender_address: str,
    signer: TransactionSigner,
    contract_address: str,
    call_data: str,
    chain_client: ChainClient,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    signing_rules: str = DEFAULT_SIGNING_RULES
) -> str:
    """
    Create and sign a transaction for a mutating contract call.
    
    Args:
        sender_address: Account sending the transaction (nonce owner)
        signer: Signing capability for sender_address
        contract_address: Registry contract address
        call_data: 0x-hex encoded contract call
        chain_client: Node used for the nonce, gas price and chain id reads
        gas_limit: Fixed gas ceiling
        signing_rules: Fork rule set deciding the envelope format
    
    Returns:
        Signed transaction, 0x-prefixed hex, ready for send_signed_transaction
    
    Raises:
        InvalidKey: If the signer does not control sender_address
        NodeUnavailable: If a chain parameter read fails
        ValueError: If signing_rules is not supported
    
    Example:
        >>> raw_tx = build_signed_transaction(
        ...     signer.address, signer, registry_address, call_data, client
        ... )
        >>> client.send_signed_transaction(raw_tx)
    """
    validate_signing_rules(signing_rules)
    if signer.address.lower() != sender_address.lower():
        raise InvalidKey(f"Signing key belongs to {signer.address}, not sender {sender_address}")

    params = fetch_chain_parameters(chain_client, sender_address)
    envelope = build_envelope(params, contract_address, call_data, gas_limit, signing_rules)

    raw_transaction = signer.sign_transaction(envelope)
    return Web3.to_hex(raw_transaction)
