"""Blockchain client for the Data Hashing Record Authentication registry"""

from .chain_client import ChainClient, NodeUnavailable, Web3ChainClient
from .signer import InvalidKey, LocalAccountSigner, TransactionSigner
from .transactions import ChainParameters, build_signed_transaction
from .response import AuthResponse, ResponseStatus, format_timestamp, is_known
from .registry import HashAuthRegistry, load_abi

__all__ = [
    'ChainClient',
    'NodeUnavailable',
    'Web3ChainClient',
    'InvalidKey',
    'LocalAccountSigner',
    'TransactionSigner',
    'ChainParameters',
    'build_signed_transaction',
    'AuthResponse',
    'ResponseStatus',
    'format_timestamp',
    'is_known',
    'HashAuthRegistry',
    'load_abi'
]
