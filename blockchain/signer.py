"""
Transaction Signers

Key custody boundary for the registry client. The transaction builder only
ever sees a TransactionSigner: something that knows its address and can
sign a transaction envelope. LocalAccountSigner keeps a raw secp256k1 key in
process memory (eth-account); custodial or hardware-backed signers can
implement the same interface without exposing key material.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union

from eth_account import Account
from eth_keys.exceptions import ValidationError as KeyValidationError


# Order of the secp256k1 curve; valid private keys are 1 .. N-1
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class InvalidKey(Exception):
    """Raised when signing key material is malformed or does not match the sender."""
    pass


class TransactionSigner(ABC):
    """Sign-only capability used by the transaction builder."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Checksum address of the signing account."""
        pass

    @abstractmethod
    def sign_transaction(self, envelope: Dict[str, Any]) -> bytes:
        """
        Sign a transaction envelope.
        
        Args:
            envelope: Transaction fields (nonce, to, value, gas, fee fields, data, chainId)
        
        Returns:
            Raw signed transaction bytes
        """
        pass


def parse_private_key(private_key: Union[str, bytes]) -> bytes:
    """
    Validate a secp256k1 private key given as hex (with or without 0x) or raw bytes.
    
    Raises:
        InvalidKey: If the key is not 32 bytes or outside the curve's scalar range
    """
    if isinstance(private_key, str):
        key_hex = private_key.strip()
        if key_hex[:2].lower() == "0x":
            key_hex = key_hex[2:]
        if len(key_hex) != 64:
            raise InvalidKey(f"Private key must be 32 bytes (64 hex characters), got {len(key_hex)} characters")
        try:
            key_bytes = bytes.fromhex(key_hex)
        except ValueError as e:
            raise InvalidKey("Private key is not valid hex") from e
    elif isinstance(private_key, (bytes, bytearray)):
        key_bytes = bytes(private_key)
        if len(key_bytes) != 32:
            raise InvalidKey(f"Private key must be 32 bytes, got {len(key_bytes)}")
    else:
        raise InvalidKey(f"Unsupported private key type: {type(private_key).__name__}")

    if not 0 < int.from_bytes(key_bytes, "big") < SECP256K1_N:
        raise InvalidKey("Private key is outside the secp256k1 range")
    return key_bytes


class LocalAccountSigner(TransactionSigner):
    """
    Signer holding a private key in memory.
    
    Example:
        >>> signer = LocalAccountSigner(os.getenv('HASH_AUTH_PRIVATE_KEY'))
        >>> signer.address
        '0xe46839D86997C38D53E5a9AaFC320EB6b51BABAc'
    """

    def __init__(self, private_key: Union[str, bytes]):
        key_bytes = parse_private_key(private_key)
        try:
            self._account = Account.from_key(key_bytes)
        except (ValueError, KeyValidationError) as e:
            raise InvalidKey(f"Private key rejected: {e}") from e

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, envelope: Dict[str, Any]) -> bytes:
        signed = self._account.sign_transaction(envelope)
        return bytes(signed.raw_transaction)

    def __repr__(self) -> str:
        return f"LocalAccountSigner(address={self.address})"
