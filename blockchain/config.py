"""
Registry Client Configuration

Settings are read from the environment (and a .env file, via python-dotenv):

    HASH_AUTH_RPC_URL           node endpoint, http(s):// or ws(s)://   (required)
    HASH_AUTH_CONTRACT_ADDRESS  deployed registry contract              (required)
    HASH_AUTH_SENDER_ADDRESS    contract manager account                (add only)
    HASH_AUTH_PRIVATE_KEY       manager's signing key, hex              (add only)
    HASH_AUTH_ABI_PATH          contract ABI JSON (default: bundled mainnet ABI)
    HASH_AUTH_GAS_LIMIT         gas ceiling for add transactions (default 2500000)
    HASH_AUTH_SIGNING_RULES     fork rule set used to sign (default petersburg)
    HASH_AUTH_RECEIPT_TIMEOUT   seconds to wait for a mined receipt (default 120)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from blockchain.registry import DEFAULT_ABI_PATH
from blockchain.transactions import DEFAULT_GAS_LIMIT, DEFAULT_SIGNING_RULES, validate_signing_rules

DEFAULT_RECEIPT_TIMEOUT = 120


def _int_setting(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")


@dataclass
class HashAuthSettings:
    """Connection, contract and signing settings for the registry client."""
    rpc_url: str
    contract_address: str
    sender_address: Optional[str] = None
    private_key: Optional[str] = None
    abi_path: Path = DEFAULT_ABI_PATH
    gas_limit: int = DEFAULT_GAS_LIMIT
    signing_rules: str = DEFAULT_SIGNING_RULES
    receipt_timeout: int = DEFAULT_RECEIPT_TIMEOUT

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "HashAuthSettings":
        """
        Load settings from the environment.
        
        Args:
            env_file: Optional .env file to load (default: search from cwd)
        
        Raises:
            ValueError: If a required variable is missing or a value is malformed
        """
        load_dotenv(env_file)

        rpc_url = os.getenv('HASH_AUTH_RPC_URL')
        contract_address = os.getenv('HASH_AUTH_CONTRACT_ADDRESS')

        if not all([rpc_url, contract_address]):
            raise ValueError(
                "Missing required environment variables: "
                "HASH_AUTH_RPC_URL, HASH_AUTH_CONTRACT_ADDRESS"
            )

        abi_path = os.getenv('HASH_AUTH_ABI_PATH')

        return cls(
            rpc_url=rpc_url,
            contract_address=contract_address,
            sender_address=os.getenv('HASH_AUTH_SENDER_ADDRESS') or None,
            private_key=os.getenv('HASH_AUTH_PRIVATE_KEY') or None,
            abi_path=Path(abi_path) if abi_path else DEFAULT_ABI_PATH,
            gas_limit=_int_setting('HASH_AUTH_GAS_LIMIT', DEFAULT_GAS_LIMIT),
            signing_rules=validate_signing_rules(
                os.getenv('HASH_AUTH_SIGNING_RULES') or DEFAULT_SIGNING_RULES
            ),
            receipt_timeout=_int_setting('HASH_AUTH_RECEIPT_TIMEOUT', DEFAULT_RECEIPT_TIMEOUT),
        )

    def require_signing(self) -> None:
        """Raise ValueError unless the settings needed to add products are present."""
        if not all([self.sender_address, self.private_key]):
            raise ValueError(
                "Missing required environment variables: "
                "HASH_AUTH_SENDER_ADDRESS, HASH_AUTH_PRIVATE_KEY"
            )
