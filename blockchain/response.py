"""
Registry Response Interpretation

The registry's read-only call returns a (hash, timestamp) pair. A zero
timestamp means the product hash was never added; anything that is not a
well formed pair is reported as a status string rather than raised, since
"not registered" is a normal answer for this contract.
"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Sequence

from eth_abi import decode as abi_decode

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"


class ResponseStatus(str, Enum):
    """Outcomes of format_timestamp that are not a registration time."""
    INVALID_RESPONSE = "invalid response"
    TIMESTAMP_NOT_RECOGNIZED = "product time stamp not recognized"
    UNKNOWN_PRODUCT = "unknown product"

    def __str__(self) -> str:
        return self.value


class AuthResponse(NamedTuple):
    """Decoded result of the registry's authProduct call."""
    hash: bytes
    timestamp: int

    @classmethod
    def decode(cls, data: bytes) -> "AuthResponse":
        """
        Decode raw (bytes32, uint256) return data.
        
        Raises:
            DecodingError: If data is not a (bytes32, uint256) pair
        """
        product_hash, timestamp = abi_decode(["bytes32", "uint256"], data)
        return cls(hash=product_hash, timestamp=timestamp)


# Stand-in result when the authentication call itself fails
NOT_FOUND = AuthResponse(hash=b"", timestamp=0)


def _timestamp_field(response: Any) -> Any:
    """Return the raw value at index 1, or raise LookupError if the shape is wrong."""
    if isinstance(response, Mapping):
        # JSON objects carry the index as a string key
        return response[1] if 1 in response else response["1"]
    if isinstance(response, Sequence) and not isinstance(response, (str, bytes, bytearray)):
        return response[1]
    raise LookupError("response is not a (hash, timestamp) pair")


def _parse_timestamp(value: Any) -> Optional[int]:
    """Parse a timestamp value; None if it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # fractional seconds are dropped
        return int(value) if math.isfinite(value) else None
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, "big") if value else None
    if isinstance(value, str):
        text = value.strip()
        try:
            if text[:2].lower() == "0x":
                return int(text, 16)
            return int(text, 10)
        except ValueError:
            return None
    return None


def is_known(response: Any) -> bool:
    """
    Check whether a registry response reports a registered product.
    
    Args:
        response: (hash, timestamp) pair as a tuple, list, AuthResponse,
            or a mapping keyed 0 and 1
    
    Returns:
        True if the timestamp parses to an integer greater than zero
    
    Example:
        >>> is_known({0: "0xab12", 1: 1700000000})
        True
        >>> is_known({})
        False
    """
    try:
        value = _timestamp_field(response)
    except LookupError:
        return False

    timestamp = _parse_timestamp(value)
    return timestamp is not None and timestamp > 0


def format_timestamp(response: Any) -> str:
    """
    Render the registration time of a registry response.
    
    Returns:
        Registration time as "YYYY-MM-DD HH:MM:SS UTC", or a ResponseStatus:
        INVALID_RESPONSE if the response is not a pair,
        TIMESTAMP_NOT_RECOGNIZED if the timestamp is not a usable integer,
        UNKNOWN_PRODUCT if the timestamp is zero
    """
    try:
        value = _timestamp_field(response)
    except LookupError:
        return ResponseStatus.INVALID_RESPONSE

    timestamp = _parse_timestamp(value)
    if timestamp is None or timestamp < 0:
        return ResponseStatus.TIMESTAMP_NOT_RECOGNIZED

    if timestamp == 0:
        return ResponseStatus.UNKNOWN_PRODUCT

    try:
        registered_at = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return ResponseStatus.TIMESTAMP_NOT_RECOGNIZED

    return registered_at.strftime(TIMESTAMP_FORMAT)
