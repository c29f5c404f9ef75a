"""
Product Record Encoder

Converts a ProductRecord into the positional argument tuple expected by the
registry contract:

    (bytes name, bytes batchNo, bytes barcodeNo,
     uint256 expiryDate, uint256 productionDate, uint256 fdaNo,
     bytes producerName, bytes scanLocation, bytes scanStatus,
     uint256 scanTime, uint256 scanDate)

The contract hashes these arguments, so encoding must be deterministic:
the same record always produces byte-identical output. Text is passed
through as its exact UTF-8 bytes (no trimming or normalisation) and
integers are range checked instead of being truncated.
"""

from typing import Dict, List, NamedTuple

from eth_abi import encode as abi_encode
from eth_utils import to_hex

from products.errors import InvalidField
from products.record import ABI_FIELD_NAMES, NUMERIC_FIELDS, PRODUCT_FIELDS, TEXT_FIELDS, ProductRecord

UINT256_MAX = 2 ** 256 - 1


class EncodedRecord(NamedTuple):
    """Contract call arguments, in contract signature order."""
    name: bytes
    batch_no: bytes
    barcode_no: bytes
    expiry_date: int
    production_date: int
    fda_no: int
    producer_name: bytes
    scan_location: bytes
    scan_status: bytes
    scan_time: int
    scan_date: int

    @classmethod
    def abi_types(cls) -> List[str]:
        """ABI types of the call arguments."""
        return ["bytes" if field in TEXT_FIELDS else "uint256" for field in cls._fields]

    def to_abi_bytes(self) -> bytes:
        """Canonical ABI encoding of the arguments (the hash preimage sent on-chain)."""
        return abi_encode(self.abi_types(), list(self))


def encode_text(value, field: str) -> bytes:
    """
    Encode a text field as its UTF-8 bytes.
    
    Raises:
        InvalidField: If the value is not a str or is not valid UTF-8
    """
    if not isinstance(value, str):
        raise InvalidField(field, f"expected text, got {type(value).__name__}")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidField(field, f"not representable as UTF-8 ({e.reason})") from e


def encode_uint256(value, field: str) -> int:
    """
    Validate an unsigned 256-bit integer field.
    
    Raises:
        InvalidField: If the value is not an int, is negative, or exceeds 2**256 - 1
    """
    # bool is an int subclass, but True is not a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidField(field, f"expected integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidField(field, f"negative value {value}")
    if value > UINT256_MAX:
        raise InvalidField(field, "value exceeds uint256 maximum")
    return value


def encode_record(record: ProductRecord) -> EncodedRecord:
    """
    Encode a product record into contract call arguments.
    
    Args:
        record: Product to encode
    
    Returns:
        EncodedRecord, usable directly as ``contract.functions.addProduct(*encoded)``
    
    Raises:
        InvalidField: If any field violates the text/uint256 constraints
    
    Example:
        >>> encoded = encode_record(record)
        >>> encoded.name
        b'Viribus'
    """
    values = []
    for field in PRODUCT_FIELDS:
        value = getattr(record, field)
        if field in TEXT_FIELDS:
            values.append(encode_text(value, ABI_FIELD_NAMES[field]))
        elif field in NUMERIC_FIELDS:
            values.append(encode_uint256(value, ABI_FIELD_NAMES[field]))
    return EncodedRecord(*values)


def to_hex_params(encoded: EncodedRecord) -> Dict[str, str]:
    """
    Render encoded arguments as 0x-prefixed hex strings keyed by ABI name.
    
    Used for logging and JSON export of the exact values sent to the contract.
    """
    return {
        ABI_FIELD_NAMES[field]: to_hex(value)
        for field, value in zip(EncodedRecord._fields, encoded)
    }
