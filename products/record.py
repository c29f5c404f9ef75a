"""
Product Record Model

Immutable value object describing a product as it is registered with the
Data Hashing Record Authentication contract. Every field takes part in the
on-chain hash, so a record must be rebuilt with exactly the same values to
be recognised again later.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

from products.errors import InvalidField


# Positional order of the contract call arguments.
# Order matters! The contract hashes its arguments in this order.
PRODUCT_FIELDS = (
    "name",
    "batch_no",
    "barcode_no",
    "expiry_date",
    "production_date",
    "fda_no",
    "producer_name",
    "scan_location",
    "scan_status",
    "scan_time",
    "scan_date",
)

TEXT_FIELDS = frozenset({
    "name",
    "batch_no",
    "barcode_no",
    "producer_name",
    "scan_location",
    "scan_status",
})

NUMERIC_FIELDS = frozenset(PRODUCT_FIELDS) - TEXT_FIELDS

# Names used by the contract ABI and the JSON product files
ABI_FIELD_NAMES = {
    "name": "name",
    "batch_no": "batchNo",
    "barcode_no": "barcodeNo",
    "expiry_date": "expiryDate",
    "production_date": "productionDate",
    "fda_no": "fdaNo",
    "producer_name": "producerName",
    "scan_location": "scanLocation",
    "scan_status": "scanStatus",
    "scan_time": "scanTime",
    "scan_date": "scanDate",
}


@dataclass(frozen=True)
class ProductRecord:
    """Product data submitted to (and later authenticated against) the registry."""
    name: str
    batch_no: str
    barcode_no: str
    expiry_date: int  # unix seconds
    production_date: int  # unix seconds
    fda_no: int
    producer_name: str
    scan_location: str
    scan_status: str
    scan_time: int  # unix seconds
    scan_date: int  # unix seconds

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProductRecord":
        """
        Build a record from a dict using either snake_case or ABI (camelCase) keys.
        
        Args:
            data: Product fields, e.g. loaded from a JSON product file
        
        Returns:
            ProductRecord
        
        Raises:
            InvalidField: If a field is missing
        
        Example:
            >>> ProductRecord.from_dict({"name": "Viribus", "batchNo": "2020.01.151615", ...})
        """
        values = {}
        for field in PRODUCT_FIELDS:
            abi_name = ABI_FIELD_NAMES[field]
            if field in data:
                values[field] = data[field]
            elif abi_name in data:
                values[field] = data[abi_name]
            else:
                raise InvalidField(abi_name, "missing from product data")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record with ABI (camelCase) keys."""
        return {ABI_FIELD_NAMES[key]: value for key, value in asdict(self).items()}
