"""Product records and their contract encoding"""

from .errors import InvalidField
from .record import ProductRecord, PRODUCT_FIELDS
from .encoder import EncodedRecord, encode_record, to_hex_params, UINT256_MAX

__all__ = [
    'InvalidField',
    'ProductRecord',
    'PRODUCT_FIELDS',
    'EncodedRecord',
    'encode_record',
    'to_hex_params',
    'UINT256_MAX'
]
