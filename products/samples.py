"""
Sample Products

Demo catalogue used by scripts/hash_auth.py, plus loading of product lists
from JSON files.

- random product: expiry date and barcode derive from the current time, so
  it is always new to the registry
- static product: fixed identity, once added it is always recognised
  (scan timestamps do not contribute to the contract's product hash)
"""

import json
import random
import time
from pathlib import Path
from typing import List, Optional

from products.record import ProductRecord

SECONDS_PER_DAY = 86400

# 2020-05-25T00:00:00Z
DEMO_PRODUCTION_DATE = 1590364800
# 2025-12-31T00:00:00Z
DEMO_STATIC_EXPIRY_DATE = 1767139200
DEMO_FDA_NO = 73737373


def _now(now: Optional[int]) -> int:
    return int(time.time()) if now is None else now


def random_product(now: Optional[int] = None) -> ProductRecord:
    """Product that is always unknown to the registry until it is added."""
    now = _now(now)
    return ProductRecord(
        name="Rebus",
        batch_no="2020.05.0141321",
        barcode_no=str(random.randint(111111111, 999999999)),
        expiry_date=now + SECONDS_PER_DAY * 180,
        production_date=DEMO_PRODUCTION_DATE,
        fda_no=DEMO_FDA_NO,
        producer_name="Factorem Productum",
        scan_location="Forum Loco",
        scan_status="ok",
        scan_time=now,
        scan_date=now,
    )


def static_product(now: Optional[int] = None) -> ProductRecord:
    """Product with a fixed identity; recognised on every run once added."""
    now = _now(now)
    return ProductRecord(
        name="Viribus",
        batch_no="2020.01.151615",
        barcode_no="202001151615",
        expiry_date=DEMO_STATIC_EXPIRY_DATE,
        production_date=DEMO_PRODUCTION_DATE,
        fda_no=DEMO_FDA_NO,
        producer_name="Factorem Productum",
        scan_location="Forum Loco",
        scan_status="ok",
        scan_time=now,
        scan_date=now,
    )


def load_products(path: Path) -> List[ProductRecord]:
    """
    Load products from a JSON file holding a list of product objects.
    
    Args:
        path: JSON file, keys in snake_case or ABI camelCase
    
    Returns:
        List of ProductRecord
    
    Raises:
        ValueError: If the file does not hold a JSON list
        InvalidField: If a product is missing a field
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of products in {path}")
    return [ProductRecord.from_dict(item) for item in data]
