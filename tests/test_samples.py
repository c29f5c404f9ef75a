"""
Unit tests for the sample product catalogue.
"""

import json

import pytest

from products.encoder import encode_record
from products.samples import (
    DEMO_PRODUCTION_DATE,
    DEMO_STATIC_EXPIRY_DATE,
    load_products,
    random_product,
    static_product,
)


def test_random_product_expires_in_180_days():
    product = random_product(now=1700000000)

    assert product.expiry_date == 1700000000 + 180 * 86400
    assert product.scan_time == product.scan_date == 1700000000
    assert product.production_date == DEMO_PRODUCTION_DATE
    assert 111111111 <= int(product.barcode_no) <= 999999999


def test_static_product_identity_is_fixed():
    first = static_product(now=1700000000)
    later = static_product(now=1800000000)

    assert first.expiry_date == later.expiry_date == DEMO_STATIC_EXPIRY_DATE
    assert encode_record(first)[:9] == encode_record(later)[:9]
    assert first.scan_time != later.scan_time


def test_sample_products_encode():
    encode_record(random_product())
    encode_record(static_product())


def test_load_products(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps([static_product(now=1).to_dict(), random_product(now=1).to_dict()]))

    products = load_products(path)

    assert [p.name for p in products] == ["Viribus", "Rebus"]
    assert products[0] == static_product(now=1)


def test_load_products_requires_list(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(static_product(now=1).to_dict()))

    with pytest.raises(ValueError):
        load_products(path)
