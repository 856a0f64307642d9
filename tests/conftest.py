"""Shared pytest fixtures: sample receipts and application clients."""

import copy

import pytest
from fastapi.testclient import TestClient

from receipt_processor.config import Settings
from receipt_processor.main import create_app


TARGET_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

CORNER_MARKET_RECEIPT = {
    "retailer": "M&M Corner Market",
    "purchaseDate": "2022-03-20",
    "purchaseTime": "14:33",
    "items": [
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
        {"shortDescription": "Gatorade", "price": "2.25"},
    ],
    "total": "9.00",
}

SINGLE_ITEM_RECEIPT = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
    ],
    "total": "6.49",
}


@pytest.fixture
def target_receipt() -> dict:
    return copy.deepcopy(TARGET_RECEIPT)


@pytest.fixture
def corner_market_receipt() -> dict:
    return copy.deepcopy(CORNER_MARKET_RECEIPT)


@pytest.fixture
def single_item_receipt() -> dict:
    return copy.deepcopy(SINGLE_ITEM_RECEIPT)


@pytest.fixture
def make_client():
    """Factory building a TestClient around a freshly created app."""

    def _make(**overrides) -> TestClient:
        settings = Settings(_env_file=None, **overrides)
        return TestClient(create_app(settings))

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client(debug=True)
