"""
DepotView Test Configuration and Fixtures
=========================================

Shared fixtures and test utilities for the DepotView test suite.
"""

import os
import sys
from datetime import date

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from depotview.config import reset_config, setup_depotview
from depotview.models import AssetType, Bank, Currency, Position
from depotview.store import InMemoryRecordStore


# =============================================================================
# Configuration Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def english_config(monkeypatch, tmp_path):
    """Run every test with default English configuration and no user config file."""
    for var in ('DEPOTVIEW_LANGUAGE', 'DEPOTVIEW_LOG_LEVEL', 'DEPOTVIEW_MAX_PREVIEW_ROWS',
                'DEPOTVIEW_IMPORT_ENCODING', 'DEPOTVIEW_EXPORT_ENCODING'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('HOME', str(tmp_path))
    monkeypatch.setenv('USERPROFILE', str(tmp_path))

    reset_config()
    setup_depotview(language='en')
    yield
    reset_config()


# =============================================================================
# Document Fixtures
# =============================================================================

@pytest.fixture
def bank_csv():
    """Valid comma-delimited bank document."""
    return """name,notes
Acme Bank,Main account
Broker XYZ,"Savings plans, ETFs"
"""


@pytest.fixture
def position_csv():
    """Valid comma-delimited position document with a stock, an ETF and a bond."""
    return """isin,ticker,assetType,purchaseDate,quantity,purchasePrice,currency,notes,nominalValue,couponRate
US0378331005,AAPL,stock,2024-01-15,10,185.50,USD,Tech stock,,
IE00B4L5Y983,IWDA,etf,2024-02-01,50,78.25,EUR,MSCI World ETF,,
DE0001102580,DBR,bond,2024-03-12,1,98.40,EUR,Federal bond,10000,2.5
"""


@pytest.fixture
def semicolon_position_csv():
    """Semicolon-delimited position document as written by spreadsheet programs."""
    return (
        "isin;ticker;assetType;purchaseDate;quantity;purchasePrice;currency;notes\r\n"
        "US0378331005;AAPL;stock;2024-01-15;10;185,50;USD;\"Apple; Inc.\"\r\n"
        "IE00B4L5Y983;IWDA;etf;2024-02-01;50;78,25;EUR;\r\n"
    )


# =============================================================================
# Record Fixtures
# =============================================================================

@pytest.fixture
def sample_banks():
    return [
        Bank(name='Acme Bank', notes='Main account'),
        Bank(name='Broker XYZ'),
    ]


@pytest.fixture
def sample_positions():
    return [
        Position(
            bank_id=1, isin='US0378331005', ticker='AAPL', asset_type=AssetType.STOCK,
            purchase_date=date(2024, 1, 15), quantity=10.0, purchase_price=185.5,
            currency=Currency.USD, notes='He said "hi", then left',
        ),
        Position(
            bank_id=1, isin='IE00B4L5Y983', ticker='IWDA', asset_type=AssetType.ETF,
            purchase_date=date(2024, 2, 1), quantity=12.345, purchase_price=78.25,
            currency=Currency.EUR,
        ),
        Position(
            bank_id=1, isin='DE0001102580', ticker='DBR', asset_type=AssetType.BOND,
            purchase_date=date(2024, 3, 12), quantity=1.0, purchase_price=98.4,
            currency=Currency.EUR, nominal_value=10000.0, coupon_rate=0.0,
        ),
    ]


@pytest.fixture
def store():
    """Empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def store_with_bank(store):
    """Store holding one bank (id 1)."""
    store.add_bank(Bank(name='Acme Bank'))
    return store


# =============================================================================
# Test Utilities
# =============================================================================

POSITION_HEADER = (
    "isin,ticker,assetType,purchaseDate,quantity,purchasePrice,currency,notes,nominalValue,couponRate"
)


def position_line(isin='US0378331005', ticker='AAPL', asset_type='stock',
                  purchase_date='2024-01-15', quantity='10', purchase_price='185.50',
                  currency='USD', notes='', nominal_value='', coupon_rate=''):
    """Build one comma-delimited position line with valid defaults."""
    return ','.join([isin, ticker, asset_type, purchase_date, quantity, purchase_price,
                     currency, notes, nominal_value, coupon_rate])


def position_document(*lines):
    """Header plus the given position lines."""
    return '\n'.join([POSITION_HEADER, *lines])


def assert_classified(result):
    """Assert every data row was classified exactly once."""
    assert len(result.success) + len(result.errors) == result.total_rows
    assert [parsed.row for parsed in result.all_rows] == list(range(2, result.total_rows + 2))
