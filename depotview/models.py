"""
DepotView Domain Model
======================

Banks (custodians/brokers) and the buy positions held with them.

``id`` and ``created_at`` are assigned by the record store. They are excluded
from equality so that an exported and re-imported record compares equal to
its original.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


class AssetType(str, Enum):
    """Kinds of securities a position can hold"""

    STOCK = 'stock'
    ETF = 'etf'
    BOND = 'bond'


class Currency(str, Enum):
    """Purchase currencies"""

    EUR = 'EUR'
    USD = 'USD'


class MergeStrategy(str, Enum):
    """How an accepted import is merged into existing records"""

    REPLACE = 'replace'
    APPEND = 'append'


@dataclass
class Bank:
    """A custodian bank or broker holding positions."""

    name: str
    notes: Optional[str] = None
    id: Optional[int] = field(default=None, compare=False)
    created_at: Optional[datetime] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Bank':
        created_at = data.get('created_at')
        return cls(
            name=data['name'],
            notes=data.get('notes'),
            id=data.get('id'),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


@dataclass
class Position:
    """
    A single buy position held with a bank.

    ``nominal_value`` and ``coupon_rate`` (percent, e.g. 4 for 4%) are always
    set for bonds and optional for stocks and ETFs.
    """

    bank_id: int
    isin: str
    ticker: str
    asset_type: AssetType
    purchase_date: date
    quantity: float
    purchase_price: float
    currency: Currency
    notes: Optional[str] = None
    nominal_value: Optional[float] = None
    coupon_rate: Optional[float] = None
    id: Optional[int] = field(default=None, compare=False)
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def is_bond(self) -> bool:
        return self.asset_type == AssetType.BOND

    @property
    def cost_basis(self) -> float:
        """Total purchase cost in the position's currency"""
        return self.quantity * self.purchase_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'bank_id': self.bank_id,
            'isin': self.isin,
            'ticker': self.ticker,
            'asset_type': self.asset_type.value,
            'purchase_date': self.purchase_date.isoformat(),
            'quantity': self.quantity,
            'purchase_price': self.purchase_price,
            'currency': self.currency.value,
            'notes': self.notes,
            'nominal_value': self.nominal_value,
            'coupon_rate': self.coupon_rate,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Position':
        created_at = data.get('created_at')
        return cls(
            bank_id=data['bank_id'],
            isin=data['isin'],
            ticker=data['ticker'],
            asset_type=AssetType(data['asset_type']),
            purchase_date=date.fromisoformat(data['purchase_date']),
            quantity=data['quantity'],
            purchase_price=data['purchase_price'],
            currency=Currency(data['currency']),
            notes=data.get('notes'),
            nominal_value=data.get('nominal_value'),
            coupon_rate=data.get('coupon_rate'),
            id=data.get('id'),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
