"""
Record Store
============

Interface of the persisted bank/position store the import engine hands its
results to, plus a dict-backed implementation used by the CLI, the review
dashboard and the tests.
"""

from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Protocol, runtime_checkable

from .exceptions import RecordNotFoundError
from .models import Bank, Position


@runtime_checkable
class RecordStore(Protocol):
    """Create/read/update/delete banks and positions by key."""

    def add_bank(self, bank: Bank) -> Bank: ...

    def get_bank(self, bank_id: int) -> Bank: ...

    def list_banks(self) -> List[Bank]: ...

    def update_bank(self, bank: Bank) -> Bank: ...

    def delete_bank(self, bank_id: int) -> None: ...

    def clear_banks(self) -> int: ...

    def add_position(self, position: Position) -> Position: ...

    def get_position(self, position_id: int) -> Position: ...

    def list_positions(self, bank_id: Optional[int] = None) -> List[Position]: ...

    def update_position(self, position: Position) -> Position: ...

    def delete_position(self, position_id: int) -> None: ...

    def delete_positions_for_bank(self, bank_id: int) -> int: ...


class InMemoryRecordStore:
    """
    Dict-backed RecordStore.

    Ids auto-increment per record kind and are never reused. ``created_at``
    is stamped on insert. Records are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._banks: Dict[int, Bank] = {}
        self._positions: Dict[int, Position] = {}
        self._next_bank_id = 1
        self._next_position_id = 1

    # -- banks -------------------------------------------------------------

    def add_bank(self, bank: Bank) -> Bank:
        stored = replace(bank, id=self._next_bank_id, created_at=datetime.now())
        self._banks[stored.id] = stored
        self._next_bank_id += 1
        return replace(stored)

    def get_bank(self, bank_id: int) -> Bank:
        if bank_id not in self._banks:
            raise RecordNotFoundError('Bank', bank_id)
        return replace(self._banks[bank_id])

    def list_banks(self) -> List[Bank]:
        return [replace(bank) for bank in self._banks.values()]

    def update_bank(self, bank: Bank) -> Bank:
        if bank.id not in self._banks:
            raise RecordNotFoundError('Bank', bank.id)
        stored = replace(bank, created_at=self._banks[bank.id].created_at)
        self._banks[bank.id] = stored
        return replace(stored)

    def delete_bank(self, bank_id: int) -> None:
        if bank_id not in self._banks:
            raise RecordNotFoundError('Bank', bank_id)
        self.delete_positions_for_bank(bank_id)
        del self._banks[bank_id]

    def clear_banks(self) -> int:
        """Delete every bank and all positions; returns the number of banks removed"""
        removed = len(self._banks)
        self._banks.clear()
        self._positions.clear()
        return removed

    # -- positions ---------------------------------------------------------

    def add_position(self, position: Position) -> Position:
        if position.bank_id not in self._banks:
            raise RecordNotFoundError('Bank', position.bank_id)
        stored = replace(position, id=self._next_position_id, created_at=datetime.now())
        self._positions[stored.id] = stored
        self._next_position_id += 1
        return replace(stored)

    def get_position(self, position_id: int) -> Position:
        if position_id not in self._positions:
            raise RecordNotFoundError('Position', position_id)
        return replace(self._positions[position_id])

    def list_positions(self, bank_id: Optional[int] = None) -> List[Position]:
        return [
            replace(position) for position in self._positions.values()
            if bank_id is None or position.bank_id == bank_id
        ]

    def update_position(self, position: Position) -> Position:
        if position.id not in self._positions:
            raise RecordNotFoundError('Position', position.id)
        stored = replace(position, created_at=self._positions[position.id].created_at)
        self._positions[position.id] = stored
        return replace(stored)

    def delete_position(self, position_id: int) -> None:
        if position_id not in self._positions:
            raise RecordNotFoundError('Position', position_id)
        del self._positions[position_id]

    def delete_positions_for_bank(self, bank_id: int) -> int:
        doomed = [pid for pid, pos in self._positions.items() if pos.bank_id == bank_id]
        for position_id in doomed:
            del self._positions[position_id]
        return len(doomed)
