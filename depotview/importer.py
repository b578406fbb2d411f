"""
Import Commit
=============

Second phase of a two-phase import: after the user has reviewed a
``ParseResult`` and chosen a merge strategy, persist the accepted records.
A result with outstanding row errors is never committed.
"""

import logging
from dataclasses import dataclass

from .exceptions import ImportBlockedError, InvalidArgumentError
from .models import Bank, MergeStrategy, Position
from .parsers.batch import BANK_KIND, POSITION_KIND, ParseResult
from .store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """What a commit changed"""

    strategy: MergeStrategy
    imported: int
    removed: int = 0


def _check_committable(result: ParseResult, kind: str, strategy) -> MergeStrategy:
    if result.kind != kind:
        raise InvalidArgumentError(f"Expected a {kind} parse result, got '{result.kind}'")
    if result.has_errors:
        raise ImportBlockedError(len(result.errors))
    try:
        return MergeStrategy(strategy)
    except ValueError:
        raise InvalidArgumentError(f"Unknown merge strategy '{strategy}'")


def commit_banks(store: RecordStore, result: ParseResult[Bank], strategy) -> ImportSummary:
    """
    Persist accepted banks.

    Parameters
    ----------
    store : RecordStore
        Target store
    result : ParseResult
        Bank parse result without errors
    strategy : MergeStrategy or str
        ``replace`` deletes all existing banks (and their positions) first;
        ``append`` keeps them

    Returns
    -------
    ImportSummary

    Raises
    ------
    ImportBlockedError
        If the result still has row errors
    """
    strategy = _check_committable(result, BANK_KIND, strategy)

    removed = 0
    if strategy == MergeStrategy.REPLACE:
        removed = store.clear_banks()

    for bank in result.success:
        store.add_bank(bank)

    logger.info(
        "Committed %d bank(s) with strategy '%s' (%d removed)",
        len(result.success), strategy.value, removed
    )
    return ImportSummary(strategy=strategy, imported=len(result.success), removed=removed)


def commit_positions(
    store: RecordStore,
    result: ParseResult[Position],
    bank_id: int,
    strategy
) -> ImportSummary:
    """
    Persist accepted positions for one bank.

    ``replace`` deletes the bank's existing positions first; positions of
    other banks are never touched.

    Raises
    ------
    ImportBlockedError
        If the result still has row errors
    RecordNotFoundError
        If the bank does not exist
    """
    if bank_id is None:
        raise InvalidArgumentError("bank_id is required to commit positions")
    strategy = _check_committable(result, POSITION_KIND, strategy)
    store.get_bank(bank_id)

    for position in result.success:
        if position.bank_id != bank_id:
            raise InvalidArgumentError(
                f"Position {position.isin} belongs to bank {position.bank_id}, not {bank_id}"
            )

    removed = 0
    if strategy == MergeStrategy.REPLACE:
        removed = store.delete_positions_for_bank(bank_id)

    for position in result.success:
        store.add_position(position)

    logger.info(
        "Committed %d position(s) to bank %d with strategy '%s' (%d removed)",
        len(result.success), bank_id, strategy.value, removed
    )
    return ImportSummary(strategy=strategy, imported=len(result.success), removed=removed)
