#!/usr/bin/env python3
"""
DepotView Basic Usage Example
=============================

Parse a bank and a position file, review the errors, commit the clean
rows and export everything again.
"""

from depotview import (
    InMemoryRecordStore,
    MergeStrategy,
    commit_banks,
    commit_positions,
    export_banks,
    export_positions,
    parse_bank_csv,
    parse_position_csv,
)

BANKS = """name,notes
Example Bank AG,Main depot
,Row without a name
"""

POSITIONS = """isin;ticker;assetType;purchaseDate;quantity;purchasePrice;currency;notes;nominalValue;couponRate
US0378331005;AAPL;stock;2024-01-15;10;185,50;USD;Tech stock;;
DE0001102580;DBR;bond;2024-03-12;1;98,40;EUR;"Bund; 10y";10000;2,5
"""


def main():
    """Basic DepotView usage demonstration."""

    print("=" * 60)
    print("  DepotView Basic Usage Example")
    print("=" * 60)

    store = InMemoryRecordStore()

    # =========================================================================
    # 1. Banks: preview, fix, commit
    # =========================================================================

    print("\n🏦 Step 1: Parsing banks...")
    result = parse_bank_csv(BANKS)
    print(result.to_frame().to_string(index=False))

    for error in result.errors:
        print(f"   Row {error.row}: {error.error}")

    # Drop the broken line and parse again
    result = parse_bank_csv(BANKS.replace(",Row without a name\n", ""))
    summary = commit_banks(store, result, MergeStrategy.REPLACE)
    print(f"✅ Imported {summary.imported} bank(s)")

    bank = store.list_banks()[0]

    # =========================================================================
    # 2. Positions from a semicolon spreadsheet export
    # =========================================================================

    print("\n📈 Step 2: Parsing positions...")
    result = parse_position_csv(POSITIONS, bank.id)
    print(result.to_frame().to_string(index=False))

    summary = commit_positions(store, result, bank.id, MergeStrategy.APPEND)
    print(f"✅ Imported {summary.imported} position(s)")

    # =========================================================================
    # 3. Export
    # =========================================================================

    print("\n💾 Step 3: Exporting...")
    for document in (export_banks(store.list_banks()),
                     export_positions(store.list_positions(bank.id), bank.name)):
        print(f"\n--- {document.filename} ---")
        print(document.content)


if __name__ == "__main__":
    main()
