"""
DepotView - Portfolio CSV Import & Export
=========================================

Tabular import/export and validation for a personal investment-portfolio
tracker: banks (custodians/brokers) and their stock, ETF and bond positions.

Quick Start
-----------
>>> import depotview
>>>
>>> # Parse, review, then commit
>>> result = depotview.parse_bank_csv(csv_text)
>>> for error in result.errors:
...     print(error.row, error.error)
>>> store = depotview.InMemoryRecordStore()
>>> depotview.commit_banks(store, result, depotview.MergeStrategy.APPEND)
>>>
>>> # Export
>>> document = depotview.export_banks(store.list_banks())
>>> document.filename
'banks-export-2024-05-01.csv'
"""

__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# PUBLIC API - Import / Export
# =============================================================================

from .parsers import (
    ParsedRow,
    ParseResult,
    RowError,
    parse_bank_csv,
    parse_position_csv,
)
from .export import (
    ExportDocument,
    bank_template,
    export_banks,
    export_positions,
    position_template,
)

# =============================================================================
# PUBLIC API - Domain & Persistence
# =============================================================================

from .models import AssetType, Bank, Currency, MergeStrategy, Position
from .store import InMemoryRecordStore, RecordStore
from .importer import ImportSummary, commit_banks, commit_positions
from .files import read_upload, save_download
from .exceptions import (
    DepotViewError,
    FileReadError,
    ImportBlockedError,
    InvalidArgumentError,
    RecordNotFoundError,
    RowValidationError,
)

# =============================================================================
# PUBLIC API - Configuration
# =============================================================================

from .config import get_config, reset_config, setup_depotview


def configure(language=None, log_level=None, **kwargs):
    """
    Configure DepotView.

    Parameters
    ----------
    language : str, optional
        'en' or 'de' for validation messages and export file names
    log_level : str, optional
        Logging level name, e.g. 'INFO'
    **kwargs : dict
        Nested configuration sections, e.g. ``import_={'max_preview_rows': 50}``

    Examples
    --------
    >>> import depotview
    >>> depotview.configure(language='de')
    ✅ Language set to 'de'
    """
    overrides = {key.rstrip('_'): value for key, value in kwargs.items()}
    config = setup_depotview(language=language, log_level=log_level, **overrides)

    if language:
        print(f"✅ Language set to '{config.get_language()}'")
    if log_level:
        print(f"✅ Log level set to '{config.get_log_level()}'")
    return config


def info():
    """
    Display DepotView version and configuration status.

    Examples
    --------
    >>> import depotview
    >>> depotview.info()
    DepotView v0.1.0 - Portfolio CSV Import & Export
    ...
    """
    print("=" * 60)
    print(f"DepotView v{__version__} - Portfolio CSV Import & Export")
    print("=" * 60)
    get_config().print_summary()


__all__ = [
    '__version__',

    # Import / Export
    'ParsedRow',
    'ParseResult',
    'RowError',
    'parse_bank_csv',
    'parse_position_csv',
    'ExportDocument',
    'bank_template',
    'export_banks',
    'export_positions',
    'position_template',

    # Domain & Persistence
    'AssetType',
    'Bank',
    'Currency',
    'MergeStrategy',
    'Position',
    'InMemoryRecordStore',
    'RecordStore',
    'ImportSummary',
    'commit_banks',
    'commit_positions',
    'read_upload',
    'save_download',

    # Errors
    'DepotViewError',
    'FileReadError',
    'ImportBlockedError',
    'InvalidArgumentError',
    'RecordNotFoundError',
    'RowValidationError',

    # Configuration
    'configure',
    'info',
    'get_config',
    'reset_config',
    'setup_depotview',
]
