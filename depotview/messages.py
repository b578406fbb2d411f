"""
Localized Messages
==================

User-facing validation messages and export file-name stems. The active
language comes from the configuration (``messages.language``); unknown
languages fall back to English.
"""

from typing import Dict, Optional

DEFAULT_LANGUAGE = 'en'

MESSAGES: Dict[str, Dict[str, str]] = {
    'en': {
        # Required fields
        'bank_name_required': 'Bank name is required',
        'isin_required': 'ISIN is required',
        'ticker_required': 'Ticker is required',
        'asset_type_required': 'Asset type is required',
        'purchase_date_required': 'Purchase date is required',
        'quantity_required': 'Quantity is required',
        'purchase_price_required': 'Purchase price is required',
        'currency_required': 'Currency is required',

        # Domain checks
        'asset_type_invalid': "Asset type must be 'stock', 'etf' or 'bond'",
        'currency_invalid': "Currency must be 'EUR' or 'USD'",
        'quantity_invalid': 'Quantity must be a positive number',
        'purchase_price_invalid': 'Purchase price must be a positive number',
        'purchase_date_invalid': 'Purchase date has an invalid format (expected format: YYYY-MM-DD)',

        # Bond fields
        'nominal_value_required': 'Nominal value is required for bonds',
        'nominal_value_invalid': 'Nominal value must be a positive number',
        'coupon_rate_required': 'Coupon rate is required for bonds',
        'coupon_rate_invalid': 'Coupon rate must be zero or a positive number',

        'unknown_error': 'Unknown error',

        # File names
        'bank_file_stem': 'banks',
        'position_file_stem': 'positions',
        'example_suffix': 'example',
    },
    'de': {
        'bank_name_required': 'Bank-Name ist ein Pflichtfeld',
        'isin_required': 'ISIN ist ein Pflichtfeld',
        'ticker_required': 'Ticker ist ein Pflichtfeld',
        'asset_type_required': 'Asset-Typ ist ein Pflichtfeld',
        'purchase_date_required': 'Kaufdatum ist ein Pflichtfeld',
        'quantity_required': 'Anzahl ist ein Pflichtfeld',
        'purchase_price_required': 'Kaufpreis ist ein Pflichtfeld',
        'currency_required': 'Währung ist ein Pflichtfeld',

        'asset_type_invalid': "Asset-Typ muss 'stock', 'etf' oder 'bond' sein",
        'currency_invalid': "Währung muss 'EUR' oder 'USD' sein",
        'quantity_invalid': 'Anzahl muss eine positive Zahl sein',
        'purchase_price_invalid': 'Kaufpreis muss eine positive Zahl sein',
        'purchase_date_invalid': 'Kaufdatum hat ungültiges Format (erwartetes Format: YYYY-MM-DD)',

        'nominal_value_required': 'Nominalwert ist für Anleihen ein Pflichtfeld',
        'nominal_value_invalid': 'Nominalwert muss eine positive Zahl sein',
        'coupon_rate_required': 'Kupon ist für Anleihen ein Pflichtfeld',
        'coupon_rate_invalid': 'Kupon muss null oder eine positive Zahl sein',

        'unknown_error': 'Unbekannter Fehler',

        'bank_file_stem': 'banken',
        'position_file_stem': 'positionen',
        'example_suffix': 'beispiel',
    },
}


def get_message(key: str, language: Optional[str] = None) -> str:
    """
    Look up a message in the active (or given) language.

    Parameters
    ----------
    key : str
        Message key, e.g. ``'isin_required'``
    language : str, optional
        Language code; defaults to the configured language

    Returns
    -------
    str
        The localized message
    """
    if language is None:
        from .config import get_config
        language = get_config().get_language()

    catalog = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    return catalog[key]


def available_languages():
    """Languages with a complete message catalog"""
    return sorted(MESSAGES)
