"""
Tests for DepotView Configuration
=================================

Defaults, environment variables, config files and the global instance.
"""

import json

from depotview.config import DepotViewConfig, get_config, reset_config, setup_depotview
from depotview.messages import available_languages, get_message


class TestDepotViewConfig:
    """Tests for the configuration class."""

    def test_defaults(self):
        config = DepotViewConfig()

        assert config.get_language() == 'en'
        assert config.get_import_encoding() == 'utf-8'
        assert config.get_export_encoding() == 'utf-8'
        assert config.get_max_preview_rows() == 20
        assert config.get_log_level() == 'WARNING'

    def test_config_dict_deep_update(self):
        config = DepotViewConfig({'import': {'max_preview_rows': 5}})

        assert config.get_max_preview_rows() == 5
        assert config.get_import_encoding() == 'utf-8'

    def test_environment(self, monkeypatch):
        monkeypatch.setenv('DEPOTVIEW_LANGUAGE', 'DE')
        monkeypatch.setenv('DEPOTVIEW_MAX_PREVIEW_ROWS', '7')

        config = DepotViewConfig()

        assert config.get_language() == 'de'
        assert config.get_max_preview_rows() == 7

    def test_invalid_environment_value_skipped(self, monkeypatch):
        monkeypatch.setenv('DEPOTVIEW_MAX_PREVIEW_ROWS', 'lots')

        assert DepotViewConfig().get_max_preview_rows() == 20

    def test_config_file(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'export': {'encoding': 'utf-8-sig'}}))

        config = DepotViewConfig(config_path=str(path))

        assert config.get_export_encoding() == 'utf-8-sig'

    def test_invalid_config_file_skipped(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{not json')

        assert DepotViewConfig(config_path=str(path)).get_language() == 'en'

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / 'saved.json'
        DepotViewConfig({'messages': {'language': 'de'}}).save_to_file(str(path))

        assert DepotViewConfig(config_path=str(path)).get_language() == 'de'

    def test_validate_config(self):
        config = DepotViewConfig({
            'messages': {'language': 'fr'},
            'logging': {'level': 'LOUD'},
            'export': {'encoding': 'no-such-codec'},
        })
        validation = config.validate_config()

        assert len(validation['warnings']) == 1
        assert len(validation['errors']) == 2

    def test_print_summary(self, capsys):
        DepotViewConfig().print_summary()

        assert 'Preview Rows: 20' in capsys.readouterr().out


class TestGlobalConfig:
    """Tests for the global configuration instance."""

    def test_singleton(self):
        reset_config()
        assert get_config() is get_config()

    def test_setup_explicit_language_wins(self, monkeypatch):
        monkeypatch.setenv('DEPOTVIEW_LANGUAGE', 'en')

        config = setup_depotview(language='de', log_level='info')

        assert config is get_config()
        assert config.get_language() == 'de'
        assert config.get_log_level() == 'INFO'


class TestMessages:
    """Tests for localized messages."""

    def test_languages(self):
        assert set(available_languages()) == {'en', 'de'}

    def test_follows_configured_language(self):
        assert get_message('bank_name_required') == 'Bank name is required'

        setup_depotview(language='de')
        assert get_message('bank_name_required') == 'Bank-Name ist ein Pflichtfeld'

    def test_explicit_language(self):
        assert get_message('position_file_stem', 'de') == 'positionen'

    def test_unknown_language_falls_back_to_english(self):
        assert get_message('isin_required', 'fr') == 'ISIN is required'
