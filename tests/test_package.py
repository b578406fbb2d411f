"""
Tests for the DepotView Package Surface
=======================================
"""

import depotview


class TestPublicAPI:
    """Tests for top-level exports."""

    def test_version(self):
        assert depotview.__version__ == '0.1.0'

    def test_all_names_exist(self):
        for name in depotview.__all__:
            assert hasattr(depotview, name), name

    def test_quick_start_flow(self, bank_csv):
        result = depotview.parse_bank_csv(bank_csv)
        store = depotview.InMemoryRecordStore()
        depotview.commit_banks(store, result, depotview.MergeStrategy.APPEND)

        document = depotview.export_banks(store.list_banks())
        assert document.content.startswith('name,notes\nAcme Bank,')


class TestConfigure:
    """Tests for configure and info."""

    def test_configure_language(self, capsys):
        config = depotview.configure(language='de')

        assert config.get_language() == 'de'
        assert "Language set to 'de'" in capsys.readouterr().out
        assert depotview.parse_bank_csv("name\n\"\"").errors[0].error == (
            'Bank-Name ist ein Pflichtfeld'
        )

    def test_configure_trailing_underscore_sections(self):
        config = depotview.configure(import_={'max_preview_rows': 3})

        assert config.get_max_preview_rows() == 3

    def test_info(self, capsys):
        depotview.info()

        assert 'DepotView v0.1.0' in capsys.readouterr().out
