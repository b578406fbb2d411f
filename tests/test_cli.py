"""
Tests for DepotView CLI Module
==============================

Unit tests for the command-line interface.
"""

import os
import subprocess
import sys

import pytest

from depotview.cli import build_parser, main
from depotview.config import setup_depotview

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def bank_file(tmp_path, bank_csv):
    path = tmp_path / 'banks.csv'
    path.write_text(bank_csv, encoding='utf-8')
    return path


@pytest.fixture
def broken_bank_file(tmp_path):
    path = tmp_path / 'broken.csv'
    path.write_text("name,notes\nAcme Bank,\n,orphan\n", encoding='utf-8')
    return path


class TestCLIHelp:
    """Tests for CLI help commands."""

    def test_cli_help(self):
        """Test that the module entry point prints help."""
        result = subprocess.run(
            [sys.executable, '-m', 'depotview.cli', '--help'],
            cwd=ROOT,
            capture_output=True,
            text=True,
            timeout=30
        )

        assert result.returncode == 0
        assert 'check-positions' in result.stdout

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert 'usage' in capsys.readouterr().out.lower()

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])

        assert exc_info.value.code == 0
        assert 'depotview' in capsys.readouterr().out

    def test_log_level_is_case_insensitive(self):
        assert build_parser().parse_args(['--log-level', 'debug', 'info']).log_level == 'DEBUG'

    def test_unknown_log_level_option_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['--log-level', 'LOUD', 'info'])

        assert exc_info.value.code == 2

    def test_unknown_configured_log_level_falls_back(self, monkeypatch, capsys):
        monkeypatch.setenv('DEPOTVIEW_LOG_LEVEL', 'LOUD')
        setup_depotview()

        assert main(['info']) == 0
        assert "Unknown log level 'LOUD', using WARNING" in capsys.readouterr().out

    def test_missing_required_args(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['convert-positions', 'file.csv'])


class TestCheckCommands:
    """Tests for check-banks and check-positions."""

    def test_valid_bank_file(self, bank_file, capsys):
        assert main(['check-banks', str(bank_file)]) == 0

        out = capsys.readouterr().out
        assert '2 valid, 0 with errors' in out
        assert 'Broker XYZ' in out

    def test_bank_file_with_errors(self, broken_bank_file, capsys):
        assert main(['check-banks', str(broken_bank_file)]) == 1

        out = capsys.readouterr().out
        assert 'Row 3: Bank name is required' in out

    def test_semicolon_position_file(self, tmp_path, semicolon_position_csv, capsys):
        path = tmp_path / 'positions.csv'
        path.write_bytes(semicolon_position_csv.encode('utf-8'))

        assert main(['check-positions', str(path), '--bank-id', '4']) == 0
        assert '2 valid' in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(['check-banks', str(tmp_path / 'nope.csv')]) == 1
        assert 'File not found' in capsys.readouterr().out

    def test_preview_is_truncated(self, tmp_path, capsys):
        path = tmp_path / 'many.csv'
        path.write_text("name\n" + "\n".join(f"Bank {i}" for i in range(25)), encoding='utf-8')

        main(['check-banks', str(path)])

        assert '5 more row(s)' in capsys.readouterr().out


class TestFileCommands:
    """Tests for convert-positions and template."""

    def test_convert_semicolon_file(self, tmp_path, semicolon_position_csv):
        source = tmp_path / 'input.csv'
        source.write_text(semicolon_position_csv, encoding='utf-8')
        out_dir = tmp_path / 'out'

        assert main(['convert-positions', str(source), '--bank-name', 'My Bank',
                     '--output', str(out_dir)]) == 0

        written = list(out_dir.glob('positions-My-Bank-*.csv'))
        assert len(written) == 1
        lines = written[0].read_text(encoding='utf-8').split('\n')
        assert lines[0].startswith('isin,ticker,assetType')
        assert lines[1] == 'US0378331005,AAPL,stock,2024-01-15,10,185.5,USD,Apple; Inc.,,'

    def test_convert_refuses_invalid_file(self, tmp_path):
        source = tmp_path / 'input.csv'
        source.write_text("isin,ticker\nX,Y", encoding='utf-8')

        assert main(['convert-positions', str(source), '--bank-name', 'B',
                     '--output', str(tmp_path / 'out')]) == 1
        assert not (tmp_path / 'out').exists()

    @pytest.mark.parametrize('kind,filename', [
        ('banks', 'banks-example.csv'),
        ('positions', 'positions-example.csv'),
    ])
    def test_template(self, tmp_path, kind, filename):
        assert main(['template', kind, '--output', str(tmp_path)]) == 0
        assert (tmp_path / filename).exists()


class TestInfoCommand:
    """Tests for the info command."""

    def test_info(self, capsys):
        assert main(['info']) == 0

        out = capsys.readouterr().out
        assert 'DepotView' in out
        assert 'Language: en' in out
