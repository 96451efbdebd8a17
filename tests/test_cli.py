"""
Tests for the command-line interface.
"""

import pytest
import tempfile
from pathlib import Path
from unittest.mock import patch

from genomatch.cli import main as cli_main, setup_logging


class TestMainCLI:
    """Test suite for the genomatch CLI."""

    def setup_method(self):
        """Set up test fixtures."""
        self.library = {"A": "ACGTACGT", "B": "TTTTTTTT"}

    def _create_test_fasta(self, genomes, filepath):
        """Helper to create test FASTA file."""
        with open(filepath, 'w') as f:
            for name, sequence in genomes.items():
                f.write(f">{name}\n{sequence}\n")

    def test_setup_logging_verbose(self):
        """Test logging setup with verbose mode."""
        with patch('genomatch.cli.logging.basicConfig') as mock_config:
            setup_logging(verbose=True)
            mock_config.assert_called_once()
            args, kwargs = mock_config.call_args
            assert kwargs['level'] == 10  # logging.DEBUG

    def test_setup_logging_normal(self):
        """Test logging setup with normal mode."""
        with patch('genomatch.cli.logging.basicConfig') as mock_config:
            setup_logging(verbose=False)
            mock_config.assert_called_once()
            args, kwargs = mock_config.call_args
            assert kwargs['level'] == 20  # logging.INFO

    @patch('sys.argv', ['genomatch', '--help'])
    def test_cli_help_message(self):
        """Test that CLI shows help message."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main()
        assert exc_info.value.code == 0

    @patch('sys.argv', ['genomatch', 'nonexistent.fasta', 'fragment', 'ACGT'])
    def test_cli_missing_library(self):
        """Test CLI behavior with missing library file."""
        with pytest.raises(SystemExit) as exc_info:
            cli_main()
        assert exc_info.value.code == 1

    def test_cli_fragment_search(self, capsys):
        """Test fragment search through the CLI."""
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir = Path(tmpdir)
            library = tmpdir / "library.fasta"
            output = tmpdir / "matches.tsv"
            self._create_test_fasta(self.library, library)

            test_args = ['genomatch', str(library), '--min-search-length', '4',
                         'fragment', 'acgt', '--exact', '-o', str(output)]
            with patch('sys.argv', test_args):
                cli_main()

            captured = capsys.readouterr()
            assert "1 matches found:" in captured.out
            assert "length 4 position 0 in A" in captured.out
            assert output.read_text().splitlines() == ["genome\tposition\tlength", "A\t0\t4"]

    def test_cli_fragment_no_match_exits(self):
        """Test that a fragment with no matches exits with an error code."""
        with tempfile.TemporaryDirectory() as tmpdir:
            library = Path(tmpdir) / "library.fasta"
            self._create_test_fasta(self.library, library)

            test_args = ['genomatch', str(library), '--min-search-length', '4',
                         'fragment', 'GGGGCCCC', '--exact']
            with patch('sys.argv', test_args):
                with pytest.raises(SystemExit) as exc_info:
                    cli_main()
            assert exc_info.value.code == 1

    def test_cli_related_search(self, capsys):
        """Test related-genome search through the CLI."""
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir = Path(tmpdir)
            library = tmpdir / "library.fasta"
            query = tmpdir / "query.fasta"
            self._create_test_fasta(self.library, library)
            self._create_test_fasta({"Q": "ACGTACGT"}, query)

            test_args = ['genomatch', str(library), '--min-search-length', '4',
                         'related', str(query), '--exact', '--threshold', '50']
            with patch('sys.argv', test_args):
                cli_main()

            captured = capsys.readouterr()
            assert "1 related genomes found:" in captured.out
            assert "100.00% A" in captured.out
            assert " B" not in captured.out

    def test_cli_invalid_library(self):
        """Test that invalid library sequences are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            library = Path(tmpdir) / "library.fasta"
            self._create_test_fasta({"bad": "ACGTXYZ"}, library)

            test_args = ['genomatch', str(library), 'fragment', 'ACGTACGTAC']
            with patch('sys.argv', test_args):
                with pytest.raises(SystemExit) as exc_info:
                    cli_main()
            assert exc_info.value.code == 1

    def test_cli_related_output_names_each_query(self):
        """Test that related-genome TSV rows record which query they belong to."""
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir = Path(tmpdir)
            library = tmpdir / "library.fasta"
            query = tmpdir / "query.fasta"
            output = tmpdir / "related.tsv"
            self._create_test_fasta({"A": "ACGTACGT"}, library)
            self._create_test_fasta({"Q1": "ACGTACGT", "Q2": "ACGTGGGG"}, query)

            test_args = ['genomatch', str(library), '--min-search-length', '4',
                         'related', str(query), '--exact', '--threshold', '10', '-o', str(output)]
            with patch('sys.argv', test_args):
                cli_main()

            assert output.read_text().splitlines() == [
                "query\tgenome\tpercent_match",
                "Q1\tA\t100.0000",
                "Q2\tA\t50.0000",
            ]
