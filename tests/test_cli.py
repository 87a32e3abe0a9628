#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Tests for CLI command interface.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from click.testing import CliRunner
from gapweaver.cli import main


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test that --help runs without error."""
        runner = CliRunner()
        result = runner.invoke(main, ['--help'])

        assert result.exit_code == 0
        assert 'GapWeaver' in result.output

    def test_cli_version(self):
        """Test that --version displays version."""
        runner = CliRunner()
        result = runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_invalid_command(self):
        """Test that invalid commands are handled gracefully."""
        runner = CliRunner()
        result = runner.invoke(main, ['nonexistent_command'])

        assert result.exit_code != 0


class TestConfigCommands:
    """Test configuration subcommands."""

    def test_config_init_and_validate(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            result = runner.invoke(main, ['config', 'init', '--output', 'test_config.yaml'])
            assert result.exit_code == 0

            result = runner.invoke(main, ['config', 'validate', 'test_config.yaml'])
            assert result.exit_code == 0
            assert 'valid' in result.output

    def test_config_validate_rejects_bad_values(self):
        runner = CliRunner()

        with runner.isolated_filesystem():
            with open('bad.yaml', 'w') as f:
                f.write("thresholds:\n  min_mult: 100\n  max_mult: 10\n")
            result = runner.invoke(main, ['config', 'validate', 'bad.yaml'])

            assert result.exit_code == 1

    def test_config_show_defaults(self):
        runner = CliRunner()
        result = runner.invoke(main, ['config', 'show'])

        assert result.exit_code == 0
        assert 'dist_bin_size' in result.output


class TestEstimateCommand:
    """Test the estimate command end to end."""

    def test_estimate_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ['estimate', '--help'])

        assert result.exit_code == 0
        assert '--dist-bin-size' in result.output

    def test_estimate_writes_reports(self, small_assembly_files, temp_output_dir):
        evidence_path, lengths_path, multiplicity_path = small_assembly_files
        out_dir = temp_output_dir / "out"

        runner = CliRunner()
        result = runner.invoke(main, [
            'estimate',
            '-e', str(evidence_path),
            '-l', str(lengths_path),
            '-m', str(multiplicity_path),
            '-o', str(out_dir),
            '--min-mult', '1', '--max-mult', '10', '--min-reads', '3',
            '--end-length', '100', '--dist-bin-size', '0.5',
            '--threads', '1',
        ])

        assert result.exit_code == 0, result.output
        assert 'Calibration samples: 2' in result.output
        assert (out_dir / "gapweaver.dist.tsv").exists()
        assert (out_dir / "gapweaver.pair_distances.tsv").exists()

    def test_estimate_prefix(self, small_assembly_files, temp_output_dir):
        evidence_path, lengths_path, _ = small_assembly_files
        out_dir = temp_output_dir / "out"

        runner = CliRunner()
        result = runner.invoke(main, [
            'estimate', '-e', str(evidence_path), '-l', str(lengths_path),
            '-o', str(out_dir), '-p', 'run7',
            '--min-mult', '1', '--min-reads', '3', '--end-length', '100', '--threads', '1',
        ])

        assert result.exit_code == 0, result.output
        assert (out_dir / "run7.dist.tsv").exists()
        assert (out_dir / "run7.pair_distances.tsv").exists()

    def test_estimate_missing_length_fails(self, temp_output_dir):
        evidence_path = temp_output_dir / "ev.tsv"
        evidence_path.write_text("bc1\tctgA\tH\t5\n")
        lengths_path = temp_output_dir / "lengths.tsv"
        lengths_path.write_text("ctgB\t1000\n")

        runner = CliRunner()
        result = runner.invoke(main, [
            'estimate', '-e', str(evidence_path), '-l', str(lengths_path),
            '-o', str(temp_output_dir / "out"), '--min-mult', '1', '--threads', '1',
        ])

        assert result.exit_code == 1
        assert 'ctgA' in result.output

    def test_estimate_rejects_bad_thresholds(self, small_assembly_files, temp_output_dir):
        evidence_path, lengths_path, _ = small_assembly_files

        runner = CliRunner()
        result = runner.invoke(main, [
            'estimate', '-e', str(evidence_path), '-l', str(lengths_path),
            '-o', str(temp_output_dir / "out"), '--min-mult', '20', '--max-mult', '10',
        ])

        assert result.exit_code == 1

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
