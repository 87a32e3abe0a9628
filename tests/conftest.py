#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Pytest configuration and shared fixtures.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from gapweaver.distance_core.data_structures import ContigEnd, Thresholds


def H(contig_id):
    return ContigEnd(contig_id, True)


def T(contig_id):
    return ContigEnd(contig_id, False)


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="gapweaver_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def thresholds():
    """Small-scale thresholds: 100 bp ends, 3 read pairs, any multiplicity up to 10."""
    return Thresholds(min_mult=1, max_mult=10, min_reads=3, end_length=100, dist_bin_size=0.5)


@pytest.fixture
def small_assembly():
    """
    Three contigs with barcode evidence.

    ctgA (1000 bp) and ctgB (1200 bp) are long enough for calibration;
    ctgC (150 bp) is shorter than two end regions. bc4 maps to ctgA's head
    with too few read pairs.
    """
    evidence = {
        'bc1': {H('ctgA'): 5, T('ctgA'): 5, H('ctgB'): 4},
        'bc2': {T('ctgA'): 6, H('ctgB'): 6},
        'bc3': {H('ctgB'): 3, T('ctgB'): 3, H('ctgC'): 10},
        'bc4': {H('ctgA'): 1, T('ctgB'): 5},
    }
    lengths = {'ctgA': 1000, 'ctgB': 1200, 'ctgC': 150}
    multiplicity = {barcode: len(ends) for barcode, ends in evidence.items()}
    return evidence, lengths, multiplicity


@pytest.fixture
def small_assembly_files(temp_output_dir, small_assembly):
    """The small assembly written as evidence, lengths and multiplicity TSVs."""
    evidence, lengths, multiplicity = small_assembly

    evidence_path = temp_output_dir / "barcodes.tsv"
    with open(evidence_path, 'w') as f:
        f.write("# barcode\tcontig\tend\tread_pairs\n")
        for barcode, ends in evidence.items():
            for end, pairs in ends.items():
                f.write(f"{barcode}\t{end.contig_id}\t{end.label}\t{pairs}\n")

    lengths_path = temp_output_dir / "contigs.fa.fai"
    with open(lengths_path, 'w') as f:
        for contig_id, length in lengths.items():
            f.write(f"{contig_id}\t{length}\t0\t60\t61\n")

    multiplicity_path = temp_output_dir / "multiplicity.tsv"
    with open(multiplicity_path, 'w') as f:
        for barcode, mult in multiplicity.items():
            f.write(f"{barcode}\t{mult}\n")

    return evidence_path, lengths_path, multiplicity_path

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
