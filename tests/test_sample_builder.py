#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Tests for intra-contig calibration samples.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from gapweaver.distance_core.data_structures import (
    CalibrationSample,
    ContigEnd,
    PreconditionError,
    Thresholds,
)
from gapweaver.distance_core.sample_builder import calc_dist_samples


def H(contig_id):
    return ContigEnd(contig_id, True)


def T(contig_id):
    return ContigEnd(contig_id, False)


@pytest.fixture
def scenario_thresholds():
    return Thresholds(min_mult=1, max_mult=10, min_reads=3, end_length=100)


class TestSingleContig:
    """Test counting for a single 300 bp contig with 100 bp ends."""

    def test_barcode_at_both_ends(self, scenario_thresholds):
        """A barcode at head and tail counts once toward union and intersect."""
        evidence = {'BX1': {H('C1'): 5, T('C1'): 5}}
        samples = calc_dist_samples(evidence, {'C1': 300}, {'BX1': 2}, scenario_thresholds)

        assert samples == {
            'C1': CalibrationSample(
                distance=100, barcodes_head=1, barcodes_tail=1,
                barcodes_union=1, barcodes_intersect=1,
            )
        }

    def test_second_barcode_head_only(self, scenario_thresholds):
        """Adding a head-only barcode grows the union but not the intersect."""
        evidence = {
            'BX1': {H('C1'): 5, T('C1'): 5},
            'BX2': {H('C1'): 4},
        }
        samples = calc_dist_samples(
            evidence, {'C1': 300}, {'BX1': 2, 'BX2': 1}, scenario_thresholds
        )
        sample = samples['C1']

        assert sample.barcodes_head == 2
        assert sample.barcodes_tail == 1
        assert sample.barcodes_union == 2
        assert sample.barcodes_intersect == 1
        assert sample.jaccard == pytest.approx(0.5)

    def test_one_end_only_contig(self, scenario_thresholds):
        """Barcodes at only one end still yield a sample with Jaccard 0."""
        evidence = {'BX1': {T('C1'): 5}, 'BX2': {T('C1'): 9}}
        samples = calc_dist_samples(
            evidence, {'C1': 300}, {'BX1': 1, 'BX2': 1}, scenario_thresholds
        )
        sample = samples['C1']

        assert sample.barcodes_union == 2
        assert sample.barcodes_intersect == 0
        assert sample.jaccard == 0.0

    def test_weak_other_end_not_intersect(self, scenario_thresholds):
        """The opposite end only counts when it also meets min_reads."""
        evidence = {'BX1': {H('C1'): 5, T('C1'): 2}}
        samples = calc_dist_samples(evidence, {'C1': 300}, {'BX1': 2}, scenario_thresholds)
        sample = samples['C1']

        assert sample.barcodes_head == 1
        assert sample.barcodes_tail == 0
        assert sample.barcodes_union == 1
        assert sample.barcodes_intersect == 0


class TestFiltering:
    """Test barcode and contig filtering."""

    def test_short_contig_excluded(self, scenario_thresholds):
        """Contigs shorter than 2 * end_length get no sample."""
        evidence = {f'BX{i}': {H('short'): 50, T('short'): 50} for i in range(20)}
        mult = {barcode: 2 for barcode in evidence}
        samples = calc_dist_samples(evidence, {'short': 199}, mult, scenario_thresholds)

        assert samples == {}

    def test_multiplicity_out_of_range(self):
        thresholds = Thresholds(min_mult=2, max_mult=3, min_reads=1, end_length=10)
        evidence = {
            'low': {H('C1'): 5},
            'ok': {H('C1'): 5, T('C1'): 5},
            'high': {T('C1'): 5},
        }
        mult = {'low': 1, 'ok': 2, 'high': 4}
        sample = calc_dist_samples(evidence, {'C1': 100}, mult, thresholds)['C1']

        assert sample.barcodes_union == 1
        assert sample.barcodes_intersect == 1

    def test_warns_when_all_barcodes_filtered(self, caplog):
        """A multiplicity range that removes every barcode is reported."""
        thresholds = Thresholds(min_mult=50, max_mult=10000, min_reads=1, end_length=10)
        evidence = {'BX1': {H('C1'): 5, T('C1'): 5}}

        with caplog.at_level('WARNING'):
            samples = calc_dist_samples(evidence, {'C1': 100}, {'BX1': 2}, thresholds)

        assert samples == {}
        assert 'outside the multiplicity range' in caplog.text

    def test_no_qualifying_observation_no_sample(self, scenario_thresholds):
        evidence = {'BX1': {H('C1'): 1}}
        assert calc_dist_samples(evidence, {'C1': 300}, {'BX1': 1}, scenario_thresholds) == {}

    def test_missing_length_is_fatal(self, scenario_thresholds):
        with pytest.raises(PreconditionError):
            calc_dist_samples({'BX1': {H('C1'): 5}}, {}, {'BX1': 1}, scenario_thresholds)


class TestSampleInvariants:
    """Test properties over a multi-contig dataset."""

    def test_counts_consistent(self, small_assembly, thresholds):
        evidence, lengths, multiplicity = small_assembly
        samples = calc_dist_samples(evidence, lengths, multiplicity, thresholds)

        assert set(samples) == {'ctgA', 'ctgB'}
        for sample in samples.values():
            assert 0 <= sample.barcodes_intersect <= sample.barcodes_union
            assert sample.barcodes_union >= 1
            assert sample.barcodes_union == (
                sample.barcodes_head + sample.barcodes_tail - sample.barcodes_intersect
            )

    def test_expected_samples(self, small_assembly, thresholds):
        evidence, lengths, multiplicity = small_assembly
        samples = calc_dist_samples(evidence, lengths, multiplicity, thresholds)

        assert samples['ctgA'] == CalibrationSample(800, 1, 2, 2, 1)
        assert samples['ctgB'] == CalibrationSample(1000, 3, 2, 4, 1)

    def test_idempotent(self, small_assembly, thresholds):
        evidence, lengths, multiplicity = small_assembly
        first = calc_dist_samples(evidence, lengths, multiplicity, thresholds)
        second = calc_dist_samples(evidence, lengths, multiplicity, thresholds)

        assert first == second

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
