#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Distance estimation for contig pairs from barcode Jaccard indices.

A pair's Jaccard index selects the calibration samples with similar
indices; the 1st and 99th percentiles of their known distances bound the
gap between the two contig ends.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .calibration_index import CalibrationIndex
from .data_structures import (
    ContigPairStats,
    DistanceEstimate,
    PairOrientation,
    PairRecord,
    SimilarityDomainError,
    Thresholds,
)
from .pair_statistics import PairStatsMap

logger = logging.getLogger(__name__)

LOWER_QUANTILE = 0.01
UPPER_QUANTILE = 0.99


def quantile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linear-interpolation quantile of an ascending sequence.

    Interpolates between the order statistics bracketing position
    ``p * (n - 1)``.
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"quantile must be in [0, 1], got {p}")
    if len(sorted_values) == 0:
        raise ValueError("quantile of an empty sequence is undefined")
    return float(np.quantile(np.asarray(sorted_values, dtype=np.float64), p, method='linear'))


def estimate_distance(
    record: PairRecord,
    index: CalibrationIndex,
    thresholds: Thresholds,
) -> Tuple[DistanceEstimate, bool]:
    """
    Estimate min/max distance between a pair of contig ends.

    Returns ``(estimate, True)`` on success. Returns a zero-valued estimate
    and False when the calibration index is empty, the pair has no barcodes,
    or no calibration sample falls in the Jaccard window.

    Raises:
        SimilarityDomainError: If the pair's Jaccard index is outside [0, 1]
    """
    # estimation disabled, or no contig long enough to provide training data
    if not index:
        return DistanceEstimate.failed(), False

    # pair did not meet the requirements (e.g. contigs shorter than 2 * end_length)
    if record.barcodes_union == 0:
        return DistanceEstimate.failed(), False

    jaccard = record.barcodes_intersect / record.barcodes_union
    if not 0.0 <= jaccard <= 1.0:
        raise SimilarityDomainError(
            f"Jaccard index {jaccard} out of range "
            f"(intersect={record.barcodes_intersect}, union={record.barcodes_union})"
        )

    distances = index.window_distances(jaccard, thresholds.dist_bin_size)
    if len(distances) == 0:
        logger.debug(f"No calibration samples within {thresholds.dist_bin_size} of Jaccard {jaccard:.4f}")
        return DistanceEstimate.failed(), False

    result = DistanceEstimate(
        min_dist=int(math.floor(quantile(distances, LOWER_QUANTILE))),
        max_dist=int(math.ceil(quantile(distances, UPPER_QUANTILE))),
        jaccard=jaccard,
        num_samples=len(distances),
    )
    return result, True


@dataclass
class PairDistance:
    """Distance estimate for one orientation of a contig pair."""
    stats: ContigPairStats
    orientation: PairOrientation
    estimate: DistanceEstimate
    estimated: bool

    @property
    def record(self) -> PairRecord:
        return self.stats.record(self.orientation)


def estimate_pair_distances(
    pairs: PairStatsMap,
    index: CalibrationIndex,
    thresholds: Thresholds,
    small_window_warning: int = 0,
) -> List[PairDistance]:
    """
    Estimate distances for every stored orientation of every contig pair.

    Pairs of a contig with itself are skipped. Estimates drawn from fewer
    than ``small_window_warning`` calibration samples are counted and
    reported, but kept.
    """
    results = []
    small_windows = 0

    for key in sorted(pairs):
        stats = pairs[key]
        if stats.contig1 == stats.contig2:
            continue
        for orientation in sorted(stats.records):
            estimate, ok = estimate_distance(stats.records[orientation], index, thresholds)
            if ok and estimate.num_samples < small_window_warning:
                small_windows += 1
            results.append(PairDistance(stats, orientation, estimate, ok))

    n_ok = sum(1 for r in results if r.estimated)
    logger.info(f"Estimated distances for {n_ok}/{len(results)} contig end pairs")
    if small_windows:
        logger.warning(
            f"{small_windows} estimates used fewer than {small_window_warning} "
            f"calibration samples; consider a larger dist_bin_size"
        )
    return results

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
