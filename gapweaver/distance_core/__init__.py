"""
Distance Core module for GapWeaver.

This module estimates gap distances between contig ends from shared
linked-read barcodes:
- Calibration samples from the head/tail regions of the same contig
- Jaccard-ordered calibration index with window queries
- Shared-barcode statistics for candidate contig pairs
- Percentile-based min/max distance estimates
"""

from .data_structures import (
    ContigEnd,
    PairOrientation,
    Thresholds,
    CalibrationSample,
    PairRecord,
    ContigPairStats,
    DistanceEstimate,
    PreconditionError,
    SimilarityDomainError,
)

from .eligibility import (
    barcode_in_multiplicity_range,
    valid_barcode_mapping,
)

from .sample_builder import calc_dist_samples

from .calibration_index import CalibrationIndex

from .pair_statistics import (
    PairCounts,
    accumulate_pair_counts,
    merge_pair_counts,
    finalize_pair_stats,
    calc_contig_pair_barcode_stats,
)

from .distance_estimator import (
    PairDistance,
    quantile,
    estimate_distance,
    estimate_pair_distances,
)

__all__ = [
    # Data structures
    "ContigEnd",
    "PairOrientation",
    "Thresholds",
    "CalibrationSample",
    "PairRecord",
    "ContigPairStats",
    "DistanceEstimate",
    "PreconditionError",
    "SimilarityDomainError",
    # Filters
    "barcode_in_multiplicity_range",
    "valid_barcode_mapping",
    # Calibration
    "calc_dist_samples",
    "CalibrationIndex",
    # Pair statistics
    "PairCounts",
    "accumulate_pair_counts",
    "merge_pair_counts",
    "finalize_pair_stats",
    "calc_contig_pair_barcode_stats",
    # Estimation
    "PairDistance",
    "quantile",
    "estimate_distance",
    "estimate_pair_distances",
]
