#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Core data structures for barcode-based contig distance estimation.

Contig ends, thresholds, intra-contig calibration samples, shared-barcode
statistics for candidate contig pairs, and distance estimates.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Tuple


# ============================================================================
#                              EXCEPTIONS
# ============================================================================

class PreconditionError(Exception):
    """Raised when inputs from collaborating stages break a shared invariant."""
    pass


class SimilarityDomainError(ValueError):
    """Raised when a barcode similarity score falls outside [0, 1]."""
    pass


# ============================================================================
#                              KEYS
# ============================================================================

class ContigEnd(NamedTuple):
    """
    A (contig, end) key.

    Attributes:
        contig_id: Contig identifier
        is_head: True for the head region, False for the tail region
    """
    contig_id: str
    is_head: bool

    def other(self) -> "ContigEnd":
        """Return the opposite end of the same contig."""
        return ContigEnd(self.contig_id, not self.is_head)

    @property
    def label(self) -> str:
        return "H" if self.is_head else "T"


class PairOrientation(IntEnum):
    """Which ends of contig1/contig2 a pair record compares."""
    HH = 0
    HT = 1
    TH = 2
    TT = 3

    @classmethod
    def from_ends(cls, head1: bool, head2: bool) -> "PairOrientation":
        if head1:
            return cls.HH if head2 else cls.HT
        return cls.TH if head2 else cls.TT

    @property
    def head1(self) -> bool:
        """True if the first contig's head is involved."""
        return self in (PairOrientation.HH, PairOrientation.HT)

    @property
    def head2(self) -> bool:
        """True if the second contig's head is involved."""
        return self in (PairOrientation.HH, PairOrientation.TH)


# Type aliases for the external inputs
BarcodeEvidence = Dict[str, Dict[ContigEnd, int]]
ContigLengths = Dict[str, int]
BarcodeMultiplicity = Dict[str, int]
ContigPair = Tuple[str, str]


# ============================================================================
#                              PARAMETERS
# ============================================================================

@dataclass(frozen=True)
class Thresholds:
    """
    Filtering and binning parameters shared by all estimation steps.

    Attributes:
        min_mult: Minimum barcode multiplicity (inclusive)
        max_mult: Maximum barcode multiplicity (inclusive)
        min_reads: Minimum read pairs to trust a barcode/contig-end mapping
        end_length: Length in bases of the head and tail regions
        dist_bin_size: Half-width of the Jaccard window used for estimation
    """
    min_mult: int = 2
    max_mult: int = 500
    min_reads: int = 5
    end_length: int = 30000
    dist_bin_size: float = 0.05

    def __post_init__(self):
        if self.min_mult > self.max_mult:
            raise ValueError(
                f"min_mult ({self.min_mult}) must not exceed max_mult ({self.max_mult})"
            )
        if self.end_length < 0:
            raise ValueError(f"end_length must be non-negative, got {self.end_length}")
        if self.dist_bin_size < 0:
            raise ValueError(f"dist_bin_size must be non-negative, got {self.dist_bin_size}")

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Thresholds":
        """Build thresholds from the 'thresholds' section of a config dict."""
        section = config.get('thresholds', {})
        return cls(
            min_mult=int(section.get('min_mult', cls.min_mult)),
            max_mult=int(section.get('max_mult', cls.max_mult)),
            min_reads=int(section.get('min_reads', cls.min_reads)),
            end_length=int(section.get('end_length', cls.end_length)),
            dist_bin_size=float(section.get('dist_bin_size', cls.dist_bin_size)),
        )


# ============================================================================
#                              RESULTS
# ============================================================================

@dataclass
class CalibrationSample:
    """
    Head/tail barcode sharing for a single contig with a known distance.

    Attributes:
        distance: Distance between the head and tail regions (length - 2 * end_length)
        barcodes_head: Distinct qualifying barcodes at the head
        barcodes_tail: Distinct qualifying barcodes at the tail
        barcodes_union: Distinct qualifying barcodes at either end
        barcodes_intersect: Distinct qualifying barcodes at both ends
    """
    distance: int
    barcodes_head: int = 0
    barcodes_tail: int = 0
    barcodes_union: int = 0
    barcodes_intersect: int = 0

    @property
    def jaccard(self) -> float:
        if self.barcodes_union == 0:
            raise SimilarityDomainError(
                "calibration sample has no barcodes (union == 0)"
            )
        return self.barcodes_intersect / self.barcodes_union


@dataclass
class PairRecord:
    """
    Shared-barcode statistics for one orientation of a contig pair.

    Attributes:
        barcodes_intersect: Barcodes shared by the two contig ends
        barcodes1: Distinct barcodes at the first contig's end
        barcodes2: Distinct barcodes at the second contig's end
        barcodes_union: barcodes1 + barcodes2 - barcodes_intersect
    """
    barcodes_intersect: int = 0
    barcodes1: int = 0
    barcodes2: int = 0
    barcodes_union: int = 0

    @property
    def jaccard(self) -> float:
        """Jaccard index, 0.0 when the record has no barcodes."""
        if self.barcodes_union == 0:
            return 0.0
        return self.barcodes_intersect / self.barcodes_union


@dataclass
class ContigPairStats:
    """
    Shared-barcode statistics for a pair of contigs, per orientation.

    After finalization every orientation whose two ends both have barcodes
    is stored, with a zero intersect if the ends share none.
    """
    contig1: str
    contig2: str
    records: Dict[PairOrientation, PairRecord] = field(default_factory=dict)

    def record(self, orientation: PairOrientation) -> PairRecord:
        """Return the record for an orientation (all-zero if an end has no barcodes)."""
        return self.records.get(orientation, PairRecord())

    def ends(self, orientation: PairOrientation) -> Tuple[ContigEnd, ContigEnd]:
        """Contig ends compared by the given orientation."""
        return (
            ContigEnd(self.contig1, orientation.head1),
            ContigEnd(self.contig2, orientation.head2),
        )


@dataclass
class DistanceEstimate:
    """
    Min/max distance estimate for a pair of contig ends.

    Attributes:
        min_dist: Lower bound (floor of the 1st percentile)
        max_dist: Upper bound (ceiling of the 99th percentile)
        jaccard: Jaccard index used for the lookup
        num_samples: Number of calibration samples in the Jaccard window
    """
    min_dist: int = 0
    max_dist: int = 0
    jaccard: float = 0.0
    num_samples: int = 0

    @classmethod
    def failed(cls) -> "DistanceEstimate":
        return cls()

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
