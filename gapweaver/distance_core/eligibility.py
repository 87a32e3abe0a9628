#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Barcode filters shared by calibration and contig-pair statistics.

Both the intra-contig calibration samples and the inter-contig pair
statistics must use exactly these checks, otherwise the Jaccard scores of
query pairs are not comparable with the calibration curve.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, List

from .data_structures import (
    BarcodeMultiplicity,
    ContigEnd,
    ContigLengths,
    PreconditionError,
    Thresholds,
)


def barcode_in_multiplicity_range(
    barcode: str,
    multiplicity: BarcodeMultiplicity,
    thresholds: Thresholds,
) -> bool:
    """
    Check that a barcode's multiplicity lies within [min_mult, max_mult].

    Raises:
        PreconditionError: If the barcode has no multiplicity entry
    """
    try:
        mult = multiplicity[barcode]
    except KeyError:
        raise PreconditionError(f"No multiplicity recorded for barcode {barcode!r}")
    return thresholds.min_mult <= mult <= thresholds.max_mult


def contig_length(contig_id: str, contig_lengths: ContigLengths) -> int:
    """
    Look up a contig length.

    Raises:
        PreconditionError: If the contig has no length entry
    """
    try:
        return contig_lengths[contig_id]
    except KeyError:
        raise PreconditionError(f"No length recorded for contig {contig_id!r}")


def valid_barcode_mapping(length: int, read_pairs: int, thresholds: Thresholds) -> bool:
    """
    Check requirements for using a barcode-to-contig-end mapping in
    distance estimates.

    A mapping qualifies when it is supported by at least ``min_reads`` read
    pairs and the contig is long enough to hold non-overlapping head and
    tail regions of ``end_length`` bases.
    """
    if read_pairs < thresholds.min_reads:
        return False
    if length < 2 * thresholds.end_length:
        return False
    return True


def qualifying_ends(
    end_counts: Dict[ContigEnd, int],
    contig_lengths: ContigLengths,
    thresholds: Thresholds,
) -> List[ContigEnd]:
    """Return the contig ends of one barcode that pass ``valid_barcode_mapping``."""
    return [
        end for end, read_pairs in end_counts.items()
        if valid_barcode_mapping(contig_length(end.contig_id, contig_lengths), read_pairs, thresholds)
    ]

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
