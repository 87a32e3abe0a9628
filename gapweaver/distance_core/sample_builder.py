#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Intra-contig calibration samples.

The head and tail regions of the same contig are a known distance apart
(contig length minus both end regions), so their barcode overlap gives a
ground-truth point relating barcode similarity to physical distance.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from collections import defaultdict
from typing import Dict, Set

from .data_structures import (
    BarcodeEvidence,
    BarcodeMultiplicity,
    CalibrationSample,
    ContigLengths,
    Thresholds,
)
from .eligibility import barcode_in_multiplicity_range, contig_length, qualifying_ends

logger = logging.getLogger(__name__)


def calc_dist_samples(
    evidence: BarcodeEvidence,
    contig_lengths: ContigLengths,
    multiplicity: BarcodeMultiplicity,
    thresholds: Thresholds,
) -> Dict[str, CalibrationSample]:
    """
    Measure head/tail barcode sharing for every sufficiently long contig.

    For each barcode within the multiplicity range, the qualifying ends are
    first grouped per contig. Each contig touched by the barcode then gains
    one head and/or tail count, exactly one union count, and one intersect
    count if both of its ends qualify.

    Args:
        evidence: barcode -> {ContigEnd: read pair count}
        contig_lengths: contig id -> length in bases
        multiplicity: barcode -> multiplicity
        thresholds: Filtering parameters

    Returns:
        Dict mapping contig id -> CalibrationSample
    """
    samples: Dict[str, CalibrationSample] = {}
    skipped_barcodes = 0

    for barcode, end_counts in evidence.items():
        if not barcode_in_multiplicity_range(barcode, multiplicity, thresholds):
            skipped_barcodes += 1
            continue

        heads_by_contig: Dict[str, Set[bool]] = defaultdict(set)
        for end in qualifying_ends(end_counts, contig_lengths, thresholds):
            heads_by_contig[end.contig_id].add(end.is_head)

        for contig_id, flags in heads_by_contig.items():
            sample = samples.get(contig_id)
            if sample is None:
                distance = contig_length(contig_id, contig_lengths) - 2 * thresholds.end_length
                sample = samples[contig_id] = CalibrationSample(distance=distance)

            at_head = True in flags
            at_tail = False in flags

            if at_head:
                sample.barcodes_head += 1
            if at_tail:
                sample.barcodes_tail += 1
            sample.barcodes_union += 1
            if at_head and at_tail:
                sample.barcodes_intersect += 1

    logger.info(
        f"Built {len(samples)} calibration samples from {len(evidence)} barcodes "
        f"({skipped_barcodes} outside multiplicity range)"
    )
    if evidence and skipped_barcodes == len(evidence):
        logger.warning(
            f"All {len(evidence)} barcodes are outside the multiplicity range "
            f"[{thresholds.min_mult}, {thresholds.max_mult}]; check min_mult/max_mult "
            f"against the multiplicity scale"
        )
    return samples

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
