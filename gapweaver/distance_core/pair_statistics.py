#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Shared-barcode statistics for candidate contig pairs.

For every barcode within the multiplicity range, every pair of qualifying
contig ends it maps to gains one shared barcode in the matching orientation
(HH, HT, TH, TT). Distinct barcode counts per contig end are accumulated on
the side and used afterwards to fill in |A|, |B| and |A union B|.

The scan is quadratic in the number of qualifying ends per barcode, which
the multiplicity filter keeps bounded. Barcodes can be split into shards,
scanned independently and combined with ``merge_pair_counts``.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from .data_structures import (
    BarcodeEvidence,
    BarcodeMultiplicity,
    ContigEnd,
    ContigLengths,
    ContigPair,
    ContigPairStats,
    PairOrientation,
    PairRecord,
    PreconditionError,
    Thresholds,
)
from .eligibility import barcode_in_multiplicity_range, qualifying_ends

logger = logging.getLogger(__name__)

PairStatsMap = Dict[ContigPair, ContigPairStats]


@dataclass
class PairCounts:
    """
    Raw counts from scanning a set of barcodes.

    Attributes:
        pairs: (id1, id2) -> ContigPairStats holding shared barcode counts only
        end_barcodes: ContigEnd -> number of distinct qualifying barcodes
    """
    pairs: PairStatsMap = field(default_factory=dict)
    end_barcodes: Counter = field(default_factory=Counter)


def accumulate_pair_counts(
    evidence: BarcodeEvidence,
    contig_lengths: ContigLengths,
    multiplicity: BarcodeMultiplicity,
    thresholds: Thresholds,
) -> PairCounts:
    """
    Count shared barcodes for contig end pairs and distinct barcodes per end.

    Pairs are stored under (id1, id2) with id1 <= id2. Pairs of a contig with
    itself are kept; consumers skip them.
    """
    counts = PairCounts()

    for barcode, end_counts in evidence.items():
        if not barcode_in_multiplicity_range(barcode, multiplicity, thresholds):
            continue

        ends = qualifying_ends(end_counts, contig_lengths, thresholds)

        for end1 in ends:
            counts.end_barcodes[end1] += 1

            for end2 in ends:
                # avoid double-counting contig end pairs
                if end1.contig_id > end2.contig_id:
                    continue

                key = (end1.contig_id, end2.contig_id)
                stats = counts.pairs.get(key)
                if stats is None:
                    stats = counts.pairs[key] = ContigPairStats(*key)

                orientation = PairOrientation.from_ends(end1.is_head, end2.is_head)
                record = stats.records.get(orientation)
                if record is None:
                    record = stats.records[orientation] = PairRecord()
                record.barcodes_intersect += 1

    return counts


def merge_pair_counts(shards: Iterable[PairCounts]) -> PairCounts:
    """Sum the counts of independently scanned barcode shards."""
    merged = PairCounts()

    for shard in shards:
        merged.end_barcodes.update(shard.end_barcodes)

        for key, stats in shard.pairs.items():
            target = merged.pairs.get(key)
            if target is None:
                target = merged.pairs[key] = ContigPairStats(*key)
            for orientation, record in stats.records.items():
                merged_record = target.records.get(orientation)
                if merged_record is None:
                    merged_record = target.records[orientation] = PairRecord()
                merged_record.barcodes_intersect += record.barcodes_intersect

    return merged


def finalize_pair_stats(counts: PairCounts) -> PairStatsMap:
    """
    Fill in per-end barcode counts and union sizes for every stored record.

    Every stored pair gets all four orientations whose two ends both have
    qualifying barcodes; orientations without shared barcodes get
    ``barcodes_intersect == 0``. An orientation with an end that never
    received a barcode is left out.

    Raises:
        PreconditionError: If a record with shared barcodes refers to a
            contig end with no distinct barcode count, or its counts are
            inconsistent
    """
    for key, stats in counts.pairs.items():
        for orientation in PairOrientation:
            end1, end2 = stats.ends(orientation)
            record = stats.records.get(orientation)
            if record is None:
                if end1 not in counts.end_barcodes or end2 not in counts.end_barcodes:
                    continue
                record = stats.records[orientation] = PairRecord()

            record.barcodes1 = _end_barcode_count(counts.end_barcodes, end1)
            record.barcodes2 = _end_barcode_count(counts.end_barcodes, end2)

            if record.barcodes1 + record.barcodes2 < record.barcodes_intersect:
                raise PreconditionError(
                    f"Shared barcodes ({record.barcodes_intersect}) exceed combined "
                    f"barcodes ({record.barcodes1} + {record.barcodes2}) for "
                    f"{key} {orientation.name}"
                )
            record.barcodes_union = record.barcodes1 + record.barcodes2 - record.barcodes_intersect

    return counts.pairs


def _end_barcode_count(end_barcodes: Counter, end: ContigEnd) -> int:
    count = end_barcodes.get(end, 0)
    if count <= 0:
        raise PreconditionError(
            f"No barcodes counted for contig end {end.contig_id}:{end.label}"
        )
    return count


def calc_contig_pair_barcode_stats(
    evidence: BarcodeEvidence,
    contig_lengths: ContigLengths,
    multiplicity: BarcodeMultiplicity,
    thresholds: Thresholds,
) -> PairStatsMap:
    """
    Calculate shared barcode stats for candidate contig pairs.

    Args:
        evidence: barcode -> {ContigEnd: read pair count}
        contig_lengths: contig id -> length in bases
        multiplicity: barcode -> multiplicity
        thresholds: Filtering parameters

    Returns:
        Dict mapping (id1, id2) -> ContigPairStats
    """
    counts = accumulate_pair_counts(evidence, contig_lengths, multiplicity, thresholds)
    pairs = finalize_pair_stats(counts)

    logger.info(
        f"Computed barcode stats for {len(pairs)} contig pairs "
        f"over {len(counts.end_barcodes)} contig ends"
    )
    return pairs

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
