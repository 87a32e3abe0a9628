#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

TSV reports for calibration samples and contig pair distance estimates.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from ..distance_core.data_structures import CalibrationSample
from ..distance_core.distance_estimator import PairDistance

logger = logging.getLogger(__name__)

DIST_SAMPLE_COLUMNS = [
    "contig_id",
    "distance",
    "barcodes_head",
    "barcodes_tail",
    "barcodes_union",
    "barcodes_intersect",
]

PAIR_DISTANCE_COLUMNS = [
    "contig1",
    "contig2",
    "orientation",
    "barcodes1",
    "barcodes2",
    "barcodes_intersect",
    "barcodes_union",
    "jaccard",
    "min_dist",
    "max_dist",
    "num_samples",
    "estimated",
]


def write_dist_samples(
    samples: Dict[str, CalibrationSample],
    output_path: Union[str, Path],
) -> Path:
    """
    Write intra-contig distance samples, one row per contig.

    Columns: contig_id, distance, barcodes_head, barcodes_tail,
    barcodes_union, barcodes_intersect.
    """
    output_path = Path(output_path)
    logger.info(f"Writing {len(samples)} distance samples: {output_path}")

    with open(output_path, 'w') as f:
        f.write("\t".join(DIST_SAMPLE_COLUMNS) + "\n")
        for contig_id, sample in samples.items():
            f.write(
                f"{contig_id}\t{sample.distance}\t{sample.barcodes_head}\t"
                f"{sample.barcodes_tail}\t{sample.barcodes_union}\t"
                f"{sample.barcodes_intersect}\n"
            )

    return output_path


def write_pair_distances(
    results: List[PairDistance],
    output_path: Union[str, Path],
) -> Path:
    """
    Write per-orientation barcode stats and distance estimates for contig pairs.

    Pairs without an estimate are written with zero distances and
    ``estimated`` set to 0, so downstream steps can fall back to a default gap.
    """
    output_path = Path(output_path)
    logger.info(f"Writing {len(results)} contig pair distances: {output_path}")

    with open(output_path, 'w') as f:
        f.write("\t".join(PAIR_DISTANCE_COLUMNS) + "\n")
        for result in results:
            rec = result.record
            est = result.estimate
            f.write(
                f"{result.stats.contig1}\t{result.stats.contig2}\t{result.orientation.name}\t"
                f"{rec.barcodes1}\t{rec.barcodes2}\t{rec.barcodes_intersect}\t{rec.barcodes_union}\t"
                f"{rec.jaccard:.6f}\t{est.min_dist}\t{est.max_dist}\t{est.num_samples}\t"
                f"{int(result.estimated)}\n"
            )

    return output_path

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
