"""
GapWeaver v0.1.0

I/O Module for GapWeaver.

1. evidence_io.py - Barcode evidence, contig length and multiplicity readers
2. report_export.py - Distance sample and contig pair distance TSV reports
"""

from .evidence_io import (
    load_barcode_evidence,
    load_contig_lengths,
    load_barcode_multiplicity,
    compute_barcode_multiplicity,
    parse_end_flag,
)

from .report_export import (
    DIST_SAMPLE_COLUMNS,
    PAIR_DISTANCE_COLUMNS,
    write_dist_samples,
    write_pair_distances,
)

__all__ = [
    "load_barcode_evidence",
    "load_contig_lengths",
    "load_barcode_multiplicity",
    "compute_barcode_multiplicity",
    "parse_end_flag",
    "DIST_SAMPLE_COLUMNS",
    "PAIR_DISTANCE_COLUMNS",
    "write_dist_samples",
    "write_pair_distances",
]
