#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Readers for barcode evidence, contig lengths and barcode multiplicities.

All inputs are tab-separated text, optionally gzip-compressed. Blank lines
and lines starting with '#' are ignored.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import gzip
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union

from ..distance_core.data_structures import (
    BarcodeEvidence,
    BarcodeMultiplicity,
    ContigEnd,
    ContigLengths,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

HEAD_LABELS = {'H', 'HEAD', '1'}
TAIL_LABELS = {'T', 'TAIL', '0'}


def _open_text(path: Path):
    if path.suffix == '.gz':
        return gzip.open(path, 'rt')
    return open(path, 'r')


def _iter_rows(path: PathLike, min_columns: int) -> Iterator[Tuple[int, List[str]]]:
    """Yield (line number, fields) for each data line of a TSV file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    with _open_text(path) as f:
        for line_no, line in enumerate(f, start=1):
            line = line.rstrip('\n')
            if not line.strip() or line.startswith('#'):
                continue
            fields = line.split('\t')
            if len(fields) < min_columns:
                raise ValueError(
                    f"{path}:{line_no}: expected at least {min_columns} columns, got {len(fields)}"
                )
            yield line_no, fields


def _parse_int(value: str, path: PathLike, line_no: int, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{path}:{line_no}: invalid {what} {value!r}")


def parse_end_flag(value: str) -> bool:
    """Parse a head/tail label, returning True for head."""
    label = value.strip().upper()
    if label in HEAD_LABELS:
        return True
    if label in TAIL_LABELS:
        return False
    raise ValueError(f"invalid contig end {value!r} (expected H or T)")


def load_barcode_evidence(path: PathLike) -> BarcodeEvidence:
    """
    Load barcode -> contig end read pair counts.

    Format: ``barcode<TAB>contig_id<TAB>end<TAB>read_pairs``. Repeated
    (barcode, contig, end) rows are summed.
    """
    evidence: Dict[str, Dict[ContigEnd, int]] = defaultdict(lambda: defaultdict(int))
    rows = 0

    for line_no, fields in _iter_rows(path, 4):
        barcode, contig_id, end, pairs = fields[:4]
        try:
            is_head = parse_end_flag(end)
        except ValueError as e:
            raise ValueError(f"{path}:{line_no}: {e}")
        evidence[barcode][ContigEnd(contig_id, is_head)] += _parse_int(pairs, path, line_no, "read pair count")
        rows += 1

    logger.info(f"Loaded {rows} barcode mappings for {len(evidence)} barcodes from {path}")
    return {barcode: dict(ends) for barcode, ends in evidence.items()}


def load_contig_lengths(path: PathLike) -> ContigLengths:
    """
    Load contig lengths from the first two columns of a TSV file.

    A FASTA index (.fai) can be used directly.
    """
    lengths = {}
    for line_no, fields in _iter_rows(path, 2):
        lengths[fields[0]] = _parse_int(fields[1], path, line_no, "contig length")

    logger.info(f"Loaded lengths for {len(lengths)} contigs from {path}")
    return lengths


def load_barcode_multiplicity(path: PathLike) -> BarcodeMultiplicity:
    """Load ``barcode<TAB>multiplicity`` rows."""
    multiplicity = {}
    for line_no, fields in _iter_rows(path, 2):
        multiplicity[fields[0]] = _parse_int(fields[1], path, line_no, "multiplicity")

    logger.info(f"Loaded multiplicity for {len(multiplicity)} barcodes from {path}")
    return multiplicity


def compute_barcode_multiplicity(evidence: BarcodeEvidence) -> BarcodeMultiplicity:
    """Multiplicity of each barcode as the number of distinct contig ends it maps to."""
    return {barcode: len(ends) for barcode, ends in evidence.items()}

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
