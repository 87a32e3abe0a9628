#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Calibration index: Jaccard index -> intra-contig distance samples.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from .data_structures import CalibrationSample, SimilarityDomainError

logger = logging.getLogger(__name__)


class CalibrationIndex:
    """
    Calibration samples ordered by Jaccard index.

    Stored as a sorted key array next to a parallel list of samples so that
    window queries are two binary searches. Equal keys are allowed.
    """

    def __init__(self, keys: np.ndarray, samples: List[CalibrationSample]):
        if len(keys) != len(samples):
            raise ValueError("keys and samples must have the same length")
        self._keys = keys
        self._samples = samples
        self._distances = np.array([s.distance for s in samples], dtype=np.int64)

    @classmethod
    def build(cls, samples: Dict[str, CalibrationSample]) -> "CalibrationIndex":
        """
        Build the index from intra-contig calibration samples.

        Raises:
            SimilarityDomainError: If a sample has an empty barcode union
        """
        entries: List[Tuple[float, CalibrationSample]] = []
        for contig_id, sample in samples.items():
            if sample.barcodes_union == 0:
                raise SimilarityDomainError(
                    f"Calibration sample for contig {contig_id!r} has no barcodes"
                )
            entries.append((sample.jaccard, sample))

        entries.sort(key=lambda entry: entry[0])
        keys = np.array([key for key, _ in entries], dtype=np.float64)
        index = cls(keys, [sample for _, sample in entries])

        if entries:
            logger.info(
                f"Calibration index: {len(index)} samples, "
                f"Jaccard range [{keys[0]:.4f}, {keys[-1]:.4f}]"
            )
        else:
            logger.warning("Calibration index is empty; distances cannot be estimated")
        return index

    @classmethod
    def empty(cls) -> "CalibrationIndex":
        return cls(np.array([], dtype=np.float64), [])

    def __len__(self) -> int:
        return len(self._samples)

    def __bool__(self) -> bool:
        return len(self._samples) > 0

    @property
    def keys(self) -> np.ndarray:
        return self._keys

    def window_bounds(self, jaccard: float, bin_size: float) -> Tuple[int, int]:
        """Half-open index range of entries with keys in [jaccard - bin_size, jaccard + bin_size]."""
        lower = int(np.searchsorted(self._keys, jaccard - bin_size, side='left'))
        upper = int(np.searchsorted(self._keys, jaccard + bin_size, side='right'))
        return lower, upper

    def window(self, jaccard: float, bin_size: float) -> List[CalibrationSample]:
        """Samples whose Jaccard index is within ``bin_size`` of ``jaccard``."""
        lower, upper = self.window_bounds(jaccard, bin_size)
        return self._samples[lower:upper]

    def window_distances(self, jaccard: float, bin_size: float) -> np.ndarray:
        """Sorted known distances of the samples in the Jaccard window."""
        lower, upper = self.window_bounds(jaccard, bin_size)
        return np.sort(self._distances[lower:upper])

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
