#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GapWeaver v0.1.0

Pipeline orchestration for one distance estimation pass.

Loads barcode evidence, builds calibration samples and contig pair
statistics, estimates distances for every candidate pair, and writes the
TSV reports.

Author: GapWeaver Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..distance_core.calibration_index import CalibrationIndex
from ..distance_core.data_structures import (
    BarcodeEvidence,
    BarcodeMultiplicity,
    CalibrationSample,
    ContigLengths,
    Thresholds,
)
from ..distance_core.distance_estimator import PairDistance, estimate_pair_distances
from ..distance_core.pair_statistics import (
    PairStatsMap,
    accumulate_pair_counts,
    finalize_pair_stats,
    merge_pair_counts,
)
from ..distance_core.sample_builder import calc_dist_samples
from ..io_utils.evidence_io import (
    compute_barcode_multiplicity,
    load_barcode_evidence,
    load_barcode_multiplicity,
    load_contig_lengths,
)
from ..io_utils.report_export import write_dist_samples, write_pair_distances


@dataclass
class DistanceEstimationResult:
    """Outputs of one pipeline pass."""
    dist_samples: Dict[str, CalibrationSample]
    calibration_index: CalibrationIndex
    pair_stats: PairStatsMap
    pair_distances: List[PairDistance]
    output_files: Dict[str, Path] = field(default_factory=dict)

    @property
    def num_estimated(self) -> int:
        return sum(1 for r in self.pair_distances if r.estimated)


def shard_evidence(evidence: BarcodeEvidence, num_shards: int) -> List[BarcodeEvidence]:
    """Split barcodes round-robin into ``num_shards`` evidence maps."""
    num_shards = max(1, num_shards)
    shards: List[BarcodeEvidence] = [{} for _ in range(num_shards)]
    for i, (barcode, ends) in enumerate(evidence.items()):
        shards[i % num_shards][barcode] = ends
    return [shard for shard in shards if shard] or [{}]


class DistanceEstimationPipeline:
    """
    Batch distance estimation over one assembly.

    The calibration scan and the pair statistics scan only read the shared
    inputs, so with more than one thread they run side by side, and the
    pair scan is split into barcode shards whose counts are summed before
    the per-end totals are filled in.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        output_dir: Optional[Path] = None,
        configure_logging: bool = True,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Configuration dictionary (see config.schema.DEFAULT_CONFIG)
            output_dir: Directory for reports and the log file
            configure_logging: Set up root logging handlers
        """
        self.config = config
        self.thresholds = Thresholds.from_config(config)
        self.estimation_enabled = bool(config.get('estimation', {}).get('enabled', True))
        self.small_window_warning = int(config.get('estimation', {}).get('small_window_warning', 0))
        self.threads = int(config.get('runtime', {}).get('threads', 1))

        self.output_dir = Path(output_dir) if output_dir else None
        if self.output_dir:
            self.output_dir.mkdir(parents=True, exist_ok=True)

        if configure_logging:
            self._setup_logging()
        self.logger = logging.getLogger(__name__)

    def _setup_logging(self):
        log_config = self.config.get('output', {}).get('logging', {})
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        log_file = log_config.get('log_file')
        if self.output_dir and log_file:
            handlers.append(logging.FileHandler(self.output_dir / log_file))

        logging.basicConfig(
            level=getattr(logging, log_config.get('level', 'INFO')),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers,
        )

    # ========================================================================
    #                         ENTRY POINTS
    # ========================================================================

    def run(
        self,
        evidence_path: Path,
        lengths_path: Path,
        multiplicity_path: Optional[Path] = None,
    ) -> DistanceEstimationResult:
        """
        Run the pipeline on input files and write reports to the output directory.

        Args:
            evidence_path: barcode/contig end/read pair TSV
            lengths_path: contig length TSV or FASTA index
            multiplicity_path: Optional barcode multiplicity TSV

        Returns:
            DistanceEstimationResult with output file paths filled in
        """
        self.logger.info("=" * 60)
        self.logger.info("Starting GapWeaver distance estimation")
        self.logger.info("=" * 60)

        evidence = load_barcode_evidence(evidence_path)
        contig_lengths = load_contig_lengths(lengths_path)
        if multiplicity_path:
            multiplicity = load_barcode_multiplicity(multiplicity_path)
        else:
            self.logger.info("No multiplicity file given; using contig ends per barcode")
            multiplicity = compute_barcode_multiplicity(evidence)

        result = self.run_on_data(evidence, contig_lengths, multiplicity)

        if self.output_dir:
            result.output_files = self.write_reports(result)
        return result

    def run_on_data(
        self,
        evidence: BarcodeEvidence,
        contig_lengths: ContigLengths,
        multiplicity: BarcodeMultiplicity,
    ) -> DistanceEstimationResult:
        """Run calibration, pair statistics and estimation on in-memory inputs."""
        start = time.time()
        self.logger.info(f"Thresholds: {self.thresholds}")

        dist_samples, pair_stats = self._build_statistics(evidence, contig_lengths, multiplicity)

        if self.estimation_enabled:
            index = CalibrationIndex.build(dist_samples)
        else:
            self.logger.info("Distance estimation disabled")
            index = CalibrationIndex.empty()

        pair_distances = estimate_pair_distances(
            pair_stats, index, self.thresholds,
            small_window_warning=self.small_window_warning,
        )

        self.logger.info(f"Distance estimation finished in {time.time() - start:.2f}s")
        return DistanceEstimationResult(dist_samples, index, pair_stats, pair_distances)

    def write_reports(self, result: DistanceEstimationResult) -> Dict[str, Path]:
        """Write the calibration sample and pair distance TSVs."""
        if not self.output_dir:
            raise ValueError("No output directory configured")

        output_config = self.config.get('output', {})
        prefix = output_config.get('prefix', 'gapweaver')
        output_files = {}

        if output_config.get('write_dist_samples', True):
            output_files['dist_samples'] = write_dist_samples(
                result.dist_samples, self.output_dir / f"{prefix}.dist.tsv"
            )
        output_files['pair_distances'] = write_pair_distances(
            result.pair_distances, self.output_dir / f"{prefix}.pair_distances.tsv"
        )
        return output_files

    # ========================================================================
    #                         STATISTICS
    # ========================================================================

    def _build_statistics(
        self,
        evidence: BarcodeEvidence,
        contig_lengths: ContigLengths,
        multiplicity: BarcodeMultiplicity,
    ) -> Tuple[Dict[str, CalibrationSample], PairStatsMap]:
        args = (contig_lengths, multiplicity, self.thresholds)

        if self.threads <= 1:
            dist_samples = calc_dist_samples(evidence, *args)
            counts = accumulate_pair_counts(evidence, *args)
        else:
            shards = shard_evidence(evidence, self.threads - 1)
            self.logger.info(
                f"Scanning {len(evidence)} barcodes with {self.threads} threads "
                f"({len(shards)} pair shards)"
            )
            with ThreadPoolExecutor(max_workers=self.threads) as executor:
                samples_future = executor.submit(calc_dist_samples, evidence, *args)
                shard_futures = [
                    executor.submit(accumulate_pair_counts, shard, *args) for shard in shards
                ]
                counts = merge_pair_counts(f.result() for f in shard_futures)
                dist_samples = samples_future.result()

        pair_stats = finalize_pair_stats(counts)
        self.logger.info(
            f"{len(dist_samples)} calibration samples, {len(pair_stats)} candidate contig pairs"
        )
        return dist_samples, pair_stats

# GapWeaver v0.1.0
# Any usage is subject to this software's license.
