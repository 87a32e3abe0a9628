"""
Utilities module for GapWeaver.

- Pipeline orchestration for a single distance estimation pass
"""

from .pipeline import (
    DistanceEstimationPipeline,
    DistanceEstimationResult,
    shard_evidence,
)

__all__ = [
    "DistanceEstimationPipeline",
    "DistanceEstimationResult",
    "shard_evidence",
]
