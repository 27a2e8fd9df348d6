"""History squashing and threshold annotation for drive S.M.A.R.T. data."""

from drive_health.analysis.annotator import ThresholdAnnotator
from drive_health.analysis.engine import HealthEngine
from drive_health.analysis.history import group_history, squash_history
from drive_health.analysis.thresholds import (
    DEFAULT_ATA_METADATA,
    DEFAULT_FAILURE_RATES,
    AtaAttributeMetadata,
    FailureRateThresholds,
    ObservedThreshold,
)

__all__ = [
    "AtaAttributeMetadata",
    "DEFAULT_ATA_METADATA",
    "DEFAULT_FAILURE_RATES",
    "FailureRateThresholds",
    "HealthEngine",
    "ObservedThreshold",
    "ThresholdAnnotator",
    "group_history",
    "squash_history",
]
