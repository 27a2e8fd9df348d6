"""
Drive Health - Squash S.M.A.R.T. history and annotate drive attribute status.

This package takes a drive with all of its stored S.M.A.R.T. results (newest
first), collapses them into the latest result plus per-attribute history, and
marks each ATA attribute as passed, warning or failed.

Features:
- Generic history squashing for ATA, NVMe and SCSI attributes
- Observed failure-rate thresholds for ATA attributes
- Configuration via YAML with environment variable overrides
- Structured logging (JSON for production, text for development)
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
