"""Annotate a drive's latest ATA attributes with passed/warn/failed status."""

from typing import Mapping, Optional

from drive_health.analysis.thresholds import (
    DEFAULT_ATA_METADATA,
    DEFAULT_FAILURE_RATES,
    AtaAttributeMetadata,
    FailureRateThresholds,
)
from drive_health.logging import get_logger
from drive_health.models.device import Device
from drive_health.models.enums import AttributeStatus, WhenFailed
from drive_health.models.smart import SmartAtaAttribute

logger = get_logger(__name__)

FAILING_NOW_REASON = "Attribute is failing manufacturer SMART threshold"
FAILED_IN_PAST_REASON = "Attribute has previously failed manufacturer SMART threshold"


class ThresholdAnnotator:
    """Assigns status to the ATA attributes of a drive's latest result.

    For each attribute, in order:
      1. the when_failed indicator marks it failed (failing now) or warn
         (failed in the past)
      2. the metadata rule for its id, if any, classifies the current value
         and may overwrite step 1
      3. anything still unset is marked passed

    Usage:
        annotator = ThresholdAnnotator()
        annotator.apply_metadata_rules(device)
    """

    def __init__(
        self,
        metadata: Optional[Mapping[int, AtaAttributeMetadata]] = None,
        rates: Optional[FailureRateThresholds] = None,
    ):
        """Initialize the annotator.

        Args:
            metadata: ATA metadata table keyed by attribute id.
                      Defaults to DEFAULT_ATA_METADATA.
            rates: Failure rate cut-offs. Defaults to DEFAULT_FAILURE_RATES.
        """
        self._metadata = DEFAULT_ATA_METADATA if metadata is None else metadata
        self._rates = rates or DEFAULT_FAILURE_RATES

    def apply_metadata_rules(self, device: Device) -> None:
        """Annotate the latest result's ATA attributes in place.

        Observed thresholds are not available for NVMe or SCSI drives, so
        those are left untouched.

        Args:
            device: Device whose history has already been squashed
        """
        if not device.is_ata:
            logger.debug(
                "metadata_rules_skipped",
                wwn=device.wwn,
                device_protocol=device.device_protocol,
            )
            return

        if not device.smart_results:
            return

        attributes = device.smart_results[0].ata_attributes
        for attribute in attributes:
            self.annotate_attribute(attribute)

        logger.debug(
            "metadata_rules_applied",
            wwn=device.wwn,
            attributes=len(attributes),
            failed=sum(1 for a in attributes if a.status == AttributeStatus.FAILED),
            warnings=sum(1 for a in attributes if a.status == AttributeStatus.WARNING),
        )

    def annotate_attribute(self, attribute: SmartAtaAttribute) -> None:
        """Set status and reason on a single ATA attribute."""
        if attribute.when_failed == WhenFailed.FAILING_NOW:
            attribute.status = AttributeStatus.FAILED
            attribute.status_reason = FAILING_NOW_REASON
        elif attribute.when_failed == WhenFailed.IN_THE_PAST:
            attribute.status = AttributeStatus.WARNING
            attribute.status_reason = FAILED_IN_PAST_REASON

        metadata = self._metadata.get(attribute.attribute_id)
        if metadata is not None:
            metadata.observed_threshold_status(attribute, self._rates)

        if attribute.status == AttributeStatus.UNSET:
            attribute.status = AttributeStatus.PASSED
            attribute.status_reason = ""
