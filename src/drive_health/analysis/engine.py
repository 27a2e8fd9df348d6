"""Processing engine that prepares drives for display."""

from typing import TYPE_CHECKING, List, Mapping, Optional

from drive_health.analysis.annotator import ThresholdAnnotator
from drive_health.analysis.history import squash_history
from drive_health.analysis.thresholds import AtaAttributeMetadata, FailureRateThresholds
from drive_health.logging import get_logger
from drive_health.models.device import Device

if TYPE_CHECKING:
    from drive_health.config.settings import DriveHealthSettings

logger = get_logger(__name__)


class HealthEngine:
    """Squashes history and applies metadata rules, in that order.

    Each Device is mutated in place. Devices share no state, so callers may
    process different devices in parallel as long as no device is handled
    by two workers at once.

    Usage:
        engine = HealthEngine.from_settings(get_config())
        devices = engine.process_devices(devices)
    """

    def __init__(
        self,
        metadata: Optional[Mapping[int, AtaAttributeMetadata]] = None,
        rates: Optional[FailureRateThresholds] = None,
    ):
        self._annotator = ThresholdAnnotator(metadata, rates)

    @classmethod
    def from_settings(
        cls,
        settings: "DriveHealthSettings",
        metadata: Optional[Mapping[int, AtaAttributeMetadata]] = None,
    ) -> "HealthEngine":
        """Build an engine using the failure rate cut-offs from settings."""
        rates = FailureRateThresholds(
            warning=settings.warning_failure_rate,
            failure=settings.critical_failure_rate,
        )
        return cls(metadata=metadata, rates=rates)

    @property
    def annotator(self) -> ThresholdAnnotator:
        """Get the threshold annotator."""
        return self._annotator

    def process_device(self, device: Device) -> Device:
        """Squash history then annotate a single device.

        Args:
            device: Device with smart_results ordered newest first

        Returns:
            The same Device, mutated in place
        """
        squash_history(device)
        self._annotator.apply_metadata_rules(device)
        return device

    def process_devices(self, devices: List[Device]) -> List[Device]:
        """Process several devices sequentially.

        Args:
            devices: Devices to process

        Returns:
            The same devices, in the same order
        """
        for device in devices:
            self.process_device(device)
        logger.info("devices_processed", count=len(devices))
        return devices
