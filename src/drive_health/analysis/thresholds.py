"""ATA attribute metadata and observed failure-rate thresholds.

Each metadata entry describes one ATA attribute and, for attributes where
fleet data exists, a list of value buckets with the annual failure rate
observed for drives reporting a value in that bucket. The table is static,
read-only data keyed by ATA attribute id.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from drive_health.models.enums import AttributeStatus
from drive_health.models.smart import SmartAtaAttribute

DISPLAY_TYPE_RAW = "raw"
DISPLAY_TYPE_NORMALIZED = "normalized"
DISPLAY_TYPE_TRANSFORMED = "transformed"


@dataclass(frozen=True)
class FailureRateThresholds:
    """Annual failure rate cut-offs used by the observed-threshold rule.

    Critical attributes fail at ``warning``. Non-critical attributes warn at
    ``warning`` and fail at ``failure``.

    Attributes:
        warning: Annual failure rate that triggers a warning (fraction)
        failure: Annual failure rate that triggers a failure (fraction)
    """

    warning: float = 0.10
    failure: float = 0.20


DEFAULT_FAILURE_RATES = FailureRateThresholds()


@dataclass(frozen=True)
class ObservedThreshold:
    """One value bucket and the annual failure rate observed for it.

    A bucket matches ``value`` when ``low == high == value`` or when
    ``low < value <= high``.
    """

    low: int
    high: int
    annual_failure_rate: float

    def contains(self, value: int) -> bool:
        if self.low == self.high:
            return value == self.low
        return self.low < value <= self.high


@dataclass(frozen=True)
class AtaAttributeMetadata:
    """Static description of an ATA attribute.

    Attributes:
        attribute_id: ATA attribute id
        display_name: Human-readable attribute name
        ideal: Which direction is healthy ("low", "high" or "")
        critical: Whether the attribute is a strong failure predictor
        description: What the attribute measures
        display_type: Which attribute value is classified (raw/normalized/transformed)
        observed_thresholds: Value buckets with observed annual failure rates
    """

    attribute_id: int
    display_name: str
    ideal: str = ""
    critical: bool = False
    description: str = ""
    display_type: str = DISPLAY_TYPE_RAW
    observed_thresholds: Tuple[ObservedThreshold, ...] = field(default_factory=tuple)

    def value_for(self, attribute: SmartAtaAttribute) -> int:
        """Pick the attribute value this metadata classifies."""
        if self.display_type == DISPLAY_TYPE_NORMALIZED:
            return attribute.value
        if self.display_type == DISPLAY_TYPE_TRANSFORMED:
            return attribute.transformed_value
        return attribute.raw_value

    def observed_threshold_status(
        self,
        attribute: SmartAtaAttribute,
        rates: FailureRateThresholds = DEFAULT_FAILURE_RATES,
    ) -> None:
        """Classify the attribute's current value against observed thresholds.

        Records the bucket's failure rate on the attribute and sets its
        status and reason. Attributes without observed thresholds are only
        touched when critical, since a critical attribute we cannot place in
        a bucket is itself worth a warning.

        Args:
            attribute: The latest reading of this attribute
            rates: Failure rate cut-offs
        """
        if not self.observed_thresholds and not self.critical:
            return

        value = self.value_for(attribute)
        for bucket in self.observed_thresholds:
            if not bucket.contains(value):
                continue

            afr = bucket.annual_failure_rate
            attribute.failure_rate = afr

            if self.critical and afr >= rates.warning:
                attribute.status = AttributeStatus.FAILED
                attribute.status_reason = (
                    "Observed Failure Rate for Critical Attribute is greater than "
                    f"{rates.warning:.0%}"
                )
            elif not self.critical and afr >= rates.failure:
                attribute.status = AttributeStatus.FAILED
                attribute.status_reason = (
                    f"Observed Failure Rate for Attribute is greater than {rates.failure:.0%}"
                )
            elif not self.critical and afr >= rates.warning:
                attribute.status = AttributeStatus.WARNING
                attribute.status_reason = (
                    f"Observed Failure Rate for Attribute is greater than {rates.warning:.0%}"
                )
            else:
                attribute.status = AttributeStatus.PASSED
                attribute.status_reason = ""
            return

        # Value fell outside every bucket
        if self.critical:
            attribute.status = AttributeStatus.WARNING
            attribute.status_reason = (
                "Could not determine Observed Failure Rate for Critical Attribute"
            )


def _buckets(*rows: Tuple[int, int, float]) -> Tuple[ObservedThreshold, ...]:
    return tuple(ObservedThreshold(low, high, afr) for low, high, afr in rows)


_ATA_METADATA: Dict[int, AtaAttributeMetadata] = {
    5: AtaAttributeMetadata(
        attribute_id=5,
        display_name="Reallocated Sectors Count",
        ideal="low",
        critical=True,
        description=(
            "Count of reallocated sectors. When the drive finds a read/write "
            "error it marks the sector as reallocated and moves the data to a "
            "spare area."
        ),
        observed_thresholds=_buckets(
            (0, 0, 0.025),
            (0, 4, 0.034),
            (4, 16, 0.054),
            (16, 70, 0.079),
            (70, 260, 0.116),
            (260, 1100, 0.195),
            (1100, 4500, 0.241),
            (4500, 17000, 0.314),
            (17000, 70000, 0.432),
        ),
    ),
    9: AtaAttributeMetadata(
        attribute_id=9,
        display_name="Power-On Hours",
        description="Count of hours in power-on state.",
    ),
    10: AtaAttributeMetadata(
        attribute_id=10,
        display_name="Spin Retry Count",
        ideal="low",
        critical=True,
        description="Count of retries of spin start attempts.",
        observed_thresholds=_buckets(
            (0, 0, 0.050),
            (0, 80, 0.513),
        ),
    ),
    12: AtaAttributeMetadata(
        attribute_id=12,
        display_name="Power Cycle Count",
        ideal="low",
        description="Count of full hard disk power on/off cycles.",
    ),
    184: AtaAttributeMetadata(
        attribute_id=184,
        display_name="End-to-End Error",
        ideal="low",
        critical=True,
        description=(
            "Count of parity errors in the data path between the drive cache "
            "and the media."
        ),
        observed_thresholds=_buckets(
            (0, 0, 0.028),
            (0, 3, 0.112),
            (3, 6, 0.207),
        ),
    ),
    187: AtaAttributeMetadata(
        attribute_id=187,
        display_name="Reported Uncorrectable Errors",
        ideal="low",
        critical=True,
        description="Count of errors that could not be recovered using hardware ECC.",
        observed_thresholds=_buckets(
            (0, 0, 0.028),
            (0, 1, 0.073),
            (1, 2, 0.091),
            (2, 4, 0.139),
            (4, 8, 0.202),
            (8, 16, 0.298),
            (16, 35, 0.396),
            (35, 70, 0.450),
            (70, 130, 0.505),
            (130, 260, 0.602),
        ),
    ),
    188: AtaAttributeMetadata(
        attribute_id=188,
        display_name="Command Timeout",
        ideal="low",
        critical=True,
        description="Count of aborted operations due to drive timeout.",
        observed_thresholds=_buckets(
            (0, 0, 0.024),
            (0, 13, 0.035),
            (13, 26, 0.061),
            (26, 39, 0.093),
            (39, 13000000000, 0.141),
        ),
    ),
    194: AtaAttributeMetadata(
        attribute_id=194,
        display_name="Temperature",
        description="Current internal temperature in Celsius.",
        display_type=DISPLAY_TYPE_TRANSFORMED,
    ),
    196: AtaAttributeMetadata(
        attribute_id=196,
        display_name="Reallocation Event Count",
        ideal="low",
        critical=True,
        description="Count of remap operations, successful or not.",
        observed_thresholds=_buckets(
            (0, 0, 0.025),
            (0, 1, 0.051),
            (1, 2, 0.063),
            (2, 6, 0.152),
            (6, 14, 0.204),
        ),
    ),
    197: AtaAttributeMetadata(
        attribute_id=197,
        display_name="Current Pending Sector Count",
        ideal="low",
        critical=True,
        description=(
            "Count of unstable sectors waiting to be remapped because of "
            "unrecoverable read errors."
        ),
        observed_thresholds=_buckets(
            (0, 0, 0.025),
            (0, 2, 0.104),
            (2, 6, 0.150),
            (6, 16, 0.201),
            (16, 40, 0.303),
            (40, 100, 0.401),
        ),
    ),
    198: AtaAttributeMetadata(
        attribute_id=198,
        display_name="Offline Uncorrectable Sector Count",
        ideal="low",
        critical=True,
        description="Count of uncorrectable errors found during offline scans.",
        observed_thresholds=_buckets(
            (0, 0, 0.028),
            (0, 2, 0.121),
            (2, 4, 0.164),
            (4, 6, 0.203),
            (6, 8, 0.302),
            (8, 10, 0.455),
        ),
    ),
}

# Default table for production use, read-only
DEFAULT_ATA_METADATA: Mapping[int, AtaAttributeMetadata] = MappingProxyType(_ATA_METADATA)
