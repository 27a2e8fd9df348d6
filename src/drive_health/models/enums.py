"""Shared enumerations for the Drive Health models."""

from enum import Enum


class DeviceProtocol(str, Enum):
    """Protocol a drive speaks, as reported by the collector."""

    ATA = "ATA"
    SCSI = "SCSI"
    NVME = "NVMe"


class AttributeStatus(str, Enum):
    """Status assigned to a S.M.A.R.T. attribute."""

    UNSET = ""
    PASSED = "passed"
    WARNING = "warn"
    FAILED = "failed"


class WhenFailed(str, Enum):
    """Decoded form of smartctl's free-text when_failed column."""

    NONE = ""
    FAILING_NOW = "FAILING_NOW"
    IN_THE_PAST = "IN_THE_PAST"
    UNRECOGNIZED = "UNRECOGNIZED"

    @classmethod
    def decode(cls, value: object) -> "WhenFailed":
        """Decode a raw when_failed value (case-insensitive).

        Empty or missing values decode to NONE. Anything that is not one of
        the known sentinels decodes to UNRECOGNIZED.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        text = str(value).strip().upper()
        if not text:
            return cls.NONE
        if text == cls.FAILING_NOW.value:
            return cls.FAILING_NOW
        if text == cls.IN_THE_PAST.value:
            return cls.IN_THE_PAST
        return cls.UNRECOGNIZED
