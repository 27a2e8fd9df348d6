"""S.M.A.R.T. result and attribute models.

A Smart result is one point-in-time health read of a drive. Depending on the
drive's protocol it carries exactly one populated attribute collection: ATA
attributes keyed by integer id, or NVMe / SCSI attributes keyed by string id.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import AttributeStatus, WhenFailed


class SmartAtaAttribute(BaseModel):
    """A single ATA S.M.A.R.T. attribute reading."""

    model_config = ConfigDict(from_attributes=True, validate_assignment=True)

    attribute_id: int = Field(..., description="ATA attribute id, e.g. 5 for Reallocated_Sector_Ct")
    name: str = Field(default="", description="smartctl attribute name")
    value: int = Field(default=0, description="Normalized value")
    worst: int = Field(default=0, description="Worst normalized value seen")
    thresh: int = Field(default=0, description="Manufacturer normalized threshold")
    raw_value: int = Field(default=0, description="Raw value")
    raw_string: str = Field(default="", description="Raw value as printed by smartctl")
    when_failed: WhenFailed = Field(
        default=WhenFailed.NONE, description="Decoded when_failed indicator"
    )
    transformed_value: int = Field(
        default=0, description="Raw value after vendor-specific transformation"
    )

    status: AttributeStatus = Field(default=AttributeStatus.UNSET)
    status_reason: str = Field(default="")
    failure_rate: Optional[float] = Field(
        default=None, description="Observed annual failure rate for the current value"
    )
    history: List["SmartAtaAttribute"] = Field(default_factory=list)

    @field_validator("when_failed", mode="before")
    @classmethod
    def decode_when_failed(cls, v: object) -> WhenFailed:
        """Decode free-text when_failed once, at ingestion."""
        return WhenFailed.decode(v)


class SmartNvmeAttribute(BaseModel):
    """A single NVMe health log entry."""

    model_config = ConfigDict(from_attributes=True)

    attribute_id: str = Field(..., description="NVMe field name, e.g. 'media_errors'")
    name: str = Field(default="")
    value: int = Field(default=0)
    threshold: int = Field(default=0)

    status: AttributeStatus = Field(default=AttributeStatus.UNSET)
    status_reason: str = Field(default="")
    history: List["SmartNvmeAttribute"] = Field(default_factory=list)


class SmartScsiAttribute(BaseModel):
    """A single SCSI error counter or health field."""

    model_config = ConfigDict(from_attributes=True)

    attribute_id: str = Field(..., description="SCSI field name, e.g. 'read_total_uncorrected_errors'")
    name: str = Field(default="")
    value: int = Field(default=0)
    threshold: int = Field(default=0)

    status: AttributeStatus = Field(default=AttributeStatus.UNSET)
    status_reason: str = Field(default="")
    history: List["SmartScsiAttribute"] = Field(default_factory=list)


class Smart(BaseModel):
    """One timestamped S.M.A.R.T. result for a drive."""

    model_config = ConfigDict(from_attributes=True)

    date: datetime = Field(..., description="When smartctl captured this result")
    device_wwn: str = Field(default="", description="WWN of the owning drive")
    device_protocol: str = Field(default="", description="ATA, SCSI or NVMe")

    temp: Optional[int] = Field(default=None, description="Drive temperature in Celsius")
    power_on_hours: Optional[int] = Field(default=None)
    power_cycle_count: Optional[int] = Field(default=None)

    ata_attributes: List[SmartAtaAttribute] = Field(default_factory=list)
    nvme_attributes: List[SmartNvmeAttribute] = Field(default_factory=list)
    scsi_attributes: List[SmartScsiAttribute] = Field(default_factory=list)
