"""Device model and its response envelope."""

from datetime import datetime
from typing import TYPE_CHECKING, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .collector import CollectorSmartInfo
from .enums import DeviceProtocol
from .smart import Smart

if TYPE_CHECKING:
    from drive_health.analysis.thresholds import AtaAttributeMetadata


class Device(BaseModel):
    """A physical drive and its S.M.A.R.T. results.

    ``smart_results`` is ordered newest first. Once history has been squashed
    it holds at most one result, with older readings moved onto each
    attribute's ``history``.
    """

    model_config = ConfigDict(from_attributes=True)

    wwn: str = Field(..., frozen=True, description="World Wide Name, unique per drive")

    created_at: Optional[datetime] = Field(default=None)
    updated_at: Optional[datetime] = Field(default=None)
    deleted_at: Optional[datetime] = Field(default=None)

    device_name: str = Field(default="", description="Kernel device name, e.g. 'sda'")
    manufacturer: str = Field(default="")
    model_name: str = Field(default="")
    interface_type: str = Field(default="")
    interface_speed: str = Field(default="")
    serial_number: str = Field(default="")
    firmware: str = Field(default="")
    rotation_speed: int = Field(default=0)
    capacity: int = Field(default=0, description="Capacity in bytes")
    form_factor: str = Field(default="")
    smart_support: bool = Field(default=False)
    device_protocol: str = Field(default="", description="ATA, SCSI or NVMe")
    device_type: str = Field(default="", description="smartctl -d type used when querying")

    smart_results: List[Smart] = Field(default_factory=list)

    @property
    def is_ata(self) -> bool:
        return self.device_protocol == DeviceProtocol.ATA.value

    @property
    def is_scsi(self) -> bool:
        return self.device_protocol == DeviceProtocol.SCSI.value

    @property
    def is_nvme(self) -> bool:
        return self.device_protocol == DeviceProtocol.NVME.value

    def squash_history(self) -> None:
        """Keep only the latest result and move older readings into history."""
        from drive_health.analysis.history import squash_history

        squash_history(self)

    def apply_metadata_rules(
        self, metadata: Optional[Mapping[int, "AtaAttributeMetadata"]] = None
    ) -> None:
        """Annotate the latest ATA attributes with passed/warn/failed status.

        Args:
            metadata: ATA metadata table. Defaults to DEFAULT_ATA_METADATA.
        """
        from drive_health.analysis.annotator import ThresholdAnnotator

        ThresholdAnnotator(metadata).apply_metadata_rules(self)

    def update_from_collector(self, info: CollectorSmartInfo) -> None:
        """Refresh device fields from a collector payload.

        The vendor only overwrites ``manufacturer`` when the collector
        reported one, so a previously known name is kept.
        """
        self.interface_speed = info.interface_speed
        self.firmware = info.firmware_version
        self.rotation_speed = info.rotation_rate
        self.capacity = info.capacity_bytes
        self.form_factor = info.form_factor
        self.device_protocol = info.protocol
        self.device_type = info.device_type
        if info.vendor:
            self.manufacturer = info.vendor


class DeviceWrapper(BaseModel):
    """Envelope used when returning devices to API callers."""

    success: bool = Field(default=True)
    errors: List[str] = Field(default_factory=list)
    data: List[Device] = Field(default_factory=list)
