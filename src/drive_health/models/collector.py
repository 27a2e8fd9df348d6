"""Collector payload model.

The collector runs ``smartctl --json`` on each host and ships the device info
section to us. Only the fields used to refresh a Device are modeled here.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CollectorSmartInfo(BaseModel):
    """Flattened device info reported by the collector."""

    model_config = ConfigDict(from_attributes=True)

    interface_speed: str = Field(default="", description="Current link speed, e.g. '6.0 Gb/s'")
    firmware_version: str = Field(default="")
    rotation_rate: int = Field(default=0, description="RPM, 0 for solid state")
    capacity_bytes: int = Field(default=0, description="User capacity in bytes")
    form_factor: str = Field(default="", description="Form factor name, e.g. '3.5 inches'")
    protocol: str = Field(default="", description="ATA, SCSI or NVMe")
    device_type: str = Field(default="", description="smartctl -d type, e.g. 'sat'")
    vendor: Optional[str] = Field(default=None, description="Vendor string, if reported")

    @classmethod
    def from_smartctl_json(cls, response: Dict[str, Any]) -> "CollectorSmartInfo":
        """Factory for creating CollectorSmartInfo from raw ``smartctl --json`` output.

        Args:
            response: Parsed smartctl JSON document

        Returns:
            CollectorSmartInfo with the nested fields flattened
        """
        interface_speed = response.get("interface_speed") or {}
        current_speed = interface_speed.get("current") or {}
        user_capacity = response.get("user_capacity") or {}
        form_factor = response.get("form_factor") or {}
        device = response.get("device") or {}

        return cls(
            interface_speed=current_speed.get("string", ""),
            firmware_version=response.get("firmware_version", ""),
            rotation_rate=response.get("rotation_rate", 0),
            capacity_bytes=user_capacity.get("bytes", 0),
            form_factor=form_factor.get("name", ""),
            protocol=device.get("protocol", ""),
            device_type=device.get("type", ""),
            vendor=response.get("vendor"),
        )
