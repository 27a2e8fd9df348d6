"""Data models for Drive Health."""

from .collector import CollectorSmartInfo
from .device import Device, DeviceWrapper
from .enums import AttributeStatus, DeviceProtocol, WhenFailed
from .smart import Smart, SmartAtaAttribute, SmartNvmeAttribute, SmartScsiAttribute

__all__ = [
    "AttributeStatus",
    "CollectorSmartInfo",
    "Device",
    "DeviceProtocol",
    "DeviceWrapper",
    "Smart",
    "SmartAtaAttribute",
    "SmartNvmeAttribute",
    "SmartScsiAttribute",
    "WhenFailed",
]
