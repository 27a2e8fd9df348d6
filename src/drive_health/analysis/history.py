"""Squash a drive's stored S.M.A.R.T. results into per-attribute history.

Given a Device whose ``smart_results`` are ordered newest first, keep only the
latest result and attach every older reading of each attribute to that
attribute's ``history`` list. The same grouping is applied to ATA, NVMe and
SCSI attributes; only the key type differs.
"""

from operator import attrgetter
from typing import Callable, Dict, Hashable, Iterable, List, Protocol, TypeVar

from drive_health.logging import get_logger
from drive_health.models.device import Device
from drive_health.models.smart import Smart

logger = get_logger(__name__)


class HistoryAttribute(Protocol):
    """Anything keyed by ``attribute_id`` with a ``history`` slot."""

    attribute_id: Hashable
    history: list


A = TypeVar("A", bound=HistoryAttribute)

# Attribute collections on a Smart result, squashed independently
ATTRIBUTE_COLLECTIONS = ("ata_attributes", "nvme_attributes", "scsi_attributes")


def group_history(
    historical: Iterable[Smart], collection: Callable[[Smart], List[A]]
) -> Dict[Hashable, List[A]]:
    """Group historical readings by attribute id.

    Args:
        historical: Older Smart results, newest first
        collection: Selects the attribute list to group from each result

    Returns:
        Mapping of attribute id to its readings, in the order of ``historical``
    """
    grouped: Dict[Hashable, List[A]] = {}
    for smart in historical:
        for attribute in collection(smart):
            grouped.setdefault(attribute.attribute_id, []).append(attribute)
    return grouped


def attach_history(latest: List[A], grouped: Dict[Hashable, List[A]]) -> None:
    """Assign grouped readings to the matching latest attributes.

    Attributes with no older readings are left with their (empty) history.
    """
    for attribute in latest:
        readings = grouped.get(attribute.attribute_id)
        if readings:
            attribute.history = readings


def squash_history(device: Device) -> None:
    """Keep the latest Smart result and move older readings into history.

    No-op when the device has zero or one result, so calling it again on a
    squashed device changes nothing. Results are not re-sorted.

    Args:
        device: Device with ``smart_results`` ordered newest first
    """
    if len(device.smart_results) <= 1:
        return

    latest, historical = device.smart_results[0], device.smart_results[1:]
    device.smart_results = [latest]

    for name in ATTRIBUTE_COLLECTIONS:
        collection = attrgetter(name)
        latest_attributes = collection(latest)
        if not latest_attributes:
            continue
        attach_history(latest_attributes, group_history(historical, collection))

    logger.debug(
        "history_squashed",
        wwn=device.wwn,
        historical_results=len(historical),
    )
