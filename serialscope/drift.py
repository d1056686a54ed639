import logging
from dataclasses import dataclass
from enum import Enum

from serialscope.models.baseline import BaselineSnapshot
from serialscope.models.snapshot import SnapshotModel
from serialscope.models.status import DIFFERENT_FROM_PREVIOUS
from serialscope.models.status import SerialStatus
from serialscope.normalize import is_available

logger = logging.getLogger(__name__)


class CategoryKind(str, Enum):
    SCALAR = "scalar"
    LIST = "list"


class Category(str, Enum):
    """Identity values that can be compared against a baseline."""

    SYSTEM_SERIAL = "system_serial"
    SYSTEM_UUID = "system_uuid"
    SYSTEM_SKU = "system_sku"
    BASEBOARD_SERIAL = "baseboard_serial"
    PROCESSOR_SERIAL = "processor_serial"
    CHASSIS_SERIAL = "chassis_serial"
    DISK = "disk"
    NETWORK = "network"
    MONITOR = "monitor"
    GPU = "gpu"

    @property
    def kind(self) -> CategoryKind:
        return _CATEGORY_FIELDS[self][0]

    @property
    def baseline_field(self) -> str:
        """Attribute of BaselineSnapshot holding this category."""
        return _CATEGORY_FIELDS[self][1]


_CATEGORY_FIELDS: dict[Category, tuple[CategoryKind, str]] = {
    Category.SYSTEM_SERIAL: (CategoryKind.SCALAR, "system_serial"),
    Category.SYSTEM_UUID: (CategoryKind.SCALAR, "system_uuid"),
    Category.SYSTEM_SKU: (CategoryKind.SCALAR, "system_sku"),
    Category.BASEBOARD_SERIAL: (CategoryKind.SCALAR, "baseboard_serial"),
    Category.PROCESSOR_SERIAL: (CategoryKind.SCALAR, "processor_serial"),
    Category.CHASSIS_SERIAL: (CategoryKind.SCALAR, "chassis_serial"),
    Category.DISK: (CategoryKind.LIST, "disk_serials"),
    Category.NETWORK: (CategoryKind.LIST, "network_macs"),
    Category.MONITOR: (CategoryKind.LIST, "monitor_serials"),
    Category.GPU: (CategoryKind.LIST, "gpu_guids"),
}

SCALAR_LABELS: dict[Category, str] = {
    Category.SYSTEM_SERIAL: "System Serial",
    Category.SYSTEM_UUID: "System UUID",
    Category.SYSTEM_SKU: "System SKU",
    Category.BASEBOARD_SERIAL: "Baseboard Serial",
    Category.PROCESSOR_SERIAL: "Processor Serial",
    Category.CHASSIS_SERIAL: "Chassis Serial",
}


@dataclass(frozen=True)
class FieldDrift:
    """One row of a drift report."""

    category: Category
    label: str
    current: str
    status: SerialStatus


def _as_category(category: Category | str, kind: CategoryKind) -> Category:
    resolved = Category(category)
    if resolved.kind != kind:
        raise ValueError(
            f"Category '{resolved.value}' is a {resolved.kind.value} category, "
            f"not a {kind.value} one"
        )
    return resolved


class DriftComparator:
    """
    Compares live identity values with a baseline recovered from an export.

    :type baseline: BaselineSnapshot
    :param baseline: The previously exported values.
    """

    def __init__(self, baseline: BaselineSnapshot):
        self.baseline = baseline

    def compare_scalar(self, category: Category | str, current: str) -> SerialStatus:
        resolved = _as_category(category, CategoryKind.SCALAR)
        if not is_available(current):
            return SerialStatus.new()

        previous: str | None = getattr(self.baseline, resolved.baseline_field)
        if previous is None:
            return SerialStatus.new()
        if previous == current:
            return SerialStatus.unchanged()
        return SerialStatus.changed(previous)

    def compare_list(self, category: Category | str, current: str) -> SerialStatus:
        """
        Check whether `current` appears anywhere in the baseline list.

        List entries have no stable identity across runs, so a mismatch cannot
        name the value it replaced.
        """
        resolved = _as_category(category, CategoryKind.LIST)
        if not is_available(current):
            return SerialStatus.new()

        previous: tuple[str, ...] = getattr(self.baseline, resolved.baseline_field)
        if not previous:
            return SerialStatus.new()
        if current in previous:
            return SerialStatus.unchanged()
        return SerialStatus.changed(DIFFERENT_FROM_PREVIOUS)

    def compare(self, category: Category | str, current: str) -> SerialStatus:
        """Route to `compare_scalar` or `compare_list` based on the category."""
        resolved = Category(category)
        if resolved.kind == CategoryKind.SCALAR:
            return self.compare_scalar(resolved, current)
        return self.compare_list(resolved, current)

    def compare_snapshot(self, snapshot: SnapshotModel) -> list[FieldDrift]:
        """
        Build the drift report for a whole snapshot.

        Scalars come first in category order, then one row per disk serial,
        MAC address, monitor serial and GPU GUID.
        """
        report: list[FieldDrift] = []

        for category, label in SCALAR_LABELS.items():
            current = getattr(snapshot, category.value)
            report.append(
                FieldDrift(category, label, current, self.compare_scalar(category, current))
            )

        list_rows: list[tuple[Category, str, str]] = []
        list_rows += [
            (Category.DISK, f"Disk {idx} ({disk.model})", disk.storage_query_serial)
            for idx, disk in enumerate(snapshot.disks, start=1)
        ]
        list_rows += [
            (Category.NETWORK, iface.name, iface.mac)
            for iface in snapshot.network_interfaces
        ]
        list_rows += [
            (Category.MONITOR, f"{monitor.display_name} ({monitor.model})", monitor.serial)
            for monitor in snapshot.monitors
        ]
        list_rows += [(Category.GPU, gpu.name, gpu.guid) for gpu in snapshot.gpus]

        for category, label, current in list_rows:
            report.append(
                FieldDrift(category, label, current, self.compare_list(category, current))
            )

        changed = sum(1 for row in report if row.status.is_changed)
        logger.debug("Compared %d values, %d changed.", len(report), changed)
        return report
