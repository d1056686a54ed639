"""
Collectors read identity values from the platform.

Every accessor is best-effort: a value that cannot be read is missing from the
returned mapping (or None), never an exception. `collect_snapshot` runs all raw
values through the placeholder filter before they reach a SnapshotModel.
"""

import logging
import platform

from serialscope.intel.describe import RawRecord
from serialscope.intel.describe import build_details
from serialscope.intel.describe import format_vram
from serialscope.intel.describe import text
from serialscope.models.snapshot import DiskEntry
from serialscope.models.snapshot import GpuEntry
from serialscope.models.snapshot import MonitorEntry
from serialscope.models.snapshot import NetworkInterface
from serialscope.models.snapshot import SnapshotModel
from serialscope.rules.spec.model import PlatformSignals

logger = logging.getLogger(__name__)


class Collector:
    """Source of raw identity values for one machine."""

    name = "collector"

    def system(self) -> RawRecord:
        """Keys: serial_number, uuid, sku, manufacturer, product_name, version, family."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def baseboard(self) -> RawRecord:
        """Keys: serial_number, asset_tag, manufacturer, product, version."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def processor(self) -> RawRecord:
        """Keys: serial_number, part_number, manufacturer, name, socket, core_count, thread_count."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def chassis(self) -> RawRecord:
        """Keys: serial_number, asset_tag, sku, manufacturer, chassis_type, version."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def bios(self) -> RawRecord:
        """
        Keys: vendor, version, release_date, core_isolation, virtualization,
        secure_boot, tpm_enabled.
        """
        raise NotImplementedError("This method should be overridden in subclasses.")

    def disks(self) -> list[RawRecord]:
        """Keys: model, serial, wwn."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def network_interfaces(self) -> list[RawRecord]:
        """Keys: name, mac, ip_address."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def monitors(self) -> list[RawRecord]:
        """Keys: display_name, model, serial, id_serial, manufacturer, resolution."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def gpus(self) -> list[RawRecord]:
        """Keys: name, pci_device, guid, vendor, vram (bytes or a display string)."""
        raise NotImplementedError("This method should be overridden in subclasses.")

    def platform_signals(self) -> PlatformSignals:
        raise NotImplementedError("This method should be overridden in subclasses.")


class NullCollector(Collector):
    """Used where no collector is available: every value is absent."""

    name = "null"

    def system(self) -> RawRecord:
        return {}

    def baseboard(self) -> RawRecord:
        return {}

    def processor(self) -> RawRecord:
        return {}

    def chassis(self) -> RawRecord:
        return {}

    def bios(self) -> RawRecord:
        return {}

    def disks(self) -> list[RawRecord]:
        return []

    def network_interfaces(self) -> list[RawRecord]:
        return []

    def monitors(self) -> list[RawRecord]:
        return []

    def gpus(self) -> list[RawRecord]:
        return []

    def platform_signals(self) -> PlatformSignals:
        return PlatformSignals()


def collect_snapshot(collector: Collector) -> SnapshotModel:
    """Read every category from `collector` and build a normalized snapshot."""
    system = collector.system()
    baseboard = collector.baseboard()
    processor = collector.processor()
    chassis = collector.chassis()

    disks = tuple(
        DiskEntry(
            model=text(disk, "model"),
            storage_query_serial=text(disk, "serial"),
            wwn=text(disk, "wwn"),
        )
        for disk in collector.disks()
    )
    interfaces = tuple(
        NetworkInterface(
            name=text(iface, "name"),
            mac=text(iface, "mac"),
            ip_address=text(iface, "ip_address"),
        )
        for iface in collector.network_interfaces()
    )
    monitors = tuple(
        MonitorEntry(
            display_name=text(monitor, "display_name"),
            model=text(monitor, "model"),
            serial=text(monitor, "serial"),
            id_serial=text(monitor, "id_serial"),
            manufacturer=text(monitor, "manufacturer"),
            resolution=text(monitor, "resolution"),
        )
        for monitor in collector.monitors()
    )
    gpus = tuple(
        GpuEntry(
            name=text(gpu, "name"),
            pci_device=text(gpu, "pci_device"),
            guid=text(gpu, "guid"),
            vendor=text(gpu, "vendor"),
            vram=format_vram(gpu.get("vram")),
        )
        for gpu in collector.gpus()
    )
    details = build_details(collector.bios(), system, baseboard, chassis, processor)

    logger.info(
        "Collected snapshot with %s: %d disk(s), %d interface(s), %d monitor(s), %d GPU(s).",
        collector.name,
        len(disks),
        len(interfaces),
        len(monitors),
        len(gpus),
    )
    return SnapshotModel(
        system_serial=text(system, "serial_number"),
        system_uuid=text(system, "uuid"),
        system_sku=text(system, "sku"),
        baseboard_serial=text(baseboard, "serial_number"),
        baseboard_asset_tag=text(baseboard, "asset_tag"),
        processor_serial=text(processor, "serial_number"),
        processor_part_number=text(processor, "part_number"),
        chassis_serial=text(chassis, "serial_number"),
        chassis_asset_tag=text(chassis, "asset_tag"),
        chassis_sku=text(chassis, "sku"),
        disks=disks,
        network_interfaces=interfaces,
        monitors=monitors,
        gpus=gpus,
        details=details,
    )


def get_default_collector() -> Collector:
    """Pick the collector for the running platform."""
    system = platform.system()
    if system == "Linux":
        from serialscope.intel.linux import LinuxSysfsCollector

        return LinuxSysfsCollector()
    logger.warning(
        "No collector available for %s - identity values will be reported as N/A.",
        system,
    )
    return NullCollector()
