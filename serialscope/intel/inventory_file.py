import logging
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import ValidationError

from serialscope.exceptions import InventoryError
from serialscope.intel import Collector
from serialscope.intel import RawRecord
from serialscope.rules.posture import detect_oem_vendor
from serialscope.rules.spec.model import PlatformSignals

logger = logging.getLogger(__name__)

# BiosRecord field -> PlatformSignals field
_BIOS_SIGNALS = (
    ("secure_boot", "secure_boot"),
    ("tpm_enabled", "tpm_active"),
    ("core_isolation", "hvci"),
)


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SystemRecord(_Record):
    manufacturer: str | None = None
    product_name: str | None = None
    version: str | None = None
    family: str | None = None
    serial_number: str | None = None
    uuid: str | None = None
    sku: str | None = None


class BaseboardRecord(_Record):
    serial_number: str | None = None
    asset_tag: str | None = None
    manufacturer: str | None = None
    product: str | None = None
    version: str | None = None


class ProcessorRecord(_Record):
    serial_number: str | None = None
    part_number: str | None = None
    manufacturer: str | None = None
    name: str | None = None
    socket: str | None = None
    core_count: int | None = None
    thread_count: int | None = None


class ChassisRecord(_Record):
    serial_number: str | None = None
    asset_tag: str | None = None
    sku: str | None = None
    manufacturer: str | None = None
    chassis_type: int | str | None = None
    """SMBIOS enclosure code or name."""
    version: str | None = None


class BiosRecord(_Record):
    vendor: str | None = None
    version: str | None = None
    release_date: str | None = None
    """Any date string; WMI datetimes are converted to MM/DD/YYYY."""
    core_isolation: bool | None = None
    virtualization: bool | None = None
    secure_boot: bool | None = None
    tpm_enabled: bool | None = None


class DiskRecord(_Record):
    model: str | None = None
    serial: str | None = None
    wwn: str | None = None


class NetworkInterfaceRecord(_Record):
    name: str | None = None
    mac: str | None = None
    ip_address: str | None = None


class MonitorRecord(_Record):
    display_name: str | None = None
    model: str | None = None
    serial: str | None = None
    id_serial: str | None = None
    manufacturer: str | None = None
    resolution: str | None = None


class GpuRecord(_Record):
    name: str | None = None
    pci_device: str | None = None
    guid: str | None = None
    vendor: str | None = None
    vram: int | str | None = None
    """Bytes, or an already formatted size."""


class Inventory(_Record):
    """
    JSON inventory document, e.g. the output of an asset agent.

    Every section and field is optional.
    """

    system: SystemRecord = SystemRecord()
    baseboard: BaseboardRecord = BaseboardRecord()
    processor: ProcessorRecord = ProcessorRecord()
    chassis: ChassisRecord = ChassisRecord()
    bios: BiosRecord = BiosRecord()
    disks: list[DiskRecord] = []
    network_interfaces: list[NetworkInterfaceRecord] = []
    monitors: list[MonitorRecord] = []
    gpus: list[GpuRecord] = []
    platform: PlatformSignals | None = None


class InventoryFileCollector(Collector):
    """
    Reads identity values from a JSON inventory document instead of the live platform.

    :param inventory: The parsed inventory.
    """

    name = "inventory file"

    def __init__(self, inventory: Inventory):
        self.inventory = inventory

    @classmethod
    def from_json(cls, content: str) -> "InventoryFileCollector":
        try:
            return cls(Inventory.model_validate_json(content))
        except ValidationError as e:
            raise InventoryError(f"Invalid inventory document: {e}") from e

    @classmethod
    def from_path(cls, path: str) -> "InventoryFileCollector":
        logger.info("Reading inventory from %s", path)
        try:
            with open(path, encoding="utf-8") as fh:
                content = fh.read()
        except OSError as e:
            raise InventoryError(f"Cannot read inventory {path}: {e}") from e
        return cls.from_json(content)

    def system(self) -> RawRecord:
        return self.inventory.system.model_dump()

    def baseboard(self) -> RawRecord:
        return self.inventory.baseboard.model_dump()

    def processor(self) -> RawRecord:
        return self.inventory.processor.model_dump()

    def chassis(self) -> RawRecord:
        return self.inventory.chassis.model_dump()

    def disks(self) -> list[RawRecord]:
        return [disk.model_dump() for disk in self.inventory.disks]

    def network_interfaces(self) -> list[RawRecord]:
        return [iface.model_dump() for iface in self.inventory.network_interfaces]

    def monitors(self) -> list[RawRecord]:
        return [monitor.model_dump() for monitor in self.inventory.monitors]

    def gpus(self) -> list[RawRecord]:
        return [gpu.model_dump() for gpu in self.inventory.gpus]

    def bios(self) -> RawRecord:
        record = self.inventory.bios.model_dump()
        platform = self.inventory.platform
        if platform is not None:
            # The platform section answers what the BIOS section leaves open.
            for key, signal in _BIOS_SIGNALS:
                if record[key] is None:
                    record[key] = getattr(platform, signal)
        return record

    def platform_signals(self) -> PlatformSignals:
        signals = self.inventory.platform or PlatformSignals()
        update: dict[str, Any] = {}
        if signals.oem_vendor is None:
            # Fall back to the system manufacturer.
            vendor, locked = detect_oem_vendor(self.inventory.system.manufacturer)
            update.update(oem_vendor=vendor, is_tier1_oem=locked)
        elif signals.is_tier1_oem is None:
            _, locked = detect_oem_vendor(signals.oem_vendor)
            update["is_tier1_oem"] = locked
        for key, signal in _BIOS_SIGNALS:
            if getattr(signals, signal) is None:
                value = getattr(self.inventory.bios, key)
                if value is not None:
                    update[signal] = value
        return signals.model_copy(update=update) if update else signals
