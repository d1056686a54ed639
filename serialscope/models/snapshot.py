from dataclasses import dataclass
from dataclasses import field

from serialscope.models.details import HardwareDetails
from serialscope.normalize import SENTINEL


@dataclass(frozen=True)
class DiskEntry:
    model: str = SENTINEL
    """Drive model as reported by the storage stack."""
    storage_query_serial: str = SENTINEL
    """Serial number returned by the storage property query."""
    wwn: str = SENTINEL
    """World Wide Name or other unique disk id."""


@dataclass(frozen=True)
class NetworkInterface:
    name: str = SENTINEL
    mac: str = SENTINEL
    ip_address: str = SENTINEL
    """First IPv4 address, descriptive only."""


@dataclass(frozen=True)
class MonitorEntry:
    display_name: str = SENTINEL
    """OS display name, e.g. `\\DISPLAY1`."""
    model: str = SENTINEL
    serial: str = SENTINEL
    """Serial number decoded from the EDID."""
    id_serial: str = SENTINEL
    """Identifier the OS uses for the monitor (PnP id or connector name)."""
    manufacturer: str = SENTINEL
    resolution: str = SENTINEL
    """Preferred mode, e.g. `3840x2160`."""


@dataclass(frozen=True)
class GpuEntry:
    name: str = SENTINEL
    pci_device: str = SENTINEL
    """PCI device path of the adapter."""
    guid: str = SENTINEL
    vendor: str = SENTINEL
    vram: str = SENTINEL
    """Dedicated video memory, e.g. `8 GB`."""


@dataclass(frozen=True)
class SnapshotModel:
    """
    One full set of normalized identity values collected at a point in time.

    Every string is either a real value or the `N/A` sentinel.
    `details` carries descriptive values that are shown but never exported or
    compared.
    """

    system_serial: str = SENTINEL
    system_uuid: str = SENTINEL
    system_sku: str = SENTINEL
    baseboard_serial: str = SENTINEL
    baseboard_asset_tag: str = SENTINEL
    processor_serial: str = SENTINEL
    processor_part_number: str = SENTINEL
    chassis_serial: str = SENTINEL
    chassis_asset_tag: str = SENTINEL
    chassis_sku: str = SENTINEL
    disks: tuple[DiskEntry, ...] = ()
    network_interfaces: tuple[NetworkInterface, ...] = ()
    monitors: tuple[MonitorEntry, ...] = ()
    gpus: tuple[GpuEntry, ...] = ()
    details: HardwareDetails = field(default_factory=HardwareDetails)
