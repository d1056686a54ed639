from dataclasses import dataclass
from dataclasses import field

from serialscope.normalize import SENTINEL

# Descriptive values shown next to the identifiers. They are not written to the
# serial export and never take part in drift detection.


@dataclass(frozen=True)
class BiosInfo:
    vendor: str = SENTINEL
    version: str = SENTINEL
    release_date: str = SENTINEL
    """MM/DD/YYYY where the firmware reports a date."""
    core_isolation: bool | None = None
    """Memory integrity (HVCI). None when the platform has no such feature or it cannot be read."""
    virtualization: bool | None = None
    secure_boot: bool | None = None
    tpm_enabled: bool | None = None


@dataclass(frozen=True)
class SystemDetails:
    manufacturer: str = SENTINEL
    product_name: str = SENTINEL
    version: str = SENTINEL
    family: str = SENTINEL


@dataclass(frozen=True)
class BaseboardDetails:
    manufacturer: str = SENTINEL
    product: str = SENTINEL
    version: str = SENTINEL


@dataclass(frozen=True)
class ChassisDetails:
    manufacturer: str = SENTINEL
    chassis_type: str = SENTINEL
    """SMBIOS enclosure type name, e.g. `Desktop`."""
    version: str = SENTINEL


@dataclass(frozen=True)
class ProcessorDetails:
    manufacturer: str = SENTINEL
    name: str = SENTINEL
    socket: str = SENTINEL
    core_count: int | None = None
    thread_count: int | None = None


@dataclass(frozen=True)
class HardwareDetails:
    bios: BiosInfo = field(default_factory=BiosInfo)
    system: SystemDetails = field(default_factory=SystemDetails)
    baseboard: BaseboardDetails = field(default_factory=BaseboardDetails)
    chassis: ChassisDetails = field(default_factory=ChassisDetails)
    processor: ProcessorDetails = field(default_factory=ProcessorDetails)
