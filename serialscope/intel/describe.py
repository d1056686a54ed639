"""
Transforms for the descriptive values collected alongside the identifiers.

Collectors hand over raw values in whatever form the platform reports them:
SMBIOS enclosure codes, WMI datetimes, VRAM sizes in bytes. These helpers turn
them into the display form stored on `HardwareDetails` and the device entries.
"""

import re
from typing import Any

from serialscope.models.details import BaseboardDetails
from serialscope.models.details import BiosInfo
from serialscope.models.details import ChassisDetails
from serialscope.models.details import HardwareDetails
from serialscope.models.details import ProcessorDetails
from serialscope.models.details import SystemDetails
from serialscope.normalize import SENTINEL
from serialscope.normalize import normalize

RawRecord = dict[str, Any]

# SMBIOS type 3 enclosure types.
CHASSIS_TYPES = {
    1: "Other",
    2: "Unknown",
    3: "Desktop",
    4: "Low Profile Desktop",
    5: "Pizza Box",
    6: "Mini Tower",
    7: "Tower",
    8: "Portable",
    9: "Laptop",
    10: "Notebook",
    11: "Hand Held",
    12: "Docking Station",
    13: "All in One",
    14: "Sub Notebook",
    15: "Space-saving",
    16: "Lunch Box",
    17: "Main System Chassis",
    18: "Expansion Chassis",
    19: "SubChassis",
    20: "Bus Expansion Chassis",
    21: "Peripheral Chassis",
    22: "Storage Chassis",
    23: "Rack Mount Chassis",
    24: "Sealed-Case PC",
    25: "Multi-system Chassis",
    26: "Compact PCI",
    27: "Advanced TCA",
    28: "Blade",
    29: "Blade Enclosure",
    30: "Tablet",
    31: "Convertible",
    32: "Detachable",
    33: "IoT Gateway",
    34: "Embedded PC",
    35: "Mini PC",
    36: "Stick PC",
}

# WMI CIM_DATETIME, e.g. 20231015000000.000000+000
_CIM_DATE = re.compile(r"^(\d{4})(\d{2})(\d{2})\d{6}")

_GIB = 1024 * 1024 * 1024
_MIB = 1024 * 1024


def text(record: RawRecord, key: str) -> str:
    raw = record.get(key)
    return normalize(None if raw is None else str(raw))


def flag(record: RawRecord, key: str) -> bool | None:
    raw = record.get(key)
    return None if raw is None else bool(raw)


def count(record: RawRecord, key: str) -> int | None:
    try:
        value = int(record.get(key))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    return value if value > 0 else None


def chassis_type_name(raw: Any) -> str:
    """
    Resolve an SMBIOS enclosure code (`3`, `"10"`) to its name.

    Non-numeric values are taken as an already resolved name. Codes outside the
    table are reported as `Unknown`.
    """
    if raw is None:
        return SENTINEL
    value = str(raw).strip()
    if value.isdigit():
        return CHASSIS_TYPES.get(int(value), "Unknown")
    return normalize(value)


def format_release_date(raw: Any) -> str:
    """Render WMI datetimes as MM/DD/YYYY, pass other formats through."""
    value = normalize(None if raw is None else str(raw))
    match = _CIM_DATE.match(value)
    if match:
        year, month, day = match.groups()
        return f"{month}/{day}/{year}"
    return value


def format_vram(raw: Any) -> str:
    """Render a size in bytes as whole GB or MB. Strings that are not a number pass through."""
    if raw is None:
        return SENTINEL
    value = str(raw).strip()
    if not value.isdigit():
        return normalize(value)
    size = int(value)
    if size <= 0:
        return SENTINEL
    if size >= _GIB:
        return f"{size // _GIB} GB"
    if size >= _MIB:
        return f"{size // _MIB} MB"
    return f"{size} bytes"


def build_details(
    bios: RawRecord,
    system: RawRecord,
    baseboard: RawRecord,
    chassis: RawRecord,
    processor: RawRecord,
) -> HardwareDetails:
    return HardwareDetails(
        bios=BiosInfo(
            vendor=text(bios, "vendor"),
            version=text(bios, "version"),
            release_date=format_release_date(bios.get("release_date")),
            core_isolation=flag(bios, "core_isolation"),
            virtualization=flag(bios, "virtualization"),
            secure_boot=flag(bios, "secure_boot"),
            tpm_enabled=flag(bios, "tpm_enabled"),
        ),
        system=SystemDetails(
            manufacturer=text(system, "manufacturer"),
            product_name=text(system, "product_name"),
            version=text(system, "version"),
            family=text(system, "family"),
        ),
        baseboard=BaseboardDetails(
            manufacturer=text(baseboard, "manufacturer"),
            product=text(baseboard, "product"),
            version=text(baseboard, "version"),
        ),
        chassis=ChassisDetails(
            manufacturer=text(chassis, "manufacturer"),
            chassis_type=chassis_type_name(chassis.get("chassis_type")),
            version=text(chassis, "version"),
        ),
        processor=ProcessorDetails(
            manufacturer=text(processor, "manufacturer"),
            name=text(processor, "name"),
            socket=text(processor, "socket"),
            core_count=count(processor, "core_count"),
            thread_count=count(processor, "thread_count"),
        ),
    )
