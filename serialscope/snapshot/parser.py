import logging

from serialscope.models.baseline import BaselineSnapshot
from serialscope.normalize import SENTINEL
from serialscope.snapshot.serializer import SECTION_DELIMITER

logger = logging.getLogger(__name__)

_SCALAR_KEYS = {
    ("SYSTEM", "Serial Number"): "system_serial",
    ("SYSTEM", "UUID"): "system_uuid",
    ("SYSTEM", "SKU"): "system_sku",
    ("BASEBOARD", "Serial Number"): "baseboard_serial",
    ("PROCESSOR", "Serial Number"): "processor_serial",
    ("CHASSIS", "Serial Number"): "chassis_serial",
}


def _is_section_header(line: str) -> bool:
    return line.startswith(SECTION_DELIMITER) and line.endswith(SECTION_DELIMITER)


def parse(content: str) -> BaselineSnapshot:
    """
    Recover a baseline from serial export text.

    Lenient single pass: sections may repeat or come in any order, lines
    without a colon and unknown sections or keys are skipped, and `N/A` or
    empty values are never recorded. Any input yields a (possibly empty)
    baseline.
    """
    current_section = ""
    scalars: dict[str, str] = {}
    disk_serials: list[str] = []
    network_macs: list[str] = []
    monitor_serials: list[str] = []
    gpu_guids: list[str] = []

    for raw_line in content.splitlines():
        line = raw_line.strip()

        if _is_section_header(line):
            current_section = line.strip("=").strip()
            continue

        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if not value or value == SENTINEL:
            continue

        field = _SCALAR_KEYS.get((current_section, key))
        if field is not None:
            scalars[field] = value
        elif current_section == "DISKS":
            if "Serial" in key:
                disk_serials.append(value)
        elif current_section == "NETWORK":
            # `<interface name>: <mac>`
            network_macs.append(value)
        elif current_section == "MONITORS":
            if key == "Serial Number":
                monitor_serials.append(value)
        elif current_section == "GPU":
            if "GUID" in key:
                gpu_guids.append(value)

    logger.debug(
        "Parsed baseline: %d scalars, %d disks, %d MACs, %d monitors, %d GPUs.",
        len(scalars),
        len(disk_serials),
        len(network_macs),
        len(monitor_serials),
        len(gpu_guids),
    )
    return BaselineSnapshot(
        **scalars,
        disk_serials=tuple(disk_serials),
        network_macs=tuple(network_macs),
        monitor_serials=tuple(monitor_serials),
        gpu_guids=tuple(gpu_guids),
    )
