"""
Rendering of a snapshot to the serial export text format.

    === SYSTEM ===
    Serial Number: PF3ABCDE
    UUID: 4C4C4544-0042-...
    SKU: 0A1B

    === DISKS ===
    Disk 1: Samsung SSD 980 PRO 1TB
      Serial (Storage Query): S5GXNF0R123456
      WWN: eui.002538b111b2c3d4
    ...

Values are written as-is, without escaping.
"""

from datetime import datetime

from serialscope.models.snapshot import SnapshotModel

SECTION_DELIMITER = "==="
PREAMBLE_SECTION = "SERIAL EXPORT"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
INDENT = "  "


def section_header(name: str) -> str:
    return f"{SECTION_DELIMITER} {name} {SECTION_DELIMITER}"


def _section(name: str, lines: list[str]) -> list[str]:
    return [section_header(name), *lines, ""]


def _pair(key: str, value: str, indent: str = "") -> str:
    return f"{indent}{key}: {value}"


def serialize(snapshot: SnapshotModel, generated: datetime | None = None) -> str:
    """
    Render `snapshot` as the serial export text.

    :param snapshot: The snapshot to render.
    :param generated: When set, a leading `SERIAL EXPORT` section records this
        timestamp. Leave unset for output that only depends on the snapshot.
    :return: The export text, newline-terminated.
    """
    out: list[str] = []

    if generated is not None:
        out += _section(
            PREAMBLE_SECTION,
            [_pair("Generated", generated.strftime(TIMESTAMP_FORMAT))],
        )

    out += _section(
        "SYSTEM",
        [
            _pair("Serial Number", snapshot.system_serial),
            _pair("UUID", snapshot.system_uuid),
            _pair("SKU", snapshot.system_sku),
        ],
    )
    out += _section(
        "BASEBOARD",
        [
            _pair("Serial Number", snapshot.baseboard_serial),
            _pair("Asset Tag", snapshot.baseboard_asset_tag),
        ],
    )
    out += _section(
        "PROCESSOR",
        [
            _pair("Serial Number", snapshot.processor_serial),
            _pair("Part Number", snapshot.processor_part_number),
        ],
    )
    out += _section(
        "CHASSIS",
        [
            _pair("Serial Number", snapshot.chassis_serial),
            _pair("Asset Tag", snapshot.chassis_asset_tag),
            _pair("SKU", snapshot.chassis_sku),
        ],
    )

    disk_lines: list[str] = []
    for idx, disk in enumerate(snapshot.disks, start=1):
        disk_lines += [
            _pair(f"Disk {idx}", disk.model),
            _pair("Serial (Storage Query)", disk.storage_query_serial, INDENT),
            _pair("WWN", disk.wwn, INDENT),
        ]
    out += _section("DISKS", disk_lines)

    out += _section(
        "NETWORK",
        [_pair(iface.name, iface.mac) for iface in snapshot.network_interfaces],
    )

    monitor_lines: list[str] = []
    for monitor in snapshot.monitors:
        monitor_lines += [
            _pair(monitor.display_name, monitor.model),
            _pair("Serial Number", monitor.serial, INDENT),
            _pair("ID Serial", monitor.id_serial, INDENT),
        ]
    out += _section("MONITORS", monitor_lines)

    gpu_lines: list[str] = []
    for gpu in snapshot.gpus:
        gpu_lines += [
            gpu.name,
            _pair("PCI Device", gpu.pci_device, INDENT),
            _pair("GUID", gpu.guid, INDENT),
        ]
    out += _section("GPU", gpu_lines)

    return "\n".join(out) + "\n"
