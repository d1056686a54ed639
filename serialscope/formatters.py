"""
Output formatting for the serialscope CLI.
"""

import json
from dataclasses import asdict
from dataclasses import is_dataclass
from enum import Enum

import typer
from pydantic import BaseModel

from serialscope.drift import FieldDrift
from serialscope.models.snapshot import SnapshotModel
from serialscope.models.status import StatusKind
from serialscope.normalize import SENTINEL
from serialscope.rules.spec.model import AdvisoryEntry
from serialscope.rules.spec.model import Difficulty
from serialscope.rules.spec.model import LockPosture

_STATUS_COLORS = {
    StatusKind.UNCHANGED: typer.colors.GREEN,
    StatusKind.CHANGED: typer.colors.YELLOW,
    StatusKind.NEW: typer.colors.BRIGHT_BLACK,
}

_DIFFICULTY_COLORS = {
    Difficulty.EASY: typer.colors.GREEN,
    Difficulty.MEDIUM: typer.colors.YELLOW,
    Difficulty.ADVANCED: typer.colors.RED,
}


def to_serializable(obj):
    # Pydantic model (v2)
    if isinstance(obj, BaseModel):
        return to_serializable(obj.model_dump())

    # Dataclass
    if is_dataclass(obj) and not isinstance(obj, type):
        return to_serializable(asdict(obj))

    # Enum
    if isinstance(obj, Enum):
        return obj.value

    # Dict (and mapping proxies)
    if hasattr(obj, "items"):
        return {to_serializable(k): to_serializable(v) for k, v in obj.items()}

    # List / Tuple / Set
    if isinstance(obj, (list, tuple, set)):
        return [to_serializable(v) for v in obj]

    # Primitive
    return obj


def echo_json(obj) -> None:
    typer.echo(json.dumps(to_serializable(obj), indent=2))


def _field(label: str, value: str, indent: str = "  ") -> None:
    typer.echo(f"{indent}{label + ':':<24} {value}")


def _state(value: bool | None) -> str:
    if value is None:
        return "Unknown"
    return "Enabled" if value else "Disabled"


def _count(value: int | None) -> str:
    return SENTINEL if value is None else str(value)


def format_snapshot(snapshot: SnapshotModel) -> None:
    details = snapshot.details

    typer.secho("\nSystem", bold=True)
    _field("Manufacturer", details.system.manufacturer)
    _field("Product Name", details.system.product_name)
    _field("Version", details.system.version)
    _field("Family", details.system.family)
    _field("Serial Number", snapshot.system_serial)
    _field("UUID", snapshot.system_uuid)
    _field("SKU", snapshot.system_sku)

    bios = details.bios
    typer.secho("\nBIOS", bold=True)
    _field("Vendor", bios.vendor)
    _field("Version", bios.version)
    _field("Release Date", bios.release_date)
    _field("Core Isolation", _state(bios.core_isolation))
    _field("Virtualization", _state(bios.virtualization))
    _field("Secure Boot", _state(bios.secure_boot))
    _field("TPM", _state(bios.tpm_enabled))

    typer.secho("\nBaseboard", bold=True)
    _field("Manufacturer", details.baseboard.manufacturer)
    _field("Product", details.baseboard.product)
    _field("Version", details.baseboard.version)
    _field("Serial Number", snapshot.baseboard_serial)
    _field("Asset Tag", snapshot.baseboard_asset_tag)

    processor = details.processor
    typer.secho("\nProcessor", bold=True)
    _field("Manufacturer", processor.manufacturer)
    _field("Name", processor.name)
    _field("Socket", processor.socket)
    _field("Cores", _count(processor.core_count))
    _field("Threads", _count(processor.thread_count))
    _field("Serial Number", snapshot.processor_serial)
    _field("Part Number", snapshot.processor_part_number)

    typer.secho("\nChassis", bold=True)
    _field("Manufacturer", details.chassis.manufacturer)
    _field("Type", details.chassis.chassis_type)
    _field("Version", details.chassis.version)
    _field("Serial Number", snapshot.chassis_serial)
    _field("Asset Tag", snapshot.chassis_asset_tag)
    _field("SKU", snapshot.chassis_sku)

    typer.secho(f"\nDisks ({len(snapshot.disks)})", bold=True)
    for idx, disk in enumerate(snapshot.disks, start=1):
        typer.secho(f"  Disk {idx}: {disk.model}", fg=typer.colors.CYAN)
        _field("Serial", disk.storage_query_serial, "    ")
        _field("WWN", disk.wwn, "    ")

    typer.secho(f"\nNetwork ({len(snapshot.network_interfaces)})", bold=True)
    for iface in snapshot.network_interfaces:
        typer.secho(f"  {iface.name}", fg=typer.colors.CYAN)
        _field("MAC Address", iface.mac, "    ")
        _field("IP Address", iface.ip_address, "    ")

    typer.secho(f"\nMonitors ({len(snapshot.monitors)})", bold=True)
    for monitor in snapshot.monitors:
        typer.secho(f"  {monitor.display_name}: {monitor.model}", fg=typer.colors.CYAN)
        _field("Manufacturer", monitor.manufacturer, "    ")
        _field("Serial Number", monitor.serial, "    ")
        _field("ID Serial", monitor.id_serial, "    ")
        _field("Resolution", monitor.resolution, "    ")

    typer.secho(f"\nGPUs ({len(snapshot.gpus)})", bold=True)
    for gpu in snapshot.gpus:
        typer.secho(f"  {gpu.name}", fg=typer.colors.CYAN)
        _field("Vendor", gpu.vendor, "    ")
        _field("VRAM", gpu.vram, "    ")
        _field("PCI Device", gpu.pci_device, "    ")
        _field("GUID", gpu.guid, "    ")


def format_drift_report(report: list[FieldDrift], has_baseline: bool) -> None:
    if not has_baseline:
        typer.secho(
            "No previous export found - every value is reported as New.",
            fg=typer.colors.BRIGHT_BLACK,
        )
    for row in report:
        typer.echo(f"  {row.label + ':':<32} {row.current:<40} ", nl=False)
        typer.secho(str(row.status), fg=_STATUS_COLORS[row.status.kind])

    changed = sum(1 for row in report if row.status.is_changed)
    typer.echo("\n" + "=" * 60)
    if changed:
        typer.secho(f"{changed} value(s) changed since the last export", fg=typer.colors.YELLOW)
    else:
        typer.secho("No changes since the last export", fg=typer.colors.GREEN)


def format_posture(posture: LockPosture) -> None:
    typer.secho("\nLock posture", bold=True)
    _field("OEM Vendor", posture.oem_vendor)
    _field("OEM System", str(posture.is_oem_system))
    _field("Secure Boot", str(posture.secure_boot_enforced))
    _field("TPM", str(posture.tpm_locked))
    _field("BIOS Write Protected", str(posture.bios_write_protected))
    if posture.overall_locked:
        typer.secho("  LOCKED", fg=typer.colors.RED, bold=True)
    else:
        typer.secho("  UNLOCKED", fg=typer.colors.GREEN, bold=True)
    for reason in posture.lock_reasons:
        typer.echo(f"    - {reason}")


def format_advisories(advisories: tuple[AdvisoryEntry, ...] | list[AdvisoryEntry]) -> None:
    typer.secho(f"\nAdvisories ({len(advisories)})\n", bold=True)
    for entry in advisories:
        typer.secho(f"{entry.category}", fg=typer.colors.CYAN, nl=False)
        typer.secho(f"  [{entry.difficulty.value}]", fg=_DIFFICULTY_COLORS[entry.difficulty])
        _field("Method", entry.method)
        _field("Details", entry.details)
        typer.echo()
