from dataclasses import dataclass


@dataclass(frozen=True)
class BaselineSnapshot:
    """
    Values recovered from a previously exported snapshot.

    A scalar is None when it was never recorded or was a placeholder at export
    time. Lists hold only the value each comparison needs (one serial, MAC or
    GUID per entry), not the full entries.
    """

    system_serial: str | None = None
    system_uuid: str | None = None
    system_sku: str | None = None
    baseboard_serial: str | None = None
    processor_serial: str | None = None
    chassis_serial: str | None = None
    disk_serials: tuple[str, ...] = ()
    network_macs: tuple[str, ...] = ()
    monitor_serials: tuple[str, ...] = ()
    gpu_guids: tuple[str, ...] = ()
