import logging
import os
import socket

import psutil

from serialscope.intel import Collector
from serialscope.intel import RawRecord
from serialscope.rules.posture import detect_oem_vendor
from serialscope.rules.spec.model import PlatformSignals

logger = logging.getLogger(__name__)

DMI_DIR = "sys/class/dmi/id"
BLOCK_DIR = "sys/block"
NET_DIR = "sys/class/net"
DRM_DIR = "sys/class/drm"
PCI_DIR = "sys/bus/pci/devices"
CPUINFO = "proc/cpuinfo"
TPM_DIR = "sys/class/tpm"
SECURE_BOOT_VAR = (
    "sys/firmware/efi/efivars/SecureBoot-8be4df61-93ca-11d2-aa0d-00e098032b8c"
)

# Block devices that never have a hardware serial.
VIRTUAL_BLOCK_PREFIXES = ("loop", "ram", "zram", "dm-", "md", "sr", "nbd")

PCI_DISPLAY_CLASS_PREFIX = "0x03"
PCI_VENDORS = {
    "0x10de": "NVIDIA",
    "0x1002": "AMD",
    "0x8086": "Intel",
}

EDID_HEADER = bytes([0x00, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0xFF, 0x00])
EDID_DESCRIPTOR_OFFSETS = (54, 72, 90, 108)
EDID_SERIAL_TAG = 0xFF
EDID_NAME_TAG = 0xFC


def decode_edid(edid: bytes) -> RawRecord:
    """
    Extract the identity fields of a base EDID block.

    :return: `model`, `serial`, `manufacturer` (PnP vendor id) and `id_serial`
        (PnP vendor + product code, e.g. `DEL404D`). Fields that are not present
        are left out.
    """
    if len(edid) < 128 or edid[:8] != EDID_HEADER:
        return {}

    record: RawRecord = {}
    vendor_word = (edid[8] << 8) | edid[9]
    pnp_vendor = "".join(
        chr(((vendor_word >> shift) & 0x1F) + ord("A") - 1) for shift in (10, 5, 0)
    )
    product_code = edid[10] | (edid[11] << 8)
    record["manufacturer"] = pnp_vendor
    record["id_serial"] = f"{pnp_vendor}{product_code:04X}"

    numeric_serial = int.from_bytes(edid[12:16], "little")
    if numeric_serial:
        record["serial"] = str(numeric_serial)

    for offset in EDID_DESCRIPTOR_OFFSETS:
        descriptor = edid[offset : offset + 18]
        # Display descriptors start with 00 00 00 <tag>.
        if descriptor[:3] != b"\x00\x00\x00":
            continue
        text = descriptor[5:18].split(b"\x0a")[0].decode("ascii", "replace").strip()
        if descriptor[3] == EDID_SERIAL_TAG and text:
            record["serial"] = text
        elif descriptor[3] == EDID_NAME_TAG and text:
            record["model"] = text
    return record


class LinuxSysfsCollector(Collector):
    """
    Reads identity values from sysfs.

    Some DMI files (serial numbers in particular) are only readable by root;
    unreadable files are reported as missing.

    Interface addresses and CPU core counts come from psutil and always describe
    the running machine.

    :param root: Filesystem root, `/` on a live system.
    """

    name = "linux sysfs"

    def __init__(self, root: str = "/"):
        self.root = root

    def _path(self, *parts: str) -> str:
        return os.path.join(self.root, *parts)

    def _read_bytes(self, *parts: str) -> bytes | None:
        path = self._path(*parts)
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except OSError as e:
            logger.debug("Cannot read %s: %s", path, e)
            return None

    def _read(self, *parts: str) -> str | None:
        data = self._read_bytes(*parts)
        if data is None:
            return None
        return data.decode("utf-8", "replace").strip()

    def _list(self, *parts: str) -> list[str]:
        path = self._path(*parts)
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            logger.debug("Cannot list %s: %s", path, e)
            return []

    def _dmi(self, field: str) -> str | None:
        return self._read(DMI_DIR, field)

    def _cpuinfo(self) -> dict[str, str]:
        """Fields of the first processor block in /proc/cpuinfo."""
        info: dict[str, str] = {}
        for line in (self._read(CPUINFO) or "").splitlines():
            if not line.strip():
                if info:
                    break
                continue
            key, sep, value = line.partition(":")
            if sep:
                info.setdefault(key.strip(), value.strip())
        return info

    def system(self) -> RawRecord:
        return {
            "manufacturer": self._dmi("sys_vendor"),
            "product_name": self._dmi("product_name"),
            "version": self._dmi("product_version"),
            "family": self._dmi("product_family"),
            "serial_number": self._dmi("product_serial"),
            "uuid": self._dmi("product_uuid"),
            "sku": self._dmi("product_sku"),
        }

    def baseboard(self) -> RawRecord:
        return {
            "manufacturer": self._dmi("board_vendor"),
            "product": self._dmi("board_name"),
            "version": self._dmi("board_version"),
            "serial_number": self._dmi("board_serial"),
            "asset_tag": self._dmi("board_asset_tag"),
        }

    def processor(self) -> RawRecord:
        # The kernel does not expose SMBIOS type 4 serial, part number or socket.
        cpu = self._cpuinfo()
        return {
            "manufacturer": cpu.get("vendor_id"),
            "name": cpu.get("model name"),
            "core_count": psutil.cpu_count(logical=False),
            "thread_count": psutil.cpu_count(logical=True),
        }

    def chassis(self) -> RawRecord:
        return {
            "manufacturer": self._dmi("chassis_vendor"),
            "chassis_type": self._dmi("chassis_type"),
            "version": self._dmi("chassis_version"),
            "serial_number": self._dmi("chassis_serial"),
            "asset_tag": self._dmi("chassis_asset_tag"),
        }

    def bios(self) -> RawRecord:
        flags = self._cpuinfo().get("flags", "").split()
        return {
            "vendor": self._dmi("bios_vendor"),
            "version": self._dmi("bios_version"),
            "release_date": self._dmi("bios_date"),
            # HVCI has no Linux counterpart.
            "core_isolation": None,
            "virtualization": ("vmx" in flags or "svm" in flags) if flags else None,
            "secure_boot": self._secure_boot(),
            "tpm_enabled": self._tpm_active(),
        }

    def disks(self) -> list[RawRecord]:
        disks: list[RawRecord] = []
        for dev in self._list(BLOCK_DIR):
            if dev.startswith(VIRTUAL_BLOCK_PREFIXES):
                continue
            if not os.path.isdir(self._path(BLOCK_DIR, dev, "device")):
                continue
            disks.append(
                {
                    "model": self._read(BLOCK_DIR, dev, "device", "model") or dev,
                    "serial": self._read(BLOCK_DIR, dev, "device", "serial"),
                    "wwn": self._read(BLOCK_DIR, dev, "wwid")
                    or self._read(BLOCK_DIR, dev, "device", "wwid"),
                }
            )
        return disks

    def network_interfaces(self) -> list[RawRecord]:
        # Addresses come from the running kernel, not from `root`.
        addresses = psutil.net_if_addrs()
        interfaces: list[RawRecord] = []
        for iface in self._list(NET_DIR):
            # Only physical adapters have a backing device.
            if not os.path.exists(self._path(NET_DIR, iface, "device")):
                continue
            mac = self._read(NET_DIR, iface, "address")
            if not mac or mac == "00:00:00:00:00:00":
                continue
            ipv4 = [a.address for a in addresses.get(iface, []) if a.family == socket.AF_INET]
            interfaces.append(
                {
                    "name": iface,
                    "mac": mac.upper(),
                    "ip_address": ipv4[0] if ipv4 else None,
                }
            )
        return interfaces

    def monitors(self) -> list[RawRecord]:
        monitors: list[RawRecord] = []
        for connector in self._list(DRM_DIR):
            if self._read(DRM_DIR, connector, "status") != "connected":
                continue
            edid = self._read_bytes(DRM_DIR, connector, "edid")
            if not edid:
                continue
            record = {"display_name": connector}
            record.update(decode_edid(edid))
            # The first mode listed is the preferred one.
            modes = (self._read(DRM_DIR, connector, "modes") or "").splitlines()
            record["resolution"] = modes[0] if modes else None
            monitors.append(record)
        return monitors

    def gpus(self) -> list[RawRecord]:
        gpus: list[RawRecord] = []
        for slot in self._list(PCI_DIR):
            pci_class = self._read(PCI_DIR, slot, "class") or ""
            if not pci_class.startswith(PCI_DISPLAY_CLASS_PREFIX):
                continue
            vendor_id = self._read(PCI_DIR, slot, "vendor") or ""
            device_id = self._read(PCI_DIR, slot, "device") or ""
            vendor = PCI_VENDORS.get(vendor_id, vendor_id)
            gpus.append(
                {
                    "name": f"{vendor} {device_id}".strip(),
                    "pci_device": slot,
                    # Linux has no per-adapter class GUID.
                    "guid": None,
                    "vendor": vendor or None,
                    # Only exposed by the amdgpu driver.
                    "vram": self._read(PCI_DIR, slot, "mem_info_vram_total"),
                }
            )
        return gpus

    def _secure_boot(self) -> bool | None:
        data = self._read_bytes(SECURE_BOOT_VAR)
        # 4 attribute bytes followed by the value.
        if data is None or len(data) < 5:
            return None
        return data[4] == 1

    def _tpm_active(self) -> bool | None:
        return True if self._list(TPM_DIR) else None

    def platform_signals(self) -> PlatformSignals:
        vendor, locked = detect_oem_vendor(self._dmi("sys_vendor"))
        return PlatformSignals(
            oem_vendor=vendor,
            is_tier1_oem=locked,
            secure_boot=self._secure_boot(),
            tpm_active=self._tpm_active(),
        )
