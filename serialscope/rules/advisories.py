from serialscope.rules.spec.model import AdvisoryEntry
from serialscope.rules.spec.model import Difficulty
from serialscope.rules.spec.model import LockPosture

# Motherboard
_motherboard_locked = AdvisoryEntry(
    category="SMBIOS/Motherboard",
    method="EFI-Level Spoofing",
    difficulty=Difficulty.ADVANCED,
    details=(
        "Use UEFI shell or EFI module injection. Tools: SmmBackdoor, custom EFI "
        "drivers. Modify SMBIOS tables at firmware level before OS boot. May "
        "require disabling Secure Boot first."
    ),
)

_motherboard_unlocked = AdvisoryEntry(
    category="SMBIOS/Motherboard",
    method="Registry + Driver Spoofing",
    difficulty=Difficulty.MEDIUM,
    details=(
        "Modify HKLM\\HARDWARE\\DESCRIPTION\\System\\BIOS values. Use WMI provider "
        "hooks or kernel drivers to intercept queries. Tools: Custom kernel "
        "drivers, WMI hooks."
    ),
)

# Lock-dependent
_secure_boot = AdvisoryEntry(
    category="Secure Boot",
    method="Disable in BIOS",
    difficulty=Difficulty.EASY,
    details=(
        "Enter BIOS setup (DEL/F2), navigate to Security/Boot settings, disable "
        "Secure Boot. Required before EFI modifications. Some OEM systems may "
        "require BIOS password."
    ),
)

_tpm = AdvisoryEntry(
    category="TPM",
    method="TPM Clear/Reset",
    difficulty=Difficulty.MEDIUM,
    details=(
        "Clear TPM from BIOS or Windows Security settings. Note: This will remove "
        "all TPM-protected keys including BitLocker. Back up recovery keys first. "
        "Some games use TPM for hardware attestation."
    ),
)

# Always listed
_disk_serials = AdvisoryEntry(
    category="Disk Serials",
    method="IOCTL Hooking / Firmware",
    difficulty=Difficulty.ADVANCED,
    details=(
        "Hook IOCTL_STORAGE_QUERY_PROPERTY and SMART_RCV_DRIVE_DATA in kernel "
        "driver. For persistent changes: some SSDs have firmware tools to modify "
        "serial. NVMe drives may use vendor-specific commands."
    ),
)

_network_mac = AdvisoryEntry(
    category="Network MAC",
    method="Registry / Driver Level",
    difficulty=Difficulty.EASY,
    details=(
        "Registry: HKLM\\SYSTEM\\CurrentControlSet\\Control\\Class\\{4d36e972...}\\000X "
        "Add NetworkAddress string with new MAC (no colons). Or use Device Manager "
        "> Network Adapter > Advanced > Locally Administered Address."
    ),
)

_gpu_guid = AdvisoryEntry(
    category="GPU GUID",
    method="Registry Modification",
    difficulty=Difficulty.MEDIUM,
    details=(
        "Modify HKLM\\SYSTEM\\CurrentControlSet\\Enum\\PCI entries for GPU. Some "
        "anti-cheats read GPU info via DXGI/DirectX - may need API hooks. "
        "NVIDIA/AMD driver reinstall generates new GUIDs."
    ),
)

_monitor_serial = AdvisoryEntry(
    category="Monitor Serial",
    method="EDID Spoofing",
    difficulty=Difficulty.ADVANCED,
    details=(
        "Intercept EDID data from monitor. Tools: Custom display drivers, EDID "
        "override in registry. Path: HKLM\\SYSTEM\\CurrentControlSet\\Enum\\DISPLAY"
        "\\<Monitor>\\<ID>\\Device Parameters\\EDID_OVERRIDE"
    ),
)

ALWAYS_LISTED: tuple[AdvisoryEntry, ...] = (
    _disk_serials,
    _network_mac,
    _gpu_guid,
    _monitor_serial,
)


def generate_advisories(posture: LockPosture) -> list[AdvisoryEntry]:
    """
    List the remediation classes that apply to a lock posture.

    The motherboard entry depends on whether the platform is locked, Secure Boot
    and TPM entries are added when those features are active, and the disk,
    network, GPU and monitor entries are always present.
    """
    advisories = [_motherboard_locked if posture.overall_locked else _motherboard_unlocked]
    if posture.secure_boot_enforced:
        advisories.append(_secure_boot)
    if posture.tpm_locked:
        advisories.append(_tpm)
    advisories.extend(ALWAYS_LISTED)
    return advisories
