import logging

from serialscope.rules.spec.model import LockPosture
from serialscope.rules.spec.model import PlatformSignals

logger = logging.getLogger(__name__)

# Substring of the lowercased manufacturer -> vendor display name. Order matters.
OEM_VENDORS: tuple[tuple[str, str], ...] = (
    ("dell", "Dell"),
    ("hp", "HP"),
    ("hewlett", "HP"),
    ("lenovo", "Lenovo"),
    ("asus", "ASUS"),
    ("acer", "Acer"),
    ("msi", "MSI"),
    ("gigabyte", "Gigabyte"),
    ("asrock", "ASRock"),
)

LOCKED_OEM_VENDORS = frozenset({"Dell", "HP", "Lenovo"})


def detect_oem_vendor(manufacturer: str | None) -> tuple[str | None, bool]:
    """
    Match a system manufacturer string against the known OEM vendors.

    :param manufacturer: Raw manufacturer, e.g. "Dell Inc.".
    :return: The vendor display name (or None) and whether that vendor
        typically locks its BIOS.
    """
    lower = (manufacturer or "").lower()
    for pattern, vendor in OEM_VENDORS:
        if pattern in lower:
            return vendor, vendor in LOCKED_OEM_VENDORS
    return None, False


def evaluate(signals: PlatformSignals) -> LockPosture:
    """
    Derive the lock posture from platform signals.

    Missing signals count as disabled, so this can under-detect but never fails.
    TPM activation is reported but does not make the platform locked on its own.
    """
    reasons: list[str] = []
    is_oem_system = False
    secure_boot_enforced = False
    tpm_locked = False
    bios_write_protected = False

    vendor = signals.oem_vendor or "Unknown"
    if signals.oem_vendor and signals.is_tier1_oem:
        is_oem_system = True
        reasons.append(
            f"{signals.oem_vendor} OEM system detected - BIOS typically locked"
        )

    if signals.secure_boot:
        secure_boot_enforced = True
        reasons.append("Secure Boot enabled - EFI modifications restricted")

    if signals.tpm_active:
        tpm_locked = True
        reasons.append("TPM active - Hardware attestation may detect changes")

    if signals.vbs:
        bios_write_protected = True
        reasons.append("VBS enabled - Kernel-level protections active")

    if signals.hvci:
        bios_write_protected = True
        if not any("HVCI" in reason for reason in reasons):
            reasons.append("HVCI enabled - Driver signing enforced")

    posture = LockPosture(
        is_oem_system=is_oem_system,
        oem_vendor=vendor,
        bios_write_protected=bios_write_protected,
        secure_boot_enforced=secure_boot_enforced,
        tpm_locked=tpm_locked,
        overall_locked=is_oem_system or secure_boot_enforced or bios_write_protected,
        lock_reasons=tuple(reasons),
    )
    logger.debug(
        "Lock posture: locked=%s, %d reason(s).",
        posture.overall_locked,
        len(posture.lock_reasons),
    )
    return posture
