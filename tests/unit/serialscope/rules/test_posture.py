import pytest

from serialscope.rules.posture import detect_oem_vendor
from serialscope.rules.posture import evaluate
from serialscope.rules.spec.model import LockPosture
from serialscope.rules.spec.model import PlatformSignals


def test_tier1_oem_with_secure_boot():
    posture = evaluate(
        PlatformSignals(
            oem_vendor="Dell",
            is_tier1_oem=True,
            secure_boot=True,
            tpm_active=False,
            vbs=False,
            hvci=False,
        )
    )

    assert posture.overall_locked is True
    assert posture.is_oem_system is True
    assert posture.oem_vendor == "Dell"
    assert posture.lock_reasons == (
        "Dell OEM system detected - BIOS typically locked",
        "Secure Boot enabled - EFI modifications restricted",
    )


def test_no_signals():
    posture = evaluate(PlatformSignals())

    assert posture == LockPosture()
    assert posture.overall_locked is False
    assert posture.lock_reasons == ()
    assert posture.oem_vendor == "Unknown"


def test_tpm_alone_does_not_lock():
    posture = evaluate(PlatformSignals(tpm_active=True))

    assert posture.tpm_locked is True
    assert posture.overall_locked is False
    assert posture.lock_reasons == ("TPM active - Hardware attestation may detect changes",)


def test_non_tier1_vendor_is_recorded_but_not_locking():
    posture = evaluate(PlatformSignals(oem_vendor="ASUS", is_tier1_oem=False))

    assert posture.oem_vendor == "ASUS"
    assert posture.is_oem_system is False
    assert posture.overall_locked is False
    assert posture.lock_reasons == ()


def test_vbs_and_hvci_both_write_protect_with_ordered_reasons():
    posture = evaluate(
        PlatformSignals(secure_boot=True, tpm_active=True, vbs=True, hvci=True)
    )

    assert posture.bios_write_protected is True
    assert posture.overall_locked is True
    assert posture.lock_reasons == (
        "Secure Boot enabled - EFI modifications restricted",
        "TPM active - Hardware attestation may detect changes",
        "VBS enabled - Kernel-level protections active",
        "HVCI enabled - Driver signing enforced",
    )
    assert sum("HVCI" in reason for reason in posture.lock_reasons) == 1


def test_hvci_alone_locks():
    posture = evaluate(PlatformSignals(hvci=True))

    assert posture.bios_write_protected is True
    assert posture.overall_locked is True
    assert posture.lock_reasons == ("HVCI enabled - Driver signing enforced",)


@pytest.mark.parametrize(
    "manufacturer, expected",
    [
        ("Dell Inc.", ("Dell", True)),
        ("HP", ("HP", True)),
        ("Hewlett-Packard", ("HP", True)),
        ("LENOVO", ("Lenovo", True)),
        ("ASUSTeK COMPUTER INC.", ("ASUS", False)),
        ("Micro-Star International Co., Ltd.", (None, False)),
        ("MSI", ("MSI", False)),
        ("Gigabyte Technology Co., Ltd.", ("Gigabyte", False)),
        ("QEMU", (None, False)),
        (None, (None, False)),
    ],
)
def test_detect_oem_vendor(manufacturer, expected):
    assert detect_oem_vendor(manufacturer) == expected
