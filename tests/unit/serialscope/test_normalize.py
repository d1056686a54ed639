import pytest

from serialscope.normalize import SENTINEL
from serialscope.normalize import is_available
from serialscope.normalize import is_placeholder
from serialscope.normalize import normalize


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "\t\n",
        None,
        "To Be Filled By O.E.M.",
        "to be filled by oem",
        "OEM",
        "O.E.M.",
        "O. E. M.",
        "To Be Filled By O. E. M.",
        "Default string",
        "DEFAULT STRING",
        "Not Specified",
        "None",
        "unknown",
        "N/A",
        "System Serial Number",
        "System Product Name",
        "Base Board Serial Number",
        "  Chassis Serial Number  ",
    ],
)
def test_is_placeholder_detects_vendor_templates(raw):
    assert is_placeholder(raw) is True


@pytest.mark.parametrize(
    "raw",
    [
        "PF3ABCDE",
        "S5GXNF0R123456",
        "8C:EC:4B:11:22:33",
        "Unknown Vendor X1",
        "Video Emulator",
    ],
)
def test_is_placeholder_keeps_real_values(raw):
    assert is_placeholder(raw) is False


def test_normalize_trims_real_values():
    assert normalize("  PF3ABCDE \n") == "PF3ABCDE"


def test_normalize_maps_placeholders_to_sentinel():
    assert normalize("To Be Filled By O.E.M.") == SENTINEL
    assert normalize("") == SENTINEL
    assert normalize(None) == SENTINEL


def test_normalize_is_idempotent_on_sentinel():
    assert normalize(SENTINEL) == SENTINEL


def test_is_available():
    assert is_available("ABC123")
    assert not is_available(SENTINEL)
    assert not is_available("")
    assert not is_available(None)
