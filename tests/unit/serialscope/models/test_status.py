from serialscope.models.status import SerialStatus
from serialscope.models.status import StatusKind


def test_constructors_set_kind():
    assert SerialStatus.unchanged().kind == StatusKind.UNCHANGED
    assert SerialStatus.new().kind == StatusKind.NEW
    changed = SerialStatus.changed("OLD999")
    assert changed.kind == StatusKind.CHANGED
    assert changed.old == "OLD999"


def test_statuses_compare_by_value():
    assert SerialStatus.changed("OLD999") == SerialStatus.changed("OLD999")
    assert SerialStatus.changed("OLD999") != SerialStatus.changed("OLD000")
    assert SerialStatus.new() == SerialStatus.new()
    assert SerialStatus.new().old is None


def test_str():
    assert str(SerialStatus.unchanged()) == "Unchanged"
    assert str(SerialStatus.new()) == "New"
    assert str(SerialStatus.changed("OLD999")) == "Changed (was: OLD999)"


def test_worse_than_ranks_changed_over_new_over_unchanged():
    changed = SerialStatus.changed("OLD999")
    new = SerialStatus.new()
    unchanged = SerialStatus.unchanged()

    assert changed.worse_than(new)
    assert new.worse_than(unchanged)
    assert changed.worse_than(unchanged)
    assert not unchanged.worse_than(new)
    assert not new.worse_than(SerialStatus.new())
