from procviz.core.bus import Bus


def test_bus_starts_idle():
    bus = Bus()
    assert bus.busy is False
    assert bus.message == ""


def test_begin_and_end_transfer():
    bus = Bus()
    bus.begin("Moving to IR\nmov A 5")
    assert bus.busy is True
    assert bus.message == "Moving to IR\nmov A 5"

    bus.end()
    assert (bus.busy, bus.message) == (False, "")


def test_reset_returns_bus_to_idle():
    bus = Bus()
    bus.begin("Moving to A")
    bus.reset()
    assert (bus.busy, bus.message) == (False, "")
