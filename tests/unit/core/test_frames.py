from __future__ import annotations

from skittle.core.frames import Frame, FrameStack


def test_root_export_slot_used_without_frames() -> None:
    stack = FrameStack()

    stack.current_exported["k"] = 1

    assert stack.current is None
    assert stack.current_data is None
    assert stack.root_exported == {"k": 1}


def test_frames_get_fresh_export_slots() -> None:
    stack = FrameStack()
    stack.current_exported["k"] = "root"
    frame = Frame(target="a", path="/a", data={"x": 1})

    stack.push(frame)

    assert stack.current is frame
    assert stack.current_data == {"x": 1}
    assert stack.current_exported == {}
    assert len(stack) == 1
    assert stack.pop() is frame
    assert stack.current_exported == {"k": "root"}


def test_frame_buffer() -> None:
    frame = Frame(target="a", path="/a", data={})

    frame.write("x")
    frame.write("y")

    assert frame.output() == "xy"
