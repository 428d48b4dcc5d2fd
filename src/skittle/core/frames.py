"""Scope frames for nested renders."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class Frame:
    """Data visible to one active render call.

    ``data`` is the computed scope of the call. ``exported`` collects values
    published with ``export()`` for renders started later in the same call;
    it never feeds back into ``data``. ``buffer`` holds the text emitted so far.
    """

    target: str
    path: str
    data: Dict[str, Any]
    exported: Dict[str, Any] = field(default_factory=dict)
    buffer: List[str] = field(default_factory=list, repr=False)

    def write(self, text: str) -> None:
        self.buffer.append(text)

    def output(self) -> str:
        return "".join(self.buffer)


class FrameStack:
    """Stack of active frames plus the root export slot.

    Exports issued while no frame is active land in the root slot and are
    picked up by the next top-level render.
    """

    def __init__(self) -> None:
        self._frames: List[Frame] = []
        self.root_exported: Dict[str, Any] = {}

    @property
    def current(self) -> Optional[Frame]:
        return self._frames[-1] if self._frames else None

    @property
    def current_data(self) -> Optional[Dict[str, Any]]:
        frame = self.current
        return frame.data if frame is not None else None

    @property
    def current_exported(self) -> Dict[str, Any]:
        frame = self.current
        return frame.exported if frame is not None else self.root_exported

    def push(self, frame: Frame) -> None:
        self._frames.append(frame)

    def pop(self) -> Frame:
        return self._frames.pop()

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(list(self._frames))


__all__ = ["Frame", "FrameStack"]
