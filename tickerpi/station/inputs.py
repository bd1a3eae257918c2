import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from tickerpi.station.interfaces import ButtonInput


logger = logging.getLogger(__name__)


class Button(Enum):
    A = "a"
    B = "b"


@dataclass(frozen=True)
class ButtonEdges:
    a: bool = False
    b: bool = False


class EdgeDetector:
    """Turns sampled button levels into press events, one per press."""

    def __init__(self):
        self._previous = {}

    def update(self, button, pressed):
        was_pressed = self._previous.get(button, False)
        self._previous[button] = bool(pressed)
        return bool(pressed) and not was_pressed


class InputHandler:
    def __init__(self, buttons: Mapping[Button, ButtonInput] = None):
        self.buttons = dict(buttons or {})
        self.edges = EdgeDetector()
        self.events = deque()

    def post(self, button):
        self.events.append(button)

    def poll(self):
        for button, source in self.buttons.items():
            try:
                pressed = source.is_pressed
            except Exception:
                logger.exception("Reading button %s failed", button.name)
                continue
            if self.edges.update(button, pressed):
                self.post(button)

    def take_edges(self):
        # At most one press per button per tick; later presses wait for the next tick.
        taken = set()
        pending = deque()
        while self.events:
            button = self.events.popleft()
            if button in taken:
                pending.append(button)
            else:
                taken.add(button)
        self.events.extend(pending)
        return ButtonEdges(a=Button.A in taken, b=Button.B in taken)

    def poll_edges(self):
        self.poll()
        return self.take_edges()
