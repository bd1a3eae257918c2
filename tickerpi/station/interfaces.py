from dataclasses import dataclass
from typing import Mapping, Optional, Protocol


class FetchError(Exception):
    """Transport-level failure of an HTTP fetch (timeout, DNS, connection reset)."""


@dataclass(frozen=True)
class ClimateSample:
    temperature: float
    humidity: float


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    text: str

    @property
    def ok(self):
        return self.status_code == 200


class ClimateSensor(Protocol):
    def read_climate(self) -> Optional[ClimateSample]:
        ...

    def close(self) -> None:
        ...


class PressureSensor(Protocol):
    def read_pressure(self) -> Optional[float]:
        ...

    def close(self) -> None:
        ...


class HttpClient(Protocol):
    def get(
        self,
        url: str,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> HttpResponse:
        ...

    def close(self) -> None:
        ...


class NetworkLink(Protocol):
    def is_connected(self) -> bool:
        ...


class Display(Protocol):
    def show(self, frame) -> None:
        ...

    def close(self) -> None:
        ...


class Buzzer(Protocol):
    def play(self, frequency_hz: float, duration_ms: int) -> None:
        ...

    def close(self) -> None:
        ...


class ButtonInput(Protocol):
    @property
    def is_pressed(self) -> bool:
        ...


class BatteryGauge(Protocol):
    def percent(self) -> Optional[int]:
        ...
