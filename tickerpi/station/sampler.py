import logging
import math
from dataclasses import dataclass
from typing import Optional

from tickerpi.station.interfaces import ClimateSensor, PressureSensor


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensorReading:
    temperature_c: Optional[float] = None
    humidity_pct: Optional[float] = None


@dataclass(frozen=True)
class PressureReading:
    local_pressure_hpa: Optional[float] = None


def _present(value):
    if value is None:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


@dataclass
class SensorSampler:
    climate_sensor: ClimateSensor
    pressure_sensor: PressureSensor

    def _sample_climate(self):
        try:
            sample = self.climate_sensor.read_climate()
        except Exception:
            logger.exception("Climate sensor read failed")
            return SensorReading()
        if sample is None:
            logger.debug("Climate sensor reported no new sample")
            return SensorReading()
        return SensorReading(
            temperature_c=_present(sample.temperature),
            humidity_pct=_present(sample.humidity),
        )

    def _sample_pressure(self):
        try:
            pressure = self.pressure_sensor.read_pressure()
        except Exception:
            logger.exception("Pressure sensor read failed")
            return PressureReading()
        if pressure is None:
            logger.debug("Pressure sensor reported no new sample")
        return PressureReading(local_pressure_hpa=_present(pressure))

    def sample(self):
        return self._sample_climate(), self._sample_pressure()
