import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple

from tickerpi.station.altitude import compute_altitude
from tickerpi.station.interfaces import BatteryGauge, Display
from tickerpi.station.qnh import ReferencePressureFetcher
from tickerpi.station.quotes import QuoteFetcher
from tickerpi.station.render import render_frame
from tickerpi.station.sampler import SensorSampler
from tickerpi.station.state import DisplayState


logger = logging.getLogger(__name__)

REFRESH_INTERVAL_MS = 45_000
TONE_DURATION_MS = 200


@dataclass(frozen=True)
class Tone:
    frequency_hz: float
    duration_ms: int = TONE_DURATION_MS


@dataclass(frozen=True)
class RefreshDecision:
    due: bool
    toggled_symbol: bool = False
    tones: Tuple[Tone, ...] = ()


@dataclass
class RefreshPipeline:
    sampler: SensorSampler
    reference: ReferencePressureFetcher
    quotes: QuoteFetcher
    display: Display
    battery: Optional[BatteryGauge] = None
    clock: Callable[[], dt.datetime] = dt.datetime.now

    def _battery_percent(self):
        if self.battery is None:
            return None
        try:
            return self.battery.percent()
        except Exception:
            logger.exception("Battery gauge read failed")
            return None

    def run(self, state: DisplayState):
        sensor_reading, pressure_reading = self.sampler.sample()

        altitude = None
        if pressure_reading.local_pressure_hpa is not None:
            sea_level = self.reference.fetch_sea_level_pressure()
            altitude = compute_altitude(pressure_reading.local_pressure_hpa, sea_level)

        symbol = state.selected_symbol
        quote = self.quotes.fetch_quote(symbol)
        if quote is not None:
            state.apply_quote(quote)

        frame = render_frame(
            sensor_reading,
            pressure_reading,
            altitude,
            state,
            self.clock(),
            battery_pct=self._battery_percent(),
        )
        self.display.show(frame)
        logger.info("Refreshed %s (quote updated=%s)", symbol, quote is not None)
        return frame


@dataclass
class RefreshScheduler:
    state: DisplayState
    pipeline: RefreshPipeline
    tone_a: Tone
    tone_b: Tone
    interval_ms: int = REFRESH_INTERVAL_MS
    acknowledge: Optional[Callable[[Tone], None]] = None
    refresh_count: int = field(default=0, init=False)

    def is_due(self, now_ms, button_a_edge=False, button_b_edge=False):
        if button_a_edge or button_b_edge:
            return True
        last = self.state.last_refresh_ms
        return last is None or now_ms - last >= self.interval_ms

    def decide(self, now_ms, button_a_edge=False, button_b_edge=False):
        tones = []
        if button_a_edge:
            self.state.toggle_symbol()
            tones.append(self.tone_a)
        if button_b_edge:
            tones.append(self.tone_b)
        return RefreshDecision(
            due=self.is_due(now_ms, button_a_edge, button_b_edge),
            toggled_symbol=button_a_edge,
            tones=tuple(tones),
        )

    def execute(self, now_ms):
        try:
            self.pipeline.run(self.state)
        except Exception:
            logger.exception("Refresh cycle failed")
        finally:
            self.state.mark_refreshed(now_ms)
            self.refresh_count += 1
            logger.debug("Refresh #%d finished at %d ms", self.refresh_count, now_ms)

    def tick(self, now_ms, button_a_edge=False, button_b_edge=False):
        decision = self.decide(now_ms, button_a_edge, button_b_edge)
        if self.acknowledge is not None:
            for tone in decision.tones:
                try:
                    self.acknowledge(tone)
                except Exception:
                    logger.exception("Acknowledgment tone failed")
        if decision.due:
            self.execute(now_ms)
        return decision
