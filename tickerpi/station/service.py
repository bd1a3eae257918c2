import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from tickerpi.station.config import load_config
from tickerpi.station.hardware import (
    BME280ClimateSensor,
    BME280PressureSensor,
    GpioBuzzer,
    PillowDisplay,
    RequestsHttpClient,
    SocketNetworkLink,
    SysfsBatteryGauge,
    open_gpio_button,
)
from tickerpi.station.inputs import Button, InputHandler
from tickerpi.station.interfaces import Buzzer
from tickerpi.station.qnh import ReferencePressureFetcher
from tickerpi.station.quotes import QuoteFetcher
from tickerpi.station.sampler import SensorSampler
from tickerpi.station.scheduler import RefreshPipeline, RefreshScheduler, Tone
from tickerpi.station.state import DisplayState


logger = logging.getLogger(__name__)


def monotonic_ms():
    return time.monotonic_ns() // 1_000_000


def _close_quietly(resource, name):
    if resource is None:
        return
    try:
        resource.close()
    except Exception:
        logger.exception("Failed to close %s on shutdown", name)


@dataclass
class TickerStationService:
    inputs: InputHandler
    scheduler: RefreshScheduler
    poll_seconds: float
    buzzer: Optional[Buzzer] = None
    resources: Sequence = ()

    @property
    def state(self):
        return self.scheduler.state

    def status_text(self):
        return self.state.status_text()

    def play_tone(self, tone):
        if self.buzzer is not None:
            self.buzzer.play(tone.frequency_hz, tone.duration_ms)

    def run_once(self):
        edges = self.inputs.poll_edges()
        decision = self.scheduler.tick(monotonic_ms(), edges.a, edges.b)
        if not decision.due:
            time.sleep(self.poll_seconds)
        return decision

    def run_forever(self, max_ticks=None):
        ticks = 0
        while max_ticks is None or ticks < max_ticks:
            self.run_once()
            ticks += 1

    def shutdown(self):
        _close_quietly(self.buzzer, "buzzer")
        for resource in self.resources:
            _close_quietly(resource, type(resource).__name__)


def build_default_service():
    config = load_config()
    opened = []
    try:
        try:
            climate_sensor = BME280ClimateSensor(config.i2c_port, config.climate_i2c_addr)
        except Exception:
            logger.exception("Climate sensor init failed")
            raise RuntimeError("Climate sensor not detected; refusing to start")
        opened.append(climate_sensor)

        try:
            pressure_sensor = BME280PressureSensor(config.i2c_port, config.pressure_i2c_addr)
        except Exception:
            logger.exception("Pressure sensor init failed")
            raise RuntimeError("Pressure sensor not detected; refusing to start")
        opened.append(pressure_sensor)

        http = RequestsHttpClient(timeout=config.http_timeout)
        opened.append(http)
        network = SocketNetworkLink(
            config.network_probe_host,
            config.network_probe_port,
            timeout=config.network_probe_timeout,
        )
        display = PillowDisplay(
            config.display_width,
            config.display_height,
            config.display_output,
            font_path=config.font_path,
        )
        opened.append(display)

        buttons = {}
        buzzer = None
        try:
            buttons[Button.A] = open_gpio_button(config.button_a_pin)
            buttons[Button.B] = open_gpio_button(config.button_b_pin)
            buzzer = GpioBuzzer(config.buzzer_pin)
        except Exception:
            logger.exception("GPIO init failed; continuing without buttons or buzzer")
        opened.extend(buttons.values())

        state = DisplayState(symbol_a=config.symbol_a, symbol_b=config.symbol_b)
        pipeline = RefreshPipeline(
            sampler=SensorSampler(climate_sensor, pressure_sensor),
            reference=ReferencePressureFetcher(http=http, network=network, url=config.qnh_url),
            quotes=QuoteFetcher(
                http=http,
                network=network,
                url=config.quote_url,
                auth_param=config.quote_auth_param,
                token=config.quote_token,
            ),
            display=display,
            battery=SysfsBatteryGauge(config.battery_path),
        )
        scheduler = RefreshScheduler(
            state=state,
            pipeline=pipeline,
            tone_a=Tone(config.tone_a_hz),
            tone_b=Tone(config.tone_b_hz),
        )
        service = TickerStationService(
            inputs=InputHandler(buttons),
            scheduler=scheduler,
            poll_seconds=config.poll_ms / 1000.0,
            buzzer=buzzer,
            resources=tuple(opened),
        )
        scheduler.acknowledge = service.play_tone
        return service
    except Exception:
        for resource in opened:
            _close_quietly(resource, type(resource).__name__)
        raise


def run_station_loop(max_ticks=None):
    service = None

    try:
        logger.info("Starting tickerpi display controller")
        service = build_default_service()
        service.run_forever(max_ticks=max_ticks)
    finally:
        if service is not None:
            service.shutdown()
