import os
from dataclasses import dataclass
from typing import Optional

from tickerpi.common.env import env_float, env_hex_int, env_int


DEFAULT_QNH_URL = "https://tgftp.nws.noaa.gov/data/observations/metar/stations/LSZH.TXT"
DEFAULT_QUOTE_URL = "http://127.0.0.1:8000/marketdata/quotes"


@dataclass(frozen=True)
class StationConfig:
    symbol_a: str
    symbol_b: str
    qnh_url: str
    quote_url: str
    quote_auth_param: str
    quote_token: str
    http_timeout: float
    network_probe_host: str
    network_probe_port: int
    network_probe_timeout: float
    i2c_port: int
    climate_i2c_addr: int
    pressure_i2c_addr: int
    button_a_pin: int
    button_b_pin: int
    buzzer_pin: int
    tone_a_hz: float
    tone_b_hz: float
    poll_ms: int
    display_width: int
    display_height: int
    display_output: str
    font_path: Optional[str]
    battery_path: str
    log_level: str


def load_config():
    return StationConfig(
        symbol_a=os.getenv("TICKERPI_SYMBOL_A", "NVDA").upper(),
        symbol_b=os.getenv("TICKERPI_SYMBOL_B", "AAPL").upper(),
        qnh_url=os.getenv("TICKERPI_QNH_URL", DEFAULT_QNH_URL),
        quote_url=os.getenv("TICKERPI_QUOTE_URL", DEFAULT_QUOTE_URL),
        quote_auth_param=os.getenv("TICKERPI_QUOTE_AUTH_PARAM", "apikey"),
        quote_token=os.getenv("TICKERPI_QUOTE_TOKEN", ""),
        http_timeout=env_float("TICKERPI_HTTP_TIMEOUT", 10.0),
        network_probe_host=os.getenv("TICKERPI_NETWORK_PROBE_HOST", "1.1.1.1"),
        network_probe_port=env_int("TICKERPI_NETWORK_PROBE_PORT", 53),
        network_probe_timeout=env_float("TICKERPI_NETWORK_PROBE_TIMEOUT", 2.0),
        i2c_port=env_int("TICKERPI_I2C_PORT", 1),
        climate_i2c_addr=env_hex_int("TICKERPI_CLIMATE_I2C_ADDR", 0x76),
        pressure_i2c_addr=env_hex_int("TICKERPI_PRESSURE_I2C_ADDR", 0x76),
        button_a_pin=env_int("TICKERPI_BUTTON_A_PIN", 17),
        button_b_pin=env_int("TICKERPI_BUTTON_B_PIN", 27),
        buzzer_pin=env_int("TICKERPI_BUZZER_PIN", 18),
        tone_a_hz=env_float("TICKERPI_TONE_A_HZ", 1000.0),
        tone_b_hz=env_float("TICKERPI_TONE_B_HZ", 2000.0),
        poll_ms=env_int("TICKERPI_POLL_MS", 50),
        display_width=env_int("TICKERPI_DISPLAY_WIDTH", 320),
        display_height=env_int("TICKERPI_DISPLAY_HEIGHT", 240),
        display_output=os.getenv("TICKERPI_DISPLAY_OUTPUT", "/dev/shm/tickerpi.png"),
        font_path=os.getenv("TICKERPI_FONT_PATH") or None,
        battery_path=os.getenv(
            "TICKERPI_BATTERY_PATH", "/sys/class/power_supply/BAT0/capacity"
        ),
        log_level=os.getenv("TICKERPI_LOG_LEVEL", "INFO").upper(),
    )
