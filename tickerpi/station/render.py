import math
from dataclasses import dataclass
from typing import Tuple

from tickerpi.station.quotes import Direction


PLACEHOLDER = "--"

WHITE = (255, 255, 255)
GREEN = (0, 200, 0)
RED = (220, 0, 0)
GREY = (160, 160, 160)


class Layout:
    TOP_BAR_Y = 4
    TOP_BAR_SIZE = 14
    TEMPERATURE_X = 4
    HUMIDITY_X = 64
    BATTERY_X = 112
    PRESSURE_X = 160
    ALTITUDE_X = 250

    SYMBOL_X = 10
    SYMBOL_Y = 60
    SYMBOL_SIZE = 40
    BID_ASK_X = 10
    BID_ASK_Y = 130
    BID_ASK_SIZE = 24
    CLOCK_X = 10
    CLOCK_Y = 200
    CLOCK_SIZE = 16


@dataclass(frozen=True)
class TextItem:
    text: str
    x: int
    y: int
    size: int
    color: Tuple[int, int, int] = WHITE


@dataclass(frozen=True)
class Frame:
    top_bar: Tuple[TextItem, ...]
    main: Tuple[TextItem, ...]

    def items(self):
        return self.top_bar + self.main


def format_value(value, decimals, suffix=""):
    if value is None:
        return PLACEHOLDER
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return PLACEHOLDER
    return f"{value:.{decimals}f}{suffix}"


def direction_color(direction):
    return GREEN if direction is Direction.UP else RED


def render_top_bar(sensor_reading, pressure_reading, altitude, battery_pct):
    size = Layout.TOP_BAR_SIZE
    y = Layout.TOP_BAR_Y
    return (
        TextItem(format_value(sensor_reading.temperature_c, 1, "C"), Layout.TEMPERATURE_X, y, size),
        TextItem(format_value(sensor_reading.humidity_pct, 0, "%"), Layout.HUMIDITY_X, y, size),
        TextItem(format_value(battery_pct, 0, "%"), Layout.BATTERY_X, y, size, GREY),
        TextItem(
            format_value(pressure_reading.local_pressure_hpa, 1, "hPa"),
            Layout.PRESSURE_X,
            y,
            size,
        ),
        TextItem(format_value(altitude, 0, "m"), Layout.ALTITUDE_X, y, size),
    )


def render_main(display_state, clock_now):
    quote = display_state.current_quote
    # Labelled with the selected symbol even when the quote is stale from the other one.
    headline = f"{display_state.selected_symbol}:{format_value(quote.last, 2)}"
    bid_ask = f"{format_value(quote.bid, 2)} / {format_value(quote.ask, 2)}"
    return (
        TextItem(headline, Layout.SYMBOL_X, Layout.SYMBOL_Y, Layout.SYMBOL_SIZE),
        TextItem(
            bid_ask,
            Layout.BID_ASK_X,
            Layout.BID_ASK_Y,
            Layout.BID_ASK_SIZE,
            direction_color(quote.direction),
        ),
        TextItem(
            clock_now.strftime("%Y-%m-%d %H:%M"),
            Layout.CLOCK_X,
            Layout.CLOCK_Y,
            Layout.CLOCK_SIZE,
            GREY,
        ),
    )


def render_frame(sensor_reading, pressure_reading, altitude, display_state, clock_now, battery_pct=None):
    return Frame(
        top_bar=render_top_bar(sensor_reading, pressure_reading, altitude, battery_pct),
        main=render_main(display_state, clock_now),
    )
