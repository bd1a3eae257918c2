import logging
import os
import pathlib
import socket
import time

from tickerpi.station.interfaces import ClimateSample, FetchError, HttpResponse


logger = logging.getLogger(__name__)


class BME280Sensor:
    def __init__(self, i2c_port, i2c_addr):
        import bme280
        import smbus2

        self.i2c_addr = i2c_addr
        self.bme280 = bme280
        self.bus = smbus2.SMBus(i2c_port)
        self.calibration = self.bme280.load_calibration_params(self.bus, i2c_addr)

    def read(self):
        try:
            return self.bme280.sample(self.bus, self.i2c_addr, self.calibration)
        except OSError:
            logger.debug("BME280 at 0x%02x did not answer", self.i2c_addr)
            return None

    def close(self):
        self.bus.close()


class BME280ClimateSensor(BME280Sensor):
    def read_climate(self):
        data = self.read()
        if data is None:
            return None
        return ClimateSample(temperature=data.temperature, humidity=data.humidity)


class BME280PressureSensor(BME280Sensor):
    def read_pressure(self):
        data = self.read()
        if data is None:
            return None
        return data.pressure


class RequestsHttpClient:
    def __init__(self, timeout=10.0, session=None):
        import requests

        self.requests = requests
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, url, params=None, headers=None):
        try:
            with self.session.get(
                url,
                params=dict(params or {}),
                headers=dict(headers or {}),
                timeout=self.timeout,
            ) as response:
                return HttpResponse(status_code=response.status_code, text=response.text)
        except self.requests.RequestException as exc:
            raise FetchError(str(exc)) from exc

    def close(self):
        self.session.close()


class SocketNetworkLink:
    def __init__(self, host, port, timeout=2.0):
        self.host = host
        self.port = port
        self.timeout = timeout

    def is_connected(self):
        try:
            conn = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError:
            return False
        conn.close()
        return True


class PillowDisplay:
    def __init__(self, width, height, output_path, font_path=None):
        from PIL import Image, ImageDraw, ImageFont

        self.Image = Image
        self.ImageDraw = ImageDraw
        self.ImageFont = ImageFont
        self.width = width
        self.height = height
        self.output_path = pathlib.Path(output_path)
        self.font_path = font_path
        self._fonts = {}

    def _font(self, size):
        font = self._fonts.get(size)
        if font is None:
            if self.font_path:
                font = self.ImageFont.truetype(self.font_path, size)
            else:
                font = self.ImageFont.load_default(size=size)
            self._fonts[size] = font
        return font

    def draw(self, frame):
        image = self.Image.new("RGB", (self.width, self.height), "black")
        canvas = self.ImageDraw.Draw(image)
        for item in frame.items():
            canvas.text((item.x, item.y), item.text, fill=item.color, font=self._font(item.size))
        return image

    def show(self, frame):
        image = self.draw(frame)
        tmp_path = self.output_path.with_name(self.output_path.name + ".tmp")
        image.save(tmp_path, format="PNG")
        os.replace(tmp_path, self.output_path)

    def close(self):
        self._fonts.clear()


class GpioBuzzer:
    def __init__(self, pin):
        from gpiozero import TonalBuzzer
        from gpiozero.tones import Tone

        self.Tone = Tone
        self.buzzer = TonalBuzzer(pin, octaves=3)

    def play(self, frequency_hz, duration_ms):
        self.buzzer.play(self.Tone(frequency=frequency_hz))
        try:
            time.sleep(duration_ms / 1000.0)
        finally:
            self.buzzer.stop()

    def close(self):
        self.buzzer.close()


def open_gpio_button(pin):
    from gpiozero import Button

    return Button(pin)


class SysfsBatteryGauge:
    def __init__(self, path):
        self.path = pathlib.Path(path)

    def percent(self):
        try:
            raw = self.path.read_text().strip()
        except OSError:
            return None
        try:
            value = int(raw)
        except ValueError:
            return None
        return max(0, min(100, value))
