import pathlib
import tempfile
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import requests

from tickerpi.station.hardware import (
    PillowDisplay,
    RequestsHttpClient,
    SocketNetworkLink,
    SysfsBatteryGauge,
)
from tickerpi.station.interfaces import FetchError
from tickerpi.station.render import Frame, TextItem


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TestRequestsHttpClient(unittest.TestCase):
    def test_get_returns_status_and_body(self):
        session = MagicMock()
        session.get.return_value = FakeResponse(200, "Q1019")
        client = RequestsHttpClient(timeout=4, session=session)

        response = client.get("https://metar.test", params={"a": "1"}, headers={"X": "y"})

        self.assertTrue(response.ok)
        self.assertEqual(response.text, "Q1019")
        session.get.assert_called_once_with(
            "https://metar.test", params={"a": "1"}, headers={"X": "y"}, timeout=4
        )

    def test_non_ok_status_is_not_an_error(self):
        session = MagicMock()
        session.get.return_value = FakeResponse(404, "missing")
        client = RequestsHttpClient(session=session)

        response = client.get("https://metar.test")

        self.assertFalse(response.ok)
        self.assertEqual(response.status_code, 404)

    def test_transport_error_becomes_fetch_error(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")
        client = RequestsHttpClient(session=session)

        with self.assertRaises(FetchError):
            client.get("https://metar.test")


class TestSocketNetworkLink(unittest.TestCase):
    @patch("tickerpi.station.hardware.socket.create_connection")
    def test_connected(self, create_connection):
        conn = MagicMock()
        create_connection.return_value = conn

        self.assertTrue(SocketNetworkLink("1.1.1.1", 53, timeout=1).is_connected())
        create_connection.assert_called_once_with(("1.1.1.1", 53), timeout=1)
        conn.close.assert_called_once()

    @patch("tickerpi.station.hardware.socket.create_connection", side_effect=OSError("down"))
    def test_unreachable(self, _create_connection):
        self.assertFalse(SocketNetworkLink("1.1.1.1", 53).is_connected())


class TestSysfsBatteryGauge(unittest.TestCase):
    def test_reads_and_clamps_capacity(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = pathlib.Path(tmp) / "capacity"
            path.write_text("87\n")
            self.assertEqual(SysfsBatteryGauge(path).percent(), 87)
            path.write_text("104\n")
            self.assertEqual(SysfsBatteryGauge(path).percent(), 100)
            path.write_text("charging\n")
            self.assertIsNone(SysfsBatteryGauge(path).percent())

    def test_missing_gauge(self):
        self.assertIsNone(SysfsBatteryGauge("/nonexistent/capacity").percent())


class TestPillowDisplay(unittest.TestCase):
    def test_show_writes_frame_image(self):
        frame = Frame(
            top_bar=(TextItem("21.0C", 4, 4, 14),),
            main=(TextItem("NVDA:123.45", 10, 60, 40, (0, 200, 0)),),
        )
        with tempfile.TemporaryDirectory() as tmp:
            output = pathlib.Path(tmp) / "frame.png"
            display = PillowDisplay(320, 240, output)

            display.show(frame)

            self.assertTrue(output.exists())
            self.assertFalse(output.with_name("frame.png.tmp").exists())
            from PIL import Image

            with Image.open(output) as image:
                self.assertEqual(image.size, (320, 240))
                self.assertIsNotNone(image.getbbox())


class TestBME280Adapters(unittest.TestCase):
    def test_climate_and_pressure_adapters(self):
        sample = SimpleNamespace(temperature=22.5, humidity=40.0, pressure=1001.2)
        fake_bme280 = MagicMock()
        fake_bme280.sample.return_value = sample
        fake_smbus2 = MagicMock()

        with patch.dict("sys.modules", {"bme280": fake_bme280, "smbus2": fake_smbus2}):
            from tickerpi.station.hardware import BME280ClimateSensor, BME280PressureSensor

            climate = BME280ClimateSensor(1, 0x76)
            pressure = BME280PressureSensor(1, 0x77)

        self.assertEqual(climate.read_climate().temperature, 22.5)
        self.assertEqual(pressure.read_pressure(), 1001.2)
        fake_bme280.sample.side_effect = OSError("nack")
        self.assertIsNone(climate.read_climate())
        self.assertIsNone(pressure.read_pressure())
        climate.close()
        fake_smbus2.SMBus.return_value.close.assert_called()


if __name__ == "__main__":
    unittest.main()
