import unittest

from tickerpi.station.interfaces import ClimateSample
from tickerpi.station.sampler import PressureReading, SensorReading, SensorSampler


class FakeClimateSensor:
    def __init__(self, sample=None, error=None):
        self.sample = sample
        self.error = error
        self.calls = 0

    def read_climate(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.sample

    def close(self):
        return None


class FakePressureSensor:
    def __init__(self, pressure=None, error=None):
        self.pressure = pressure
        self.error = error
        self.calls = 0

    def read_pressure(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.pressure

    def close(self):
        return None


class TestSensorSampler(unittest.TestCase):
    def test_all_readings_present(self):
        sampler = SensorSampler(
            FakeClimateSensor(ClimateSample(temperature=21.5, humidity=40.2)),
            FakePressureSensor(1001.3),
        )

        reading, pressure = sampler.sample()

        self.assertEqual(reading, SensorReading(temperature_c=21.5, humidity_pct=40.2))
        self.assertEqual(pressure, PressureReading(local_pressure_hpa=1001.3))

    def test_zero_reading_is_not_absent(self):
        sampler = SensorSampler(
            FakeClimateSensor(ClimateSample(temperature=0.0, humidity=0.0)),
            FakePressureSensor(0.0),
        )

        reading, pressure = sampler.sample()

        self.assertEqual(reading.temperature_c, 0.0)
        self.assertEqual(pressure.local_pressure_hpa, 0.0)

    def test_partial_data(self):
        climate = FakeClimateSensor(ClimateSample(temperature=19.0, humidity=55.0))
        pressure_sensor = FakePressureSensor(None)
        sampler = SensorSampler(climate, pressure_sensor)

        reading, pressure = sampler.sample()

        self.assertEqual(reading.temperature_c, 19.0)
        self.assertIsNone(pressure.local_pressure_hpa)
        self.assertEqual(pressure_sensor.calls, 1)

    def test_sensor_error_is_absent_without_retry(self):
        climate = FakeClimateSensor(error=OSError("i2c nack"))
        sampler = SensorSampler(climate, FakePressureSensor(990.0))

        with self.assertLogs("tickerpi.station.sampler", level="ERROR"):
            reading, pressure = sampler.sample()

        self.assertEqual(reading, SensorReading())
        self.assertEqual(pressure.local_pressure_hpa, 990.0)
        self.assertEqual(climate.calls, 1)

    def test_non_numeric_value_is_absent_for_that_field_only(self):
        sampler = SensorSampler(
            FakeClimateSensor(ClimateSample(temperature="err", humidity=40.0)),
            FakePressureSensor(1003.5),
        )

        reading, pressure = sampler.sample()

        self.assertIsNone(reading.temperature_c)
        self.assertEqual(reading.humidity_pct, 40.0)
        self.assertEqual(pressure.local_pressure_hpa, 1003.5)

    def test_nan_values_are_absent(self):
        sampler = SensorSampler(
            FakeClimateSensor(ClimateSample(temperature=float("nan"), humidity=33.0)),
            FakePressureSensor(float("nan")),
        )

        reading, pressure = sampler.sample()

        self.assertIsNone(reading.temperature_c)
        self.assertEqual(reading.humidity_pct, 33.0)
        self.assertIsNone(pressure.local_pressure_hpa)


if __name__ == "__main__":
    unittest.main()
