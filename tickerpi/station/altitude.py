import math


SEA_LEVEL_STANDARD_HPA = 1013.25


def compute_altitude(local_pressure_hpa, sea_level_hpa):
    """Barometric altitude in meters, or None when no usable local pressure.

    Only valid inside the troposphere; the formula is applied as-is outside it.
    """
    if local_pressure_hpa is None or math.isnan(local_pressure_hpa):
        return None
    if local_pressure_hpa <= 0 or sea_level_hpa <= 0:
        return None
    return 44330.0 * (1.0 - math.pow(local_pressure_hpa / sea_level_hpa, 1.0 / 5.255))
