import os


def env_int(name, default):
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def env_hex_int(name, default):
    raw = os.getenv(name, hex(default))
    try:
        return int(raw, 16)
    except ValueError:
        return default


def env_float(name, default):
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default
