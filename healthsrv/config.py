# healthsrv/config.py
import logging

APP_NAME = "healthsrv"

# Listening address and minimum log level are fixed; there is no flag or
# env override.
LISTEN_HOST = "0.0.0.0"
LISTEN_PORT = 8000
LOG_LEVEL = logging.INFO


def listen_addr() -> str:
    return f":{LISTEN_PORT}"
