"""Constants for the Bitaxe CLI."""

import os

# AxeOS API endpoints
ENDPOINT_SYSTEM_INFO = "/api/system/info"
ENDPOINT_RESTART = "/api/system/restart"

ENV_URL = "BITAXE_URL"
ENV_TIMEOUT = "BITAXE_TIMEOUT"

DEFAULT_TIMEOUT = 5.0

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "bitaxe-cli")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.toml")

STATUS_HEADER = "Bitaxe Status"
