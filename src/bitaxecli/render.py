from __future__ import annotations

import dataclasses
from typing import List, Optional

from rich.table import Table
from rich.text import Text

from .telemetry import TelemetryRecord


@dataclasses.dataclass(frozen=True)
class DisplayFormat:
    attr: str
    label: str
    precision: Optional[int] = None  # None: show the value verbatim
    unit: str = ""
    scale: float = 1.0  # divisor applied before formatting

    def format(self, value: float | str) -> str:
        if self.precision is None or isinstance(value, str):
            return str(value)
        text = f"{value / self.scale:.{self.precision}f}"
        return f"{text} {self.unit}" if self.unit else text


@dataclasses.dataclass(frozen=True)
class DisplayLine:
    label: str
    value: str

    def __str__(self) -> str:
        return f"{self.label}: {self.value}"


DISPLAY_FORMATS: List[DisplayFormat] = [
    DisplayFormat("hostname", "Hostname"),
    DisplayFormat("hash_rate", "Hashrate", 2, "GH/s"),
    DisplayFormat("best_diff", "Best Diff"),
    DisplayFormat("best_session_diff", "Best Session Diff"),
    DisplayFormat("shares_accepted", "Shares Accepted", 0),
    DisplayFormat("shares_rejected", "Shares Rejected", 0),
    DisplayFormat("temp", "Core Temp", 1, "°C"),
    DisplayFormat("vr_temp", "VR Temp", 1, "°C"),
    DisplayFormat("power", "Power", 2, "W"),
    # device reports millivolts
    DisplayFormat("voltage", "Voltage", 2, "V", scale=1000.0),
    DisplayFormat("frequency", "Frequency", 0, "MHz"),
    DisplayFormat("core_voltage", "Core Voltage", 0, "mV"),
    DisplayFormat("core_voltage_actual", "Core Voltage Actual", 0, "mV"),
    DisplayFormat("wifi_rssi", "WiFi RSSI", 0, "dBm"),
    DisplayFormat("wifi_status", "WiFi Status"),
]


def render(record: TelemetryRecord) -> List[DisplayLine]:
    """Format the present fields of a record, in fixed display order."""
    lines: List[DisplayLine] = []
    for fmt in DISPLAY_FORMATS:
        value = getattr(record, fmt.attr)
        if value is None:
            continue
        lines.append(DisplayLine(fmt.label, fmt.format(value)))
    return lines


def render_table(record: TelemetryRecord, title: str = "Bitaxe") -> Table:
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for line in render(record):
        table.add_row(Text(line.label), Text(line.value))
    return table
