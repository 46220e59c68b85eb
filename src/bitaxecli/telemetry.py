"""Tolerant extraction of AxeOS /api/system/info payloads."""

from __future__ import annotations

import dataclasses
import enum
from typing import Any, Dict, List, Optional, Union


class FieldKind(enum.Enum):
    NUMBER = "number"
    TEXT = "text"
    NUMBER_OR_TEXT = "number_or_text"


@dataclasses.dataclass(frozen=True)
class FieldSpec:
    key: str
    attr: str
    kind: FieldKind


# Display order; do not sort.
TELEMETRY_FIELDS: List[FieldSpec] = [
    FieldSpec("hostname", "hostname", FieldKind.TEXT),
    FieldSpec("hashRate", "hash_rate", FieldKind.NUMBER),
    FieldSpec("bestDiff", "best_diff", FieldKind.NUMBER_OR_TEXT),
    FieldSpec("bestSessionDiff", "best_session_diff", FieldKind.NUMBER_OR_TEXT),
    FieldSpec("sharesAccepted", "shares_accepted", FieldKind.NUMBER),
    FieldSpec("sharesRejected", "shares_rejected", FieldKind.NUMBER),
    FieldSpec("temp", "temp", FieldKind.NUMBER),
    FieldSpec("vrTemp", "vr_temp", FieldKind.NUMBER),
    FieldSpec("power", "power", FieldKind.NUMBER),
    FieldSpec("voltage", "voltage", FieldKind.NUMBER),
    FieldSpec("frequency", "frequency", FieldKind.NUMBER),
    FieldSpec("coreVoltage", "core_voltage", FieldKind.NUMBER),
    FieldSpec("coreVoltageActual", "core_voltage_actual", FieldKind.NUMBER),
    FieldSpec("wifiRSSI", "wifi_rssi", FieldKind.NUMBER),
    FieldSpec("wifiStatus", "wifi_status", FieldKind.TEXT),
]


@dataclasses.dataclass(frozen=True)
class TelemetryRecord:
    """One status snapshot. None means the device did not report the field."""

    hostname: Optional[str] = None
    hash_rate: Optional[float] = None
    best_diff: Optional[str] = None
    best_session_diff: Optional[str] = None
    shares_accepted: Optional[float] = None
    shares_rejected: Optional[float] = None
    temp: Optional[float] = None
    vr_temp: Optional[float] = None
    power: Optional[float] = None
    voltage: Optional[float] = None
    frequency: Optional[float] = None
    core_voltage: Optional[float] = None
    core_voltage_actual: Optional[float] = None
    wifi_rssi: Optional[float] = None
    wifi_status: Optional[str] = None

    def as_dict(self) -> Dict[str, Union[int, float, str]]:
        """Present fields keyed by their device key, in display order.

        Whole-number values are emitted as ints.
        """
        out: Dict[str, Union[int, float, str]] = {}
        for spec in TELEMETRY_FIELDS:
            value = getattr(self, spec.attr)
            if value is None:
                continue
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            out[spec.key] = value
        return out


def _is_number(value: Any) -> bool:
    # JSON true/false decode to bool, which is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_text(value: Union[int, float]) -> str:
    if isinstance(value, int):
        return str(value)
    return repr(float(value))


def extract_field(value: Any, kind: FieldKind) -> Union[float, str, None]:
    if kind is FieldKind.NUMBER:
        if not _is_number(value):
            return None
        try:
            return float(value)
        except OverflowError:
            # integer wider than a double
            return None
    if kind is FieldKind.TEXT:
        return value if isinstance(value, str) else None
    if kind is FieldKind.NUMBER_OR_TEXT:
        if _is_number(value):
            return _number_text(value)
        return value if isinstance(value, str) else None
    raise ValueError(f"unknown field kind: {kind!r}")


def extract(doc: Any) -> TelemetryRecord:
    """Build a TelemetryRecord from a decoded JSON document.

    Missing keys, wrongly typed values and extra keys are all tolerated;
    anything that does not match a field's kind is treated as absent.
    """
    if not isinstance(doc, dict):
        return TelemetryRecord()
    values = {spec.attr: extract_field(doc.get(spec.key), spec.kind) for spec in TELEMETRY_FIELDS}
    return TelemetryRecord(**values)
