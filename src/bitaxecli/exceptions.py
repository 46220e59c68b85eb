"""Exceptions for the Bitaxe CLI."""

from __future__ import annotations


class BitaxeError(Exception):
    """Base exception for Bitaxe CLI errors."""


class ConfigError(BitaxeError):
    """The device address could not be determined from configuration."""


class NoHostConfigured(ConfigError):
    """None of the address sources supplied a value."""


class ConfigMalformed(ConfigError):
    """The config file exists but could not be read or has the wrong shape."""


class TransportFailure(BitaxeError):
    """Connection, DNS or timeout error while talking to the device."""


class HttpStatusFailure(BitaxeError):
    """The device answered with a non-2xx status."""

    def __init__(self, operation: str, status_code: int) -> None:
        super().__init__(f"{operation} request failed: HTTP {status_code}")
        self.operation = operation
        self.status_code = status_code


class ResponseDecodeFailure(BitaxeError):
    """The device answered with a body that is not valid JSON."""
