from __future__ import annotations

import dataclasses
import logging
import tomllib
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from .const import CONFIG_PATH, ENV_URL
from .exceptions import ConfigMalformed, NoHostConfigured

_LOGGER = logging.getLogger(__name__)

# (source name, provider); providers are only called when every earlier source is absent
AddressSource = Tuple[str, Callable[[], Optional[str]]]


@dataclasses.dataclass(frozen=True)
class ResolvedAddress:
    url: str
    source: str


def _given(value: Optional[str]) -> Optional[str]:
    # the flag is taken as typed; only an empty string counts as absent
    return value or None


def _present(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def load_config(path: str = CONFIG_PATH) -> Optional[dict[str, Any]]:
    """Parse the TOML config file, or return None if it does not exist."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        raise ConfigMalformed(f"Config file {path} is not valid TOML: {e}") from e
    except OSError as e:
        raise ConfigMalformed(f"Config file {path} could not be read: {e}") from e
    return data


def load_file_host(path: str = CONFIG_PATH) -> Optional[str]:
    cfg = load_config(path)
    if cfg is None:
        _LOGGER.debug("No config file at %s", path)
        return None
    host = cfg.get("host")
    if host is None:
        return None
    if not isinstance(host, str):
        raise ConfigMalformed(
            f"Config file {path}: 'host' must be a string, got {type(host).__name__}"
        )
    return _present(host)


def default_sources(
    override: Optional[str],
    environ: Mapping[str, str],
    config_path: str = CONFIG_PATH,
) -> list[AddressSource]:
    return [
        ("flag", lambda: _given(override)),
        ("env", lambda: _present(environ.get(ENV_URL))),
        ("config", lambda: load_file_host(config_path)),
    ]


def resolve_sources(sources: Iterable[AddressSource], config_path: str = CONFIG_PATH) -> ResolvedAddress:
    """Return the first present source, in order.

    Raises NoHostConfigured when every provider yields nothing. Errors
    raised by a provider (a malformed config file) propagate unchanged.
    """
    for name, provider in sources:
        value = provider()
        if value is not None:
            _LOGGER.debug("Device address %s taken from %s", value, name)
            return ResolvedAddress(url=value, source=name)
    raise NoHostConfigured(
        "No host configured. Use --host, set the "
        f"{ENV_URL} environment variable, or set host in {config_path}"
    )


def resolve_address(
    override: Optional[str] = None,
    env: Optional[str] = None,
    file_value: Optional[str] = None,
) -> str:
    sources: list[AddressSource] = [
        ("flag", lambda: _given(override)),
        ("env", lambda: _present(env)),
        ("config", lambda: _present(file_value)),
    ]
    return resolve_sources(sources).url
