from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import ConfigError
from .grid import validate_size

logger = logging.getLogger(__name__)

DEFAULT_SIZE: Tuple[int, int] = (3, 3)


def config_dir() -> str:
    """LOOPOVER_CONFIG_DIR, else $XDG_CONFIG_HOME/loopover, else ~/.config/loopover."""
    explicit = os.getenv('LOOPOVER_CONFIG_DIR')
    if explicit:
        return explicit
    base = os.getenv('XDG_CONFIG_HOME') or os.path.join(os.path.expanduser('~'), '.config')
    return os.path.join(base, 'loopover')


def config_path() -> str:
    return os.path.join(config_dir(), 'config.json')


def default_db_path() -> str:
    return os.getenv('LOOPOVER_DB') or os.path.join(config_dir(), 'stats.db')


def _parse_size(value) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"default_size must be a [width, height] pair, got {value!r}")
    try:
        width, height = (int(v) for v in value)
    except (TypeError, ValueError):
        raise ConfigError(f"default_size must be a [width, height] pair, got {value!r}") from None
    return validate_size(width, height)


@dataclass
class Config:
    default_size: Tuple[int, int] = DEFAULT_SIZE

    @classmethod
    def load(cls, path: Optional[str] = None) -> 'Config':
        """
        Loads the config file. A missing or unreadable file gives the defaults;
        a readable file with an invalid size raises ConfigError.
        """
        path = path or config_path()
        try:
            with open(path, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return cls()
        except (OSError, ValueError) as e:
            logger.warning("ignoring config %s: %s", path, e)
            return cls()
        if not isinstance(data, dict):
            logger.warning("ignoring config %s: expected a JSON object", path)
            return cls()
        if 'default_size' not in data:
            return cls()
        return cls(default_size=_parse_size(data['default_size']))

    def save(self, path: Optional[str] = None) -> None:
        path = path or config_path()
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as fh:
            json.dump({'default_size': list(self.default_size)}, fh, indent=2)
