"""
Загрузчик конфигурации калькулятора.

Конфигурация читается из YAML-файла (по умолчанию ./.arith.yaml).
Отсутствующий файл по умолчанию не является ошибкой: используются встроенные значения.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

# Single source of truth for config file lookup.
CONFIG_FILE = ".arith.yaml"
CONFIG_ENV = "ARITH_CONFIG"
DEBUG_ENV = "ARITH_DEBUG"

OutputFormat = Literal["text", "json"]
_FORMATS = ("text", "json")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_yaml = YAML(typ="safe")


@dataclass(frozen=True)
class ArithConfig:
    """
    Настройки драйвера.

    Attributes:
        prompt: Приглашение перед каждой строкой в интерактивном режиме
        format: Формат вывода результатов (text или json)
        log_level: Уровень логирования (None: определяется окружением)
    """
    prompt: str = ""
    format: OutputFormat = "text"
    log_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[str] = None) -> "ArithConfig":
        """Создание экземпляра из словаря (из YAML) со строгой проверкой ключей."""
        allowed = {f.name for f in fields(cls)}
        extras = set(data.keys()) - allowed
        if extras:
            raise ConfigError(f"unexpected keys: {sorted(extras)!r}", path)

        prompt = data.get("prompt", "")
        if not isinstance(prompt, str):
            raise ConfigError(f"prompt: expected string, got {type(prompt).__name__}", path)

        fmt = data.get("format", "text")
        if fmt not in _FORMATS:
            raise ConfigError(f"format: expected one of {list(_FORMATS)!r}, got {fmt!r}", path)

        log_level = data.get("log_level")
        if log_level is not None:
            log_level = _normalize_level(log_level, path)

        return cls(prompt=prompt, format=fmt, log_level=log_level)


def _normalize_level(level: Any, path: Optional[str] = None) -> str:
    name = str(level).upper()
    if name not in _LEVELS:
        raise ConfigError(f"log_level: expected one of {list(_LEVELS)!r}, got {level!r}", path)
    return name


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config: {e}", str(path))
    except YAMLError as e:
        raise ConfigError(f"invalid YAML: {e}", str(path))
    if not isinstance(raw, dict):
        raise ConfigError("YAML must be a mapping", str(path))
    return raw


def resolve_config_path(explicit: Optional[Path] = None, cwd: Optional[Path] = None) -> Optional[Path]:
    """
    Определяет путь к файлу конфигурации.

    Порядок: явный путь, переменная окружения ARITH_CONFIG, ./.arith.yaml.
    Явно указанный файл обязан существовать; файл по умолчанию может отсутствовать.
    """
    if explicit is not None:
        if not explicit.is_file():
            raise ConfigError("config file not found", str(explicit))
        return explicit

    env_value = os.environ.get(CONFIG_ENV)
    if env_value:
        env_path = Path(env_value)
        if not env_path.is_file():
            raise ConfigError(f"config file from ${CONFIG_ENV} not found", str(env_path))
        return env_path

    default = (cwd or Path.cwd()) / CONFIG_FILE
    return default if default.is_file() else None


def load_config(explicit: Optional[Path] = None, cwd: Optional[Path] = None) -> ArithConfig:
    path = resolve_config_path(explicit, cwd)
    if path is None:
        return ArithConfig()
    return ArithConfig.from_dict(_read_yaml_map(path), str(path))


def resolve_log_level(cli_level: Optional[str], cfg: ArithConfig) -> int:
    """CLI > конфигурация > ARITH_DEBUG > WARNING."""
    if cli_level:
        return getattr(logging, _normalize_level(cli_level))
    if cfg.log_level:
        return getattr(logging, cfg.log_level)
    if os.environ.get(DEBUG_ENV):
        return logging.DEBUG
    return logging.WARNING


def setup_logging(level: int) -> logging.Logger:
    """Единый stderr-обработчик для логгера пакета."""
    log = logging.getLogger("arith")
    log.setLevel(level)
    if not log.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        log.addHandler(h)
    return log


__all__ = [
    "CONFIG_FILE",
    "CONFIG_ENV",
    "DEBUG_ENV",
    "ArithConfig",
    "load_config",
    "resolve_config_path",
    "resolve_log_level",
    "setup_logging",
]
