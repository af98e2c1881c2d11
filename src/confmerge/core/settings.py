# src/confmerge/core/settings.py
"""
Configuração do próprio engine.

O engine lê um conjunto mínimo de parâmetros do ambiente do processo:

    CONFMERGE_ENV             nome do ambiente de build (default: "dev")
    CONFMERGE_SORT_WILDCARD   ordena resultados de wildcard (default: true)

O ambiente de build é exposto aos arquivos de configuração via
`ConfigBuilder.env`, permitindo imports do tipo `f"{config.env}.py"`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .config.errors import ConfigError


ENV_VAR = "CONFMERGE_ENV"
SORT_WILDCARD_VAR = "CONFMERGE_SORT_WILDCARD"
DEFAULT_ENV = "dev"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineSettings:
    env: str = DEFAULT_ENV
    sort_wildcard: bool = True


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigError(f"invalid boolean for {name}: {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EngineSettings:
    """
    Lê `EngineSettings` a partir de um mapa de variáveis de ambiente.

    Args:
        environ: mapa de variáveis (default: `os.environ`).

    Raises:
        ConfigError: se um valor booleano não for reconhecido.
    """
    environ = os.environ if environ is None else environ

    env = environ.get(ENV_VAR, "").strip() or DEFAULT_ENV
    sort_raw = environ.get(SORT_WILDCARD_VAR)
    sort_wildcard = True if sort_raw is None else _parse_bool(SORT_WILDCARD_VAR, sort_raw)

    return EngineSettings(env=env, sort_wildcard=sort_wildcard)


_current: Optional[EngineSettings] = None


def current_settings() -> EngineSettings:
    global _current
    if _current is None:
        _current = load_settings()
    return _current


def set_env_name(name: str) -> EngineSettings:
    """Altera o ambiente de build corrente. Configuração já carregada não é relida."""
    global _current
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("env name must be a non-empty string")
    _current = replace(current_settings(), env=name)
    return _current


def reset_settings() -> None:
    """Descarta as settings em cache; a próxima leitura volta ao ambiente."""
    global _current
    _current = None
