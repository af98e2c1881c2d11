# src/confmerge/__init__.py
"""
confmerge — engine de merge hierárquico de configuração por aplicação.

Carrega uma ou mais fontes declarativas de configuração, cada uma
descrevendo settings chave/valor por aplicação, combina tudo em uma
única Config sem conflitos e, opcionalmente, aplica o resultado ao
ambiente de aplicação do processo.

    from confmerge import read, persist

    config = read("config/config.py")
    persist(config)
"""

from .core.config import (
    Config,
    ConfigBuilder,
    ConfigError,
    LoadError,
    ShapeError,
    UnsupportedConfigFormatError,
    compute_config_hash,
    merge,
    normalize,
    read,
    read_wildcard,
    validate,
)
from .core.context import LoadContext
from .core.environment import (
    ApplicationEnvironment,
    OsEnvironStore,
    application_env,
    get_all_env,
    get_env,
    persist,
)
from .core.settings import EngineSettings, current_settings, load_settings, set_env_name

__all__ = [
    "ApplicationEnvironment",
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "EngineSettings",
    "LoadContext",
    "LoadError",
    "OsEnvironStore",
    "ShapeError",
    "UnsupportedConfigFormatError",
    "application_env",
    "compute_config_hash",
    "current_settings",
    "get_all_env",
    "get_env",
    "load_settings",
    "merge",
    "normalize",
    "persist",
    "read",
    "read_wildcard",
    "set_env_name",
    "validate",
]
