# src/confmerge/core/environment/__init__.py
"""
Projeção de configuração no ambiente de aplicação.

Este pacote aplica uma Config resolvida a um store de ambiente: o
ambiente de aplicação em memória do processo ou variáveis de ambiente
do sistema operacional.

Limites explícitos:
    - Não realiza merge (sobrescreve o valor anterior de cada chave)
    - Não garante atomicidade sobre a Config inteira
"""

from .persist import persist
from .store import (
    ApplicationEnvironment,
    EnvironmentStore,
    OsEnvironStore,
    application_env,
    env_var_name,
    get_all_env,
    get_env,
)

__all__ = [
    "ApplicationEnvironment",
    "EnvironmentStore",
    "OsEnvironStore",
    "application_env",
    "env_var_name",
    "get_all_env",
    "get_env",
    "persist",
]
