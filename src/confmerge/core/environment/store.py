# src/confmerge/core/environment/store.py
"""
Stores de ambiente de aplicação.

Um store recebe os pares (app, chave, valor) de uma Config persistida.
Dois stores são fornecidos:

    - ApplicationEnvironment → ambiente de aplicação em memória, por
      processo (`application_env` é a instância global)
    - OsEnvironStore         → projeção em variáveis de ambiente do
      sistema operacional (`APP_KEY=valor`)

Escritas sobrescrevem o valor anterior para o mesmo (app, chave).
"""

from __future__ import annotations

import json
import os
import re
import threading
from typing import Any, Dict, MutableMapping, Optional, Protocol, Set, Tuple


class EnvironmentStore(Protocol):
    def set_persistent(self, app: str, key: str, value: Any) -> None:
        ...


_MISSING = object()


class ApplicationEnvironment:
    """
    Ambiente de aplicação em memória.

    Valores gravados com `persistent=True` são marcados como persistentes
    (vindos de configuração) e podem ser consultados via `is_persistent`.
    Acesso concorrente é serializado por um lock interno.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._env: Dict[str, Dict[str, Any]] = {}
        self._persistent: Set[Tuple[str, str]] = set()

    def set_env(self, app: str, key: str, value: Any, *, persistent: bool = False) -> None:
        with self._lock:
            self._env.setdefault(app, {})[key] = value
            if persistent:
                self._persistent.add((app, key))
            else:
                self._persistent.discard((app, key))

    def set_persistent(self, app: str, key: str, value: Any) -> None:
        self.set_env(app, key, value, persistent=True)

    def get_env(self, app: str, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._env.get(app, {}).get(key, default)

    def fetch_env(self, app: str, key: str) -> Any:
        """Como `get_env`, mas levanta `KeyError` se a chave não existir."""
        with self._lock:
            value = self._env.get(app, {}).get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(f"{app}.{key}")
        return value

    def get_all_env(self, app: str) -> Dict[str, Any]:
        with self._lock:
            return dict(self._env.get(app, {}))

    def unset_env(self, app: str, key: str) -> None:
        with self._lock:
            settings = self._env.get(app)
            if settings is not None:
                settings.pop(key, None)
                if not settings:
                    del self._env[app]
            self._persistent.discard((app, key))

    def is_persistent(self, app: str, key: str) -> bool:
        with self._lock:
            return (app, key) in self._persistent

    def apps(self):
        with self._lock:
            return list(self._env)

    def clear(self) -> None:
        with self._lock:
            self._env.clear()
            self._persistent.clear()


# Ambiente de aplicação do processo.
application_env = ApplicationEnvironment()


def get_env(app: str, key: str, default: Any = None) -> Any:
    return application_env.get_env(app, key, default)


def get_all_env(app: str) -> Dict[str, Any]:
    return application_env.get_all_env(app)


_NON_ALNUM = re.compile(r"[^0-9A-Za-z]+")


def env_var_name(app: str, key: str, prefix: str = "") -> str:
    """
    Nome da variável de ambiente para (app, chave).

        >>> env_var_name("my_app", "Repo.url", prefix="cfg")
        'CFG_MY_APP_REPO_URL'
    """
    parts = [prefix, str(app), str(key)] if prefix else [str(app), str(key)]
    return "_".join(_NON_ALNUM.sub("_", part).strip("_").upper() for part in parts)


class OsEnvironStore:
    """
    Projeta configuração em variáveis de ambiente.

    Strings são gravadas como estão; demais valores são serializados em
    JSON (valores não serializáveis usam `str`).
    """

    def __init__(self, prefix: str = "", environ: Optional[MutableMapping[str, str]] = None):
        self.prefix = prefix
        self.environ = os.environ if environ is None else environ

    def set_persistent(self, app: str, key: str, value: Any) -> None:
        self.environ[env_var_name(app, key, self.prefix)] = self.encode(value)

    @staticmethod
    def encode(value: Any) -> str:
        if isinstance(value, str):
            return value
        return json.dumps(value, sort_keys=True, default=str)
