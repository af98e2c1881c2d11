# src/confmerge/core/config/builder.py
"""
Builder declarativo de configuração.

O `ConfigBuilder` é o acumulador explícito de um arquivo de
configuração: cada declaração (`config`, `import_config`, `merge`)
produz uma nova Config a partir da anterior, e o valor final é lido
pelo loader através do binding `config` do arquivo.

    from confmerge import ConfigBuilder

    config = ConfigBuilder(__file__)

    config.config("lager", log_level="warn", mode="truncate")
    config.config("ecto", "Repo", pool_size=10)

    config.import_config(f"{config.env}.py")

Cada avaliação de arquivo possui seu próprio builder; nenhum estado é
compartilhado entre arquivos.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from ..context import LoadContext, current_context
from .. import settings as engine_settings
from .evaluators import Evaluator
from .loader import PathLike, read_wildcard
from .merge import Config, merge, merge_settings_callback
from .validate import is_keyword, normalize


def _as_settings(app: str, value: Any) -> dict:
    return normalize([(app, value)])[app]


def _is_settings_value(value: Any) -> bool:
    # lista vazia é um valor escalar, não settings
    return is_keyword(value) and (isinstance(value, Mapping) or len(value) > 0)


class ConfigBuilder:
    """
    Acumulador de declarações de configuração de um arquivo.

    Args:
        file: arquivo que está sendo declarado (tipicamente `__file__`).
            Imports relativos são resolvidos a partir do seu diretório;
            sem arquivo, a partir do diretório corrente.
        context: contexto de carga (default: contexto ativo).
        evaluators: registro de avaliadores usado pelos imports.
        settings: settings do engine (default: `current_settings()`).
    """

    def __init__(
        self,
        file: Optional[PathLike] = None,
        *,
        context: Optional[LoadContext] = None,
        evaluators: Optional[Mapping[str, Evaluator]] = None,
        settings: Optional["engine_settings.EngineSettings"] = None,
    ):
        self.file = os.fspath(file) if file is not None else None
        self.base_dir = (
            os.path.dirname(os.path.abspath(self.file)) if self.file else os.getcwd()
        )
        self.context = context if context is not None else current_context()
        self.evaluators = evaluators
        self._settings = settings
        self._config: Config = {}

    def __repr__(self) -> str:
        return f"ConfigBuilder(file={self.file!r}, apps={list(self._config)!r})"

    @property
    def value(self) -> Config:
        return self._config

    @property
    def settings(self) -> "engine_settings.EngineSettings":
        return self._settings or engine_settings.current_settings()

    @property
    def env(self) -> str:
        return self.settings.env

    def config(self, app: str, *args: Any, **opts: Any) -> "ConfigBuilder":
        """
        Configura a aplicação `app`.

        Formas aceitas:

            config(app, {"k": v})        config(app, k=v)
            config(app, key, {"k": v})   config(app, key, k=v)
            config(app, key, value)

        Na forma com `key`, opções sucessivas para a mesma chave se
        acumulam: `config("ecto", "Repo", a=1)` seguido de
        `config("ecto", "Repo", b=2)` resulta em `Repo: {a: 1, b: 2}`.
        Conflitos são resolvidos a favor da última declaração.
        """
        if len(args) > 2:
            raise TypeError(
                f"config() takes at most 3 positional arguments ({len(args) + 1} given)"
            )

        if not args:
            return self._declare(app, opts)

        if len(args) == 1 and is_keyword(args[0]):
            return self._declare(app, {**_as_settings(app, args[0]), **opts})

        key = args[0]
        if len(args) == 1:
            value: Any = opts
        elif opts:
            if not is_keyword(args[1]):
                raise TypeError("keyword options can only be combined with a mapping value")
            value = {**_as_settings(app, args[1]), **opts}
        elif _is_settings_value(args[1]):
            value = _as_settings(app, args[1])
        else:
            value = args[1]

        return self._declare_key(app, key, value)

    def import_config(self, pattern: PathLike) -> "ConfigBuilder":
        """
        Importa configuração de arquivos selecionados por `pattern`.

        O caminho é relativo ao diretório do arquivo que está sendo
        declarado e pode conter wildcards:

            config.import_config(f"{config.env}.py")
            config.import_config("../apps/*/config/config.py")
        """
        path = os.path.normpath(os.path.join(self.base_dir, os.fspath(pattern)))
        self._config = read_wildcard(
            path,
            self._config,
            context=self.context,
            evaluators=self.evaluators,
            sort=self.settings.sort_wildcard,
        )
        return self

    def merge(self, config: Any) -> "ConfigBuilder":
        """Mescla uma Config completa sobre o acumulador."""
        self._config = merge(self._config, normalize(config))
        return self

    def _declare(self, app: str, settings: Any) -> "ConfigBuilder":
        self._config = merge(self._config, normalize([(app, settings)]))
        return self

    def _declare_key(self, app: str, key: str, value: Any) -> "ConfigBuilder":
        entry = normalize([(app, [(key, value)])])
        self._config = merge(self._config, entry, merge_settings_callback)
        return self
