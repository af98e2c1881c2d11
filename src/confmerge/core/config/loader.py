# src/confmerge/core/config/loader.py
"""
Loader canônico de configuração do confmerge.

Este módulo é responsável por carregar arquivos de configuração,
resolver a Config produzida por cada arquivo, validá-la estruturalmente
e combinar múltiplos arquivos selecionados por wildcard.

Responsabilidades do módulo:
    - Selecionar o avaliador pelo sufixo do arquivo
    - Resolver a Config a partir do binding acumulador ou do valor retornado
    - Validar e normalizar a Config carregada
    - Encapsular falhas em `LoadError` preservando o arquivo de origem
    - Expandir wildcards e mesclar os arquivos encontrados em ordem

Princípios fundamentais:
    - Falhas nunca são silenciadas nem reexecutadas
    - Um `LoadError` vindo de um import aninhado é propagado como está
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não persiste configuração (ver `confmerge.core.environment`)
    - Não interpreta formatos por conta própria (ver `evaluators`)
"""

from __future__ import annotations

import errno
import glob
import os
from contextvars import ContextVar
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from ..context import LoadContext, activate, current_context
from .. import settings as engine_settings
from .errors import LoadError, UnsupportedConfigFormatError
from .evaluators import ACCUMULATOR_BINDING, Evaluation, Evaluator, default_evaluators
from .hashing import compute_config_hash
from .merge import Config, merge
from .validate import normalize

PathLike = Union[str, os.PathLike]

_ACTIVE_EVALUATORS: ContextVar[Optional[Mapping[str, Evaluator]]] = ContextVar(
    "confmerge_active_evaluators", default=None
)


def _evaluator_for(path: Path, evaluators: Mapping[str, Evaluator]) -> Evaluator:
    suffix = path.suffix.lower()
    try:
        return evaluators[suffix]
    except KeyError:
        raise UnsupportedConfigFormatError(
            f"unsupported config format: {path.suffix or '<none>'}"
        ) from None


def _resolve(evaluation: Evaluation) -> Any:
    from .builder import ConfigBuilder

    binding = evaluation.bindings.get(ACCUMULATOR_BINDING)
    if isinstance(binding, ConfigBuilder):
        return binding.value
    return evaluation.value


def read(
    path: PathLike,
    *,
    context: Optional[LoadContext] = None,
    evaluators: Optional[Mapping[str, Evaluator]] = None,
) -> Config:
    """
    Lê e valida um arquivo de configuração.

    A Config do arquivo é o valor acumulado no binding `config` (quando o
    arquivo usa um `ConfigBuilder`) ou, na ausência dele, o valor
    retornado pelo arquivo.

    Args:
        path: caminho do arquivo.
        context: contexto de carga para o log estruturado. Quando omitido,
            usa o contexto ativo (se houver).
        evaluators: registro sufixo -> avaliador. Quando omitido, usa o
            registro ativo ou `default_evaluators()`.

    Returns:
        Config: configuração normalizada do arquivo.

    Raises:
        LoadError: qualquer falha de avaliação ou validação, carregando o
            caminho do arquivo mais interno que falhou.
    """
    source = os.fspath(path)
    file = Path(source)
    context = context if context is not None else current_context()
    evaluators = evaluators or _ACTIVE_EVALUATORS.get() or default_evaluators()

    try:
        if file.is_dir():
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), source)
        if not file.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), source)

        evaluator = _evaluator_for(file, evaluators)

        token = _ACTIVE_EVALUATORS.set(evaluators)
        try:
            with activate(context):
                evaluation = evaluator.evaluate(file)
        finally:
            _ACTIVE_EVALUATORS.reset(token)

        if context is not None:
            context.log(
                source=source,
                level="DEBUG",
                message="file.evaluated",
                path=source,
                evaluator=type(evaluator).__name__,
            )

        config = normalize(_resolve(evaluation))
    except LoadError:
        raise
    except Exception as e:
        if context is not None:
            context.log(
                source=source,
                level="ERROR",
                message="load.failed",
                path=source,
                error_type=type(e).__name__,
            )
        raise LoadError(source, e) from e

    if context is not None:
        context.log(
            source=source,
            level="INFO",
            message="file.loaded",
            path=source,
            apps=list(config),
            config_hash=compute_config_hash(config),
        )

    return config


def expand_wildcard(pattern: PathLike, *, sort: Optional[bool] = None) -> List[str]:
    """
    Expande um padrão de caminho em arquivos concretos.

    Suporta `*`, `?`, `[...]` e `**` (recursivo). Quando o padrão não
    encontra nada, retorna o próprio padrão como único caminho.
    """
    pattern = os.fspath(pattern)
    if sort is None:
        sort = engine_settings.current_settings().sort_wildcard

    matches = glob.glob(pattern, recursive=True)
    if sort:
        matches.sort()

    return matches or [pattern]


def read_wildcard(
    pattern: PathLike,
    config: Any,
    *,
    context: Optional[LoadContext] = None,
    evaluators: Optional[Mapping[str, Evaluator]] = None,
    sort: Optional[bool] = None,
) -> Config:
    """
    Lê vários arquivos selecionados por wildcard e os mescla em `config`.

    Cada arquivo é carregado com `read` e mesclado sobre o acumulador
    com `merge` (arquivos posteriores na ordem de expansão têm
    precedência). Se o padrão não encontrar arquivos, o padrão literal é
    carregado, o que produz `LoadError` para arquivos inexistentes.

    Args:
        pattern: caminho ou padrão glob.
        config: acumulador em construção.
        sort: ordena lexicograficamente os arquivos encontrados
            (default: `EngineSettings.sort_wildcard`).

    Returns:
        Config: acumulador atualizado.
    """
    pattern = os.fspath(pattern)
    context = context if context is not None else current_context()
    paths = expand_wildcard(pattern, sort=sort)

    if context is not None:
        if paths == [pattern] and glob.escape(pattern) != pattern and not os.path.exists(pattern):
            context.log(source=pattern, level="WARNING", message="import.fallback", pattern=pattern)
            context.add_warning(source=pattern, message=f"no files matched {pattern}")
        else:
            context.log(
                source=pattern,
                level="DEBUG",
                message="import.expanded",
                pattern=pattern,
                paths=paths,
            )

    for path in paths:
        config = merge(config, read(path, context=context, evaluators=evaluators))

    return config
