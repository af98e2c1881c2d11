"""
confmerge — Canonical Error Structures (v1)

Este módulo define o payload canônico de erros do confmerge, usado pelo
host (build tool, CLI) para reportar falhas de configuração de forma
estruturada.

Erros devem ser:

- explícitos
- serializáveis
- rastreáveis (sempre apontam o arquivo de origem quando existe)

Nenhuma decisão implícita é permitida.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Payload canônico de erro do confmerge.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

CONFIG_SHAPE_ERROR = "CONFIG_SHAPE_ERROR"
CONFIG_LOAD_ERROR = "CONFIG_LOAD_ERROR"
CONFIG_UNSUPPORTED_FORMAT = "CONFIG_UNSUPPORTED_FORMAT"
CONFIG_ERROR = "CONFIG_ERROR"


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def shape_error(
    *,
    message: str,
    app: Optional[str] = None,
    value: Any = None,
    hint: str = "O arquivo deve produzir um mapa de aplicações para mapas chave/valor.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CONFIG_SHAPE_ERROR,
        message=message,
        details={"app": app, "value": repr(value)},
        hint=hint,
    )


def load_error(
    *,
    path: str,
    cause: BaseException,
    hint: str = "Corrija o arquivo indicado; a carga de configuração foi abortada.",
) -> ErrorPayload:
    return ErrorPayload(
        type=CONFIG_LOAD_ERROR,
        message=f"Falha ao carregar configuração: {path}",
        details={
            "path": path,
            "cause_type": type(cause).__name__,
            "cause": str(cause),
            "cause_payload": (
                config_error_payload(cause).to_dict()
                if _is_config_error(cause)
                else None
            ),
        },
        hint=hint,
    )


def unsupported_format(*, message: str) -> ErrorPayload:
    return ErrorPayload(
        type=CONFIG_UNSUPPORTED_FORMAT,
        message=message,
        details={},
        hint="Use arquivos .py, .yaml, .yml ou .json, ou registre um avaliador para o sufixo.",
    )


def _is_config_error(error: BaseException) -> bool:
    from .config.errors import ConfigError

    return isinstance(error, ConfigError)


def config_error_payload(error: BaseException) -> ErrorPayload:
    """
    Converte uma exceção da camada de configuração em `ErrorPayload`.

    Exceções desconhecidas caem no código genérico `CONFIG_ERROR`.
    """
    from .config.errors import LoadError, ShapeError, UnsupportedConfigFormatError

    if isinstance(error, LoadError):
        return load_error(path=error.path, cause=error.error)
    if isinstance(error, ShapeError):
        return shape_error(message=str(error), app=error.app, value=error.value)
    if isinstance(error, UnsupportedConfigFormatError):
        return unsupported_format(message=str(error))
    return ErrorPayload(
        type=CONFIG_ERROR,
        message=str(error),
        details={"error_type": type(error).__name__},
    )
