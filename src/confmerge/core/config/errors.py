# src/confmerge/core/config/errors.py
"""
Exceções canônicas da camada de configuração do confmerge.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, validação estrutural e resolução de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais são tratados como falhas fatais
    - Nenhuma falha é reexecutada ou silenciada

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - `LoadError` sempre carrega o caminho do arquivo de origem
    - Um `LoadError` nunca encapsula outro `LoadError`

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não formata payloads (ver `confmerge.core.errors`)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional, Union


def _relative_to_cwd(path: Union[str, Path]) -> str:
    p = Path(path)
    try:
        return str(p.relative_to(Path.cwd()))
    except ValueError:
        return os.fspath(path)


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração.

    Todas as exceções levantadas durante carregamento, validação estrutural
    e persistência de configuração herdam desta classe, permitindo captura
    genérica na borda do host (CLI, build tool).
    """

    def to_payload(self):
        """Retorna o payload canônico (serializável) deste erro."""
        from ..errors import config_error_payload

        return config_error_payload(self)


class ShapeError(ConfigError):
    """
    Exceção levantada quando um valor não respeita o shape de Config.

    O shape esperado é um mapa de nomes de aplicação para mapas de
    settings (chave -> valor). Quando o problema está nos settings de uma
    aplicação específica, `app` e `value` identificam o trecho inválido;
    quando o próprio valor raiz é inválido, `app` é None.

    Limites explícitos:
        - Não inspeciona a semântica dos valores
        - Não tenta normalizar estruturas inválidas
    """

    def __init__(self, message: str, *, app: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.app = app
        self.value = value


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando não existe avaliador registrado para o
    sufixo do arquivo de configuração.

    Formatos suportados (v1):
        - Python (.py)
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class LoadError(ConfigError):
    """
    Falha ao carregar um arquivo de configuração.

    Encapsula o caminho do arquivo que originou a falha e a causa
    subjacente (erro do avaliador, `ShapeError`, arquivo ausente, etc.).

    Decisões arquiteturais:
        - O caminho registrado é sempre o do arquivo mais interno da cadeia
          de imports; falhas de imports aninhados são propagadas sem
          reencapsulamento
        - A causa também é encadeada via `__cause__`

    Attributes:
        path (str): Caminho do arquivo que falhou.
        error (BaseException): Causa subjacente.
    """

    def __init__(self, path: Union[str, Path], error: BaseException):
        self.path = os.fspath(path)
        self.error = error
        super().__init__(self._render())

    def _render(self) -> str:
        return (
            f"could not load config {_relative_to_cwd(self.path)}\n    "
            f"{type(self.error).__name__}: {self.error}"
        )

    def __reduce__(self):
        return (type(self), (self.path, self.error))
