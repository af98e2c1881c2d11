# src/confmerge/core/config/validate.py
"""
Validação estrutural (shape) de configurações.

Uma Config válida é:
    - um mapa (ou sequência de pares) de nome de aplicação -> settings
    - nome de aplicação: string não vazia
    - settings: mapa com chaves string, ou sequência de pares (str, valor)

Os valores dos settings não são inspecionados. A unicidade de chaves
dentro de uma sequência de pares não é verificada aqui; duplicatas são
resolvidas por `normalize` (último valor vence).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import ShapeError
from .merge import Config, merge


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_pair(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 2


def is_app_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_keyword(value: Any) -> bool:
    """True se `value` é um mapa chave/valor aceitável como settings."""
    if isinstance(value, Mapping):
        return all(isinstance(key, str) for key in value)
    if _is_sequence(value):
        return all(_is_pair(item) and isinstance(item[0], str) for item in value)
    return False


def _app_entries(config: Any):
    if isinstance(config, Mapping):
        return list(config.items())
    if _is_sequence(config) and all(_is_pair(item) for item in config):
        return list(config)
    return None


def validate(config: Any) -> bool:
    """
    Valida o shape de uma configuração.

    Returns:
        bool: sempre True quando a configuração é válida.

    Raises:
        ShapeError: se o valor raiz não for um mapa de aplicações, se algum
            nome de aplicação for inválido, ou se os settings de uma
            aplicação não forem um mapa chave/valor.
    """
    entries = _app_entries(config)
    if entries is None:
        raise ShapeError(
            f"expected config file to return a mapping of apps to settings, got: {config!r}",
            value=config,
        )

    for app, value in entries:
        if not is_app_name(app):
            raise ShapeError(
                f"expected config app name to be a non-empty string, got: {app!r}",
                value=config,
            )
        if not is_keyword(value):
            raise ShapeError(
                f"expected config for app {app!r} to be a mapping of settings, got: {value!r}",
                app=app,
                value=value,
            )

    return True


def normalize(config: Any) -> Config:
    """
    Valida e converte uma configuração para a forma canônica `dict[str, dict]`.

    Sequências de pares são convertidas em dicionários; aplicações
    repetidas são mescladas. O resultado nunca compartilha referências
    com o input.
    """
    validate(config)
    return merge({}, config)
