# src/confmerge/core/config/hashing.py
"""
Hashing canônico de configuração.

Este módulo gera uma impressão digital determinística de uma Config
resolvida, usada no log estruturado de carga para identificar qual
configuração efetiva foi produzida por um arquivo.

Política de hashing (v1):
    - Serialização JSON canônica
    - Ordenação estável de chaves
    - Separadores compactos
    - Chaves convertidas para string
    - Valores não serializáveis em JSON são representados por `repr`
    - Codificação UTF-8, algoritmo SHA-256

Limites explícitos:
    - Não valida o shape da configuração
    - Não persiste o hash
"""

import hashlib
import json
from collections.abc import Mapping
from typing import Any


def compute_config_hash(config: Mapping) -> str:
    """
    Gera um hash determinístico da configuração.

    Configurações estruturalmente equivalentes produzem o mesmo hash,
    independentemente da ordem de inserção das chaves.

    Args:
        config (Mapping): Configuração resolvida.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um mapa.
    """

    if not isinstance(config, Mapping):
        raise TypeError(
            f"config to hash must be a mapping, got: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        _canonical(config),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=_fallback,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()


def _canonical(value: Any) -> Any:
    # chaves não-string (ex.: YAML) impediriam sort_keys
    if isinstance(value, Mapping):
        return {str(key): _canonical(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    return value


def _fallback(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(repr(item) for item in value)
    return repr(value)
