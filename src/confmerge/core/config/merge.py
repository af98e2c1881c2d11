# src/confmerge/core/config/merge.py
"""
Utilitário canônico de merge de configuração.

Este módulo implementa a política oficial de merge utilizada pelo
confmerge para combinar duas Configs (mapa de aplicação -> settings)
em uma nova Config.

Política de merge (v1):
    - aplicação presente em apenas um lado → preservada como está
    - aplicação presente nos dois lados → merge dos settings por chave
    - chave presente em apenas um lado → preservada como está
    - valores iguais (mesmo tipo e ==) → mantidos, sem callback
    - valores diferentes, sem callback:
        - mapa + mapa → merge recursivo
        - demais casos → o lado direito vence
    - valores diferentes, com callback → `callback(app, key, v1, v2)`

Princípios fundamentais:
    - O merge é total, determinístico e puramente funcional
    - Nenhum input é mutado; valores preservados são copiados (deepcopy)
    - Declarações posteriores (lado direito) têm precedência

Invariantes:
    - merge(C, C) == C
    - Chaves não conflitantes são preservadas
    - A ordem de inserção do lado esquerdo é mantida; chaves novas entram
      ao final, na ordem do lado direito

Limites explícitos:
    - Não carrega arquivos de configuração
    - Não valida o shape da Config (ver `validate`)
    - Não realiza coerção de tipos
"""

from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Optional

Config = Dict[str, Dict[str, Any]]
MergeCallback = Callable[[Any, Any, Any, Any], Any]


def is_keyed_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def same_value(left: Any, right: Any) -> bool:
    """
    Igualdade estrutural sensível a tipo.

    `1`, `True` e `1.0` são valores distintos para o merge, embora `==`
    os considere iguais.
    """
    if type(left) is not type(right):
        return False
    if isinstance(left, Mapping):
        return left.keys() == right.keys() and all(
            same_value(left[key], right[key]) for key in left
        )
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(
            same_value(a, b) for a, b in zip(left, right)
        )
    return left == right


def _items(value: Any) -> Iterable:
    # Configs também podem chegar como sequência de pares (app, settings).
    if isinstance(value, Mapping):
        return value.items()
    return iter(value)


def deep_merge(base: Mapping, override: Mapping) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois mapas.

    Mapas aninhados são mesclados recursivamente; qualquer outro conflito
    é resolvido a favor de `override`. Nenhum dos inputs é mutado.

    Args:
        base: Mapa base (menor precedência).
        override: Mapa de override (maior precedência).

    Returns:
        Dict[str, Any]: Novo dicionário resultante do merge.
    """
    result: Dict[str, Any] = {key: deepcopy(value) for key, value in _items(base)}

    for key, override_value in _items(override):
        if key not in result:
            result[key] = deepcopy(override_value)
            continue

        base_value = result[key]

        if same_value(base_value, override_value):
            continue

        # mapa -> merge recursivo
        if is_keyed_mapping(base_value) and is_keyed_mapping(override_value):
            result[key] = deep_merge(base_value, override_value)
            continue

        result[key] = deepcopy(override_value)

    return result


def _merge_app(
    app: Any,
    left: Any,
    right: Any,
    callback: Optional[MergeCallback],
) -> Dict[str, Any]:
    result: Dict[str, Any] = {key: deepcopy(value) for key, value in _items(left)}

    for key, right_value in _items(right):
        if key not in result:
            result[key] = deepcopy(right_value)
            continue

        left_value = result[key]

        if same_value(left_value, right_value):
            continue

        if callback is not None:
            result[key] = callback(app, key, left_value, deepcopy(right_value))
        elif is_keyed_mapping(left_value) and is_keyed_mapping(right_value):
            result[key] = deep_merge(left_value, right_value)
        else:
            result[key] = deepcopy(right_value)

    return result


def merge(config1: Any, config2: Any, callback: Optional[MergeCallback] = None) -> Config:
    """
    Mescla duas configurações.

    A configuração de cada aplicação é mesclada por chave, com os valores
    de `config2` tendo precedência em caso de conflito. Quando `callback`
    é informado, ele é invocado para cada chave cujos valores diferem,
    recebendo `(app, key, v1, v2)`; o retorno passa a ser o valor da chave.

    Examples:
        >>> merge({"app": {"k": "v1"}}, {"app": {"k": "v2"}})
        {'app': {'k': 'v2'}}

        >>> merge({"app1": {}}, {"app2": {}})
        {'app1': {}, 'app2': {}}

        >>> merge({"app": {"k": "v1"}}, {"app": {"k": "v2"}},
        ...       lambda app, k, v1, v2: (app, k, v1, v2))
        {'app': {'k': ('app', 'k', 'v1', 'v2')}}
    """
    result: Config = {}

    for source, resolve in ((config1, None), (config2, callback)):
        for app, settings in _items(source):
            if app in result:
                result[app] = _merge_app(app, result[app], settings, resolve)
            else:
                result[app] = _merge_app(app, settings, (), None)

    return result


def merge_settings_callback(app: Any, key: Any, left: Any, right: Any) -> Any:
    """
    Callback usado por declarações de chave única (`config(app, key, opts)`).

    Mescla mais um nível: `opts` sucessivos para a mesma chave se acumulam
    em vez de se sobrescreverem. Se algum dos lados não for um mapa, o
    lado direito vence.
    """
    if is_keyed_mapping(left) and is_keyed_mapping(right):
        return deep_merge(left, right)
    return right


def merge_many(configs: Iterable[Any]) -> Config:
    """Mescla várias configurações em ordem (a última tem maior precedência)."""
    result: Config = {}
    for config in configs:
        result = merge(result, config)
    return result
