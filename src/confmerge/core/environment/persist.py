# src/confmerge/core/environment/persist.py
"""
Persistência de configuração no ambiente de aplicação.

Projeta uma Config resolvida em um `EnvironmentStore`, gravando cada
par (chave, valor) sob a sua aplicação.

Invariantes:
    - Gravações seguem a ordem de iteração da Config
    - Não há atomicidade: uma falha do store no meio da projeção deixa
      o ambiente parcialmente atualizado e é propagada sem tratamento
"""

from __future__ import annotations

from typing import Any, Optional

from ..config.validate import normalize
from ..context import LoadContext, current_context
from .store import EnvironmentStore, application_env


def persist(
    config: Any,
    store: Optional[EnvironmentStore] = None,
    *,
    context: Optional[LoadContext] = None,
) -> bool:
    """
    Persiste a configuração modificando o ambiente das aplicações.

    Args:
        config: Config validada.
        store: destino das gravações (default: `application_env`).
        context: contexto de carga para o log estruturado.

    Returns:
        bool: True quando todas as gravações foram aplicadas.

    Raises:
        ShapeError: se `config` não tiver o shape de Config (nenhuma
            gravação é feita nesse caso).
    """
    config = normalize(config)
    store = application_env if store is None else store
    context = context if context is not None else current_context()

    for app, settings in config.items():
        for key, value in settings.items():
            store.set_persistent(app, key, value)

        if context is not None:
            context.log(
                source=app,
                level="INFO",
                message="persist.applied",
                app=app,
                keys=list(settings),
                store=type(store).__name__,
            )

    return True
