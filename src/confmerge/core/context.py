# src/confmerge/core/context.py
"""
Contexto de carga de configuração.

Este módulo define o `LoadContext`, a estrutura explícita que acompanha
uma carga de configuração (arquivo raiz e todos os imports aninhados)
e que concentra o log estruturado de eventos e os warnings não fatais.

Princípios fundamentais:
    - Logs são eventos estruturados, não strings livres
    - Cada carga possui seu próprio contexto
    - O contexto nunca armazena o acumulador de configuração

Invariantes:
    - Eventos sempre incluem `load_id`, `source`, `level` e `timestamp`
    - Warnings são agrupados por `source` (caminho ou operação)
    - A lista de eventos cresce apenas de forma incremental

Limites explícitos:
    - Não carrega nem mescla configuração
    - Não persiste eventos automaticamente
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional


_ACTIVE_CONTEXT: ContextVar[Optional["LoadContext"]] = ContextVar(
    "confmerge_active_context", default=None
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LoadContext:
    """
    Contexto de uma carga de configuração.

    Campos canônicos:
    - load_id: identificador único da carga
    - created_at: timestamp UTC de criação do contexto
    - meta: metadados livres fornecidos pelo host (ex.: comando, projeto)
    - events: log estruturado de eventos
    - warnings: warnings por source
    """

    load_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_utcnow)
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, source: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "load_id": self.load_id,
            "source": source,
            "level": level,
            "message": message,
            "timestamp": _utcnow().isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, source: str, message: str) -> None:
        if source not in self.warnings:
            self.warnings[source] = []
        self.warnings[source].append(message)

    def events_for(self, message: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["message"] == message]


def current_context() -> Optional[LoadContext]:
    """Retorna o contexto ativo da avaliação corrente (ou None)."""
    return _ACTIVE_CONTEXT.get()


@contextmanager
def activate(context: Optional[LoadContext]) -> Iterator[Optional[LoadContext]]:
    """
    Publica `context` como contexto ativo durante um bloco.

    Usado pelo loader enquanto avalia um arquivo, para que builders
    criados dentro do arquivo registrem seus eventos na mesma carga.
    """
    token = _ACTIVE_CONTEXT.set(context)
    try:
        yield context
    finally:
        _ACTIVE_CONTEXT.reset(token)
