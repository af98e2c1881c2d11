# tests/conftest.py
"""
Fixtures compartilhados para testes do confmerge.

Este módulo define fixtures reutilizáveis que fornecem:
- uma fábrica de arquivos de configuração em diretório temporário
- contexto de carga controlado (LoadContext)
- isolamento do estado global do engine (settings e ambiente de aplicação)

Decisões arquiteturais:
    - Arquivos são escritos em `tmp_path`, nunca no repositório
    - Imports do core são realizados de forma lazy para melhorar a
      clareza de erros durante falhas

Invariantes:
    - Cada teste inicia com `application_env` vazio
    - Cada teste inicia com settings lidas do ambiente sem CONFMERGE_*
"""

import textwrap
from datetime import datetime, timezone

import pytest


@pytest.fixture(autouse=True)
def clean_engine_state(monkeypatch):
    """Isola settings do engine e o ambiente de aplicação do processo."""
    from confmerge.core.environment.store import application_env
    from confmerge.core.settings import ENV_VAR, SORT_WILDCARD_VAR, reset_settings

    monkeypatch.delenv(ENV_VAR, raising=False)
    monkeypatch.delenv(SORT_WILDCARD_VAR, raising=False)
    reset_settings()
    application_env.clear()
    yield
    reset_settings()
    application_env.clear()


@pytest.fixture
def write_config(tmp_path):
    """
    Fábrica que escreve um arquivo de configuração em `tmp_path`.

    O conteúdo é desindentado com `textwrap.dedent`, permitindo declarar
    arquivos Python/YAML inline nos testes.

    Returns:
        callable: `write_config(relative_path, content) -> Path`.
    """

    def _write(relative_path: str, content: str):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def load_ctx():
    """LoadContext determinístico para testes de log estruturado."""
    from confmerge.core.context import LoadContext

    return LoadContext(
        load_id="load-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        meta={"source": "pytest"},
    )
