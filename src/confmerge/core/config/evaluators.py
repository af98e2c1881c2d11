# src/confmerge/core/config/evaluators.py
"""
Avaliadores de arquivos de configuração.

Um avaliador executa (ou interpreta) um arquivo e devolve uma
`Evaluation`: o valor "retornado" pelo arquivo e os bindings nomeados
produzidos durante a avaliação. O loader decide, a partir disso, qual
Config o arquivo produziu (ver `loader.read`).

Avaliadores disponíveis (v1):
    - PythonEvaluator → .py (executado via `runpy`)
    - DataEvaluator   → .yaml, .yml (PyYAML) e .json

Decisões arquiteturais:
    - O formato é inferido pela extensão do arquivo
    - Avaliadores não validam shape nem encapsulam erros; isso é
      responsabilidade do loader
"""

from __future__ import annotations

import json
import runpy
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Protocol

import yaml  # PyYAML

from .errors import ShapeError, UnsupportedConfigFormatError
from .validate import validate


# Binding que guarda o acumulador (ConfigBuilder) de um arquivo.
ACCUMULATOR_BINDING = "config"

# Global de módulo tratada como valor "retornado" por arquivos Python.
RETURN_BINDING = "CONFIG"

# Diretiva de import em arquivos de dados.
IMPORT_DIRECTIVE = "import_config"


@dataclass(frozen=True)
class Evaluation:
    value: Any
    bindings: Dict[str, Any] = field(default_factory=dict)


class Evaluator(Protocol):
    def evaluate(self, path: Path) -> Evaluation:
        ...


class PythonEvaluator:
    """
    Executa arquivos de configuração escritos em Python.

    O arquivo é executado em um namespace próprio. A Config é obtida do
    binding `config` quando ele é um `ConfigBuilder`; caso contrário, da
    global `CONFIG`:

        from confmerge import ConfigBuilder

        config = ConfigBuilder(__file__)
        config.config("logger", level="info")
        config.import_config(f"{config.env}.py")
    """

    run_name = "__confmerge_config__"

    def evaluate(self, path: Path) -> Evaluation:
        namespace = runpy.run_path(str(path), run_name=self.run_name)
        return Evaluation(value=namespace.get(RETURN_BINDING), bindings=namespace)


class DataEvaluator:
    """
    Lê arquivos de configuração declarativos (YAML ou JSON).

    O documento raiz é o valor retornado; um documento vazio vale `{}`.
    Uma entrada raiz `import_config` (string ou lista de padrões) é tratada
    como diretiva: as aplicações do próprio arquivo são declaradas
    primeiro e os padrões são importados em seguida, na ordem dada, de
    forma que arquivos importados sobrescrevem o arquivo que os importa.
    """

    def evaluate(self, path: Path) -> Evaluation:
        data = self._parse(path)

        if data is None:
            data = {}

        if not isinstance(data, Mapping) or IMPORT_DIRECTIVE not in data:
            return Evaluation(value=data)

        patterns = self._import_patterns(data[IMPORT_DIRECTIVE])
        own = {app: value for app, value in data.items() if app != IMPORT_DIRECTIVE}
        validate(own)

        from .builder import ConfigBuilder

        builder = ConfigBuilder(path)
        builder.merge(own)
        for pattern in patterns:
            builder.import_config(pattern)

        return Evaluation(value=own, bindings={ACCUMULATOR_BINDING: builder})

    def _parse(self, path: Path) -> Any:
        suffix = path.suffix.lower()
        raw = path.read_text(encoding="utf-8")

        if suffix in {".yaml", ".yml"}:
            return yaml.safe_load(raw)
        if suffix == ".json":
            return json.loads(raw) if raw.strip() else None

        raise UnsupportedConfigFormatError(f"unsupported config format: {path.suffix}")

    @staticmethod
    def _import_patterns(value: Any) -> List[str]:
        if isinstance(value, str):
            return [value]
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        raise ShapeError(
            f"expected {IMPORT_DIRECTIVE} to be a path or a list of paths, got: {value!r}",
            value=value,
        )


def default_evaluators() -> Dict[str, Evaluator]:
    """Registro padrão sufixo -> avaliador."""
    data = DataEvaluator()
    return {
        ".py": PythonEvaluator(),
        ".yaml": data,
        ".yml": data,
        ".json": data,
    }
