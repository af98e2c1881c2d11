# src/confmerge/core/config/__init__.py

"""
Camada de configuração do confmerge.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
mesclar e validar estruturalmente configurações por aplicação.

Responsabilidades do pacote:
    - Merge determinístico de Configs (aplicação -> settings)
    - Validação de shape
    - Avaliação de arquivos (.py, .yaml, .yml, .json)
    - Imports por wildcard com merge em ordem
    - Builder declarativo usado dentro dos arquivos de configuração
    - Hash canônico para rastreabilidade

Invariantes:
    - Toda Config produzida é um `dict` novo; inputs nunca são mutados
    - Declarações posteriores têm precedência
    - A mesma entrada sempre produz a mesma configuração final
"""

from .errors import ConfigError, LoadError, ShapeError, UnsupportedConfigFormatError
from .merge import Config, MergeCallback, deep_merge, merge, merge_many, merge_settings_callback
from .validate import normalize, validate
from .hashing import compute_config_hash
from .evaluators import DataEvaluator, Evaluation, Evaluator, PythonEvaluator, default_evaluators
from .loader import expand_wildcard, read, read_wildcard
from .builder import ConfigBuilder

__all__ = [
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "DataEvaluator",
    "Evaluation",
    "Evaluator",
    "LoadError",
    "MergeCallback",
    "PythonEvaluator",
    "ShapeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "deep_merge",
    "default_evaluators",
    "expand_wildcard",
    "merge",
    "merge_many",
    "merge_settings_callback",
    "normalize",
    "read",
    "read_wildcard",
    "validate",
]
