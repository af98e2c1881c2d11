# src/confmerge/core/__init__.py
"""
Core do confmerge.

Componentes principais:
    - config      → merge, validação, avaliação de arquivos e imports
    - environment → persistência da Config no ambiente de aplicação
    - context     → log estruturado de uma carga
    - settings    → parâmetros do próprio engine (ambiente de build)
    - errors      → payload canônico de erros

O core é síncrono e sem estado compartilhado: Configs são valores
passados entre etapas, nunca mutados.
"""
