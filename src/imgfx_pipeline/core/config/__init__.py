# src/imgfx_pipeline/core/config/__init__.py
"""
Camada de configuração do ImgFX Pipeline.

Resolve a configuração efetiva do Executor e da biblioteca de operações:
    - defaults embutidos (`default_config`)
    - arquivo de defaults do projeto (YAML ou JSON) + override local opcional
    - deep-merge determinístico e hash canônico para identificar a run

A configuração nunca contém Effects nem Pipelines; ela governa apenas
políticas (cópia do buffer inicial, validação de imagens, limite de passos,
remapeamento padrão de canais).
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import ExecutorSettings, default_config

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "ExecutorSettings",
    "default_config",
]
