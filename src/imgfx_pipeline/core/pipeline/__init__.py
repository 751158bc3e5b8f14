# src/imgfx_pipeline/core/pipeline/__init__.py
"""
# Pipeline (ImgFX Pipeline)

- **pipeline**
  - `EffectPipeline`: sequência ordenada de Effect Values com append,
    remove, move_up, move_down, replace e snapshot

- **context**
  - `RunContext`: identidade, configuração e log estruturado de uma run

O Pipeline não conhece tipos de efeito nem o Executor; o Executor recebe
apenas um snapshot imutável.
"""

from .context import RunContext
from .pipeline import EffectPipeline

__all__ = ["RunContext", "EffectPipeline"]
