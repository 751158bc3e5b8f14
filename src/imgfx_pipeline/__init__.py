# src/imgfx_pipeline/__init__.py
"""
ImgFX Pipeline: modelo de cadeia de efeitos e executor sequencial.

Uma cadeia é uma lista ordenada de transformações de imagem heterogêneas,
cada uma com seus próprios parâmetros (e, opcionalmente, remapeamento de
canais entre operandos), aplicadas uma após a outra sobre um buffer de
pixels, com isolamento de falha por passo e relatório de progresso.

Uso típico:

    table = OperationTable.from_config(config, operations={...})
    pipeline = EffectPipeline.of(build_effect("or", color=(255, 0, 0)))
    result = ChainExecutor(library=table, config=config).run(pipeline, image)
"""

from .core.config import ExecutorSettings, default_config, load_config
from .core.effects import (
    ChannelRemap,
    Color,
    EffectKind,
    build_effect,
    capabilities_of,
    default_effect,
    list_kinds,
)
from .core.engine import ChainExecutor, OperationTable, RunResult, RunStatus, StepOutcome
from .core.pipeline import EffectPipeline, RunContext

__all__ = [
    "ExecutorSettings",
    "default_config",
    "load_config",
    "ChannelRemap",
    "Color",
    "EffectKind",
    "build_effect",
    "capabilities_of",
    "default_effect",
    "list_kinds",
    "ChainExecutor",
    "OperationTable",
    "RunResult",
    "RunStatus",
    "StepOutcome",
    "EffectPipeline",
    "RunContext",
]
