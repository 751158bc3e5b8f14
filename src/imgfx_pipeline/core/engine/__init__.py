# src/imgfx_pipeline/core/engine/__init__.py
"""
Execução da cadeia de efeitos.

Componentes principais:
    - library  → protocolo da biblioteca de operações de pixel e
                 `OperationTable` (registro de uma operação por tipo)
    - types    → StepOutcome, StepStarted, RunResult e enums de status
    - executor → ChainExecutor (fold sequencial, fail-fast, run assíncrona)

Invariantes:
    - Passos executam estritamente na ordem do snapshot
    - Cada passo executa no máximo uma vez por run
    - StepOutcomes são emitidos na ordem do pipeline
"""

from .executor import ChainExecutor
from .library import OperationTable, PixelOperationLibrary, validate_image
from .types import RunResult, RunStatus, StepOutcome, StepStarted, StepStatus

__all__ = [
    "ChainExecutor",
    "OperationTable",
    "PixelOperationLibrary",
    "validate_image",
    "RunResult",
    "RunStatus",
    "StepOutcome",
    "StepStarted",
    "StepStatus",
]
