# src/imgfx_pipeline/core/engine/types.py
"""
Tipos de resultado do Executor.

Componentes principais:
    - StepStatus  → estado final de um passo (SUCCESS, FAILED)
    - RunStatus   → estado final de uma run (APPLIED, NOTHING_TO_APPLY, FAILED)
    - StepStarted → evento de progresso emitido antes de cada passo
    - StepOutcome → registro imutável do resultado de um passo
    - RunResult   → imagem final + sequência ordenada de StepOutcome

Invariantes:
    - `step` é sempre 1-based e `total` é o tamanho do snapshot executado
    - StepOutcome e RunResult nunca são alterados após criados
    - Uma run FAILED nunca carrega imagem (o chamador mantém a anterior)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..exceptions import ImgfxException
from ..errors import exception_to_payload


class StepStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class RunStatus(str, Enum):
    """
    Estado final de uma run.

    - APPLIED: todos os passos foram aplicados
    - NOTHING_TO_APPLY: pipeline vazio; não é erro
    - FAILED: a run parou no primeiro passo que falhou (ou foi recusada
      antes do primeiro passo)
    """

    APPLIED = "applied"
    NOTHING_TO_APPLY = "nothing_to_apply"
    FAILED = "failed"


@dataclass(frozen=True)
class StepStarted:
    step: int
    total: int
    kind: str
    name: str

    @property
    def message(self) -> str:
        return f"Applying effect {self.step} of {self.total}: {self.name}"


@dataclass(frozen=True)
class StepOutcome:
    """
    Resultado de um passo da run.

    Campos:
        - step: posição 1-based do efeito no snapshot
        - total: número de passos do snapshot
        - kind: valor de EffectKind
        - name: nome de exibição do efeito
        - status: SUCCESS ou FAILED
        - error: ImgfxErrorPayload serializado quando FAILED
    """

    step: int
    total: int
    kind: str
    name: str
    status: StepStatus
    error: Optional[Dict[str, Any]] = None

    @property
    def index(self) -> int:
        """Posição 0-based no pipeline."""
        return self.step - 1

    @property
    def succeeded(self) -> bool:
        return self.status == StepStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "total": self.total,
            "kind": self.kind,
            "name": self.name,
            "status": self.status.value,
            "error": self.error,
        }


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    image: Optional[np.ndarray]
    outcomes: Tuple[StepOutcome, ...] = field(default_factory=tuple)
    total: int = 0
    error: Optional[ImgfxException] = None

    @property
    def succeeded(self) -> bool:
        return self.status != RunStatus.FAILED

    @property
    def applied(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def remaining(self) -> int:
        """Passos não aplicados (inclui o passo que falhou)."""
        return self.total - self.applied

    @property
    def failed_step(self) -> Optional[StepOutcome]:
        for outcome in self.outcomes:
            if not outcome.succeeded:
                return outcome
        return None

    @property
    def message(self) -> str:
        if self.status == RunStatus.NOTHING_TO_APPLY:
            return "No effects in the list to apply"
        if self.status == RunStatus.APPLIED:
            return f"Successfully applied {self.total} effects!"
        return str(self.error) if self.error is not None else "Run failed"

    def raise_for_failure(self) -> None:
        if self.error is not None:
            raise self.error

    def to_dict(self) -> Dict[str, Any]:
        """Resumo serializável (sem o buffer de pixels)."""
        return {
            "status": self.status.value,
            "message": self.message,
            "total": self.total,
            "applied": self.applied,
            "remaining": self.remaining,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "error": exception_to_payload(self.error).to_dict() if self.error is not None else None,
        }
