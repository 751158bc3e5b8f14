"""
ImgFX Pipeline — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros do ImgFX Pipeline.
Erros fazem parte do contrato exposto ao editor/apresentação e devem ser:

- explícitos
- serializáveis
- acionáveis

Nenhum stack trace cru chega ao operador: exceções são convertidas em
ImgfxErrorPayload antes de serem expostas em StepOutcome/RunResult.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .exceptions import (
    ImgfxException,
    InapplicableField,
    IndexOutOfBounds,
    InvalidChannelSpec,
    InvalidImageBuffer,
    MissingRequiredField,
    OperationNotRegistered,
    OutOfRange,
    RunInProgress,
    StepFailed,
    UnknownEffectKind,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImgfxErrorPayload:
    """
    Payload canônico de erro do ImgFX Pipeline.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Construção de efeitos
INVALID_CHANNEL_SPEC = "INVALID_CHANNEL_SPEC"
MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
OUT_OF_RANGE = "OUT_OF_RANGE"
INAPPLICABLE_FIELD = "INAPPLICABLE_FIELD"
UNKNOWN_EFFECT_KIND = "UNKNOWN_EFFECT_KIND"

# Pipeline
INDEX_OUT_OF_BOUNDS = "INDEX_OUT_OF_BOUNDS"

# Executor / Biblioteca
INVALID_IMAGE_BUFFER = "INVALID_IMAGE_BUFFER"
OPERATION_NOT_REGISTERED = "OPERATION_NOT_REGISTERED"
RUN_IN_PROGRESS = "RUN_IN_PROGRESS"
STEP_FAILED = "STEP_FAILED"
EXECUTOR_ERROR = "EXECUTOR_ERROR"


_CODES = {
    InvalidChannelSpec: INVALID_CHANNEL_SPEC,
    MissingRequiredField: MISSING_REQUIRED_FIELD,
    OutOfRange: OUT_OF_RANGE,
    InapplicableField: INAPPLICABLE_FIELD,
    UnknownEffectKind: UNKNOWN_EFFECT_KIND,
    IndexOutOfBounds: INDEX_OUT_OF_BOUNDS,
    InvalidImageBuffer: INVALID_IMAGE_BUFFER,
    OperationNotRegistered: OPERATION_NOT_REGISTERED,
    RunInProgress: RUN_IN_PROGRESS,
    StepFailed: STEP_FAILED,
}


def exception_to_payload(exc: BaseException) -> ImgfxErrorPayload:
    """Converte exceções em ImgfxErrorPayload (serializável, acionável).

    Regras:
    - ImgfxException: já vem com message/details/hint; o código estável é
      resolvido pela classe.
    - Outras exceções: encapsular como EXECUTOR_ERROR sem expor stack trace.
    """
    if isinstance(exc, ImgfxException):
        code = EXECUTOR_ERROR
        for cls in type(exc).__mro__:
            if cls in _CODES:
                code = _CODES[cls]
                break
        return ImgfxErrorPayload(
            type=code,
            message=str(exc) or "Erro de execução",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return ImgfxErrorPayload(
        type=EXECUTOR_ERROR,
        message=str(exc) or "Erro inesperado durante execução",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique a operação de pixel correspondente ao efeito",
    )


def step_failed(
    *,
    step: int,
    total: int,
    kind: str,
    name: str,
    cause: BaseException,
) -> StepFailed:
    """Fábrica de StepFailed a partir da exceção original da biblioteca."""
    cause_payload = exception_to_payload(cause)
    detail = cause_payload.message
    return StepFailed(
        message=f"Error applying effect {step} of {total} ({name}): {detail}",
        details={
            "step": step,
            "total": total,
            "kind": kind,
            "name": name,
            "remaining": total - step + 1,
            "cause": cause_payload.to_dict(),
        },
        hint="Edite ou remova o efeito indicado e execute o pipeline novamente.",
        step=step,
        total=total,
        kind=kind,
        detail=detail,
    )
