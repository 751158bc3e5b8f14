# src/imgfx_pipeline/core/engine/executor.py
"""
Executor da cadeia de efeitos do ImgFX Pipeline.

O Executor dobra (fold) um snapshot do Pipeline sobre a imagem inicial:
para cada efeito, em ordem, chama a biblioteca de operações de pixel com
`effect.params()` e usa a imagem retornada como entrada do passo seguinte.

Política de execução:
    - Estritamente sequencial: o passo i+1 só começa após o passo i
    - Fail-fast: a primeira falha encerra a run; nenhum passo posterior
      executa e a imagem parcial é descartada
    - Sem retry interno: reexecutar é responsabilidade do chamador
    - Pipeline vazio é um no-op (NOTHING_TO_APPLY), nunca um erro
    - Exceções da biblioteca nunca escapam de `run`: viram StepOutcome
      FAILED + StepFailed em `RunResult.error`

Concorrência:
    - `run_async` executa o fold em uma thread de trabalho, entregando os
      eventos de progresso no event loop do chamador
    - Uma flag de processamento impede uma segunda run simultânea no mesmo
      Executor (RunInProgress); ela não bloqueia edições do Pipeline, pois
      a run opera sobre um snapshot

Bits e Channel Remaps não são revalidados aqui: foram garantidos na
construção dos Effect Values.
"""

from __future__ import annotations

import asyncio
import functools
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from ..config.settings import ExecutorSettings, default_config
from ..effects.values import Effect
from ..errors import exception_to_payload, step_failed
from ..exceptions import OutOfRange, RunInProgress
from ..pipeline.context import RunContext
from ..pipeline.pipeline import EffectPipeline
from .library import PixelOperationLibrary, validate_image
from .types import RunResult, RunStatus, StepOutcome, StepStarted, StepStatus


ProgressEvent = Union[StepStarted, StepOutcome]
Observer = Callable[[ProgressEvent], Any]

RUN_STEP_ID = "run"


def _snapshot(pipeline: Union[EffectPipeline, Iterable[Effect]]) -> Tuple[Effect, ...]:
    if isinstance(pipeline, EffectPipeline):
        return pipeline.snapshot()
    return tuple(pipeline)


def _step_id(step: int, effect: Effect) -> str:
    return f"{step}:{effect.kind.value}"


class _LoopRelay:
    """Entrega eventos ao observer no event loop, guardando o primeiro erro."""

    def __init__(self, loop: asyncio.AbstractEventLoop, observer: Observer):
        self.loop = loop
        self.observer = observer
        self.error: Optional[Exception] = None

    def __call__(self, event: ProgressEvent) -> None:
        self.loop.call_soon_threadsafe(self._deliver, event)

    def _deliver(self, event: ProgressEvent) -> None:
        try:
            self.observer(event)
        except Exception as exc:
            if self.error is None:
                self.error = exc


class ChainExecutor:
    """Executor canônico da cadeia de efeitos (fold sequencial + fail-fast)."""

    def __init__(
        self,
        *,
        library: PixelOperationLibrary,
        config: Optional[Dict[str, Any]] = None,
        settings: Optional[ExecutorSettings] = None,
    ):
        self.library = library
        self.config: Dict[str, Any] = config if config is not None else default_config()
        self.settings: ExecutorSettings = settings or ExecutorSettings.from_config(self.config)
        self._guard = threading.Lock()
        self._processing = False

    # ------------------------------------------------------------------
    # Guard de reentrância
    # ------------------------------------------------------------------
    @property
    def is_processing(self) -> bool:
        return self._processing

    def _enter(self) -> None:
        with self._guard:
            if self._processing:
                raise RunInProgress(
                    message="Uma run já está em andamento neste executor",
                    details={},
                    hint="Aguarde o término da run atual antes de iniciar outra.",
                )
            self._processing = True

    def _leave(self) -> None:
        with self._guard:
            self._processing = False

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def run(
        self,
        pipeline: Union[EffectPipeline, Iterable[Effect]],
        image: np.ndarray,
        *,
        observer: Optional[Observer] = None,
        ctx: Optional[RunContext] = None,
    ) -> RunResult:
        """Executa a run de forma síncrona na thread atual."""
        self._enter()
        try:
            return self._fold(_snapshot(pipeline), image, observer, ctx)
        finally:
            self._leave()

    async def run_async(
        self,
        pipeline: Union[EffectPipeline, Iterable[Effect]],
        image: np.ndarray,
        *,
        observer: Optional[Observer] = None,
        ctx: Optional[RunContext] = None,
    ) -> RunResult:
        """
        Executa a run em uma thread de trabalho.

        O snapshot é tirado antes de suspender, então edições feitas no
        Pipeline durante a run valem apenas para a próxima. Cancelar a task
        que aguarda não interrompe o passo em andamento; a flag de
        processamento só é liberada quando o fold termina.

        O observer roda no event loop, desacoplado do fold: uma exceção
        levantada por ele não interrompe os passos seguintes, mas a primeira
        delas é relançada aqui após o término da run.
        """
        self._enter()
        try:
            snapshot = _snapshot(pipeline)
            loop = asyncio.get_running_loop()
            relay = _LoopRelay(loop, observer) if observer is not None else None
            work = functools.partial(self._fold_and_leave, snapshot, image, relay, ctx)
            future = loop.run_in_executor(None, work)
        except BaseException:
            self._leave()
            raise
        result = await asyncio.shield(future)
        if relay is not None and relay.error is not None:
            raise relay.error
        return result

    # ------------------------------------------------------------------
    # Fold
    # ------------------------------------------------------------------
    def _fold_and_leave(
        self,
        snapshot: Tuple[Effect, ...],
        image: np.ndarray,
        observer: Optional[Observer],
        ctx: Optional[RunContext],
    ) -> RunResult:
        try:
            return self._fold(snapshot, image, observer, ctx)
        finally:
            self._leave()

    def _finish(self, ctx: RunContext, result: RunResult) -> RunResult:
        ctx.log(
            step_id=RUN_STEP_ID,
            level="ERROR" if result.status == RunStatus.FAILED else "INFO",
            message="run.finished",
            status=result.status.value,
            applied=result.applied,
            remaining=result.remaining,
        )
        return result

    def _fold(
        self,
        snapshot: Tuple[Effect, ...],
        image: np.ndarray,
        observer: Optional[Observer],
        ctx: Optional[RunContext],
    ) -> RunResult:
        ctx = ctx or RunContext.create(self.config)
        total = len(snapshot)
        ctx.log(step_id=RUN_STEP_ID, level="INFO", message="run.started", total=total)

        if total == 0:
            return self._finish(ctx, RunResult(status=RunStatus.NOTHING_TO_APPLY, image=image))

        max_steps = self.settings.max_steps
        if max_steps and total > max_steps:
            error = OutOfRange(
                message=f"Pipeline com {total} efeitos excede o limite de {max_steps}",
                details={"field": "executor.max_steps", "total": total, "max_steps": max_steps},
                hint="Remova efeitos ou aumente executor.max_steps.",
            )
            ctx.log(step_id=RUN_STEP_ID, level="ERROR", message="run.refused",
                    error=exception_to_payload(error).to_dict())
            return self._finish(
                ctx, RunResult(status=RunStatus.FAILED, image=None, total=total, error=error)
            )

        if self.settings.validate_images:
            validate_image(image, role="initial image")
        current = image.copy() if self.settings.copy_input else image

        outcomes: List[StepOutcome] = []
        for step, effect in enumerate(snapshot, start=1):
            sid = _step_id(step, effect)
            started = StepStarted(step=step, total=total, kind=effect.kind.value, name=effect.name)
            ctx.log(step_id=sid, level="INFO", message="step.started", name=effect.name)
            if observer is not None:
                observer(started)

            try:
                produced = self.library.apply(current, effect.kind, **effect.params())
                if self.settings.validate_images:
                    validate_image(produced, role=f"output of step {step}")
            except Exception as exc:
                error = step_failed(
                    step=step, total=total, kind=effect.kind.value, name=effect.name, cause=exc,
                )
                payload = exception_to_payload(error).to_dict()
                outcome = StepOutcome(
                    step=step,
                    total=total,
                    kind=effect.kind.value,
                    name=effect.name,
                    status=StepStatus.FAILED,
                    error=payload,
                )
                outcomes.append(outcome)
                ctx.log(step_id=sid, level="ERROR", message="step.failed", error=payload)
                if observer is not None:
                    observer(outcome)
                return self._finish(
                    ctx,
                    RunResult(
                        status=RunStatus.FAILED,
                        image=None,
                        outcomes=tuple(outcomes),
                        total=total,
                        error=error,
                    ),
                )

            current = produced
            outcome = StepOutcome(
                step=step,
                total=total,
                kind=effect.kind.value,
                name=effect.name,
                status=StepStatus.SUCCESS,
            )
            outcomes.append(outcome)
            ctx.log(step_id=sid, level="INFO", message="step.succeeded")
            if observer is not None:
                observer(outcome)

        return self._finish(
            ctx,
            RunResult(
                status=RunStatus.APPLIED,
                image=current,
                outcomes=tuple(outcomes),
                total=total,
            ),
        )
