# tests/core/engine/test_executor_async.py
"""
Testes da execução assíncrona (`ChainExecutor.run_async`).

Os testes asseguram que:
- o fold roda fora da thread do event loop
- eventos de progresso são entregues na thread do event loop, em ordem
- uma segunda run simultânea no mesmo executor levanta RunInProgress
- edições do Pipeline durante a run valem apenas para a próxima
- cancelar a task não libera o executor antes do fim do passo corrente
"""

import asyncio
import threading

import pytest

try:
    from imgfx_pipeline.core.effects.factory import build_effect
    from imgfx_pipeline.core.engine.executor import ChainExecutor
    from imgfx_pipeline.core.engine.types import RunStatus, StepOutcome, StepStarted
    from imgfx_pipeline.core.exceptions import RunInProgress
    from imgfx_pipeline.core.pipeline.pipeline import EffectPipeline
except Exception as e:  # noqa: BLE001
    ChainExecutor = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing executor modules. Implement:\n"
            "- src/imgfx_pipeline/core/engine/executor.py (ChainExecutor.run_async)\n"
            f"Import error: {_IMPORT_ERR}"
        )


class _GateLibrary:
    """Bloqueia cada passo até `release` ser sinalizado."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.threads = []

    def apply(self, image, kind, **params):
        self.threads.append(threading.get_ident())
        self.started.set()
        if not self.release.wait(timeout=5):
            raise RuntimeError("gate timeout")
        return image.copy()


def test_run_async_applies_off_loop_thread(small_image):
    _require_imports()
    library = _GateLibrary()
    library.release.set()
    executor = ChainExecutor(library=library)
    pipeline = EffectPipeline.of(build_effect("left", bits=1), build_effect("right", bits=1))

    events = []
    observer_threads = []

    def observer(event):
        events.append(event)
        observer_threads.append(threading.get_ident())

    result = asyncio.run(executor.run_async(pipeline, small_image, observer=observer))

    main = threading.get_ident()
    assert result.status == RunStatus.APPLIED
    assert len(library.threads) == 2
    assert main not in library.threads
    assert [type(e) for e in events] == [StepStarted, StepOutcome, StepStarted, StepOutcome]
    assert [e.step for e in events] == [1, 1, 2, 2]
    assert set(observer_threads) == {main}
    assert not executor.is_processing


def test_run_async_failure_is_a_result(recording_library, small_image):
    _require_imports()
    executor = ChainExecutor(library=recording_library(fail_at=1))
    result = asyncio.run(executor.run_async([build_effect("left", bits=1)], small_image))

    assert result.status == RunStatus.FAILED
    assert result.error.step == 1
    assert not executor.is_processing


def test_concurrent_run_is_rejected(small_image):
    _require_imports()
    library = _GateLibrary()
    executor = ChainExecutor(library=library)
    pipeline = EffectPipeline.of(build_effect("left", bits=1))

    async def scenario():
        loop = asyncio.get_running_loop()
        task = asyncio.create_task(executor.run_async(pipeline, small_image))
        assert await loop.run_in_executor(None, library.started.wait, 5)
        assert executor.is_processing

        with pytest.raises(RunInProgress):
            executor.run(pipeline, small_image)
        with pytest.raises(RunInProgress):
            await executor.run_async(pipeline, small_image)

        pipeline.append(build_effect("right", bits=2))
        library.release.set()
        return await task

    result = asyncio.run(scenario())

    assert result.status == RunStatus.APPLIED
    assert result.total == 1
    assert len(library.threads) == 1
    assert len(pipeline) == 2
    assert not executor.is_processing


def test_cancel_keeps_guard_until_step_ends(small_image):
    _require_imports()
    library = _GateLibrary()
    executor = ChainExecutor(library=library)

    async def scenario():
        loop = asyncio.get_running_loop()
        task = asyncio.create_task(executor.run_async([build_effect("left", bits=1)], small_image))
        assert await loop.run_in_executor(None, library.started.wait, 5)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert executor.is_processing

        library.release.set()
        for _ in range(500):
            if not executor.is_processing:
                break
            await asyncio.sleep(0.01)

    asyncio.run(scenario())
    assert not executor.is_processing


def test_sync_reentry_from_observer_is_rejected(recording_library, small_image):
    _require_imports()
    executor = ChainExecutor(library=recording_library())
    effects = [build_effect("left", bits=1)]

    def reenter(event):
        executor.run(effects, small_image)

    with pytest.raises(RunInProgress):
        executor.run(effects, small_image, observer=reenter)
    assert not executor.is_processing


def test_async_observer_error_is_raised_after_the_run(recording_library, small_image):
    """
    O observer roda no event loop; sua primeira exceção não interrompe o
    fold, mas é relançada por `run_async` após o término da run.
    """
    _require_imports()
    library = recording_library()
    executor = ChainExecutor(library=library)
    effects = [build_effect("left", bits=1), build_effect("right", bits=1)]
    seen = []

    def observer(event):
        seen.append(event)
        if isinstance(event, StepStarted):
            raise ValueError(f"observer falhou no passo {event.step}")

    with pytest.raises(ValueError, match="passo 1"):
        asyncio.run(executor.run_async(effects, small_image, observer=observer))

    assert len(library.calls) == 2
    assert len(seen) == 4
    assert not executor.is_processing
