# tests/conftest.py
"""
Fixtures compartilhados para testes do ImgFX Pipeline.

Este módulo define fixtures reutilizáveis que fornecem:
- imagens pequenas e determinísticas (numpy uint8)
- configuração mínima já resolvida
- RunContext com identidade fixa
- uma biblioteca de operações de pixel de teste que registra as chamadas

A biblioteca de teste implementa apenas fórmulas triviais (bitwise com
cor, soma saturada, deslocamento de bits). Ela não representa a
biblioteca real; serve para observar ordem, parâmetros e propagação de
imagens entre passos.

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todas as imagens são HxWx3 uint8
    - Fixtures retornam objetos novos a cada teste
"""

from datetime import datetime, timezone

import numpy as np
import pytest


# =====================================================
# Operações de pixel de teste
# =====================================================

def _bitwise(fn):
    def op(image, *, color, lhs=None, rhs=None, negate=False):
        out = fn(image, np.array(color, dtype=np.uint8))
        return np.invert(out) if negate else out
    return op


def _add(image, *, color, lhs=None, rhs=None):
    wide = image.astype(np.int16) + np.array(color, dtype=np.int16)
    return np.clip(wide, 0, 255).astype(np.uint8)


def _sub(image, *, color, lhs=None, rhs=None, negate=False):
    wide = image.astype(np.int16) - np.array(color, dtype=np.int16)
    out = np.clip(wide, 0, 255).astype(np.uint8)
    return np.invert(out) if negate else out


def _shift(direction):
    def op(image, *, bits, lhs=None, negate=False):
        out = np.left_shift(image, bits) if direction == "left" else np.right_shift(image, bits)
        out = out.astype(np.uint8)
        return np.invert(out) if negate else out
    return op


TEST_OPERATIONS = {
    "or": _bitwise(np.bitwise_or),
    "and": _bitwise(np.bitwise_and),
    "xor": _bitwise(np.bitwise_xor),
    "add": _add,
    "sub": _sub,
    "left": _shift("left"),
    "right": _shift("right"),
}


class RecordingLibrary:
    """
    Biblioteca de teste que registra cada chamada `apply`.

    `fail_at` (1-based) faz a N-ésima chamada levantar RuntimeError("boom").
    Tipos sem fórmula de teste retornam uma cópia da imagem.
    """

    def __init__(self, fail_at=None):
        self.fail_at = fail_at
        self.calls = []

    def apply(self, image, kind, **params):
        self.calls.append({"kind": kind, "params": dict(params), "input": image.copy()})
        if self.fail_at is not None and len(self.calls) == self.fail_at:
            raise RuntimeError("boom")
        op = TEST_OPERATIONS.get(kind.value)
        if op is None:
            return image.copy()
        return op(image, **params)


@pytest.fixture
def recording_library():
    """Fábrica de RecordingLibrary (aceita `fail_at`)."""
    return RecordingLibrary


@pytest.fixture
def test_operations():
    return dict(TEST_OPERATIONS)


# =====================================================
# Imagens
# =====================================================

@pytest.fixture
def small_image() -> np.ndarray:
    """Imagem 4x5x3 com valores distintos por pixel e canal."""
    return (np.arange(4 * 5 * 3, dtype=np.uint16) * 3 % 256).astype(np.uint8).reshape(4, 5, 3)


# =====================================================
# Config + RunContext
# =====================================================

@pytest.fixture
def dummy_config() -> dict:
    """Configuração mínima já resolvida (equivalente aos defaults embutidos)."""
    return {
        "executor": {"copy_input": True, "validate_images": True, "max_steps": 64},
        "operations": {"default_remap": {"lhs": "r,g,b", "rhs": "r,g,b"}},
    }


@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    return """\
executor:
  copy_input: true
  validate_images: true
  max_steps: 16
operations:
  default_remap:
    lhs: "r,g,b"
    rhs: "r,g,b"
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    return """\
executor:
  max_steps: 4
operations:
  default_remap:
    rhs: "b,b,b"
"""


@pytest.fixture
def dummy_ctx(dummy_config):
    """RunContext determinístico (run_id e created_at fixos)."""
    from imgfx_pipeline.core.pipeline.context import RunContext

    return RunContext(
        run_id="run-test-001",
        created_at=datetime(2026, 1, 16, 0, 0, 0, tzinfo=timezone.utc),
        config=dummy_config,
        meta={"source": "pytest"},
    )
