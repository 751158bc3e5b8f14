"""
ImgFX Pipeline — Canonical Exceptions (v1)

Este módulo define as exceções tipadas internas do ImgFX Pipeline.

Objetivo:
- Permitir que construção de efeitos, Pipeline e Executor levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ImgfxErrorPayload
- Evitar ValueError/RuntimeError genéricos em guardrails críticos

Regras:
- Exceções carregam apenas dados estruturados (serializáveis) em `details`.
- Cada exceção também herda da exceção builtin equivalente, para que
  chamadores genéricos (`except ValueError`) continuem funcionando.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True, eq=False)
class ImgfxException(Exception):
    """Base class para exceções internas do ImgFX Pipeline.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Construção de efeitos (gate único de validação)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidChannelSpec(ImgfxException, ValueError):
    """Channel Remap com tamanho diferente de 3 ou token desconhecido."""


@dataclass(frozen=True, eq=False)
class MissingRequiredField(ImgfxException, TypeError):
    """Campo obrigatório para o tipo de efeito não foi informado."""


@dataclass(frozen=True, eq=False)
class OutOfRange(ImgfxException, ValueError):
    """Valor numérico fora do domínio declarado (bits, thresholds, cores)."""


@dataclass(frozen=True, eq=False)
class InapplicableField(ImgfxException, TypeError):
    """Campo informado não é aceito pelo tipo de efeito (ver Effect Catalog)."""


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class IndexOutOfBounds(ImgfxException, IndexError):
    """Índice fora dos limites do Pipeline."""


# ---------------------------------------------------------------------------
# Executor / Biblioteca de operações
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class InvalidImageBuffer(ImgfxException, ValueError):
    """Buffer de imagem não é um array HxWx3|4 uint8."""


@dataclass(frozen=True, eq=False)
class OperationNotRegistered(ImgfxException, LookupError):
    """Nenhuma operação de pixel registrada para o tipo de efeito."""


@dataclass(frozen=True, eq=False)
class RunInProgress(ImgfxException, RuntimeError):
    """Uma run já está em andamento neste Executor."""


@dataclass(frozen=True, eq=False)
class StepFailed(ImgfxException, RuntimeError):
    """A biblioteca de operações falhou em um passo da run.

    `step` é 1-based; `remaining` é o número de passos que não foram aplicados
    (incluindo o passo que falhou).
    """

    step: int = 0
    total: int = 0
    kind: str = ""
    detail: str = ""

    @property
    def remaining(self) -> int:
        return self.total - self.step + 1


@dataclass(frozen=True, eq=False)
class UnknownEffectKind(ImgfxException, LookupError):
    """Nome de efeito que não corresponde a nenhuma entrada do Effect Catalog."""
