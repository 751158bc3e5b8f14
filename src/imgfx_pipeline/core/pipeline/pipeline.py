# src/imgfx_pipeline/core/pipeline/pipeline.py
"""
Pipeline: sequência ordenada e mutável de Effect Values.

A ordem dos elementos é a ordem de aplicação. O Pipeline é um contêiner
genérico: nunca inspeciona nem despacha pelo tipo do efeito.

Operações:
    - append(effect)      → sempre insere no final
    - remove(index)       → IndexOutOfBounds se index >= len
    - move_up(index)      → no-op na primeira posição
    - move_down(index)    → no-op na última posição
    - replace(index, e)   → edição: novo valor na mesma posição
    - snapshot()          → tupla imutável usada pelo Executor

Invariantes:
    - Índices são sempre contíguos em [0, len)
    - Uma operação que falha não altera o estado
    - Elementos não são compartilhados para fora (snapshot é uma tupla)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from ..effects.values import Effect
from ..exceptions import IndexOutOfBounds


@dataclass
class EffectPipeline:
    """Contêiner exclusivo de uma sessão de edição."""

    _effects: List[Effect] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def of(cls, *effects: Effect) -> "EffectPipeline":
        pipeline = cls()
        for effect in effects:
            pipeline.append(effect)
        return pipeline

    def _check_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._effects):
            raise IndexOutOfBounds(
                message=f"Índice {index!r} fora do pipeline (tamanho {len(self._effects)})",
                details={"index": repr(index), "length": len(self._effects)},
            )
        return index

    # -----------------------------
    # Mutação
    # -----------------------------
    def append(self, effect: Effect) -> None:
        if not isinstance(effect, Effect):
            raise TypeError(f"Pipeline aceita apenas Effect, recebido: {type(effect).__name__}")
        self._effects.append(effect)

    def remove(self, index: int) -> Effect:
        return self._effects.pop(self._check_index(index))

    def replace(self, index: int, effect: Effect) -> Effect:
        if not isinstance(effect, Effect):
            raise TypeError(f"Pipeline aceita apenas Effect, recebido: {type(effect).__name__}")
        i = self._check_index(index)
        previous = self._effects[i]
        self._effects[i] = effect
        return previous

    def move_up(self, index: int) -> None:
        i = self._check_index(index)
        if i > 0:
            self._effects[i - 1], self._effects[i] = self._effects[i], self._effects[i - 1]

    def move_down(self, index: int) -> None:
        i = self._check_index(index)
        if i < len(self._effects) - 1:
            self._effects[i + 1], self._effects[i] = self._effects[i], self._effects[i + 1]

    def clear(self) -> None:
        self._effects.clear()

    # -----------------------------
    # Leitura
    # -----------------------------
    def __len__(self) -> int:
        return len(self._effects)

    def __getitem__(self, index: int) -> Effect:
        return self._effects[self._check_index(index)]

    def __iter__(self) -> Iterator[Effect]:
        return iter(self.snapshot())

    def iterate(self) -> Tuple[Effect, ...]:
        return self.snapshot()

    def snapshot(self) -> Tuple[Effect, ...]:
        return tuple(self._effects)
