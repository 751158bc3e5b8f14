# src/imgfx_pipeline/core/engine/library.py
"""
Fronteira com a biblioteca de operações de pixel.

O Executor conhece a biblioteca apenas pelo protocolo
`PixelOperationLibrary.apply(image, kind, **params)`, onde `params` são
exatamente os campos da variante (`Effect.params()`). As fórmulas de pixel
(bitwise, blends, bloom, pixel sort) vivem fora deste pacote.

`OperationTable` é o adaptador padrão: um registro de uma função por tipo
de efeito, que também aplica a política de remapeamento padrão quando o
efeito não informa `lhs`/`rhs`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

import numpy as np

from ..effects.catalog import EffectKind
from ..effects.channels import ChannelRemap, Operand
from ..exceptions import InvalidImageBuffer, OperationNotRegistered


PixelOperation = Callable[..., np.ndarray]


def validate_image(image: Any, *, role: str = "image") -> np.ndarray:
    """Garante um buffer HxWx3 ou HxWx4 do tipo uint8."""
    if not isinstance(image, np.ndarray):
        raise InvalidImageBuffer(
            message=f"{role} deve ser numpy.ndarray, recebido {type(image).__name__}",
            details={"role": role, "type": type(image).__name__},
        )
    if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] not in (3, 4):
        raise InvalidImageBuffer(
            message=f"{role} deve ser HxWx3|4 uint8, recebido {image.shape} {image.dtype}",
            details={"role": role, "shape": list(image.shape), "dtype": str(image.dtype)},
        )
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise InvalidImageBuffer(
            message=f"{role} vazio: {image.shape}",
            details={"role": role, "shape": list(image.shape)},
        )
    return image


@runtime_checkable
class PixelOperationLibrary(Protocol):
    def apply(self, image: np.ndarray, kind: EffectKind, **params: Any) -> np.ndarray:
        """Aplica a operação de `kind`; levanta exceção em caso de falha."""
        ...


@dataclass
class OperationTable:
    """
    Registro de operações de pixel por tipo de efeito.

    Invariantes:
        - No máximo uma operação por EffectKind (a menos que `replace=True`)
        - Remap omitido (`None`) é substituído pelo default configurado
    """

    default_lhs: Optional[ChannelRemap] = None
    default_rhs: Optional[ChannelRemap] = None
    _ops: Dict[EffectKind, PixelOperation] = field(default_factory=dict, init=False, repr=False)

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict[str, Any]] = None,
        operations: Optional[Mapping[Any, PixelOperation]] = None,
    ) -> "OperationTable":
        remap_cfg = ((config or {}).get("operations", {}) or {}).get("default_remap", {}) or {}
        lhs = remap_cfg.get("lhs")
        rhs = remap_cfg.get("rhs")
        table = cls(
            default_lhs=ChannelRemap.coerce(lhs, Operand.LHS) if lhs else None,
            default_rhs=ChannelRemap.coerce(rhs, Operand.RHS) if rhs else None,
        )
        for kind, fn in (operations or {}).items():
            table.register(kind, fn)
        return table

    def register(self, kind: Any, fn: PixelOperation, *, replace: bool = False) -> None:
        resolved = EffectKind(kind)
        if not callable(fn):
            raise TypeError(f"Operação para {resolved.value} deve ser callable")
        if resolved in self._ops and not replace:
            raise ValueError(f"Operação já registrada para: {resolved.value}")
        self._ops[resolved] = fn

    def operation(self, kind: Any) -> Callable[[PixelOperation], PixelOperation]:
        """Decorator equivalente a `register(kind, fn)`."""
        def deco(fn: PixelOperation) -> PixelOperation:
            self.register(kind, fn)
            return fn
        return deco

    def has(self, kind: Any) -> bool:
        return EffectKind(kind) in self._ops

    def kinds(self) -> List[EffectKind]:
        return [k for k in EffectKind if k in self._ops]

    def resolve(self, kind: Any) -> PixelOperation:
        resolved = EffectKind(kind)
        if resolved not in self._ops:
            raise OperationNotRegistered(
                message=f"Nenhuma operação registrada para: {resolved.value}",
                details={"kind": resolved.value, "registered": [k.value for k in self.kinds()]},
                hint="Registre a operação na OperationTable antes de executar o pipeline.",
            )
        return self._ops[resolved]

    def apply(self, image: np.ndarray, kind: EffectKind, **params: Any) -> np.ndarray:
        fn = self.resolve(kind)
        if "lhs" in params and params["lhs"] is None and self.default_lhs is not None:
            params["lhs"] = self.default_lhs.as_pairs()
        if "rhs" in params and params["rhs"] is None and self.default_rhs is not None:
            params["rhs"] = self.default_rhs.as_pairs()
        return fn(image, **params)
