# src/imgfx_pipeline/core/effects/values.py
"""
Effect Values: uma variante imutável por tipo de efeito.

Cada variante carrega apenas os campos que o seu tipo aceita (ver
`catalog.py`). A validação acontece em `__post_init__` e é o único gate:
nenhum componente posterior (Pipeline, Executor) revalida estes invariantes.

Erros levantados na construção:
    - MissingRequiredField → campo obrigatório ausente
    - OutOfRange           → bits fora de [1, 8], thresholds invertidos ou
                             fora do domínio, cor inválida, flag não booleana
    - InvalidChannelSpec   → Channel Remap embutido inválido (ou, nos
                             deslocamentos, que nomeia o operando direito)

Edições produzem um novo valor (`effect.replace(...)`), revalidado.
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Type

from ..exceptions import InvalidChannelSpec, MissingRequiredField, OutOfRange
from .catalog import EffectCapabilities, EffectKind, capabilities_of
from .channels import ChannelRemap, Operand
from .color import Color


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class SortKey(str, Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    HUE = "hue"
    SATURATION = "saturation"
    LUMINANCE = "luminance"
    VALUE = "value"


MIN_BITS = 1
MAX_BITS = 8


# ---------------------------------------------------------------------------
# Helpers de validação
# ---------------------------------------------------------------------------

def _require(effect: "Effect", field_name: str) -> Any:
    value = getattr(effect, field_name)
    if value is None:
        raise MissingRequiredField(
            message=f"Campo obrigatório ausente para {effect.name}: {field_name}",
            details={"kind": effect.kind.value, "field": field_name},
        )
    return value


def _flag(effect: "Effect", field_name: str) -> None:
    value = getattr(effect, field_name)
    if not isinstance(value, bool):
        raise OutOfRange(
            message=f"{field_name} deve ser booleano, recebido {value!r}",
            details={"kind": effect.kind.value, "field": field_name, "value": repr(value)},
        )


def _real(effect: "Effect", field_name: str, *, positive: bool = False) -> float:
    value = _require(effect, field_name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise OutOfRange(
            message=f"{field_name} deve ser um número real finito, recebido {value!r}",
            details={"kind": effect.kind.value, "field": field_name, "value": repr(value)},
        )
    if positive and value <= 0:
        raise OutOfRange(
            message=f"{field_name} deve ser positivo, recebido {value}",
            details={"kind": effect.kind.value, "field": field_name, "value": value},
        )
    return float(value)


def _byte(effect: "Effect", field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise OutOfRange(
            message=f"{field_name} deve ser inteiro em [0, 255], recebido {value!r}",
            details={"kind": effect.kind.value, "field": field_name, "value": repr(value)},
        )
    return value


def _ordered(effect: "Effect", low: Any, high: Any) -> None:
    if high is not None and low > high:
        raise OutOfRange(
            message=f"min_threshold ({low}) maior que max_threshold ({high})",
            details={
                "kind": effect.kind.value,
                "min_threshold": low,
                "max_threshold": high,
            },
            hint="Inverta os thresholds ou ajuste o intervalo.",
        )


def _choice(effect: "Effect", field_name: str, enum_cls: Type[Enum]) -> Enum:
    value = _require(effect, field_name)
    try:
        return enum_cls(value)
    except ValueError:
        raise OutOfRange(
            message=f"{field_name} inválido: {value!r}",
            details={
                "kind": effect.kind.value,
                "field": field_name,
                "value": repr(value),
                "allowed": [m.value for m in enum_cls],
            },
        ) from None


def _left_only(effect: "Effect") -> None:
    """Deslocamentos têm um único operando: a imagem corrente."""
    foreign = [s.token for s in effect.lhs if s.operand is not Operand.LHS]
    if foreign:
        raise InvalidChannelSpec(
            message=f"{effect.name} não possui operando direito: {', '.join(foreign)}",
            details={"kind": effect.kind.value, "field": "lhs", "tokens": foreign},
            hint="Use apenas canais do operando esquerdo (r, g, b ou lhs.*).",
        )


# ---------------------------------------------------------------------------
# Registro de variantes
# ---------------------------------------------------------------------------

EFFECT_TYPES: Dict[EffectKind, Type["Effect"]] = {}


def _variant(kind: EffectKind):
    def deco(cls):
        cls.kind = kind
        EFFECT_TYPES[kind] = cls
        return cls
    return deco


@dataclass(frozen=True)
class Effect:
    """Base das variantes. Não instanciar diretamente."""

    kind: ClassVar[EffectKind]

    def __new__(cls, *args: Any, **kwargs: Any) -> "Effect":
        # apenas variantes registradas via `_variant` possuem `kind`
        if not hasattr(cls, "kind"):
            raise TypeError(f"{cls.__name__} é uma base abstrata; use uma variante de EffectKind")
        return super().__new__(cls)

    @property
    def capabilities(self) -> EffectCapabilities:
        return capabilities_of(self.kind)

    @property
    def name(self) -> str:
        return self.capabilities.display_name

    def params(self) -> Dict[str, Any]:
        """Parâmetros entregues à biblioteca, na ordem declarada pelo catálogo.

        Cores viram triplos de inteiros; Channel Remaps viram triplos de
        (operando, índice do canal) ou None quando omitidos.
        """
        out: Dict[str, Any] = {}
        for name in self.capabilities.fields:
            value = getattr(self, name)
            if isinstance(value, Color):
                value = value.as_tuple()
            elif isinstance(value, ChannelRemap):
                value = value.as_pairs()
            out[name] = value
        return out

    def to_dict(self) -> Dict[str, Any]:
        """Forma serializável (remaps na forma textual, enums pelo valor)."""
        out: Dict[str, Any] = {"kind": self.kind.value}
        for name in self.capabilities.fields:
            value = getattr(self, name)
            if isinstance(value, Color):
                value = list(value.as_tuple())
            elif isinstance(value, ChannelRemap):
                value = value.to_text()
            elif isinstance(value, Enum):
                value = value.value
            out[name] = value
        return out

    def replace(self, **changes: Any) -> "Effect":
        return dataclasses.replace(self, **changes)


# ---------------------------------------------------------------------------
# Operações binárias com cor
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorEffect(Effect):
    color: Optional[Color] = None
    lhs: Optional[ChannelRemap] = None
    rhs: Optional[ChannelRemap] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", Color.coerce(_require(self, "color")))
        if self.lhs is not None:
            object.__setattr__(self, "lhs", ChannelRemap.coerce(self.lhs, Operand.LHS))
        if self.rhs is not None:
            object.__setattr__(self, "rhs", ChannelRemap.coerce(self.rhs, Operand.RHS))


@dataclass(frozen=True)
class NegatableColorEffect(ColorEffect):
    negate: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        _flag(self, "negate")


@_variant(EffectKind.OR)
@dataclass(frozen=True)
class OrEffect(NegatableColorEffect):
    pass


@_variant(EffectKind.AND)
@dataclass(frozen=True)
class AndEffect(NegatableColorEffect):
    pass


@_variant(EffectKind.XOR)
@dataclass(frozen=True)
class XorEffect(NegatableColorEffect):
    pass


@_variant(EffectKind.SUB)
@dataclass(frozen=True)
class SubEffect(NegatableColorEffect):
    pass


@_variant(EffectKind.ADD)
@dataclass(frozen=True)
class AddEffect(ColorEffect):
    pass


@_variant(EffectKind.MULT)
@dataclass(frozen=True)
class MultEffect(ColorEffect):
    pass


@_variant(EffectKind.POW)
@dataclass(frozen=True)
class PowEffect(ColorEffect):
    pass


@_variant(EffectKind.DIV)
@dataclass(frozen=True)
class DivEffect(ColorEffect):
    pass


@_variant(EffectKind.AVERAGE)
@dataclass(frozen=True)
class AverageEffect(ColorEffect):
    pass


@_variant(EffectKind.SCREEN)
@dataclass(frozen=True)
class ScreenEffect(ColorEffect):
    pass


@_variant(EffectKind.OVERLAY)
@dataclass(frozen=True)
class OverlayEffect(ColorEffect):
    pass


# ---------------------------------------------------------------------------
# Deslocamento de bits
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShiftEffect(Effect):
    bits: Optional[int] = None
    lhs: Optional[ChannelRemap] = None
    negate: bool = False

    def __post_init__(self) -> None:
        bits = _require(self, "bits")
        if isinstance(bits, bool) or not isinstance(bits, int) or not MIN_BITS <= bits <= MAX_BITS:
            raise OutOfRange(
                message=f"bits deve ser inteiro em [{MIN_BITS}, {MAX_BITS}], recebido {bits!r}",
                details={
                    "kind": self.kind.value,
                    "field": "bits",
                    "value": repr(bits),
                    "min": MIN_BITS,
                    "max": MAX_BITS,
                },
            )
        if self.lhs is not None:
            object.__setattr__(self, "lhs", ChannelRemap.coerce(self.lhs, Operand.LHS))
            _left_only(self)
        _flag(self, "negate")


@_variant(EffectKind.LEFT)
@dataclass(frozen=True)
class LeftShiftEffect(ShiftEffect):
    pass


@_variant(EffectKind.RIGHT)
@dataclass(frozen=True)
class RightShiftEffect(ShiftEffect):
    pass


# ---------------------------------------------------------------------------
# Bloom / Sort
# ---------------------------------------------------------------------------

@_variant(EffectKind.BLOOM)
@dataclass(frozen=True)
class BloomEffect(Effect):
    intensity: Optional[float] = None
    radius: Optional[float] = None
    min_threshold: Optional[int] = None
    # None = sem limite superior
    max_threshold: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "intensity", _real(self, "intensity", positive=True))
        object.__setattr__(self, "radius", _real(self, "radius", positive=True))
        low = _byte(self, "min_threshold", _require(self, "min_threshold"))
        high = None
        if self.max_threshold is not None:
            high = _byte(self, "max_threshold", self.max_threshold)
        _ordered(self, low, high)


@_variant(EffectKind.SORT)
@dataclass(frozen=True)
class SortEffect(Effect):
    direction: Optional[Direction] = None
    sort_by: Optional[SortKey] = None
    min_threshold: Optional[float] = None
    max_threshold: Optional[float] = None
    reversed: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", _choice(self, "direction", Direction))
        object.__setattr__(self, "sort_by", _choice(self, "sort_by", SortKey))
        low = _real(self, "min_threshold")
        high = _real(self, "max_threshold")
        object.__setattr__(self, "min_threshold", low)
        object.__setattr__(self, "max_threshold", high)
        _ordered(self, low, high)
        _flag(self, "reversed")
