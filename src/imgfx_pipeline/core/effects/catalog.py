# src/imgfx_pipeline/core/effects/catalog.py
"""
Effect Catalog: metadados estáticos por tipo de efeito.

Cada entrada declara quais grupos de parâmetros o tipo aceita e o nome
canônico exibido no editor. O catálogo é a única fonte de verdade do
mapeamento tipo → capacidades, consumida por:
    - `build_effect` (validação de campos aplicáveis e obrigatórios)
    - `default_effect` (valores iniciais de cada tipo, em `defaults`)
    - o editor externo (quais controles exibir)

Grupos de parâmetros e seus campos:
    - color            → color
    - negate           → negate
    - bits             → bits
    - channel remap    → lhs (e rhs quando `accepts_rhs_remap`)
    - threshold pair   → min_threshold, max_threshold
    - blur params      → intensity, radius
    - sort params      → direction, sort_by, reversed

Invariantes:
    - `capabilities_of` é total sobre EffectKind (sem caminho de erro)
    - Entradas nunca são mutadas em runtime

Adicionar um tipo de efeito exige exatamente uma entrada aqui e uma
variante em `values.py`; Pipeline, Executor e Channel Remap não conhecem
a lista de tipos.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, List, Mapping, Tuple

from ..exceptions import UnknownEffectKind


class EffectKind(str, Enum):
    OR = "or"
    AND = "and"
    XOR = "xor"
    LEFT = "left"
    RIGHT = "right"
    ADD = "add"
    SUB = "sub"
    MULT = "mult"
    POW = "pow"
    DIV = "div"
    AVERAGE = "average"
    SCREEN = "screen"
    OVERLAY = "overlay"
    BLOOM = "bloom"
    SORT = "sort"


# Campos que sempre possuem default quando omitidos
OPTIONAL_FIELDS: FrozenSet[str] = frozenset({"negate", "lhs", "rhs", "reversed"})


@dataclass(frozen=True)
class EffectCapabilities:
    """Conjunto de capacidades de um tipo de efeito."""

    kind: EffectKind
    display_name: str
    accepts_color: bool = False
    accepts_negate: bool = False
    accepts_bits: bool = False
    accepts_channel_remap: bool = False
    accepts_rhs_remap: bool = False
    accepts_threshold_pair: bool = False
    accepts_blur_params: bool = False
    accepts_sort_params: bool = False
    # campos do grupo aceitos sem valor (ex.: max_threshold "ilimitado" no Bloom)
    nullable_fields: FrozenSet[str] = frozenset()
    # valores iniciais oferecidos pelo editor ao adicionar o efeito (a cor vem do seletor)
    defaults: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    @property
    def fields(self) -> Tuple[str, ...]:
        """Campos aceitos, na ordem em que a biblioteca os recebe."""
        out: List[str] = []
        if self.accepts_color:
            out.append("color")
        if self.accepts_bits:
            out.append("bits")
        if self.accepts_blur_params:
            out += ["intensity", "radius"]
        if self.accepts_sort_params:
            out += ["direction", "sort_by"]
        if self.accepts_threshold_pair:
            out += ["min_threshold", "max_threshold"]
        if self.accepts_sort_params:
            out.append("reversed")
        if self.accepts_channel_remap:
            out.append("lhs")
        if self.accepts_rhs_remap:
            out.append("rhs")
        if self.accepts_negate:
            out.append("negate")
        return tuple(out)

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return tuple(
            f for f in self.fields
            if f not in OPTIONAL_FIELDS and f not in self.nullable_fields
        )


def _color_op(kind: EffectKind, name: str, *, negate: bool) -> EffectCapabilities:
    return EffectCapabilities(
        kind=kind,
        display_name=name,
        accepts_color=True,
        accepts_negate=negate,
        accepts_channel_remap=True,
        accepts_rhs_remap=True,
    )


def _shift_op(kind: EffectKind, name: str) -> EffectCapabilities:
    return EffectCapabilities(
        kind=kind,
        display_name=name,
        accepts_bits=True,
        accepts_negate=True,
        accepts_channel_remap=True,
        defaults=MappingProxyType({"bits": 1}),
    )


_CATALOG = {
    EffectKind.OR: _color_op(EffectKind.OR, "OR", negate=True),
    EffectKind.AND: _color_op(EffectKind.AND, "AND", negate=True),
    EffectKind.XOR: _color_op(EffectKind.XOR, "XOR", negate=True),
    EffectKind.LEFT: _shift_op(EffectKind.LEFT, "Left"),
    EffectKind.RIGHT: _shift_op(EffectKind.RIGHT, "Right"),
    EffectKind.ADD: _color_op(EffectKind.ADD, "Add", negate=False),
    EffectKind.SUB: _color_op(EffectKind.SUB, "Subtract", negate=True),
    EffectKind.MULT: _color_op(EffectKind.MULT, "Multiply", negate=False),
    EffectKind.POW: _color_op(EffectKind.POW, "Power", negate=False),
    EffectKind.DIV: _color_op(EffectKind.DIV, "Divide", negate=False),
    EffectKind.AVERAGE: _color_op(EffectKind.AVERAGE, "Average", negate=False),
    EffectKind.SCREEN: _color_op(EffectKind.SCREEN, "Screen", negate=False),
    EffectKind.OVERLAY: _color_op(EffectKind.OVERLAY, "Overlay", negate=False),
    EffectKind.BLOOM: EffectCapabilities(
        kind=EffectKind.BLOOM,
        display_name="Bloom",
        accepts_threshold_pair=True,
        accepts_blur_params=True,
        nullable_fields=frozenset({"max_threshold"}),
        defaults=MappingProxyType({
            "intensity": 1.0,
            "radius": 5.0,
            "min_threshold": 128,
            "max_threshold": 255,
        }),
    ),
    EffectKind.SORT: EffectCapabilities(
        kind=EffectKind.SORT,
        display_name="Sort",
        accepts_threshold_pair=True,
        accepts_sort_params=True,
        defaults=MappingProxyType({
            "direction": "horizontal",
            "sort_by": "luminance",
            "min_threshold": 0.0,
            "max_threshold": 1.0,
        }),
    ),
}

CATALOG: Mapping[EffectKind, EffectCapabilities] = MappingProxyType(_CATALOG)


def capabilities_of(kind: EffectKind) -> EffectCapabilities:
    return CATALOG[EffectKind(kind)]


def list_kinds() -> List[EffectKind]:
    """Tipos na ordem em que o editor os oferece."""
    return list(EffectKind)


def kind_from_name(name: str) -> EffectKind:
    """Resolve o valor do enum ou o nome de exibição (case-insensitive)."""
    if isinstance(name, EffectKind):
        return name
    key = str(name).strip().lower()
    for kind, caps in CATALOG.items():
        if key in (kind.value, caps.display_name.lower()):
            return kind
    raise UnknownEffectKind(
        message=f"Tipo de efeito desconhecido: {name!r}",
        details={"name": name, "known": [k.value for k in EffectKind]},
        hint="Consulte list_kinds() para os tipos disponíveis.",
    )
