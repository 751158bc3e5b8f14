# src/imgfx_pipeline/core/effects/__init__.py
"""
Modelo de efeitos do ImgFX Pipeline.

- **catalog**: `EffectKind`, `EffectCapabilities`, `capabilities_of`
- **channels**: `ChannelRemap` e seletores (operando, canal)
- **color**: `Color`
- **values**: uma variante imutável por tipo de efeito
- **factory**: `build_effect`, `default_effect`, `effect_from_dict`
"""

from .catalog import (
    CATALOG,
    EffectCapabilities,
    EffectKind,
    capabilities_of,
    kind_from_name,
    list_kinds,
)
from .channels import Channel, ChannelRemap, ChannelSelector, Operand
from .color import DEFAULT_COLOR, Color
from .factory import build_effect, default_effect, effect_from_dict
from .values import (
    EFFECT_TYPES,
    AddEffect,
    AndEffect,
    AverageEffect,
    BloomEffect,
    Direction,
    DivEffect,
    Effect,
    LeftShiftEffect,
    MultEffect,
    OrEffect,
    OverlayEffect,
    PowEffect,
    RightShiftEffect,
    ScreenEffect,
    SortEffect,
    SortKey,
    SubEffect,
    XorEffect,
)

__all__ = [
    "CATALOG",
    "EffectCapabilities",
    "EffectKind",
    "capabilities_of",
    "kind_from_name",
    "list_kinds",
    "Channel",
    "ChannelRemap",
    "ChannelSelector",
    "Operand",
    "DEFAULT_COLOR",
    "Color",
    "build_effect",
    "default_effect",
    "effect_from_dict",
    "EFFECT_TYPES",
    "AddEffect",
    "AndEffect",
    "AverageEffect",
    "BloomEffect",
    "Direction",
    "DivEffect",
    "Effect",
    "LeftShiftEffect",
    "MultEffect",
    "OrEffect",
    "OverlayEffect",
    "PowEffect",
    "RightShiftEffect",
    "ScreenEffect",
    "SortEffect",
    "SortKey",
    "SubEffect",
    "XorEffect",
]
