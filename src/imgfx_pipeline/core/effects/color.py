# src/imgfx_pipeline/core/effects/color.py
"""
Cor constante usada como operando direito dos efeitos binários.

Uma `Color` é sempre um triplo RGB de inteiros em [0, 255]; a validação
ocorre na construção e a instância é imutável.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from ..exceptions import OutOfRange


def _component(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRange(
            message=f"Componente '{name}' da cor deve ser inteiro em [0, 255]",
            details={"component": name, "value": repr(value)},
        )
    if not 0 <= value <= 255:
        raise OutOfRange(
            message=f"Componente '{name}' da cor fora de [0, 255]: {value}",
            details={"component": name, "value": value, "min": 0, "max": 255},
        )
    return value


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            _component(name, getattr(self, name))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Aceita `#rrggbb` ou `rrggbb` (case-insensitive)."""
        raw = text.strip().lstrip("#")
        if len(raw) != 6:
            raise OutOfRange(
                message=f"Cor hexadecimal inválida: {text!r}",
                details={"value": text, "expected": "#rrggbb"},
            )
        try:
            r, g, b = (int(raw[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise OutOfRange(
                message=f"Cor hexadecimal inválida: {text!r}",
                details={"value": text, "expected": "#rrggbb"},
            ) from None
        return cls(r, g, b)

    @classmethod
    def coerce(cls, value: Any) -> "Color":
        """Normaliza Color, triplo (r, g, b) ou string hexadecimal."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, (tuple, list)):
            if len(value) != 3:
                raise OutOfRange(
                    message=f"Cor deve ter exatamente 3 componentes, recebido {len(value)}",
                    details={"value": list(value)},
                )
            return cls(*value)
        raise OutOfRange(
            message=f"Tipo de cor não suportado: {type(value).__name__}",
            details={"value": repr(value)},
        )

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


# cor inicial do seletor do editor
DEFAULT_COLOR = Color(255, 0, 0)
