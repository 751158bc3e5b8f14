# src/imgfx_pipeline/core/effects/channels.py
"""
Channel Remap: descritor validado de remapeamento de canais.

Um Channel Remap define, para cada canal de saída (vermelho, verde, azul,
nesta ordem), de qual canal de qual operando o valor é lido:

    - operando esquerdo (`lhs`): a imagem corrente do pipeline
    - operando direito (`rhs`): a cor constante do efeito

Forma textual (a mesma digitada no editor):

    "b,b,b"            → tokens simples, resolvidos contra o operando padrão
    "lhs.b,rhs.g,lhs.r"→ tokens qualificados com operando explícito

Canais aceitos: r, g, b, red, green, blue (case-insensitive).
Operandos aceitos: lhs, left, rhs, right.

Invariantes:
    - Sempre exatamente 3 seletores
    - Cada seletor nomeia um par (operando, canal) conhecido
    - Imutável após construção

Limites explícitos:
    - Não trunca nem completa listas de tamanho diferente de 3
    - Não indexa pixels (isso é responsabilidade da biblioteca de operações)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Tuple, Union

from ..exceptions import InvalidChannelSpec


REMAP_LENGTH = 3


class Operand(str, Enum):
    LHS = "lhs"
    RHS = "rhs"


class Channel(str, Enum):
    RED = "r"
    GREEN = "g"
    BLUE = "b"

    @property
    def index(self) -> int:
        return _CHANNEL_INDEX[self]


_CHANNEL_INDEX = {Channel.RED: 0, Channel.GREEN: 1, Channel.BLUE: 2}

_OPERAND_ALIASES = {
    "lhs": Operand.LHS,
    "left": Operand.LHS,
    "rhs": Operand.RHS,
    "right": Operand.RHS,
}

_CHANNEL_ALIASES = {
    "r": Channel.RED,
    "red": Channel.RED,
    "g": Channel.GREEN,
    "green": Channel.GREEN,
    "b": Channel.BLUE,
    "blue": Channel.BLUE,
}


@dataclass(frozen=True)
class ChannelSelector:
    """Par (operando, canal) que alimenta um canal de saída."""

    operand: Operand
    channel: Channel

    @property
    def token(self) -> str:
        return f"{self.operand.value}.{self.channel.value}"

    @classmethod
    def parse(cls, token: Any, default_operand: Operand) -> "ChannelSelector":
        if isinstance(token, ChannelSelector):
            return token
        if not isinstance(token, str):
            raise InvalidChannelSpec(
                message=f"Token de canal inválido: {token!r}",
                details={"token": repr(token)},
                hint="Use tokens como 'r', 'g', 'b' ou 'lhs.r', 'rhs.b'.",
            )

        raw = token.strip().lower()
        operand = default_operand
        channel_part = raw
        for sep in (".", ":"):
            if sep in raw:
                operand_part, channel_part = raw.split(sep, 1)
                if operand_part.strip() not in _OPERAND_ALIASES:
                    raise InvalidChannelSpec(
                        message=f"Operando desconhecido no token {token!r}",
                        details={"token": token, "operand": operand_part},
                        hint="Operandos aceitos: lhs, left, rhs, right.",
                    )
                operand = _OPERAND_ALIASES[operand_part.strip()]
                channel_part = channel_part.strip()
                break

        if channel_part not in _CHANNEL_ALIASES:
            raise InvalidChannelSpec(
                message=f"Canal desconhecido no token {token!r}",
                details={"token": token},
                hint="Canais aceitos: r, g, b, red, green, blue.",
            )
        return cls(operand=operand, channel=_CHANNEL_ALIASES[channel_part])


@dataclass(frozen=True)
class ChannelRemap:
    """Sequência imutável de exatamente três ChannelSelector."""

    selectors: Tuple[ChannelSelector, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.selectors, tuple):
            object.__setattr__(self, "selectors", tuple(self.selectors))
        if len(self.selectors) != REMAP_LENGTH:
            raise InvalidChannelSpec(
                message=(
                    f"Channel Remap deve ter exatamente {REMAP_LENGTH} tokens, "
                    f"recebido {len(self.selectors)}"
                ),
                details={
                    "expected": REMAP_LENGTH,
                    "received": len(self.selectors),
                },
            )
        for sel in self.selectors:
            if not isinstance(sel, ChannelSelector):
                raise InvalidChannelSpec(
                    message=f"Seletor de canal inválido: {sel!r}",
                    details={"selector": repr(sel)},
                )

    # -----------------------------
    # Construtores
    # -----------------------------
    @classmethod
    def from_tokens(
        cls,
        tokens: Iterable[Any],
        default_operand: Operand = Operand.LHS,
    ) -> "ChannelRemap":
        if isinstance(tokens, str):
            raise InvalidChannelSpec(
                message="Use ChannelRemap.parse para a forma textual",
                details={"value": tokens},
            )
        return cls(tuple(ChannelSelector.parse(t, default_operand) for t in tokens))

    @classmethod
    def parse(cls, text: str, default_operand: Operand = Operand.LHS) -> "ChannelRemap":
        """Interpreta a forma textual separada por vírgulas (ex.: "b,b,b")."""
        if not isinstance(text, str):
            raise InvalidChannelSpec(
                message=f"Channel Remap textual deve ser str, recebido {type(text).__name__}",
                details={"value": repr(text)},
            )
        return cls.from_tokens(text.split(","), default_operand)

    @classmethod
    def coerce(
        cls,
        value: Union["ChannelRemap", str, Iterable[Any]],
        default_operand: Operand = Operand.LHS,
    ) -> "ChannelRemap":
        if isinstance(value, ChannelRemap):
            return value
        if isinstance(value, str):
            return cls.parse(value, default_operand)
        if isinstance(value, (list, tuple)):
            return cls.from_tokens(value, default_operand)
        raise InvalidChannelSpec(
            message=f"Tipo de Channel Remap não suportado: {type(value).__name__}",
            details={"value": repr(value)},
        )

    @classmethod
    def identity(cls, operand: Operand = Operand.LHS) -> "ChannelRemap":
        return cls(tuple(ChannelSelector(operand, ch) for ch in Channel))

    # -----------------------------
    # Leitura
    # -----------------------------
    def as_pairs(self) -> Tuple[Tuple[str, int], ...]:
        """Triplo de (operando, índice do canal) entregue à biblioteca."""
        return tuple((s.operand.value, s.channel.index) for s in self.selectors)

    def to_text(self) -> str:
        return ",".join(s.token for s in self.selectors)

    def __iter__(self):
        return iter(self.selectors)

    def __len__(self) -> int:
        return len(self.selectors)
