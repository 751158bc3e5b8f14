# src/imgfx_pipeline/core/effects/factory.py
"""
Construção de Effect Values guiada pelo catálogo.

`build_effect` é a porta de entrada do editor: recebe o tipo (enum, valor
ou nome de exibição) e os campos preenchidos no formulário, rejeita campos
que o tipo não aceita e delega a validação de domínio à variante.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from ..exceptions import InapplicableField, MissingRequiredField
from .catalog import EffectKind, capabilities_of, kind_from_name
from .color import DEFAULT_COLOR, Color
from .values import EFFECT_TYPES, Effect


def build_effect(kind: Union[EffectKind, str], **fields: Any) -> Effect:
    """
    Constrói a variante do tipo `kind` a partir de `fields`.

    Raises:
        UnknownEffectKind: Se `kind` não existir no catálogo.
        InapplicableField: Se algum campo não for aceito pelo tipo.
        MissingRequiredField: Se algum campo obrigatório estiver ausente.
        OutOfRange / InvalidChannelSpec: Validação de domínio da variante.
    """
    resolved = kind_from_name(kind)
    caps = capabilities_of(resolved)

    extra = sorted(set(fields) - set(caps.fields))
    if extra:
        raise InapplicableField(
            message=f"{caps.display_name} não aceita: {', '.join(extra)}",
            details={
                "kind": resolved.value,
                "fields": extra,
                "accepted": list(caps.fields),
            },
        )

    missing = [f for f in caps.required_fields if fields.get(f) is None]
    if missing:
        raise MissingRequiredField(
            message=f"Campos obrigatórios ausentes para {caps.display_name}: {', '.join(missing)}",
            details={"kind": resolved.value, "fields": missing},
        )

    return EFFECT_TYPES[resolved](**fields)


def effect_from_dict(data: Mapping[str, Any]) -> Effect:
    """Inverso de `Effect.to_dict()`; a chave `kind` é obrigatória."""
    if "kind" not in data:
        raise MissingRequiredField(
            message="Campo obrigatório ausente: kind",
            details={"field": "kind"},
        )
    fields: Dict[str, Any] = {k: v for k, v in data.items() if k != "kind"}
    return build_effect(data["kind"], **fields)


def default_effect(kind: Union[EffectKind, str], color: Color = DEFAULT_COLOR) -> Effect:
    """Valor inicial oferecido pelo editor ao adicionar um efeito.

    Os campos vêm de `EffectCapabilities.defaults`; tipos que aceitam cor
    recebem a cor escolhida no seletor.
    """
    caps = capabilities_of(kind_from_name(kind))
    fields: Dict[str, Any] = dict(caps.defaults)
    if caps.accepts_color:
        fields["color"] = color
    return build_effect(caps.kind, **fields)
