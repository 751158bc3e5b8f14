# src/imgfx_pipeline/core/config/settings.py
"""
Defaults embutidos e leitura tipada da seção `executor`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..exceptions import OutOfRange


def default_config() -> Dict[str, Any]:
    """Retorna os defaults embutidos (um dict novo a cada chamada)."""
    return {
        "executor": {
            "copy_input": True,
            "validate_images": True,
            "max_steps": 64,
        },
        "operations": {
            "default_remap": {
                "lhs": "r,g,b",
                "rhs": "r,g,b",
            },
        },
    }


@dataclass(frozen=True)
class ExecutorSettings:
    """
    Políticas do ChainExecutor.

    Campos:
        - copy_input: o fold começa a partir de uma cópia do buffer inicial
        - validate_images: valida o buffer inicial e o retorno de cada passo
        - max_steps: pipelines maiores são recusadas antes do primeiro passo
          (0 = sem limite)
    """

    copy_input: bool = True
    validate_images: bool = True
    max_steps: int = 64

    def __post_init__(self) -> None:
        for name in ("copy_input", "validate_images"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise OutOfRange(
                    message=f"executor.{name} deve ser booleano, recebido {value!r}",
                    details={"field": f"executor.{name}", "value": repr(value)},
                    hint="Use true/false (sem aspas) no arquivo de configuração.",
                )
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) or self.max_steps < 0:
            raise OutOfRange(
                message="executor.max_steps deve ser um inteiro >= 0",
                details={"field": "executor.max_steps", "value": repr(self.max_steps)},
                hint="Use 0 para desabilitar o limite.",
            )

    @classmethod
    def from_config(cls, config: Dict[str, Any] | None) -> "ExecutorSettings":
        """
        Lê a seção `executor` da configuração resolvida.

        `max_steps` integral vindo como float (ex.: 64.0, aceito pelo
        deep-merge) é normalizado para int; flags não são convertidas.
        """
        section = (config or {}).get("executor", {}) or {}
        defaults = cls()
        max_steps = section.get("max_steps", defaults.max_steps)
        if isinstance(max_steps, float) and max_steps.is_integer():
            max_steps = int(max_steps)
        return cls(
            copy_input=section.get("copy_input", defaults.copy_input),
            validate_images=section.get("validate_images", defaults.validate_images),
            max_steps=max_steps,
        )
