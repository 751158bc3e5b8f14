# src/imgfx_pipeline/core/pipeline/context.py
"""
Contexto de execução de uma run do Executor.

O RunContext é o registro estruturado de uma run: identidade, configuração
efetiva, metadados e o log de eventos. Ele substitui um logger global:
cada run carrega seus próprios eventos, consultáveis pelo chamador após
o término.

Invariantes:
    - Eventos sempre incluem `run_id`, `step_id`, `level` e `timestamp` (UTC)
    - Warnings são agrupados por `step_id`
    - Eventos são anexados na ordem real de execução
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..config.hashing import compute_config_hash
from ..config.settings import default_config


@dataclass
class RunContext:
    run_id: str
    created_at: datetime
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    events: List[Dict[str, Any]] = field(default_factory=list, init=False)
    warnings: Dict[str, List[str]] = field(default_factory=dict, init=False)

    @classmethod
    def create(cls, config: Optional[Dict[str, Any]] = None, **meta: Any) -> "RunContext":
        """Novo contexto com run_id aleatório e hash da configuração em `meta`."""
        cfg = config if config is not None else default_config()
        meta.setdefault("config_hash", compute_config_hash(cfg))
        return cls(
            run_id=uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc),
            config=cfg,
            meta=meta,
        )

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, step_id: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "step_id": step_id,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, *, step_id: str, message: str) -> None:
        if step_id not in self.warnings:
            self.warnings[step_id] = []
        self.warnings[step_id].append(message)

    def events_for(self, step_id: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["step_id"] == step_id]
