# src/imgfx_pipeline/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica a configuração usada por uma run (gravado em
`RunContext.meta["config_hash"]`) e é independente da ordem das chaves.
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    SHA-256 hexadecimal (64 caracteres) da serialização JSON canônica.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
