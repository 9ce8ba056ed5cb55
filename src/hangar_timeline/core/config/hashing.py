# src/hangar_timeline/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica a configuração usada para calcular um snapshot, de modo
que dois cronogramas só são comparáveis quando o hash coincide (mesma
largura de coluna, mesmo limite de passes, mesma estratégia).

Política de hashing (v1):
    - JSON canônico (`sort_keys`, separadores compactos, UTF-8)
    - SHA-256, 64 caracteres hexadecimais
    - valores não serializáveis em JSON (ex.: datas) viram `str`
"""

import hashlib
import json
from typing import Any, Dict


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o SHA-256 hexadecimal de uma configuração.

    Raises:
        TypeError: se `config` não for um dicionário.
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
        default=str,
    )
    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
