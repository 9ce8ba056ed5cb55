# src/hangar_timeline/core/config/loader.py
"""
Loader de configuração do Hangar Timeline.

A configuração efetiva é resolvida em camadas:
    1. `DEFAULT_CONFIG` embutido no pacote
    2. arquivo de defaults do deployment (YAML ou JSON)
    3. arquivo local de overrides (opcional)

Cada camada é aplicada sobre a anterior com `deep_merge`.

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são falhas fatais
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não persiste configuração ou hash
    - Não interage com o coordenador de estado
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from .errors import (
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, TimelineSettings, resolve_settings


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê um arquivo de configuração e valida o tipo raiz.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        DefaultsNotFoundError: se o arquivo não existir.
        UnsupportedConfigFormatError: se a extensão não for YAML/JSON.
        InvalidConfigRootTypeError: se a raiz não for um dicionário.
    """
    if not path.exists():
        raise DefaultsNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

    elif suffix == ".json":
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    return data


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - `DEFAULT_CONFIG` é sempre a base
        - `defaults_path`, quando informado, precisa existir
        - `local_path` é opcional; se o arquivo não existir é ignorado
        - o local tem prioridade sobre defaults, que têm prioridade sobre a base

    Args:
        defaults_path: caminho do arquivo de defaults do deployment.
        local_path: caminho opcional para overrides locais.

    Returns:
        Configuração final resolvida (dict puro).

    Raises:
        DefaultsNotFoundError: se `defaults_path` não existir.
        UnsupportedConfigFormatError: se o formato não for suportado.
        InvalidConfigRootTypeError: se o conteúdo não for um dicionário.
        ConfigTypeConflictError: se ocorrer conflito estrutural no merge.
    """
    effective = deep_merge(DEFAULT_CONFIG, {})

    if defaults_path is not None:
        effective = deep_merge(effective, _load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            effective = deep_merge(effective, _load_file(local_file))

    return effective


def load_settings(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> TimelineSettings:
    """Carrega a configuração e a materializa em `TimelineSettings` validado."""
    config = load_config(defaults_path=defaults_path, local_path=local_path)
    return resolve_settings(config, config_hash=compute_config_hash(config))
