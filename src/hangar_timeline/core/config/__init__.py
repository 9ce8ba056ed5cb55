# src/hangar_timeline/core/config/__init__.py

"""
Camada de configuração do Hangar Timeline.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Hash canônico para identificar a configuração de um snapshot
    - Materialização validada em `TimelineSettings`

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não executa propagação
    - Não depende de UI
"""

from .errors import (  # noqa: F401
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash  # noqa: F401
from .merge import deep_merge  # noqa: F401
from .settings import DEFAULT_CONFIG, TimelineSettings, resolve_settings  # noqa: F401
from .loader import load_config, load_settings  # noqa: F401
