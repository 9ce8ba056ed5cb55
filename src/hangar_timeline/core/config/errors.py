# src/hangar_timeline/core/config/errors.py
"""
Exceções canônicas da camada de configuração do Hangar Timeline.

As exceções aqui definidas representam violações estruturais da
configuração (arquivos ausentes, formatos desconhecidos, tipos
conflitantes, valores fora de faixa), nunca erros do cronograma.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de propagação ou de janela

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de timeline, estado ou UI
"""


class ConfigError(Exception):
    """
    Exceção base para erros de configuração.

    Permite captura genérica de falhas de carregamento, merge e
    validação de settings.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    O arquivo de defaults é obrigatório quando informado a `load_config`.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz do arquivo não é um mapa chave-valor (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"timeline": {"day_width": 60}}
        - override: {"timeline": "wide"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidSettingsError(ConfigError):
    """
    Valor de configuração com tipo ou faixa inválidos para o cronograma.

    Exemplos:
        - timeline.row_height <= 0
        - propagation.strategy desconhecida
        - ingest.default_start_hour fora de 0–23
    """
