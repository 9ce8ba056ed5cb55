# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Este módulo valida o comportamento do loader responsável por:
- partir sempre da configuração embutida (`DEFAULT_CONFIG`)
- carregar o arquivo de defaults do deployment (obrigatório quando informado)
- carregar o arquivo local de overrides (opcional)
- rejeitar formatos e estruturas inválidas

Decisões arquiteturais:
    - A configuração é declarativa e baseada em arquivos
    - Configuração local atua apenas como override explícito
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - A configuração final é sempre um dicionário
    - Nenhuma configuração parcial é retornada em caso de erro

Limites explícitos:
    - Não valida hashing de configuração
    - Não valida faixas de valores (coberto em test_settings)
"""

import pytest
from pathlib import Path

try:
    from hangar_timeline.core.config.loader import load_config
    from hangar_timeline.core.config.errors import (
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
except Exception as e:  # noqa: BLE001
    load_config = None
    DefaultsNotFoundError = None
    InvalidConfigRootTypeError = None
    UnsupportedConfigFormatError = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o loader de configuração e suas exceções tipadas estejam disponíveis.

    Invariantes:
        - Se os módulos existem, a função não produz efeitos colaterais
        - Se algum módulo está ausente, o teste falha imediatamente
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/hangar_timeline/core/config/loader.py (load_config)\n"
            "- src/hangar_timeline/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_no_files_returns_builtin_defaults():
    _require_imports()

    out = load_config()

    assert out["timeline"]["row_height"] == 48
    assert out["propagation"]["max_passes"] == 100


def test_missing_defaults_raises(tmp_path: Path):
    """
    Verifica que um arquivo de defaults informado e ausente é erro fatal.

    Invariantes:
        - A exceção utilizada é específica (`DefaultsNotFoundError`)
        - Nenhuma configuração parcial é retornada
    """
    _require_imports()

    missing = tmp_path / "defaults.yaml"
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(missing), local_path=None)


def test_missing_local_is_ok(tmp_path: Path, timeline_defaults_yaml):
    _require_imports()

    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(timeline_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))

    assert out["timeline"]["day_width"] == 60
    assert out["propagation"]["strategy"] == "relaxation"


def test_load_defaults_and_local(tmp_path: Path, timeline_defaults_yaml, timeline_local_yaml):
    """
    Verifica o merge de defaults + local.

    O resultado final deve refletir:
        - valores sobrescritos pelo local
        - valores preservados do defaults
    """
    _require_imports()

    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(timeline_defaults_yaml, encoding="utf-8")
    local.write_text(timeline_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))

    assert out["timeline"]["day_width"] == 40
    assert out["propagation"]["strategy"] == "topological"
    assert out["timeline"]["row_height"] == 48
    assert out["ingest"]["default_start_hour"] == 8


def test_empty_file_is_empty_mapping(tmp_path: Path):
    _require_imports()

    defaults = tmp_path / "defaults.yml"
    defaults.write_text("", encoding="utf-8")

    out = load_config(defaults_path=str(defaults))

    assert out["timeline"]["buffer"] == 5


def test_invalid_root_type_raises(tmp_path: Path):
    _require_imports()

    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- just\n- a\n- list\n", encoding="utf-8")

    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults), local_path=None)


def test_unsupported_extension_raises(tmp_path: Path):
    _require_imports()

    defaults = tmp_path / "defaults.toml"
    defaults.write_text("timeline = { buffer = 5 }\n", encoding="utf-8")

    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults), local_path=None)
