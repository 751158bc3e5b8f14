# tests/core/config/test_loader.py
"""
Testes do carregador de configuração (load_config).

Os testes asseguram que:
- sem arquivos, os defaults embutidos são retornados
- o arquivo de defaults é obrigatório quando informado
- o arquivo local é opcional
- formatos não suportados e raízes inválidas são rejeitados
- overrides locais têm precedência e preservam chaves não sobrescritas

Limites explícitos:
    - Não valida a leitura tipada (ver test_settings.py)
"""

from pathlib import Path

import pytest

try:
    from imgfx_pipeline.core.config.errors import (
        ConfigTypeConflictError,
        DefaultsNotFoundError,
        InvalidConfigRootTypeError,
        UnsupportedConfigFormatError,
    )
    from imgfx_pipeline.core.config.loader import load_config
except Exception as e:  # noqa: BLE001
    load_config = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing loader/errors modules. Implement:\n"
            "- src/imgfx_pipeline/core/config/loader.py (load_config)\n"
            "- src/imgfx_pipeline/core/config/errors.py (typed exceptions)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_builtin_defaults_without_files():
    _require_imports()
    out = load_config()
    assert out["executor"] == {"copy_input": True, "validate_images": True, "max_steps": 64}
    assert out["operations"]["default_remap"] == {"lhs": "r,g,b", "rhs": "r,g,b"}

    out["executor"]["max_steps"] = 1
    assert load_config()["executor"]["max_steps"] == 64


def test_missing_defaults_raises(tmp_path: Path):
    _require_imports()
    with pytest.raises(DefaultsNotFoundError):
        load_config(defaults_path=str(tmp_path / "defaults.yaml"))


def test_missing_local_is_ok(tmp_path: Path, project_like_config_defaults_yaml):
    """A ausência do arquivo local não invalida o carregamento."""
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(tmp_path / "local.yaml"))
    assert out["executor"]["max_steps"] == 16
    assert out["operations"]["default_remap"]["rhs"] == "r,g,b"


def test_load_defaults_and_local(
    tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml
):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    local = tmp_path / "local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(local))
    assert out["executor"]["max_steps"] == 4
    assert out["executor"]["copy_input"] is True
    assert out["operations"]["default_remap"] == {"lhs": "r,g,b", "rhs": "b,b,b"}


def test_local_without_defaults_file(tmp_path: Path, project_like_config_local_yaml):
    _require_imports()
    local = tmp_path / "local.yml"
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    out = load_config(local_path=str(local))
    assert out["executor"]["max_steps"] == 4
    assert out["executor"]["validate_images"] is True


def test_json_and_empty_files(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.json"
    defaults.write_text('{"executor": {"copy_input": false}}', encoding="utf-8")
    empty = tmp_path / "local.yaml"
    empty.write_text("", encoding="utf-8")

    out = load_config(defaults_path=str(defaults), local_path=str(empty))
    assert out["executor"]["copy_input"] is False
    assert out["executor"]["max_steps"] == 64


def test_unsupported_format(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.toml"
    defaults.write_text("[executor]\nmax_steps = 3\n", encoding="utf-8")
    with pytest.raises(UnsupportedConfigFormatError):
        load_config(defaults_path=str(defaults))


def test_invalid_root_type(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfigRootTypeError):
        load_config(defaults_path=str(defaults))


def test_type_conflict_in_file(tmp_path: Path):
    _require_imports()
    defaults = tmp_path / "defaults.yaml"
    defaults.write_text("executor: fast\n", encoding="utf-8")
    with pytest.raises(ConfigTypeConflictError):
        load_config(defaults_path=str(defaults))


def test_loaded_settings_are_strict(tmp_path: Path):
    """Floats integrais em max_steps são aceitos; strings em flags, não."""
    _require_imports()
    from imgfx_pipeline.core.config.settings import ExecutorSettings
    from imgfx_pipeline.core.exceptions import OutOfRange

    local = tmp_path / "local.yaml"
    local.write_text("executor:\n  max_steps: 8.0\n", encoding="utf-8")
    assert ExecutorSettings.from_config(load_config(local_path=str(local))).max_steps == 8

    local.write_text("executor:\n  copy_input: \"false\"\n", encoding="utf-8")
    with pytest.raises(ConfigTypeConflictError):
        load_config(local_path=str(local))

    with pytest.raises(OutOfRange):
        ExecutorSettings.from_config({"executor": {"copy_input": "false"}})
