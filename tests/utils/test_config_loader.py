import pytest
import yaml

from procviz.core.exceptions import ConfigurationError
from procviz.utils.config_loader import (
    ProcessorConfig,
    clear_config_cache,
    get_config,
    load_config,
    parse_config,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    clear_config_cache()
    yield
    clear_config_cache()


def _write(path, data):
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)


class TestLoadConfig:
    def test_load_valid_config(self, temp_config_yaml_file):
        cfg = load_config(temp_config_yaml_file)

        assert isinstance(cfg, ProcessorConfig)
        assert cfg.available_registers == ("AX", "BX", "CX")
        assert cfg.cycle_time_ms == 250
        assert cfg.reset_registers_on_load is True

    def test_minimal_config_uses_defaults(self, minimal_processor_config_dict):
        cfg = parse_config(minimal_processor_config_dict)

        assert cfg.available_registers == ("AX",)
        assert cfg.cycle_time_ms == 500
        assert cfg.reset_registers_on_load is False

    def test_bundled_config_loads(self):
        cfg = load_config()

        assert cfg.available_registers == ("AX", "BX", "CX", "DX")
        assert cfg.reset_registers_on_load is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, temp_yaml_file):
        temp_yaml_file.write_text("processor: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Failed to parse config"):
            load_config(temp_yaml_file)

    def test_non_mapping_root(self, temp_yaml_file):
        temp_yaml_file.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(temp_yaml_file)


class TestValidation:
    def test_missing_processor_section(self):
        with pytest.raises(ConfigurationError, match="Missing required config key"):
            parse_config({})

    def test_missing_registers(self):
        with pytest.raises(ConfigurationError):
            parse_config({"processor": {"cycle_time_ms": 10}})

    @pytest.mark.parametrize("registers", [[], "AX", [""], [3]])
    def test_invalid_register_lists(self, registers):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"processor": {"available_registers": registers}})
        assert exc_info.value.config_key == "processor.available_registers"

    @pytest.mark.parametrize("name", ["CP", "IR"])
    def test_reserved_register_rejected(self, name):
        with pytest.raises(ConfigurationError, match="reserved"):
            parse_config({"processor": {"available_registers": ["AX", name]}})

    def test_duplicate_register_rejected(self):
        with pytest.raises(ConfigurationError, match="duplicate"):
            parse_config({"processor": {"available_registers": ["AX", "AX"]}})

    @pytest.mark.parametrize("cycle", [-1, "fast", True])
    def test_invalid_cycle_time(self, cycle):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"processor": {"available_registers": ["AX"], "cycle_time_ms": cycle}})
        assert exc_info.value.config_key == "processor.cycle_time_ms"


class TestCache:
    def test_get_config_caches_per_path(self, temp_config_yaml_file):
        first = get_config(temp_config_yaml_file)
        _write(temp_config_yaml_file, {"processor": {"available_registers": ["ZZ"]}})

        assert get_config(temp_config_yaml_file) is first

    def test_clear_cache_forces_reload(self, temp_config_yaml_file):
        get_config(temp_config_yaml_file)
        _write(temp_config_yaml_file, {"processor": {"available_registers": ["ZZ"]}})
        clear_config_cache()

        assert get_config(temp_config_yaml_file).available_registers == ("ZZ",)
