"""
Unit tests for configuration validation, loading and host settings.
"""

import pytest

from capture_restarter.config import (
    clear_config_cache,
    config_from_host,
    get_config,
    get_config_info,
    is_config_loaded,
    load_toml_file,
    set_config_path,
    validate_restarter_config,
    write_default_config,
)
from capture_restarter.models.config import (
    DEFAULT_FALLBACK_CONTROL_NAMES,
    MonitoredTypeSpec,
    RestarterConfig,
)
from capture_restarter.validation import (
    ValidationError,
    validate_boolean,
    validate_enum_choice,
    validate_name_list,
    validate_positive_integer,
)


@pytest.mark.unit
class TestValidators:
    """Test cases for the generic validators."""

    def test_positive_integer_bounds(self):
        assert validate_positive_integer("7", min_value=1, max_value=10) == 7

        with pytest.raises(ValidationError, match="must be >= 1"):
            validate_positive_integer(0, field_name="quota")
        with pytest.raises(ValidationError, match="must be <= 10"):
            validate_positive_integer(11, max_value=10, field_name="quota")

    def test_positive_integer_rejects_bool_and_garbage(self):
        with pytest.raises(ValidationError, match="valid integer"):
            validate_positive_integer(True)
        with pytest.raises(ValidationError, match="valid integer"):
            validate_positive_integer("fast")

    def test_boolean(self):
        assert validate_boolean(False) is False
        with pytest.raises(ValidationError):
            validate_boolean("yes", field_name="flag")

    def test_enum_choice_case_insensitive(self):
        assert validate_enum_choice("debug", ["DEBUG", "INFO"]) == "DEBUG"
        with pytest.raises(ValidationError, match="must be one of"):
            validate_enum_choice("LOUD", ["DEBUG", "INFO"])

    def test_name_list_dedupes_in_order(self):
        assert validate_name_list(["restart", " reactivate ", "restart"]) == ["restart", "reactivate"]

    def test_name_list_rejects_blank(self):
        with pytest.raises(ValidationError, match=r"names\[1\]"):
            validate_name_list(["restart", ""], field_name="names")


@pytest.mark.unit
class TestRestarterConfigValidation:
    """Test cases for validate_restarter_config."""

    def test_full_config(self, sample_config_data):
        config = validate_restarter_config(sample_config_data)

        assert config.check_interval_ms == 250
        assert config.sources_per_check == 2
        assert config.use_cooperative_mode is False
        assert config.enum_interval_ms == 20000
        assert config.cooperative_idle_ticks == 10
        assert config.fallback_control_names == ["restart_capture", "restart"]
        assert config.log_level == "DEBUG"
        assert config.extra_source_types == (
            MonitoredTypeSpec("display_capture", "display capture", "reactivate_capture"),
        )

    def test_empty_config_uses_defaults(self):
        config = validate_restarter_config({})

        assert config == RestarterConfig()
        assert config.check_interval_ms == 500
        assert config.sources_per_check == 1
        assert config.use_cooperative_mode is False
        assert config.fallback_control_names == list(DEFAULT_FALLBACK_CONTROL_NAMES)

    @pytest.mark.parametrize(
        "key,value",
        [
            ("check_interval_ms", 99),
            ("check_interval_ms", 5001),
            ("sources_per_check", 0),
            ("sources_per_check", 11),
        ],
    )
    def test_out_of_range_timer_values(self, sample_config_data, key, value):
        sample_config_data["restarter"][key] = value

        with pytest.raises(ValidationError) as exc_info:
            validate_restarter_config(sample_config_data)

        assert key in str(exc_info.value)

    def test_range_edges_accepted(self, sample_config_data):
        sample_config_data["restarter"]["check_interval_ms"] = 100
        sample_config_data["restarter"]["sources_per_check"] = 10

        config = validate_restarter_config(sample_config_data)

        assert config.check_interval_ms == 100
        assert config.sources_per_check == 10

    def test_mode_must_be_boolean(self, sample_config_data):
        sample_config_data["restarter"]["use_cooperative_mode"] = "true"

        with pytest.raises(ValidationError, match="use_cooperative_mode"):
            validate_restarter_config(sample_config_data)

    def test_duplicate_source_types(self, sample_config_data):
        sample_config_data["source_types"].append(dict(sample_config_data["source_types"][0]))

        with pytest.raises(ValidationError, match="Duplicate source type"):
            validate_restarter_config(sample_config_data)

    def test_source_type_defaults(self):
        config = validate_restarter_config({"source_types": [{"type_id": "window_capture"}]})

        spec = config.extra_source_types[0]
        assert spec.display_name == "window_capture"
        assert spec.reactivation_property == "reactivate_capture"

    def test_short_enum_interval_warns(self, sample_config_data, caplog):
        sample_config_data["restarter"]["check_interval_ms"] = 5000
        sample_config_data["restarter"]["enum_interval_ms"] = 1000

        validate_restarter_config(sample_config_data)

        assert "rebuild on every tick" in caplog.text


@pytest.mark.unit
class TestConfigManager:
    """Test cases for the configuration singleton and file helpers."""

    def test_get_config_from_file(self, config_file):
        set_config_path(config_file)
        assert not is_config_loaded()

        config = get_config()

        assert config.check_interval_ms == 250
        assert get_config() is config
        assert get_config_info()["mode"] == "incremental"

    def test_clear_config_cache(self, config_file):
        set_config_path(config_file)
        first = get_config()

        clear_config_cache()

        assert get_config() is not first

    def test_missing_file(self, temp_dir):
        set_config_path(temp_dir / "missing.toml")

        with pytest.raises(FileNotFoundError):
            get_config()

    def test_invalid_file_values(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("[restarter]\nsources_per_check = 50\n")
        set_config_path(path)

        with pytest.raises(ValidationError):
            get_config()

    def test_write_default_config_round_trips(self, temp_dir):
        path = write_default_config(temp_dir / "conf" / "config.toml")

        assert validate_restarter_config(load_toml_file(path)) == RestarterConfig()

    def test_write_default_config_refuses_overwrite(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text("")

        with pytest.raises(FileExistsError):
            write_default_config(path)

    def test_shipped_config_is_valid(self):
        from pathlib import Path

        shipped = Path(__file__).parents[3] / "conf" / "config.toml"

        assert validate_restarter_config(load_toml_file(shipped)) == RestarterConfig()


@pytest.mark.unit
class TestConfigFromHost:
    """Test cases for reading the host settings store."""

    def test_defaults_when_store_empty(self, host):
        config = config_from_host(host, {})

        assert config.check_interval_ms == 500
        assert config.sources_per_check == 1
        assert config.use_cooperative_mode is False

    def test_store_values_override_base(self, host):
        base = RestarterConfig(enum_interval_ms=9000, cooperative_idle_ticks=5)
        settings = {"check_interval": 1000, "sources_per_check": 3, "use_coroutine": True}

        config = config_from_host(host, settings, base=base)

        assert config.check_interval_ms == 1000
        assert config.sources_per_check == 3
        assert config.use_cooperative_mode is True
        assert config.enum_interval_ms == 9000
        assert config.cooperative_idle_ticks == 5
        assert base.check_interval_ms == 500

    def test_out_of_range_store_value(self, host):
        with pytest.raises(ValidationError, match="check_interval"):
            config_from_host(host, {"check_interval": 50})
