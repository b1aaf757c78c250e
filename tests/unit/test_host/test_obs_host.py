"""
Unit tests for the OBS host adapter.

``obspython`` only exists inside OBS, so the adapter is given a mock
module and the tests check the calls it makes.
"""

from unittest.mock import Mock, patch

import pytest

from capture_restarter.host.obs import ObsHost


@pytest.fixture
def obs():
    return Mock(name="obspython")


@pytest.mark.unit
class TestObsHost:
    """Test cases for ObsHost."""

    def test_enumerate_returns_list(self, obs):
        obs.obs_enum_sources.return_value = ["src1", "src2"]

        assert ObsHost(obs).enumerate_resources() == ["src1", "src2"]

    def test_enumerate_none(self, obs):
        obs.obs_enum_sources.return_value = None

        assert ObsHost(obs).enumerate_resources() == []

    def test_introspection_calls(self, obs):
        obs.obs_source_get_unversioned_id.return_value = "screen_capture"
        obs.obs_source_get_name.return_value = "Display"
        host = ObsHost(obs)

        assert host.get_type_id("src") == "screen_capture"
        assert host.get_name("src") == "Display"
        assert host.get_name(None) is None
        obs.obs_source_get_name.assert_called_once_with("src")

    def test_property_and_control_calls(self, obs):
        obs.obs_source_properties.return_value = "props"
        obs.obs_properties_get.return_value = "button"
        obs.obs_property_enabled.return_value = 1
        host = ObsHost(obs)

        properties = host.get_properties("src")
        control = host.get_control(properties, "reactivate_capture")
        assert host.is_enabled(control) is True
        host.trigger(control, "src")
        host.release_properties(properties)

        obs.obs_properties_get.assert_called_once_with("props", "reactivate_capture")
        obs.obs_property_button_clicked.assert_called_once_with("button", "src")
        obs.obs_properties_destroy.assert_called_once_with("props")

    def test_release_resource(self, obs):
        ObsHost(obs).release_resource("src")

        obs.obs_source_release.assert_called_once_with("src")

    def test_timer_calls(self, obs):
        host = ObsHost(obs)
        callback = Mock()

        host.register_tick(callback, 500)
        host.unregister_tick(callback)

        obs.timer_add.assert_called_once_with(callback, 500)
        obs.timer_remove.assert_called_once_with(callback)

    def test_settings_reads(self, obs):
        obs.obs_data_get_int.return_value = 750
        obs.obs_data_get_bool.return_value = 0
        host = ObsHost(obs)

        assert host.get_int("settings", "check_interval") == 750
        assert host.get_bool("settings", "use_coroutine") is False
        obs.obs_data_get_int.assert_called_once_with("settings", "check_interval")

    def test_release_all_counts(self, obs):
        assert ObsHost(obs).release_all(["a", "b", "c"]) == 3
        assert obs.obs_source_release.call_count == 3

    def test_imports_obspython_when_not_given(self):
        fake_module = Mock(name="obspython")
        with patch("capture_restarter.host.obs.importlib.import_module", return_value=fake_module) as mock_import:
            host = ObsHost()

        mock_import.assert_called_once_with("obspython")
        assert host.obs is fake_module

    def test_missing_obspython_raises(self):
        with patch(
            "capture_restarter.host.obs.importlib.import_module",
            side_effect=ModuleNotFoundError("No module named 'obspython'"),
        ):
            with pytest.raises(ModuleNotFoundError):
                ObsHost()
