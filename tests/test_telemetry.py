import pytest

from text_composition.runtime import telemetry


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXT_COMPOSITION_LOG_JSON", "Yes")
    monkeypatch.setenv("TEXT_COMPOSITION_NO_COLOR", "0")
    monkeypatch.delenv("TEXT_COMPOSITION_DISABLE_CONSOLE", raising=False)

    assert telemetry.env_flag("LOG_JSON", False) is True
    assert telemetry.env_flag("NO_COLOR", True) is False
    assert telemetry.env_flag("DISABLE_CONSOLE", True) is True


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")
    with pytest.raises(ValueError):
        telemetry.configure(preset="performance")

    assert telemetry.PRESETS == ("development", "production")


def test_module_exports_only_the_logging_surface() -> None:
    assert "env_int" not in telemetry.__all__
    assert "resolve_level" not in telemetry.__all__
    assert not hasattr(telemetry, "env_int")
    assert not hasattr(telemetry, "resolve_level")


def test_configure_from_environment_drops_cached_loggers(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("TEXT_COMPOSITION_LOG_LEVEL", "debug")
    monkeypatch.setenv("TEXT_COMPOSITION_DISABLE_CONSOLE", "1")
    before = telemetry.get_logger("text_composition.tests.env")

    telemetry.configure()
    try:
        assert telemetry.get_logger("text_composition.tests.env") is not before
    finally:
        monkeypatch.delenv("TEXT_COMPOSITION_LOG_LEVEL")
        monkeypatch.delenv("TEXT_COMPOSITION_DISABLE_CONSOLE")
        telemetry.configure()


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("text_composition.tests") is telemetry.get_logger(
        "text_composition.tests"
    )


def test_span_yields_handle() -> None:
    with telemetry.span("tests::span", metadata={"size": 3}) as handle:
        handle.add_metadata("result", [1, 2])

    assert handle.metadata == {"size": "3", "result": "[1, 2]"}
    assert handle.component_name is None
