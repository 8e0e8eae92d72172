import warnings

from shared.core.config import Settings


def test_settings_ignore_unknown_environment_keys(monkeypatch):
    monkeypatch.setenv("SOME_OTHER_SERVICE_KEY", "x")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        settings = Settings()

    assert settings.model_config["extra"] == "ignore"
    assert not hasattr(settings, "SOME_OTHER_SERVICE_KEY")


def test_recursive_cascade_reads_from_environment(monkeypatch):
    monkeypatch.setenv("LOCATION_RECURSIVE_CASCADE", "true")

    assert Settings().LOCATION_RECURSIVE_CASCADE is True
