import pytest
from pydantic import ValidationError

from runledger.settings import Settings, load_settings


def test_defaults(clean_env):
    settings = load_settings()
    assert settings.precision == 2
    assert settings.log_level == "WARNING"

def test_environment_variables(clean_env, monkeypatch):
    monkeypatch.setenv("RUNLEDGER_PRECISION", "3")
    monkeypatch.setenv("RUNLEDGER_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.precision == 3
    assert settings.log_level == "DEBUG"

def test_blank_environment_variable_uses_default(clean_env, monkeypatch):
    monkeypatch.setenv("RUNLEDGER_PRECISION", "  ")
    assert load_settings().precision == 2

def test_dotenv_file_in_working_directory(clean_env):
    (clean_env / ".env").write_text("RUNLEDGER_PRECISION=4\n", encoding="utf-8")
    assert load_settings().precision == 4

def test_explicit_env_file(clean_env):
    env_file = clean_env / "ledger.env"
    env_file.write_text("RUNLEDGER_LOG_LEVEL=info\n", encoding="utf-8")
    assert load_settings(env_file=str(env_file)).log_level == "INFO"

def test_overrides_win_over_environment(clean_env, monkeypatch):
    monkeypatch.setenv("RUNLEDGER_PRECISION", "3")
    assert load_settings(precision=0).precision == 0
    assert load_settings(precision=None).precision == 3

@pytest.mark.parametrize("value", ["11", "-1", "two"])
def test_invalid_precision(clean_env, monkeypatch, value):
    monkeypatch.setenv("RUNLEDGER_PRECISION", value)
    with pytest.raises(ValidationError):
        load_settings()

def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")
