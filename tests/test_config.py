from clinic.core.config import AppConfig, LoggingConfig
from clinic.services.appointments import AppointmentManager


def test_defaults(monkeypatch):
    for name in ("CLINIC_UTC_OFFSET_HOURS", "DAILY_CAPACITY", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(name, raising=False)

    config = AppConfig(_env_file=None)

    assert config.clinic_utc_offset_hours == 8
    assert config.daily_capacity == 4
    assert config.logging.level == "INFO"
    assert config.logging.json_logs is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DAILY_CAPACITY", "6")
    monkeypatch.setenv("CLINIC_UTC_OFFSET_HOURS", "9")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_JSON", "true")

    config = AppConfig(_env_file=None)

    assert (config.daily_capacity, config.clinic_utc_offset_hours) == (6, 9)
    assert LoggingConfig(_env_file=None).level == "debug"
    assert config.logging.json_logs is True


def test_manager_reads_clinic_settings(session):
    manager = AppointmentManager(session=session)

    assert manager.daily_capacity == 4
    assert manager.tzinfo.utcoffset(None).total_seconds() == 8 * 3600
