from config.schema import EngineConfig, WeekConfig

# Fallback-Stundenzahl pro Tag (Kapazitäts-Check, wenn keine Klasse Stunden definiert)
DEFAULT_PERIODS = 5

WEEKDAY_NAMES = ["Mo", "Di", "Mi", "Do", "Fr"]

# Fächer für den Testdaten-Generator: Name → typische Wochenstunden
SUBJECT_HOURS: dict[str, int] = {
    "Deutsch": 4,
    "Mathematik": 4,
    "Englisch": 3,
    "Biologie": 2,
    "Geschichte": 2,
    "Erdkunde": 2,
    "Physik": 2,
    "Kunst": 2,
    "Musik": 1,
    "Sport": 3,
}


def default_week() -> WeekConfig:
    """Standard-Wochenraster: Mo–Fr, 5 Stunden als Fallback."""
    return WeekConfig(
        days_per_week=5,
        day_names=list(WEEKDAY_NAMES),
        standard_periods=DEFAULT_PERIODS,
        max_periods=10,
    )


def default_engine_config() -> EngineConfig:
    """Vollständige Standard-Konfiguration."""
    return EngineConfig(
        school_name="Muster-Schule",
        week=default_week(),
    )
