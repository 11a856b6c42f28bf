import os


def get_settings_module() -> str:
    """Settings module selected by APP_ENV (default: development)."""
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def shifts_from_env(default: str = "Manhã,Tarde") -> tuple[str, ...]:
    raw = os.getenv("SHIFTS", default)
    return tuple(s.strip() for s in raw.split(",") if s.strip())
