import os

# APP_ENV -> settings module; anything unknown runs as development
_ENVIRONMENTS = {
    "prod": "production",
    "production": "production",
    "test": "testing",
    "testing": "testing",
}


def get_settings_module(env: str | None = None) -> str:
    name = (env or os.getenv("APP_ENV", "development")).strip().lower()
    return f"config.{_ENVIRONMENTS.get(name, 'development')}"
