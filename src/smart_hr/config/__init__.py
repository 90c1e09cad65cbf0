import os


def get_settings_module() -> str:
    # Environment comes from APP_ENV, default 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "smart_hr.config.production"

    if env in {"test", "testing"}:
        return "smart_hr.config.testing"

    return "smart_hr.config.development"
