from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/questlog"
    api_key: str | None = None

    log_level: str = "INFO"
    log_json: bool = False  # JSON lines on stderr instead of the coloured console format

    # Waiting-task reminders: frequency key -> days between reminders
    reminder_frequency_days: dict[str, int] = {
        "weekly": 7,
        "monthly": 30,
        "bimonthly": 60,
        "semiannual": 180,
        "yearly": 365,
    }

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
