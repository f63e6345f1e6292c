import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("SOUNDGOOD_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    environment: str
    database_url: str
    log_level: str = "INFO"
    max_active_leases: int = 2
    max_lease_months: int = 12
    lock_instruments: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get(
                "DATABASE_URL", "postgresql://postgres@localhost:5432/soundgood"
            ),
            log_level=os.environ.get("SOUNDGOOD_LOG_LEVEL", "INFO").upper(),
            max_active_leases=int(os.environ.get("SOUNDGOOD_MAX_ACTIVE_LEASES", 2)),
            max_lease_months=int(os.environ.get("SOUNDGOOD_MAX_LEASE_MONTHS", 12)),
            lock_instruments=_env_flag("SOUNDGOOD_LOCK_INSTRUMENTS", True),
        )


config = Config.from_env()
