"""
Runtime configuration.

Everything comes from environment variables (a local .env file is loaded
first). The blueprint filter is picked here once per process; requests
cannot choose a different one.
"""
import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    filter_name: Literal["identity", "redundancy", "undersampling"] = "identity"
    undersampling_step: int = Field(default=2, ge=1)
    store: Literal["memory", "sql"] = "memory"
    database_url: str = "sqlite:///./blueprints.db"
    seed_data: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            filter_name=env.get("BLUEPRINTS_FILTER", "identity").strip().lower(),
            undersampling_step=int(env.get("BLUEPRINTS_UNDERSAMPLING_STEP", "2")),
            store=env.get("BLUEPRINTS_STORE", "memory").strip().lower(),
            database_url=env.get("DATABASE_URL", "sqlite:///./blueprints.db"),
            seed_data=env.get("BLUEPRINTS_SEED_DATA", "false").strip().lower() in _TRUTHY,
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
            host=env.get("HOST", "0.0.0.0"),
            port=int(env.get("PORT", "8080")),
        )
