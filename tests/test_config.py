import pytest
from pydantic import ValidationError

from blueprints_api.config import Settings


def test_defaults():
    s = Settings.from_env({})
    assert s.filter_name == "identity"
    assert s.store == "memory"
    assert s.undersampling_step == 2
    assert s.seed_data is False
    assert s.log_level == "INFO"


def test_reads_environment():
    s = Settings.from_env({
        "BLUEPRINTS_FILTER": " Undersampling ",
        "BLUEPRINTS_UNDERSAMPLING_STEP": "3",
        "BLUEPRINTS_STORE": "sql",
        "DATABASE_URL": "postgresql://bp:bp@db/blueprints",
        "BLUEPRINTS_SEED_DATA": "yes",
        "LOG_LEVEL": "debug",
        "PORT": "9000",
    })
    assert s.filter_name == "undersampling"
    assert s.undersampling_step == 3
    assert s.store == "sql"
    assert s.database_url == "postgresql://bp:bp@db/blueprints"
    assert s.seed_data is True
    assert s.log_level == "DEBUG"
    assert s.port == 9000


@pytest.mark.parametrize("env", [
    {"BLUEPRINTS_FILTER": "smoothing"},
    {"BLUEPRINTS_STORE": "redis"},
    {"BLUEPRINTS_UNDERSAMPLING_STEP": "0"},
])
def test_rejects_invalid_values(env):
    with pytest.raises(ValidationError):
        Settings.from_env(env)
