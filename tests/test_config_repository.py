import json

from huntsplit.infrastructure.config_repository import DEFAULTS, ConfigRepository


def test_missing_config_is_created_with_defaults(tmp_path):
    path = tmp_path / "config.json"
    config = ConfigRepository(str(path))

    assert json.loads(path.read_text()) == DEFAULTS
    assert config.get_db_path() == "hunt_split.db"
    assert config.get_log_level() == "INFO"
    assert config.get_code_attempts() == 5
    assert config.get_reconcile_attempts() == 3


def test_partial_config_falls_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"db_path": "/data/hunts.db", "reconcile_attempts": "oops"}))
    config = ConfigRepository(str(path))

    assert config.get_db_path() == "/data/hunts.db"
    assert config.get_reconcile_attempts() == 3
    assert config.get_code_attempts() == 5


def test_unreadable_config_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert ConfigRepository(str(path)).get_config() == DEFAULTS
