import json
import os

DEFAULTS = {
    "db_path": "hunt_split.db",
    "log_level": "INFO",
    "code_attempts": 5,
    "reconcile_attempts": 3,
}


class ConfigRepository:
    def __init__(self, config_path="config.json"):
        self.config_path = config_path
        self._ensure_config()

    def _ensure_config(self):
        if not os.path.exists(self.config_path):
            self.save_config(dict(DEFAULTS))

    def get_config(self):
        try:
            with open(self.config_path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            data = {}
        if not isinstance(data, dict):
            data = {}
        return {**DEFAULTS, **data}

    def save_config(self, data):
        with open(self.config_path, "w") as f:
            json.dump(data, f, indent=4)

    def get_db_path(self) -> str:
        return str(self.get_config()["db_path"])

    def get_log_level(self) -> str:
        return str(self.get_config()["log_level"])

    def _get_int(self, key: str) -> int:
        try:
            return int(self.get_config()[key])
        except (TypeError, ValueError):
            return DEFAULTS[key]

    def get_code_attempts(self) -> int:
        return self._get_int("code_attempts")

    def get_reconcile_attempts(self) -> int:
        return self._get_int("reconcile_attempts")
