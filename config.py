import os
import yaml

from settings_schema import SettingsSchema, validate_settings


class YamlConfig:
    """Load and save analytics settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def get(self, key: str, default=None):
        """Return a stored value, falling back to the schema default."""
        data = self.load()
        if key in data:
            return data[key]
        if default is None and key in SettingsSchema.model_fields:
            return SettingsSchema.model_fields[key].default
        return default

    def save(self, data: dict) -> None:
        validate_settings(data)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(dict(data), f)

    def update(self, **values) -> dict:
        """Merge ``values`` into the stored settings and save them."""
        data = self.load()
        data.update(values)
        self.save(data)
        return data
