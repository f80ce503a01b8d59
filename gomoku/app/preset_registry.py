import yaml
from pathlib import Path
from pydantic import BaseModel, Field
from typing import Dict, Optional

from gomoku.core.rules import RuleSet

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "presets.yaml"

class PresetConfig(BaseModel):
    label: str
    depth: int = Field(ge=1)
    rules: RuleSet = Field(default_factory=RuleSet)

class PresetRegistry:
    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        self.presets: Dict[str, PresetConfig] = {}
        self._load(config_path)

    def _load(self, path: Path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            for key, val in data.get("presets", {}).items():
                self.presets[key] = PresetConfig(**val)

    def get(self, preset_key: str) -> Optional[PresetConfig]:
        return self.presets.get(preset_key)

    def require(self, preset_key: str) -> PresetConfig:
        preset = self.get(preset_key)
        if preset is None:
            raise ValueError(f"Unknown preset '{preset_key}'. Available: {', '.join(self.presets)}")
        return preset

    def list_all(self) -> Dict[str, PresetConfig]:
        return self.presets

# Singleton instance
registry = PresetRegistry()
