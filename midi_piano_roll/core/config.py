"""Configuration persistence using JSON format.

User settings live at ``~/.midi_piano_roll/config.json``.  Missing keys fall
back to ``DEFAULT_CONFIG`` so older files keep working after new settings are
added.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from .constants import (
    DEFAULT_BEAT_WIDTH,
    DEFAULT_ROW_HEIGHT,
    DEFAULT_TEMPO,
    DEFAULT_ZOOM_SPEED,
    MAX_BEAT_WIDTH,
    MAX_ROW_HEIGHT,
    MIN_BEAT_WIDTH,
    MIN_ROW_HEIGHT,
)
from .grid import ZoomLevel, ZoomState
from .keys import Keys
from .measure import GridStyle
from .tempo import Tempo, TimeSignature

log = logging.getLogger(__name__)

# Default configuration schema
DEFAULT_CONFIG = {
    "version": "1.0",
    "grid": {
        "beats_per_bar": 4,
        "beat_note_value": 4,
        "bars": None,  # None = auto (one bar past the last note)
        "keys": [0, 127],  # lowest, highest row pitch
    },
    "zoom": {
        "level": int(ZoomLevel.QUARTER_NOTES),
        "min_level": int(ZoomLevel.WHOLE_NOTES),
        "max_level": int(ZoomLevel.SIXTEENTH_NOTES),
        "beat_width": DEFAULT_BEAT_WIDTH,
        "min_beat_width": MIN_BEAT_WIDTH,
        "max_beat_width": MAX_BEAT_WIDTH,
        "row_height": DEFAULT_ROW_HEIGHT,
        "min_row_height": MIN_ROW_HEIGHT,
        "max_row_height": MAX_ROW_HEIGHT,
        "speed": DEFAULT_ZOOM_SPEED,
    },
    "export": {
        "tempo_bpm": DEFAULT_TEMPO,
        "channel": 0,
    },
    "style": GridStyle().to_dict(),
}


class ConfigManager:
    """Manages user configuration with JSON persistence."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Custom config directory. If None, uses ~/.midi_piano_roll/
        """
        if config_dir is None:
            config_dir = Path.home() / ".midi_piano_roll"
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self._config: dict[str, Any] = {}
        self._load()

    def _load(self) -> None:
        """Load config from disk or create default."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

        if self.config_file.exists():
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    loaded = json.load(f)
                # Merge with defaults (in case new keys were added)
                self._config = self._merge_defaults(loaded)
            except (json.JSONDecodeError, OSError):
                log.warning("Failed to load config %s, using defaults", self.config_file,
                            exc_info=True)
                self._config = copy.deepcopy(DEFAULT_CONFIG)
        else:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._save()

    def _merge_defaults(self, loaded: dict) -> dict:
        """Recursively merge loaded config with defaults."""
        def deep_merge(base: dict, override: dict) -> dict:
            merged = copy.deepcopy(base)
            for key, value in override.items():
                if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                    merged[key] = deep_merge(merged[key], value)
                else:
                    merged[key] = value
            return merged

        return deep_merge(DEFAULT_CONFIG, loaded)

    def _save(self) -> None:
        """Write config to disk."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except OSError:
            log.warning("Failed to save config %s", self.config_file, exc_info=True)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation.

        Example:
            config.get("zoom.beat_width")
            config.get("export.tempo_bpm", 120.0)
        """
        keys = key_path.split(".")
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set config value using dot notation and save.

        Example:
            config.set("export.tempo_bpm", 96.0)
            config.set("zoom.level", 8)
        """
        keys = key_path.split(".")
        target = self._config
        for key in keys[:-1]:
            if key not in target or not isinstance(target[key], dict):
                target[key] = {}
            target = target[key]
        target[keys[-1]] = value
        self._save()

    def get_all(self) -> dict[str, Any]:
        """Get entire config dictionary (for debugging)."""
        return copy.deepcopy(self._config)

    def reset(self) -> None:
        """Reset config to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._save()

    # ── Typed views ─────────────────────────────────────

    def bars(self) -> int | None:
        """Fixed bar count, or None for automatic (see ``NoteCatalog.bar_count``)."""
        return self.get("grid.bars")

    def keys(self) -> Keys:
        low, high = self.get("grid.keys", [0, 127])
        return Keys.ranged(low, high)

    def grid_style(self) -> GridStyle:
        return GridStyle.from_dict(self.get("style", {}))

    def tempo(self) -> Tempo:
        return Tempo(
            bpm=self.get("export.tempo_bpm", DEFAULT_TEMPO),
            time_signature=TimeSignature(
                self.get("grid.beats_per_bar", 4),
                self.get("grid.beat_note_value", 4),
            ),
        )

    def zoom_state(self) -> ZoomState:
        zoom = self.get("zoom", {})
        return ZoomState(
            zoom_level=ZoomLevel(zoom["level"]),
            step_width=zoom["beat_width"],
            min_zoom_level=ZoomLevel(zoom["min_level"]),
            max_zoom_level=ZoomLevel(zoom["max_level"]),
            min_step_width=zoom["min_beat_width"],
            max_step_width=zoom["max_beat_width"],
            row_height=zoom["row_height"],
            min_row_height=zoom["min_row_height"],
            max_row_height=zoom["max_row_height"],
            zoom_speed=zoom["speed"],
            beats_per_bar=self.get("grid.beats_per_bar", 4),
        )


# Global singleton instance
_global_config: ConfigManager | None = None


def get_config() -> ConfigManager:
    """Get global config instance (singleton pattern)."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config
