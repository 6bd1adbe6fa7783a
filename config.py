"""
Configuration management for TransTip.
Handles the translation command, selection limits, key bindings and theme.
"""
import os
import json
import logging
from typing import Optional, Dict, Any, List

from transtip.constants import APP_NAME


def _default_config_dir() -> str:
    """Per-user settings directory (%APPDATA% on Windows, XDG elsewhere)."""
    appdata = os.environ.get('APPDATA')
    if appdata:
        return os.path.join(appdata, APP_NAME)
    xdg = os.environ.get('XDG_CONFIG_HOME') or os.path.join(os.path.expanduser('~'), '.config')
    return os.path.join(xdg, APP_NAME)


class Config:
    """Manages application configuration stored in <config dir>/config.json"""

    CONFIG_DIR = _default_config_dir()
    CONFIG_FILE = os.path.join(CONFIG_DIR, 'config.json')

    DEFAULT_READER_KEYS = {
        "translate": "<Control-t>",
        "gapped": "<Control-g>",
    }

    DEFAULT_CONFIG = {
        "command": ["trans"],       # Translation tool argv prefix
        "extra_args": [],           # Added to every call, e.g. [":de"]
        "brief_args": ["-b"],       # Flags asking the tool for terse output
        "max_selection_length": 50,  # Only applies to mouse-drag translation
        "max_context": 100,         # Characters kept on each side of the gapped word
        "reader_keys": DEFAULT_READER_KEYS.copy(),
        "global_hotkey": "ctrl+alt+t",
        "global_hotkeys_enabled": True,
        "theme": "darkly",
    }

    INT_KEYS = ('max_selection_length', 'max_context')
    ARGV_KEYS = ('command', 'extra_args', 'brief_args')

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._ensure_config_dir()
        self.load()

    def _ensure_config_dir(self):
        """Create config directory if it doesn't exist."""
        if not os.path.exists(self.CONFIG_DIR):
            os.makedirs(self.CONFIG_DIR)

    def load(self) -> Dict[str, Any]:
        """Load configuration from file."""
        if os.path.exists(self.CONFIG_FILE):
            try:
                with open(self.CONFIG_FILE, 'r', encoding='utf-8') as f:
                    self._config = json.load(f)
            except (json.JSONDecodeError, IOError) as e:
                logging.warning(f"Could not read {self.CONFIG_FILE}, using defaults: {e}")
                self._config = self._defaults()
            if not isinstance(self._config, dict):
                logging.warning("Config file does not hold an object, using defaults")
                self._config = self._defaults()
        else:
            self._config = self._defaults()

        # Merge with defaults for any missing keys
        for key, value in self._defaults().items():
            if key not in self._config:
                self._config[key] = value

        self._drop_invalid_values()
        return self._config

    def _defaults(self) -> Dict[str, Any]:
        return json.loads(json.dumps(self.DEFAULT_CONFIG))

    def _drop_invalid_values(self) -> None:
        """Replace values a hand-edited file got wrong with their defaults."""
        defaults = self._defaults()
        for key in self.INT_KEYS:
            try:
                _check_count(key, self._config[key])
            except ValueError as e:
                logging.warning(f"{e}; using default {defaults[key]}")
                self._config[key] = defaults[key]
        for key in self.ARGV_KEYS:
            try:
                _check_argv(key, self._config[key], allow_empty=(key != 'command'))
            except ValueError as e:
                logging.warning(f"{e}; using default {defaults[key]}")
                self._config[key] = defaults[key]
        keys = self._config['reader_keys']
        if not isinstance(keys, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in keys.items()):
            logging.warning(f"reader_keys must map actions to key sequences, got {keys!r}; using defaults")
            self._config['reader_keys'] = defaults['reader_keys']

    def save(self):
        """Save configuration to file."""
        self._ensure_config_dir()
        with open(self.CONFIG_FILE, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)

    # Translation command
    def get_command(self) -> List[str]:
        """Get the translation tool argv prefix."""
        return list(self._config.get('command', self.DEFAULT_CONFIG['command']))

    def set_command(self, command: List[str]):
        _check_argv('command', command, allow_empty=False)
        self._config['command'] = list(command)
        self.save()

    def get_extra_args(self) -> List[str]:
        return list(self._config.get('extra_args', []))

    def set_extra_args(self, args: List[str]):
        _check_argv('extra_args', args)
        self._config['extra_args'] = list(args)
        self.save()

    def get_brief_args(self) -> List[str]:
        """Get the flags that request concise output."""
        return list(self._config.get('brief_args', self.DEFAULT_CONFIG['brief_args']))

    def set_brief_args(self, args: List[str]):
        _check_argv('brief_args', args)
        self._config['brief_args'] = list(args)
        self.save()

    # Limits
    def get_max_selection_length(self) -> int:
        """Longest selection translated automatically after a mouse drag."""
        return self._config.get('max_selection_length', self.DEFAULT_CONFIG['max_selection_length'])

    def set_max_selection_length(self, length: int):
        _check_count('max_selection_length', length)
        self._config['max_selection_length'] = length
        self.save()

    def get_max_context(self) -> int:
        """Characters of context kept on each side of a gapped word."""
        return self._config.get('max_context', self.DEFAULT_CONFIG['max_context'])

    def set_max_context(self, chars: int):
        _check_count('max_context', chars)
        self._config['max_context'] = chars
        self.save()

    # Key bindings
    def get_reader_keys(self) -> Dict[str, str]:
        """Get reader window key bindings (Tk event sequences)."""
        keys = self.DEFAULT_READER_KEYS.copy()
        keys.update(self._config.get('reader_keys', {}))
        return keys

    def set_reader_key(self, action: str, sequence: str):
        """Set the Tk event sequence for a reader action ('translate' or 'gapped')."""
        if action not in self.DEFAULT_READER_KEYS:
            raise ValueError(f"Unknown reader action: {action}")
        self._config.setdefault('reader_keys', self.DEFAULT_READER_KEYS.copy())[action] = sequence
        self.save()

    def get_global_hotkey(self) -> str:
        return self._config.get('global_hotkey', '')

    def set_global_hotkey(self, hotkey: str):
        self._config['global_hotkey'] = hotkey
        self.save()

    def get_global_hotkeys_enabled(self) -> bool:
        return self._config.get('global_hotkeys_enabled', True)

    def set_global_hotkeys_enabled(self, enabled: bool):
        self._config['global_hotkeys_enabled'] = enabled
        self.save()

    def get_theme(self) -> str:
        """Get UI theme."""
        return self._config.get('theme', 'darkly')

    def set_theme(self, theme: str):
        self._config['theme'] = theme
        self.save()

    def restore_defaults(self):
        """Reset every setting to its default."""
        self._config = self._defaults()
        self.save()

    # Generic getter/setter
    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value."""
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set a config value."""
        self._config[key] = value
        self.save()


def _check_count(key: str, value: Any) -> None:
    # bool is an int subclass but never a sensible length
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {value!r}")


def _check_argv(key: str, value: Any, allow_empty: bool = True) -> None:
    if not isinstance(value, list) or not all(isinstance(a, str) for a in value):
        raise ValueError(f"{key} must be a list of strings, got {value!r}")
    if not allow_empty and not value:
        raise ValueError(f"{key} must not be empty")


def get_default_config() -> Optional[Config]:
    """Load the user's config, or None if the config directory is unusable."""
    try:
        return Config()
    except OSError as e:
        logging.error(f"Cannot open config directory {Config.CONFIG_DIR}: {e}")
        return None
