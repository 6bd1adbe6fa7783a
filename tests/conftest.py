"""
Shared pytest fixtures for TransTip tests.
"""
import os
import sys
import json
import tempfile
import threading
import pytest
from unittest.mock import MagicMock

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def temp_config_dir():
    """Create temporary config directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def mock_config():
    """Mock Config object with test values."""
    config = MagicMock()
    config.get_command.return_value = ['trans']
    config.get_extra_args.return_value = [':de']
    config.get_brief_args.return_value = ['-b']
    config.get_max_selection_length.return_value = 50
    config.get_max_context.return_value = 100
    return config


@pytest.fixture
def sample_config_json():
    """Sample config.json content."""
    return {
        "command": ["trans", "-no-ansi"],
        "extra_args": [":fr"],
        "max_selection_length": 30,
        "theme": "flatly"
    }


@pytest.fixture
def write_config(temp_config_dir):
    """Write a dict (or raw string) as config.json and return its path."""
    def _write(content):
        path = os.path.join(temp_config_dir, 'config.json')
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(content, str):
                f.write(content)
            else:
                json.dump(content, f)
        return path
    return _write


class FakePopup:
    """Records what the translators show and hide."""

    def __init__(self):
        self.shown = []
        self.hidden = 0
        self.events = []

    def show(self, text):
        self.shown.append(text)
        self.events.append(('show', text))

    def hide(self):
        self.hidden += 1
        self.events.append(('hide', None))


class FakeInvoker:
    """Stands in for ProcessInvoker; chunks are fed by the test."""

    def __init__(self):
        self.calls = []

    def invoke(self, command, input_text, on_chunk, on_exit=None):
        self.calls.append({
            'command': list(command),
            'input': input_text,
            'on_chunk': on_chunk,
            'on_exit': on_exit,
        })
        return MagicMock()

    def feed(self, *chunks, call=-1):
        for chunk in chunks:
            self.calls[call]['on_chunk'](chunk)


@pytest.fixture
def fake_popup():
    return FakePopup()


@pytest.fixture
def fake_invoker():
    return FakeInvoker()


@pytest.fixture
def chunk_collector():
    """Thread-safe list of chunks for real-process tests."""
    class Collector:
        def __init__(self):
            self.chunks = []
            self.exits = []
            self._lock = threading.Lock()

        def on_chunk(self, text):
            with self._lock:
                self.chunks.append(text)

        def on_exit(self, returncode, stderr):
            self.exits.append((returncode, stderr))

        @property
        def text(self):
            return ''.join(self.chunks)

    return Collector()
