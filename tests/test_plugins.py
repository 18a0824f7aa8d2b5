"""
Tests for plugin registration and command dispatch.
"""

import io
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from datamatch import __version__
from datamatch.cli import build_registry, run_main_menu
from datamatch.config.manager import AppSettings
from datamatch.plugins.base import PluginRegistry
from datamatch.ui.progress import ConsoleReporter
from datamatch.ui.prompts import ScriptedPrompts


class RecordingPlugin:
    name = "Recorder"
    description = "Remembers the commands it ran"
    commands = ("record", "rec")

    def __init__(self):
        self.calls = []

    def execute(self, command):
        self.calls.append(command)


class FailingPlugin:
    name = "Broken"
    description = "Always fails"
    commands = ("broken",)

    def execute(self, command):
        raise RuntimeError("boom")


class TestPluginRegistry:
    """Test cases for command dispatch."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.output = io.StringIO()
        self.registry = PluginRegistry(ConsoleReporter(stream=self.output))
        self.plugin = RecordingPlugin()
        self.registry.register(self.plugin)
    
    def test_command_with_and_without_slash(self):
        assert self.registry.execute_command("record") is True
        assert self.registry.execute_command("/rec") is True
        assert self.plugin.calls == ["record", "rec"]
    
    def test_command_is_case_insensitive(self):
        assert self.registry.execute_command("/RECORD") is True
    
    def test_unknown_command(self):
        assert self.registry.execute_command("/nope") is False
        
        text = self.output.getvalue()
        assert "Command '/nope' not found." in text
        assert "/record" in text
    
    def test_plugin_failure_is_reported_not_raised(self):
        self.registry.register(FailingPlugin())
        
        assert self.registry.execute_command("broken") is False
        assert "Error executing Broken: boom" in self.output.getvalue()
    
    def test_registration_order_and_replacement(self):
        replacement = RecordingPlugin()
        self.registry.register(FailingPlugin())
        self.registry.register(replacement)
        
        assert [p.name for p in self.registry.all()] == ["Recorder", "Broken"]
        assert self.registry.get("Recorder") is replacement
    
    def test_available_commands(self):
        assert self.registry.available_commands() == ["/record", "/rec"]


class TestBuiltinPlugins:
    """Test cases for the registry the command line builds."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.output = io.StringIO()
        self.reporter = ConsoleReporter(stream=self.output)
    
    def _registry(self, tmp_path, answers=()):
        settings = AppSettings(data_dir=str(tmp_path), output_dir=str(tmp_path))
        prompts = ScriptedPrompts(answers)
        return build_registry(settings, prompts, self.reporter), prompts
    
    def test_menu_order(self, tmp_path):
        registry, _ = self._registry(tmp_path)
        names = [p.name for p in registry.all()]
        assert names == ["Data Comparison & Mapping Tool", "Help", "Version", "Plugins"]
    
    def test_help_lists_every_command(self, tmp_path):
        registry, _ = self._registry(tmp_path)
        
        assert registry.execute_command("/help") is True
        
        text = self.output.getvalue()
        for command in ("/compare", "/data-compare", "/help", "/version", "/plugins"):
            assert command in text
    
    def test_version(self, tmp_path):
        registry, _ = self._registry(tmp_path)
        
        assert registry.execute_command("v") is True
        assert f"datamatch: {__version__}" in self.output.getvalue()
    
    def test_plugins_listing(self, tmp_path):
        registry, _ = self._registry(tmp_path)
        
        registry.execute_command("/p")
        
        assert "Data Comparison & Mapping Tool" in self.output.getvalue()
    
    def test_compare_exits_from_its_own_menu(self, tmp_path):
        registry, prompts = self._registry(tmp_path, ["exit"])
        
        assert registry.execute_command("/compare") is True
        assert prompts.remaining == 0
    
    def test_main_menu_runs_tool_then_exits(self, tmp_path):
        registry, prompts = self._registry(tmp_path, ["Version", "", "exit"])
        
        run_main_menu(registry, prompts, self.reporter)
        
        text = self.output.getvalue()
        assert f"datamatch: {__version__}" in text
        assert "Goodbye" in text
        assert prompts.remaining == 0
    
    def test_main_menu_exits_when_input_ends(self, tmp_path):
        registry, prompts = self._registry(tmp_path, [])
        
        run_main_menu(registry, prompts, self.reporter)
        
        assert "Goodbye" in self.output.getvalue()
