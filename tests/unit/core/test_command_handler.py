import pytest
from unittest.mock import MagicMock, call

from tiercache.core.command_handler import CommandHandler
from tiercache.core.services.script_service import ScriptService
from tiercache.domain.exceptions import InvalidPolicyError
from tiercache.domain.models.common import LevelSpec, PolicyKind
from tiercache.infrastructure.cache.multilevel_cache import MultilevelCache


def build_cache(level_specs=None):
    cache = MultilevelCache()
    for spec in level_specs or [LevelSpec(3, PolicyKind.LRU), LevelSpec(2, PolicyKind.LFU)]:
        cache.add_level(spec.capacity, spec.policy)
    return cache


@pytest.fixture
def cache_factory():
    return MagicMock(side_effect=build_cache)


@pytest.fixture
def command_handler(cache_factory, mock_ui):
    """Fixture to create CommandHandler with a real cache and a mocked UI."""
    return CommandHandler(cache_factory=cache_factory, ui=mock_ui)


def test_demo_reproduces_walkthrough(command_handler: CommandHandler, mock_ui: MagicMock):
    assert command_handler.handle_demo() is True
    assert mock_ui.display_output.call_args_list == [call("get A -> '1'"), call("get C -> '3'")]

    (levels,), _ = mock_ui.display_levels.call_args
    assert [level.label for level in levels] == ["L1", "L2"]
    assert dict(levels[0].entries) == {"A": "1", "C": "3", "D": "4"}
    assert levels[1].entries == ()


def test_demo_passes_level_overrides(command_handler: CommandHandler, cache_factory: MagicMock):
    specs = [LevelSpec(1, PolicyKind.LFU)]
    command_handler.handle_demo(specs)
    cache_factory.assert_called_once_with(specs)


def test_demo_failure_is_displayed(command_handler: CommandHandler, cache_factory: MagicMock, mock_ui: MagicMock):
    cache_factory.side_effect = InvalidPolicyError("Unknown eviction policy 'BOGUS'")
    assert command_handler.handle_demo() is False
    mock_ui.display_error.assert_called_once_with("Demo failed: Unknown eviction policy 'BOGUS'")


def test_run_uses_levels_declared_in_script(command_handler: CommandHandler, cache_factory: MagicMock, mock_ui: MagicMock, tmp_path):
    script = tmp_path / "ops.yaml"
    script.write_text(
        "levels:\n"
        "  - {capacity: 1, policy: LRU}\n"
        "operations:\n"
        "  - {op: put, key: A, value: '1'}\n"
        "  - {op: put, key: B, value: '2'}\n"
        "  - {op: get, key: A}\n"
    )
    assert command_handler.handle_run(script) is True
    cache_factory.assert_called_once_with([LevelSpec(1, PolicyKind.LRU)])
    mock_ui.display_output.assert_called_once_with("get A -> miss", style="dim")


def test_run_reports_script_errors(command_handler: CommandHandler, mock_ui: MagicMock, tmp_path):
    script = tmp_path / "ops.yaml"
    script.write_text("- {op: add, capacity: 2, policy: BOGUS}\n")
    assert command_handler.handle_run(script) is False
    message = mock_ui.display_error.call_args[0][0]
    assert message.startswith("Script failed:")
    assert "BOGUS" in message


def test_shell_executes_lines_until_quit(command_handler: CommandHandler, mock_ui: MagicMock):
    mock_ui.get_prompt.side_effect = ["put A 1", "", "get A", "get 'B'", "quit", "get A"]
    command_handler.start_shell()
    mock_ui.display_session_header.assert_called_once_with(["L1", "L2"])
    assert mock_ui.display_output.call_args_list == [
        call("get A -> '1'"),
        call("get B -> miss", style="dim"),
    ]
    assert mock_ui.get_prompt.call_count == 5


def test_shell_ends_on_eof(command_handler: CommandHandler, mock_ui: MagicMock):
    mock_ui.get_prompt.side_effect = ["put A 1", EOFError()]
    command_handler.start_shell()
    assert mock_ui.get_prompt.call_count == 2


def test_shell_errors_do_not_end_session(command_handler: CommandHandler, mock_ui: MagicMock):
    service = ScriptService(build_cache(), mock_ui)
    assert command_handler.handle_shell_line(service, "add 2 BOGUS") is True
    assert command_handler.handle_shell_line(service, "put 'unbalanced") is True
    assert command_handler.handle_shell_line(service, "frobnicate") is True
    assert mock_ui.display_error.call_count == 3
    assert command_handler.handle_shell_line(service, "EXIT") is False


def test_shell_put_accepts_quoted_empty_value(command_handler: CommandHandler, mock_ui: MagicMock):
    service = ScriptService(build_cache(), mock_ui)
    command_handler.handle_shell_line(service, 'put A ""')
    command_handler.handle_shell_line(service, "get A")
    mock_ui.display_output.assert_called_once_with("get A -> ''")
