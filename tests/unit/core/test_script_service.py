import pytest
from unittest.mock import MagicMock

from tiercache.core.services.script_service import (
    Operation,
    ScriptService,
    load_script,
    parse_script,
)
from tiercache.domain.exceptions import ScriptError
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.common import LevelSpec, PolicyKind


@pytest.fixture
def mock_cache():
    return MagicMock(spec=CacheService)


@pytest.fixture
def script_service(mock_cache, mock_ui):
    return ScriptService(mock_cache, mock_ui)


# --- Parsing ---

def test_operation_from_mapping_stringifies_keys_and_values():
    operation = Operation.from_mapping({"op": "PUT", "key": 1, "value": 2})
    assert operation == Operation("put", {"key": "1", "value": "2"})


def test_operation_from_mapping_converts_integers():
    operation = Operation.from_mapping({"op": "add", "capacity": "3", "policy": "LRU"})
    assert operation.args == {"capacity": 3, "policy": "LRU"}


@pytest.mark.parametrize("data", [
    {"key": "A"},
    ["put", "A"],
    {"op": "fly"},
    {"op": "put", "key": "A"},
    {"op": "remove", "index": "first"},
    {"op": "add", "capacity": 2.5, "policy": "LRU"},
    {"op": "add", "capacity": True, "policy": "LRU"},
    {"op": "add", "capacity": "2.5", "policy": "LRU"},
])
def test_operation_from_mapping_rejects_malformed(data):
    with pytest.raises(ScriptError):
        Operation.from_mapping(data)


def test_operation_from_tokens():
    assert Operation.from_tokens(["get", "A"]) == Operation("get", {"key": "A"})
    assert Operation.from_tokens(["show"]) == Operation("show", {})


def test_operation_from_tokens_reports_usage():
    with pytest.raises(ScriptError, match="Usage: put KEY VALUE"):
        Operation.from_tokens(["put", "A"])


def test_parse_script_accepts_bare_list():
    script = parse_script([{"op": "put", "key": "A", "value": "1"}, {"op": "show"}])
    assert [op.name for op in script.operations] == ["put", "show"]
    assert script.levels is None


def test_parse_script_reads_levels():
    script = parse_script({
        "levels": [{"capacity": 1, "policy": "LFU"}],
        "operations": [{"op": "get", "key": "A"}],
    })
    assert script.levels == [LevelSpec(capacity=1, policy=PolicyKind.LFU)]


@pytest.mark.parametrize("data", [None, "put A 1", {"levels": "3:LRU", "operations": []}, {"levels": []}])
def test_parse_script_rejects_malformed(data):
    with pytest.raises(ScriptError):
        parse_script(data)


def test_load_script_from_yaml(tmp_path):
    path = tmp_path / "ops.yaml"
    path.write_text("- {op: put, key: A, value: '1'}\n- {op: get, key: A}\n")
    script = load_script(path)
    assert script.operations[1] == Operation("get", {"key": "A"})


def test_load_script_reports_missing_file(tmp_path):
    with pytest.raises(ScriptError, match="Cannot read script"):
        load_script(tmp_path / "missing.yaml")


def test_load_script_reports_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- {op: put, key: [\n")
    with pytest.raises(ScriptError, match="Invalid YAML"):
        load_script(path)


# --- Execution ---

def test_execute_put(script_service, mock_cache):
    script_service.execute(Operation.build("put", {"key": "A", "value": "1"}))
    mock_cache.put.assert_called_once_with("A", "1")


def test_execute_get_hit(script_service, mock_cache, mock_ui):
    mock_cache.get.return_value = "1"
    assert script_service.execute(Operation.build("get", {"key": "A"})) == "1"
    mock_ui.display_output.assert_called_once_with("get A -> '1'")


def test_execute_get_empty_value_is_not_a_miss(script_service, mock_cache, mock_ui):
    mock_cache.get.return_value = ""
    assert script_service.execute(Operation.build("get", {"key": "A"})) == ""
    mock_ui.display_output.assert_called_once_with("get A -> ''")


def test_execute_get_miss(script_service, mock_cache, mock_ui):
    mock_cache.get.return_value = None
    assert script_service.execute(Operation.build("get", {"key": "B"})) is None
    mock_ui.display_output.assert_called_once_with("get B -> miss", style="dim")


def test_execute_add_and_remove(script_service, mock_cache, mock_ui):
    mock_cache.remove_level.return_value = False
    script_service.execute(Operation.build("add", {"capacity": 2, "policy": "LFU"}))
    script_service.execute(Operation.build("remove", {"index": 5}))
    mock_cache.add_level.assert_called_once_with(2, "LFU")
    mock_cache.remove_level.assert_called_once_with(5)
    mock_ui.display_warning.assert_called_once_with("No cache level L5; nothing removed")


def test_execute_show_and_stats(script_service, mock_cache, mock_ui):
    mock_cache.levels.return_value = ["snapshot"]
    script_service.execute(Operation.build("show", {}))
    script_service.execute(Operation.build("stats", {}))
    mock_ui.display_levels.assert_called_once_with(["snapshot"])
    mock_ui.display_stats.assert_called_once_with(["snapshot"])


def test_execute_delete_and_clear(script_service, mock_cache, mock_ui):
    mock_cache.delete.return_value = False
    script_service.execute(Operation.build("delete", {"key": "A"}))
    script_service.execute(Operation.build("clear", {}))
    mock_ui.display_info.assert_called_once_with("'A' is not cached")
    mock_cache.clear.assert_called_once()


def test_execute_all_returns_results_in_order(script_service, mock_cache):
    mock_cache.get.side_effect = ["1", None]
    results = script_service.execute_all([
        Operation.build("put", {"key": "A", "value": "1"}),
        Operation.build("get", {"key": "A"}),
        Operation.build("get", {"key": "B"}),
    ])
    assert results == [None, "1", None]
