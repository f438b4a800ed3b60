"""Script Service: runs cache operations against a CacheService.

Operations come from YAML scripts (``tiercache run``), from the interactive
shell, or from the built-in demo. Each one maps onto a single CacheService
call and reports its outcome through the UserInterface.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from tiercache.domain.exceptions import ScriptError
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.common import LevelSpec, parse_integer
from tiercache.infrastructure.config.settings import parse_level_spec

logger = logging.getLogger(__name__)

# Operation name -> positional argument names
OPERATION_ARGS: Dict[str, Sequence[str]] = {
    "put": ("key", "value"),
    "get": ("key",),
    "delete": ("key",),
    "add": ("capacity", "policy"),
    "remove": ("index",),
    "show": (),
    "stats": (),
    "clear": (),
}
_INT_ARGS = {"capacity", "index"}


@dataclass(frozen=True)
class Operation:
    """One cache operation and its arguments."""
    name: str
    args: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, name: str, args: Dict[str, Any]) -> "Operation":
        """Validates ``args`` against OPERATION_ARGS and normalizes their types.

        Raises:
            ScriptError: On unknown operations, missing arguments or bad integers.
        """
        name = str(name).strip().lower()
        if name not in OPERATION_ARGS:
            known = ", ".join(OPERATION_ARGS)
            raise ScriptError(f"Unknown operation '{name}'. Expected one of: {known}")

        normalized: Dict[str, Any] = {}
        for arg in OPERATION_ARGS[name]:
            if arg not in args or args[arg] is None:
                raise ScriptError(f"Operation '{name}' requires '{arg}'")
            value = args[arg]
            if arg in _INT_ARGS:
                try:
                    normalized[arg] = parse_integer(value)
                except ValueError:
                    raise ScriptError(f"Operation '{name}': '{arg}' must be an integer, got {value!r}") from None
            else:
                # YAML turns unquoted 1 into an int; cache keys and values are strings
                normalized[arg] = str(value)
        return cls(name=name, args=normalized)

    @classmethod
    def from_mapping(cls, data: Any) -> "Operation":
        """Parses ``{op: put, key: A, value: "1"}``."""
        if not isinstance(data, dict) or "op" not in data:
            raise ScriptError(f"Each operation must be a mapping with an 'op' field, got {data!r}")
        args = {k: v for k, v in data.items() if k != "op"}
        return cls.build(data["op"], args)

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> "Operation":
        """Parses shell-style tokens such as ``["put", "A", "1"]``."""
        if not tokens:
            raise ScriptError("Empty command")
        name = tokens[0].lower()
        expected = OPERATION_ARGS.get(name)
        if expected is None:
            return cls.build(name, {})
        if len(tokens) - 1 != len(expected):
            usage = " ".join([name] + [arg.upper() for arg in expected])
            raise ScriptError(f"Usage: {usage}")
        return cls.build(name, dict(zip(expected, tokens[1:])))

    def __str__(self) -> str:
        return " ".join([self.name] + [str(v) for v in self.args.values()])


@dataclass
class Script:
    """A parsed script: optional level chain plus the operations to run."""
    operations: List[Operation]
    levels: Optional[List[LevelSpec]] = None


def parse_script(data: Any) -> Script:
    """Builds a Script from loaded YAML.

    Accepts either a bare list of operations or a mapping with
    ``operations`` and an optional ``levels`` list.
    """
    levels = None
    if isinstance(data, dict):
        if "levels" in data:
            if not isinstance(data["levels"], list):
                raise ScriptError("'levels' must be a list")
            levels = [parse_level_spec(item) for item in data["levels"]]
        data = data.get("operations")
    if not isinstance(data, list):
        raise ScriptError("A script must be a list of operations or a mapping with an 'operations' list")
    return Script(operations=[Operation.from_mapping(item) for item in data], levels=levels)


def load_script(path: Path) -> Script:
    """Reads and parses a YAML script file.

    Raises:
        ScriptError: If the file cannot be read or is not a valid script.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ScriptError(f"Cannot read script {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ScriptError(f"Invalid YAML in script {path}: {e}") from e
    script = parse_script(data)
    logger.info(f"Loaded script {path} with {len(script.operations)} operations")
    return script


class ScriptService:
    """Executes operations against a cache and reports results to the user."""

    def __init__(self, cache: CacheService, ui: UserInterface):
        self.cache = cache
        self.ui = ui

    def execute(self, operation: Operation) -> Optional[str]:
        """Runs one operation.

        Returns:
            The value for a ``get`` hit, otherwise None.
        """
        logger.debug(f"Executing operation: {operation}")
        name, args = operation.name, operation.args

        if name == "put":
            self.cache.put(args["key"], args["value"])
        elif name == "get":
            value = self.cache.get(args["key"])
            if value is None:
                self.ui.display_output(f"get {args['key']} -> miss", style="dim")
            else:
                self.ui.display_output(f"get {args['key']} -> {value!r}")
            return value
        elif name == "delete":
            if not self.cache.delete(args["key"]):
                self.ui.display_info(f"'{args['key']}' is not cached")
        elif name == "add":
            self.cache.add_level(args["capacity"], args["policy"])
        elif name == "remove":
            if not self.cache.remove_level(args["index"]):
                self.ui.display_warning(f"No cache level L{args['index']}; nothing removed")
        elif name == "show":
            self.ui.display_levels(self.cache.levels())
        elif name == "stats":
            self.ui.display_stats(self.cache.levels())
        elif name == "clear":
            self.cache.clear()
        return None

    def execute_all(self, operations: Sequence[Operation]) -> List[Optional[str]]:
        """Runs operations in order, stopping at the first failure."""
        return [self.execute(operation) for operation in operations]
