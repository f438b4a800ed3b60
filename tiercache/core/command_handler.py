"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), builds a fresh
cache for each of them and delegates the individual cache operations to
the ScriptService.
"""

import logging
import shlex
from pathlib import Path
from typing import Callable, List, Optional

# Core Services Imports
from tiercache.core.services.script_service import Operation, ScriptService, load_script

# Domain Layer Imports
from tiercache.domain.exceptions import TierCacheError
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.interfaces.user_interface import UserInterface
from tiercache.domain.models.common import LevelSpec

logger = logging.getLogger(__name__)

CacheFactory = Callable[[Optional[List[LevelSpec]]], CacheService]

# Demo walkthrough: fill L1, touch A, overflow with D.
DEMO_OPERATIONS: List[Operation] = [
    Operation.build("put", {"key": "A", "value": "1"}),
    Operation.build("put", {"key": "B", "value": "2"}),
    Operation.build("put", {"key": "C", "value": "3"}),
    Operation.build("get", {"key": "A"}),
    Operation.build("put", {"key": "D", "value": "4"}),
    Operation.build("get", {"key": "C"}),
    Operation.build("show", {}),
]

EXIT_COMMANDS = ("quit", "exit")


class CommandHandler:
    """Handles incoming commands and delegates to the script service."""

    def __init__(self, cache_factory: CacheFactory, ui: UserInterface):
        """Initializes the CommandHandler.

        Args:
            cache_factory: Builds a cache from level specs, or from the
                configured chain when given None.
            ui: Where results and errors are reported.
        """
        self.cache_factory = cache_factory
        self.ui = ui

    def handle_demo(self, level_specs: Optional[List[LevelSpec]] = None) -> bool:
        """Runs the built-in demo. Returns False if it failed."""
        logger.info("Handling 'demo' command.")
        try:
            service = ScriptService(self.cache_factory(level_specs), self.ui)
            service.execute_all(DEMO_OPERATIONS)
        except TierCacheError as e:
            logger.error(f"Demo failed: {e}", exc_info=True)
            self.ui.display_error(f"Demo failed: {e}")
            return False
        return True

    def handle_run(self, script_path: Path, level_specs: Optional[List[LevelSpec]] = None) -> bool:
        """Runs a YAML script of operations against a fresh cache.

        Levels passed on the command line win over levels declared in the
        script, which win over the configured chain.
        """
        logger.info(f"Handling 'run' command for script: {script_path}")
        try:
            script = load_script(script_path)
            service = ScriptService(self.cache_factory(level_specs or script.levels), self.ui)
            service.execute_all(script.operations)
        except TierCacheError as e:
            logger.error(f"Script {script_path} failed: {e}", exc_info=True)
            self.ui.display_error(f"Script failed: {e}")
            return False
        return True

    def start_shell(self, level_specs: Optional[List[LevelSpec]] = None) -> None:
        """Runs the interactive shell until 'quit', 'exit' or end of input."""
        logger.info("Starting interactive shell session.")
        try:
            cache = self.cache_factory(level_specs)
        except TierCacheError as e:
            logger.error(f"Failed to build cache for shell: {e}", exc_info=True)
            self.ui.display_error(f"Failed to start shell: {e}")
            return

        service = ScriptService(cache, self.ui)
        self.ui.display_session_header([level.label for level in cache.levels()])
        while True:
            try:
                line = self.ui.get_prompt("tiercache> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle_shell_line(service, line):
                break
        logger.info("Interactive shell session ended.")

    def handle_shell_line(self, service: ScriptService, line: str) -> bool:
        """Executes one shell line. Returns False when the session should end."""
        line = line.strip()
        if not line:
            return True
        if line.lower() in EXIT_COMMANDS:
            return False
        try:
            service.execute(Operation.from_tokens(shlex.split(line)))
        except (TierCacheError, ValueError) as e:
            # shlex raises ValueError on unbalanced quotes
            logger.debug(f"Shell command '{line}' failed: {e}")
            self.ui.display_error(str(e))
        return True
