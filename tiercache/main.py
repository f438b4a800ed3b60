"""Main entry point for the tiercache application.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional

import typer

# --- Setup Logging Early ---
# Use basic config until setup_logging is called with configured settings
logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# --- Core Layer ---
from tiercache.core.command_handler import CommandHandler

# --- Domain Layer ---
from tiercache.domain.exceptions import ConfigurationError
from tiercache.domain.interfaces.cache import CacheService
from tiercache.domain.models.common import LevelSpec, PromotionMode

# --- Infrastructure Layer ---
# Cache
from tiercache.infrastructure.cache.multilevel_cache import MultilevelCache
# UI
from tiercache.infrastructure.cli.display import ConsoleDisplay
# Config
from tiercache.infrastructure.config.settings import (
    get_config,
    get_level_specs,
    get_promotion_mode,
    load_configuration,
    parse_level_spec,
)
# Monitoring
from tiercache.infrastructure.monitoring.logger_setup import DEFAULT_LOG_FORMAT, resolve_log_level, setup_logging


def create_cache(level_specs: Optional[List[LevelSpec]] = None, promotion: Optional[PromotionMode] = None) -> CacheService:
    """Builds a MultilevelCache from explicit specs or the configured chain."""
    specs = level_specs if level_specs is not None else get_level_specs()
    cache = MultilevelCache(promotion=promotion or get_promotion_mode())
    for spec in specs:
        cache.add_level(spec.capacity, spec.policy)
    return cache


# --- Dependency Injection Container (Manual) ---

def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root.
    """
    dependencies: Dict[str, Any] = {}
    try:
        # 1. Load Configuration First
        load_configuration()
        log_level = resolve_log_level(get_config('logging.level'))
        log_file = get_config('logging.file')
        log_format = get_config('logging.format', DEFAULT_LOG_FORMAT)
        setup_logging(log_level=log_level, log_file=log_file, log_format=log_format)
        logger.info("Configuration and logging initialized.")

        # 2. Instantiate Infrastructure Adapters
        dependencies['ui'] = ConsoleDisplay()

        # 3. Instantiate Command Handler; every command gets its own cache
        dependencies['command_handler'] = CommandHandler(cache_factory=create_cache, ui=dependencies['ui'])
        logger.info("All dependencies initialized successfully.")
        return dependencies

    except Exception as e:
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        print(f"FATAL ERROR during initialization: {e}", file=sys.stderr)
        sys.exit(1)


# --- Get Wired-up Dependencies ---
_dependencies: Dict[str, Any] = create_dependencies()

# --- Typer App Definition ---
app = typer.Typer(
    name="tiercache",
    help="tiercache: in-memory multilevel cache with pluggable LRU/LFU eviction per level.",
    add_completion=False,
)

# Shared options
LevelOption = Annotated[
    Optional[List[str]],
    typer.Option("--level", "-l", help="Cache level as CAPACITY:POLICY (e.g. 3:LRU). Repeat for more levels; overrides config."),
]


def _parse_level_options(levels: Optional[List[str]]) -> Optional[List[LevelSpec]]:
    if not levels:
        return None
    try:
        return [parse_level_spec(item) for item in levels]
    except ConfigurationError as e:
        raise typer.BadParameter(str(e), param_hint="--level") from e


# --- CLI Commands ---

@app.command()
def demo(levels: LevelOption = None):
    """Run the built-in walkthrough: fill L1, read A, overflow with D, show the levels."""
    handler: CommandHandler = _dependencies['command_handler']
    if not handler.handle_demo(_parse_level_options(levels)):
        raise typer.Exit(code=1)


@app.command()
def run(
    script: Annotated[Path, typer.Argument(exists=True, file_okay=True, dir_okay=False,
                                           readable=True, resolve_path=True,
                                           help="YAML file listing cache operations.")],
    levels: LevelOption = None,
):
    """Execute a YAML script of cache operations against a fresh cache."""
    handler: CommandHandler = _dependencies['command_handler']
    if not handler.handle_run(script, _parse_level_options(levels)):
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context, levels: LevelOption = None):
    """Main entry point. Starts the interactive shell if no command is given."""
    if ctx.invoked_subcommand is None:
        logger.info("No command invoked, starting interactive shell.")
        handler: CommandHandler = _dependencies['command_handler']
        handler.start_shell(_parse_level_options(levels))


# --- Main Execution Guard ---

def cli_entry_point():
    """Function called by the console script entry point in pyproject.toml."""
    logger.info("Starting tiercache application...")
    app()
    logger.info("tiercache application finished.")


if __name__ == "__main__":
    cli_entry_point()
