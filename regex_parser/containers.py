"""Dependency injection containers for the regex-parser application."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from regex_parser.config import Settings
from regex_parser.helpers import init_logger
from regex_parser.parsing.definition_store import DefinitionStore
from regex_parser.parsing.registry import PluginRegistry
from regex_parser.services.line_processor import LineProcessor


class AppContainer(containers.DeclarativeContainer):
    """Main application container."""

    config = providers.Singleton(Settings)
    logger = providers.Singleton(
        init_logger,
        "regex_parser",
        config.provided.log_level,
    )

    # Every module_info found in regex_parser.parsing.parsers
    plugin_registry = providers.Singleton(PluginRegistry.discover, logger=logger)

    # Definition store: directories configurable via settings
    definition_store = providers.Singleton(
        DefinitionStore,
        base_dirs=providers.Callable(lambda cfg: [Path(p) for p in cfg.definitions_dirs], config),
    )

    line_processor = providers.Factory(
        LineProcessor,
        logger=logger,
        settings=config,
    )
