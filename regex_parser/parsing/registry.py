"""Parser plugin system: named builder factories the pipeline can look up."""
from __future__ import annotations

import pkgutil
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from verboselogs import VerboseLogger

from regex_parser.errors import UnknownPluginError
from regex_parser.models import ParserDefinition

from .parser import Parser, ParserBuilder

BuilderFactory = Callable[..., ParserBuilder]


@dataclass(frozen=True)
class PluginInfo:
    """A parser plugin: the name it is configured by and how to make builders."""

    name: str
    builder_factory: BuilderFactory


@dataclass(frozen=True)
class ModuleInfo:
    """Description of a parser module and the plugins it provides."""

    canonical_name: str
    version: str
    description: str
    core_revision: str
    plugins: Tuple[PluginInfo, ...] = field(default_factory=tuple)


class PluginRegistry:
    """Registry for parser plugins."""

    def __init__(self, logger: VerboseLogger, modules: Optional[List[ModuleInfo]] = None):
        self.logger = logger
        self._plugins: Dict[str, PluginInfo] = {}
        self._modules: Dict[str, ModuleInfo] = {}
        for info in modules or []:
            self.register_module(info)

    @classmethod
    def discover(cls, logger: VerboseLogger) -> PluginRegistry:
        """Build a registry from every ``module_info`` in the 'parsers' package."""
        from . import parsers

        modules: List[ModuleInfo] = []
        for _, name, _ in pkgutil.iter_modules(parsers.__path__):
            module = __import__(f"{parsers.__name__}.{name}", fromlist=[""])
            info = getattr(module, "module_info", None)
            if isinstance(info, ModuleInfo):
                modules.append(info)
        return cls(logger=logger, modules=modules)

    def register_module(self, info: ModuleInfo) -> None:
        self._modules[info.canonical_name] = info
        for plugin in info.plugins:
            self.register(plugin.name, plugin.builder_factory)
        self.logger.verbose(
            f"Registered module {info.canonical_name} {info.version} "
            f"({len(info.plugins)} plugins)"
        )

    def register(self, name: str, builder_factory: BuilderFactory) -> None:
        """Expose ``builder_factory`` under ``name``, replacing any previous one."""
        if name in self._plugins:
            self.logger.warning(f"Replacing parser plugin '{name}'")
        self._plugins[name] = PluginInfo(name=name, builder_factory=builder_factory)

    def names(self) -> List[str]:
        return sorted(self._plugins)

    def modules(self) -> List[ModuleInfo]:
        return list(self._modules.values())

    def builder_for(self, name: str) -> ParserBuilder:
        """Return a fresh builder for the plugin registered as ``name``."""
        plugin = self._plugins.get(name)
        if plugin is None:
            raise UnknownPluginError(name)
        return plugin.builder_factory(logger=self.logger)

    def instantiate(self, definition: ParserDefinition) -> Parser:
        """Drive one builder through the definition's options and build it.

        Raises
        ------
        regex_parser.errors.UnknownPluginError
            If the definition names an unregistered plugin.
        regex_parser.errors.OptionError
            If the builder rejects the final configuration.
        """
        builder = self.builder_for(definition.plugin)
        self.logger.debug(
            f"Configuring parser '{definition.name}' with plugin '{definition.plugin}'"
        )
        for name, value in definition.options:
            builder.option(name, value)
        return builder.build()
