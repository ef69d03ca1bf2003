"""Pipeline orchestration for icon builds."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Type

from .config import IconBundleConfig, TechConfig, load_config
from .errors import ConfigError
from .logging import get_logger
from .node import BuildNode
from .stores import NodeCache
from .techs import TECHS, BaseTech


@dataclass
class BuildReport:
    """Targets touched by a build run."""

    built: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def targets(self) -> List[str]:
        return self.built + self.skipped


class BuildRunner:
    """Loads a node configuration and drives its techs."""

    def __init__(self, techs: Mapping[str, Type[BaseTech]] | None = None) -> None:
        self._registry: Dict[str, Type[BaseTech]] = dict(techs or TECHS)
        self.logger = get_logger("runner")

    def prepare(self, path: str | Path) -> tuple[BuildNode, List[BaseTech]]:
        """Return the node for ``path`` and its configured techs."""
        config = load_config(Path(path))
        node = self._create_node(config)
        if not config.techs:
            raise ConfigError(f"No techs configured in {config.root}")
        techs = [self._create_tech(node, entry) for entry in config.techs]
        for tech in techs:
            tech.configure()
            self.logger.debug("%s provides %s", tech.get_name(), ", ".join(tech.get_targets()))
        return node, techs

    def list_targets(self, path: str | Path) -> List[str]:
        _, techs = self.prepare(path)
        return [target for tech in techs for target in tech.get_targets()]

    def run(self, path: str | Path, *, force: bool = False) -> BuildReport:
        node, techs = self.prepare(path)
        self.logger.info("Building node %s at %s", node.name, node.root)
        report = BuildReport()
        try:
            for tech in techs:
                built = tech.build(force=force)
                report.built.extend(built)
                report.skipped.extend(
                    target for target in tech.get_targets() if target not in built
                )
        finally:
            node.cache.persist()
        self.logger.info(
            "Built %d target(s), %d up to date", len(report.built), len(report.skipped)
        )
        return report

    def _create_node(self, config: IconBundleConfig) -> BuildNode:
        return BuildNode(
            config.root,
            name=config.node_name,
            levels=config.levels,
            cache=NodeCache(config.cache_path),
        )

    def _create_tech(self, node: BuildNode, entry: TechConfig) -> BaseTech:
        tech_cls = self._registry.get(entry.name)
        if tech_cls is None:
            known = ", ".join(sorted(self._registry))
            raise ConfigError(f'Unknown tech "{entry.name}" (available: {known})')
        return tech_cls(node, entry.options)


__all__ = ["BuildReport", "BuildRunner"]
