"""Compose -> detect synergies -> score, for a single request."""

from __future__ import annotations

from d2_planner.catalog.view import CatalogView
from d2_planner.engine.build_config import EngineConfig
from d2_planner.engine.composer import BuildComposer
from d2_planner.engine.scoring import ScoreEngine
from d2_planner.engine.synergy import SynergyDetector
from d2_planner.models.build import Build
from d2_planner.models.request import BuildRequest


class BuildPipeline:
    """Holds no per-request state, so one instance may serve many threads."""

    __slots__ = ("composer", "detector", "scorer")

    def __init__(
        self,
        composer: BuildComposer,
        detector: SynergyDetector,
        scorer: ScoreEngine,
    ) -> None:
        self.composer = composer
        self.detector = detector
        self.scorer = scorer

    @classmethod
    def for_catalog(cls, catalog: CatalogView, config: EngineConfig | None = None) -> "BuildPipeline":
        config = config or EngineConfig()
        return cls(BuildComposer(catalog, config), SynergyDetector(config), ScoreEngine(config))

    @property
    def config(self) -> EngineConfig:
        return self.composer.config

    def run(self, request: BuildRequest) -> Build:
        build = self.composer.compose(request)
        self.detector.enrich(build)
        self.scorer.score_build(build)
        return build
