"""Alternative builds derived from a primary request.

Variant ``k`` (1-based) rotates the playstyle ``k`` steps through
balanced -> tank -> dps -> speed starting from the primary's playstyle,
and reverses the focus-stat priority when focus stats are present. Each
variant is composed, detected and scored on its own; nothing is shared
between variants except the read-only catalog.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from d2_planner.catalog.view import CatalogView
from d2_planner.engine.build_config import EngineConfig
from d2_planner.engine.pipeline import BuildPipeline
from d2_planner.models.build import Build
from d2_planner.models.constants import PLAYSTYLES
from d2_planner.models.request import BuildRequest


logger = logging.getLogger(__name__)


def variant_request(request: BuildRequest, k: int) -> BuildRequest:
    start = PLAYSTYLES.index(request.playstyle)
    changes: dict = {"playstyle": PLAYSTYLES[(start + k) % len(PLAYSTYLES)]}
    if request.focus_stats:
        changes["stat_priority"] = tuple(reversed(request.stat_priority))
    return request.with_changes(**changes)


class AlternativesGenerator:
    __slots__ = ("pipeline", "max_workers")

    def __init__(self, pipeline: BuildPipeline, max_workers: int | None = None) -> None:
        self.pipeline = pipeline
        self.max_workers = max_workers

    @classmethod
    def for_catalog(
        cls,
        catalog: CatalogView,
        config: EngineConfig | None = None,
        max_workers: int | None = None,
    ) -> "AlternativesGenerator":
        return cls(BuildPipeline.for_catalog(catalog, config), max_workers)

    def generate(self, request: BuildRequest, count: int | None = None) -> list[Build]:
        """Return ``count`` scored variants, best total first."""
        if count is None:
            count = self.pipeline.config.alternatives_count
        if count <= 0:
            return []
        requests = [variant_request(request, k) for k in range(1, count + 1)]
        if self.max_workers and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                builds = list(pool.map(self.pipeline.run, requests))
        else:
            builds = [self.pipeline.run(r) for r in requests]
        logger.debug("Generated %d alternatives for %s", len(builds), request.playstyle)
        # sorted() is stable, so equal totals keep variant order.
        return sorted(builds, key=lambda b: -(b.score.total if b.score else 0))


def generate_alternatives(
    request: BuildRequest,
    catalog: CatalogView,
    count: int = 3,
    config: EngineConfig | None = None,
    max_workers: int | None = None,
) -> list[Build]:
    return AlternativesGenerator.for_catalog(catalog, config, max_workers).generate(request, count)
