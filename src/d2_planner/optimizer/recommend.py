"""Entry point: text or filter fields in, ranked builds out."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from d2_planner.catalog.view import CatalogView
from d2_planner.engine.build_config import EngineConfig
from d2_planner.engine.pipeline import BuildPipeline
from d2_planner.models.build import Build
from d2_planner.models.request import BuildRequest, Constraints
from d2_planner.optimizer.alternatives import AlternativesGenerator
from d2_planner.parser.intent_parser import (
    parse,
    parse_confidence,
    parse_structured,
    validate_request,
)


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecommendationOptions:
    use_inventory_only: bool = False
    inventory: Iterable[int] | None = None     # owned item hashes
    locked_exotic: int | None = None
    include_alternatives: bool = True
    alternatives_count: int = 3
    max_workers: int | None = None


@dataclass(slots=True)
class Recommendation:
    request: BuildRequest
    primary: Build
    alternatives: list[Build] = field(default_factory=list)
    confidence: int = 0
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


def build_request(
    user_input: str | Mapping[str, Any] | None,
    options: RecommendationOptions | None = None,
) -> BuildRequest:
    """Parse the input and apply option overrides."""
    options = options or RecommendationOptions()
    if isinstance(user_input, Mapping):
        request = parse_structured(user_input)
    else:
        request = parse(user_input)
    changes: dict[str, Any] = {}
    if options.locked_exotic is not None:
        changes["locked_exotic"] = options.locked_exotic
    if options.use_inventory_only:
        changes["constraints"] = Constraints(use_inventory_only=True)
    return request.with_changes(**changes) if changes else request


def generate_recommendation(
    user_input: str | Mapping[str, Any] | None,
    catalog: CatalogView,
    options: RecommendationOptions | None = None,
    config: EngineConfig | None = None,
) -> Recommendation:
    """Parse, compose, detect, score, and add alternatives.

    Raises ``ValueError`` when inventory-only mode is requested without an
    inventory, and ``CompositionError`` when a locked or pinned item cannot
    be honored.
    """
    options = options or RecommendationOptions()
    request = build_request(user_input, options)

    if request.constraints.use_inventory_only:
        if options.inventory is None:
            raise ValueError("use_inventory_only requires an inventory")
        catalog = catalog.restricted_to(options.inventory)

    pipeline = BuildPipeline.for_catalog(catalog, config)
    primary = pipeline.run(request)

    alternatives: list[Build] = []
    if options.include_alternatives:
        generator = AlternativesGenerator(pipeline, options.max_workers)
        alternatives = generator.generate(request, options.alternatives_count)

    validation = validate_request(request)
    logger.info(
        "Recommended %r (score %s) with %d alternatives",
        primary.name,
        primary.score.total if primary.score else "n/a",
        len(alternatives),
    )
    return Recommendation(
        request=request,
        primary=primary,
        alternatives=alternatives,
        confidence=parse_confidence(request),
        warnings=validation.warnings,
        suggestions=validation.suggestions,
    )
