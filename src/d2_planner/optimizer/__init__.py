"""Recommendation and alternatives interfaces."""

from d2_planner.optimizer.alternatives import AlternativesGenerator, generate_alternatives
from d2_planner.optimizer.recommend import (
    Recommendation,
    RecommendationOptions,
    build_request,
    generate_recommendation,
)

__all__ = [
    "AlternativesGenerator",
    "Recommendation",
    "RecommendationOptions",
    "build_request",
    "generate_alternatives",
    "generate_recommendation",
]
