"""
Evaluation module for Hazard Sweeper agents.

Runs and compares agent variants over seeded random layouts.
"""
from .evaluator import EpisodeStats, EvaluationConfig, Evaluator, summarize

__all__ = [
    "EpisodeStats",
    "EvaluationConfig",
    "Evaluator",
    "summarize",
]
