"""
Unit tests for the evaluator.
"""
import numpy as np
import pytest

from hazard_sweeper.agents import AgentKind, EpisodeState
from hazard_sweeper.evaluation import EpisodeStats, EvaluationConfig, Evaluator, summarize
from hazard_sweeper.logic import Rule


@pytest.fixture
def evaluator() -> Evaluator:
    """Small seeded evaluation."""
    return Evaluator(EvaluationConfig(size=5, hazard_count=4, num_episodes=8, seed=7))


class TestEvaluationConfig:
    """Test configuration validation."""

    def test_defaults(self) -> None:
        """Default is 7x7 with 5 hazards."""
        config = EvaluationConfig()
        assert (config.size, config.hazard_count) == (7, 5)

    def test_zero_size_raises(self) -> None:
        """Size must be positive."""
        with pytest.raises(ValueError, match="must be positive"):
            EvaluationConfig(size=0)

    def test_negative_hazards_raises(self) -> None:
        """Hazard counts cannot be negative."""
        with pytest.raises(ValueError, match="cannot be negative"):
            EvaluationConfig(hazard_count=-1)

    def test_too_many_hazards_raises(self) -> None:
        """Hazards must leave the opening cells free."""
        with pytest.raises(ValueError, match="max 7"):
            EvaluationConfig(size=3, hazard_count=8)

    def test_zero_episodes_raises(self) -> None:
        """At least one episode is needed."""
        with pytest.raises(ValueError, match="episodes"):
            EvaluationConfig(num_episodes=0)


class TestLayouts:
    """Test layout generation."""

    def test_layouts_are_reproducible(self) -> None:
        """The same seed yields the same layouts."""
        config = EvaluationConfig(size=5, hazard_count=4, num_episodes=5, seed=1)
        first = Evaluator(config).layouts()
        second = Evaluator(config).layouts()
        for a, b in zip(first, second):
            assert np.array_equal(a.hazards, b.hazards)

    def test_layouts_generated_once(self, evaluator: Evaluator) -> None:
        """Every kind plays the same layout objects."""
        assert evaluator.layouts() is evaluator.layouts()
        assert len(evaluator.layouts()) == 8


class TestEvaluate:
    """Test running and aggregating episodes."""

    def test_run_episode(self, evaluator: Evaluator) -> None:
        """A single episode produces statistics."""
        stats = evaluator.run_episode(AgentKind.SAT_CNF, evaluator.layouts()[0])
        assert stats.state in (EpisodeState.WON, EpisodeState.STUCK)
        assert stats.probes >= 1

    def test_rates_sum_to_one(self, evaluator: Evaluator) -> None:
        """Every episode ends in exactly one terminal state."""
        metrics = evaluator.evaluate(AgentKind.BASIC_PROBE)
        total = metrics["win_rate"] + metrics["loss_rate"] + metrics["stuck_rate"]
        assert total == pytest.approx(1.0)

    def test_deduction_agents_never_lose(self, evaluator: Evaluator) -> None:
        """Sound agents have a zero loss rate."""
        for kind in (AgentKind.SINGLE_POINT, AgentKind.SAT_DNF, AgentKind.SAT_CNF):
            assert evaluator.evaluate(kind)["loss_rate"] == 0.0

    def test_compare_all_kinds(self, evaluator: Evaluator) -> None:
        """Compare reports every kind by label."""
        results = evaluator.compare()
        assert list(results) == ["basic", "single-point", "sat-dnf", "sat-cnf"]
        assert results["sat-cnf"]["win_rate"] >= results["single-point"]["win_rate"]
        assert results["sat-dnf"]["win_rate"] == results["sat-cnf"]["win_rate"]

    def test_compare_subset(self, evaluator: Evaluator) -> None:
        """Compare can be limited to some kinds."""
        results = evaluator.compare([AgentKind.SAT_DNF])
        assert list(results) == ["sat-dnf"]


class TestSummarize:
    """Test aggregation."""

    def test_averages(self) -> None:
        """Rates and means are computed over episodes."""
        episodes = [
            EpisodeStats(EpisodeState.WON, cycles=2, probes=10, verdicts={Rule.SAT: 2}),
            EpisodeStats(EpisodeState.STUCK, cycles=4, probes=6),
        ]
        metrics = summarize(episodes)
        assert metrics["win_rate"] == 0.5
        assert metrics["stuck_rate"] == 0.5
        assert metrics["avg_probes"] == 8.0
        assert metrics["avg_cycles"] == 3.0
        assert metrics["avg_sat_verdicts"] == 1.0

    def test_no_episodes_raises(self) -> None:
        """Nothing to summarize is an error."""
        with pytest.raises(ValueError):
            summarize([])
