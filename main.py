#!/usr/bin/env python3
"""
Hazard Sweeper - Main entry point.

Usage:
    python main.py play --agent {basic,single-point,sat-dnf,sat-cnf,P1..P4} --world NAME
    python main.py compare [--size N] [--hazards K] [--games G] [--seed S]
    python main.py worlds
"""
import argparse
import logging
from typing import List, Optional

from hazard_sweeper.agents import AgentConfig, AgentKind, make_agent
from hazard_sweeper.evaluation import EvaluationConfig, Evaluator
from hazard_sweeper.game import (
    WORLDS,
    GridEnvironment,
    HazardPolicy,
    format_board,
    get_world,
)


def play(args: argparse.Namespace) -> None:
    """Play one preset world with one agent."""
    layout = get_world(args.world)
    policy = HazardPolicy.TOLERATE if args.tolerate else HazardPolicy.TERMINATE
    config = AgentConfig(single_point_first=not args.sat_first)

    environment = GridEnvironment(layout, policy)
    agent = make_agent(args.agent, environment, config)

    print(f"World {args.world} ({layout.size}x{layout.size}, "
          f"{layout.hazard_count} hazards), agent {args.agent.value}")
    print(format_board(layout.to_rows()))

    result = agent.play()

    print("Final map")
    print(format_board(result.rows()))
    print(result.message)
    if policy == HazardPolicy.TOLERATE:
        print(f"Hazards exposed: {result.hazards_exposed}")
    print(f"Cycles: {result.cycles}  Probes: {result.probes}  Flags: {result.flags}")


def compare(args: argparse.Namespace) -> None:
    """Compare all agents on random layouts."""
    config = EvaluationConfig(
        size=args.size,
        hazard_count=args.hazards,
        num_episodes=args.games,
        seed=args.seed,
    )
    evaluator = Evaluator(config)
    results = evaluator.compare()

    print("\n" + "=" * 62)
    print(f"Agent Comparison Results ({args.games} games, "
          f"{args.size}x{args.size}, {args.hazards} hazards)")
    print("=" * 62)
    print(f"{'Agent':<14} {'Win Rate':>10} {'Stuck':>10} {'Lost':>10} {'Avg Probes':>12}")
    print("-" * 62)

    for name, metrics in results.items():
        print(
            f"{name:<14} {metrics['win_rate']:>10.1%} "
            f"{metrics['stuck_rate']:>10.1%} "
            f"{metrics['loss_rate']:>10.1%} "
            f"{metrics['avg_probes']:>12.1f}"
        )


def worlds(args: argparse.Namespace) -> None:
    """List the preset worlds."""
    for name, layout in WORLDS.items():
        print(f"{name:<6} {layout.size}x{layout.size}  {layout.hazard_count} hazards")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Hazard Sweeper - Deduction agents for a hidden-hazard grid"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose", action="store_true", help="Log verdicts and formulas"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser(
        "play", parents=[common], help="Play one preset world"
    )
    play_parser.add_argument(
        "--agent",
        type=AgentKind.parse,
        default=AgentKind.SAT_CNF,
        help="Agent to play: basic, single-point, sat-dnf, sat-cnf or P1..P4",
    )
    play_parser.add_argument(
        "--world",
        type=str.upper,
        choices=sorted(WORLDS),
        default="S1",
        help="Preset world name (see 'worlds')",
    )
    play_parser.add_argument(
        "--tolerate",
        action="store_true",
        help="Keep playing after a hazard probe",
    )
    play_parser.add_argument(
        "--sat-first",
        action="store_true",
        help="SAT agents query the oracle before the local rules",
    )
    play_parser.set_defaults(handler=play)

    # Compare command
    compare_parser = subparsers.add_parser(
        "compare", parents=[common], help="Compare all agents"
    )
    compare_parser.add_argument("--size", type=int, default=7, help="Grid side length")
    compare_parser.add_argument("--hazards", type=int, default=5, help="Number of hazards")
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per agent"
    )
    compare_parser.add_argument("--seed", type=int, default=None, help="Layout seed")
    compare_parser.set_defaults(handler=compare)

    # Worlds command
    worlds_parser = subparsers.add_parser(
        "worlds", parents=[common], help="List preset worlds"
    )
    worlds_parser.set_defaults(handler=worlds)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if getattr(args, "handler", None) is None:
        parser.print_help()
        return
    args.handler(args)


if __name__ == "__main__":
    main()
