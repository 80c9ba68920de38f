#!/usr/bin/env python3
"""Generation and turn-loop profiler.

Usage:
    python scripts/profile_turns.py --turns 500 --seed 42
    python scripts/profile_turns.py --turns 2000 --fov shadowcast --cprofile turns.prof

Reports:
    - Level generation time
    - Per-turn timing statistics (min, max, mean, p50, p95, p99)
    - Explored tile count and living entities at the end
    - Optional: cProfile dump for flame graph generation
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from delve.config import DungeonConfig
from delve.core.enums import Domain, FovAlgorithm, Intent, TurnResult
from delve.engine.session import GameSession
from delve.systems.rng import DeterministicRNG

MOVES = (Intent.MOVE_UP, Intent.MOVE_DOWN, Intent.MOVE_LEFT, Intent.MOVE_RIGHT)


def _run_turns(cfg: DungeonConfig, num_turns: int) -> dict:
    """Generate one level, then autoplay and time every handled intent."""
    t0 = time.perf_counter()
    session = GameSession.create(cfg)
    gen_time = time.perf_counter() - t0

    picker = DeterministicRNG(cfg.seed).stream(Domain.AUTOPLAY)
    turn_times: list[float] = []

    for _ in range(num_turns):
        intent = MOVES[picker.randint(0, len(MOVES) - 1)]
        t_start = time.perf_counter()
        result = session.handle(intent)
        turn_times.append(time.perf_counter() - t_start)
        if result is not TurnResult.TOOK_TURN:
            break

    return {
        "gen_time": gen_time,
        "turn_times": turn_times,
        "entities": len(session.world),
        "alive": session.world.alive_count(),
        "explored": session.game_map.explored_count(),
        "final_turn": session.turn,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    turn_times = data["turn_times"]
    num_turns = len(turn_times)

    print("\n" + "=" * 70)
    print("  TURN ENGINE PERFORMANCE REPORT")
    print("=" * 70)

    print(f"\n  Generation time:   {data['gen_time'] * 1000:.2f}ms")
    print(f"  Turns executed:    {num_turns}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    if num_turns == 0:
        print("  No turns executed.")
        return
    print(f"  Throughput:        {num_turns / wall_time:.1f} turns/sec")

    print(f"\n  Entities (total):  {data['entities']}")
    print(f"  Entities (alive):  {data['alive']}")
    print(f"  Tiles explored:    {data['explored']}")

    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(turn_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(turn_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(turn_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(turn_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(turn_times) * 1000:>10.3f}")
    if num_turns > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(turn_times) * 1000:>10.3f}")

    print("\n" + "=" * 70)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile level generation and the turn loop")
    parser.add_argument("--turns", type=int, default=500, help="Number of autoplay intents")
    parser.add_argument("--seed", type=int, default=42, help="Dungeon seed")
    parser.add_argument("--fov", type=str, default="basic", choices=["basic", "shadowcast"])
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    cfg = DungeonConfig(seed=args.seed, fov_algorithm=FovAlgorithm[args.fov.upper()])
    print(f"Profiling: {args.turns} turns, seed={args.seed}, fov={args.fov}, "
          f"map={cfg.map_width}x{cfg.map_height}")

    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_turns(cfg, args.turns)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())


if __name__ == "__main__":
    main()
