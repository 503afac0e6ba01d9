"""Benchmark lockstep match simulation."""

import time
from deckbattle.simulation.runner import BattleRunner, RunConfig


def benchmark_grid(grid_size: int = 10, runs: int = 5) -> dict:
    """Benchmark full batches of simultaneous matches."""
    start_time = time.perf_counter()

    total_ticks = 0
    outcomes = []
    for seed in range(runs):
        runner = BattleRunner(RunConfig(grid_size=grid_size, seed=seed))
        outcomes.append(runner.run())
        total_ticks += runner.ticks

    end_time = time.perf_counter()
    total_duration_s = end_time - start_time
    total_games = sum(r.total_games for r in outcomes)

    return {
        "total_games": total_games,
        "total_duration_s": total_duration_s,
        "avg_ms_per_batch": (total_duration_s * 1000) / runs,
        "games_per_second": total_games / total_duration_s,
        "avg_ticks_per_batch": total_ticks / runs,
        "avg_turns": sum(r.avg_turns for r in outcomes) / runs,
        "player_wins": sum(r.player_wins for r in outcomes),
        "enemy_wins": sum(r.enemy_wins for r in outcomes),
        "draws": sum(r.draws for r in outcomes),
    }


def main():
    """Run simulation benchmark."""
    print("=" * 60)
    print("MATCH SIMULATION BENCHMARK")
    print("=" * 60)
    print()

    # Warm-up run
    print("Warming up...")
    benchmark_grid(grid_size=3, runs=1)
    print()

    runs = 5
    print(f"Running {runs} batches of 100 matches...")
    results = benchmark_grid(grid_size=10, runs=runs)

    print()
    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    print()
    print(f"Total games:         {results['total_games']}")
    print(f"Total time:          {results['total_duration_s']:.3f}s")
    print(f"Avg per batch:       {results['avg_ms_per_batch']:.1f}ms")
    print(f"Games/second:        {results['games_per_second']:.0f}")
    print(f"Avg ticks per batch: {results['avg_ticks_per_batch']:.0f}")
    print(f"Avg turns per game:  {results['avg_turns']:.1f}")
    print(
        f"Outcomes:            {results['player_wins']} player / "
        f"{results['enemy_wins']} enemy / {results['draws']} draws"
    )


if __name__ == "__main__":
    main()
