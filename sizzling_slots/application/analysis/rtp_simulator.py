# sizzling_slots/application/analysis/rtp_simulator.py
import logging
import secrets
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import numpy as np

from sizzling_slots.domain.machine.factories.machine_factory import MachineFactory
from sizzling_slots.infrastructure.concurrency.task_executor import TaskExecutor, ExecutionMode


@dataclass
class BatchResult:
    batch_index: int
    seed: Optional[int]
    payouts: np.ndarray
    scatter_hits: int = 0
    wins_by_symbol: Dict[str, float] = field(default_factory=dict)
    hits_by_line: Dict[int, int] = field(default_factory=dict)


class RTPSimulator:
    """
    Monte Carlo estimate of a machine's return to player.

    Every batch gets its own machine instance and RNG so batches can run
    on worker threads without sharing state.
    """
    def __init__(self, machine_factory: MachineFactory, machine_config: Dict[str, Any],
                 task_executor: Optional[TaskExecutor] = None, rng_strategy_name: str = "mersenne"):
        self.machine_factory = machine_factory
        self.machine_config = machine_config
        self.task_executor = task_executor or TaskExecutor(ExecutionMode.SEQUENTIAL)
        self.rng_strategy_name = rng_strategy_name
        self.logger = logging.getLogger("application.analysis.rtp")

    def _run_batch(self, batch_index: int, spins: int, bet: float, seed: Optional[int]) -> BatchResult:
        machine = self.machine_factory.create_machine(
            f"{self.machine_config.get('machine_id', 'machine')}_sim{batch_index}",
            self.machine_config,
            rng_strategy_name=self.rng_strategy_name,
            seed=seed,
        )

        payouts = np.zeros(spins, dtype=float)
        scatter_hits = 0
        wins_by_symbol = Counter()
        hits_by_line = Counter()

        for i in range(spins):
            result = machine.spin(bet)
            payouts[i] = result.total_payout
            for line in result.winning_lines:
                wins_by_symbol[line.symbol] += line.payout
                if line.is_scatter:
                    scatter_hits += 1
                else:
                    hits_by_line[line.line_index] += 1

        return BatchResult(batch_index, seed, payouts, scatter_hits, dict(wins_by_symbol), dict(hits_by_line))

    def run(self, total_spins: int, bet: float, batches: int = 1, seed: Optional[int] = None) -> Dict[str, Any]:
        """
        Simulate total_spins spins at a fixed bet.

        Args:
            total_spins: Number of spins across all batches
            bet: Bet per spin
            batches: Number of independent batches
            seed: Base seed; batch i uses seed + i. None draws one from OS entropy

        Returns:
            Summary dictionary (RTP, hit frequency, volatility, breakdowns)
        """
        if total_spins <= 0 or batches <= 0:
            raise ValueError(f"total_spins and batches must be positive, got {total_spins}, {batches}")
        batches = min(batches, total_spins)

        # Seeded strategies are never shared between batches
        if seed is None:
            seed = secrets.randbelow(2 ** 31)

        base, extra = divmod(total_spins, batches)
        sizes = [base + (1 if i < extra else 0) for i in range(batches)]

        tasks = []
        for i, size in enumerate(sizes):
            batch_seed = seed + i
            tasks.append(lambda i=i, size=size, batch_seed=batch_seed: self._run_batch(i, size, bet, batch_seed))

        self.logger.info(f"Simulating {total_spins} spins in {batches} batches at bet {bet}")
        start = time.time()
        results = self.task_executor.execute_with_progress(tasks, self._log_progress)
        duration = time.time() - start

        summary = self._summarize(results, bet, duration)
        summary["seed"] = seed
        self.logger.info(
            f"Simulation finished in {duration:.2f}s: RTP={summary['rtp']:.4f}, "
            f"hit frequency={summary['hit_frequency']:.4f}"
        )
        return summary

    def _log_progress(self, done: int, total: int):
        self.logger.debug(f"Batch progress: {done}/{total}")

    def _summarize(self, results: List[BatchResult], bet: float, duration: float) -> Dict[str, Any]:
        payouts = np.concatenate([r.payouts for r in results])
        spins = int(payouts.size)
        total_bet = float(bet * spins)
        total_win = float(payouts.sum())

        wins_by_symbol = Counter()
        hits_by_line = Counter()
        for r in results:
            wins_by_symbol.update(r.wins_by_symbol)
            hits_by_line.update(r.hits_by_line)

        return_ratios = payouts / bet
        return {
            "machine_id": self.machine_config.get("machine_id"),
            "spins": spins,
            "batches": len(results),
            "bet": bet,
            "total_bet": total_bet,
            "total_win": total_win,
            "rtp": total_win / total_bet if total_bet > 0 else 0.0,
            "hit_frequency": float(np.count_nonzero(payouts)) / spins,
            "std_dev": float(return_ratios.std()),
            "max_win": float(payouts.max()),
            "scatter_hits": sum(r.scatter_hits for r in results),
            "rtp_by_symbol": {k: v / total_bet for k, v in sorted(wins_by_symbol.items())},
            "hits_by_line": {int(k): v for k, v in sorted(hits_by_line.items())},
            "batch_rtp": [float(r.payouts.sum()) / (bet * r.payouts.size) for r in results],
            "duration": duration,
        }
