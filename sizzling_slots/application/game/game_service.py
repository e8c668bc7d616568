# sizzling_slots/application/game/game_service.py
import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Any

from sizzling_slots.domain.ledger.ledger import Ledger, UserId
from sizzling_slots.domain.machine.entities.slot_machine import SlotMachine
from sizzling_slots.domain.session.entities.player_stats import PlayerStats
from sizzling_slots.domain.session.entities.spin_result import SpinResult

# Sort key for each leaderboard view
LEADERBOARD_ORDERS = ("balance", "biggest_win")


class BetRejectedError(Exception):
    """Bet is not one of the machine's bet options."""
    def __init__(self, bet, allowed):
        self.bet = bet
        self.allowed = list(allowed)
        self.message = f"Bet {bet!r} is not allowed, choose one of {self.allowed}"
        super().__init__(self.message)


@dataclass(frozen=True)
class PlayOutcome:
    spin_result: SpinResult
    message: str
    balance: float

    @property
    def winnings(self) -> float:
        return self.spin_result.total_payout


class GameService:
    """
    Caller-side glue around a SlotMachine: bet validation, balance changes
    through the ledger, per-player statistics.

    Spins for the same user are serialized; different users run in parallel.
    """
    def __init__(self, machine: SlotMachine, ledger: Ledger, currency: str = "coins"):
        self.machine = machine
        self.ledger = ledger
        self.currency = currency
        self.logger = logging.getLogger("application.game")

        self._stats: Dict[UserId, PlayerStats] = {}
        self._user_locks: Dict[UserId, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _user_lock(self, user_id: UserId) -> threading.Lock:
        with self._locks_guard:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.Lock()
            return lock

    def _stats_for(self, user_id: UserId) -> PlayerStats:
        stats = self._stats.get(user_id)
        if stats is None:
            stats = self._stats[user_id] = PlayerStats(user_id)
        return stats

    def play(self, user_id: UserId, bet: float) -> PlayOutcome:
        """
        Take the bet, spin, pay out.

        Raises:
            BetRejectedError: If the bet is not a configured option
            InsufficientFundsError: If the user cannot cover the bet
        """
        if not self.machine.is_valid_bet(bet):
            error = BetRejectedError(bet, self.machine.bet_options)
            self.logger.warning(error.message)
            raise error

        with self._user_lock(user_id):
            self.ledger.withdraw(user_id, bet)
            try:
                result = self.machine.spin(bet)
            except Exception:
                # Spin aborted: hand the stake back before propagating
                self.ledger.deposit(user_id, bet)
                raise

            if result.total_payout > 0:
                balance = self.ledger.deposit(user_id, result.total_payout)
            else:
                balance = self.ledger.get_balance(user_id)

            with self._locks_guard:
                self._stats_for(user_id).update_spin(
                    bet, result.total_payout, is_scatter_win=result.scatter_line is not None
                )

        self.logger.info(f"User {user_id} bet {bet}, won {result.total_payout}, balance {balance}")
        return PlayOutcome(result, self.machine.format_result(result), balance)

    def balance(self, user_id: UserId) -> float:
        return self.ledger.get_balance(user_id)

    def stats(self, user_id: UserId) -> PlayerStats:
        with self._locks_guard:
            return self._stats_for(user_id)

    def reset_balance(self, user_id: UserId) -> float:
        """Restore the ledger's starting balance for a user."""
        with self._user_lock(user_id):
            return self.ledger.reset(user_id)

    def leaderboard(self, limit: int = 10, by: str = "balance") -> List[Dict[str, Any]]:
        """
        Rank players who have spun at least once.

        Args:
            limit: Maximum number of entries
            by: LEADERBOARD_ORDERS key, "balance" or "biggest_win"

        Raises:
            ValueError: If the ordering is unknown
        """
        if by not in LEADERBOARD_ORDERS:
            raise ValueError(f"Unknown leaderboard ordering {by!r}, expected one of {list(LEADERBOARD_ORDERS)}")

        with self._locks_guard:
            snapshot = [(user_id, stats.biggest_win, stats.total_won) for user_id, stats in self._stats.items()]
        entries = [
            {
                "user_id": user_id,
                "balance": self.ledger.get_balance(user_id),
                "biggest_win": biggest_win,
                "total_won": total_won,
            }
            for user_id, biggest_win, total_won in snapshot
        ]
        entries.sort(key=lambda e: e[by], reverse=True)
        return entries[:limit]

    def rules_text(self) -> str:
        info = self.machine.get_info()
        lines = [
            "SIZZLING HOT SLOT RULES",
            "",
            "- Match 3 or more identical symbols from the leftmost reel on a payline to win",
            f"- The game has {info['columns']} reels and {info['num_paylines']} paylines",
        ]

        scatter = self.machine.catalog.scatter_symbol
        if scatter is not None:
            lines.append(f"- {scatter.id} is a scatter and pays anywhere on the grid")

        lines += ["", "PAYOUTS (multiplied by your bet, for 3/4/5 of a kind):"]
        for row in self.machine.pay_table():
            payouts = "/".join(f"{p}x" for p in row["payouts"])
            name = f"{row['label']} {row['symbol']}" if row["label"] else row["symbol"]
            entry = f"- {name}: {payouts}"
            if row["partial_payout"] is not None:
                entry += f" (2 of a kind: {row['partial_payout']}x)"
            lines.append(entry)
        return "\n".join(lines)
