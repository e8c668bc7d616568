# sizzling_slots/domain/session/entities/player_stats.py
from dataclasses import dataclass
from typing import Dict, Any, Optional, Union
from datetime import datetime


@dataclass
class LastSpin:
    bet: float
    winnings: float
    timestamp: datetime


@dataclass
class PlayerStats:
    """Running per-player totals, updated after every spin."""
    user_id: Union[int, str]
    total_spins: int = 0
    win_count: int = 0
    total_bet: float = 0.0
    total_won: float = 0.0
    biggest_win: float = 0.0
    big_win_count: int = 0
    scatter_wins: int = 0
    last_spin: Optional[LastSpin] = None

    def update_spin(self, bet_amount: float, win_amount: float, is_scatter_win: bool = False):
        self.total_spins += 1
        self.total_bet += bet_amount
        self.total_won += win_amount

        if win_amount > 0:
            self.win_count += 1
        if win_amount > self.biggest_win:
            self.biggest_win = win_amount

        # 10x the stake or more counts as a big win
        if win_amount >= bet_amount * 10:
            self.big_win_count += 1
        if is_scatter_win:
            self.scatter_wins += 1

        self.last_spin = LastSpin(bet_amount, win_amount, datetime.now())

    @property
    def profit(self) -> float:
        return self.total_won - self.total_bet

    @property
    def win_rate(self) -> float:
        return self.win_count / self.total_spins if self.total_spins > 0 else 0.0

    @property
    def return_to_player(self) -> float:
        return self.total_won / self.total_bet if self.total_bet > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "total_spins": self.total_spins,
            "win_count": self.win_count,
            "win_rate": self.win_rate,
            "total_bet": self.total_bet,
            "total_won": self.total_won,
            "profit": self.profit,
            "biggest_win": self.biggest_win,
            "big_win_count": self.big_win_count,
            "scatter_wins": self.scatter_wins,
            "return_to_player": self.return_to_player,
            "last_spin": None if self.last_spin is None else {
                "bet": self.last_spin.bet,
                "winnings": self.last_spin.winnings,
                "timestamp": self.last_spin.timestamp.strftime('%Y-%m-%d %H:%M:%S'),
            },
        }
