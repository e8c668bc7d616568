# sizzling_slots/domain/ledger/ledger.py
import logging
import threading
from typing import Dict, Protocol, Union

UserId = Union[int, str]


class LedgerError(Exception):
    """Base class for balance ledger errors."""
    pass


class InsufficientFundsError(LedgerError):
    """Withdrawal larger than the user's balance."""
    def __init__(self, user_id, balance, amount):
        self.user_id = user_id
        self.balance = balance
        self.amount = amount
        self.message = f"Insufficient balance for user {user_id}: {balance} < {amount}"
        super().__init__(self.message)


class Ledger(Protocol):
    """Balance store the game pays into and draws bets from (wallet, database, chain)."""

    def get_balance(self, user_id: UserId) -> float:
        ...

    def deposit(self, user_id: UserId, amount: float) -> float:
        """Credit amount; returns the new balance."""
        ...

    def withdraw(self, user_id: UserId, amount: float) -> float:
        """Debit amount; returns the new balance. Raises InsufficientFundsError."""
        ...

    def reset(self, user_id: UserId) -> float:
        """Restore the starting balance; returns it."""
        ...


class InMemoryLedger:
    """
    Process-local ledger. New users start with default_balance.
    Stands in for a real wallet in tests and demos.
    """
    def __init__(self, default_balance: float = 1000):
        self.default_balance = default_balance
        self._balances: Dict[UserId, float] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger("domain.ledger")

    def _ensure(self, user_id: UserId) -> float:
        if user_id not in self._balances:
            self._balances[user_id] = self.default_balance
            self.logger.debug(f"Opened account for user {user_id} with {self.default_balance}")
        return self._balances[user_id]

    @staticmethod
    def _check_amount(amount: float):
        if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
            raise LedgerError(f"Amount must be positive, got {amount!r}")

    def get_balance(self, user_id: UserId) -> float:
        with self._lock:
            return self._ensure(user_id)

    def deposit(self, user_id: UserId, amount: float) -> float:
        self._check_amount(amount)
        with self._lock:
            balance = self._ensure(user_id) + amount
            self._balances[user_id] = balance
        self.logger.debug(f"Deposited {amount} for user {user_id}, balance={balance}")
        return balance

    def withdraw(self, user_id: UserId, amount: float) -> float:
        self._check_amount(amount)
        with self._lock:
            balance = self._ensure(user_id)
            if balance < amount:
                error = InsufficientFundsError(user_id, balance, amount)
                self.logger.warning(error.message)
                raise error
            balance -= amount
            self._balances[user_id] = balance
        self.logger.debug(f"Withdrew {amount} for user {user_id}, balance={balance}")
        return balance

    def reset(self, user_id: UserId) -> float:
        with self._lock:
            self._balances[user_id] = self.default_balance
        self.logger.info(f"Balance for user {user_id} reset to {self.default_balance}")
        return self.default_balance
