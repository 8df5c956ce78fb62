"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager


class Services:
    """Container for all application services.

    The storage backend is chosen by `config.storage_backend`: "sqlite" uses
    the database services, "local" uses a single JSON file. Both expose the
    same service API, so callers do not depend on the backend.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing (sqlite backend).
        store: Optional LocalStore for testing (local backend).
    """

    def __init__(self, config: Config, db_manager=None, store=None):
        self.config = config
        self.db_manager = None
        self.store = None

        if config.storage_backend == "local":
            self._init_local(store)
        elif config.storage_backend == "sqlite":
            self._init_sqlite(db_manager)
        else:
            raise ValueError(f"Unknown storage backend: {config.storage_backend}")

    def _init_sqlite(self, db_manager) -> None:
        self.db_manager = db_manager or DatabaseManager(self.config)

        # Lazy import to avoid circular dependencies
        from services.transactions import TransactionService
        from services.budget_goals import BudgetGoalService
        from services.crypto_holdings import CryptoHoldingService
        from services.sip_plans import SipPlanService
        from services.reminders import ReminderService

        self.transactions = TransactionService(self.db_manager)
        self.budget_goals = BudgetGoalService(self.db_manager)
        self.crypto_holdings = CryptoHoldingService(self.db_manager)
        self.sip_plans = SipPlanService(self.db_manager)
        self.reminders = ReminderService(self.db_manager)

    def _init_local(self, store) -> None:
        from services.local import (
            LocalBudgetGoalService,
            LocalCryptoHoldingService,
            LocalReminderService,
            LocalSipPlanService,
            LocalStore,
            LocalTransactionService,
        )

        self.store = store or LocalStore(self.config.local_store_path)
        self.transactions = LocalTransactionService(self.store)
        self.budget_goals = LocalBudgetGoalService(self.store)
        self.crypto_holdings = LocalCryptoHoldingService(self.store)
        self.sip_plans = LocalSipPlanService(self.store)
        self.reminders = LocalReminderService(self.store)
