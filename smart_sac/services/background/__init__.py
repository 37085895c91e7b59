from smart_sac.services.background.history_retention_service import (
    HistoryRetentionService,
    HistoryRetentionSweeper,
)

__all__ = ["HistoryRetentionService", "HistoryRetentionSweeper"]
