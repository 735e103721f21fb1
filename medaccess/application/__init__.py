"""Application layer: governance façade and its exceptions."""

from medaccess.application.governance_service import GovernanceService, RecordReceipt

__all__ = ["GovernanceService", "RecordReceipt"]
