from stateflow.schemas.transitions import AuditRecordRead, AvailableTrigger

__all__ = ["AuditRecordRead", "AvailableTrigger"]
