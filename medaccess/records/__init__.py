from medaccess.records.record_store import RecordStore

__all__ = ["RecordStore"]
