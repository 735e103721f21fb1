from medaccess.domain.models.record import DataRecord

__all__ = ["DataRecord"]
