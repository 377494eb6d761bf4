"""Guest and user translation allowances."""

from .manager import QuotaManager, QuotaLimits, GUEST_LIMIT, USER_WEEKLY_LIMIT, TOTAL_WEEKLY_LIMIT
from .storage import QuotaStorage, MemoryQuotaStorage, DiskQuotaStorage, create_storage

__all__ = [
    'QuotaManager',
    'QuotaLimits',
    'GUEST_LIMIT',
    'USER_WEEKLY_LIMIT',
    'TOTAL_WEEKLY_LIMIT',
    'QuotaStorage',
    'MemoryQuotaStorage',
    'DiskQuotaStorage',
    'create_storage'
]
