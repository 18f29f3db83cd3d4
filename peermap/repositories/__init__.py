from .response_maps import ResponseMapRepository
from .responses import ResponseLedger

__all__ = ['ResponseMapRepository', 'ResponseLedger']
