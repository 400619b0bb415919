"""
Return models module.

All models are exported from this module to maintain backward compatibility.
"""
from .reason import ReturnReason
from .return_request import ReturnRequest
from .history import ReturnStatusHistory
from .message import ReturnMessage

__all__ = [
    'ReturnReason',
    'ReturnRequest',
    'ReturnStatusHistory',
    'ReturnMessage',
]
