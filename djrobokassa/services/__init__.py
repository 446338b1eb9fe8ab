"""
Service modules for Robokassa web service operations.
"""

from .state_service import OperationState, OperationStateService, parse_operation_state

__all__ = [
    'OperationState',
    'OperationStateService',
    'parse_operation_state',
]
