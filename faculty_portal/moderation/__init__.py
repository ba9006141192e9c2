"""Moderation workflow: the flag / unflag ledger and its action dispatcher."""

from .ledger import ModerationLedger, ModerationState
from .actions import ACTIONS, ActionDispatcher, ModerationAction, get_action

__all__ = [
    'ModerationLedger',
    'ModerationState',
    'ACTIONS',
    'ActionDispatcher',
    'ModerationAction',
    'get_action',
]
