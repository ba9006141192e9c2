"""Dispatch table for moderation actions.

Every mutating ledger operation is reachable through one dispatcher, keyed by
action name. The dispatcher asks for confirmation before running an action
and notifies subscribers once the action changed the stored state, so that
listings can be reloaded.
"""

from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, List, Optional

from ..errors import ConfirmationRequiredError, PermissionDeniedError, ValidationError
from ..models.actor import Actor
from .ledger import ModerationLedger

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]
ChangeListener = Callable[[str, Any], None]


@dataclass(frozen=True)
class ModerationAction:
    """
    Registration of one moderation action.

    Fields:
        name: Action name used by callers (e.g., 'flag')
        run: Calls the ledger with the acting party and the action's parameters
        prompt: Question shown to the user before the action runs
        admin_only: Whether only admins may dispatch the action
    """
    name: str
    run: Callable[..., Any]
    prompt: str
    admin_only: bool = True


ACTIONS: Dict[str, ModerationAction] = {
    'flag': ModerationAction(
        name='flag',
        run=lambda ledger, actor, **params: ledger.flag(**params),
        prompt="Flag this event? It will be hidden from every listing until the flag is lifted."
    ),
    'request_unflag': ModerationAction(
        name='request_unflag',
        run=lambda ledger, actor, **params: ledger.request_unflag(actor=actor, **params),
        prompt="Send an unflag request to the admins?",
        admin_only=False
    ),
    'approve_unflag': ModerationAction(
        name='approve_unflag',
        run=lambda ledger, actor, **params: ledger.approve_unflag(**params),
        prompt="Approve the unflag request and restore this event?"
    ),
    'delete_flagged': ModerationAction(
        name='delete_flagged',
        run=lambda ledger, actor, **params: ledger.delete_flagged(**params),
        prompt="Permanently delete this flagged event? This cannot be undone."
    ),
    'delete_active': ModerationAction(
        name='delete_active',
        run=lambda ledger, actor, **params: ledger.delete_active(**params),
        prompt="Permanently delete this event? This cannot be undone."
    ),
}


def get_action(name: str) -> ModerationAction:
    """
    Get a registered action.

    Raises:
        ValidationError: If no action is registered under the name
    """
    action = ACTIONS.get(name)
    if action is None:
        raise ValidationError(f"Unknown moderation action: {name}")
    return action


class ActionDispatcher:
    """Runs moderation actions behind a confirmation gate."""

    def __init__(
        self,
        ledger: Optional[ModerationLedger] = None,
        confirm: Optional[ConfirmCallback] = None
    ):
        """
        Args:
            ledger: Ledger the actions run against
            confirm: Called with the action's prompt; the action only runs if
                     it returns True. Without a callback nothing is confirmed.
        """
        self.ledger = ledger or ModerationLedger()
        self.confirm = confirm
        self._listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callback invoked with (action name, result) after each action."""
        self._listeners.append(listener)

    def dispatch(self, name: str, actor: Actor, **params: Any) -> Any:
        """
        Confirm and run an action on behalf of an actor.

        Raises:
            ValidationError: Unknown action or invalid parameters
            PermissionDeniedError: A non-admin dispatched an admin-only action
            ConfirmationRequiredError: The confirmation callback declined
        """
        action = get_action(name)
        if action.admin_only and not actor.is_admin:
            raise PermissionDeniedError(f"Only admins may {name.replace('_', ' ')} events")
        if self.confirm is None or not self.confirm(action.prompt):
            raise ConfirmationRequiredError(action.prompt)

        result = action.run(self.ledger, actor, **params)
        logger.info(f"Moderation action '{name}' completed")

        for listener in self._listeners:
            listener(name, result)
        return result
