"""Policy lifecycle state machine.

The only guarded transition is ``cancel`` (Active -> Cancelled). The machine
is bound to the ORM instance's ``status`` attribute, so it starts from the
persisted state and writes the new status back on transition.
"""

from typing import TYPE_CHECKING

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from policy_management.core.logging import get_logger
from policy_management.models.base import utcnow
from policy_management.models.policy import PolicyStatus

if TYPE_CHECKING:
    from policy_management.models.policy import Policy

logger = get_logger(__name__)


class PolicyLifecycle(StateMachine):
    """State machine for policy status.

    States match PolicyStatus enum values:
    - active: policy in force (initial)
    - cancelled: policy cancelled by the customer (final)

    Transitions:
    - cancel: active -> cancelled
    """

    active = State(initial=True, value=PolicyStatus.ACTIVE)
    cancelled = State(final=True, value=PolicyStatus.CANCELLED)

    cancel = active.to(cancelled)

    def __init__(self, policy: "Policy") -> None:
        self.policy = policy
        super().__init__(model=policy, state_field="status")

    def on_cancel(self) -> None:
        """Stamp the mutation time when the policy is cancelled."""
        self.policy.updated_at = utcnow()
        logger.info(
            "policy_cancelled",
            policy_id=self.policy.id,
            client_id=self.policy.client_id,
        )


def create_lifecycle(policy: "Policy") -> PolicyLifecycle:
    """Build a lifecycle machine positioned at the policy's current status."""
    return PolicyLifecycle(policy)


__all__ = [
    "PolicyLifecycle",
    "TransitionNotAllowed",
    "create_lifecycle",
]
