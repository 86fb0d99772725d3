"""
Stage transition engine for exchanges.

The legal transitions are listed in ``TRANSITIONS``, a table keyed by
``(current stage, requested stage)``.  Each rule carries an optional
guard, which returns a message when the exchange is not ready for the
transition, and an optional effect applied to the new exchange value
(clearing votes, computing results, ...).

``transition`` never modifies the exchange it is given: the effect runs
on a deep copy which is returned on success.  A rejected transition
therefore leaves the caller's exchange exactly as it was.  Checking the
secret is the caller's responsibility.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..core.errors import InvalidStateError, InvalidTransitionError, LockedError
from ..schemas.entry import Stage
from ..schemas.exchange import Exchange
from .tally import compute_results


Guard = Callable[[Exchange], Optional[str]]
Effect = Callable[[Exchange], None]


@dataclass(frozen=True)
class TransitionRule:
    guard: Optional[Guard] = None
    effect: Optional[Effect] = None


def _require_submissions(exchange: Exchange) -> Optional[str]:
    if not exchange.submissions:
        return "No submission to vote on"
    return None


def _require_votes(exchange: Exchange) -> Optional[str]:
    if not exchange.votes:
        return "No votes to count"
    return None


def _clear_votes(exchange: Exchange) -> None:
    exchange.votes = {}


def _clear_results(exchange: Exchange) -> None:
    exchange.results = {}


def _select_results(exchange: Exchange) -> None:
    exchange.results = compute_results(
        exchange.votes,
        exchange.submissions,
        user_max=exchange.user_max,
        assignment_factor=exchange.assignment_factor,
    )


TRANSITIONS: Dict[Tuple[Stage, Stage], TransitionRule] = {
    (Stage.SUBMISSION, Stage.VOTING): TransitionRule(guard=_require_submissions),
    (Stage.VOTING, Stage.SUBMISSION): TransitionRule(effect=_clear_votes),
    (Stage.VOTING, Stage.SELECTION): TransitionRule(guard=_require_votes, effect=_select_results),
    (Stage.SELECTION, Stage.VOTING): TransitionRule(effect=_clear_results),
    # Results are final once frozen.
    (Stage.SELECTION, Stage.FROZEN): TransitionRule(),
}


def allowed_transitions(stage: Stage) -> List[Stage]:
    """Return the stages reachable from ``stage`` in table order."""
    return [target for (source, target) in TRANSITIONS if source == stage]


def transition(exchange: Exchange, requested: Stage) -> Exchange:
    """Move ``exchange`` to ``requested`` and return the updated copy.

    Raises
    ------
    LockedError
        The exchange is frozen; every request is rejected.
    InvalidTransitionError
        ``requested`` equals the current stage or the pair is not in
        ``TRANSITIONS``.
    InvalidStateError
        The rule's guard failed (nothing to vote on, no votes to count).
    """
    current = exchange.stage
    if current == Stage.FROZEN:
        raise LockedError("This exchange is frozen and cannot be modified")
    if current == requested:
        raise InvalidTransitionError("Stage is identical to request")

    rule = TRANSITIONS.get((current, requested))
    if rule is None:
        allowed = ", ".join(stage.value for stage in allowed_transitions(current))
        raise InvalidTransitionError(
            f"Invalid stage transition from {current.value} to {requested.value} "
            f"(allowed: {allowed})"
        )

    if rule.guard is not None:
        problem = rule.guard(exchange)
        if problem:
            raise InvalidStateError(problem)

    updated = exchange.model_copy(deep=True)
    if rule.effect is not None:
        rule.effect(updated)
    updated.stage = requested
    return updated
