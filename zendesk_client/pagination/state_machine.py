"""State machine for a pagination run."""

from enum import Enum

import structlog


logger = structlog.get_logger()


class PaginationState(str, Enum):
    """State of a pagination run.

    - PAGINATION_INIT: No page requested yet
    - PAGINATION_FETCHING: A page request is in flight or the next one is due
    - PAGINATION_DONE: The server reported no next page
    - PAGINATION_FAILED: A page request failed
    """

    PAGINATION_INIT = "PAGINATION_INIT"
    PAGINATION_FETCHING = "PAGINATION_FETCHING"
    PAGINATION_DONE = "PAGINATION_DONE"
    PAGINATION_FAILED = "PAGINATION_FAILED"


# Valid state transitions
_VALID_TRANSITIONS: dict[PaginationState, set[PaginationState]] = {
    PaginationState.PAGINATION_INIT: {
        PaginationState.PAGINATION_FETCHING,
        PaginationState.PAGINATION_FAILED,
    },
    # FETCHING -> FETCHING is the "has next page" edge
    PaginationState.PAGINATION_FETCHING: {
        PaginationState.PAGINATION_FETCHING,
        PaginationState.PAGINATION_DONE,
        PaginationState.PAGINATION_FAILED,
    },
    PaginationState.PAGINATION_DONE: set(),  # Terminal state
    PaginationState.PAGINATION_FAILED: set(),  # Terminal state
}


class PaginationStateTransitionError(Exception):
    """Raised when an illegal state transition is attempted."""

    def __init__(
        self,
        from_state: PaginationState,
        to_state: PaginationState,
    ) -> None:
        """Initialize the transition error.

        Args:
            from_state: Current state.
            to_state: Attempted target state.
        """
        self.from_state = from_state
        self.to_state = to_state
        super().__init__(
            "Illegal pagination state transition: "
            f"{from_state.value} -> {to_state.value}"
        )


class PaginationStateMachine:
    """Tracks a pagination run and enforces valid transitions."""

    def __init__(self, request_id: str = "") -> None:
        """Initialize the state machine.

        Args:
            request_id: Identifier of the first request, used in logs.
        """
        self._state = PaginationState.PAGINATION_INIT
        self._pages = 0
        self._log = logger.bind(component="pagination", request_id=request_id)

    @property
    def state(self) -> PaginationState:
        """Get the current state."""
        return self._state

    @property
    def pages(self) -> int:
        """Number of page fetches started."""
        return self._pages

    @property
    def is_terminal(self) -> bool:
        """Check if current state is terminal."""
        return self._state in (
            PaginationState.PAGINATION_DONE,
            PaginationState.PAGINATION_FAILED,
        )

    def can_transition_to(self, target: PaginationState) -> bool:
        """Check if a transition to the target state is valid."""
        return target in _VALID_TRANSITIONS.get(self._state, set())

    def transition_to(self, target: PaginationState) -> None:
        """Transition to a new state.

        Args:
            target: The target state.

        Raises:
            PaginationStateTransitionError: If the transition is invalid.
        """
        if not self.can_transition_to(target):
            self._log.error(
                "illegal_state_transition",
                from_state=self._state.value,
                to_state=target.value,
            )
            raise PaginationStateTransitionError(self._state, target)

        old_state = self._state
        self._state = target
        if target == PaginationState.PAGINATION_FETCHING:
            self._pages += 1

        self._log.debug(
            "state_transition",
            from_state=old_state.value,
            to_state=target.value,
            page=self._pages,
        )

    def to_fetching(self) -> None:
        """Transition to PAGINATION_FETCHING state."""
        self.transition_to(PaginationState.PAGINATION_FETCHING)

    def to_done(self) -> None:
        """Transition to PAGINATION_DONE state."""
        self.transition_to(PaginationState.PAGINATION_DONE)

    def to_failed(self) -> None:
        """Transition to PAGINATION_FAILED state."""
        self.transition_to(PaginationState.PAGINATION_FAILED)
