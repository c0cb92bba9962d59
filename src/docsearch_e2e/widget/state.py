"""Model of the widget state the scenarios observe through the UI."""

import logging

from ..browser.errors import InvalidTransitionError
from ..core.types import ModalState, ModalTrigger, SavedSearch

logger = logging.getLogger(__name__)

# The widget stores at most this many entries per list
MAX_HISTORY_ENTRIES = 7

OPEN_TRIGGERS = frozenset(
    {
        ModalTrigger.CLICK,
        ModalTrigger.CTRL_K,
        ModalTrigger.CTRL_K_CAPS,
        ModalTrigger.META_K,
        ModalTrigger.META_K_CAPS,
        ModalTrigger.SLASH,
    }
)

CLOSE_TRIGGERS = frozenset(
    {
        ModalTrigger.ESCAPE,
        ModalTrigger.OUTSIDE_CLICK,
        ModalTrigger.CTRL_K,
        ModalTrigger.META_K,
    }
)

TRANSITIONS: dict[ModalState, tuple[frozenset[ModalTrigger], ModalState]] = {
    ModalState.CLOSED: (OPEN_TRIGGERS, ModalState.OPEN),
    ModalState.OPEN: (CLOSE_TRIGGERS, ModalState.CLOSED),
}


class ModalStateMachine:
    """Closed/Open state of the modal.

    Starts closed on page load and has no terminal state. Ctrl+K and Cmd+K
    appear in both trigger sets, so they toggle.
    """

    def __init__(self, state: ModalState = ModalState.CLOSED):
        self.state = state

    @property
    def is_open(self) -> bool:
        return self.state is ModalState.OPEN

    def can_apply(self, trigger: ModalTrigger) -> bool:
        triggers, _ = TRANSITIONS[self.state]
        return trigger in triggers

    def next_state(self, trigger: ModalTrigger) -> ModalState:
        """Return the state ``trigger`` leads to without committing it.

        Raises:
            InvalidTransitionError: If the trigger has no effect in the current state
        """
        if not self.can_apply(trigger):
            raise InvalidTransitionError(
                f"{trigger.value!r} does not change a modal that is {self.state.value}"
            )
        return TRANSITIONS[self.state][1]

    def apply(self, trigger: ModalTrigger) -> ModalState:
        target = self.next_state(trigger)
        logger.debug("Modal %s -> %s via %s", self.state.value, target.value, trigger.value)
        self.state = target
        return target

    def reset(self) -> None:
        """Return to the page-load state."""
        self.state = ModalState.CLOSED


class SearchHistory:
    """Recent and favorite searches, most recent first.

    A search lives in exactly one of the two lists.
    """

    def __init__(self, limit: int = MAX_HISTORY_ENTRIES):
        self.limit = limit
        self.recent: list[SavedSearch] = []
        self.favorites: list[SavedSearch] = []

    @property
    def is_empty(self) -> bool:
        return not self.recent and not self.favorites

    @property
    def sections(self) -> list[str]:
        """Section headings the widget shows, in display order."""
        sections = []
        if self.recent:
            sections.append("Recent")
        if self.favorites:
            sections.append("Favorite")
        return sections

    def record(self, search: SavedSearch) -> None:
        """Remember a visited hit.

        Favorites absorb repeat visits; otherwise the search moves to the
        front of the recent list.
        """
        if search in self.favorites:
            return
        if search in self.recent:
            self.recent.remove(search)
        self.recent.insert(0, search)
        del self.recent[self.limit :]

    def remove_recent(self, index: int) -> SavedSearch:
        return self.recent.pop(self._check(self.recent, index))

    def save(self, index: int) -> SavedSearch:
        """Promote a recent search to the favorites."""
        search = self.recent.pop(self._check(self.recent, index))
        self.favorites.insert(0, search)
        del self.favorites[self.limit :]
        return search

    def remove_favorite(self, index: int) -> SavedSearch:
        return self.favorites.pop(self._check(self.favorites, index))

    @staticmethod
    def _check(entries: list[SavedSearch], index: int) -> int:
        if not 0 <= index < len(entries):
            raise IndexError(f"No history entry at index {index} (have {len(entries)})")
        return index
