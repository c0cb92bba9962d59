"""DocSearch widget helpers and state model."""

from .helpers import DocSearchPage
from .state import ModalStateMachine, SearchHistory

__all__ = ["DocSearchPage", "ModalStateMachine", "SearchHistory"]
