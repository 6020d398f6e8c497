"""Selection and filter state — mutated only by explicit user commands."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class SelectionStatus(str, Enum):
    UNSELECTED = "unselected"
    SELECTED = "selected"


class SelectionState(BaseModel):
    """
    Which single locale is highlighted for detail view.

    Not scoped to a continent: a selection survives filter changes even when
    the locale is no longer visible, and the name is never validated here.
    Consumers resolve dangling names lazily.
    """

    model_config = ConfigDict(frozen=True)

    locale_name: Optional[str] = None

    @property
    def status(self) -> SelectionStatus:
        if self.locale_name is None:
            return SelectionStatus.UNSELECTED
        return SelectionStatus.SELECTED

    @property
    def is_selected(self) -> bool:
        return self.status == SelectionStatus.SELECTED

    def pick(self, locale_name: str) -> "SelectionState":
        """Select a locale from either state, unconditionally."""
        return SelectionState(locale_name=locale_name)

    def clear(self) -> "SelectionState":
        return SelectionState()


class FilterState(BaseModel):
    """The continent currently shown in the locale grid."""

    model_config = ConfigDict(frozen=True)

    continent: str
