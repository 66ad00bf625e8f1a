"""
Interaction state machine for the rose chart.

InteractionState is an immutable value. ChartController holds the single
current state and applies transitions by swapping that reference, so a
frame rendered from ``controller.state`` always reflects a fully applied
transition. Transitions never raise for in-contract input.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Union

from rose_chart.core.colors import ColorScheme
from rose_chart.core.view_resolver import DayFilter, ViewKind, ViewMode, parse_day_filter

logger = logging.getLogger(__name__)

StateListener = Callable[["InteractionState"], None]


@dataclass(frozen=True)
class InteractionState:
    """
    UI-session state of the chart. Never persisted.

    Attributes:
        view_mode: Current view selection
        color_scheme: Active color scheme
        labels_visible: Whether grid values and hour markers are drawn
        selected_index: Selected slot, or None
        hovered_index: Slot under the pointer, or None
    """
    view_mode: ViewMode = ViewMode()
    color_scheme: ColorScheme = ColorScheme.BLUES
    labels_visible: bool = True
    selected_index: Optional[int] = None
    hovered_index: Optional[int] = None

    @property
    def has_selection(self) -> bool:
        return self.selected_index is not None


class ChartController:
    """
    Owns the chart's InteractionState and applies transitions to it.

    Listeners registered with add_listener() are called with the new state
    after every transition that changed it. The Qt host uses this to
    schedule repaints.

    Example:
        >>> controller = ChartController()
        >>> controller.click(20)
        >>> controller.state.selected_index
        20
        >>> controller.click(20)
        >>> controller.state.selected_index is None
        True
    """

    def __init__(self, initial: Optional[InteractionState] = None):
        self._state = initial or InteractionState()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> InteractionState:
        return self._state

    def add_listener(self, listener: StateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _apply(self, new_state: InteractionState, transition: str) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        logger.debug(f"{transition}: {new_state}")
        for listener in list(self._listeners):
            listener(new_state)

    # =========================================================================
    # Transitions
    # =========================================================================

    def set_view_mode(self, view_mode: Union[ViewMode, ViewKind, str]) -> None:
        """
        Switch the view. Clears the selection and hover.

        A bare ViewKind or kind name keeps the current day filter.
        """
        if not isinstance(view_mode, ViewMode):
            view_mode = self._state.view_mode.with_kind(view_mode)
        self._apply(
            replace(self._state, view_mode=view_mode,
                    selected_index=None, hovered_index=None),
            "set_view_mode",
        )

    def set_day_filter(self, day_filter: DayFilter) -> None:
        """Select 'all' days or a day index. Clears the selection and hover."""
        view_mode = self._state.view_mode.with_day_filter(parse_day_filter(day_filter))
        self._apply(
            replace(self._state, view_mode=view_mode,
                    selected_index=None, hovered_index=None),
            "set_day_filter",
        )

    def hover(self, index: Optional[int]) -> None:
        self._apply(replace(self._state, hovered_index=index), "hover")

    def click(self, index: int) -> None:
        """Toggle selection of ``index``."""
        selected = None if self._state.selected_index == index else index
        self._apply(replace(self._state, selected_index=selected), "click")

    def clear_selection(self) -> None:
        self._apply(replace(self._state, selected_index=None), "clear_selection")

    def set_color_scheme(self, scheme: Union[ColorScheme, str]) -> None:
        self._apply(
            replace(self._state, color_scheme=ColorScheme.parse(scheme)),
            "set_color_scheme",
        )

    def set_labels_visible(self, visible: bool) -> None:
        self._apply(replace(self._state, labels_visible=bool(visible)), "set_labels_visible")

    def toggle_labels(self) -> None:
        self.set_labels_visible(not self._state.labels_visible)


__all__ = ["InteractionState", "ChartController", "StateListener"]
