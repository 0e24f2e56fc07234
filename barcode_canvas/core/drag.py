"""
core/drag.py - Pointer drag state machine.

States:
    IDLE                 no element is being moved
    DRAGGING(session)    pointer went down on an element and is still down

    IDLE     --pointer_down-->  DRAGGING   grab offset fixed for the session
    DRAGGING --pointer_move-->  DRAGGING   element moved to the snapped position
    DRAGGING --pointer_up---->  IDLE       from anywhere, not just the element

The controller is owned by the window and handed to whatever receives
pointer events (the canvas scene). It never owns the dragged element: the
session keeps a weak reference and treats a dead or detached target as
stale, ignoring the move.

No Qt here; targets only need to satisfy the DragTarget protocol.
"""
from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .errors import StaleDragReferenceError
from .models import Point
from .snap import GridSettings, snap


class DragTarget(Protocol):
    """What the controller needs from a draggable element."""

    def is_drag_target_alive(self) -> bool: ...
    def move_to(self, pos: Point) -> None: ...


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    target_ref: "weakref.ReferenceType[DragTarget]"
    grab_offset: Point
    cell_size: int

    @property
    def target(self) -> Optional[DragTarget]:
        return self.target_ref()

    def live_target(self) -> DragTarget:
        """Return the target, or raise StaleDragReferenceError."""
        target = self.target_ref()
        if target is None:
            raise StaleDragReferenceError("Dragged element no longer exists.")
        if not target.is_drag_target_alive():
            raise StaleDragReferenceError("Dragged element was removed from the canvas.")
        return target


class DragController:
    def __init__(self, grid: Optional[GridSettings] = None):
        self.grid = grid if grid is not None else GridSettings()
        self._session: Optional[DragSession] = None
        self._last_position: Optional[Point] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> DragState:
        return DragState.DRAGGING if self._session is not None else DragState.IDLE

    @property
    def session(self) -> Optional[DragSession]:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    @property
    def last_position(self) -> Optional[Point]:
        """Last snapped position written during the current (or last) session."""
        return self._last_position

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def pointer_down(self, target: DragTarget, pointer: Point, target_top_left: Point) -> DragSession:
        """
        Start dragging *target*.

        *pointer* and *target_top_left* are both page coordinates. A session
        already in progress is replaced (single pointer).
        """
        self._session = DragSession(
            target_ref=weakref.ref(target),
            grab_offset=pointer - target_top_left,
            cell_size=self.grid.cell_size,
        )
        self._last_position = None
        return self._session

    def pointer_move(self, pointer: Point, origin: Point) -> Optional[Point]:
        """
        Move the dragged element for a pointer at *pointer*.

        *origin* is the drawing surface's current top-left in page
        coordinates. Returns the new element position, or None when idle or
        when the target went stale (the session is then dropped).
        """
        session = self._session
        if session is None:
            return None

        try:
            target = session.live_target()
        except StaleDragReferenceError as exc:
            print(f"[Drag] ignoring move: {exc}")
            self._session = None
            return None

        pos = snap(pointer, session.grab_offset, origin, session.cell_size)
        target.move_to(pos)
        self._last_position = pos
        return pos

    def pointer_up(self) -> Optional[DragSession]:
        """End the current session, if any. Returns the session that ended."""
        session, self._session = self._session, None
        return session
