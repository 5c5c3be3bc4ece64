"""
Game Session - Drives the transition engine from a real-time clock.

The session owns the current snapshot plus the two timers the game needs:
a repeating tick timer whose period is the current speed, and a one-shot
timer that clears the eat/crash flash. Events are applied one at a time.
"""
import logging
from typing import Callable, List, Optional

import pygame

from ..core.engine import Event, EventType, TransitionEngine
from ..core.state import Direction, GameState

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class IntervalTimer:
    """Repeating timer in milliseconds. Never fires more than once per poll."""

    def __init__(self):
        self.period: Optional[int] = None
        self.next_due: Optional[int] = None

    @property
    def armed(self) -> bool:
        return self.next_due is not None

    def arm(self, now: int, period: int):
        self.period = period
        self.next_due = now + period

    def disarm(self):
        self.period = None
        self.next_due = None

    def due(self, now: int) -> bool:
        return self.next_due is not None and now >= self.next_due

    def reschedule(self, now: int):
        """
        Move to the next deadline after firing.

        Deadlines stay on the original cadence so frame lateness does not
        accumulate. If a whole period was missed, the schedule restarts
        from ``now`` and the missed ticks are dropped.
        """
        if now - self.next_due >= self.period:
            self.next_due = now + self.period
        else:
            self.next_due += self.period


class OneShotTimer:
    """Single-fire timer in milliseconds."""

    def __init__(self):
        self.next_due: Optional[int] = None

    @property
    def armed(self) -> bool:
        return self.next_due is not None

    def arm(self, now: int, delay: int):
        self.next_due = now + delay

    def disarm(self):
        self.next_due = None

    def due(self, now: int) -> bool:
        return self.next_due is not None and now >= self.next_due


class GameSession:
    """
    Feeds events into the engine and keeps timers in step with the state.

    Typical loop:
        session = GameSession(engine)
        while running:
            for event in pygame.event.get():
                ...  # translate to session.change_direction() etc.
            session.update()
            renderer.render(session.state.to_dict())
    """

    def __init__(
        self,
        engine: TransitionEngine,
        clock: Optional[Callable[[], int]] = None,
        effect_duration: int = 150,
        recorder=None,
    ):
        """
        Initialize the session and start the first game.

        Args:
            engine: Transition engine to apply events with
            clock: Millisecond clock (defaults to pygame.time.get_ticks)
            effect_duration: How long the eat/crash flash stays on, in ms
            recorder: Optional object with a record(event) method
        """
        self.engine = engine
        self.clock = clock or pygame.time.get_ticks
        self.effect_duration = effect_duration
        self.recorder = recorder

        self.tick_timer = IntervalTimer()
        self.effect_timer = OneShotTimer()
        self._listeners: List[Listener] = []

        self.state: GameState = engine.initialize()
        self.tick_timer.arm(self.clock(), self.state.speed)

    def add_listener(self, listener: Listener):
        """Call ``listener`` with every new snapshot."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, event: Event, now: Optional[int] = None) -> GameState:
        """
        Apply one event and update the timers.

        Returns:
            The current state after the event
        """
        if now is None:
            now = self.clock()

        if self.recorder is not None:
            self.recorder.record(event)

        if event.kind is EventType.RESTART:
            self.tick_timer.disarm()
            self.effect_timer.disarm()

        old = self.state
        new = self.engine.apply(old, event)
        if new is old:
            return old

        self.state = new
        self._sync_timers(old, new, event, now)

        if new.game_over and not old.game_over:
            logger.info("Game over: score %d, high score %d", new.score, new.high_score)

        for listener in list(self._listeners):
            listener(new)
        return new

    def _sync_timers(self, old: GameState, new: GameState, event: Event, now: int):
        if not new.is_running:
            self.tick_timer.disarm()
        elif not self.tick_timer.armed or new.speed != old.speed:
            self.tick_timer.arm(now, new.speed)

        flashing = new.just_ate_food or new.flash_effect
        was_flashing = old.just_ate_food or old.flash_effect
        if not flashing:
            self.effect_timer.disarm()
        elif event.kind is EventType.TICK or not was_flashing:
            self.effect_timer.arm(now, self.effect_duration)

    def update(self, now: Optional[int] = None) -> int:
        """
        Fire whichever timers are due.

        Each timer fires at most once per call, earliest deadline first, so a
        stalled frame does not release a burst of ticks.

        Returns:
            Number of timer events dispatched
        """
        if now is None:
            now = self.clock()

        due = []
        if self.tick_timer.due(now):
            due.append((self.tick_timer.next_due, 1, Event.tick()))
        if self.effect_timer.due(now):
            due.append((self.effect_timer.next_due, 0, Event.reset_effects()))
        due.sort(key=lambda item: (item[0], item[1]))

        fired = 0
        for _, _, event in due:
            # An earlier event in this batch may have re-armed or disarmed the timer
            if event.kind is EventType.TICK:
                if not self.tick_timer.due(now):
                    continue
                self.tick_timer.reschedule(now)
            else:
                if not self.effect_timer.due(now):
                    continue
                self.effect_timer.disarm()
            self.dispatch(event, now)
            fired += 1

        return fired

    def change_direction(self, direction: Direction) -> GameState:
        return self.dispatch(Event.intent(direction))

    def toggle_pause(self) -> GameState:
        return self.dispatch(Event.toggle_pause())

    def restart(self) -> GameState:
        return self.dispatch(Event.restart())

    def close(self):
        """Cancel all pending timers."""
        self.tick_timer.disarm()
        self.effect_timer.disarm()
