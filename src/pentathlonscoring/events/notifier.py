"""In-process fan-out of score change notifications.

Producers call :meth:`ScoreChangeNotifier.emit` after scores are saved;
listeners (live-update bridges, caches) treat each event as a hint to re-read
authoritative state. Delivery is synchronous, in subscription order, at most
once and never queued.
"""

# Pentathlon Scoring
# Copyright (C) 2025  Pentathlon Scoring developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import itertools
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, FrozenSet, Iterable

from pentathlonscoring.exceptions import NotifierClosedException
from pentathlonscoring.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class ScoreChangeEvent:
    """Scores changed for some athletes of a competition group.

    Attributes
    ----------
    competition_group_id : str
        Competition (or group within it) the scores belong to.
    discipline : str
        Discipline key that was scored.
    athlete_ids : frozenset of str
        Athletes whose scores changed.
    timestamp : datetime
        When the change was emitted (UTC).
    """

    competition_group_id: str
    discipline: str
    athlete_ids: FrozenSet[str] = frozenset()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls, competition_group_id: str, discipline: str, athlete_ids: Iterable[str]
    ) -> "ScoreChangeEvent":
        """Build an event stamped with the current time."""
        return cls(
            competition_group_id=competition_group_id,
            discipline=discipline,
            athlete_ids=frozenset(athlete_ids),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary for relay to live-update channels."""
        return {
            "competition_group_id": self.competition_group_id,
            "discipline": self.discipline,
            "athlete_ids": sorted(self.athlete_ids),
            "timestamp": self.timestamp.isoformat(),
        }


ScoreChangeListener = Callable[[ScoreChangeEvent], None]
Unsubscribe = Callable[[], None]


class ScoreChangeNotifier:
    """Publish/subscribe hub for :class:`ScoreChangeEvent`.

    Create one at startup, hand it to the producers and consumers that need
    it, and :meth:`close` it at shutdown. It can also be used as a context
    manager.

    A listener that raises is logged and skipped; the remaining listeners
    still receive the event.
    """

    def __init__(self) -> None:
        self._listeners: Dict[int, ScoreChangeListener] = {}
        self._tokens = itertools.count()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def listener_count(self) -> int:
        """Number of currently subscribed listeners."""
        with self._lock:
            return len(self._listeners)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: ScoreChangeListener) -> Unsubscribe:
        """Register a listener.

        Args:
            listener: Callable invoked with each emitted event

        Returns:
            A function that removes this subscription; calling it more than
            once is harmless

        Raises:
            NotifierClosedException: If the notifier has been closed
        """
        with self._lock:
            if self._closed:
                raise NotifierClosedException("Cannot subscribe to a closed notifier")
            token = next(self._tokens)
            self._listeners[token] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(token, None)

        return unsubscribe

    def emit(self, event: ScoreChangeEvent) -> int:
        """Deliver an event to every listener subscribed right now.

        Listeners added or removed during delivery take effect from the next
        event.

        Returns:
            Number of listeners that handled the event without raising
        """
        with self._lock:
            if self._closed:
                logger.debug(
                    f"Dropping {event.discipline} event for "
                    f"{event.competition_group_id}: notifier closed"
                )
                return 0
            listeners = list(self._listeners.values())

        delivered = 0
        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    f"Score change listener {listener!r} failed for "
                    f"{event.competition_group_id}/{event.discipline}"
                )
                continue
            delivered += 1

        logger.debug(
            f"Delivered {event.discipline} event for {event.competition_group_id} "
            f"to {delivered}/{len(listeners)} listeners"
        )
        return delivered

    def close(self) -> None:
        """Drop all listeners and refuse new ones."""
        with self._lock:
            self._closed = True
            self._listeners.clear()
        logger.info("Score change notifier closed")

    def __enter__(self) -> "ScoreChangeNotifier":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
