"""Thread-safe microphone mode switching."""

from collections.abc import Callable
from enum import Enum
from threading import Lock

import structlog


logger = structlog.get_logger()


class MicrophoneMode(str, Enum):
    """How the microphone stream is held open.

    - ALWAYS_ON: stream stays open between recordings
    - ON_DEMAND: stream opens per recording
    """

    ALWAYS_ON = "always_on"
    ON_DEMAND = "on_demand"


ModeTransition = Callable[[MicrophoneMode, MicrophoneMode], None]


class MicrophoneModeManager:
    """Holds the current microphone mode behind a single lock.

    ``update_mode`` reads, compares and writes the mode within one lock
    acquisition. The transition callback runs inside that acquisition, so it
    receives both modes as arguments and must not call back into the
    manager.
    """

    def __init__(
        self,
        initial_mode: MicrophoneMode = MicrophoneMode.ON_DEMAND,
        on_transition: ModeTransition | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            initial_mode: Mode before any update.
            on_transition: Called as ``(previous, new)`` when the mode changes,
                e.g. to open or close the audio stream.
        """
        self._mode = initial_mode
        self._on_transition = on_transition
        self._lock = Lock()
        self._log = logger.bind(component="audio", subcomponent="mode")

    @property
    def mode(self) -> MicrophoneMode:
        """Current microphone mode."""
        with self._lock:
            return self._mode

    def update_mode(self, new_mode: MicrophoneMode) -> bool:
        """Switch to ``new_mode`` if it differs from the current mode.

        Args:
            new_mode: Requested mode.

        Returns:
            True if the mode changed, False if it was already ``new_mode``.
        """
        with self._lock:
            previous = self._mode
            if previous == new_mode:
                return False

            if self._on_transition is not None:
                self._on_transition(previous, new_mode)
            self._mode = new_mode

        self._log.info(
            "microphone_mode_changed", previous=previous.value, mode=new_mode.value
        )
        return True
