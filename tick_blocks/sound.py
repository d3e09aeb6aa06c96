"""Sound cue service: plays sounds in response to bus signals."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from tick_blocks.bus import SignalBus

logger = logging.getLogger(__name__)


class SoundBoard:
    """Maps signals to sound ids and hands them to an injected player.

    The board does no audio work itself. ``player`` receives a loaded sound
    handle, and ``loader`` turns a file path into one (for pygame,
    ``pygame.mixer.Sound``). ``can_play`` filters candidate paths by MIME type
    so the first supported format wins.

    Subscriptions exist only between :meth:`init` and :meth:`dispose`.
    """

    def __init__(
        self,
        bus: SignalBus,
        player: Callable[[Any], None],
        loader: Callable[[str], Any],
        can_play: Callable[[str], bool] = lambda mime: True,
    ) -> None:
        self._bus = bus
        self._player = player
        self._loader = loader
        self._can_play = can_play
        self._sounds: dict[str, Any] = {}
        self._cues: dict[str, str] = {}
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def add_sound(self, sound_id: str, paths: Mapping[str, str]) -> bool:
        """Register the first playable path in ``paths`` ({mime: path}).

        Returns False when no format is supported; the id stays silent.
        """
        for mime, path in paths.items():
            if self._can_play(mime):
                self._sounds[sound_id] = self._loader(path)
                return True
        logger.info("no playable format for sound %r", sound_id)
        return False

    def cue(self, signal_name: str, sound_id: str) -> None:
        """Play ``sound_id`` whenever ``signal_name`` is published."""
        if self._active and signal_name in self._cues:
            self._bus.unsubscribe(signal_name, self._on_signal)
        self._cues[signal_name] = sound_id
        if self._active:
            self._bus.subscribe(signal_name, self._on_signal)

    def play(self, sound_id: str) -> None:
        sound = self._sounds.get(sound_id)
        if sound is None:
            return
        self._player(sound)

    def init(self) -> None:
        if self._active:
            return
        self._active = True
        for signal_name in self._cues:
            self._bus.subscribe(signal_name, self._on_signal)

    def dispose(self) -> None:
        if not self._active:
            return
        self._active = False
        for signal_name in self._cues:
            self._bus.unsubscribe(signal_name, self._on_signal)

    def _on_signal(self, signal_name: str, data: dict[str, Any]) -> None:
        self.play(self._cues[signal_name])
