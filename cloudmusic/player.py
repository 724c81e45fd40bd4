"""The play queue: current song, play mode and play state."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum

from cloudmusic.music import Music


class PlayMode(Enum):
    """How the queue advances; the value is the label shown for the mode."""

    LOOP = "顺序播放"
    RANDOM = "随机播放"
    CURRENT_ITEM_IN_LOOP = "单曲循环"

    @property
    def label(self) -> str:
        """Return the text shown for the mode."""
        return self.value

    def next_mode(self) -> "PlayMode":
        """Return the mode the play-mode button switches to."""
        order = [PlayMode.LOOP, PlayMode.RANDOM, PlayMode.CURRENT_ITEM_IN_LOOP]
        return order[(order.index(self) + 1) % len(order)]


class PlayState(Enum):
    """Whether the player is stopped, playing or paused."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class Playlist:
    """The songs queued for playing and which one is current."""

    items: list[Music] = field(default_factory=list)
    index: int = -1
    mode: PlayMode = PlayMode.LOOP
    state: PlayState = PlayState.STOPPED
    position: int = 0
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def _go(self, index: int) -> None:
        self.index = index
        self.position = 0

    def add(self, music: Music) -> None:
        """Append a song to the queue."""
        self.items.append(music)

    def replace(self, musics, index: int) -> Music:
        """Queue ``musics`` in place of the current songs and play the one at ``index``."""
        items = list(musics)
        if not 0 <= index < len(items):
            raise IndexError(f"no song at position {index}")
        self.items = items
        self._go(index)
        self.state = PlayState.PLAYING
        return self.items[index]

    def remove(self, pos: int) -> None:
        """Remove the song at ``pos``, keeping the current song playing where possible."""
        if not 0 <= pos < len(self.items):
            raise IndexError(f"no song at position {pos}")
        del self.items[pos]
        if pos < self.index:
            self.index -= 1
        elif pos == self.index:
            if self.index >= len(self.items):
                self._go(-1)
                self.state = PlayState.STOPPED
            else:
                self._go(self.index)

    def clear(self) -> None:
        """Empty the queue and stop."""
        self.items.clear()
        self._go(-1)
        self.state = PlayState.STOPPED

    def _step(self, offset: int) -> Music | None:
        if not self.items:
            return None
        count = len(self.items)
        if self.mode is PlayMode.RANDOM:
            self._go(self.rng.randrange(count))
        elif self.mode is PlayMode.CURRENT_ITEM_IN_LOOP and self.index >= 0:
            self._go(self.index)
        elif self.index < 0:
            self._go(0 if offset > 0 else count - 1)
        else:
            self._go((self.index + offset) % count)
        return self.current()

    def next(self) -> Music | None:
        """Move to the next song as the mode decides and return it."""
        return self._step(1)

    def previous(self) -> Music | None:
        """Move to the previous song as the mode decides and return it."""
        return self._step(-1)

    def toggle(self) -> PlayState:
        """Play or pause; a stopped, non-empty queue starts from its first song."""
        if self.state is PlayState.PLAYING:
            self.state = PlayState.PAUSED
        elif self.state is PlayState.PAUSED:
            self.state = PlayState.PLAYING
        elif self.items:
            self._go(0)
            self.state = PlayState.PLAYING
        return self.state

    def cycle_mode(self) -> PlayMode:
        """Switch to the next play mode and return it."""
        self.mode = self.mode.next_mode()
        return self.mode

    def current(self) -> Music | None:
        """Return the current song, or None when there is none."""
        if 0 <= self.index < len(self.items):
            return self.items[self.index]
        return None