"""Signals emitted by the game engine.

Receivers are called as ``receiver(game, announcement=...)``. Connect with
``sender=game`` to follow one engine, or without a sender to hear every
engine, including the first session's ``GAME_STARTED`` of engines built
after connecting.
"""

from blinker import Namespace

_signals = Namespace()

# Sender: the MemoryGame; kwargs: announcement (Announcement)
announced = _signals.signal("announced")
