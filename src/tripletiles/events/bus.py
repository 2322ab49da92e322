from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def has_subscribers(self, name: str) -> bool:
        sig = self._signals.get(name)
        return bool(sig and sig.receivers)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                      # payload: dt=float (seconds)
EVENT_POST_TICK = "post_tick"            # payload: dt=float; emitted after every tick receiver ran
EVENT_TIMER_EXPIRED = "timer_expired"    # payload: kind=str, group=str, **timer payload


# ============================================================================
# EXTERNAL INTENTS
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                        # payload: row, col
EVENT_MUTE_TOGGLE_REQUEST = "mute_toggle_request"      # payload: None
EVENT_RESTART_REQUEST = "restart_request"              # payload: None


# ============================================================================
# SELECTION
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"            # payload: row, col, count=int
EVENT_TILE_DESELECTED = "tile_deselected"        # payload: row, col, reason=str
EVENT_SELECTION_CLEARED = "selection_cleared"    # payload: positions=[(r,c),...], reason=str
EVENT_SELECTION_COMPLETE = "selection_complete"  # payload: positions=[(r,c),(r,c),(r,c)]


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"            # payload: positions=[(r,c),...], color=TileColor
EVENT_MATCH_REJECTED = "match_rejected"      # payload: positions=[(r,c),...]
EVENT_TILES_REMOVING = "tiles_removing"      # payload: positions=[(r,c),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"    # payload: moves=[{'from':(r,c),'to':(r,c),'color':TileColor}], columns=[int]
EVENT_REFILL_COMPLETED = "refill_completed"  # payload: new_tiles=[(r,c),...]
EVENT_BOARD_SETTLED = "board_settled"        # payload: reason=str
EVENT_MATCH_RESOLVED = "match_resolved"      # payload: positions=[(r,c),...], points=int
EVENT_RESOLVE_ABORTED = "resolve_aborted"    # payload: positions=[(r,c),...], reason=str
EVENT_BOARD_RESET = "board_reset"            # payload: level=int, size=int


# ============================================================================
# SCORE, LEVELS & FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int, delta=int, level=int, reason=str
EVENT_PHASE_CHANGED = "phase_changed"          # payload: previous_phase=GamePhase|None, new_phase=GamePhase
EVENT_LEVEL_UP_STARTED = "level_up_started"    # payload: cleared_level=int, score=int
EVENT_LEVEL_STARTED = "level_started"          # payload: level=int, grid_size=int
EVENT_GAME_COMPLETED = "game_completed"        # payload: level=int, score=int
EVENT_GAME_RESET = "game_reset"                # payload: previous_phase=GamePhase, level=int


# ============================================================================
# CLOCK
# ============================================================================
EVENT_CLOCK_TICK = "clock_tick"    # payload: time_left=int
EVENT_TIME_UP = "time_up"          # payload: level=int, score=int


# ============================================================================
# AUDIO
# ============================================================================
EVENT_SOUND_REQUEST = "sound_request"  # payload: cue=str, repeat=int
EVENT_SOUND_PLAY = "sound_play"        # payload: cue=str
EVENT_MUTE_CHANGED = "mute_changed"    # payload: muted=bool


# ============================================================================
# RENDERING COLLABORATOR
# ============================================================================
EVENT_STATE_CHANGED = "state_changed"  # payload: snapshot=SessionSnapshot, cause=str
