"""Entry point for the Triple Tiles prototype.

Wraps a GameSession in an Arcade window: draws snapshots, forwards taps and
key intents, and plays the engine's sound cues.
"""
import logging

import arcade
from arcade import Window, run, set_background_color, color

from tripletiles.components.game_state import GamePhase
from tripletiles.constants import HUD_HEIGHT, SOUND_POP, WINDOW_HEIGHT, WINDOW_WIDTH
from tripletiles.events.bus import EVENT_SOUND_PLAY
from tripletiles.rendering.board_renderer import BoardRenderer
from tripletiles.session import GameSession
from tripletiles.ui.layout import cell_at_point, compute_board_geometry

SOUND_FILES = {
    SOUND_POP: ":resources:sounds/coin1.wav",
}


class TripleTilesWindow(Window):
    def __init__(self, session: GameSession | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, "Triple Tiles")
        self.set_update_rate(1/60)
        self.session = session or GameSession()
        self.board_renderer = BoardRenderer()
        self._sounds: dict[str, arcade.Sound] = {}
        self.session.event_bus.subscribe(EVENT_SOUND_PLAY, self.on_sound_play)
        set_background_color(color.LIGHT_GRAY)

    def _geometry(self, snapshot):
        return compute_board_geometry(self.width, snapshot.grid_size, snapshot.tile_size)

    def on_draw(self):
        self.clear()
        snapshot = self.session.snapshot()
        self.board_renderer.render(arcade, snapshot, self._geometry(snapshot))
        self._draw_hud(snapshot)

    def _draw_hud(self, snapshot):
        top = self.height - 30
        center = self.width / 2
        max_level = snapshot.max_level if snapshot.max_level is not None else "∞"
        level_line = f"LEVEL {snapshot.level}/{max_level}"
        if snapshot.points_remaining is not None:
            level_line += f"  ({snapshot.points_remaining} to next level)"
        arcade.draw_text(level_line, center, top, color.DARK_GREEN, 16, anchor_x="center")
        arcade.draw_text(
            f"Score: {snapshot.score}/{snapshot.target_score}   Combo: {snapshot.combo}x   Time: {snapshot.time_left}s",
            center, top - 32, color.BLACK, 14, anchor_x="center",
        )
        hint = "[R] restart   [M] " + ("unmute" if snapshot.muted else "mute")
        arcade.draw_text(hint, center, top - 60, color.DIM_GRAY, 11, anchor_x="center")
        banner = None
        if snapshot.phase == GamePhase.LEVEL_UP and snapshot.cleared_level is not None:
            banner = (f"LEVEL {snapshot.cleared_level} CLEAR!", color.GREEN)
        elif snapshot.phase == GamePhase.GAME_OVER:
            banner = (f"Time's Up!  Final Score: {snapshot.score}", color.RED)
        elif snapshot.phase == GamePhase.COMPLETED:
            banner = (f"You Win!  Final Score: {snapshot.score}", color.GREEN)
        if banner is not None:
            text, banner_color = banner
            arcade.draw_text(text, center, self.height - HUD_HEIGHT + 10, banner_color, 22, anchor_x="center", bold=True)

    def on_update(self, delta_time: float):
        self.session.tick(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        cell = cell_at_point(self._geometry(self.session.snapshot()), x, y)
        if cell is not None:
            self.session.tap_tile(*cell)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.M:
            self.session.toggle_mute()
        elif symbol == arcade.key.R:
            self.session.restart()

    def on_sound_play(self, sender, **kwargs):
        cue = kwargs.get('cue')
        path = SOUND_FILES.get(cue)
        if path is None:
            return
        sound = self._sounds.get(cue)
        if sound is None:
            sound = arcade.load_sound(path)
            self._sounds[cue] = sound
        arcade.play_sound(sound, volume=0.15)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    TripleTilesWindow()
    run()


if __name__ == "__main__":
    main()
