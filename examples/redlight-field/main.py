"""Red Light Field - top-down red-light/green-light round.

Exercises RedLightRound with every collaborator wired to demo stand-ins.

Controls:
  WASD    Walk (only while GREEN, if you value your life)
  F1      Force start-line crossing
  F2      Force finish
  F3      Run the gate check now and log the debug state
  G / R   Force GREEN / RED
  K       Force death
  L       Dump and clear the movement log
  Esc     Quit
"""
from __future__ import annotations

import logging
import sys

import pygame

from redlight import RedLightRound, RoundConfig, RoundPhase

from game.adapters import CueLog, DollHead, FieldLight, FieldPlayer, HudText, Progression
from ui.constants import (
    BG_COLOR,
    CUE_LOG_LINES,
    DOLL_Z,
    FINISH_Z,
    FPS,
    SCREEN_H,
    SCREEN_W,
    START_Z,
    TPS,
    WALK_SPEED,
)
from ui.field import draw_field
from ui.hud import draw_sidebar, draw_status_bar

logger = logging.getLogger("redlight-field")


class GameState:
    """Holds the round and every collaborator it talks to."""

    def __init__(self) -> None:
        self.config = RoundConfig(tps=TPS, store_movement_log=True)
        self.progression = Progression()
        self.cues = CueLog(CUE_LOG_LINES)
        self.hud = HudText()
        self.light = FieldLight()
        self.doll = DollHead()
        self._new_player()
        self.round = RedLightRound(
            self,
            self.config,
            start_line=((0.0, 0.0, START_Z), (0.0, 0.0, 1.0)),
            finish_line=((0.0, 0.0, FINISH_Z), (0.0, 0.0, 1.0)),
            gunshot_origin=(0.0, 2.0, DOLL_Z),
            light=self.light,
            audio=self.cues,
            display=self.hud,
            progression=self.progression,
            body=self,
            doll_rig=self.doll,
            disable_on_death=[self],
        )

    def _new_player(self) -> None:
        self.player = FieldPlayer()

    # The round holds on to this object, so it forwards to the current player.
    def get_player_position(self):
        return self.player.get_player_position()

    def disable(self) -> None:
        self.player.disable()

    def apply_fall_impulse(self, direction, magnitude) -> None:
        self.player.apply_fall_impulse(direction, magnitude)

    def settle(self) -> None:
        """Act on a restart or next-round request made during the last tick."""
        pending = self.progression.pending
        if pending is None:
            return
        self.progression.pending = None
        if pending == "next":
            self.progression.round_number += 1
        logger.info("%s -> round %d", pending, self.progression.round_number)
        self._new_player()
        self.round.reset()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Red Light Field - redlight demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 13)
    big_font = pygame.font.SysFont("monospace", 24, bold=True)

    state = GameState()

    tick_interval = 1.0 / TPS
    accumulator = 0.0
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0
        accumulator += dt

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                rnd = state.round
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_F1:
                    rnd.force_start()
                elif event.key == pygame.K_F2:
                    rnd.force_finish()
                elif event.key == pygame.K_F3:
                    rnd.manual_check()
                    rnd.debug_state()
                elif event.key == pygame.K_g:
                    rnd.force_phase(RoundPhase.GREEN)
                elif event.key == pygame.K_r:
                    rnd.force_phase(RoundPhase.RED)
                elif event.key == pygame.K_k:
                    rnd.force_death()
                elif event.key == pygame.K_l:
                    for line in rnd.movement_log:
                        logger.info(line)
                    rnd.clear_movement_log()

        # --- Tick ---
        while accumulator >= tick_interval:
            keys = pygame.key.get_pressed()
            step = WALK_SPEED * tick_interval
            dx = (keys[pygame.K_d] - keys[pygame.K_a]) * step
            dz = (keys[pygame.K_w] - keys[pygame.K_s]) * step
            state.player.walk(dx, dz)
            state.round.step(tick_interval)
            state.settle()
            accumulator -= tick_interval

        state.cues.flash = max(0.0, state.cues.flash - dt * 3)

        # --- Render ---
        screen.fill(BG_COLOR)
        draw_field(
            screen,
            state.light.color,
            state.light.intensity,
            (state.player.x, state.player.z),
            state.player.fallen,
            state.doll.yaw,
            state.config.start_rect_depth,
            state.cues.flash,
        )
        draw_sidebar(
            screen,
            font,
            big_font,
            state.hud,
            state.cues.lines,
            state.progression.round_number,
            state.round.death_state.name,
        )
        draw_status_bar(screen, font)

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
