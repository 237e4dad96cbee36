"""Scripted round -- two bots walk the same course, no window needed.

Demonstrates:
- Building a RedLightRound from a position source and a progression hook
- Stepping the round on a fixed dt
- A careful bot that freezes on RED and reaches the finish
- A greedy bot that keeps walking on RED and gets shot

Run: python -m examples.scripted_round
"""

from redlight import DeathState, RedLightRound, RoundConfig, RoundPhase

START_LINE = ((0.0, 0.0, 0.0), (0.0, 0.0, 1.0))
FINISH_LINE = ((0.0, 0.0, 12.0), (0.0, 0.0, 1.0))
DT = 1.0 / 30


class Bot:
    def __init__(self, name: str, obeys_red: bool) -> None:
        self.name = name
        self.obeys_red = obeys_red
        self.z = -2.0
        self.outcome = None

    # Position source
    def get_player_position(self):
        return (0.0, 1.6, self.z)

    # Progression
    def load_next_round(self) -> None:
        self.outcome = "finished"

    def restart_round(self) -> None:
        self.outcome = "eliminated"


def play(bot: Bot) -> None:
    config = RoundConfig(start_delay=0.5, green_duration=2.0, red_duration=1.5, tps=30)
    rnd = RedLightRound(
        bot,
        config,
        start_line=START_LINE,
        finish_line=FINISH_LINE,
        gunshot_origin=(0.0, 2.0, 14.0),
        progression=bot,
    )

    print(f"=== {bot.name} ===")
    last_phase = None
    green_since = 0.0
    while bot.outcome is None and rnd.engine.clock.elapsed < 30.0:
        now = rnd.timeline.now
        if bot.obeys_red:
            # Motion is smoothed over a few frames, so stop well before RED.
            walking = (
                rnd.phase is RoundPhase.GREEN
                and now - green_since < config.green_duration - 0.5
            )
        else:
            walking = rnd.phase is not None
        if walking and rnd.death_state is DeathState.ALIVE:
            bot.z += 3.0 * DT
        rnd.step(DT)
        if rnd.phase is not last_phase:
            last_phase = rnd.phase
            if last_phase is RoundPhase.GREEN:
                green_since = rnd.timeline.now
            print(f"  t={rnd.engine.clock.elapsed:5.2f}  phase={last_phase.name}  z={bot.z:5.2f}")

    print(f"  -> {bot.outcome} at t={rnd.engine.clock.elapsed:.2f}\n")


def main() -> None:
    play(Bot("careful", obeys_red=True))
    play(Bot("greedy", obeys_red=False))


if __name__ == "__main__":
    main()
