# reel_engine/main.py
import os
import sys
import logging
import argparse

from reel_engine.application.game.credit_ledger import CreditLedger
from reel_engine.application.game.slot_game import SlotGame
from reel_engine.application.presentation.reel_view import ReelView
from reel_engine.application.presentation.win_presenter import LoggingWinPresenter, format_win_banner
from reel_engine.domain.events.event_dispatcher import EventDispatcher
from reel_engine.domain.events.machine_events import MachineEventType
from reel_engine.domain.machine.errors import ReelEngineError
from reel_engine.domain.machine.factories.machine_factory import MachineFactory
from reel_engine.infrastructure.animation.animator import Animator
from reel_engine.infrastructure.animation.clock import ManualClock
from reel_engine.infrastructure.config.loaders.yaml_loader import YamlConfigLoader, ConfigError
from reel_engine.infrastructure.config.validators.schema_validator import SchemaValidator
from reel_engine.infrastructure.logging.log_manager import initialize_logging
from reel_engine.infrastructure.rng.rng_provider import RNGProvider

DEFAULT_GAME_CONFIG = os.path.join(os.path.dirname(__file__), "application", "config", "games", "default_game.yaml")

# Upper bound on frames per spin for the headless loop
MAX_FRAMES_PER_SPIN = 100_000


def parse_outcome(text):
    try:
        return [int(part) for part in text.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid outcome: {text!r}") from None


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Headless reel engine demo")

    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_GAME_CONFIG,
        help="Path to game configuration file"
    )
    parser.add_argument(
        "-n", "--spins",
        type=int,
        default=1,
        help="Number of spins to run"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="RNG seed (overrides the config)"
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(RNGProvider.get_available_strategies()),
        default=None,
        help="RNG strategy (overrides the config)"
    )

    outcome_group = parser.add_mutually_exclusive_group()
    outcome_group.add_argument(
        "--outcome",
        type=parse_outcome,
        default=None,
        help="Comma separated target stop per reel, e.g. 19,10,0,0,0"
    )
    outcome_group.add_argument(
        "--scripted",
        default=None,
        help="Name of a scripted outcome from the machine config"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def run_until_settled(game: SlotGame, clock: ManualClock, frame_ms: float) -> int:
    """
    Advance the clock frame by frame until the reels settle.

    Returns:
        Number of frames run
    """
    frames = 0
    while game.spinning:
        if frames >= MAX_FRAMES_PER_SPIN:
            raise RuntimeError(f"Reels did not settle after {frames} frames")
        clock.advance(frame_ms)
        game.update()
        frames += 1
    return frames


def main(argv=None):
    """Main entry point for the reel engine demo."""
    args = parse_arguments(argv)

    config_loader = YamlConfigLoader(SchemaValidator())

    try:
        config = config_loader.load_file(args.config)
    except ConfigError as e:
        print(f"Error loading configuration: {str(e)}")
        return 1

    log_config = dict(config.get("logging") or {})
    if args.verbose:
        log_config["level"] = "DEBUG"
        log_config["console_level"] = "DEBUG"
    initialize_logging(log_config)
    logger = logging.getLogger("main")

    rng_config = dict(config.get("rng") or {})
    if args.seed is not None:
        rng_config["seed"] = args.seed
    if args.strategy:
        rng_config["strategy"] = args.strategy

    machine_path = config.get("machine", "../machines/default_machine.yaml")
    if not os.path.isabs(machine_path):
        machine_path = os.path.join(os.path.dirname(os.path.abspath(args.config)), machine_path)

    dispatcher = EventDispatcher()
    dispatcher.register(
        MachineEventType.REEL_STOPPED,
        lambda event: logger.debug(f"Reel {event.data['reel_index']} stopped on {event.data['stop']}")
    )

    factory = MachineFactory(RNGProvider(), dispatcher)
    clock = ManualClock()

    try:
        definition = factory.load_definition_from_file(config_loader, machine_path)
        engine = factory.create_engine(
            definition, Animator(clock),
            rng_strategy_name=rng_config.get("strategy", "mersenne"),
            rng_seed=rng_config.get("seed"),
        )
    except (ConfigError, ReelEngineError) as e:
        logger.error(f"Could not build machine: {e}")
        return 1

    ledger_config = config.get("ledger") or {}
    game = SlotGame(
        engine,
        CreditLedger(ledger_config.get("starting_balance", 1000)),
        LoggingWinPresenter(),
        bet=ledger_config.get("bet", 10),
        reel_view=ReelView(definition.reels, definition.symbol_size, definition.visible_rows),
        scripted_outcomes=definition.scripted_outcomes,
    )
    frame_ms = config.get("frame_ms", 16)

    outcome = args.outcome

    print(f"Machine {definition.machine_id}: {definition.num_reels} reels, "
          f"{len(definition.paylines)} paylines, balance {game.ledger.balance}")

    for _ in range(args.spins):
        try:
            if args.scripted:
                started = game.spin_scripted(args.scripted)
            else:
                started = game.spin(outcome)
        except (KeyError, ValueError) as e:
            logger.error(f"Spin failed: {e}")
            return 1

        if not started:
            print("Spin not started (balance too low)")
            break

        frames = run_until_settled(game, clock, frame_ms)
        result = engine.last_result

        print(f"\nSpin {engine.spin_count} stops={engine.state.current_stops} ({frames} frames)")
        print(engine.grid)
        if result.is_win:
            print(format_win_banner(result))
        print(f"Balance: {game.ledger.balance}  Winnings: {game.ledger.winnings}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
