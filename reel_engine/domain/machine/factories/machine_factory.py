# reel_engine/domain/machine/factories/machine_factory.py
import logging
import os
from typing import Dict, Any, List, Optional

from reel_engine.domain.events.event_dispatcher import EventDispatcher
from reel_engine.infrastructure.animation.animator import Animator

from ..entities.machine_definition import MachineDefinition
from ..entities.payline import Payline, DEFAULT_PAYLINES
from ..entities.reel import Reel
from ..entities.symbol_catalog import SymbolCatalog
from ..errors import MachineConfigError
from ..services.spin_engine import SpinEngine, SpinSettings
from ..services.win_evaluation import PaylineEvaluator

MACHINE_SCHEMA_PATH = os.path.join(
    os.path.dirname(__file__), "..", "..", "..", "infrastructure", "config", "schemas", "machine_schema.json"
)


class MachineFactory:
    """
    Factory for building machine definitions and spin engines from configuration.
    """
    def __init__(self, rng_provider=None, event_dispatcher: Optional[EventDispatcher] = None):
        """
        Initialize the machine factory.

        Args:
            rng_provider: Optional RNG provider for random outcomes
            event_dispatcher: Optional dispatcher handed to every engine
        """
        self.logger = logging.getLogger("domain.machine.factory")
        self.rng_provider = rng_provider
        self.event_dispatcher = event_dispatcher

    def load_definition(self, config: Dict[str, Any], machine_id: Optional[str] = None) -> MachineDefinition:
        """
        Turn a machine configuration into a validated definition.

        Args:
            config: Machine configuration dictionary
            machine_id: Optional explicit id (overrides ``machine_id`` in config)

        Returns:
            MachineDefinition

        Raises:
            MachineConfigError: If the configuration is inconsistent
        """
        machine_id = machine_id or config.get("machine_id", "machine")
        errors: List[str] = []

        visible_rows = config.get("visible_rows", 3)

        reels_config = config.get("reels", [])
        if not reels_config:
            raise MachineConfigError(machine_id, "No reels configured")
        try:
            reels = tuple(Reel(symbols, f"{machine_id}_reel{i}") for i, symbols in enumerate(reels_config))
        except ValueError as e:
            raise MachineConfigError(machine_id, str(e)) from e

        for reel in reels:
            self.logger.debug(f"Loaded reel {reel.id} with {len(reel)} symbols")

        try:
            catalog = SymbolCatalog.from_config(config.get("symbols"), config.get("pay_table", []))
        except (KeyError, TypeError, ValueError) as e:
            raise MachineConfigError(machine_id, f"Invalid pay table: {e}") from e

        missing = catalog.missing_payouts(reel.symbols for reel in reels)
        if missing:
            errors.append(f"Symbols without pay table entry: {missing}")

        paylines = self._load_paylines(config.get("paylines"), len(reels), visible_rows, errors)

        strip_lengths = [len(reel) for reel in reels]
        scripted = {}
        for name, stops in (config.get("scripted_outcomes") or {}).items():
            problem = self._check_stops(stops, strip_lengths)
            if problem:
                errors.append(f"Scripted outcome {name!r}: {problem}")
            else:
                scripted[name] = list(stops)

        initial_stops = config.get("initial_stops")
        if initial_stops is not None:
            problem = self._check_stops(initial_stops, strip_lengths)
            if problem:
                errors.append(f"initial_stops: {problem}")

        spin_settings = dict(config.get("spin") or {})
        try:
            SpinSettings(**spin_settings)
        except (TypeError, ValueError) as e:
            errors.append(f"Invalid spin settings: {e}")

        if errors:
            error = MachineConfigError(machine_id, errors)
            self.logger.error(error.message)
            raise error

        self.logger.info(f"Loaded machine {machine_id}: {len(reels)} reels, {len(paylines)} paylines")
        return MachineDefinition(
            machine_id=machine_id,
            reels=reels,
            catalog=catalog,
            paylines=paylines,
            visible_rows=visible_rows,
            symbol_size=config.get("symbol_size", 150),
            spin_settings=spin_settings,
            scripted_outcomes=scripted,
            initial_stops=list(initial_stops) if initial_stops is not None else None,
        )

    def _load_paylines(self, paylines_config, num_reels: int, visible_rows: int, errors: List[str]):
        if not paylines_config:
            if (visible_rows, num_reels) != (3, 5):
                errors.append(f"No paylines configured and no defaults for a {visible_rows}x{num_reels} layout")
                return ()
            self.logger.warning("No paylines configured, using the seven default 3x5 lines")
            return DEFAULT_PAYLINES

        paylines = []
        seen_ids = set()
        for i, entry in enumerate(paylines_config):
            try:
                payline = Payline.from_config(i, entry)
            except (KeyError, TypeError, ValueError) as e:
                errors.append(f"Invalid payline entry at index {i}: {e}")
                continue

            if payline.id in seen_ids:
                errors.append(f"Duplicate payline id {payline.id}")
            seen_ids.add(payline.id)

            outside = [(r, c) for r, c in payline.coordinates if not (0 <= r < visible_rows and 0 <= c < num_reels)]
            if outside:
                errors.append(f"Payline {payline.id} leaves the {visible_rows}x{num_reels} grid at {outside}")
            if len(payline) != num_reels:
                self.logger.warning(f"Payline {payline.id} has {len(payline)} coordinates for {num_reels} reels")

            paylines.append(payline)
        return tuple(paylines)

    @staticmethod
    def _check_stops(stops, strip_lengths) -> Optional[str]:
        if len(stops) != len(strip_lengths):
            return f"expected {len(strip_lengths)} stops, got {len(stops)}"
        for i, (stop, length) in enumerate(zip(stops, strip_lengths)):
            if not 0 <= stop < length:
                return f"stop {stop} out of range for reel {i} with length {length}"
        return None

    def create_engine(self, definition: MachineDefinition, animator: Animator,
                      rng_strategy_name: str = "mersenne", rng_seed: Optional[int] = None) -> SpinEngine:
        """
        Build a spin engine for a machine definition.

        Args:
            definition: Validated machine definition
            animator: Animation collaborator for the reels
            rng_strategy_name: Name of RNG strategy used for random outcomes
            rng_seed: Optional RNG seed

        Returns:
            Initialized SpinEngine
        """
        self.logger.info(f"Creating spin engine: {definition.machine_id}")

        rng_strategy = None
        if self.rng_provider:
            rng_strategy = self.rng_provider.get_rng(rng_strategy_name, rng_seed)
            self.logger.debug(f"Using RNG strategy: {rng_strategy_name}, seed: {rng_seed}")
        else:
            self.logger.warning("No RNG provider available, engine only accepts explicit outcomes")

        evaluator = PaylineEvaluator(definition.catalog.payout_table, definition.paylines)
        return SpinEngine(
            reels=definition.reels,
            evaluator=evaluator,
            animator=animator,
            visible_rows=definition.visible_rows,
            settings=SpinSettings(**definition.spin_settings),
            rng_strategy=rng_strategy,
            event_dispatcher=self.event_dispatcher,
            machine_id=definition.machine_id,
            initial_stops=definition.initial_stops,
        )

    def load_definition_from_file(self, config_loader, file_path: str,
                                  machine_id: Optional[str] = None) -> MachineDefinition:
        """
        Load and validate a machine definition from a YAML file.

        Args:
            config_loader: Configuration loader instance
            file_path: Path to configuration file
            machine_id: Optional explicit machine id

        Returns:
            MachineDefinition
        """
        self.logger.info(f"Loading machine from file: {file_path}")

        config = config_loader.load_file(file_path, os.path.normpath(MACHINE_SCHEMA_PATH))

        if machine_id is None:
            machine_id = config.get("machine_id") or os.path.splitext(os.path.basename(file_path))[0]

        return self.load_definition(config, machine_id)
