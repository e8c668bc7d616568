# sizzling_slots/main.py
import argparse
import logging
import os
import sys
import time

from sizzling_slots.infrastructure.config.loaders.yaml_loader import (
    YamlConfigLoader, ConfigError, DEFAULT_GAME_CONFIG, MACHINE_SCHEMA
)
from sizzling_slots.infrastructure.config.validators.schema_validator import SchemaValidator
from sizzling_slots.infrastructure.logging.log_manager import initialize_logging
from sizzling_slots.infrastructure.rng.rng_provider import RNGProvider
from sizzling_slots.infrastructure.concurrency.task_executor import TaskExecutor, ExecutionMode

from sizzling_slots.domain.ledger.ledger import InMemoryLedger, LedgerError
from sizzling_slots.domain.machine.errors import SlotEngineError
from sizzling_slots.domain.machine.factories.machine_factory import MachineFactory

from sizzling_slots.application.game.game_service import GameService, BetRejectedError
from sizzling_slots.application.analysis.rtp_simulator import RTPSimulator
from sizzling_slots.application.analysis.report_generator import ReportGenerator


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Sizzling Hot slot machine")

    parser.add_argument(
        "-c", "--config",
        default=str(DEFAULT_GAME_CONFIG),
        help="Path to game configuration file"
    )
    parser.add_argument(
        "-m", "--machine",
        default=None,
        help="Path to machine configuration file (overrides the game config)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random number generator"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    spin_parser = subparsers.add_parser("spin", help="Play spins against a demo balance")
    spin_parser.add_argument("--bet", type=float, default=None, help="Bet per spin")
    spin_parser.add_argument("-n", "--spins", type=int, default=1, help="Number of spins")
    spin_parser.add_argument("--user", default="player", help="Player id")

    sim_parser = subparsers.add_parser("simulate", help="Estimate return to player")
    sim_parser.add_argument("-n", "--spins", type=int, default=None, help="Total spins")
    sim_parser.add_argument("--bet", type=float, default=None, help="Bet per spin")
    sim_parser.add_argument("--batches", type=int, default=None, help="Number of batches")
    sim_parser.add_argument("--no-concurrency", action="store_true", help="Run batches sequentially")
    sim_parser.add_argument("--report", action="store_true", help="Write a JSON report")

    subparsers.add_parser("rules", help="Print the pay table")

    return parser.parse_args(argv)


def _resolve_machine_path(args, config) -> str:
    if args.machine:
        return args.machine
    machine_path = config.get("machine", "machines/sizzling_hot.yaml")
    if not os.path.isabs(machine_path):
        machine_path = os.path.join(os.path.dirname(os.path.abspath(args.config)), machine_path)
    return machine_path


def _bet_value(bet):
    # Whole-number bets print as 10, not 10.0
    return int(bet) if bet is not None and float(bet).is_integer() else bet


def run_spins(args, machine, currency, logger) -> int:
    ledger = InMemoryLedger(machine.default_balance)
    service = GameService(machine, ledger, currency)

    bet = _bet_value(args.bet)
    if bet is None:
        bet = machine.bet_options[0] if machine.bet_options else 1

    for _ in range(args.spins):
        try:
            outcome = service.play(args.user, bet)
        except (BetRejectedError, LedgerError) as e:
            print(str(e))
            return 1

        print(machine.render_grid(outcome.spin_result.grid))
        print(outcome.message)
        print(f"Balance: {outcome.balance} {currency}")
        print()

    stats = service.stats(args.user)
    logger.info(f"Session finished: {stats.total_spins} spins, profit {stats.profit}")
    print(f"Spins: {stats.total_spins}, won: {stats.total_won}, biggest win: {stats.biggest_win}, "
          f"RTP: {stats.return_to_player:.2%}")
    return 0


def run_simulation(args, config, machine_config, machine_factory, machine) -> int:
    sim_config = config.get("simulation", {})

    total_spins = args.spins or sim_config.get("spins", 100000)
    bet = _bet_value(args.bet) or sim_config.get("bet", 10)
    batches = args.batches or sim_config.get("batches", 1)
    use_concurrency = sim_config.get("use_concurrency", True) and not args.no_concurrency

    mode = ExecutionMode.MULTITHREAD if use_concurrency else ExecutionMode.SEQUENTIAL
    executor = TaskExecutor(mode, max_workers=sim_config.get("max_workers"))
    simulator = RTPSimulator(
        machine_factory, machine_config, executor,
        rng_strategy_name=config.get("rng", {}).get("strategy", "mersenne")
    )

    seed = args.seed if args.seed is not None else config.get("rng", {}).get("seed")
    summary = simulator.run(total_spins, bet, batches=batches, seed=seed)

    print(f"Spins:          {summary['spins']:,}")
    print(f"Total bet:      {summary['total_bet']:,.2f}")
    print(f"Total win:      {summary['total_win']:,.2f}")
    print(f"RTP:            {summary['rtp']:.4f} ({summary['rtp'] * 100:.2f}%)")
    print(f"Hit frequency:  {summary['hit_frequency']:.4f}")
    print(f"Std deviation:  {summary['std_dev']:.4f}")
    print(f"Max win:        {summary['max_win']:,.2f}")
    print(f"Seed:           {summary['seed']}")

    if args.report:
        report_generator = ReportGenerator(sim_config.get("report_dir", "reports"))
        path = report_generator.generate_rtp_report(summary, machine.get_info())
        print(f"Report written to {path}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    start_time = time.time()

    config_loader = YamlConfigLoader(SchemaValidator())

    try:
        config = config_loader.load_file(args.config)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    log_config = dict(config.get("logging", {}))
    if args.verbose:
        log_config["level"] = "DEBUG"
        log_config["console_level"] = "DEBUG"
    initialize_logging(log_config)
    logger = logging.getLogger("application.main")
    logger.info(f"Configuration file: {args.config}")

    rng_config = dict(config.get("rng", {}))
    if args.seed is not None:
        rng_config["seed"] = args.seed

    try:
        machine_path = _resolve_machine_path(args, config)
        machine_config = config_loader.load_file(machine_path, MACHINE_SCHEMA)

        rng_provider = RNGProvider()
        machine_factory = MachineFactory(rng_provider)
        machine = machine_factory.create_machine(
            machine_config.get("machine_id", "machine"),
            machine_config,
            rng_strategy=rng_provider.create_from_config(rng_config),
        )
    except (ConfigError, SlotEngineError) as e:
        logger.error(f"Failed to load machine: {e}")
        print(f"Failed to load machine: {e}", file=sys.stderr)
        return 1

    currency = config.get("currency", "coins")

    try:
        if args.command == "spin":
            exit_code = run_spins(args, machine, currency, logger)
        elif args.command == "simulate":
            exit_code = run_simulation(args, config, machine_config, machine_factory, machine)
        else:
            print(GameService(machine, InMemoryLedger(machine.default_balance), currency).rules_text())
            exit_code = 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1

    logger.info(f"Total runtime: {time.time() - start_time:.2f} seconds")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
