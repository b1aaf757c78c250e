"""
Command-line interface for the capture restarter.

Outside the host the engine can be exercised against the simulated host,
and configuration files can be created and checked:

    capture-restarter simulate --sources screen_capture:4,image_source:2 --frozen 2
    capture-restarter check-config --config conf/config.toml
    capture-restarter init-config conf/config.toml
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..classification import build_source_types, get_source_type
from ..config import config_to_dict, get_config, set_config_path, write_default_config
from ..host.simulated import SimulatedHost
from ..lifecycle import CaptureRestarter
from ..models.config import (
    SETTING_CHECK_INTERVAL,
    SETTING_SOURCES_PER_CHECK,
    SETTING_USE_COOPERATIVE,
    RestarterConfig,
)
from ..validation import ValidationError, handle_cli_error, validate_positive_integer

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )


def parse_source_spec(spec: str) -> List[Tuple[str, int]]:
    """
    Parse ``type:count`` pairs separated by commas.

    Raises:
        ValidationError: If a pair is malformed
    """
    pairs = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        type_id, sep, count = part.partition(":")
        if not type_id:
            raise ValidationError(f"Invalid source spec '{part}'", field_name="--sources", value=spec)
        pairs.append((type_id, validate_positive_integer(count if sep else 1, field_name=f"--sources {type_id}")))
    return pairs


def build_simulated_host(
    pairs: List[Tuple[str, int]],
    frozen: int,
    config: RestarterConfig,
) -> SimulatedHost:
    """
    Create a host with the requested sources.

    The first ``frozen`` monitored sources expose an enabled reactivation
    control; the rest expose it disabled, as a healthy capture does.
    """
    host = SimulatedHost()
    source_types = build_source_types(config.extra_source_types)
    frozen_left = frozen
    for type_id, count in pairs:
        type_spec = get_source_type(type_id, source_types)
        for i in range(count):
            controls: Dict[str, bool] = {}
            if type_spec is not None:
                controls[type_spec.reactivation_property] = frozen_left > 0
                frozen_left -= 1
            host.add_source(f"{type_id} {i + 1}", type_id, controls)
    return host


def run_simulation(args: argparse.Namespace, base_config: RestarterConfig) -> int:
    pairs = parse_source_spec(args.sources)
    host = build_simulated_host(pairs, args.frozen, base_config)

    settings = {
        SETTING_CHECK_INTERVAL: args.interval if args.interval is not None else base_config.check_interval_ms,
        SETTING_SOURCES_PER_CHECK: args.per_check if args.per_check is not None else base_config.sources_per_check,
        SETTING_USE_COOPERATIVE: (args.mode == "cooperative") if args.mode else base_config.use_cooperative_mode,
    }

    restarter = CaptureRestarter(host, base_config=base_config, clock=host.clock)
    restarter.on_load(settings)

    half = args.duration_ms / 2
    host.advance(half)
    for _ in range(min(args.remove, len(host.sources))):
        victim = host.sources[0]
        logger.info(f"Removing source '{victim.name}' to simulate a stale handle")
        host.remove_source(victim.name)
    host.advance(args.duration_ms - half)

    stats = restarter.context.stats.as_dict()
    restarter.on_unload()

    logger.info("--- Simulation summary ---")
    for key, value in stats.items():
        logger.info(f"{key}: {value}")
    restarted = sorted({name for name, _ in host.triggers})
    logger.info(f"Sources restarted: {', '.join(restarted) if restarted else 'none'}")

    if host.outstanding_handles or host.open_properties:
        logger.error(
            f"Leaked {len(host.outstanding_handles)} handles and "
            f"{len(host.open_properties)} property sets"
        )
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="capture-restarter",
        description="Restart frozen capture sources with minimal per-tick cost.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml")
    parser.add_argument("--log-level", type=str, help="Override [logging] level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Run the engine against a simulated host.")
    simulate.add_argument(
        "--sources",
        default="screen_capture:4,sck_audio_capture:1,image_source:2",
        help="Comma-separated type:count pairs.",
    )
    simulate.add_argument("--frozen", type=int, default=1, help="Monitored sources needing a restart.")
    simulate.add_argument("--remove", type=int, default=0, help="Sources removed halfway through.")
    simulate.add_argument("--duration-ms", type=int, default=30000, help="Simulated run time.")
    simulate.add_argument("--interval", type=int, help="Timer period in ms.")
    simulate.add_argument("--per-check", type=int, help="Sources checked per tick.")
    simulate.add_argument("--mode", choices=["incremental", "cooperative"], help="Scheduling mode.")

    subparsers.add_parser("check-config", help="Validate a configuration file.")

    init_config = subparsers.add_parser("init-config", help="Write a default configuration file.")
    init_config.add_argument("path", type=Path)
    init_config.add_argument("--force", action="store_true", help="Overwrite an existing file.")
    return parser


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line entry point.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or "INFO")

    if args.command == "init-config":
        try:
            write_default_config(args.path, overwrite=args.force)
        except FileExistsError as e:
            handle_cli_error(error=e, context="writing default configuration", exit_code=1, logger=logger)
        return 0

    base_config = RestarterConfig()
    if args.config is not None or args.command == "check-config":
        if args.config is not None:
            set_config_path(args.config)
        try:
            base_config = get_config()
        except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
            handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)
        if not args.log_level:
            setup_logging(base_config.log_level)

    if args.command == "check-config":
        for section, values in config_to_dict(base_config).items():
            logger.info(f"[{section}] {values}")
        return 0

    try:
        return run_simulation(args, base_config)
    except ValidationError as e:
        handle_cli_error(error=e, context="simulation arguments", exit_code=2, logger=logger)
    return 1


if __name__ == "__main__":
    sys.exit(main_cli())
