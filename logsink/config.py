"""Configuration module: frozen dataclass from YAML, env vars and CLI args."""

import argparse
import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    policy: str = "size:10485760:5:./logs/application.log"  # 10 MB, 5 backups
    log_level: str = "INFO"
    encoding: str = "utf-8"
    tee: bool = False
    list_backups: bool = False


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns an empty dict if no path or no file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
        return data
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Append stdin to a log file that rotates by size or time"
    )
    parser.add_argument("--policy", type=str, default=None,
                        help="Rotation descriptor, e.g. size:1048576:5:/var/log/app.log")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--log-level", type=str, default=None)
    parser.add_argument("--encoding", type=str, default=None)
    parser.add_argument("--tee", action="store_true", default=False,
                        help="Echo every line to stdout as well")
    parser.add_argument("--list", action="store_true", default=False,
                        help="List existing backups and exit")
    return parser


def load_config(argv=None) -> Config:
    """Build Config from defaults <- YAML <- env vars <- CLI args (highest priority).

    Pass argv for testability; when None, argparse reads sys.argv.
    """
    args = build_parser().parse_args(argv)
    file_cfg = load_yaml_config(args.config or os.environ.get("CONFIG_PATH"))

    policy = os.environ.get("LOG_SINK_POLICY", file_cfg.get("policy", Config.policy))
    log_level = os.environ.get("LOG_LEVEL", file_cfg.get("log_level", Config.log_level))
    encoding = os.environ.get("LOG_SINK_ENCODING", file_cfg.get("encoding", Config.encoding))
    tee = _parse_bool(os.environ.get("TEE", file_cfg.get("tee", Config.tee)))

    return Config(
        policy=args.policy if args.policy is not None else policy,
        log_level=(args.log_level if args.log_level is not None else log_level).upper(),
        encoding=args.encoding if args.encoding is not None else encoding,
        tee=True if args.tee else tee,
        list_backups=args.list,
    )
