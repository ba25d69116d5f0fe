"""Command-line entry point for patch-facts.

The run has five steps, each feeding the next:

1. Identify the distribution and its major release.
2. Resolve whether that release is end-of-life.
3. Count outstanding updates (skipped on EOL systems).
4. Check whether a reboot is pending.
5. Assemble the fact record and write it for Ansible.

Steps 3 and 4 degrade to sentinel values on failure. Steps 1 and 5 are
fatal, and nothing is written unless every field has been computed.

# Configuration
Every option can also be set with an environment variable, e.g.
FACTS_DIR, FACT_NAME, STORE_FACT, PRINT_JSON, LOG_LEVEL, LOG_FORMAT, QUIET.
Error reporting to Sentry is opt-in via SENTRY_DSN and can be forced off with
TELEMETRY=false.
"""

import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import click
import sentry_sdk
from rich.markup import escape

from .. import __version__
from .._census import create_default_registry, take_census
from ..console import console, print_banner, print_facts_summary, print_tool_status
from ..eol import get_eol_instant, resolve_eol
from ..exceptions import (
    ConfigurationError,
    PatchFactsError,
    PrivilegeError,
    UnsupportedSystemError,
)
from ..facts import PatchFacts, assemble_facts, read_uptime_seconds
from ..identity import identify
from ..logging_config import logger, setup_logging
from ..reboot import check_reboot
from ..serialization import serialize_facts, write_fact_file
from ..tool_checks import check_all_tools, log_tool_status

DEFAULT_FACTS_DIR = "/etc/ansible/facts.d"
DEFAULT_FACT_NAME = "os_patch_status"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PRIVILEGE = 2
EXIT_UNSUPPORTED = 3

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class Config:
    """Configuration settings for a patch-facts run."""

    facts_dir: Path = Path(DEFAULT_FACTS_DIR)
    fact_name: str = DEFAULT_FACT_NAME
    store: bool = True
    print_json: bool = False
    quiet: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    root: Path = Path("/")

    @property
    def show_console(self) -> bool:
        """Banner and summary go to stdout, which --print-json reserves for the record."""
        return not self.quiet and not self.print_json

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.fact_name or "/" in self.fact_name or self.fact_name.startswith("."):
            raise ConfigurationError(f"Invalid fact name: {self.fact_name!r}")
        if not self.facts_dir.is_absolute():
            raise ConfigurationError(f"Facts directory must be an absolute path: {self.facts_dir}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level!r}")
        if self.log_format not in ("text", "json"):
            raise ConfigurationError(f"Invalid log format: {self.log_format!r}")
        if not self.store and not self.print_json and self.quiet:
            logger.warning("--no-store with --quiet and no --print-json produces no output")


def evaluate_boolean(value: Optional[str]) -> bool:
    """Interpret truthy strings in environment variables that have no CLI option, such as TELEMETRY."""
    if value is None:
        return False
    return value.strip().lower() in ("true", "1", "yes", "y", "on")


def build_config(**options) -> Config:
    """
    Build and validate a Config from CLI options.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        facts_dir=Path(options.get("facts_dir") or DEFAULT_FACTS_DIR),
        fact_name=options.get("fact_name") or DEFAULT_FACT_NAME,
        store=options.get("store", True),
        print_json=options.get("print_json", False),
        quiet=options.get("quiet", False),
        log_level=(options.get("log_level") or "INFO").upper(),
        log_format=options.get("log_format") or "text",
    )
    config.validate()
    return config


def initialize_sentry() -> bool:
    """
    Initialize Sentry for error tracking when SENTRY_DSN is set.

    Returns:
        True if Sentry was initialized
    """
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn or not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        return False

    def before_send(event, hint):
        """Drop operator errors; only tool and system failures are reported."""
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            if isinstance(exc_value, (PrivilegeError, UnsupportedSystemError, ConfigurationError)):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        release=f"patch-facts@{__version__}",
        traces_sample_rate=0.0,
        before_send=before_send,
    )
    return True


def require_root() -> None:
    """
    Refuse to run without root: refreshing package caches as another user
    fails, or fills the cache directory with per-user copies.

    Raises:
        PrivilegeError: If the effective user is not root
    """
    if os.geteuid() != 0:
        raise PrivilegeError("patch-facts must be run as root")


def run_pipeline(config: Config, now: Optional[datetime] = None) -> PatchFacts:
    """
    Collect the patch facts and, if configured, write the fact file.

    Args:
        config: Validated configuration
        now: Current instant, defaults to now

    Returns:
        The assembled PatchFacts

    Raises:
        UnsupportedSystemError: If the OS cannot be identified
        FactValidationError: If the record is invalid
        FileProcessingError: If uptime cannot be read or the file cannot be written
    """
    now = now or datetime.now(timezone.utc)

    identity = identify(config.root)
    eol = resolve_eol(identity, now)
    census = take_census(identity, eol, create_default_registry(config.root))
    needs_reboot = check_reboot(identity, config.root)
    uptime_seconds = read_uptime_seconds(config.root)

    facts = assemble_facts(eol, census, needs_reboot, uptime_seconds, now.astimezone())

    fact_path = None
    if config.store:
        fact_path = write_fact_file(facts, config.facts_dir, config.fact_name)
    if config.print_json:
        click.echo(serialize_facts(facts), nl=False)
    if config.show_console:
        print_facts_summary(identity, get_eol_instant(identity), facts, fact_path)

    return facts


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--facts-dir",
    envvar="FACTS_DIR",
    default=DEFAULT_FACTS_DIR,
    show_default=True,
    help="Directory the fact file is written to.",
)
@click.option(
    "--fact-name",
    envvar="FACT_NAME",
    default=DEFAULT_FACT_NAME,
    show_default=True,
    help="Fact name; the file is <fact-name>.fact.",
)
@click.option(
    "--store/--no-store",
    envvar="STORE_FACT",
    default=True,
    show_default=True,
    help="Write the fact file.",
)
@click.option(
    "--print-json",
    envvar="PRINT_JSON",
    is_flag=True,
    help="Print the fact record to stdout; implies no banner or summary.",
)
@click.option("--quiet", "-q", envvar="QUIET", is_flag=True, help="Do not print the banner or summary table.")
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    default="INFO",
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
)
@click.option(
    "--log-format",
    envvar="LOG_FORMAT",
    default="text",
    show_default=True,
    type=click.Choice(["text", "json"]),
)
@click.option("--check-tools", is_flag=True, help="Show which host tools are installed and exit.")
@click.version_option(version=__version__, prog_name="patch-facts")
def cli(**options) -> None:
    """Collect OS patch posture and store it as an Ansible local fact."""
    check_tools = options.pop("check_tools")

    try:
        config = build_config(**options)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(EXIT_FAILURE)

    setup_logging(config.log_level, structured=config.log_format == "json")

    if check_tools:
        print_tool_status(check_all_tools())
        sys.exit(EXIT_OK)

    if config.show_console:
        print_banner(__version__)

    initialize_sentry()

    try:
        require_root()
    except PrivilegeError as e:
        logger.error(str(e))
        sys.exit(EXIT_PRIVILEGE)

    log_tool_status(verbose=config.log_level == "DEBUG")

    try:
        run_pipeline(config)
    except UnsupportedSystemError as e:
        logger.error(f"Unsupported system: {e}")
        sys.exit(EXIT_UNSUPPORTED)
    except PatchFactsError as e:
        logger.error(f"patch-facts failed: {e}")
        sentry_sdk.capture_exception(e)
        if config.show_console:
            console.print(f"[error]✗ {escape(str(e))}[/error]")
        sys.exit(EXIT_FAILURE)


def main() -> None:
    """Main entry point for the patch-facts console script."""
    cli()
