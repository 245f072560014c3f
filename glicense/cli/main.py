"""Command-line interface for glicense.

Every option can also be set through an environment variable, which
makes the tool easy to drive from CI. Command-line arguments take
precedence over the environment.

# Configuration
- GITHUB_API_KEY: GitHub token used for the license API (raises the rate
  limit) and required by --thanks
- SENTRY_DSN: Enable error reporting to Sentry
- TELEMETRY: Set to "false" to disable error reporting even with a DSN
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
import sentry_sdk

from .. import __version__
from .._enrichment import NO_API_KEY_MESSAGE
from ..client import GITHUB_TOKEN_ENV, VALID_OUTPUTS, Client
from ..console import console, print_banner, print_enrichment_summary, print_final_failure
from ..exceptions import ConfigurationError, GlicenseError, ManifestError
from ..logging_config import logger, set_level
from ..report import FORMAT_EXTENSIONS, VALID_FORMATS

GLICENSE_VERSION = __version__

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def evaluate_boolean(value: str) -> bool:
    """Interpret common truthy strings from the environment."""
    return value.strip().lower() in ("true", "1", "yes", "y", "on")


@dataclass
class Config:
    """Configuration settings for a glicense run."""

    path: str = "."
    indirect: bool = False
    format: str = "table"
    output: str = "stdout"
    output_file: Optional[str] = None
    thanks: bool = False
    write_licenses: bool = False
    verbose: bool = False
    token: Optional[str] = None

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.format not in VALID_FORMATS:
            raise ConfigurationError(
                f"invalid format provided ({self.format}) - allowed ones are [{', '.join(VALID_FORMATS)}]"
            )
        if self.output not in VALID_OUTPUTS:
            raise ConfigurationError(
                f"invalid output provided ({self.output}) - allowed ones are [{', '.join(VALID_OUTPUTS)}]"
            )
        if self.output_file and self.output != "file":
            logger.warning("--output-file is ignored unless --output file is selected")
        if self.thanks and not self.token:
            raise ConfigurationError(NO_API_KEY_MESSAGE)

    @property
    def report_path(self) -> str:
        """File the report is written to when output is "file"."""
        return self.output_file or f"licenses.{FORMAT_EXTENSIONS.get(self.format, 'txt')}"


def build_config(
    path: str = ".",
    indirect: bool = False,
    fmt: str = "table",
    output: str = "stdout",
    output_file: Optional[str] = None,
    thanks: bool = False,
    write_licenses: bool = False,
    verbose: bool = False,
) -> Config:
    """Build a Config from CLI values, reading the token from the environment."""
    return Config(
        path=path,
        indirect=indirect,
        format=fmt,
        output=output,
        output_file=output_file,
        thanks=thanks,
        write_licenses=write_licenses,
        verbose=verbose,
        token=os.getenv(GITHUB_TOKEN_ENV) or None,
    )


def initialize_sentry() -> None:
    """Initialize Sentry for error tracking when a DSN is configured."""
    sentry_dsn = os.getenv("SENTRY_DSN")
    if not sentry_dsn or not evaluate_boolean(os.getenv("TELEMETRY", "true")):
        return

    def before_send(event, hint):
        """
        Filter events before sending to Sentry.
        Don't send configuration or manifest errors - these are user errors.
        """
        if "exc_info" in hint:
            exc_type, exc_value, tb = hint["exc_info"]
            if isinstance(exc_value, (ConfigurationError, ManifestError)):
                return None
        return event

    sentry_sdk.init(
        dsn=sentry_dsn,
        send_default_pii=False,
        traces_sample_rate=0.0,
        before_send=before_send,
    )


def run_pipeline(config: Config) -> Client:
    """
    Run a full report: parse, resolve, enrich, render, write licenses.

    The report is written before license files; a failure writing
    license files is raised after the report is out.

    Raises:
        GlicenseError: On any fatal error
    """
    client = Client(config.path, fmt=config.format, output=config.output)
    client.parse_dependencies(include_indirect=config.indirect, thanks=config.thanks, token=config.token)
    print_enrichment_summary(client.stats)

    if config.output == "file":
        report_path = Path(config.report_path)
        with report_path.open("w", encoding="utf-8") as f:
            client.print(f)
        console.print(f"[success]Report written to {report_path}[/success]")
    else:
        client.print(sys.stdout)

    if config.write_licenses:
        written = client.write_licenses_to_file()
        console.print(f"[success]Wrote {len(written)} license files[/success]")

    return client


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(GLICENSE_VERSION, "-V", "--version", prog_name="glicense", message="%(prog)s %(version)s")
@click.option(
    "-p",
    "--path",
    default=".",
    show_default=True,
    envvar="GLICE_PATH",
    type=click.Path(file_okay=False),
    help="Project directory containing go.mod",
)
@click.option("-i", "--indirect", is_flag=True, envvar="GLICE_INDIRECT", help="Include indirect dependencies")
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(VALID_FORMATS),
    default="table",
    show_default=True,
    envvar="GLICE_FORMAT",
    help="Report format",
)
@click.option(
    "-o",
    "--output",
    type=click.Choice(VALID_OUTPUTS),
    default="stdout",
    show_default=True,
    envvar="GLICE_OUTPUT",
    help="Where to write the report",
)
@click.option(
    "--output-file",
    envvar="GLICE_OUTPUT_FILE",
    help="Report file for --output file [default: licenses.<format extension>]",
)
@click.option(
    "-t",
    "--thanks",
    is_flag=True,
    envvar="GLICE_THANKS",
    help="Star GitHub dependencies (requires GITHUB_API_KEY)",
)
@click.option(
    "-l",
    "--write-licenses",
    is_flag=True,
    envvar="GLICE_WRITE_LICENSES",
    help="Write license texts to <path>/licenses",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    path: str,
    indirect: bool,
    fmt: str,
    output: str,
    output_file: Optional[str],
    thanks: bool,
    write_licenses: bool,
    verbose: bool,
) -> None:
    """List the licenses of a Go module's dependencies."""
    if verbose:
        set_level("DEBUG")

    initialize_sentry()

    config = build_config(
        path=path,
        indirect=indirect,
        fmt=fmt,
        output=output,
        output_file=output_file,
        thanks=thanks,
        write_licenses=write_licenses,
        verbose=verbose,
    )

    try:
        config.validate()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print_final_failure(str(e))
        sys.exit(1)

    if config.format == "table":
        print_banner(GLICENSE_VERSION)

    try:
        run_pipeline(config)
    except GlicenseError as e:
        logger.error(str(e))
        print_final_failure(str(e))
        sys.exit(1)


def main() -> None:
    """Entry point for the glicense console script."""
    cli()


if __name__ == "__main__":
    main()
