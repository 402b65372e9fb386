import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from kcheck.config import KcheckConfigBuilder
from kcheck.errors import KcheckError
from kcheck.kernel import KernelConfig
from kcheck.verify import Kcheck, summarize

# Exit statuses are truncated to 8 bits by the OS.
MAX_EXIT_STATUS = 255

kconfig_option = click.option(
    "--kconfig",
    "-k",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    default=None,
    envvar="KCHECK_KCONFIG",
    help="Kernel config file to check ('-' for stdin). Defaults to the running kernel.",
)


def exit_status(failed: int) -> int:
    return min(failed, MAX_EXIT_STATUS)


def _load_kernel(kconfig: Path | None) -> KernelConfig:
    if kconfig is None:
        return KernelConfig.from_system()
    if str(kconfig) == "-":
        return KernelConfig.from_stdin(click.get_text_stream("stdin"))
    return KernelConfig.from_file(kconfig)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="kcheck")
def main(verbose: bool):
    """Check a kernel config against required option states."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@main.command()
@kconfig_option
@click.option(
    "--config",
    "-c",
    "configs",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Requirement file (.toml or .json). May be repeated.",
)
@click.option(
    "--system-config",
    is_flag=True,
    help="Also load /etc/kcheck.toml and /etc/kcheck.json (implied without --config)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def check(
    kconfig: Path | None,
    configs: tuple[Path, ...],
    system_config: bool,
    as_json: bool,
):
    """Check kernel config options against requirement files."""
    from kcheck.ui import render_report

    builder = KcheckConfigBuilder().config_files(configs)
    if system_config or not configs:
        builder.system()

    try:
        kernel = _load_kernel(kconfig)
        results = Kcheck(config=builder.build(), kernel=kernel).perform_check()
    except KcheckError as err:
        raise click.ClickException(str(err)) from err

    if as_json:
        data = {
            "kernel": str(kernel.source),
            "checks": [r.to_dict() for r in results],
        }
        click.echo(json.dumps(data, indent=2))
    else:
        render_report(results, kernel.source)

    _, failed = summarize(results)
    raise SystemExit(exit_status(failed))


@main.command("option")
@click.argument("symbol")
@kconfig_option
def show_option(symbol: str, kconfig: Path | None):
    """Show the state of SYMBOL in a kernel config."""
    try:
        state = _load_kernel(kconfig).option(symbol)
    except KcheckError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"{symbol}: {state}")


if __name__ == "__main__":
    main()
