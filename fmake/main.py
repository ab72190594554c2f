"""
fmake — CLI entrypoint.

Usage:
    fmake --help
    fmake platforms
    fmake toolchain iPhoneOS
    fmake assemble build/MyLib.framework
"""

from __future__ import annotations

import json
import os
import shlex
import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import Any

import click

from fmake import __version__
from fmake.adapters.shell.command import CommandFailed, CommandRunner, ProcessSupervisor
from fmake.adapters.shell.interrupt import install_cancellation_handler
from fmake.core.config.loader import ConfigError
from fmake.core.models.platform import Platform
from fmake.core.observability.logging_config import setup_logging


def _handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report domain errors as a red one-liner and exit 1."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (CommandFailed, ConfigError, ValueError) as e:
            click.secho(f"❌ {e}", fg="red", err=True)
            sys.exit(1)

    return wrapper


def _emit(ctx: click.Context, content: str, output: str | None) -> None:
    """Print ``content`` or write it to ``output``."""
    if output:
        from fmake.adapters.shell.filesystem import Filesystem

        Filesystem(ctx.obj["runner"]).write_text(content, output)
        click.secho(f"✓ Wrote {output}", fg="green", err=True)
    else:
        click.echo(content, nl=not content.endswith("\n"))


def _platform(value: str) -> Platform:
    try:
        return Platform.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="fmake")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to framework.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """fmake — build Apple-platform binary frameworks."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    if "runner" not in ctx.obj:
        ctx.obj["runner"] = CommandRunner(ProcessSupervisor())

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("FMAKE_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("FMAKE_LOG_FILE"),
        log_file_level=os.environ.get("FMAKE_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def platforms(as_json: bool) -> None:
    """List supported platforms and their toolchain facts."""
    rows = [
        {
            "platform": p.label,
            "sdk": p.sdk,
            "archs": [a.value for a in p.archs],
            "simulator": p.is_simulator,
            "device_family": [int(d) for d in p.device_family],
            "min_version_flag": p.min_version_flag,
            "cmake_system_name": p.cmake_system_name,
        }
        for p in Platform
    ]
    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        click.secho(f"   {row['platform']:<18}", fg="cyan", nl=False)
        click.echo(
            f"sdk={row['sdk']:<16} archs={','.join(row['archs']):<14} "
            f"cmake={row['cmake_system_name']:<8} min=-{row['min_version_flag']}"
            + ("  [simulator]" if row["simulator"] else "")
        )


@cli.command()
@click.argument("platform")
@click.option("--locator", default="xcrun", show_default=True, help="SDK locator tool.")
@click.option("--cmake", "with_cmake", is_flag=True, help="Also print the CMake environment and -D arguments.")
@click.option("--toolchain-file", default="apple.toolchain.cmake", show_default=True,
              help="CMake toolchain file passed as CMAKE_TOOLCHAIN_FILE.")
@click.option("--min-sdk", "min_sdk", default=None, help="Deployment target (required with --cmake).")
@click.option("--find-root", "find_root", default="", help="Extra CMake find root (SECOND_FIND_ROOT_PATH).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@_handle_errors
def toolchain(
    ctx: click.Context,
    platform: str,
    locator: str,
    with_cmake: bool,
    toolchain_file: str,
    min_sdk: str | None,
    find_root: str,
    as_json: bool,
) -> None:
    """Resolve SDK path, SDK version and compilers for PLATFORM."""
    from fmake.core.services.toolchain import Toolchain

    if with_cmake and not min_sdk:
        raise click.UsageError("--cmake needs --min-sdk.")

    toolchain_ = Toolchain(_platform(platform), ctx.obj["runner"], locator=locator)
    info = toolchain_.resolve()
    cmake_env: dict[str, str] = {}
    cmake_args: list[str] = []
    if with_cmake:
        cmake_env = toolchain_.cmake_environment(second_find_root_path=find_root)
        cmake_args = toolchain_.cmake_configure_args(toolchain_file, min_sdk)

    if as_json:
        data = info.model_dump(mode="json")
        if with_cmake:
            data["cmake"] = {"env": cmake_env, "args": cmake_args}
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n🔧 {info.platform.label}", fg="cyan", bold=True)
    click.echo(f"   SDK:      {info.sdk_path}")
    click.echo(f"   Version:  {info.sdk_version}")
    click.echo(f"   cc:       {info.cc}")
    click.echo(f"   c++:      {info.cxx}")
    if with_cmake:
        click.echo()
        for key, value in cmake_env.items():
            if key != "PATH":
                click.echo(f"   export {key}={shlex.quote(value)}")
        click.echo("   cmake " + " ".join(shlex.quote(a) for a in cmake_args))
    click.echo()


@cli.command()
@click.argument("name")
@click.option("--umbrella", "umbrella", default=None, help="Umbrella header file.")
@click.option("--umbrella-dir", "umbrella_dir", default=None, help="Umbrella header directory.")
@click.option("--output", "-o", default=None, help="Write to file instead of stdout.")
@click.pass_context
def modulemap(
    ctx: click.Context,
    name: str,
    umbrella: str | None,
    umbrella_dir: str | None,
    output: str | None,
) -> None:
    """Render a module map for module NAME."""
    from fmake.core.models.bundle import ModuleHeader
    from fmake.core.services.generators.modulemap import render_module_map

    if (umbrella is None) == (umbrella_dir is None):
        raise click.UsageError("Pass exactly one of --umbrella or --umbrella-dir.")

    headers = ModuleHeader.umbrella(umbrella) if umbrella else ModuleHeader.umbrella_dir(umbrella_dir)
    _emit(ctx, render_module_map(name, headers) + "\n", output)


@cli.command()
@click.option("--name", required=True, help="Bundle name.")
@click.option("--version", "version", required=True, help="Bundle short version.")
@click.option("--identifier", "--id", "identifier", required=True, help="Bundle identifier.")
@click.option("--min-sdk", "min_sdk", required=True, help="Minimum OS version.")
@click.option("--platform", "platform", required=True, help="Target platform.")
@click.option("--locator", default="xcrun", show_default=True, help="SDK locator tool.")
@click.option("--output", "-o", default=None, help="Write to file instead of stdout.")
@click.pass_context
@_handle_errors
def plist(
    ctx: click.Context,
    name: str,
    version: str,
    identifier: str,
    min_sdk: str,
    platform: str,
    locator: str,
    output: str | None,
) -> None:
    """Render a framework Info.plist."""
    from fmake.core.services.generators.plist import render_property_list
    from fmake.core.services.toolchain import Toolchain

    target = _platform(platform)
    toolchain_ = Toolchain(target, ctx.obj["runner"], locator=locator)
    _emit(ctx, render_property_list(name, version, identifier, min_sdk, target, toolchain_), output)


@cli.command("cmake-toolchain")
@click.option("--output", "-o", default=None, help="Write to file instead of stdout.")
@click.pass_context
@_handle_errors
def cmake_toolchain(ctx: click.Context, output: str | None) -> None:
    """Render the Apple CMake toolchain fragment."""
    from fmake.core.services.generators.cmake import render_cmake_toolchain

    _emit(ctx, render_cmake_toolchain(), output)


@cli.command()
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.argument("name")
@click.pass_context
@_handle_errors
def repackage(ctx: click.Context, path: str, name: str) -> None:
    """Restructure the framework at PATH (binary NAME) into Versions/A."""
    from fmake.adapters.shell.filesystem import Filesystem
    from fmake.core.services.repackage import repackage_framework

    repackage_framework(path, name, Filesystem(ctx.obj["runner"]))
    click.secho(f"✅ Repackaged {path}", fg="green")


@cli.command()
@click.argument("framework_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@_handle_errors
def assemble(ctx: click.Context, framework_dir: str, as_json: bool) -> None:
    """Write manifests into FRAMEWORK_DIR and repackage when needed."""
    from fmake.core.config.loader import load_config
    from fmake.core.use_cases.assemble import assemble_framework

    config = load_config(ctx.obj.get("config_path"))
    result = assemble_framework(Path(framework_dir), config, ctx.obj["runner"])

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    click.secho(f"\n📦 {config.name} ({result.platform})", fg="cyan", bold=True)
    for path in result.written:
        click.echo(f"   ✓ {path}")
    if result.repackaged:
        click.echo("   ✓ Versions/A layout")
    click.echo()


def main() -> None:
    """Console script: install the interrupt handler, then run the CLI."""
    supervisor = ProcessSupervisor()
    install_cancellation_handler(supervisor)
    cli(obj={"runner": CommandRunner(supervisor)})


if __name__ == "__main__":
    main()
