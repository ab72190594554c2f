"""
Shared test fixtures and configuration.
"""

import textwrap
from pathlib import Path

import pytest

from fmake.adapters.shell.command import CommandRunner, ProcessSupervisor
from fmake.adapters.shell.filesystem import Filesystem

SDK_VERSION = "17.2"


def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body))
    path.chmod(0o755)
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def runner() -> CommandRunner:
    """A runner with its own supervisor (no interrupt handler)."""
    return CommandRunner(ProcessSupervisor())


@pytest.fixture
def fs(runner: CommandRunner) -> Filesystem:
    return Filesystem(runner)


@pytest.fixture
def sdk_version() -> str:
    """SDK version the fake locator reports."""
    return SDK_VERSION


@pytest.fixture
def locator_log(tmp_path: Path) -> Path:
    """File the fake SDK locator appends its arguments to."""
    return tmp_path / "locator.log"


@pytest.fixture
def fake_locator(tmp_path: Path, locator_log: Path) -> str:
    """An xcrun stand-in answering --show-sdk-path/--show-sdk-version/-f."""
    script = _write_script(tmp_path / "fake-xcrun", f"""\
        echo "$@" >> "{locator_log}"
        [ "$1" = "--sdk" ] || exit 64
        sdk="$2"
        shift 2
        case "$1" in
          --show-sdk-path) echo "/SDKs/$sdk.sdk" ;;
          --show-sdk-version) printf '\\n{SDK_VERSION}\\nignored\\n' ;;
          -f) echo "/toolchain/bin/$2" ;;
          *) exit 65 ;;
        esac
    """)
    return str(script)


@pytest.fixture
def broken_locator(tmp_path: Path) -> str:
    """An SDK locator that reports the SDK as missing."""
    script = _write_script(tmp_path / "broken-xcrun", """\
        echo "xcrun: error: SDK cannot be located" >&2
        exit 1
    """)
    return str(script)


@pytest.fixture
def flat_framework(tmp_path: Path) -> Path:
    """A freshly built, flat MyLib.framework directory."""
    root = tmp_path / "MyLib.framework"
    (root / "Headers").mkdir(parents=True)
    (root / "Modules").mkdir()
    (root / "MyLib").write_bytes(b"\xcf\xfa\xed\xfe binary")
    (root / "Headers" / "x.h").write_text("int x(void);\n")
    (root / "Modules" / "module.modulemap").write_text('module MyLib {\n  umbrella header "x.h"\n}\n')
    (root / "Info.plist").write_text("<plist/>\n")
    return root
