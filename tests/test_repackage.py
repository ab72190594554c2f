"""
Tests for the framework repackager — flat layout to Versions/A.
"""

import os
from pathlib import Path

import pytest

from fmake.adapters.shell.command import CommandFailed
from fmake.adapters.shell.filesystem import Filesystem
from fmake.core.services.repackage import repackage_framework


class TestRepackageFramework:
    def test_versioned_layout(self, flat_framework: Path, fs: Filesystem):
        repackage_framework(flat_framework, "MyLib", fs)

        a = flat_framework / "Versions" / "A"
        assert (a / "MyLib").is_file()
        assert (a / "Headers" / "x.h").is_file()
        assert (a / "Modules" / "module.modulemap").is_file()
        assert (a / "Resources" / "Info.plist").is_file()
        assert not (a / "Info.plist").exists()

    def test_current_points_to_a(self, flat_framework: Path, fs: Filesystem):
        repackage_framework(flat_framework, "MyLib", fs)

        current = flat_framework / "Versions" / "Current"
        assert current.is_symlink()
        assert os.readlink(current) == "A"
        assert current.resolve() == (flat_framework / "Versions" / "A").resolve()

    @pytest.mark.parametrize("entry", ["MyLib", "Headers", "Modules", "Resources"])
    def test_top_level_links(self, flat_framework: Path, fs: Filesystem, entry: str):
        repackage_framework(flat_framework, "MyLib", fs)

        link = flat_framework / entry
        assert link.is_symlink()
        assert os.readlink(link) == f"Versions/Current/{entry}"
        assert link.resolve() == (flat_framework / "Versions" / "A" / entry).resolve()

    def test_content_reachable_through_links(self, flat_framework: Path, fs: Filesystem):
        repackage_framework(flat_framework, "MyLib", fs)

        assert (flat_framework / "Headers" / "x.h").read_text() == "int x(void);\n"
        assert (flat_framework / "Resources" / "Info.plist").read_text() == "<plist/>\n"

    def test_root_contents(self, flat_framework: Path, fs: Filesystem):
        repackage_framework(flat_framework, "MyLib", fs)

        names = sorted(p.name for p in flat_framework.iterdir())
        assert names == ["Headers", "Modules", "MyLib", "Resources", "Versions"]

    def test_cwd_restored(self, flat_framework: Path, fs: Filesystem):
        before = Path.cwd()
        repackage_framework(flat_framework, "MyLib", fs)
        assert Path.cwd() == before

    def test_second_run_fails(self, flat_framework: Path, fs: Filesystem):
        repackage_framework(flat_framework, "MyLib", fs)
        before = Path.cwd()
        with pytest.raises(CommandFailed):
            repackage_framework(flat_framework, "MyLib", fs)
        assert Path.cwd() == before

    def test_missing_binary_fails_without_rollback(self, flat_framework: Path, fs: Filesystem):
        (flat_framework / "MyLib").unlink()
        with pytest.raises(CommandFailed):
            repackage_framework(flat_framework, "MyLib", fs)
        # step 1 already happened and stays
        assert (flat_framework / "Versions" / "A" / "Resources").is_dir()

    def test_echoes_steps(self, flat_framework: Path, fs: Filesystem, capsys):
        repackage_framework(flat_framework, "MyLib", fs)
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "mkdir -p Versions/A/Resources"
        assert "ln -s A Current" in out
        assert out[-1] == "ln -s Versions/Current/Resources"
