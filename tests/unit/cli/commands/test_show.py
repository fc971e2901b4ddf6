"""
Unit tests for the 'show' CLI command.
"""

from click.testing import CliRunner

from modsync.cli.commands.collect import collect
from modsync.cli.commands.show import show


class TestShowCommand:
    def test_show_after_collect(self, project_dir):
        runner = CliRunner()
        runner.invoke(collect, ["-p", str(project_dir), "-q"])

        result = runner.invoke(show, ["-p", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert "Shared (1)" in result.output
        assert "A-1.0/" in result.output
        assert "libY.jar" in result.output

    def test_unknown_folder_flagged(self, project_dir):
        runner = CliRunner()
        runner.invoke(collect, ["-p", str(project_dir), "-q"])
        (project_dir / "build" / "mods" / "stray-0.1").mkdir()

        result = runner.invoke(show, ["-p", str(project_dir)])

        assert "stray-0.1" in result.output
        assert "does not belong to any declared mod" in result.output

    def test_not_collected_yet(self, project_dir):
        result = CliRunner().invoke(show, ["-p", str(project_dir)])

        assert result.exit_code == 0
        assert "does not exist yet" in result.output
