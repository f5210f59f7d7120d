"""
Tests for the SkyPort CLI and the migrate() entry point
"""
import json
import zipfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import SKY_PROPERTIES, make_atlas, png_bytes
from skyport import migrate
from skyport.cli import cli
from skyport.exceptions import ErrorType
from skyport.identifier import Identifier


def write_pack(root: Path, extra=None):
    """Create an unpacked input pack with one sky layer"""
    sky_dir = root / "assets" / "minecraft" / "optifine" / "sky" / "world0"
    sky_dir.mkdir(parents=True)
    (sky_dir / "sky1.properties").write_bytes(SKY_PROPERTIES.encode("latin-1"))
    (sky_dir / "sky1.png").write_bytes(png_bytes(make_atlas(16)))
    for name, content in (extra or {}).items():
        (sky_dir / name).write_text(content)
    return root


class TestMigrate:
    """Test the module-level migrate() function"""

    def test_directory_to_directory(self, tmp_path):
        source = write_pack(tmp_path / "in")
        target = tmp_path / "out"

        reports = migrate(str(source), str(target))

        assert reports == {"Sky": {}}
        manifest = json.loads((target / "assets/fabricskyboxes/sky/sky1.json").read_text())
        assert manifest["texture_west"] == "fabricskyboxes:sky/sky1_west.png"
        assert (target / "assets/fabricskyboxes/sky/sky1_west.png").is_file()

    def test_directory_to_zip(self, tmp_path):
        source = write_pack(tmp_path / "in")
        target = tmp_path / "out.zip"

        migrate(str(source), str(target), converters=["sky"])

        with zipfile.ZipFile(target) as archive:
            names = set(archive.namelist())
        assert "assets/fabricskyboxes/sky/sky1.json" in names
        assert len(names) == 7

    def test_reports_failures(self, tmp_path):
        source = write_pack(tmp_path / "in", {"sky2.properties": "startFadeIn=0\nendFadeIn=1\n"})

        reports = migrate(str(source), str(tmp_path / "out"))

        failed = Identifier("minecraft", "optifine/sky/world0/sky2.properties")
        assert reports["Sky"] == {failed: ErrorType.MAPPING}

    def test_missing_input(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            migrate(str(tmp_path / "nope"), str(tmp_path / "out"))

    def test_unknown_converter(self, tmp_path):
        source = write_pack(tmp_path / "in")
        with pytest.raises(ValueError):
            migrate(str(source), str(tmp_path / "out"), converters=["cit"])


class TestCLI:
    """Test CLI command structure and basic functionality"""

    def test_cli_help(self):
        """Test that CLI help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'SkyPort' in result.output
        assert 'convert' in result.output

    def test_convert_help(self):
        """Test that convert command help works"""
        runner = CliRunner()
        result = runner.invoke(cli, ['convert', '--help'])
        assert result.exit_code == 0
        assert 'Convert a resource pack' in result.output
        assert 'INPUT_PATH' in result.output
        assert '--converter' in result.output

    def test_convert_missing_input(self, tmp_path):
        """Test that convert command handles missing input pack"""
        runner = CliRunner()
        result = runner.invoke(cli, ['convert', str(tmp_path / 'nonexistent'), str(tmp_path / 'out')])
        assert result.exit_code != 0
        assert 'not found' in result.output.lower()

    def test_convert_works(self, tmp_path):
        """Test that convert command converts a pack"""
        source = write_pack(tmp_path / "in")
        target = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(cli, ['convert', str(source), str(target), '-v'])

        assert result.exit_code == 0, result.output
        assert 'Success' in result.output
        assert (target / "assets/fabricskyboxes/sky/sky1.json").is_file()

    def test_convert_lists_failures(self, tmp_path):
        """Entry failures are listed but do not fail the command"""
        source = write_pack(tmp_path / "in", {"sky2.properties": "startFadeIn=0\nendFadeIn=1\n"})

        runner = CliRunner()
        result = runner.invoke(cli, ['convert', str(source), str(tmp_path / "out")])

        assert result.exit_code == 0
        assert 'minecraft:optifine/sky/world0/sky2.properties: mapping' in result.output

    def test_convert_unknown_converter(self, tmp_path):
        source = write_pack(tmp_path / "in")
        runner = CliRunner()
        result = runner.invoke(cli, ['convert', str(source), str(tmp_path / "out"), '-c', 'cit'])
        assert result.exit_code != 0
