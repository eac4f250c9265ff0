"""
Tests for the thumbsight command line interface.
"""

import pytest
from click.testing import CliRunner

from thumbsight.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, registry, args):
    return runner.invoke(main, args, obj={'registry': registry})


class TestCli:
    """Test CLI commands against isolated registries."""

    def test_backends(self, runner, make_registry):
        result = invoke(runner, make_registry(pillow=True, opencv=False), ['backends'])

        assert result.exit_code == 0
        assert "✓ pillow" in result.output
        assert "✗ opencv" in result.output
        assert "✗ all" in result.output
        assert "✓ any" in result.output

    def test_plugins_empty(self, runner, registry, plugin_dir):
        result = invoke(runner, registry, ['plugins', '--plugin-path', str(plugin_dir)])

        assert result.exit_code == 0
        assert "No plugins registered" in result.output

    def test_plugins_listed(self, runner, registry, plugin_dir):
        plugin_dir.write("hooked.py", """
            def register(registry):
                registry.register_plugin("hooked", "pillow")
        """)

        result = invoke(runner, registry, ['plugins', '-p', str(plugin_dir)])

        assert result.exit_code == 0
        assert "hooked" in result.output
        assert "registered" in result.output

    def test_inspect(self, runner, registry, plugin_dir, sample_image):
        result = invoke(runner, registry, [
            'inspect', str(sample_image), '-i', 'opencv', '-p', str(plugin_dir)
        ])

        assert result.exit_code == 0
        assert "Backend:    opencv" in result.output
        assert "Dimensions: 64x48" in result.output

    def test_inspect_falls_back(self, runner, make_registry, plugin_dir, sample_image):
        registry = make_registry(pillow=True, opencv=False)

        result = invoke(runner, registry, [
            'inspect', str(sample_image), '-i', 'opencv', '-p', str(plugin_dir)
        ])

        assert result.exit_code == 0
        assert "Backend:    pillow" in result.output

    def test_inspect_unknown_backend(self, runner, registry, plugin_dir, sample_image):
        result = invoke(runner, registry, [
            'inspect', str(sample_image), '-i', 'gd', '-p', str(plugin_dir)
        ])

        assert result.exit_code == 1
        assert "Unknown thumbnail implementation" in result.output

    def test_inspect_nothing_available(self, runner, make_registry, plugin_dir, sample_image):
        registry = make_registry(pillow=False, opencv=False)

        result = invoke(runner, registry, ['inspect', str(sample_image), '-p', str(plugin_dir)])

        assert result.exit_code == 1

    def test_config_option(self, runner, registry, tmp_path, plugin_dir, sample_image):
        config = tmp_path / "config.yaml"
        config.write_text(
            "thumbnails:\n"
            "  default_implementation: opencv\n"
            f"  plugin_path: {plugin_dir}\n"
        )

        result = invoke(runner, registry, ['-c', str(config), 'inspect', str(sample_image)])

        assert result.exit_code == 0
        assert "Backend:    opencv" in result.output


class TestCliRegistryInjection:
    """Test that injected registries are honoured even with no plugins."""

    def test_backends_with_empty_registry(self, runner, make_registry):
        registry = make_registry(pillow=False, opencv=False)
        assert len(registry) == 0

        result = invoke(runner, registry, ['backends'])

        assert result.exit_code == 0
        assert "✗ pillow" in result.output
        assert "✗ opencv" in result.output
        assert "✗ all" in result.output

    def test_inspect_raster_only_falls_back_to_pillow(self, runner, make_registry,
                                                       plugin_dir, sample_image):
        registry = make_registry(pillow=True, opencv=False)
        assert len(registry) == 0

        result = invoke(runner, registry, [
            'inspect', str(sample_image), '--implementation', 'opencv',
            '--plugin-path', str(plugin_dir)
        ])

        assert result.exit_code == 0
        assert "Backend:    pillow" in result.output
        assert "Dimensions: 64x48" in result.output

    def test_inspect_nothing_available_reports_error(self, runner, make_registry,
                                                    plugin_dir, sample_image):
        registry = make_registry(pillow=False, opencv=False)

        result = invoke(runner, registry, [
            'inspect', str(sample_image), '-i', 'opencv', '-p', str(plugin_dir)
        ])

        assert result.exit_code == 1
        assert "Pillow or OpenCV" in result.output
        assert "Backend:" not in result.output


class TestCliOptions:
    """Test global options and config edge cases."""

    def test_null_plugin_path_uses_default(self, runner, registry, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = tmp_path / "config.yaml"
        config.write_text("thumbnails:\n  plugin_path:\n")

        result = invoke(runner, registry, ['-c', str(config), 'plugins'])

        assert result.exit_code == 0
        assert "No plugins registered from thumb_plugins/" in result.output

    def test_quiet_suppresses_output(self, runner, registry):
        result = invoke(runner, registry, ['-q', 'backends'])

        assert result.exit_code == 0
        assert result.output == ""

    def test_quiet_inspect(self, runner, registry, plugin_dir, sample_image):
        result = invoke(runner, registry, [
            '--quiet', 'inspect', str(sample_image), '-p', str(plugin_dir)
        ])

        assert result.exit_code == 0
        assert result.output == ""

    def test_quiet_still_reports_errors(self, runner, registry, plugin_dir, sample_image):
        result = invoke(runner, registry, [
            '-q', 'inspect', str(sample_image), '-i', 'gd', '-p', str(plugin_dir)
        ])

        assert result.exit_code == 1
        assert "Unknown thumbnail implementation" in result.output
