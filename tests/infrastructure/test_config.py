"""Tests for environment-driven settings."""

from pathlib import Path

from pim.infrastructure.config import (
    DEFAULT_HREF_BASE_PATH,
    DEFAULT_HREF_PRODUCT_PATH,
    Settings,
)


class TestSettings:

    def test_defaults(self):
        settings = Settings.from_env({})

        assert settings.href_base_path == DEFAULT_HREF_BASE_PATH
        assert settings.href_product_path == DEFAULT_HREF_PRODUCT_PATH

    def test_reads_environment(self, tmp_path):
        settings = Settings.from_env(
            {
                "PIM_DATA_DIR": str(tmp_path),
                "PIM_HREF_BASE_PATH": "https://pim.test",
                "PIM_HREF_PRODUCT_PATH": "/p",
            }
        )

        assert settings.data_dir == Path(tmp_path)
        assert settings.href_template.format(ident="42") == "https://pim.test/p/42"

    def test_braces_in_configured_paths_are_literal(self):
        settings = Settings(href_base_path="http://h/{tenant}", href_product_path="/p}{")

        assert settings.href_template.format(ident="42") == "http://h/{tenant}/p}{/42"
