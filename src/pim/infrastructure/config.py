"""Runtime settings, read from the environment.

PIM_DATA_DIR            directory holding the JSON store (default: <repo>/data)
PIM_HREF_BASE_PATH      scheme/host part of product hrefs
PIM_HREF_PRODUCT_PATH   path prefix of product hrefs
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_HREF_BASE_PATH = "http://localhost:8080"
DEFAULT_HREF_PRODUCT_PATH = "/productInventory/v1/product"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    href_base_path: str = DEFAULT_HREF_BASE_PATH
    href_product_path: str = DEFAULT_HREF_PRODUCT_PATH

    @property
    def href_template(self) -> str:
        """``<basePath><productPath>/{ident}``, ready for ``str.format``."""
        prefix = f"{self.href_base_path}{self.href_product_path}"
        return prefix.replace("{", "{{").replace("}", "}}") + "/{ident}"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return Settings(
            data_dir=Path(env.get("PIM_DATA_DIR", DEFAULT_DATA_DIR)),
            href_base_path=env.get("PIM_HREF_BASE_PATH", DEFAULT_HREF_BASE_PATH),
            href_product_path=env.get("PIM_HREF_PRODUCT_PATH", DEFAULT_HREF_PRODUCT_PATH),
        )
