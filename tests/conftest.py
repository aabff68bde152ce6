from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from libkit.config import ToolkitConfig  # noqa: E402


PACKAGE_JSON = {
    "name": "@example/vue-lib",
    "version": "0.0.1",
    "description": "A starter kit for Vue component libraries",
    "author": "Example Author",
    "copyright": "(c) Example Corp",
    "scripts": {"generate": "vite build"},
    "dependencies": {"vue": "^3.5.0", "lodash": "^4.17.21"},
    "devDependencies": {"vite": "^6.0.0"},
    "nonExternal": ["lodash"],
}


@pytest.fixture()
def project(tmp_path: Path) -> Path:
    """A miniature library checkout."""

    root = tmp_path / "lib"
    (root / "src" / "forms").mkdir(parents=True)
    (root / "docs" / "api").mkdir(parents=True)
    (root / "node_modules" / "vue").mkdir(parents=True)
    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2), encoding="utf-8")
    (root / "README.md").write_text(
        "# @example/vue-lib\n\nA starter kit for Vue component libraries\n\n"
        "Install with `npm i @example/vue-lib`.\n",
        encoding="utf-8",
    )
    (root / "LICENSE.md").write_text("MIT (c) Example Corp\n", encoding="utf-8")
    (root / "src" / "index.ts").write_text(
        "/**\n * @module @example/vue-lib\n */\nexport const version = __VERSION__\n",
        encoding="utf-8",
    )
    (root / "src" / "forms" / "input.vue").write_text(
        "<script setup lang=\"ts\">\n/**\n * @module @example/vue-lib/forms/input\n */\n</script>\n",
        encoding="utf-8",
    )
    (root / "src" / "forms" / "helpers.ts").write_text("export const noop = () => {}\n", encoding="utf-8")
    (root / "docs" / "api" / "index.md").write_text("# @example/vue-lib\n", encoding="utf-8")
    (root / "node_modules" / "vue" / "README.md").write_text("@example/vue-lib\n", encoding="utf-8")
    return root


@pytest.fixture()
def config(project: Path) -> ToolkitConfig:
    return ToolkitConfig(root=project, debounce=0.05, poll_interval=0.02)
