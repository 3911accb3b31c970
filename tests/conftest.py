"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local coverview package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of coverview modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("coverview"):
        del sys.modules[module_name]


MODULE_PATH = "example.com/acme/shop"

CART_SOURCE = """\
package cart

func Total(items []int) int {
\tsum := 0
\tfor _, v := range items {
\t\tsum += v
\t}
\treturn sum
}
"""


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a file under tmp_path, creating parent directories."""

    def _write(relative: str, content: str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def go_module(tmp_path: Path, write_file: Callable[[str, str], Path]) -> Path:
    """A small Go module: go.mod plus cart/cart.go and cart/util.go."""
    write_file("go.mod", f"module {MODULE_PATH}\n\ngo 1.22\n")
    write_file("cart/cart.go", CART_SOURCE)
    write_file("cart/util.go", "package cart\n\nfunc noop() {}\n")
    return tmp_path
