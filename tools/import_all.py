# tools/import_all.py
"""Import every pixelpet module and report the ones that fail."""
import importlib
import os
import pkgutil
import sys
import traceback
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
os.environ.setdefault("KIVY_NO_ARGS", "1")

import pixelpet  # noqa: E402


def main() -> int:
    failed = []
    modules = [m.name for m in pkgutil.walk_packages(pixelpet.__path__, prefix="pixelpet.")]
    for name in modules:
        try:
            importlib.import_module(name)
        except Exception as e:
            failed.append(name)
            print(f"[IMPORT FAIL] {name}: {e}")
            traceback.print_exc()
    print(f"\n{len(modules)} modules scanned, {len(failed)} failed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
