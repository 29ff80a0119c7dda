"""
===========================================================
Watch + Test loop for flat_matrix
===========================================================

Re-runs pytest whenever a Python file under src/, tests/ or examples/
changes:
  - a change in tests/test_*.py re-runs only that module
  - a change in src/flat_matrix/<name>.py re-runs tests/test_<name>.py
    when it exists, otherwise the full suite
  - anything else re-runs the full suite

Usage
-----
    # from the repo root, inside the venv used for development
    python3 tools/watch_and_test.py
    python3 tools/watch_and_test.py --full --interval 1.0

Dependencies
------------
    pip install -e ".[dev]"      (watchdog, colorama, pytest)
"""

# --- Imports --------------------------------------------------------------

import sys
import time
import argparse
import subprocess
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from colorama import Fore, Style, init as colorama_init


# --- Configuration --------------------------------------------------------

colorama_init(autoreset=True)
ROOT = Path(__file__).resolve().parents[1]         # repo root (pyproject.toml)
WATCH_DIRS = [ROOT / "src" / "flat_matrix", ROOT / "tests", ROOT / "examples"]
TESTS_DIR = ROOT / "tests"
PYTHON = sys.executable

IGNORED_DIR_NAMES = {"__pycache__", ".git", ".pytest_cache", ".mypy_cache"}


# --- CLI Parsing ----------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="watch_and_test",
        description="Watch flat_matrix sources and re-run the matching tests.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--full", action="store_true",
                   help="Always run the whole suite instead of the matching module.")
    p.add_argument("--interval", type=float, default=0.5,
                   help="Minimum delay between two runs (seconds).")
    return p.parse_args(argv)


# --- Target selection -----------------------------------------------------

def should_ignore(path: Path) -> bool:
    if path.suffix != ".py":
        return True
    return any(part in IGNORED_DIR_NAMES for part in path.parts)


def select_targets(path: Path, tests_dir: Path = TESTS_DIR) -> list[str]:
    """
    Pytest arguments for a changed file: a single test module when one
    matches, an empty list (= full suite) otherwise.
    """
    if path.parent == tests_dir and path.name.startswith("test_"):
        return [str(path)]
    candidate = tests_dir / f"test_{path.stem}.py"
    if path.parent.name == "flat_matrix" and candidate.exists():
        return [str(candidate)]
    return []


# --- Test Runner ----------------------------------------------------------

def run_pytest(targets: list[str]) -> int:
    cmd = [PYTHON, "-m", "pytest", "-q", "-rxXs", f"--rootdir={ROOT}", *targets]
    label = " ".join(Path(t).name for t in targets) or "full suite"
    print(f"\n{Fore.CYAN}{'=' * 60}")
    print(f"{Style.BRIGHT}🧪 pytest: {label}")
    print(f"{Fore.CYAN}{'=' * 60}{Style.RESET_ALL}")
    try:
        code = subprocess.run(cmd, cwd=str(ROOT)).returncode
    except KeyboardInterrupt:
        return 130
    colour = Fore.GREEN if code == 0 else Fore.RED
    print(f"{colour}exit code {code}{Style.RESET_ALL}")
    return code


# --- Watcher --------------------------------------------------------------

class ChangeHandler(FileSystemEventHandler):
    def __init__(self, full: bool, cooldown: float):
        self._full = full
        self._cooldown = cooldown
        self._last = 0.0

    def _trigger(self, src_path: str):
        path = Path(src_path)
        if should_ignore(path):
            return
        now = time.time()
        if now - self._last < self._cooldown:
            return
        self._last = now
        print(f"\n{Fore.MAGENTA}🧩 changed:{Style.RESET_ALL} {path.relative_to(ROOT)}")
        run_pytest([] if self._full else select_targets(path))

    def on_modified(self, event):
        if not event.is_directory:
            self._trigger(event.src_path)

    def on_created(self, event):
        if not event.is_directory:
            self._trigger(event.src_path)


# --- Main -----------------------------------------------------------------

def main(argv=None) -> int:
    args = parse_args(argv)

    print(f"{Fore.CYAN}👀 flat_matrix watcher{Style.RESET_ALL}  (Ctrl+C to stop)")
    handler = ChangeHandler(full=args.full, cooldown=args.interval)
    observer = Observer()
    for d in WATCH_DIRS:
        print(f"  • watching: {Fore.LIGHTBLACK_EX}{d}{Style.RESET_ALL}")
        observer.schedule(handler, str(d), recursive=True)

    observer.start()
    try:
        run_pytest([])  # initial full run
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}🛑 watcher stopped.{Style.RESET_ALL}")
        observer.stop()
    observer.join()
    return 0


# --- Entrypoint -----------------------------------------------------------

if __name__ == "__main__":
    raise SystemExit(main())
