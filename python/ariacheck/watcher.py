# SPDX-License-Identifier: AGPL-3.0-only
import argparse
import time
from pathlib import Path
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
from .cli import _load_config, run_check

WATCHED_SUFFIXES = (".html", ".htm", ".vue")


class CheckEventHandler(FileSystemEventHandler):
    def __init__(self, args, config, delay=0.5):
        self.args = args
        self.config = config
        self.delay = delay
        self.last_check = {}

    def on_modified(self, event):
        if event.is_directory:
            return
        src = str(event.src_path)

        # Ignore hidden files and non-markup files
        if "/." in src or "\\." in src:
            return
        if not src.endswith(WATCHED_SUFFIXES):
            return

        # Debounce per file; editors often write twice
        now = time.time()
        if now - self.last_check.get(src, 0) < self.delay:
            return

        print(f"[watch] Change detected in {src}...")
        file_args = argparse.Namespace(**vars(self.args))
        file_args.files = [src]
        try:
            run_check(file_args, self.config)
        except (OSError, ValueError) as e:
            print(f"[error] Check failed: {e}")

        self.last_check[src] = now

    on_created = on_modified


def cmd_watch(args):
    """Watch a directory and re-check markup files on change."""
    path = Path(args.path)
    config = _load_config(args)

    print(f"[watch] Watching {path} for changes...")

    # Initial check
    initial = argparse.Namespace(**vars(args))
    initial.files = [str(path)]
    try:
        run_check(initial, config)
    except (OSError, ValueError) as e:
        print(f"[error] Initial check failed: {e}")

    event_handler = CheckEventHandler(args, config)
    observer = Observer()
    observer.schedule(event_handler, str(path), recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        observer.stop()
    observer.join()
    return 0
