"""Entry point for `python -m sightreader` or the `sightreader` console script."""

import argparse
import logging
from pathlib import Path

from sightreader.app import App


def main() -> None:
    parser = argparse.ArgumentParser(description="SightReader: name the notes on the staff")
    parser.add_argument("--soundfont", default="", help="SoundFont (.sf2) used for note playback")
    parser.add_argument("--db", type=Path, default=None, help="Statistics database path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = App(soundfont=args.soundfont, db_path=args.db)
    app.run()


if __name__ == "__main__":
    main()
