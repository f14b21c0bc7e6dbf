#!/usr/bin/env python3
"""
Main entry point for the OD&H player.
"""
import sys
import logging
import argparse
from pathlib import Path

from odh_player_app.core.errors import PlayerError
from odh_player_app.data.catalog_source import load_catalog

# Configure logging
def setup_logging(verbose=False):
    """Set up logging configuration."""
    log_level = logging.DEBUG if verbose else logging.INFO
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(Path.home() / '.odh_player_app.log')
        ]
    )

def build_parser():
    """Command line options."""
    parser = argparse.ArgumentParser(description='OD&H single-track audio player')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    parser.add_argument('--catalog', type=Path, help='Track catalog JSON (defaults to the bundled one)')
    parser.add_argument('--track', type=int, help='ID of the track to start on')
    return parser

def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)
    logger.info("Starting OD&H player")

    try:
        catalog = load_catalog(args.catalog)
    except (OSError, ValueError) as e:
        logger.error("Could not load catalog: %s", e)
        return 1

    # Import after logging is set up so widget modules log through it
    from PySide6.QtWidgets import QApplication
    from odh_player_app.ui.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    try:
        window = MainWindow(catalog, initial_track_id=args.track)
    except PlayerError as e:
        logger.error("%s", e)
        return 1
    window.show()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
