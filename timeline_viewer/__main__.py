"""
Command-line entry point: ``python -m timeline_viewer [DOCUMENT]``.
"""

import argparse
import logging
import sys


def build_parser():
    parser = argparse.ArgumentParser(
        prog="timeline-viewer",
        description="Interactive zoomable timeline viewer for JSON timeline documents.",
    )
    parser.add_argument("document", nargs="?", help="Timeline JSON document to open")
    parser.add_argument("--config", help="JSON file with scale and layout settings")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from PyQt5.QtWidgets import QApplication

    from timeline_viewer.config import ViewerConfig
    from timeline_viewer.timeline_window import TimelineWindow
    from timeline_viewer.utils.errors import ConfigError

    try:
        config = ViewerConfig(args.config)
    except ConfigError as e:
        logging.getLogger(__name__).error(e.details)
        return 2

    app = QApplication(sys.argv[:1])
    window = TimelineWindow(config)
    if args.document:
        window.open_document(args.document)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
