#!/usr/bin/env python3
"""
softkeys CLI entry point with enhanced logging
"""

from __future__ import annotations
import sys
import argparse
import signal
import os
import logging
import logging.handlers
import traceback
from pathlib import Path

from softkeys.__version__ import __version__

# Global logger instance
logger = None


def setup_logging(debug: bool = False, log_file: str | None = None) -> logging.Logger:
    """Setup logging to both console and file

    Args:
        debug: Enable debug level logging
        log_file: Path to log file (default: ~/.softkeys.log)
    """
    global logger

    if logger is not None:
        return logger

    import softkeys.log  # registers TRACE level

    logger = logging.getLogger('softkeys')
    logger.setLevel(softkeys.log.TRACE if debug else logging.INFO)

    # Default log file location
    if log_file is None:
        log_file = os.path.expanduser('~/.softkeys.log')

    # Format for logs
    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)-8s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler (rotate log file when it gets too large)
    try:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5  # Keep 5 old log files
        )
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"Warning: Could not setup file logging: {e}", file=sys.stderr)

    # Console handler (only warnings in production, everything in debug)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(softkeys.log.TRACE if debug else logging.WARNING)
    console_handler.setFormatter(fmt)
    logger.addHandler(console_handler)

    return logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='softkeys',
        description='On-screen keyboard for touch-only devices',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode with verbose logging'
    )
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='Path to config file'
    )
    parser.add_argument(
        '--logfile',
        type=str,
        default=None,
        help='Path to log file (default: ~/.softkeys.log)'
    )
    parser.add_argument(
        '--layout',
        type=str,
        default=None,
        help='Path to a JSON layout payload (overrides layout_path)'
    )
    parser.add_argument(
        '--editor',
        choices=('qt', 'uinput'),
        default=None,
        help='Where text goes: the demo window (qt) or the system-wide uinput device'
    )
    parser.add_argument(
        '--version',
        action='version',
        version='%(prog)s ' + __version__
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    """Load the config file and apply command-line overrides."""
    from softkeys.config import load_config

    config = load_config(args.config, args.debug)
    if args.debug:
        config['debug'] = True
    if args.layout:
        config['layout_path'] = args.layout
    if args.editor:
        config['editor'] = args.editor
    return config


def _trace_event(event) -> None:
    logging.getLogger('softkeys.events').trace(  # type: ignore[attr-defined]
        "%s %r", event.type.name, event.data,
    )


def run(config: dict) -> int:
    """Open the demo window with the keyboard installed and run the Qt loop."""
    from PyQt5.QtWidgets import QApplication

    from softkeys.core.default_layout import DEFAULT_LAYOUT
    from softkeys.core.event_bus import EventBus
    from softkeys.core.layout import load_layout
    from softkeys.ui.demo import DemoWindow
    from softkeys.ui.qt_host import install_keyboard

    layout = load_layout(config['layout_path']) if config.get('layout_path') else DEFAULT_LAYOUT

    editor = None
    if config.get('editor') == 'uinput':
        from softkeys.platform.uinput_editor import UInputTextEditor
        editor = UInputTextEditor(debug=config.get('debug', False))

    bus = EventBus()
    if config.get('debug'):
        bus.subscribe_all(_trace_event)

    app = QApplication.instance() or QApplication(sys.argv)
    window = DemoWindow()
    controller, tracker = install_keyboard(window, config, layout=layout, editor=editor, event_bus=bus)
    window.show()

    # Let Ctrl+C reach Python while the Qt loop runs
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    try:
        return app.exec_()
    finally:
        tracker.close()
        controller.close()
        if editor is not None:
            editor.close()


def main() -> int:
    """Main entry point for softkeys"""
    args = parse_args()

    # Setup logging first
    log = setup_logging(debug=args.debug, log_file=args.logfile)

    log.info(f"{'='*60}")
    log.info(f"softkeys started (version {__version__})")
    log.info(f"Debug mode: {args.debug}")
    log.info(f"PID: {os.getpid()}")
    log.info(f"{'='*60}")

    try:
        log.debug(f"Loading config from: {args.config or 'default'}")
        config = build_config(args)
        log.info("Config loaded")
    except Exception as e:
        log.error(f"Failed to load config: {e}")
        log.debug(traceback.format_exc())
        return 1

    exit_reason = None
    try:
        code = run(config)
        exit_reason = f"Normal completion (code {code})"
        return code

    except KeyboardInterrupt:
        exit_reason = "Keyboard interrupt (Ctrl+C)"
        return 0

    except ImportError as e:
        exit_reason = f"Missing dependency: {e}"
        log.error(f"Missing dependency: {e}")
        log.error("Install the GUI extra: pip install 'softkeys[gui]'")
        return 1

    except PermissionError as e:
        exit_reason = f"Permission denied: {e}"
        log.error(f"Permission error: {e}")
        log.error("The uinput editor needs write access to /dev/uinput.")
        log.debug(traceback.format_exc())
        return 1

    except OSError as e:
        exit_reason = f"OS error: {e}"
        log.error(f"OS error: {e}")
        log.debug(traceback.format_exc())
        return 1

    except Exception as e:
        exit_reason = f"Unhandled exception: {type(e).__name__}: {e}"
        log.error(f"Unhandled error: {e}")
        log.error(f"Error type: {type(e).__name__}")
        log.debug(traceback.format_exc())
        return 1

    finally:
        if exit_reason:
            log.info(f"Exit reason: {exit_reason}")
        log.info(f"{'='*60}")
        log.info("softkeys shutdown")
        log.info(f"{'='*60}")


if __name__ == '__main__':
    sys.exit(main())
