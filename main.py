"""
Stock Dashboard - Main Entry Point
==================================
Run this file to start the portfolio / fair value CLI.
Usage: python main.py
"""

from stockdash.cli import CLI
from stockdash.config import Config, setup_logging


def main():
    config = Config.from_env()
    setup_logging(config.log_level)
    cli = CLI(config)
    cli.run()


if __name__ == "__main__":
    main()
