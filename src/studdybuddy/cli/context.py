"""
Shared state for CLI commands: configuration, logging and client wiring.
"""

import logging
from typing import Optional

import click

from studdybuddy.core.config import ClientConfig, ConfigManager
from studdybuddy.factory import ClientFactory
from studdybuddy.logging import LoggingConfig, configure_logging

from . import __version__


def get_config_manager(ctx: click.Context) -> ConfigManager:
    return ctx.obj["config_manager"]


def load_config(ctx: click.Context) -> ClientConfig:
    """Load configuration once per invocation and set up logging from it."""
    if ctx.obj.get("config") is None:
        config = get_config_manager(ctx).load_config()
        setup_logging(config, ctx.obj.get("verbose", 0))
        ctx.obj["config"] = config
    return ctx.obj["config"]


def get_factory(ctx: click.Context) -> ClientFactory:
    if ctx.obj.get("factory") is None:
        ctx.obj["factory"] = ClientFactory(load_config(ctx))
    return ctx.obj["factory"]


def setup_logging(config: ClientConfig, verbose: int = 0) -> LoggingConfig:
    """Configure logging from the config file; ``-v``/``-vv`` raise verbosity."""
    logging_config = LoggingConfig.from_settings(config.logging, version=__version__)
    level: Optional[int] = None
    if verbose > 1:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    if level is not None:
        logging_config.level = min(level, logging_config.level)
    configure_logging(logging_config)
    return logging_config
