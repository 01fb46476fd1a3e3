"""Router configuration.

RouterConfig is a frozen dataclass, immutable after creation::

    config = RouterConfig(strict=True, configure_logging=True, log_to_console=True)
    router = Fade(config)
"""

from __future__ import annotations

from dataclasses import dataclass

from fade.logs import DEFAULT_LOG_FILE


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. All fields have defaults."""

    # Registration
    strict: bool = False  # validate every action when it is registered

    # Requests
    method_override_field: str = "_method"  # form field carrying PUT/DELETE over POST

    # Logging
    configure_logging: bool = False  # install fade.logs handlers when the router is built
    log_file: str | None = DEFAULT_LOG_FILE
    log_level: str = "info"
    log_format: str = "text"  # "text" or "json"
    log_to_console: bool = False
