"""Apex server entry point — ``python -m apex.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from apex.core.config.settings import Settings, get_settings
from apex.core.server.app import create_app

logger = logging.getLogger(__name__)


def is_loopback_host(host: str) -> bool:
    """True for ``localhost`` or any loopback IP literal."""
    if host == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def check_bind(settings: Settings) -> None:
    """Refuse a non-loopback bind unless explicitly allowed.

    Raises:
        RuntimeError: If the host is not loopback and the override is off.
    """
    if settings.apex_allow_insecure_bind or is_loopback_host(settings.apex_host):
        return
    raise RuntimeError(
        f"Refusing to serve wellness logs on {settings.apex_host!r}: there is no auth layer. "
        "Set APEX_ALLOW_INSECURE_BIND=true to override (unsafe)."
    )


def run() -> None:
    """Start the Apex MCP server over streamable HTTP."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.apex_log_level.upper(), logging.INFO))
    check_bind(settings)

    logger.info(
        "Starting Apex Wellness on %s:%d (provider=%s)",
        settings.apex_host,
        settings.apex_port,
        settings.llm_provider,
    )
    create_app().run(
        transport="streamable-http",
        host=settings.apex_host,
        port=settings.apex_port,
    )


if __name__ == "__main__":
    run()
