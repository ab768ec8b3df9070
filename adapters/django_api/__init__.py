"""
Ticketing Django HTTP adapter.
Thin framework glue over core/http_api handlers.
"""

from adapters.django_api.wiring import (
    build_platform,
    install_platform,
    reset_platform,
)

__all__ = [
    "build_platform",
    "install_platform",
    "reset_platform",
]
