"""
Remote Gateway Package.

The only system boundary of the console.  Services depend on the
:class:`UserGateway` protocol and never on a concrete transport.

Usage:
    from directory_console.gateway import GatewayError, HttpUserGateway
"""

from directory_console.gateway.base import GatewayError, UserGateway
from directory_console.gateway.http_gateway import HttpUserGateway
from directory_console.gateway.memory_gateway import InMemoryUserGateway

__all__ = [
    "GatewayError",
    "HttpUserGateway",
    "InMemoryUserGateway",
    "UserGateway",
]
