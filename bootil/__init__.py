"""Everyday utilities: name/value trees and JSON, console, debug output, platform and file helpers, change monitoring, threads, sockets, message routing, HTTP queries and images."""

__version__ = "0.1.0"