"""Dependency injection container."""

from expa_analytics.core.container.container import Container
from expa_analytics.core.container.factory import create_container

__all__ = ["Container", "create_container"]
