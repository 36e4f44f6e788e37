"""Base controller classes."""

from kubedrain.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
