"""Base controller for cluster data sources.

Both the kubectl-backed controller and the in-memory snapshot controller
derive from this class, so drain components can take either one.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """Base controller class for read-only cluster data sources.

    Subclasses implement the ``ClusterAccessor`` read methods and a cheap
    connectivity probe.
    """

    @abstractmethod
    async def check_connection(self) -> bool:
        """Check if the data source is available.

        Returns:
            True if connection is available, False otherwise
        """
        ...
