"""dojo logging configuration.

dojo uses the shared InstruktAI logging standard (`instrukt_ai_logging`).
Logs land in the canonical per-app location managed by that package, never in
the repository or a workspace (agents would otherwise see them as changes).
Example log query: `instruktai-python-logs dojo --since 10m`.
"""

from __future__ import annotations

import os
from typing import Optional

from instrukt_ai_logging import configure_logging


def setup_logging(level: Optional[str] = None) -> None:
    """Configure dojo logging.

    Args:
        level: Optional override for `DOJO_LOG_LEVEL`.
    """
    if level:
        os.environ["DOJO_LOG_LEVEL"] = level

    configure_logging("dojo")
