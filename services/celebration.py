# services/celebration.py

import time
import logging
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class CelebrationThrottle:
    """Не чаще одного празднования на причину за период cooldown"""

    def __init__(self, cooldown: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        if cooldown is None:
            from config import config
            cooldown = config.tracker.celebration_cooldown

        self.cooldown = cooldown
        self.clock = clock
        self._locked_until: Dict[str, float] = {}

    def trigger(self, reason: str = "goal") -> bool:
        """True - праздновать, False - повтор в период блокировки"""
        now = self.clock()
        if now < self._locked_until.get(reason, 0.0):
            return False

        self._locked_until[reason] = now + self.cooldown
        logger.debug(f"Celebration triggered: {reason}")
        return True

    def is_locked(self, reason: str = "goal") -> bool:
        return self.clock() < self._locked_until.get(reason, 0.0)

    def reset(self) -> None:
        self._locked_until.clear()
