# -*- coding: utf-8 -*-
"""
检索节流与请求预算

- IntervalScheduler: 固定间隔调度，两次检索之间至少间隔 interval 秒
- QueryBudget: 单次请求的检索批次上限与总时限

时钟和 sleep 都可注入，测试时无需真实等待。
"""
import time
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class IntervalScheduler:
    """
    固定间隔调度器

    第一次 wait() 不等待；之后每次 wait() 保证距上一批检索结束至少 interval 秒。
    检索批次结束时调用 mark_done()；未调用时按上一次放行时刻计算。
    """

    def __init__(
        self,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._last = None

    def wait(self) -> float:
        """
        等待到下一个可执行时刻

        Returns:
            实际等待的秒数
        """
        waited = 0.0
        if self._last is not None:
            elapsed = self._clock() - self._last
            if elapsed < self.interval:
                waited = self.interval - elapsed
                logger.debug(f"检索间隔等待 {waited:.2f}s")
                self._sleep(waited)
        self._last = self._clock()
        return waited

    def mark_done(self):
        """记录一批检索结束的时刻，下一次 wait() 从此刻开始计时"""
        self._last = self._clock()

    def reset(self):
        self._last = None


class QueryBudget:
    """
    单次请求的检索预算

    Attributes:
        max_queries: 允许的检索批次数（None 表示不限）
        deadline: 从创建起的总时限（秒，None 表示不限）
    """

    def __init__(
        self,
        max_queries: Optional[int] = None,
        deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_queries = max_queries
        self.deadline = deadline
        self._clock = clock
        self._started = clock()
        self.used = 0

    def remaining_time(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(self.deadline - (self._clock() - self._started), 0.0)

    def exhausted(self) -> bool:
        if self.max_queries is not None and self.used >= self.max_queries:
            return True
        remaining = self.remaining_time()
        return remaining is not None and remaining <= 0

    def consume(self) -> bool:
        """
        占用一次检索批次

        Returns:
            预算已耗尽时返回 False，不计数
        """
        if self.exhausted():
            return False
        self.used += 1
        return True
