# -*- coding: utf-8 -*-
"""
测试：检索间隔调度与请求预算（使用假时钟，不真实等待）
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citescout.scheduler import IntervalScheduler, QueryBudget


def test_first_wait_is_immediate(fake_clock):
    scheduler = IntervalScheduler(1.0, clock=fake_clock, sleep=fake_clock.sleep)
    assert scheduler.wait() == 0.0
    assert fake_clock.sleeps == []


def test_waits_remaining_interval(fake_clock):
    scheduler = IntervalScheduler(1.0, clock=fake_clock, sleep=fake_clock.sleep)
    scheduler.wait()
    fake_clock.now += 0.25
    assert scheduler.wait() == 0.75
    scheduler.wait()
    assert fake_clock.sleeps == [0.75, 1.0]


def test_no_wait_after_interval_elapsed(fake_clock):
    scheduler = IntervalScheduler(1.0, clock=fake_clock, sleep=fake_clock.sleep)
    scheduler.wait()
    fake_clock.now += 5
    assert scheduler.wait() == 0.0
    assert fake_clock.sleeps == []


def test_reset(fake_clock):
    scheduler = IntervalScheduler(1.0, clock=fake_clock, sleep=fake_clock.sleep)
    scheduler.wait()
    scheduler.reset()
    assert scheduler.wait() == 0.0


def test_budget_query_limit(fake_clock):
    budget = QueryBudget(max_queries=2, clock=fake_clock)
    assert budget.consume()
    assert budget.consume()
    assert not budget.consume()
    assert budget.used == 2
    assert budget.exhausted()


def test_budget_deadline(fake_clock):
    budget = QueryBudget(deadline=10.0, clock=fake_clock)
    assert budget.remaining_time() == 10.0
    fake_clock.now += 4
    assert budget.remaining_time() == 6.0
    assert budget.consume()
    fake_clock.now += 6
    assert budget.exhausted()
    assert not budget.consume()


def test_unlimited_budget(fake_clock):
    budget = QueryBudget(clock=fake_clock)
    fake_clock.now += 10_000
    assert budget.remaining_time() is None
    assert all(budget.consume() for _ in range(50))


def test_interval_counted_from_mark_done(fake_clock):
    """检索耗时不计入间隔，下一次 wait() 从 mark_done() 开始计时"""
    scheduler = IntervalScheduler(1.0, clock=fake_clock, sleep=fake_clock.sleep)
    scheduler.wait()
    fake_clock.now += 2.5
    scheduler.mark_done()
    fake_clock.now += 0.5
    assert scheduler.wait() == 0.5
    assert fake_clock.sleeps == [0.5]
