# -*- coding: utf-8 -*-
"""测试用的假数据源、假时钟与论文构造函数"""
from citescout.models import RelatedPaper, SearchSource


class FakeSource:
    """
    假数据源

    papers_by_query: {检索词: [RelatedPaper]}，未登记的检索词返回 default
    error: 设置后 search() 抛出该异常
    """

    def __init__(self, source, papers_by_query=None, default=None, error=None):
        self.SOURCE = source
        self.papers_by_query = papers_by_query or {}
        self.default = default or []
        self.error = error
        self.queries = []

    @property
    def name(self):
        return self.SOURCE.value

    def search(self, query, limit=5, scorer=None):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        papers = self.papers_by_query.get(query, self.default)
        return [RelatedPaper(**vars(p)) for p in papers[:limit]]


class FakeClock:
    """可手动推进的时钟，sleep 只推进时间"""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make_paper(title, source=SearchSource.ARXIV, similarity=0.5, **kwargs):
    return RelatedPaper(
        id=kwargs.pop("id", f"{source.value}-{title[:10]}"),
        title=title,
        source=source,
        similarity=similarity,
        **kwargs,
    )




class SlowSource(FakeSource):
    """每次检索把假时钟推进 duration 秒，模拟耗时的外部请求"""

    def __init__(self, source, clock, duration=2.0, **kwargs):
        super().__init__(source, **kwargs)
        self.clock = clock
        self.duration = duration

    def search(self, query, limit=5, scorer=None):
        self.clock.now += self.duration
        return super().search(query, limit, scorer)
