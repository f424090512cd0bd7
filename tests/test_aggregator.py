# -*- coding: utf-8 -*-
"""
测试：多源聚合（假数据源，不访问网络）
"""
import sys
from pathlib import Path

import requests

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citescout.aggregator import Aggregator
from citescout.models import Citation, Statement, SearchSource
from citescout.scheduler import IntervalScheduler, QueryBudget
from citescout.sources import SimilarityScorer
from tests.fixtures.fakes import FakeSource, SlowSource, make_paper


ABSTRACT = ("Transformer models have reshaped translation research. "
            "We show that attention based models outperform recurrent networks on translation benchmarks.")


def _scheduler(clock):
    return IntervalScheduler(1.0, clock=clock, sleep=clock.sleep)


def _citation(i, title=None, **kwargs):
    return Citation(id=f"citation-{i}", text=f"Author{i} ({2000 + i})", title=title, **kwargs)


def _four_sources(**defaults):
    return [
        FakeSource(SearchSource.ARXIV, default=defaults.get("arxiv")),
        FakeSource(SearchSource.OPENALEX, default=defaults.get("openalex")),
        FakeSource(SearchSource.CROSSREF, default=defaults.get("crossref")),
        FakeSource(SearchSource.PUBMED, default=defaults.get("pubmed")),
    ]


def test_titles_differing_by_case_and_whitespace_merged(fake_clock):
    sources = _four_sources(
        arxiv=[make_paper("Deep Learning", SearchSource.ARXIV, 0.85)],
        crossref=[make_paper("deep learning ", SearchSource.CROSSREF, 0.95)],
    )
    papers = Aggregator(sources, _scheduler(fake_clock)).aggregate([_citation(1, "Deep learning")])

    assert len(papers) == 1
    assert papers[0].source == SearchSource.ARXIV
    assert papers[0].citation_id == "citation-1"


def test_all_providers_empty(fake_clock):
    papers = Aggregator(_four_sources(), _scheduler(fake_clock)).aggregate([_citation(1, "Nothing matches this")])
    assert papers == []


def test_three_failing_providers(fake_clock):
    timeout = requests.exceptions.Timeout("timed out")
    sources = [
        FakeSource(SearchSource.ARXIV, error=timeout),
        FakeSource(SearchSource.OPENALEX, error=timeout),
        FakeSource(SearchSource.CROSSREF, error=RuntimeError("bad payload")),
        FakeSource(SearchSource.PUBMED, default=[make_paper("Survivor paper", SearchSource.PUBMED, 0.6)]),
    ]
    papers = Aggregator(sources, _scheduler(fake_clock)).aggregate([_citation(1, "Some title here")])
    assert [p.title for p in papers] == ["Survivor paper"]


def test_search_all_keeps_declaration_order(fake_clock):
    sources = _four_sources(
        arxiv=[make_paper("A")],
        openalex=[make_paper("B")],
        pubmed=[make_paper("D")],
    )
    sources[2].error = ValueError("broken")
    results = Aggregator(sources, _scheduler(fake_clock)).search_all("query")
    assert [[p.title for p in r] for r in results] == [["A"], ["B"], [], ["D"]]


def test_only_first_three_citations_queried(fake_clock):
    sources = _four_sources()
    citations = [_citation(i, f"Title number {i}") for i in range(1, 6)]
    Aggregator(sources, _scheduler(fake_clock)).aggregate(citations)

    for source in sources:
        assert source.queries == ["Title number 1", "Title number 2", "Title number 3"]


def test_query_fallbacks(fake_clock):
    sources = _four_sources()
    citations = [
        Citation(id="c1", text="x", title="A real title"),
        Citation(id="c2", text="y", authors="Brown et al."),
        Citation(id="c3", text="z" * 150),
    ]
    Aggregator(sources, _scheduler(fake_clock)).aggregate(citations)
    assert sources[0].queries == ["A real title", "Brown et al.", "z" * 100]


def test_delay_between_citations(fake_clock):
    citations = [_citation(i, f"Title number {i}") for i in range(1, 4)]
    Aggregator(_four_sources(), _scheduler(fake_clock)).aggregate(citations)
    assert fake_clock.sleeps == [1.0, 1.0]


def test_delay_counted_from_end_of_slow_fanout(fake_clock):
    """数据源耗时超过间隔时，相邻两条引用之间仍等待完整间隔"""
    sources = [SlowSource(SearchSource.ARXIV, fake_clock, duration=2.0)]
    citations = [_citation(i, f"Title number {i}") for i in range(1, 4)]
    Aggregator(sources, _scheduler(fake_clock)).aggregate(citations)

    assert fake_clock.sleeps == [1.0, 1.0]
    assert len(sources[0].queries) == 3


def test_delay_after_discovery_before_aggregation(fake_clock):
    sources = [SlowSource(SearchSource.ARXIV, fake_clock, duration=3.0)]
    aggregator = Aggregator(sources, _scheduler(fake_clock))
    aggregator.discover(["The model improves accuracy."])
    aggregator.aggregate([_citation(1, "Some title here")])
    assert fake_clock.sleeps == [1.0]


def test_result_cap(fake_clock):
    def batch(prefix):
        return [make_paper(f"{prefix} paper {i}", similarity=0.5) for i in range(5)]

    sources = [
        FakeSource(SearchSource.ARXIV, papers_by_query={f"Title {c}": batch(f"arxiv {c}") for c in range(3)}),
        FakeSource(SearchSource.OPENALEX, papers_by_query={f"Title {c}": batch(f"openalex {c}") for c in range(3)}),
        FakeSource(SearchSource.CROSSREF, papers_by_query={f"Title {c}": batch(f"crossref {c}") for c in range(3)}),
        FakeSource(SearchSource.PUBMED, papers_by_query={f"Title {c}": batch(f"pubmed {c}") for c in range(3)}),
    ]
    citations = [_citation(c, f"Title {c}") for c in range(3)]
    papers = Aggregator(sources, _scheduler(fake_clock)).aggregate(citations)

    assert len(papers) == 15
    # 相似度相同，保持插入顺序：第一条引用的 arXiv 结果排在最前
    assert papers[0].title == "arxiv 0 paper 0"
    assert {p.citation_id for p in papers} == {"citation-0"}


def test_sorted_by_similarity_stable(fake_clock):
    sources = _four_sources(
        arxiv=[make_paper("Low", similarity=0.5), make_paper("Tie one", similarity=0.7)],
        openalex=[make_paper("High", similarity=0.9), make_paper("Tie two", similarity=0.7)],
    )
    papers = Aggregator(sources, _scheduler(fake_clock)).aggregate([_citation(1, "Some title")])
    assert [p.title for p in papers] == ["High", "Tie one", "Tie two", "Low"]


def test_budget_stops_fanout(fake_clock):
    sources = _four_sources()
    budget = QueryBudget(max_queries=1, clock=fake_clock)
    citations = [_citation(i, f"Title number {i}") for i in range(1, 4)]
    Aggregator(sources, _scheduler(fake_clock)).aggregate(citations, budget=budget)
    assert sources[0].queries == ["Title number 1"]


def test_statement_copied_from_discovered_citation(fake_clock):
    sources = _four_sources(arxiv=[make_paper("Attention models", abstract=ABSTRACT)])
    citation = Citation(
        id="discovered-1",
        text="Vaswani (2017). Attention models.",
        title="Attention models",
        statement="Attention based models outperform recurrent networks on translation.",
        supporting_quote="Fallback quote.",
    )
    paper = Aggregator(sources, _scheduler(fake_clock)).aggregate([citation])[0]

    assert paper.citation_id == "discovered-1"
    assert paper.statement == citation.statement
    assert paper.supporting_quote.startswith("We show that attention based models")


def test_existing_citation_has_no_statement(fake_clock):
    sources = _four_sources(arxiv=[make_paper("Attention models", abstract=ABSTRACT)])
    paper = Aggregator(sources, _scheduler(fake_clock)).aggregate([_citation(1, "Attention models")])[0]
    assert paper.statement is None
    assert paper.supporting_quote is None


def test_discover_builds_citations(fake_clock):
    papers = [
        make_paper("Attention is all you need", abstract=ABSTRACT, authors=["A. Vaswani", "N. Shazeer"],
                   year="2017"),
        make_paper("attention is all you need", SearchSource.OPENALEX),
        make_paper("Neural machine translation", abstract=ABSTRACT, authors=["D. Bahdanau"], year="2014"),
        make_paper("Third paper", abstract=ABSTRACT),
    ]
    sources = [FakeSource(SearchSource.ARXIV, default=papers)]
    statements = [
        Statement("Attention based models outperform recurrent networks on translation.", 0, 70, 0.8),
    ]
    citations = Aggregator(sources, _scheduler(fake_clock)).discover(statements, SimilarityScorer(1))

    assert len(citations) == 2
    assert {c.id for c in citations} == {"discovered-1", "discovered-2"}
    first = next(c for c in citations if c.id == "discovered-1")
    assert first.text == "A. Vaswani, N. Shazeer (2017). Attention is all you need."
    assert first.statement == statements[0].text
    assert first.supporting_quote.endswith(".")
    for c in citations:
        assert 0.85 <= c.confidence <= 0.95
    confidences = [c.confidence for c in citations]
    assert confidences == sorted(confidences, reverse=True)


def test_discover_limits(fake_clock):
    sources = _four_sources(arxiv=[make_paper(f"Paper {i}") for i in range(5)])
    statements = [f"The model number {i} improves accuracy." for i in range(6)]
    aggregator = Aggregator(sources, _scheduler(fake_clock))
    citations = aggregator.discover(statements)

    # 只检索前 3 条陈述，每条最多 2 篇，总数最多 5
    assert len(sources[0].queries) == 3
    assert len(citations) == 5
