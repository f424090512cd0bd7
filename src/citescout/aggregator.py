# -*- coding: utf-8 -*-
"""
多源相关论文聚合器

对每条引用：构造检索词 -> 并发查询所有数据源 -> 按数据源声明顺序合并 ->
按标准化标题去重（先出现者保留）-> 截断到上限；引用之间按固定间隔节流。
最终按相似度降序排列（相同相似度保持插入顺序）。

单个数据源失败只会让它贡献零条结果，不会使聚合失败。
"""
import logging
import concurrent.futures
from typing import List, Optional, Sequence, Union

from .models import Citation, Statement, RelatedPaper
from .extractor import build_query, extract_key_terms, extract_supporting_quote, statement_relevance
from .scheduler import IntervalScheduler, QueryBudget
from .sources import BaseSource, SimilarityScorer, normalize_title

logger = logging.getLogger(__name__)

DISCOVERED_BASE_CONFIDENCE = 0.85
DISCOVERED_RELEVANCE_WEIGHT = 0.1
DISCOVERED_MAX_CONFIDENCE = 0.95


class Aggregator:
    """
    相关论文聚合器

    数据源客户端由外部构造后注入，测试时可替换为假实现。
    """

    def __init__(
        self,
        sources: Sequence[BaseSource],
        scheduler: Optional[IntervalScheduler] = None,
        max_citations: int = 3,
        max_results: int = 15,
        per_source_limit: int = 5,
        max_discovery_statements: int = 3,
        discovered_per_statement: int = 2,
        max_discovered: int = 5,
    ):
        """
        Args:
            sources: 数据源客户端，顺序即合并优先级
            scheduler: 检索间隔调度器（默认间隔 1 秒）
            max_citations: 参与检索的引用数上限
            max_results: 去重后保留的论文上限
            per_source_limit: 每个数据源每次返回的结果上限
            max_discovery_statements: 用于反查文献的陈述数
            discovered_per_statement: 每条陈述保留的反查结果数
            max_discovered: 反查得到的引用总数上限
        """
        self.sources = list(sources)
        self.scheduler = scheduler or IntervalScheduler(1.0)
        self.max_citations = max_citations
        self.max_results = max_results
        self.per_source_limit = per_source_limit
        self.max_discovery_statements = max_discovery_statements
        self.discovered_per_statement = discovered_per_statement
        self.max_discovered = max_discovered

    def search_all(
        self,
        query: str,
        scorer: Optional[SimilarityScorer] = None,
        key: str = "",
    ) -> List[List[RelatedPaper]]:
        """
        并发查询所有数据源，等待全部完成

        Args:
            query: 检索词
            scorer: 打分器；每个数据源使用以 key 派生的子打分器
            key: 派生子打分器的标识

        Returns:
            与 self.sources 顺序一致的结果列表，失败的数据源对应空列表
        """
        if not self.sources:
            return []

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(self.sources)) as executor:
            futures = [
                executor.submit(
                    source.search,
                    query,
                    self.per_source_limit,
                    scorer.child(f"{key}:{source.name}") if scorer else None,
                )
                for source in self.sources
            ]

            results = []
            for source, future in zip(self.sources, futures):
                try:
                    results.append(future.result() or [])
                except Exception as e:
                    logger.warning(f"{source.name} 检索失败: {e}")
                    results.append([])
        return results

    def _start_fanout(self, budget: Optional[QueryBudget]) -> bool:
        if budget is not None and not budget.consume():
            logger.warning(f"检索预算已耗尽，已执行 {budget.used} 批")
            return False
        self.scheduler.wait()
        return True

    def _fanout(
        self,
        query: str,
        scorer: Optional[SimilarityScorer],
        key: str,
    ) -> List[List[RelatedPaper]]:
        # 间隔从本批检索全部返回后开始计时
        try:
            return self.search_all(query, scorer, key=key)
        finally:
            self.scheduler.mark_done()

    def aggregate(
        self,
        citations: Sequence[Citation],
        scorer: Optional[SimilarityScorer] = None,
        budget: Optional[QueryBudget] = None,
    ) -> List[RelatedPaper]:
        """
        为引用检索相关论文

        Args:
            citations: 引用列表（只取前 max_citations 条）
            scorer: 相似度打分器
            budget: 本次请求的检索预算

        Returns:
            去重后按相似度降序排列的 RelatedPaper 列表
        """
        merged: List[RelatedPaper] = []
        seen_titles = set()

        for citation in list(citations)[:self.max_citations]:
            if len(merged) >= self.max_results:
                break
            query = build_query(citation)
            if not query.strip():
                continue
            if not self._start_fanout(budget):
                break

            logger.info(f"检索引用 {citation.id}: {query[:60]}")
            for papers in self._fanout(query, scorer, key=citation.id):
                for paper in papers:
                    title_key = normalize_title(paper.title)
                    if title_key in seen_titles or len(merged) >= self.max_results:
                        continue
                    seen_titles.add(title_key)
                    quote = None
                    if citation.statement:
                        quote = extract_supporting_quote(citation.statement, paper.abstract) \
                            or citation.supporting_quote
                    merged.append(paper.with_origin(citation.id, citation.statement, quote))

        # sorted 稳定：相似度相同的保持插入顺序
        return sorted(merged, key=lambda p: p.similarity, reverse=True)

    def discover(
        self,
        statements: Sequence[Union[Statement, str]],
        scorer: Optional[SimilarityScorer] = None,
        budget: Optional[QueryBudget] = None,
    ) -> List[Citation]:
        """
        根据陈述反查可作为支撑的文献，生成 discovered-N 引用

        Args:
            statements: 陈述列表（只取前 max_discovery_statements 条）
            scorer: 相似度打分器
            budget: 本次请求的检索预算

        Returns:
            按置信度降序排列的引用，最多 max_discovered 条
        """
        discovered: List[Citation] = []
        counter = 1

        for index, statement in enumerate(list(statements)[:self.max_discovery_statements]):
            text = statement.text if isinstance(statement, Statement) else str(statement)
            key_terms = extract_key_terms(text)
            if not key_terms.strip():
                continue
            if not self._start_fanout(budget):
                break

            logger.info(f"根据陈述检索: {key_terms[:60]}")
            unique: List[RelatedPaper] = []
            seen_titles = set()
            for papers in self._fanout(key_terms, scorer, key=f"statement-{index}"):
                for paper in papers:
                    title_key = normalize_title(paper.title)
                    if title_key not in seen_titles:
                        seen_titles.add(title_key)
                        unique.append(paper)

            for paper in unique[:self.discovered_per_statement]:
                authors = ", ".join(paper.authors)
                relevance = statement_relevance(text, paper)
                confidence = min(DISCOVERED_BASE_CONFIDENCE + relevance * DISCOVERED_RELEVANCE_WEIGHT,
                                 DISCOVERED_MAX_CONFIDENCE)
                discovered.append(Citation(
                    id=f"discovered-{counter}",
                    text=f"{authors} ({paper.year}). {paper.title}.",
                    authors=authors,
                    year=paper.year,
                    title=paper.title,
                    confidence=round(confidence, 4),
                    statement=text,
                    supporting_quote=extract_supporting_quote(text, paper.abstract),
                ))
                counter += 1

        discovered = sorted(discovered, key=lambda c: c.confidence, reverse=True)
        return discovered[:self.max_discovered]
