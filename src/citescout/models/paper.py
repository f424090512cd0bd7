# -*- coding: utf-8 -*-
"""
相关论文数据模型
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Dict, Any


class SearchSource(Enum):
    """搜索来源（声明顺序即合并优先级）"""
    ARXIV = "arxiv"
    OPENALEX = "openalex"
    CROSSREF = "crossref"
    PUBMED = "pubmed"


# 字段缺失时的默认值
UNKNOWN_AUTHOR = "Unknown Author"
UNTITLED = "Untitled"
NO_ABSTRACT = "No abstract available"
UNKNOWN_YEAR = "Unknown"


@dataclass
class RelatedPaper:
    """
    外部数据源返回的相关论文

    statement / supporting_quote / citation_id 由聚合器填写，数据源不设置。

    Attributes:
        id: 论文编号（带数据源前缀）
        title: 标题
        authors: 作者列表
        year: 年份
        abstract: 摘要（超过 200 字符会被截断）
        url: 论文链接
        source: 数据源
        similarity: 相似度（0-1）
        statement: 关联的陈述
        supporting_quote: 支撑陈述的摘要句子
        citation_id: 触发本次检索的引用编号
    """
    id: str
    title: str = UNTITLED
    authors: List[str] = field(default_factory=list)
    year: str = UNKNOWN_YEAR
    abstract: str = NO_ABSTRACT
    url: str = ""
    source: SearchSource = SearchSource.ARXIV
    similarity: float = 0.0
    statement: Optional[str] = None
    supporting_quote: Optional[str] = None
    citation_id: Optional[str] = None

    @property
    def similarity_percent(self) -> int:
        return int(round(self.similarity * 100))

    def with_origin(
        self,
        citation_id: str,
        statement: Optional[str] = None,
        supporting_quote: Optional[str] = None,
    ) -> "RelatedPaper":
        """返回关联到指定引用的副本"""
        return replace(
            self,
            citation_id=citation_id,
            statement=statement,
            supporting_quote=supporting_quote,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "authors": list(self.authors),
            "year": self.year,
            "abstract": self.abstract,
            "url": self.url,
            "source": self.source.value,
            "similarity": round(self.similarity, 4),
            "statement": self.statement,
            "supportingQuote": self.supporting_quote,
            "citationId": self.citation_id,
        }

    def __repr__(self) -> str:
        return (f"RelatedPaper(source={self.source.value}, title={self.title[:40]!r}, "
                f"similarity={self.similarity:.2f})")
