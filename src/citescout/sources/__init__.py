# -*- coding: utf-8 -*-
"""
学术数据源模块

合并优先级即声明顺序：arXiv -> OpenAlex -> CrossRef -> PubMed
"""
from typing import List, Optional, Sequence

import requests

from .base import BaseSource, truncate_abstract
from .scoring import SimilarityScorer, normalize_title
from .arxiv import ArxivSource, ArxivEntry, parse_arxiv_feed
from .openalex import OpenAlexSource, OpenAlexWork, convert_inverted_abstract
from .crossref import CrossRefSource, CrossRefItem, strip_jats
from .pubmed import PubMedSource, PubMedSummary

SOURCE_CLASSES = {
    "arxiv": ArxivSource,
    "openalex": OpenAlexSource,
    "crossref": CrossRefSource,
    "pubmed": PubMedSource,
}


def default_sources(
    names: Optional[Sequence[str]] = None,
    session: Optional[requests.Session] = None,
    timeout: int = 10,
    contact_email: Optional[str] = None,
) -> List[BaseSource]:
    """
    按名称构建数据源客户端

    未传入 session 时每个客户端各自创建 Session（客户端在不同线程中并发请求）

    Args:
        names: 数据源名称列表，默认全部；未知名称抛出 ValueError

    Returns:
        按声明顺序排列的客户端列表
    """
    names = list(names) if names is not None else list(SOURCE_CLASSES)
    unknown = [n for n in names if n not in SOURCE_CLASSES]
    if unknown:
        raise ValueError(f"未知的数据源: {', '.join(unknown)}")
    return [
        SOURCE_CLASSES[name](session=session, timeout=timeout, contact_email=contact_email)
        for name in SOURCE_CLASSES if name in names
    ]


__all__ = [
    'BaseSource',
    'truncate_abstract',
    'SimilarityScorer',
    'normalize_title',
    'ArxivSource',
    'ArxivEntry',
    'parse_arxiv_feed',
    'OpenAlexSource',
    'OpenAlexWork',
    'convert_inverted_abstract',
    'CrossRefSource',
    'CrossRefItem',
    'strip_jats',
    'PubMedSource',
    'PubMedSummary',
    'SOURCE_CLASSES',
    'default_sources',
]
