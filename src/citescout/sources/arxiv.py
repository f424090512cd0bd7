# -*- coding: utf-8 -*-
"""
arXiv 数据源

返回 Atom XML。这里沿用按标签的正则提取而不是完整的 XML 解析：
缺少 title / summary / id 的条目直接跳过，嵌套或畸形标签可能导致字段丢失。
"""
import re
import html
from dataclasses import dataclass, field
from typing import List

from ..models import RelatedPaper, SearchSource, UNKNOWN_AUTHOR, UNKNOWN_YEAR
from .base import BaseSource


@dataclass
class ArxivEntry:
    """arXiv Atom 条目"""
    entry_id: str
    title: str
    summary: str
    authors: List[str] = field(default_factory=list)
    published: str = ""

    @property
    def short_id(self) -> str:
        return self.entry_id.rstrip("/").split("/")[-1]

    def to_related_paper(self) -> RelatedPaper:
        year = self.published[:4] if re.match(r'\d{4}', self.published) else UNKNOWN_YEAR
        return RelatedPaper(
            id=f"arxiv-{self.short_id}",
            title=self.title,
            authors=self.authors or [UNKNOWN_AUTHOR],
            year=year,
            abstract=self.summary,
            url=self.entry_id,
            source=SearchSource.ARXIV,
        )


def _clean_text(value: str) -> str:
    return re.sub(r'\s+', ' ', html.unescape(value)).strip()


def parse_arxiv_feed(content: str) -> List[ArxivEntry]:
    """
    解析 arXiv Atom 响应

    Args:
        content: 响应文本

    Returns:
        ArxivEntry 列表（跳过不完整条目）
    """
    entries = []
    for entry in re.findall(r'<entry>(.*?)</entry>', content, re.DOTALL):
        title_match = re.search(r'<title>(.*?)</title>', entry, re.DOTALL)
        summary_match = re.search(r'<summary>(.*?)</summary>', entry, re.DOTALL)
        id_match = re.search(r'<id>(.*?)</id>', entry, re.DOTALL)
        if not (title_match and summary_match and id_match):
            continue

        title = _clean_text(title_match.group(1))
        entry_id = id_match.group(1).strip()
        if not title or not entry_id:
            continue

        published_match = re.search(r'<published>(.*?)</published>', entry, re.DOTALL)
        authors = [
            _clean_text(name)
            for name in re.findall(r'<author>\s*<name>(.*?)</name>', entry, re.DOTALL)
        ]
        entries.append(ArxivEntry(
            entry_id=entry_id,
            title=title,
            summary=_clean_text(summary_match.group(1)),
            authors=[a for a in authors if a],
            published=published_match.group(1).strip() if published_match else "",
        ))
    return entries


class ArxivSource(BaseSource):
    """arXiv 检索客户端"""

    SOURCE = SearchSource.ARXIV
    API_URL = "http://export.arxiv.org/api/query"
    BASE_SCORE = 0.8
    SCORE_RANGE = 0.2

    @staticmethod
    def sanitize_query(query: str) -> str:
        """去除 arXiv 查询语法中的特殊字符（括号、冒号、引号等）"""
        if not query:
            return ""
        cleaned = re.sub(r'[()[\]{}:"\'\\/&|!^~*?]', ' ', query)
        return re.sub(r'\s+', ' ', cleaned).strip()

    def fetch(self, query: str, limit: int) -> List[ArxivEntry]:
        sanitized = self.sanitize_query(query)
        if not sanitized:
            return []
        params = {
            "search_query": f'all:"{sanitized}"',
            "start": 0,
            "max_results": limit,
        }
        response = self._get(self.API_URL, params)
        return parse_arxiv_feed(response.text)
