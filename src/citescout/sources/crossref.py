# -*- coding: utf-8 -*-
"""
CrossRef 数据源
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..models import (
    RelatedPaper, SearchSource,
    UNKNOWN_AUTHOR, UNTITLED, NO_ABSTRACT, UNKNOWN_YEAR,
)
from .base import BaseSource


def strip_jats(abstract: Optional[str]) -> str:
    """去除 CrossRef 摘要中的 JATS 标签（<jats:p> 等）"""
    if not abstract:
        return ""
    text = re.sub(r'<[^>]+>', ' ', abstract)
    return re.sub(r'\s+', ' ', text).strip()


def _first_year(*date_fields: Optional[Dict[str, Any]]) -> Optional[int]:
    for date_field in date_fields:
        try:
            year = date_field["date-parts"][0][0]
        except (KeyError, IndexError, TypeError):
            continue
        if year:
            return year
    return None


@dataclass
class CrossRefItem:
    """CrossRef works 结果条目"""
    doi: str
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    year: Optional[int] = None
    abstract: str = ""
    url: Optional[str] = None

    @classmethod
    def from_json(cls, item: Dict[str, Any]) -> "CrossRefItem":
        titles = item.get("title") or []
        authors = []
        for author in item.get("author") or []:
            name = f"{author.get('given', '')} {author.get('family', '')}".strip()
            if name:
                authors.append(name)

        abstract = strip_jats(item.get("abstract"))
        if not abstract:
            subtitles = item.get("subtitle") or []
            abstract = subtitles[0] if subtitles else ""

        return cls(
            doi=item.get("DOI") or "",
            title=re.sub(r'\s+', ' ', titles[0]).strip() if titles else None,
            authors=authors,
            year=_first_year(item.get("published"), item.get("issued")),
            abstract=abstract,
            url=item.get("URL"),
        )

    def to_related_paper(self) -> RelatedPaper:
        url = f"https://doi.org/{self.doi}" if self.doi else (self.url or "")
        return RelatedPaper(
            id=f"crossref-{self.doi or 'unknown'}",
            title=self.title or UNTITLED,
            authors=self.authors or [UNKNOWN_AUTHOR],
            year=str(self.year) if self.year else UNKNOWN_YEAR,
            abstract=self.abstract or NO_ABSTRACT,
            url=url,
            source=SearchSource.CROSSREF,
        )


class CrossRefSource(BaseSource):
    """CrossRef 检索客户端"""

    SOURCE = SearchSource.CROSSREF
    API_URL = "https://api.crossref.org/works"
    BASE_SCORE = 0.6
    SCORE_RANGE = 0.4

    def fetch(self, query: str, limit: int) -> List[CrossRefItem]:
        params = {
            "query": query,
            "rows": limit,
        }
        if self.contact_email:
            params["mailto"] = self.contact_email
        data = self._get(self.API_URL, params).json()
        items = (data.get("message") or {}).get("items") or []
        return [CrossRefItem.from_json(item) for item in items]
