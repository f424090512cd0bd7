# -*- coding: utf-8 -*-
"""
OpenAlex 数据源
"""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..models import (
    RelatedPaper, SearchSource,
    UNKNOWN_AUTHOR, UNTITLED, NO_ABSTRACT, UNKNOWN_YEAR,
)
from .base import BaseSource


def convert_inverted_abstract(inverted_index: Optional[Dict[str, List[int]]]) -> str:
    """
    将 OpenAlex 的 inverted index 摘要还原为文本

    {"word1": [0, 5], "word2": [1]} 表示 word1 出现在位置 0 和 5，word2 在位置 1。
    按位置排序后拼接。
    """
    if not inverted_index:
        return ""
    position_word = {}
    for word, positions in inverted_index.items():
        for pos in positions or []:
            position_word[pos] = word
    if not position_word:
        return ""
    return " ".join(position_word[pos] for pos in sorted(position_word))


@dataclass
class OpenAlexWork:
    """OpenAlex works 结果条目"""
    work_id: str
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    publication_year: Optional[int] = None
    abstract: str = ""
    doi: Optional[str] = None

    @classmethod
    def from_json(cls, work: Dict[str, Any]) -> "OpenAlexWork":
        authors = []
        for authorship in work.get("authorships") or []:
            name = ((authorship or {}).get("author") or {}).get("display_name")
            if name:
                authors.append(name)
        return cls(
            work_id=work.get("id") or "",
            title=work.get("title") or work.get("display_name"),
            authors=authors,
            publication_year=work.get("publication_year"),
            abstract=convert_inverted_abstract(work.get("abstract_inverted_index")),
            doi=work.get("doi"),
        )

    @property
    def url(self) -> str:
        if self.doi:
            if self.doi.startswith("http"):
                return self.doi
            return f"https://doi.org/{self.doi}"
        return self.work_id

    def to_related_paper(self) -> RelatedPaper:
        short_id = self.work_id.rstrip("/").split("/")[-1] if self.work_id else "unknown"
        return RelatedPaper(
            id=f"openalex-{short_id}",
            title=self.title or UNTITLED,
            authors=self.authors or [UNKNOWN_AUTHOR],
            year=str(self.publication_year) if self.publication_year else UNKNOWN_YEAR,
            abstract=self.abstract or NO_ABSTRACT,
            url=self.url,
            source=SearchSource.OPENALEX,
        )


class OpenAlexSource(BaseSource):
    """OpenAlex 检索客户端"""

    SOURCE = SearchSource.OPENALEX
    API_URL = "https://api.openalex.org/works"
    BASE_SCORE = 0.7
    SCORE_RANGE = 0.3

    def fetch(self, query: str, limit: int) -> List[OpenAlexWork]:
        params = {
            "search": query,
            "per_page": limit,
        }
        # mailto 进入 polite pool
        if self.contact_email:
            params["mailto"] = self.contact_email
        data = self._get(self.API_URL, params).json()
        return [OpenAlexWork.from_json(work) for work in data.get("results") or []]
