# -*- coding: utf-8 -*-
"""
PubMed 数据源

两次顺序请求：esearch 取 PMID 列表，再用 esummary 取详情。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from ..models import (
    RelatedPaper, SearchSource,
    UNKNOWN_AUTHOR, UNTITLED, NO_ABSTRACT, UNKNOWN_YEAR,
)
from .base import BaseSource


@dataclass
class PubMedSummary:
    """esummary 返回的单条记录"""
    uid: str
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    pubdate: str = ""
    abstract: str = ""

    @classmethod
    def from_json(cls, uid: str, record: Dict[str, Any]) -> "PubMedSummary":
        authors = [a.get("name") for a in record.get("authors") or [] if a and a.get("name")]
        return cls(
            uid=str(uid),
            title=(record.get("title") or "").strip() or None,
            authors=authors,
            pubdate=record.get("pubdate") or "",
            abstract=record.get("abstract") or "",
        )

    def to_related_paper(self) -> RelatedPaper:
        year = self.pubdate.split(" ")[0] if self.pubdate else ""
        return RelatedPaper(
            id=f"pubmed-{self.uid}",
            title=self.title or UNTITLED,
            authors=self.authors or [UNKNOWN_AUTHOR],
            year=year or UNKNOWN_YEAR,
            abstract=self.abstract or NO_ABSTRACT,
            url=f"https://pubmed.ncbi.nlm.nih.gov/{self.uid}/",
            source=SearchSource.PUBMED,
        )


class PubMedSource(BaseSource):
    """PubMed（NCBI E-utilities）检索客户端"""

    SOURCE = SearchSource.PUBMED
    ESEARCH_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/esearch.fcgi"
    ESUMMARY_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils/esummary.fcgi"
    BASE_SCORE = 0.5
    SCORE_RANGE = 0.5

    def _common_params(self) -> Dict[str, Any]:
        params = {"db": "pubmed", "retmode": "json"}
        if self.contact_email:
            params["tool"] = "citescout"
            params["email"] = self.contact_email
        return params

    def fetch(self, query: str, limit: int) -> List[PubMedSummary]:
        params = self._common_params()
        params.update({"term": query, "retmax": limit})
        data = self._get(self.ESEARCH_URL, params).json()
        ids = (data.get("esearchresult") or {}).get("idlist") or []
        if not ids:
            return []

        params = self._common_params()
        params["id"] = ",".join(ids[:limit])
        result = self._get(self.ESUMMARY_URL, params).json().get("result") or {}
        uids = result.get("uids") or ids
        return [PubMedSummary.from_json(uid, result[uid]) for uid in uids if uid in result]
