# -*- coding: utf-8 -*-
"""
检索词构造与支撑句提取
"""
import re
from typing import List, Optional

from ..models import Citation, RelatedPaper

STOP_WORDS = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of', 'with', 'by',
    'is', 'are', 'was', 'were', 'be', 'been', 'have', 'has', 'had', 'do', 'does', 'did',
    'will', 'would', 'could', 'should', 'may', 'might', 'can', 'this', 'that', 'these',
    'those', 'i', 'you', 'he', 'she', 'it', 'we', 'they', 'me', 'him', 'her', 'us', 'them',
    'who', 'what', 'when', 'where', 'why', 'how', 'which', 'than', 'more', 'most', 'some',
    'any', 'many', 'much', 'such', 'very', 'also', 'just', 'only', 'even', 'still', 'yet',
    'now', 'then', 'here', 'there',
})

# 优先保留的学术/技术词
PRIORITY_TERMS = re.compile(
    r'\b(?:algorithm|analysis|approach|assessment|data|development|evaluation|experiment|'
    r'framework|implementation|investigation|method|methodology|model|optimization|'
    r'performance|procedure|process|research|results|study|system|technique|technology|'
    r'test|validation|satellite|imaging|spectral|monitoring|detection|mapping|survey|'
    r'software|platform|application|architecture|database|processing|accuracy|precision|'
    r'effectiveness|efficiency|significant|correlation|improvement|quality|reliability|'
    r'demonstrate|evaluate|investigate|analyze|measure|validate|outcomes|findings|'
    r'implications|impact|benefits|limitations|challenges|potential)\b',
    re.IGNORECASE,
)

MAX_KEY_TERMS = 8
QUERY_TEXT_LIMIT = 100


def _clean(text: str) -> str:
    cleaned = re.sub(r'[^\w\s]', ' ', text)
    return re.sub(r'\s+', ' ', cleaned).strip()


def extract_key_terms(statement: str, max_terms: int = MAX_KEY_TERMS) -> str:
    """
    从陈述中提取检索关键词

    优先学术词，其余按词长降序；去除停用词和长度不超过 2 的词。

    Args:
        statement: 陈述文本
        max_terms: 最多保留的词数

    Returns:
        以空格连接的关键词；无可用词时返回清洗后的小写原文
    """
    cleaned = _clean(statement or "")
    priority = [m.group(0).lower() for m in PRIORITY_TERMS.finditer(cleaned)]
    words = [w for w in cleaned.lower().split() if len(w) > 2 and w not in STOP_WORDS]

    # 去重并保持出现顺序
    unique: List[str] = list(dict.fromkeys(priority + words))
    priority_set = set(priority)
    # sorted 稳定：同优先级、同长度时保持原顺序
    ranked = sorted(unique, key=lambda w: (0 if w in priority_set else 1, -len(w)))
    terms = ranked[:max_terms]
    if terms:
        return " ".join(terms)
    return cleaned.lower()


def extract_supporting_quote(statement: str, abstract: Optional[str]) -> Optional[str]:
    """
    从摘要中找出最能支撑陈述的句子

    Args:
        statement: 陈述文本
        abstract: 论文摘要

    Returns:
        命中关键词最多的句子（带句号）；摘要过短或无合适句子时返回 None
    """
    if not abstract or len(abstract) < 50:
        return None

    terms = [t for t in extract_key_terms(statement).lower().split() if t]
    sentences = [s.strip() for s in re.split(r'[.!?]+', abstract)]
    sentences = [s for s in sentences if len(s) > 20]

    best, best_score = None, 0
    for sentence in sentences:
        lower = sentence.lower()
        score = sum(1 for term in terms if term in lower)
        if score > best_score:
            best, best_score = sentence, score

    if best is None:
        best = next((s for s in sentences if 30 < len(s) < 200), None)
        if best is None:
            return None
    return best + "."


def statement_relevance(statement: str, paper: RelatedPaper) -> float:
    """
    陈述与论文的词重合度（0-1）

    标题或摘要出现任一关键词各计 0.5，每个共同词再计 0.2，最后按计分项数归一化。
    """
    terms = extract_key_terms(statement).lower().split()
    title_terms = set(paper.title.lower().split())
    abstract_terms = set((paper.abstract or "").lower().split())

    score, count = 0.0, 0
    if title_terms.intersection(terms):
        score += 0.5
        count += 1
    if abstract_terms.intersection(terms):
        score += 0.5
        count += 1
    common = [t for t in terms if t in title_terms or t in abstract_terms]
    if common:
        score += 0.2 * len(common)
        count += len(common)
    return min(score / count, 1.0) if count else 0.0


def build_query(citation: Citation) -> str:
    """检索词：标题，其次作者，最后取引用原文前 100 个字符"""
    if citation.title:
        return citation.title
    if citation.authors:
        return citation.authors
    return citation.text[:QUERY_TEXT_LIMIT]
