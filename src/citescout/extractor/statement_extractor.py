# -*- coding: utf-8 -*-
"""
陈述（需要文献支撑的论断）提取器

基于关键词的启发式筛选，并非 NLP 分析，结果是近似的：
1. 按 .!? 切分句子，丢弃长度不足 10 的句子
2. 在句子中查找学术关键词，命中后取关键词前后各 50 个字符作为主题片段
3. 按文本去重，与已接受片段重叠的片段被剪除，最多保留 10 条
4. 全文无关键词命中时，退化为词频统计：取出现最多的 5 个长度大于 4 的非停用词
"""
import re
import logging
from collections import Counter
from typing import List, Optional, Tuple

from ..models import Statement

logger = logging.getLogger(__name__)


# 学术关键词表
STATEMENT_KEYWORDS = (
    "research", "study", "studies", "evidence", "analysis", "results", "findings",
    "demonstrates", "shows", "suggests", "indicates", "reveals", "method",
    "approach", "algorithm", "model", "framework", "dataset", "experiment",
    "performance", "accuracy", "effectiveness", "significant", "significantly",
    "correlation", "associated", "outperforms", "improves", "increases",
    "reduces", "compared", "hypothesis", "theory", "validation", "measurement",
)

STOP_WORDS = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of',
    'with', 'by', 'is', 'are', 'was', 'were', 'be', 'been', 'have', 'has', 'had',
    'do', 'does', 'did', 'will', 'would', 'could', 'should', 'may', 'might', 'can',
    'this', 'that', 'these', 'those', 'i', 'you', 'he', 'she', 'it', 'we', 'they',
    'me', 'him', 'her', 'us', 'them', 'who', 'what', 'when', 'where', 'why', 'how',
    'which', 'than', 'more', 'most', 'some', 'any', 'many', 'much', 'such', 'very',
    'also', 'just', 'only', 'even', 'still', 'yet', 'now', 'then', 'here', 'there',
    'about', 'after', 'before', 'their', 'other', 'being', 'while', 'into',
    'because', 'between', 'through', 'during', 'under', 'without', 'within',
})

SENTENCE_MIN_LENGTH = 10
WINDOW_RADIUS = 50
MAX_STATEMENTS = 10
FALLBACK_TOPICS = 5
FALLBACK_WORD_MIN_LENGTH = 5

KEYWORD_CONFIDENCE = 0.6
EXTRA_KEYWORD_BONUS = 0.1
MAX_KEYWORD_CONFIDENCE = 0.9
FALLBACK_CONFIDENCE = 0.3


class StatementExtractor:
    """
    陈述提取器

    返回的 Statement 互不重叠并按起始位置排序；任何输入都不会抛出异常。
    """

    SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]*')
    WORD_PATTERN = re.compile(r'[A-Za-z]+')

    def __init__(
        self,
        keywords=STATEMENT_KEYWORDS,
        max_statements: int = MAX_STATEMENTS,
        text_limit: Optional[int] = 8000,
        window_radius: int = WINDOW_RADIUS,
    ):
        self.keywords = tuple(k.lower() for k in keywords)
        self.max_statements = max_statements
        self.text_limit = text_limit
        self.window_radius = window_radius
        alternation = "|".join(re.escape(k) for k in sorted(self.keywords, key=len, reverse=True))
        self._keyword_pattern = re.compile(r'\b(?:' + alternation + r')\b', re.IGNORECASE)

    def split_sentences(self, text: str) -> List[Tuple[int, int]]:
        """切分句子，返回 (start, end) 区间，已去除首尾空白"""
        spans = []
        for m in self.SENTENCE_PATTERN.finditer(text):
            start, end = _strip_span(text, m.start(), m.end())
            if end - start >= SENTENCE_MIN_LENGTH:
                spans.append((start, end))
        return spans

    def extract(self, text: Optional[str]) -> List[Statement]:
        """
        提取陈述

        Args:
            text: 文档文本（超出 text_limit 的部分被忽略）

        Returns:
            按 start_index 排序的 Statement 列表
        """
        if not text or not isinstance(text, str):
            return []
        if self.text_limit is not None:
            text = text[:self.text_limit]

        accepted: List[Statement] = []
        seen_texts = set()
        keyword_hits = 0

        for sent_start, sent_end in self.split_sentences(text):
            if len(accepted) >= self.max_statements:
                break
            sentence = text[sent_start:sent_end]
            for hit in self._keyword_pattern.finditer(sentence):
                keyword_hits += 1
                if len(accepted) >= self.max_statements:
                    break
                start = max(sent_start, sent_start + hit.start() - self.window_radius)
                end = min(sent_end, sent_start + hit.end() + self.window_radius)
                start, end = _strip_span(text, start, end)
                if start >= end:
                    continue
                window = text[start:end]
                if window in seen_texts:
                    continue
                candidate = Statement(
                    text=window,
                    start_index=start,
                    end_index=end,
                    confidence=self._window_confidence(window),
                )
                if any(candidate.overlaps(s) for s in accepted):
                    continue
                seen_texts.add(window)
                accepted.append(candidate)

        if keyword_hits == 0:
            logger.debug("未命中关键词，使用词频回退")
            return self._frequency_fallback(text)

        return sorted(accepted, key=lambda s: s.start_index)

    def _window_confidence(self, window: str) -> float:
        distinct = {m.group(0).lower() for m in self._keyword_pattern.finditer(window)}
        bonus = EXTRA_KEYWORD_BONUS * max(len(distinct) - 1, 0)
        return round(min(KEYWORD_CONFIDENCE + bonus, MAX_KEYWORD_CONFIDENCE), 2)

    def _frequency_fallback(self, text: str) -> List[Statement]:
        counts = Counter()
        first_span = {}
        for m in self.WORD_PATTERN.finditer(text):
            word = m.group(0).lower()
            if len(word) < FALLBACK_WORD_MIN_LENGTH or word in STOP_WORDS:
                continue
            counts[word] += 1
            if word not in first_span:
                first_span[word] = m.span()

        statements = []
        for word, _ in counts.most_common(FALLBACK_TOPICS):
            start, end = first_span[word]
            statements.append(Statement(
                text=text[start:end],
                start_index=start,
                end_index=end,
                confidence=FALLBACK_CONFIDENCE,
            ))
        return sorted(statements, key=lambda s: s.start_index)


def _strip_span(text: str, start: int, end: int) -> Tuple[int, int]:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


def extract_statements(text: Optional[str], max_statements: int = MAX_STATEMENTS) -> List[Statement]:
    """便捷函数：提取陈述"""
    return StatementExtractor(max_statements=max_statements).extract(text)
