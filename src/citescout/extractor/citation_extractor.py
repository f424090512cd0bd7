# -*- coding: utf-8 -*-
"""
文中引用定位与规范化

从纯文本中按固定优先级匹配参考文献引用，并解析出作者、年份、标题和置信度。

支持的引用格式（按优先级）：
1. APA：Smith, J. (2020). Title. Journal, 5(2), 10-20.
2. MLA：Smith, J. "Title." Journal, vol. 5, no. 2, 2020, pp. 10-20.
3. Chicago：Smith, J., and K. Lee. "Title." Journal 5, no. 2 (2020): 10-20.
4. 括号作者年份型：(Smith, 2020), (Smith et al., 2020)
5. et al. 型：Smith et al. (2020)
6. 叙述作者年份型：Smith (2020)

输出：Citation 列表，按置信度降序（置信度相同时保持首次出现的顺序）
"""
import re
import logging
from typing import List, Optional, Dict, Any, Sequence, Tuple

from ..errors import PatternConfigError
from ..models import RawMatch, Citation

logger = logging.getLogger(__name__)


# (名称, 正则)，顺序即优先级
DEFAULT_PATTERNS: Tuple[Tuple[str, str], ...] = (
    ("apa",
     r'([A-Z][a-z]+,\s*[A-Z]\.\s*[A-Z]?\.?\s*(?:&\s*[A-Z][a-z]+,\s*[A-Z]\.\s*[A-Z]?\.?\s*)*'
     r'\(\d{4}\)\.\s*[^.]*\.\s*[^.]*,\s*\d+\(\d+\),\s*\d+-\d+\.)'),
    ("mla",
     r'([A-Z][a-z]+,\s*[A-Z]\.\s*"([^"]+)"\s*[^.]*,\s*vol\.\s*\d+,\s*no\.\s*\d+,\s*\d{4},\s*pp\.\s*\d+-\d+\.)'),
    ("chicago",
     r'([A-Z][a-z]+,\s*[A-Z]\.\s*[A-Z]?\.?\s*,\s*and\s*[A-Z]\.\s*[A-Z]?\.?\s*[A-Z][a-z]+\.\s*'
     r'"([^"]+)"\s*[^.]*,\s*\d+,\s*no\.\s*\d+\s*\(\d{4}\):\s*\d+-\d+\.)'),
    ("parenthetical",
     r'\(([A-Z][a-z]+(?:\s+et\s+al\.)?,\s*\d{4})\)'),
    ("et_al",
     r'([A-Z][a-z]+\s+et\s+al\.\s*\(\d{4}\))'),
    ("narrative",
     r'([A-Z][a-z]+\s+\(\d{4}\))'),
)

# 置信度加权
YEAR_WEIGHT = 0.2
AUTHORS_WEIGHT = 0.2
TITLE_WEIGHT = 0.1

# 流水线的基础置信度
PDF_BASE_CONFIDENCE = 0.5
TEXT_BASE_CONFIDENCE = 0.7

TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 200


class PatternMatcher:
    """
    引用模式匹配器

    所有模式在构造时编译，无法编译的模式立即抛出 PatternConfigError。
    """

    def __init__(self, patterns: Optional[Sequence[Tuple[str, str]]] = None):
        """
        Args:
            patterns: (名称, 正则) 序列，按优先级排列；默认使用 DEFAULT_PATTERNS
        """
        self.patterns = []
        for name, pattern in (patterns if patterns is not None else DEFAULT_PATTERNS):
            try:
                self.patterns.append((name, re.compile(pattern)))
            except re.error as e:
                raise PatternConfigError(name, e) from e

    def match(self, text: Optional[str]) -> List[RawMatch]:
        """
        按优先级依次应用所有模式

        捕获文本与之前结果完全相同的匹配会被丢弃。

        Args:
            text: 待匹配文本

        Returns:
            RawMatch 列表（按模式声明顺序）
        """
        if not text or not isinstance(text, str):
            return []

        results: List[RawMatch] = []
        seen = set()
        for index, (name, regex) in enumerate(self.patterns):
            for m in regex.finditer(text):
                if m.lastindex:
                    captured, span = m.group(1), m.span(1)
                else:
                    captured, span = m.group(0), m.span(0)
                if not captured or captured in seen:
                    continue
                seen.add(captured)
                results.append(RawMatch(text=captured, pattern_index=index, pattern_name=name, span=span))
        return results


class CitationNormalizer:
    """
    引用字段解析器

    从引用原文中提取年份、作者、标题并计算置信度。结果只取决于输入文本。
    """

    YEAR_PATTERN = re.compile(r'\b(?:19|20)\d{2}\b')
    # 起始处的 APA 作者块：Smith, J. A. & Lee, K.
    AUTHOR_BLOCK_PATTERN = re.compile(
        r'^([A-Z][a-z]+,\s*[A-Z]\.\s*[A-Z]?\.?\s*(?:&\s*[A-Z][a-z]+,\s*[A-Z]\.\s*[A-Z]?\.?\s*)*)'
    )
    ET_AL_PATTERN = re.compile(r'([A-Z][a-z]+\s*et\s*al\.)')
    # 叙述型：Smith (2020), Smith and Lee (2020)
    NARRATIVE_AUTHOR_PATTERN = re.compile(
        r'^([A-Z][a-z]+(?:\s+(?:and|&)\s+[A-Z][a-z]+)?)\s*\((?:19|20)\d{2}\)'
    )
    QUOTED_TITLE_PATTERN = re.compile(r'"([^"]+)"')
    APA_TITLE_PATTERN = re.compile(r'\((?:19|20)\d{2}\)\.\s*([^.]+)\.')

    def __init__(self, base_confidence: float = PDF_BASE_CONFIDENCE):
        self.base_confidence = base_confidence

    def extract_year(self, text: str) -> Optional[str]:
        m = self.YEAR_PATTERN.search(text)
        return m.group(0) if m else None

    def extract_authors(self, text: str) -> Optional[str]:
        m = self.AUTHOR_BLOCK_PATTERN.search(text)
        if m:
            return m.group(1).strip()
        m = self.ET_AL_PATTERN.search(text)
        if m:
            return m.group(1).strip()
        m = self.NARRATIVE_AUTHOR_PATTERN.search(text)
        if m:
            return m.group(1).strip()
        return None

    def extract_title(self, text: str, year: Optional[str] = None) -> Optional[str]:
        """
        提取标题

        依次尝试：引号内文本、APA 的 "(年份). 标题." 片段、作者块与年份之间的文本。
        长度不在 [10, 200] 内的候选被丢弃。
        """
        candidates = []
        m = self.QUOTED_TITLE_PATTERN.search(text)
        if m:
            candidates.append(m.group(1))
        m = self.APA_TITLE_PATTERN.search(text)
        if m:
            candidates.append(m.group(1))

        block = self.AUTHOR_BLOCK_PATTERN.search(text)
        if block and year:
            year_pos = text.find(year, block.end())
            if year_pos > block.end():
                between = text[block.end():year_pos]
                candidates.append(between.strip(' ,.;:("'))

        for candidate in candidates:
            title = re.sub(r'\s+', ' ', candidate).strip().rstrip('.,').strip()
            if TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
                return title
        return None

    def compute_confidence(self, has_year: bool, has_authors: bool, has_title: bool) -> float:
        confidence = self.base_confidence
        if has_year:
            confidence += YEAR_WEIGHT
        if has_authors:
            confidence += AUTHORS_WEIGHT
        if has_title:
            confidence += TITLE_WEIGHT
        return round(max(0.0, min(confidence, 1.0)), 2)

    def normalize(self, raw_text: str) -> Dict[str, Any]:
        """
        解析引用字段

        Args:
            raw_text: 引用原文

        Returns:
            {"authors", "year", "title", "confidence"}，缺失字段为 None
        """
        year = self.extract_year(raw_text)
        authors = self.extract_authors(raw_text)
        title = self.extract_title(raw_text, year)
        return {
            "authors": authors,
            "year": year,
            "title": title,
            "confidence": self.compute_confidence(year is not None, authors is not None, title is not None),
        }


class CitationExtractor:
    """
    引用提取器

    组合 PatternMatcher 与 CitationNormalizer，输出带编号的 Citation 列表。
    """

    def __init__(
        self,
        base_confidence: float = PDF_BASE_CONFIDENCE,
        matcher: Optional[PatternMatcher] = None,
        id_prefix: str = "citation",
    ):
        self.matcher = matcher or PatternMatcher()
        self.normalizer = CitationNormalizer(base_confidence)
        self.id_prefix = id_prefix

    def extract(self, text: Optional[str]) -> List[Citation]:
        raw_matches = self.matcher.match(text)
        citations = []
        for i, raw in enumerate(raw_matches, 1):
            fields = self.normalizer.normalize(raw.text)
            citations.append(Citation(id=f"{self.id_prefix}-{i}", text=raw.text, **fields))

        # sorted 是稳定排序，置信度相同时保持匹配顺序
        citations = sorted(citations, key=lambda c: c.confidence, reverse=True)
        logger.debug(f"匹配到 {len(raw_matches)} 条引用")
        return citations


def extract_citations(text: Optional[str], base_confidence: float = PDF_BASE_CONFIDENCE) -> List[Citation]:
    """
    便捷函数：从文本中提取引用

    Args:
        text: 输入文本
        base_confidence: 基础置信度（PDF 流水线 0.5，文本流水线 0.7）

    Returns:
        按置信度降序排列的 Citation 列表
    """
    return CitationExtractor(base_confidence=base_confidence).extract(text)
