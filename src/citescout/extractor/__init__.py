# -*- coding: utf-8 -*-
"""
提取器模块
"""
from .citation_extractor import (
    PatternMatcher,
    CitationNormalizer,
    CitationExtractor,
    extract_citations,
    DEFAULT_PATTERNS,
    PDF_BASE_CONFIDENCE,
    TEXT_BASE_CONFIDENCE,
)

from .statement_extractor import (
    StatementExtractor,
    extract_statements,
)

from .query_terms import (
    extract_key_terms,
    extract_supporting_quote,
    statement_relevance,
    build_query,
)

__all__ = [
    # citation extractor
    'PatternMatcher',
    'CitationNormalizer',
    'CitationExtractor',
    'extract_citations',
    'DEFAULT_PATTERNS',
    'PDF_BASE_CONFIDENCE',
    'TEXT_BASE_CONFIDENCE',
    # statement extractor
    'StatementExtractor',
    'extract_statements',
    # query terms
    'extract_key_terms',
    'extract_supporting_quote',
    'statement_relevance',
    'build_query',
]
