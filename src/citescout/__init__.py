# CiteScout - 引文抽取与相关论文检索工具
"""
CiteScout 核心包

主要功能：
- extract_citations: 从文本中提取文中引用
- extract_statements: 提取需要文献支撑的陈述
- Aggregator: 多源（arXiv / OpenAlex / CrossRef / PubMed）检索并聚合相关论文
- CitationPipeline: 完整流水线（文本或 PDF -> 引用 + 相关论文）
"""

__version__ = "0.1.0"

from .models import (
    Citation,
    Statement,
    RelatedPaper,
    SearchSource,
    PipelineConfig,
)

from .errors import (
    CiteScoutError,
    InputValidationError,
    PatternConfigError,
    PdfExtractionError,
)

from .extractor import (
    PatternMatcher,
    CitationNormalizer,
    CitationExtractor,
    StatementExtractor,
    extract_citations,
    extract_statements,
)

from .sources import (
    ArxivSource,
    OpenAlexSource,
    CrossRefSource,
    PubMedSource,
    SimilarityScorer,
    default_sources,
)

from .scheduler import IntervalScheduler, QueryBudget
from .aggregator import Aggregator

from .pipeline import (
    CitationPipeline,
    PipelineResult,
    process_text,
    process_pdf,
)

__all__ = [
    # 数据模型
    'Citation',
    'Statement',
    'RelatedPaper',
    'SearchSource',
    'PipelineConfig',
    # 异常
    'CiteScoutError',
    'InputValidationError',
    'PatternConfigError',
    'PdfExtractionError',
    # 提取
    'PatternMatcher',
    'CitationNormalizer',
    'CitationExtractor',
    'StatementExtractor',
    'extract_citations',
    'extract_statements',
    # 数据源
    'ArxivSource',
    'OpenAlexSource',
    'CrossRefSource',
    'PubMedSource',
    'SimilarityScorer',
    'default_sources',
    # 聚合
    'IntervalScheduler',
    'QueryBudget',
    'Aggregator',
    # 流水线
    'CitationPipeline',
    'PipelineResult',
    'process_text',
    'process_pdf',
]
