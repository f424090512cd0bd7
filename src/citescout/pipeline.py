# -*- coding: utf-8 -*-
"""
CiteScout 流水线

完整流程：
1. 输入文本（或 PDF，先提取文本）
2. 并行提取文中引用和需要支撑的陈述
3. 根据陈述反查文献，生成 discovered 引用
4. discovered 引用在前、已有引用在后，多源检索相关论文；返回的引用列表为已有引用 + discovered 引用
5. 组装结果

每次调用独立构造打分器、调度器和检索预算，请求之间不共享可变状态。
"""
import math
import time
import logging
import concurrent.futures
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Sequence, Callable

from .aggregator import Aggregator
from .converter import validate_pdf, extract_pdf_text, PDF_CONTENT_TYPE
from .errors import InputValidationError, PdfExtractionError
from .extractor import (
    CitationExtractor,
    StatementExtractor,
    PDF_BASE_CONFIDENCE,
    TEXT_BASE_CONFIDENCE,
)
from .models import Citation, Statement, RelatedPaper, PipelineConfig
from .scheduler import IntervalScheduler, QueryBudget
from .sources import BaseSource, SimilarityScorer, default_sources

logger = logging.getLogger(__name__)

CHARS_PER_PAGE = 2000


@dataclass
class ExtractionResult:
    """文本抽取结果（不涉及网络）"""
    citations: List[Citation] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)


@dataclass
class PipelineResult:
    """
    流水线处理结果

    Attributes:
        success: 是否成功
        error: 错误信息（如果失败）
        status_code: 建议的响应状态码
        citations: 已有引用 + discovered 引用
        related_papers: 相关论文（按相似度降序）
        statements: 抽取到的陈述
        text_length: 文本长度
        pages: 页数（文本输入按每页 2000 字符估算）
        existing_citations_count: 文中已有引用数
        discovered_citations_count: 根据陈述反查得到的引用数
        file_name: PDF 文件名
        total_time: 总耗时（秒）
    """
    success: bool = False
    error: Optional[str] = None
    status_code: int = 200
    citations: List[Citation] = field(default_factory=list)
    related_papers: List[RelatedPaper] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)
    text_length: int = 0
    pages: int = 0
    existing_citations_count: int = 0
    discovered_citations_count: int = 0
    file_name: Optional[str] = None
    total_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"error": self.error}
        data = {
            "citations": [c.to_dict() for c in self.citations],
            "relatedPapers": [p.to_dict() for p in self.related_papers],
            "textLength": self.text_length,
            "pages": self.pages,
            "statementsFound": [s.text for s in self.statements],
            "statements": [s.to_dict() for s in self.statements],
            "existingCitationsCount": self.existing_citations_count,
            "discoveredCitationsCount": self.discovered_citations_count,
        }
        if self.file_name is not None:
            data["fileName"] = self.file_name
        return data

    def __repr__(self) -> str:
        if self.success:
            return (f"PipelineResult(success=True, citations={len(self.citations)}, "
                    f"related_papers={len(self.related_papers)})")
        return f"PipelineResult(success=False, status_code={self.status_code}, error='{self.error}')"


class CitationPipeline:
    """
    引文检索流水线

    数据源客户端在构造时创建一次并在请求间复用（客户端本身无请求状态）。
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        sources: Optional[Sequence[BaseSource]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        初始化流水线

        Args:
            config: 流水线配置
            sources: 数据源客户端（默认按 config.sources 构建）
            clock: 单调时钟（调度器与预算使用）
            sleep: 等待函数（调度器使用）
        """
        self.config = config or PipelineConfig()
        if sources is None:
            sources = default_sources(
                self.config.sources,
                timeout=self.config.timeout,
                contact_email=self.config.contact_email,
            )
        self.sources = list(sources)
        self._clock = clock
        self._sleep = sleep

    def extract(self, text: str, base_confidence: float = TEXT_BASE_CONFIDENCE) -> ExtractionResult:
        """
        并行提取引用和陈述（纯计算，相同输入得到相同输出）
        """
        citation_extractor = CitationExtractor(base_confidence=base_confidence)
        statement_extractor = StatementExtractor(
            max_statements=self.config.max_statements,
            text_limit=self.config.statement_text_limit,
        )
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            future_citations = executor.submit(citation_extractor.extract, text)
            future_statements = executor.submit(statement_extractor.extract, text)
            return ExtractionResult(
                citations=future_citations.result(),
                statements=future_statements.result(),
            )

    def _new_aggregator(self) -> Aggregator:
        return Aggregator(
            self.sources,
            scheduler=IntervalScheduler(self.config.citation_delay, clock=self._clock, sleep=self._sleep),
            max_citations=self.config.max_citations,
            max_results=self.config.max_related_papers,
            per_source_limit=self.config.per_source_limit,
            max_discovery_statements=self.config.max_discovery_statements,
            discovered_per_statement=self.config.discovered_per_statement,
            max_discovered=self.config.max_discovered,
        )

    def _run(
        self,
        text: str,
        base_confidence: float,
        pages: Optional[int] = None,
        file_name: Optional[str] = None,
    ) -> PipelineResult:
        start_time = time.time()
        result = PipelineResult(file_name=file_name)

        logger.info("[Pipeline] 提取引用、提取陈述 开始")
        extraction = self.extract(text, base_confidence)
        logger.info(f"[Pipeline] 提取引用、提取陈述 结束，引用 {len(extraction.citations)} 条，"
                    f"陈述 {len(extraction.statements)} 条")

        if self.config.seed is not None:
            scorer = SimilarityScorer(self.config.seed)
        else:
            scorer = SimilarityScorer.for_text(text)
        budget = QueryBudget(self.config.max_fanouts, self.config.request_deadline, clock=self._clock)
        aggregator = self._new_aggregator()

        logger.info("[Pipeline] 根据陈述反查文献 开始")
        discovered = aggregator.discover(extraction.statements, scorer, budget)
        logger.info(f"[Pipeline] 根据陈述反查文献 结束，得到 {len(discovered)} 条")

        all_citations = list(extraction.citations) + discovered

        # 带陈述的 discovered 引用优先检索，已有引用排在其后
        logger.info("[Pipeline] 检索相关论文 开始")
        papers = aggregator.aggregate(discovered + list(extraction.citations), scorer, budget)
        if self.config.min_similarity > 0:
            papers = [p for p in papers if p.similarity >= self.config.min_similarity]
        logger.info(f"[Pipeline] 检索相关论文 结束，得到 {len(papers)} 篇")

        result.success = True
        result.citations = all_citations
        result.related_papers = papers
        result.statements = extraction.statements
        result.text_length = len(text)
        result.pages = pages if pages is not None else math.ceil(len(text) / CHARS_PER_PAGE)
        result.existing_citations_count = len(extraction.citations)
        result.discovered_citations_count = len(discovered)
        result.total_time = time.time() - start_time
        logger.info(f"[Pipeline] 全部完成，总耗时 {result.total_time:.1f}s")
        return result

    def process_text(self, text: Optional[str]) -> PipelineResult:
        """
        处理纯文本

        Args:
            text: 文本内容

        Returns:
            PipelineResult；空文本返回 400，内部异常返回 500
        """
        try:
            if not isinstance(text, str) or not text.strip():
                raise InputValidationError("Text content is required")
            return self._run(text, TEXT_BASE_CONFIDENCE)
        except InputValidationError as e:
            logger.warning(f"[Pipeline] 参数错误: {e.message}")
            return PipelineResult(success=False, error=e.message, status_code=e.status_code)
        except Exception as e:
            logger.exception("[Pipeline] 执行异常: %s", e)
            return PipelineResult(success=False, error="Failed to process text", status_code=500)

    def process_pdf(
        self,
        data: Optional[bytes],
        filename: Optional[str] = None,
        content_type: Optional[str] = PDF_CONTENT_TYPE,
    ) -> PipelineResult:
        """
        处理 PDF 文件

        Args:
            data: PDF 文件内容
            filename: 文件名（原样返回）
            content_type: 上传时声明的 MIME 类型

        Returns:
            PipelineResult；校验失败返回 400/413，PDF 无法解析或内部异常返回 500
        """
        try:
            validate_pdf(data, content_type, self.config.max_pdf_bytes)
            pdf_text = extract_pdf_text(data)
            return self._run(pdf_text.text, PDF_BASE_CONFIDENCE, pages=pdf_text.page_count, file_name=filename)
        except InputValidationError as e:
            logger.warning(f"[Pipeline] 参数错误: {e.message}")
            return PipelineResult(success=False, error=e.message, status_code=e.status_code)
        except PdfExtractionError as e:
            logger.error(f"[Pipeline] PDF 解析失败: {e}")
            return PipelineResult(success=False, error="Failed to parse PDF", status_code=500)
        except Exception as e:
            logger.exception("[Pipeline] 执行异常: %s", e)
            return PipelineResult(success=False, error="Failed to process PDF", status_code=500)


def process_text(text: str, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """便捷函数：使用默认数据源处理文本"""
    return CitationPipeline(config).process_text(text)


def process_pdf(
    data: bytes,
    filename: Optional[str] = None,
    config: Optional[PipelineConfig] = None,
) -> PipelineResult:
    """便捷函数：使用默认数据源处理 PDF"""
    return CitationPipeline(config).process_pdf(data, filename)
