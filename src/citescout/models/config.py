# -*- coding: utf-8 -*-
"""
流水线配置
"""
import os
from dataclasses import dataclass, field
from typing import Optional, List


@dataclass
class PipelineConfig:
    """
    引文检索流水线配置

    Attributes:
        timeout: 单次外部 API 请求超时（秒）
        per_source_limit: 每个数据源每次检索返回的最大结果数
        max_citations: 参与检索的引用数上限（取排序后的前 N 条）
        max_related_papers: 去重后保留的相关论文上限
        citation_delay: 相邻两次引用检索之间的间隔（秒）
        max_statements: 每篇文档抽取的陈述上限
        statement_text_limit: 陈述抽取时截取的文本长度
        max_discovery_statements: 用于反查文献的陈述数
        discovered_per_statement: 每条陈述保留的反查结果数
        max_discovered: 反查得到的引用总数上限
        request_deadline: 单次请求的检索总时限（秒），None 表示不限
        max_fanouts: 单次请求允许的检索批次数上限
        max_pdf_bytes: PDF 文件大小上限（字节）
        min_similarity: 相关论文最低相似度（0-1），低于该值的结果被过滤
        seed: 相似度随机数种子；None 表示按输入文本派生
        contact_email: 联系邮箱（OpenAlex/CrossRef polite pool，NCBI email 参数）
        sources: 启用的数据源名称，按合并优先级排列
    """
    timeout: int = 10
    per_source_limit: int = 5
    max_citations: int = 3
    max_related_papers: int = 15
    citation_delay: float = 1.0
    max_statements: int = 10
    statement_text_limit: int = 8000
    max_discovery_statements: int = 3
    discovered_per_statement: int = 2
    max_discovered: int = 5
    request_deadline: Optional[float] = 45.0
    max_fanouts: int = 6
    max_pdf_bytes: int = 50 * 1024 * 1024
    min_similarity: float = 0.0
    seed: Optional[int] = None
    contact_email: Optional[str] = None
    sources: List[str] = field(default_factory=lambda: ["arxiv", "openalex", "crossref", "pubmed"])

    @classmethod
    def from_env(cls, prefix: str = "CITESCOUT_") -> "PipelineConfig":
        """
        从环境变量读取配置，未设置的项使用默认值

        支持: TIMEOUT, CITATION_DELAY, REQUEST_DEADLINE, MIN_SIMILARITY,
        SEED, CONTACT_EMAIL, SOURCES（逗号分隔）
        """
        config = cls()

        def _get(name: str) -> Optional[str]:
            value = os.environ.get(prefix + name)
            return value.strip() if value and value.strip() else None

        if _get("TIMEOUT"):
            config.timeout = int(_get("TIMEOUT"))
        if _get("CITATION_DELAY"):
            config.citation_delay = float(_get("CITATION_DELAY"))
        if _get("REQUEST_DEADLINE"):
            deadline = float(_get("REQUEST_DEADLINE"))
            config.request_deadline = deadline if deadline > 0 else None
        if _get("MIN_SIMILARITY"):
            config.min_similarity = float(_get("MIN_SIMILARITY"))
        if _get("SEED"):
            config.seed = int(_get("SEED"))
        if _get("CONTACT_EMAIL"):
            config.contact_email = _get("CONTACT_EMAIL")
        if _get("SOURCES"):
            config.sources = [s.strip().lower() for s in _get("SOURCES").split(",") if s.strip()]
        return config
