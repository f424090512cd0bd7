# -*- coding: utf-8 -*-
"""
学术数据源客户端基类

每个数据源：
- 发起一次（PubMed 为两次，顺序执行）HTTP GET 请求，超时 10 秒
- 请求失败、非 2xx、返回格式异常时记录警告并返回空列表，错误不向上传播
- 将数据源专有记录映射为 RelatedPaper，并按来源先验打分
"""
import logging
from typing import List, Optional, Dict, Any

import requests

from ..models import RelatedPaper, SearchSource
from .scoring import SimilarityScorer

logger = logging.getLogger(__name__)

ABSTRACT_MAX_LENGTH = 200
DEFAULT_TIMEOUT = 10
DEFAULT_LIMIT = 5


def truncate_abstract(abstract: str, max_length: int = ABSTRACT_MAX_LENGTH) -> str:
    """超过 max_length 的摘要截断并追加省略号"""
    if abstract and len(abstract) > max_length:
        return abstract[:max_length] + "..."
    return abstract


class BaseSource:
    """
    数据源客户端基类

    子类需要设置 SOURCE / BASE_SCORE / SCORE_RANGE 并实现 fetch()。
    fetch() 返回数据源专有记录，每条记录提供 to_related_paper()。
    """

    SOURCE: SearchSource = None
    BASE_SCORE = 0.5
    SCORE_RANGE = 0.5
    USER_AGENT = "CiteScout/0.1 (https://github.com/citescout)"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
        contact_email: Optional[str] = None,
    ):
        """
        Args:
            session: 复用的 requests.Session（测试时可注入）
            timeout: 请求超时（秒）
            contact_email: 联系邮箱，用于进入 polite pool
        """
        self.session = session or requests.Session()
        self.timeout = timeout
        self.contact_email = contact_email

    @property
    def name(self) -> str:
        return self.SOURCE.value

    def _headers(self) -> Dict[str, str]:
        agent = self.USER_AGENT
        if self.contact_email:
            agent = f"{agent[:-1]}; mailto:{self.contact_email})"
        return {"User-Agent": agent}

    def _get(self, url: str, params: Dict[str, Any]) -> requests.Response:
        logger.debug(f"{self.name} 请求: {url} {params}")
        response = self.session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
        response.raise_for_status()
        return response

    def fetch(self, query: str, limit: int) -> list:
        raise NotImplementedError

    def search(
        self,
        query: str,
        limit: int = DEFAULT_LIMIT,
        scorer: Optional[SimilarityScorer] = None,
    ) -> List[RelatedPaper]:
        """
        检索相关论文

        Args:
            query: 检索词
            limit: 最大结果数
            scorer: 相似度打分器（None 时使用无种子的打分器）

        Returns:
            RelatedPaper 列表，失败时为空列表
        """
        if not query or not query.strip():
            return []
        scorer = scorer or SimilarityScorer()

        try:
            records = self.fetch(query.strip(), limit)
            papers = [record.to_related_paper() for record in records[:limit]]
        except requests.exceptions.RequestException as e:
            logger.warning(f"{self.name} 请求失败: {e}")
            return []
        except (ValueError, KeyError, TypeError, AttributeError, IndexError) as e:
            logger.warning(f"{self.name} 返回格式异常: {e}")
            return []

        for paper in papers:
            paper.abstract = truncate_abstract(paper.abstract)
            paper.similarity = scorer.score(self.BASE_SCORE, self.SCORE_RANGE)

        logger.debug(f"{self.name} 返回 {len(papers)} 条结果: {query[:40]}")
        return papers
