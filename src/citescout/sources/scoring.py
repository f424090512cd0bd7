# -*- coding: utf-8 -*-
"""
相似度打分

各数据源的相似度只是来源可信度先验加随机扰动，并不计算真实相关性：
score = base + random() * range，取值落在闭区间 [base, base + range]。
"""
import re
import random
import hashlib
from typing import Optional


def normalize_title(title: Optional[str]) -> str:
    """标题标准化：合并空白、去除首尾空白、转小写（用于去重）"""
    if not title:
        return ""
    return re.sub(r'\s+', ' ', title).strip().lower()


class SimilarityScorer:
    """
    可注入的相似度打分器

    使用独立的 random.Random 实例，给定种子时结果可复现。
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    @classmethod
    def for_text(cls, text: str) -> "SimilarityScorer":
        """以文本的 MD5 作为种子，相同输入得到相同打分序列"""
        digest = hashlib.md5((text or "").encode("utf-8")).hexdigest()
        return cls(int(digest[:12], 16))

    def child(self, key: str) -> "SimilarityScorer":
        """
        派生子打分器

        并发的数据源各自使用一个子打分器，打分结果与线程调度顺序无关。
        无种子时子打分器也无种子。
        """
        if self.seed is None:
            return SimilarityScorer()
        digest = hashlib.md5(f"{self.seed}:{key}".encode("utf-8")).hexdigest()
        return SimilarityScorer(int(digest[:12], 16))

    def score(self, base: float, spread: float) -> float:
        return min(base + self._rng.random() * spread, 1.0)
