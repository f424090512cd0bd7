# -*- coding: utf-8 -*-
"""
引用与陈述数据模型
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple


@dataclass(frozen=True)
class RawMatch:
    """
    正则匹配得到的原始引用片段

    Attributes:
        text: 匹配到的引用文本（第一个捕获组，无捕获组时为整个匹配）
        pattern_index: 命中的模式序号（按优先级排列）
        pattern_name: 命中的模式名称
        span: 在原文中的位置 (start, end)
    """
    text: str
    pattern_index: int
    pattern_name: str = ""
    span: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class Citation:
    """
    文中引用

    创建后不可修改。statement / supporting_quote 仅在引用由陈述反查得到时存在。

    Attributes:
        id: 引用编号（citation-N 或 discovered-N）
        text: 引用原文
        authors: 作者
        year: 年份
        title: 标题
        confidence: 置信度（0-1）
        statement: 对应的陈述
        supporting_quote: 摘要中支撑该陈述的句子
    """
    id: str
    text: str
    authors: Optional[str] = None
    year: Optional[str] = None
    title: Optional[str] = None
    confidence: float = 0.0
    statement: Optional[str] = None
    supporting_quote: Optional[str] = None

    @property
    def is_discovered(self) -> bool:
        return self.statement is not None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "text": self.text,
            "authors": self.authors,
            "year": self.year,
            "title": self.title,
            "confidence": self.confidence,
        }
        if self.statement is not None:
            data["statement"] = self.statement
            data["supportingQuote"] = self.supporting_quote
        return data


@dataclass(frozen=True)
class Statement:
    """
    需要文献支撑的陈述片段

    Attributes:
        text: 片段文本
        start_index: 起始位置（含）
        end_index: 结束位置（不含）
        confidence: 置信度
    """
    text: str
    start_index: int
    end_index: int
    confidence: float = 0.6

    def overlaps(self, other: "Statement") -> bool:
        return self.start_index < other.end_index and other.start_index < self.end_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "confidence": self.confidence,
        }
