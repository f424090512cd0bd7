# -*- coding: utf-8 -*-
"""
数据模型模块
"""
from .citation import (
    RawMatch,
    Citation,
    Statement,
)

from .paper import (
    SearchSource,
    RelatedPaper,
    UNKNOWN_AUTHOR,
    UNTITLED,
    NO_ABSTRACT,
    UNKNOWN_YEAR,
)

from .config import PipelineConfig

__all__ = [
    # citation models
    'RawMatch',
    'Citation',
    'Statement',
    # paper models
    'SearchSource',
    'RelatedPaper',
    'UNKNOWN_AUTHOR',
    'UNTITLED',
    'NO_ABSTRACT',
    'UNKNOWN_YEAR',
    # config
    'PipelineConfig',
]
