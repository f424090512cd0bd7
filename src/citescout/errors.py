# -*- coding: utf-8 -*-
"""
异常定义

- InputValidationError: 输入校验失败（空文本、文件类型/大小不符），对应 4xx
- PatternConfigError: 引用正则无法编译，属于配置错误，构造时即抛出
- PdfExtractionError: PDF 无法解析
"""
from typing import Optional


class CiteScoutError(Exception):
    """CiteScout 异常基类"""


class InputValidationError(CiteScoutError, ValueError):
    """
    输入校验错误

    Attributes:
        status_code: 建议返回给调用方的状态码（400 或 413）
    """

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PatternConfigError(CiteScoutError):
    """引用匹配模式配置错误"""

    def __init__(self, pattern_name: str, cause: Optional[Exception] = None):
        message = f"引用模式 '{pattern_name}' 无法编译"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.pattern_name = pattern_name


class PdfExtractionError(CiteScoutError):
    """PDF 文本提取失败"""
