# -*- coding: utf-8 -*-
"""
PDF 文本提取与上传校验

使用 PyMuPDF (fitz) 从 PDF 字节流中提取全文，并展开排版连字（ﬁ -> fi 等）。
"""
import logging
from dataclasses import dataclass
from typing import Optional

import fitz

from ..errors import InputValidationError, PdfExtractionError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
MAX_PDF_BYTES = 50 * 1024 * 1024

LIGATURES = {
    'ﬀ': 'ff',
    'ﬁ': 'fi',
    'ﬂ': 'fl',
    'ﬃ': 'ffi',
    'ﬄ': 'ffl',
    'ﬅ': 'st',
    'ﬆ': 'st',
}


@dataclass
class PdfText:
    """
    PDF 提取结果

    Attributes:
        text: 全文
        page_count: 页数
    """
    text: str
    page_count: int


def expand_ligatures(text: str) -> str:
    for ligature, expanded in LIGATURES.items():
        text = text.replace(ligature, expanded)
    return text


def validate_pdf(
    data: Optional[bytes],
    content_type: Optional[str] = PDF_CONTENT_TYPE,
    max_bytes: int = MAX_PDF_BYTES,
):
    """
    校验上传的 PDF

    Raises:
        InputValidationError: 文件缺失或为空（400）、类型不是 application/pdf（400）、
            超过大小上限（413）
    """
    if not data:
        raise InputValidationError("PDF file is required")
    if content_type and content_type.split(";")[0].strip().lower() != PDF_CONTENT_TYPE:
        raise InputValidationError(f"Unsupported file type: {content_type}")
    if len(data) > max_bytes:
        raise InputValidationError(
            f"PDF file exceeds {max_bytes // (1024 * 1024)}MB limit", status_code=413
        )


def extract_pdf_text(data: bytes) -> PdfText:
    """
    从 PDF 字节流提取文本

    Args:
        data: PDF 文件内容

    Returns:
        PdfText

    Raises:
        PdfExtractionError: PDF 无法打开或解析
    """
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as e:
        raise PdfExtractionError(f"无法打开 PDF: {e}") from e

    try:
        text = "\n".join(page.get_text() for page in doc)
        page_count = doc.page_count
    except Exception as e:
        raise PdfExtractionError(f"PDF 文本提取失败: {e}") from e
    finally:
        doc.close()

    text = expand_ligatures(text)
    logger.info(f"PDF 文本提取完成: {page_count} 页, {len(text)} 字符")
    return PdfText(text=text, page_count=page_count)
