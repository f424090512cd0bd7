# -*- coding: utf-8 -*-
"""
文档转换模块
"""
from .pdf_text import (
    PdfText,
    expand_ligatures,
    validate_pdf,
    extract_pdf_text,
    PDF_CONTENT_TYPE,
    MAX_PDF_BYTES,
)

__all__ = [
    'PdfText',
    'expand_ligatures',
    'validate_pdf',
    'extract_pdf_text',
    'PDF_CONTENT_TYPE',
    'MAX_PDF_BYTES',
]
