# -*- coding: utf-8 -*-
"""测试共享 fixtures"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from tests.fixtures.fakes import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def apa_reference():
    """APA 格式的完整引用"""
    return "Smith, J. (2020). Deep learning methods. Journal of AI, 5(2), 10-20."


@pytest.fixture
def sample_document():
    """包含多种引用和陈述的示例文本"""
    return (
        "Recent research shows that transformer models outperform recurrent networks on translation. "
        "Smith, J. (2020). Deep learning methods. Journal of AI, 5(2), 10-20. "
        "This finding was confirmed in later work (Jones, 2019) and extended by Brown et al. (2021). "
        "Overall accuracy improved significantly compared with earlier baselines."
    )
