# -*- coding: utf-8 -*-
"""
测试：Flask HTTP 接口
"""
import sys
from io import BytesIO
from pathlib import Path

import fitz
import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))
sys.path.insert(0, str(project_root / "web-ui"))

from app import create_app
from citescout import CitationPipeline, PipelineConfig
from citescout.models import SearchSource
from tests.fixtures.fakes import FakeSource, make_paper


@pytest.fixture
def client(fake_clock):
    sources = [
        FakeSource(SearchSource.ARXIV, default=[make_paper("Deep Learning", similarity=0.9)]),
        FakeSource(SearchSource.OPENALEX),
        FakeSource(SearchSource.CROSSREF),
        FakeSource(SearchSource.PUBMED),
    ]
    pipeline = CitationPipeline(PipelineConfig(), sources=sources, clock=fake_clock, sleep=fake_clock.sleep)
    app = create_app(pipeline)
    app.config['TESTING'] = True
    with app.test_client() as client:
        yield client


def _pdf_bytes(text):
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((50, 72), text, fontsize=10)
    data = doc.tobytes()
    doc.close()
    return data


def test_process_text(client, sample_document):
    response = client.post('/api/process-text', json={'text': sample_document})
    assert response.status_code == 200
    body = response.get_json()
    assert body['existingCitationsCount'] == 3
    assert body['relatedPapers'][0]['title'] == "Deep Learning"
    assert body['relatedPapers'][0]['source'] == "arxiv"


@pytest.mark.parametrize("payload", [{}, {'text': ''}, {'text': '   '}])
def test_process_text_requires_text(client, payload):
    response = client.post('/api/process-text', json=payload)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Text content is required'}


def test_process_text_non_json_body(client):
    response = client.post('/api/process-text', data='plain body', content_type='text/plain')
    assert response.status_code == 400


def test_process_pdf(client):
    data = _pdf_bytes("Prior work supports this claim (Jones, 2019).")
    response = client.post(
        '/api/process-pdf',
        data={'pdf': (BytesIO(data), 'paper.pdf', 'application/pdf')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 200
    body = response.get_json()
    assert body['fileName'] == 'paper.pdf'
    assert body['pages'] == 1
    assert any(c['text'] == 'Jones, 2019' for c in body['citations'])


def test_process_pdf_missing_file(client):
    response = client.post('/api/process-pdf', data={}, content_type='multipart/form-data')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'PDF file is required'}


def test_process_pdf_wrong_type(client):
    response = client.post(
        '/api/process-pdf',
        data={'pdf': (BytesIO(b'hello'), 'notes.txt', 'text/plain')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 400
    assert response.get_json()['error'].startswith('Unsupported file type')


def test_process_pdf_unreadable(client):
    response = client.post(
        '/api/process-pdf',
        data={'pdf': (BytesIO(b'not really a pdf'), 'broken.pdf', 'application/pdf')},
        content_type='multipart/form-data',
    )
    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to parse PDF'}


@pytest.mark.parametrize("payload", [["some text"], "some text", 42])
def test_process_text_non_object_json(client, payload):
    response = client.post('/api/process-text', json=payload)
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Text content is required'}
