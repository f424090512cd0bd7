# -*- coding: utf-8 -*-
"""
CiteScout Web API

基于 Flask 的 HTTP 接口：
- POST /api/process-text  JSON {"text": "..."}
- POST /api/process-pdf   multipart/form-data，文件字段名 pdf
"""
import os
import sys
import logging
from flask import Flask, request, jsonify

# 添加项目路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from citescout import CitationPipeline, PipelineConfig, PipelineResult


def create_app(pipeline=None):
    """
    创建 Flask 应用

    Args:
        pipeline: CitationPipeline 实例（默认按环境变量配置创建）
    """
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = PipelineConfig().max_pdf_bytes + 1024 * 1024
    app.extensions['citescout'] = pipeline or CitationPipeline(PipelineConfig.from_env())

    def _respond(result: PipelineResult):
        return jsonify(result.to_dict()), result.status_code

    @app.route('/api/process-text', methods=['POST'])
    def process_text():
        """处理粘贴的文本"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = {}
        text = data.get('text')
        logging.getLogger('citescout').info(
            "[API] process-text text_length=%s", len(text) if isinstance(text, str) else 0
        )
        return _respond(app.extensions['citescout'].process_text(text))

    @app.route('/api/process-pdf', methods=['POST'])
    def process_pdf():
        """处理上传的 PDF"""
        file = request.files.get('pdf')
        if file is None:
            return jsonify({'error': 'PDF file is required'}), 400
        data = file.read()
        logging.getLogger('citescout').info(
            "[API] process-pdf file=%s size=%d", file.filename, len(data)
        )
        result = app.extensions['citescout'].process_pdf(data, file.filename, file.mimetype)
        return _respond(result)

    @app.errorhandler(413)
    def too_large(e):
        return jsonify({'error': 'PDF file exceeds 50MB limit'}), 413

    return app


if __name__ == '__main__':
    # 配置日志
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
    logging.getLogger('citescout').setLevel(logging.INFO)
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    print("=" * 60)
    print("CiteScout Web API")
    print("=" * 60)
    print("访问地址: http://localhost:5000")
    print("=" * 60)

    create_app().run(host='0.0.0.0', port=5000, debug=True, threaded=True)
