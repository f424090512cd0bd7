# -*- coding: utf-8 -*-
"""
命令行运行 CiteScout 流水线

用法：
  python scripts/run_pipeline.py paper.pdf
  python scripts/run_pipeline.py notes.txt --min-similarity 0.6 -o result.json
"""
import sys
import json
import logging
import argparse
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from citescout import CitationPipeline, PipelineConfig


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="从文本或 PDF 中提取引用，并在 arXiv / OpenAlex / CrossRef / PubMed 检索相关论文"
    )
    parser.add_argument("input", help="输入文件（.pdf 或文本文件）")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="结果 JSON 输出路径（默认打印到标准输出）",
    )
    parser.add_argument(
        "-d", "--delay",
        type=float,
        default=None,
        help="相邻两次检索的间隔秒数",
    )
    parser.add_argument(
        "--min-similarity",
        type=float,
        default=None,
        help="相关论文最低相似度（0-1）",
    )
    parser.add_argument(
        "--sources",
        default=None,
        help="启用的数据源，逗号分隔（arxiv,openalex,crossref,pubmed）",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="相似度随机种子",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    config = PipelineConfig.from_env()
    if args.delay is not None:
        config.citation_delay = args.delay
    if args.min_similarity is not None:
        config.min_similarity = args.min_similarity
    if args.sources:
        config.sources = [s.strip().lower() for s in args.sources.split(",") if s.strip()]
    if args.seed is not None:
        config.seed = args.seed

    pipeline = CitationPipeline(config)
    path = Path(args.input)
    if path.suffix.lower() == ".pdf":
        result = pipeline.process_pdf(path.read_bytes(), filename=path.name)
    else:
        result = pipeline.process_text(path.read_text(encoding="utf-8"))

    output = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"结果已保存: {args.output}")
    else:
        print(output)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
