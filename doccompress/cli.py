"""Command-line interface for document compression."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .compressor import DocumentCompressor
from .config import ConfigLoader, create_example_config
from .exporters import NullExporter
from .keywords import extract_keywords_from_query
from .types import RawDocument


def read_documents(paths: list[str]) -> list[RawDocument]:
    """Read text files as documents named after their file name."""
    return [
        RawDocument(name=Path(path).name, content=Path(path).read_text(encoding="utf-8"))
        for path in paths
    ]


def cmd_validate_config(args: Any) -> None:
    """Validate configuration file."""
    try:
        config = ConfigLoader.load(args.config, merge_env=args.merge_env)
        print("✓ Configuration is valid")
        print(f"  Max tokens: {config.budget.max_tokens}")
        print(f"  Available for documents: {config.budget.available_tokens}")
        print(f"  Min tokens per document: {config.budget.min_tokens_per_doc}")
        print(f"  Estimator: {config.estimator}")
        print(f"  Locale: {config.locale}")
    except Exception as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_plan(args: Any) -> None:
    """Show which documents would be compressed, without compressing."""
    try:
        config = ConfigLoader.load(args.config, merge_env=args.merge_env)
        documents = read_documents(args.docs)

        compressor = DocumentCompressor(config=config, exporter=NullExporter())
        allocator = compressor.allocator
        allocated = allocator.allocate(len(documents))

        print("Compression Plan:")
        print(f"  Documents: {len(documents)}")
        print(f"  Available tokens: {allocator.available_tokens()}")
        print(f"  Allocated per document: {allocated}")
        if allocator.is_over_allocated(len(documents)):
            print("  Warning: per-document minimum exceeds the available budget")
        for doc in documents:
            tokens = compressor.estimator.estimate_tokens(doc.content)
            action = (
                "compress" if allocator.needs_compression(tokens, allocated) else "keep"
            )
            print(f"    {doc.name}: {tokens} tokens -> {action}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_compress(args: Any) -> None:
    """Compress documents."""
    try:
        config = ConfigLoader.load(args.config, merge_env=args.merge_env)
        documents = read_documents(args.docs)

        priority_keywords = (
            extract_keywords_from_query(args.query) if args.query else None
        )
        compressor = DocumentCompressor(config=config)
        report = compressor.run(documents, len(documents), priority_keywords)

        print("Compression Result:")
        print(f"  Allocated per document: {report.allocated_tokens_per_doc} tokens")
        print(f"  Tokens before: {report.total_original_tokens}")
        print(f"  Tokens after: {report.total_compressed_tokens}")
        print(f"  Compressed: {report.compressed_count}/{len(report.documents)}")
        for doc in report.documents:
            status = "compressed" if doc.compressed else "unchanged"
            print(
                f"    {doc.name}: {doc.original_tokens} -> {doc.compressed_tokens} "
                f"({status})"
            )

        if args.output:
            output = {
                "documents": [
                    {
                        "name": doc.name,
                        "content": doc.content,
                        "compressed": doc.compressed,
                        "original_tokens": doc.original_tokens,
                        "compressed_tokens": doc.compressed_tokens,
                    }
                    for doc in report.documents
                ],
                "statistics": {
                    "available_tokens": report.available_tokens,
                    "allocated_tokens_per_doc": report.allocated_tokens_per_doc,
                    "tokens_before": report.total_original_tokens,
                    "tokens_after": report.total_compressed_tokens,
                    "over_allocated": report.over_allocated,
                },
            }
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(output, f, indent=2, ensure_ascii=False)
            print(f"  Output saved to: {args.output}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_keywords(args: Any) -> None:
    """Print keywords extracted from a query."""
    for keyword in extract_keywords_from_query(args.query):
        print(keyword)


def cmd_create_config(args: Any) -> None:
    """Create example configuration file."""
    try:
        create_example_config(args.output)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Fit extracted documents into an LLM token budget"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # validate-config command
    validate_parser = subparsers.add_parser(
        "validate-config", help="Validate configuration file"
    )
    validate_parser.add_argument("--config", help="Configuration file path")
    validate_parser.add_argument(
        "--merge-env", action="store_true", help="Merge environment variables"
    )
    validate_parser.set_defaults(func=cmd_validate_config)

    # plan command
    plan_parser = subparsers.add_parser(
        "plan", help="Show compression plan without compressing"
    )
    plan_parser.add_argument("--config", help="Configuration file path")
    plan_parser.add_argument(
        "--docs", nargs="+", required=True, help="Text files to include"
    )
    plan_parser.add_argument(
        "--merge-env", action="store_true", help="Merge environment variables"
    )
    plan_parser.set_defaults(func=cmd_plan)

    # compress command
    compress_parser = subparsers.add_parser("compress", help="Compress documents")
    compress_parser.add_argument("--config", help="Configuration file path")
    compress_parser.add_argument(
        "--docs", nargs="+", required=True, help="Text files to compress"
    )
    compress_parser.add_argument(
        "--query", help="User query used to prioritise matching sections"
    )
    compress_parser.add_argument(
        "--output", help="Output file for compressed documents (JSON)"
    )
    compress_parser.add_argument(
        "--merge-env", action="store_true", help="Merge environment variables"
    )
    compress_parser.set_defaults(func=cmd_compress)

    # keywords command
    keywords_parser = subparsers.add_parser(
        "keywords", help="Extract keywords from a query"
    )
    keywords_parser.add_argument("query", help="Query text")
    keywords_parser.set_defaults(func=cmd_keywords)

    # create-config command
    config_parser = subparsers.add_parser(
        "create-config", help="Create example configuration file"
    )
    config_parser.add_argument(
        "--output", help="Output file path", default="doccompress.yaml"
    )
    config_parser.set_defaults(func=cmd_create_config)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
