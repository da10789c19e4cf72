"""kontext command-line entry point.

Usage examples:
    # Deduplicate and date-enrich an exported knowledge collection
    kontext cleanup entries.json -o cleaned.json

    # Show the context a query would receive
    kontext retrieve entries.json --query "Was weiß ich über Anna?" --mode work
    kontext retrieve entries.json -q "Was weiß ich über Anna?" -m work --json

    # Classify an utterance
    kontext intent "Wann hat Anna Geburtstag?"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from kontext.config import settings
from kontext.context.intent import detect_intent
from kontext.context.request import retrieve_for_request
from kontext.context.unified import assemble_context
from kontext.documents.models import DocumentEntry
from kontext.knowledge.classify import should_store_verbatim
from kontext.knowledge.cleanup import cleanup_knowledge_entries
from kontext.knowledge.models import MODES, deserialize_entries, serialize_entries

logger = logging.getLogger(__name__)

_documents_adapter = TypeAdapter(list[DocumentEntry])


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _cmd_cleanup(args: argparse.Namespace) -> int:
    entries = deserialize_entries(_read_json(args.entries))
    result = cleanup_knowledge_entries(entries, duplicate_threshold=args.threshold)

    output = json.dumps(serialize_entries(result.entries), ensure_ascii=False, indent=2)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        logger.info("Wrote %d entries to %s", len(result.entries), args.output)
    else:
        print(output)

    print(
        f"removed={len(result.removed)} enriched={len(result.modified)} "
        f"kept={len(result.entries)}",
        file=sys.stderr,
    )
    return 0


def _cmd_retrieve(args: argparse.Namespace) -> int:
    entries = deserialize_entries(_read_json(args.entries))
    if args.json:
        response = retrieve_for_request(
            {"query": args.query, "mode": args.mode, "limit": args.limit}, entries
        )
        print(response.model_dump_json(by_alias=True, indent=2))
        return 0

    documents: list[DocumentEntry] = []
    if args.documents:
        documents = _documents_adapter.validate_python(_read_json(args.documents))

    intent = detect_intent(args.query).intent
    context = assemble_context(args.query, args.mode, entries, documents, intent=intent)
    if not context.context_string:
        print("(no relevant context)", file=sys.stderr)
        return 0
    print(context.context_string)
    return 0


def _cmd_intent(args: argparse.Namespace) -> int:
    result = detect_intent(args.text)
    output = {**asdict(result), "store_verbatim": should_store_verbatim(args.text)}
    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kontext", description="Contextual knowledge retrieval and maintenance"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    cleanup = sub.add_parser("cleanup", help="Merge duplicates and pin relative dates")
    cleanup.add_argument("entries", help="JSON file with knowledge entries")
    cleanup.add_argument("--output", "-o", help="Write cleaned entries here (default: stdout)")
    cleanup.add_argument(
        "--threshold", type=float, default=None, help="Duplicate similarity threshold"
    )
    cleanup.set_defaults(handler=_cmd_cleanup)

    retrieve = sub.add_parser("retrieve", help="Print the context assembled for a query")
    retrieve.add_argument("entries", help="JSON file with knowledge entries")
    retrieve.add_argument("--query", "-q", required=True)
    retrieve.add_argument("--mode", "-m", required=True, choices=MODES)
    retrieve.add_argument("--documents", "-d", help="JSON file with analysed documents")
    retrieve.add_argument("--limit", "-n", type=int, default=5, help="Maximum references (--json)")
    retrieve.add_argument(
        "--json", action="store_true", help="Print the knowledge-only retrieval response as JSON"
    )
    retrieve.set_defaults(handler=_cmd_retrieve)

    intent = sub.add_parser("intent", help="Classify an utterance")
    intent.add_argument("text")
    intent.set_defaults(handler=_cmd_intent)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level),
    )
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
