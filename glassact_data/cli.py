"""generate-shapes — write the derived wire shapes of every entity to disk.

Examples:
  generate-shapes --out generated/shapes
  generate-shapes --entity-file entities.yaml --out build/shapes --entity Inlay --entity Project
  generate-shapes --out build/shapes --format shape

Exit codes: 0 on success, 1 when an entity cannot be projected, 2 on a bad
definition file, an unknown --entity or a usage error.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from glassact_data.config import get_settings
from glassact_data.application.services import Method, ShapeService
from glassact_data.domain.exceptions import DefinitionError, ProjectionAmbiguityError
from glassact_data.infrastructure.dependencies import build_entity_registry
from glassact_data.infrastructure.logging.colored_logger import GenerationLogger, GenerationStage
from glassact_data.infrastructure.logging.log_config import setup_logging

EXIT_OK = 0
EXIT_PROJECTION_FAILED = 1
EXIT_USAGE = 2

FORMATS = ("json-schema", "shape")

log = GenerationLogger("glassact_data.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-shapes",
        description="Derive GET/POST/PATCH/PUT shapes for every canonical entity",
        epilog=__doc__.split("\n\n", 1)[1],
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--entity-file", "-f", default=None,
                        help="YAML entity definitions (default: built-in catalog)")
    parser.add_argument("--out", "-o", default=None,
                        help="Output directory (default: OUTPUT_DIR setting)")
    parser.add_argument("--entity", "-e", action="append", default=[], metavar="NAME",
                        help="Only generate this entity; may be repeated")
    parser.add_argument("--format", choices=FORMATS, default="json-schema",
                        help="json-schema (pydantic JSON Schema) or shape (field table)")
    parser.add_argument("--log-level", default=None,
                        help="Root log level (default: LOG_LEVEL setting)")
    return parser


def render(service: ShapeService, name: str, method: Method, fmt: str) -> dict[str, Any]:
    """Return the JSON document written for one entity and method."""
    if fmt == "shape":
        return {
            "entity": name,
            "method": method.value,
            "fields": [vars(row) for row in service.describe(name, method)],
        }
    return service.json_schema(name, method)


def _dump(path: Path, document: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def generate(service: ShapeService, names: list[str], out_dir: Path, fmt: str) -> list[str]:
    """Write every entity's shapes under ``out_dir``; return the names that failed.

    An entity is rendered in full before anything is written, so a failing
    entity leaves no partial output behind.
    """
    index: dict[str, dict[str, str]] = {}
    failed: list[str] = []

    for name in names:
        try:
            with log.timed_step(GenerationStage.PROJECT, name):
                documents = {
                    method: render(service, name, method, fmt) for method in Method
                }
        except ProjectionAmbiguityError as exc:
            print(f"error: {exc}", file=sys.stderr)
            failed.append(name)
            continue

        files: dict[str, str] = {}
        for method, document in documents.items():
            relative = f"{name}/{method.value.lower()}.json"
            _dump(out_dir / relative, document)
            files[method.value.lower()] = relative
            log.detail(relative)
        log.step_complete(GenerationStage.EMIT, f"{name}: {len(files)} files")
        index[name] = files

    _dump(out_dir / "index.json", {"format": fmt, "entities": index, "failed": failed})
    log.step_complete(GenerationStage.COMPLETE, f"entities written to {out_dir}")
    log.stats(entities=len(index), failed=len(failed))
    return failed


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return int(exc.code or 0)

    settings = get_settings()
    setup_logging(args.log_level)
    out_dir = Path(args.out or settings.output_dir)
    entity_file = args.entity_file if args.entity_file is not None else settings.entity_file.strip()

    try:
        with log.timed_step(GenerationStage.LOAD, entity_file or "built-in catalog"):
            registry = build_entity_registry(entity_file)
    except DefinitionError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    service = ShapeService(registry)
    known = [e.name for e in service.list_entities()]
    unknown = [name for name in args.entity if name not in known]
    if unknown:
        message = f"unknown entity: {', '.join(unknown)}"
        log.step_error(GenerationStage.ERROR, message)
        print(f"error: {message}", file=sys.stderr)
        return EXIT_USAGE

    names = list(dict.fromkeys(args.entity)) or known
    failed = generate(service, names, out_dir, args.format)
    return EXIT_PROJECTION_FAILED if failed else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
