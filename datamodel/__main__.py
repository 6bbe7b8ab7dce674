"""
Command line access to the data model.

    python -m datamodel sample schemas/invoice.yaml
    python -m datamodel fields
    python -m datamodel schemas
    python -m datamodel show data/invoice.json
    python -m datamodel schema customer.name positions.qty --array positions
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .config_loader import get_config_value, load_config
from .exceptions import DataModelError, log_error_with_context
from .logging_config import setup_logging
from .sample_data import generate_sample
from .schema_builder import build_schema
from .schema_loader import get_configured_schema, list_available_schemas, load_schema_node
from .schema_walker import walk_schema
from .tree_serializer import format_display_tree, to_display_tree

logger = logging.getLogger(__name__)


def _load_schema(args, config):
    if args.schema is None:
        return get_configured_schema(config)
    schema_file = Path(args.schema)
    return load_schema_node(schema_file.name, schema_file.parent, strict=True)


def cmd_sample(args, config) -> int:
    sample = generate_sample(_load_schema(args, config))
    print(json.dumps(sample, indent=2, ensure_ascii=False))
    return 0


def cmd_fields(args, config) -> int:
    for descriptor in walk_schema(_load_schema(args, config)):
        detail = descriptor.leaf_type or descriptor.kind
        print(f"{descriptor.path}\t{detail}")
    return 0


def cmd_schemas(args, config) -> int:
    directory = get_config_value(config, 'schema', 'directory', 'schemas')
    for name in list_available_schemas(directory):
        print(name)
    return 0


def cmd_show(args, config) -> int:
    with open(args.data, 'r', encoding='utf-8') as f:
        data = json.load(f)
    indent = get_config_value(config, 'display', 'indent', '  ')
    print(format_display_tree(to_display_tree(data), indent=indent))
    return 0


def cmd_schema(args, config) -> int:
    schema = build_schema(args.field_names, args.array or [])
    if args.format == 'json':
        print(json.dumps(schema, indent=2))
    else:
        print(yaml.dump(schema, default_flow_style=False, sort_keys=False), end='')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="datamodel", description="Schema-driven template data tools")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--log-level", default=None, help="Override the configured logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sample = subparsers.add_parser("sample", help="Print sample data for a schema file")
    sample.add_argument("schema", nargs="?", help="Schema file (defaults to the configured schema)")
    sample.set_defaults(handler=cmd_sample)

    fields = subparsers.add_parser("fields", help="List the fields of a schema file")
    fields.add_argument("schema", nargs="?", help="Schema file (defaults to the configured schema)")
    fields.set_defaults(handler=cmd_fields)

    schemas = subparsers.add_parser("schemas", help="List the schema files in the configured directory")
    schemas.set_defaults(handler=cmd_schemas)

    show = subparsers.add_parser("show", help="Print a JSON data file as a display tree")
    show.add_argument("data")
    show.set_defaults(handler=cmd_show)

    schema = subparsers.add_parser("schema", help="Build a schema from template field names")
    schema.add_argument("field_names", nargs="+", metavar="FIELD")
    schema.add_argument("--array", action="append", metavar="PATH", help="Repetition group path (repeatable)")
    schema.add_argument("--format", choices=["yaml", "json"], default="yaml")
    schema.set_defaults(handler=cmd_schema)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, strict=args.config is not None)
        setup_logging(config, level=args.log_level)
        return args.handler(args, config)
    except DataModelError as e:
        log_error_with_context(e, args.command)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
