"""
Command-line front end for ARR files.

Every edit subcommand opens the file, applies one document command and
saves it back.

Usage:
    arreditor show items.arr
    arreditor new                          # creates new-1.arr in the cwd
    arreditor add items.arr double
    arreditor set-type items.arr 0 string
    arreditor set-value items.arr 0 "Zażółć"
    arreditor remove items.arr 0 2
    arreditor clear items.arr
    arreditor export-json items.arr -o items.json
    arreditor import-json items.json -o items.arr
"""

import argparse
import json
import logging
import os
import sys

from arreditor import __version__
from arreditor.common import EditorConfig
from arreditor.core import ArrDocument
from arreditor.data import ArrDeserializer, ArrSerializer, ArrError, ArrFormatError, ValueType


logger = logging.getLogger(__name__)

TYPE_CHOICES = [t.name.lower() for t in ValueType]


def _print_rows(document, as_json=False):
    if as_json:
        print(json.dumps(document.rows, ensure_ascii=False, indent=2))
        return
    print(f"{document.path}: {len(document.entries)} entries")
    for index, (entry, row) in enumerate(zip(document.entries, document.rows)):
        print(f"{index:>5}  {entry.value_type.label:<8}  {row['value']}")


def cmd_show(args, config):
    document = ArrDocument.open(args.file, config=config)
    _print_rows(document, as_json=args.json)


def cmd_new(args, config):
    directory = args.directory or os.getcwd()
    path = os.path.join(directory, config.untitled_name(directory))
    document = ArrDocument.untitled(path, config=config)
    document.save()
    print(path)


def _edit(args, config, apply):
    document = ArrDocument.open(args.file, config=config)
    command = apply(document)
    if command is None:
        logger.info("Nothing to change in %s", args.file)
        return
    document.save()
    print(f"{command.get_description()}: {args.file}")


def cmd_add(args, config):
    _edit(args, config, lambda doc: doc.add_entry(args.type))


def cmd_set_type(args, config):
    _edit(args, config, lambda doc: doc.set_type(args.index, args.type))


def cmd_set_value(args, config):
    _edit(args, config, lambda doc: doc.set_value(args.index, args.value))


def cmd_remove(args, config):
    _edit(args, config, lambda doc: doc.remove_entries(args.indices))


def cmd_clear(args, config):
    _edit(args, config, lambda doc: doc.clear_entries())


def cmd_export_json(args, config):
    entries = ArrDeserializer.load(args.file)
    ArrSerializer.save_json_debug(entries, args.output)
    print(f"Exported {len(entries)} entries to {args.output}")


def cmd_import_json(args, config):
    entries = ArrDeserializer.load_json_debug(args.file)
    ArrSerializer.save(entries, args.output)
    print(f"Imported {len(entries)} entries to {args.output}")


def build_parser():
    parser = argparse.ArgumentParser(
        prog='arreditor',
        description='Inspect and edit legacy .arr typed-array files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', help='Path to arreditor.cfg (default: ./arreditor.cfg)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('show', help='List the entries of a file')
    p.add_argument('file')
    p.add_argument('--json', action='store_true', help='Print display rows as JSON')
    p.set_defaults(func=cmd_show)

    p = sub.add_parser('new', help='Create an empty untitled file')
    p.add_argument('directory', nargs='?', help='Where to create it (default: cwd)')
    p.set_defaults(func=cmd_new)

    p = sub.add_parser('add', help='Append an entry with the default value')
    p.add_argument('file')
    p.add_argument('type', choices=TYPE_CHOICES)
    p.set_defaults(func=cmd_add)

    p = sub.add_parser('set-type', help='Convert an entry to another type')
    p.add_argument('file')
    p.add_argument('index', type=int)
    p.add_argument('type', choices=TYPE_CHOICES)
    p.set_defaults(func=cmd_set_type)

    p = sub.add_parser('set-value', help='Set an entry from text')
    p.add_argument('file')
    p.add_argument('index', type=int)
    p.add_argument('value')
    p.set_defaults(func=cmd_set_value)

    p = sub.add_parser('remove', help='Remove entries by index')
    p.add_argument('file')
    p.add_argument('indices', type=int, nargs='+')
    p.set_defaults(func=cmd_remove)

    p = sub.add_parser('clear', help='Remove every entry')
    p.add_argument('file')
    p.set_defaults(func=cmd_clear)

    p = sub.add_parser('export-json', help='Write entries as readable JSON')
    p.add_argument('file')
    p.add_argument('-o', '--output', required=True)
    p.set_defaults(func=cmd_export_json)

    p = sub.add_parser('import-json', help='Build a .arr file from exported JSON')
    p.add_argument('file')
    p.add_argument('-o', '--output', required=True)
    p.set_defaults(func=cmd_import_json)

    return parser


def main(argv=None):
    """Command-line entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    config = EditorConfig(args.config) if args.config else EditorConfig.find()

    try:
        args.func(args, config)
    except ArrFormatError as e:
        print(f"error: {getattr(args, 'file', '')} cannot be read: {e}", file=sys.stderr)
        return 1
    except (ArrError, IndexError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0
