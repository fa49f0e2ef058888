from typing import Any, Dict, List, Optional
import argparse
import logging
import sys
from pathlib import Path

from hashrun.config import DEFAULT_DATA_DIR, DEFAULT_RESULTS_DIR
from hashrun.errors import ConfigurationError, HashrunError
from hashrun.messages import error, info, success

##################################################################################################
# Parser
##################################################################################################

ArgParser = argparse.ArgumentParser


class Commands:
    def __init__(self, parser: ArgParser) -> None:
        self.root_parser = parser
        self.subparsers = parser.add_subparsers(dest='command')
        self.parsers: Dict[str, ArgParser] = {}

    class Command:
        def __init__(self, commands: 'Commands', name: str, help: str) -> None:
            if name not in commands.parsers:
                commands.parsers[name] = commands.subparsers.add_parser(name, help=help)
            self.parser = commands.parsers[name]

        def __enter__(self) -> ArgParser:
            return self.parser

        def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
            pass

    def __call__(self, name: str, help: str = '') -> Any:
        return Commands.Command(self, name, help)


def build_parser() -> ArgParser:
    parser = argparse.ArgumentParser(
        prog='hashrun',
        description='Generate random test data, hash it at a bounded pace, and lint license headers. '
                    'Settings come from the environment (FILE_COUNT, FILE_MB, FORCE, EXPECTED_COUNT, HASH_DELAY_SECS).')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    commands = Commands(parser)

    with commands('generate', help='Write FILE_COUNT random files of FILE_MB MiB each.') as cmd:
        cmd.add_argument('--data-dir', type=Path, default=DEFAULT_DATA_DIR)

    with commands('hash', help='Hash EXPECTED_COUNT data files, pausing HASH_DELAY_SECS after each.') as cmd:
        cmd.add_argument('--data-dir', type=Path, default=DEFAULT_DATA_DIR)
        cmd.add_argument('--results-dir', type=Path, default=DEFAULT_RESULTS_DIR)

    with commands('verify', help='Re-hash the files listed in a digest manifest.') as cmd:
        cmd.add_argument('--results-dir', type=Path, default=DEFAULT_RESULTS_DIR)
        cmd.add_argument('--base-dir', type=Path, default=Path('.'),
                         help='Directory the manifest paths are relative to.')

    with commands('queued', help='Record that a queued run started.') as cmd:
        cmd.add_argument('--results-dir', type=Path, default=DEFAULT_RESULTS_DIR)

    with commands('check-headers', help='Report source files missing the license header.') as cmd:
        cmd.add_argument('--root', type=Path, default=Path('.'))

    return parser

##################################################################################################
# Commands
##################################################################################################

def _generate(args: argparse.Namespace) -> int:
    from hashrun.config import GeneratorConfig
    from hashrun.generator import generate

    result = generate(GeneratorConfig.from_env(data_dir=args.data_dir))
    print(result.summary_line())
    return 0


def _hash(args: argparse.Namespace) -> int:
    from hashrun.config import HasherConfig
    from hashrun.hasher import hash_files

    config = HasherConfig.from_env(data_dir=args.data_dir, results_dir=args.results_dir)
    run = hash_files(config)
    success(f"Hashed {len(run.records)} files ({run.total_bytes} bytes) into {config.manifest_path}")
    return 0


def _verify(args: argparse.Namespace) -> int:
    from hashrun.config import HasherConfig
    from hashrun.verify import verify_manifest

    manifest = HasherConfig(results_dir=args.results_dir).manifest_path
    records = verify_manifest(manifest, base_dir=args.base_dir)
    success(f"Verified {len(records)} files listed in {manifest}")
    return 0


def _queued(args: argparse.Namespace) -> int:
    from hashrun.queued import mark_queued

    out = mark_queued(args.results_dir)
    info(f"Wrote {out}")
    return 0


def _check_headers(args: argparse.Namespace) -> int:
    from hashrun.checks.file_headers import check_headers, expected_header
    from hashrun.config import HeaderConfig

    if not args.root.is_dir():
        raise ConfigurationError(f"root is not a directory: {args.root}")

    config = HeaderConfig.from_env(root=args.root)
    missing = check_headers(config)
    if not missing:
        success("All source files carry the license header")
        return 0

    print("SPDX headers missing from:")
    for path in missing:
        print(f"  {path.as_posix()}")
    print(f"Expected within first {config.max_lines} lines:")
    for line in expected_header(config):
        print(f"  {line}")
    return 1


HANDLERS = {
    'generate': _generate,
    'hash': _hash,
    'verify': _verify,
    'queued': _queued,
    'check-headers': _check_headers,
}

##################################################################################################
# Main
##################################################################################################

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format='%(message)s')

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    handler = HANDLERS.get(args.command)
    if handler is None:
        raise ValueError(f"Unknown command: {args.command}")

    try:
        return handler(args)
    except HashrunError as e:
        error(str(e))
        return 1
    except OSError as e:
        error(f"{args.command} failed: {e}")
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == '__main__':
    run()
