"""
Command-line interface for jsoncheck.
"""

import argparse
import logging
import sys
from typing import List, Optional

from jsoncheck.jsoncheck_config import JSONCheckConfig, JSONCheckErrorPolicy
from jsoncheck.jsoncheck_error import JSONCheckError
from jsoncheck.jsoncheck_reporter import JSONCheckReporter
from jsoncheck.jsoncheck_scanner import JSONCheckScanner
from jsoncheck.jsoncheck_validator import JSONCheckResult, validate_file


# Exit code for problems that prevent a verdict (bad options, unreadable files)
EXIT_USAGE_ERROR = 2

# Name of the stderr handler installed by --verbose
VERBOSE_HANDLER_NAME = "jsoncheck-verbose"

_logger = logging.getLogger("JSONCheckCLI")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="jsoncheck",
        description="Check that JSON documents are syntactically well formed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data.json                   # Stop at the first error
  %(prog)s --collect a.json b.json     # Report errors across sibling members
  %(prog)s --strict --format json x.json
  %(prog)s --tokens data.json          # Dump the token stream
        """
    )

    parser.add_argument('files', nargs='+', metavar='FILE', help='JSON files to check')
    parser.add_argument('--config', '-c', help='YAML configuration file')
    parser.add_argument('--format', '-f', choices=['text', 'json'], default='text', help='Output format')
    parser.add_argument('--output', '-o', help='Output file path')
    parser.add_argument('--collect', action='store_true',
                        help='Keep going after an error and report errors in later members')
    parser.add_argument('--max-errors', type=int, help='Stop after this many errors (with --collect)')
    parser.add_argument('--max-depth', type=int, help='Maximum nesting depth of objects and arrays')
    parser.add_argument('--strict', action='store_true',
                        help='Require commas, strict string and number literals, and nothing after the root')
    parser.add_argument('--allow-any-root', action='store_true',
                        help='Accept any JSON value at the top level, not just an object')
    parser.add_argument('--tokens', action='store_true', help='Print the token stream instead of validating')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    return parser


def configure_logging(verbose: bool) -> None:
    """
    Send debug log records to stderr when verbose output is requested.

    The stderr handler is installed at most once per process.
    """
    if not verbose:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    if any(h.get_name() == VERBOSE_HANDLER_NAME for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(VERBOSE_HANDLER_NAME)
    handler.setFormatter(logging.Formatter('%(levelname)s [%(name)s]: %(message)s'))
    root_logger.addHandler(handler)


def load_config(args: argparse.Namespace) -> JSONCheckConfig:
    """
    Build the configuration from an optional file plus command-line overrides.

    Raises:
        JSONCheckConfigError: If the file or the resulting options are invalid
    """
    if args.config:
        config = JSONCheckConfig.load_from_file(args.config)
        _logger.info("Loaded configuration from %s", args.config)

    else:
        config = JSONCheckConfig()

    if args.strict:
        config = config.with_overrides(
            strict_commas=True,
            strict_strings=True,
            strict_numbers=True,
            reject_trailing_tokens=True
        )

    config = config.with_overrides(
        error_policy=JSONCheckErrorPolicy.COLLECT if args.collect else None,
        max_errors=args.max_errors,
        max_depth=args.max_depth,
        require_object_root=False if args.allow_any_root else None
    )

    # Re-check, since command-line values bypass the file checks
    return JSONCheckConfig.from_dict(config.to_dict())


def dump_tokens(path: str) -> None:
    """Print every token of a file, one per line."""
    with open(path, 'r', encoding='utf-8-sig') as f:
        text = f.read()

    print(f"{path}:")
    for token in JSONCheckScanner(text):
        print(f"  {token.kind.name:<16}{token.literal!r:<24}({token.line},{token.column})")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        if args.tokens:
            for path in args.files:
                dump_tokens(path)

            return 0

        config = load_config(args)

        results: List[JSONCheckResult] = []
        for path in args.files:
            _logger.debug("Checking %s", path)
            results.append(validate_file(path, config))

        reporter = JSONCheckReporter()
        if args.output:
            reporter.save_results(results, args.output, args.format)
            print(f"Results saved to: {args.output}")

        else:
            reporter.print_results(results, args.format)

    except JSONCheckError as e:
        print(e, file=sys.stderr)
        return EXIT_USAGE_ERROR

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    return reporter.get_exit_code(results)


if __name__ == '__main__':
    sys.exit(main())
