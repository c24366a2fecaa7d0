# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line generator for configuration reference documentation.

Modules named with ``--module`` are imported so that the entries they declare
register themselves in the default registry; the registry is then rendered as
Markdown or JSON.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import pathlib
import sys
from typing import TYPE_CHECKING, Final

from configentry import __version__
from configentry.docs import render_reference_json, render_reference_markdown
from configentry.error_codes import error_code_for
from configentry.exceptions import ConfigEntryError
from configentry.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from configentry.model_types import LogComponent, ReferenceFormat
from configentry.registry import default_registry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from configentry.registry import ConfigRegistry

logger: logging.Logger = logging.getLogger("configentry.cli")

EXIT_IMPORT_FAILURE: Final[int] = 2
EXIT_ENTRY_ERROR: Final[int] = 3


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``configentry-docs`` command.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Exit code (0 on success, 2 when a module cannot be imported, 3 when
        a module declares an invalid entry such as a duplicate key).
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        print(f"configentry {__version__}")
        return 0
    configure_logging(args.log_format, log_level=args.log_level)
    for module_name in args.modules:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            logger.error(
                "Failed to import %s: %s",
                module_name,
                exc,
                extra=structured_extra(component=LogComponent.CLI, details={"module": module_name}),
            )
            return EXIT_IMPORT_FAILURE
        except ConfigEntryError as exc:
            code = error_code_for(exc)
            logger.error(
                "Invalid config entry declared by %s: [%s] %s",
                module_name,
                code,
                exc,
                extra=structured_extra(
                    component=LogComponent.CLI,
                    details={"module": module_name, "error_code": code},
                ),
            )
            return EXIT_ENTRY_ERROR
    output = render_reference(
        default_registry(),
        ReferenceFormat(args.format),
        include_internal=args.include_internal,
    )
    if args.output is None:
        sys.stdout.write(output)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output, encoding="utf-8")
        logger.info(
            "Wrote configuration reference to %s",
            args.output,
            extra=structured_extra(component=LogComponent.CLI),
        )
    return 0


def render_reference(
    registry: ConfigRegistry,
    reference_format: ReferenceFormat,
    *,
    include_internal: bool = False,
) -> str:
    if reference_format is ReferenceFormat.JSON:
        return render_reference_json(registry, include_internal=include_internal)
    return render_reference_markdown(registry, include_internal=include_internal)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="configentry-docs",
        description="Render reference documentation for declared config entries.",
    )
    parser.add_argument(
        "-m",
        "--module",
        dest="modules",
        action="append",
        default=[],
        metavar="MODULE",
        help="Import MODULE before rendering (repeatable).",
    )
    parser.add_argument(
        "--format",
        choices=[item.value for item in ReferenceFormat],
        default=ReferenceFormat.MARKDOWN.value,
        help="Output format (default: markdown).",
    )
    parser.add_argument(
        "--include-internal",
        action="store_true",
        help="Also document internal entries.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=pathlib.Path,
        default=None,
        help="Write to this file instead of stdout.",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log output format (default: text, or $CONFIGENTRY_LOG_FORMAT).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Log verbosity (default: info, or $CONFIGENTRY_LOG_LEVEL).",
    )
    parser.add_argument("--version", action="store_true", help="Print the version and exit.")
    return parser


__all__ = ["EXIT_ENTRY_ERROR", "EXIT_IMPORT_FAILURE", "main", "render_reference"]
