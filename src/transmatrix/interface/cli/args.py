from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus one sub-command per
operation) and translates parsed namespaces into configuration overrides
and default file names.
"""

import argparse
import os
from typing import Any, Dict

from transmatrix.core.codecs import available_formats, get_codec
from transmatrix.domain.constants import (
    DEFAULT_EXPORT_FILE,
    DEFAULT_IMPORT_FILE,
    DEFAULT_MISSING_FILE,
    DEFAULT_UNUSED_FILE,
)
from transmatrix.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the transmatrix CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="transmatrix",
        description=i18n.t("app.description"),
    )

    # --- Configuration Sources ---
    p.add_argument("--config", dest="config_path", default=None, help=i18n.t("cli.args.config"))
    p.add_argument("--lang-path", dest="lang_path", default=None, help=i18n.t("cli.args.lang_path"))
    p.add_argument("--views-path", dest="views_path", default=None, help=i18n.t("cli.args.views_path"))
    p.add_argument("--storage-path", dest="storage_path", default=None, help=i18n.t("cli.args.storage_path"))
    p.add_argument(
        "--default-language",
        dest="default_language",
        default=None,
        help=i18n.t("cli.args.default_language"),
    )

    # --- Diagnostics and Output ---
    p.add_argument("--debug", action="store_true", help=i18n.t("cli.args.debug"))
    p.add_argument("--log-file", dest="log_file", default=None, help=i18n.t("cli.args.log_file"))
    p.add_argument("--json", dest="json_output", action="store_true", help=i18n.t("cli.args.json"))
    p.add_argument("--dump-config", action="store_true", help=i18n.t("cli.args.dump"))
    p.add_argument("--save-config", action="store_true", help=i18n.t("cli.args.save_config"))

    sub = p.add_subparsers(dest="command")
    formats = available_formats()

    # --- export [format] [output] ---
    exp = sub.add_parser("export", help=i18n.t("cli.args.export"))
    exp.add_argument("format", nargs="?", choices=formats, default=None, help=i18n.t("cli.args.format"))
    exp.add_argument("output", nargs="?", default=None, help=i18n.t("cli.args.output"))
    exp.add_argument("--file", dest="target_file", default=None, help=i18n.t("cli.args.file"))

    # --- import [format] [input] ---
    imp = sub.add_parser("import", help=i18n.t("cli.args.import"))
    imp.add_argument("format", nargs="?", choices=formats, default=None, help=i18n.t("cli.args.format"))
    imp.add_argument("input", nargs="?", default=None, help=i18n.t("cli.args.input"))
    imp.add_argument("--dry-run", action="store_true", help=i18n.t("cli.args.dry_run"))

    # --- export-missing / export-unused [output] ---
    for name, help_key in (("export-missing", "cli.args.export_missing"), ("export-unused", "cli.args.export_unused")):
        sp = sub.add_parser(name, help=i18n.t(help_key))
        sp.add_argument("output", nargs="?", default=None, help=i18n.t("cli.args.output"))
        sp.add_argument("--file", dest="target_file", default=None, help=i18n.t("cli.args.file"))
        sp.add_argument(
            "--format",
            dest="format",
            choices=formats,
            default=None,
            help=i18n.t("cli.args.format"),
        )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually passed are returned.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for key in ("lang_path", "views_path", "storage_path", "default_language", "log_file"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value

    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides


def default_file_name(command: str, fmt: str) -> str:
    """
    Default artifact name of a command for a given format.

    'translations.csv' for a CSV export/import, 'translations.xlsx' for an
    XLSX one, 'missing_translations.json' for a JSON missing export, etc.
    """
    base = {
        "export": DEFAULT_EXPORT_FILE,
        "import": DEFAULT_IMPORT_FILE,
        "export-missing": DEFAULT_MISSING_FILE,
        "export-unused": DEFAULT_UNUSED_FILE,
    }[command]
    stem, _ = os.path.splitext(base)
    return f"{stem}{get_codec(fmt).extension}"
