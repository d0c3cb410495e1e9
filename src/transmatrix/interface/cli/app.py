from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
configuration hierarchy (defaults, config file, command-line overrides),
dispatch to the export/import services and result rendering.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Union

from transmatrix.core.services.exporter import (
    export_missing,
    export_translations,
    export_unused,
    resolve_export_filename,
)
from transmatrix.core.services.importer import import_file
from transmatrix.core.services.store import JsonTreeStore
from transmatrix.core.services.usage_scanner import scan_used_keys
from transmatrix.core.services.validator import validate_config
from transmatrix.domain.config import default_config_path, load_config, save_config
from transmatrix.domain.result_models import ExportResult, ImportResult
from transmatrix.infra.fs import resolve_in_dir
from transmatrix.infra.logging import LoggingConfig, configure_logging, get_logger
from transmatrix.interface.cli import args as cli_args
from transmatrix.utils.i18n import i18n

logger = get_logger(__name__)

Result = Union[ExportResult, ImportResult]

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 usage error, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console only until the configuration is known)
    configure_logging(LoggingConfig.from_settings({}, debug=args.debug))
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration: file, then command-line overrides, then validation
    base_conf = load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    configure_logging(LoggingConfig.from_settings(clean_conf), force=True)

    if args.save_config:
        target = args.config_path or default_config_path()
        if save_config(clean_conf, target):
            print(i18n.t("cli.status.config_saved", path=target))

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    if not args.command:
        if args.save_config:
            return 0
        print(f"ERROR: {i18n.t('cli.errors.no_command')}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 2

    # 4. Command execution phase
    try:
        result = _dispatch(args, clean_conf)
    except KeyboardInterrupt:
        msg = i18n.t("cli.status.interrupted")
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = i18n.t("cli.errors.unexpected", error=str(e))
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif isinstance(result, ImportResult):
        _print_import_summary(result)
    else:
        _print_export_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# COMMAND DISPATCH
# -----------------------------------------------------------------------------

def _dispatch(args: Any, conf: Dict[str, Any]) -> Result:
    """
    Route the parsed sub-command to its service.

    Relative file names are resolved against the storage directory; a
    missing format falls back to the configured default.
    """
    command = args.command
    fmt = args.format or conf["default_format"]
    store = JsonTreeStore(conf["lang_path"])
    storage = conf["storage_path"]
    language = conf["default_language"]

    if command == "import":
        name = args.input or cli_args.default_file_name(command, fmt)
        return import_file(store, resolve_in_dir(storage, name), fmt, dry_run=args.dry_run)

    name = args.output or cli_args.default_file_name(command, fmt)
    if command == "export":
        output_path = resolve_in_dir(storage, resolve_export_filename(fmt, name))
        return export_translations(store, output_path, fmt, args.target_file, language)

    output_path = resolve_in_dir(storage, name)
    if command == "export-missing":
        return export_missing(store, output_path, fmt, args.target_file, language)

    used_keys = scan_used_keys(conf["views_path"], conf["view_extension"])
    return export_unused(store, used_keys, output_path, fmt, args.target_file, language)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k, v in overrides.items():
        if k in base and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_export_summary(result: ExportResult) -> None:
    if not result.ok:
        print(f"ERROR: {i18n.t('cli.errors.export_fail', error=result.error)}", file=sys.stderr)
        return

    print(i18n.t("cli.status.exported", path=result.output_path))
    print(i18n.t(
        "cli.status.export_stats",
        rows=result.rows,
        files=result.files,
        languages=", ".join(result.languages) or "-",
    ))


def _print_import_summary(result: ImportResult) -> None:
    """
    Print the outcome of an import, listing every failed group.

    Args:
        result: The import result to render.
    """
    if result.error:
        print(f"ERROR: {i18n.t('cli.errors.import_fail', error=result.error)}", file=sys.stderr)
        if not (result.succeeded or result.failed):
            return
    else:
        print(i18n.t("cli.status.imported", path=result.input_path))

    if result.dry_run:
        print(i18n.t("cli.status.dry_run"))

    print(i18n.t(
        "cli.status.import_stats",
        succeeded=result.succeeded_count,
        failed=result.failed_count,
    ))
    for failure in result.failed:
        print(
            i18n.t(
                "cli.status.failed_group",
                file=failure.file_id,
                language=failure.language,
                error=failure.error,
            ),
            file=sys.stderr,
        )

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
