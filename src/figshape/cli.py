"""
Command-line interface for figshape.

Provides commands for classifying images and managing configuration.
"""

import argparse
import sys

from figshape.config import load_config, save_default_config
from figshape.tracer import configure_tracer, get_tracer


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="figshape",
        description="figshape: classify flat-color figures as circles, triangles or quadrilaterals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Classify every figure of the input images")
    run_parser.add_argument(
        "--inputs", "-i",
        nargs="+",
        required=True,
        help="Input image files",
    )
    run_parser.add_argument(
        "--out", "-o",
        required=True,
        help="Output directory",
    )
    run_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    run_parser.add_argument(
        "--workers", "-w",
        type=int,
        default=None,
        help="Classify figures in a pool of this many threads",
    )
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug artifact generation",
    )
    run_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    run_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    run_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    show_parser = subparsers.add_parser("show", help="Print the summary of an existing report")
    show_parser.add_argument(
        "--report", "-r",
        required=True,
        help="Path to classification_report.json from a previous run",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="figshape_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "run":
        return handle_run(args)
    elif args.command == "show":
        return handle_show(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_run(args):
    """Handle the run command."""
    config = load_config(args.config)

    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )

    tracer = get_tracer()

    if args.workers is not None:
        config.batch.workers = args.workers

    try:
        from figshape.export.report import format_result
        from figshape.pipeline import run_pipeline

        with tracer.span("cli_run", module="cli"):
            report = run_pipeline(
                input_paths=args.inputs,
                out_dir=args.out,
                config=config,
                debug=args.debug,
            )

        for result in report.results:
            print(format_result(result))

        print(f"\nClassification completed.")
        print(f"  Images processed: {len(report.images)}")
        print(f"  Figures classified: {len(report.results) - report.failure_count}")
        print(f"  Figures failed: {report.failure_count}")
        print(f"\nOutputs saved to: {args.out}/")
        print(f"  - classification_report.json")
        print(f"  - classification_summary.txt")

        if report.has_failures:
            print(f"\n[!] Some figures could not be classified. Review classification_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Classification failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1
    finally:
        tracer.config.close()


def handle_show(args):
    """Handle the show command."""
    from figshape.export.report import format_summary
    from figshape.pipeline import load_report

    try:
        report = load_report(args.report)
    except (OSError, ValueError) as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1

    print(format_summary(report))
    return 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
