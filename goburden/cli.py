"""Command-line interface for goburden."""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .config import SORT_ORDERS, load_config
from .enrichment import run_enrichment
from .errors import GoBurdenError
from .validators import validate_inputs
from .version import __version__

logger = logging.getLogger("goburden")

LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for goburden CLI."""
    parser = argparse.ArgumentParser(
        description=(
            "goburden: propagate case/control variant counts through an ontology "
            "and rank terms by Fisher's exact test."
        )
    )

    # General Options
    general_group = parser.add_argument_group("General Options")
    general_group.add_argument(
        "--version",
        action="version",
        version=f"goburden {__version__}",
        help="Show the current version and exit",
    )
    general_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )
    general_group.add_argument(
        "--log-file", help="Path to a file to write logs to (in addition to stderr)."
    )
    general_group.add_argument(
        "-c",
        "--config",
        help="Path to configuration file",
        default=None,
    )

    # Core Input/Output
    io_group = parser.add_argument_group("Core Input/Output")
    io_group.add_argument(
        "-v",
        "--vcf-file",
        help="Annotated input VCF (plain or .gz), or '-' for stdin",
        required=True,
    )
    io_group.add_argument(
        "-O",
        "--ontology",
        dest="ontology_file",
        help="Ontology in OBO format (plain or .gz), e.g. go-basic.obo",
        required=True,
    )
    io_group.add_argument(
        "-G",
        "--genes",
        dest="gene_association_file",
        help=(
            "Gene association file: tab delimited, two columns: "
            "(1) gene name (2) term identifier, name or synonym"
        ),
        required=True,
    )
    io_group.add_argument(
        "-o",
        "--output-file",
        nargs="?",
        const="stdout",
        help="Output file name or 'stdout'/'-' for stdout (default: stdout)",
    )

    # Cohort
    cohort_group = parser.add_argument_group("Cohort")
    cohort_group.add_argument(
        "-p",
        "--pedigree",
        dest="ped_file",
        help=(
            "PED file; column 6 gives the status (2 = case, 1 = control). Without a PED "
            "file or sample files, ##Sample=<ID=...,Status=...> lines of the VCF header are used."
        ),
    )
    cohort_group.add_argument(
        "--case-samples-file",
        help="File with case sample IDs, one per line",
    )
    cohort_group.add_argument(
        "--control-samples-file",
        help=(
            "File with control sample IDs, one per line. If only one of the two "
            "sample files is given, all other VCF samples take the other role."
        ),
    )

    # Analysis
    analysis_group = parser.add_argument_group("Analysis")
    analysis_group.add_argument(
        "--sort-order",
        choices=list(SORT_ORDERS),
        default=None,
        help=(
            "Order of the output by p-value: 'ascending' lists the most significant "
            "terms first (default from config)."
        ),
    )
    analysis_group.add_argument(
        "--relation-kind",
        action="append",
        dest="relation_kinds",
        help=(
            "Ontology relation kind to follow (is_a, part_of, regulates, ...). "
            "Specify multiple times for multiple kinds. Overrides config setting."
        ),
    )
    analysis_group.add_argument(
        "--keep-obsolete",
        action="store_true",
        default=False,
        help="Keep terms flagged is_obsolete in the ontology.",
    )
    analysis_group.add_argument(
        "--progress-interval",
        type=int,
        default=None,
        help="Log progress every N variants (0 disables).",
    )

    return parser


def parse_args(args_list=None):
    """Parse command line arguments.

    Parameters
    ----------
    args_list : list, optional
        List of arguments to parse. If None, uses sys.argv

    Returns
    -------
    argparse.Namespace
        Parsed arguments
    """
    parser = create_parser()
    return parser.parse_args(args_list)


def build_config(args: argparse.Namespace, cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Merge command line arguments into the loaded configuration."""
    cfg = dict(cfg)
    cfg["vcf_file"] = args.vcf_file
    cfg["ontology_file"] = args.ontology_file
    cfg["gene_association_file"] = args.gene_association_file
    cfg["output_file"] = args.output_file
    cfg["ped_file"] = args.ped_file
    cfg["case_samples_file"] = args.case_samples_file
    cfg["control_samples_file"] = args.control_samples_file

    if args.sort_order:
        cfg["sort_order"] = args.sort_order
    if args.relation_kinds:
        cfg["relation_kinds"] = args.relation_kinds
    if args.keep_obsolete:
        cfg["skip_obsolete_terms"] = False
    if args.progress_interval is not None:
        cfg["progress_interval"] = args.progress_interval
    return cfg


def configure_logging(log_level: str, log_file: Optional[str] = None) -> None:
    """Set the goburden log level and optionally add a file handler."""
    logging.getLogger("goburden").setLevel(LOG_LEVEL_MAP[log_level])

    if log_file:
        log_file_path = Path(log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)

        fh = logging.FileHandler(log_file)
        fh.setLevel(LOG_LEVEL_MAP[log_level])
        fh.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(fh)
        logger.debug(f"Logging to file enabled: {log_file}")


def main(args_list=None) -> int:
    """Run main entry point for goburden CLI.

    Steps:
        1. Parse arguments.
        2. Configure logging and load config.
        3. Validate input files and cohort options.
        4. Run the enrichment and write the report.

    Returns 0 on success and 1 on any error, after logging a single message.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    args = parse_args(args_list)
    configure_logging(args.log_level, args.log_file)

    start_time = datetime.datetime.now()
    logger.info(f"Run started at {start_time.isoformat()}")
    logger.debug(f"CLI arguments: {args}")

    try:
        cfg = build_config(args, load_config(args.config))
        logger.debug(f"Configuration loaded: {cfg}")
        validate_inputs(cfg)
        result = run_enrichment(cfg)
    except (GoBurdenError, OSError, EOFError, ValueError) as e:
        logger.error(str(e))
        return 1

    end_time = datetime.datetime.now()
    logger.info(
        f"Run ended at {end_time.isoformat()}, {len(result.rows)} terms reported, "
        f"duration {end_time - start_time}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
