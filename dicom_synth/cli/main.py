"""DICOM Synth - Command Line Interface

Generates synthetic DICOM studies (or study/series/image CSV tables) for a
number of fake patients. All data is synthetic.
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from dicom_synth.cli.base import subcommand_main
from dicom_synth.core.config import GenerationConfig, OutputMode, get_settings
from dicom_synth.core.person import PersonFactory
from dicom_synth.generator import DicomDataGenerator
from dicom_synth.output.layout import FileSystemLayout
from dicom_synth.stats.registry import get_registry
from dicom_synth.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

STUDIES_FILENAME = "studies.csv"


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the generator."""
    parser = argparse.ArgumentParser(
        prog="dicom-synth",
        description="Generate synthetic DICOM studies for test fixtures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10 patients, one study each, all modalities
  dicom-synth ./out -n 10 --seed 42

  # CT and MR only, at most 500 images, no pixel data
  dicom-synth ./out -n 100 -m CT,MR --max-images 500 --no-pixels

  # Study/series/image CSV tables instead of DICOM files
  dicom-synth ./out -n 1000 --csv
        """,
    )

    parser.add_argument(
        "output",
        type=str,
        nargs="?",
        default="./artifacts/synthetic",
        metavar="DIR",
        help="Output directory (default: ./artifacts/synthetic)",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=10,
        metavar="N",
        help="Number of patients (one study each, default: 10)",
    )
    parser.add_argument(
        "-m",
        "--modalities",
        type=str,
        default=None,
        metavar="MODS",
        help="Comma separated modality codes (default: all supported)",
    )
    parser.add_argument(
        "--max-images",
        type=int,
        default=None,
        metavar="N",
        help="Stop after N images across all studies",
    )
    parser.add_argument("--seed", type=int, default=None, metavar="N", help="Random seed")
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Write study/series/image CSV tables instead of DICOM files",
    )
    parser.add_argument(
        "--no-pixels", action="store_true", help="Write DICOM files without pixel data"
    )
    parser.add_argument(
        "--layout",
        type=str,
        choices=[layout.value for layout in FileSystemLayout],
        default=None,
        help="Directory layout for DICOM files (default: study_year_month_day)",
    )
    parser.add_argument(
        "--list-modalities",
        action="store_true",
        help="List supported modality codes and exit",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    parser.add_argument(
        "--log-format", type=str, default=None, choices=["json", "console"]
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def build_config(args: argparse.Namespace) -> GenerationConfig:
    """Overlay command line arguments on the environment configuration."""
    config = get_settings().generation
    overrides: dict[str, object] = {}
    if args.modalities is not None:
        overrides["modalities"] = args.modalities
    if args.max_images is not None:
        overrides["max_images"] = args.max_images
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.csv:
        overrides["output_mode"] = OutputMode.CSV
    if args.no_pixels:
        overrides["no_pixels"] = True
    if args.layout is not None:
        overrides["layout"] = FileSystemLayout(args.layout)
    return GenerationConfig(**{**config.model_dump(), **overrides})


def run(args: argparse.Namespace) -> int:
    """Generate studies as described by the parsed arguments."""
    log_settings = get_settings().logging
    configure_logging(
        log_level=args.log_level or log_settings.log_level.value,
        json_format=(args.log_format or log_settings.log_format) == "json",
        log_file=log_settings.log_file,
    )

    if args.list_modalities:
        print(", ".join(get_registry().supported_modalities()))
        return 0

    config = build_config(args)
    output_dir = Path(args.output)

    with DicomDataGenerator.from_config(config, output_dir) as generator:
        people_seed = None if config.seed is None else config.seed + 1
        factory = PersonFactory(random.Random(people_seed))
        people = (factory.create() for _ in range(args.count))
        rows = generator.generate_test_data_file(
            people, output_dir / STUDIES_FILENAME
        )
        images = generator.quota.consumed

    logger.info("generation_complete", studies=rows, images=images)
    print(f"[+] Generated {rows} studies, {images} images in {output_dir}")
    if args.verbose:
        print(f"    Mode:       {config.output_mode.value}")
        print(f"    Modalities: {','.join(config.modalities) or 'all'}")
        if config.seed is not None:
            print(f"    Seed:       {config.seed}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dicom-synth command."""
    return subcommand_main(create_parser, run, argv)


if __name__ == "__main__":
    sys.exit(main())
