import logging
import os
import sys
from typing import Any

import yaml

import click
from tstranslate import parser
from tstranslate.writer import PoHeader

logger = logging.getLogger(__name__)

DEFAULT_LOGGING = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    "datefmt": "%Y-%m-%d %H:%M:%S",
}


def load_config(config_file_path: str) -> dict[str, Any]:
    config: dict[str, Any] = {}
    try:
        with open(config_file_path, "r") as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        logger.warning(f"{config_file_path} not found, using defaults.")
    except yaml.YAMLError as exc:
        logger.error(sys._getframe().f_code.co_name + " " + str(exc))
        sys.exit(1)

    config["logging"] = {**DEFAULT_LOGGING, **(config.get("logging") or {})}
    config["header"] = config.get("header") or {}
    return config


@click.group()
@click.version_option()
def cli() -> None:
    pass


@cli.command("extract")
@click.option("--config-folder", default="config", help="Configuration folder path.")
@click.option(
    "--source-folder", default="tests", help="Folder scanned for .ts and .tsx files."
)
@click.option("--output", default="translations.po", help="PO file to write.")
@click.option(
    "--keep-going",
    is_flag=True,
    help="Skip files that cannot be read or parsed instead of aborting.",
)
@click.version_option()
def extract(
    config_folder: str, source_folder: str, output: str, keep_going: bool
) -> None:
    config_folder_path = os.path.abspath(config_folder)
    config_file_path = os.path.abspath(f"{config_folder_path}/config.yml")

    config = load_config(config_file_path)

    logging.basicConfig(
        level=logging.getLevelName(config["logging"]["level"]),
        format=config["logging"]["format"],
        datefmt=config["logging"]["datefmt"],
    )

    try:
        header = PoHeader(**config["header"])
    except TypeError as exc:
        raise click.BadParameter(str(exc), param_hint="header") from exc

    try:
        parser.run(
            source_folder_path=os.path.abspath(source_folder),
            output_path=output,
            header=header,
            keep_going=keep_going,
        )
    except (OSError, parser.ExtractionError) as exc:
        raise click.ClickException(str(exc)) from exc
