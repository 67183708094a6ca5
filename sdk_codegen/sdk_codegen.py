import json
import logging
import sys
import warnings

import click
import yaml

from .config import ApiVersion, GeneratorConfig, Language
from .document import Document
from .errors import SdkCodegenError, UnknownTypeWarning
from .generator import SdkGenerator

logger = logging.getLogger("sdk_codegen")


@click.command()
@click.option(
    "--language",
    "-l",
    "languages",
    multiple=True,
    required=True,
    type=click.Choice([lang.value for lang in Language]),
    help="Target to generate; repeat for several",
)
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--qa-mode", is_flag=True, default=False, help="Keep hidden, internal and third-party entries")
@click.option("--api-version", default=None, type=click.Choice([v.value for v in ApiVersion]))
@click.option("--dry-run", is_flag=True, default=False, help="List the files that would be written")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("spec_path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", type=click.Path(resolve_path=True))
def sdk_codegen(languages, config, qa_mode, api_version, dry_run, verbose, spec_path, output):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.captureWarnings(True)
    # Unknown types are already logged where they are found
    warnings.simplefilter("ignore", UnknownTypeWarning)

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    # CLI flags override the config file
    if qa_mode:
        config.qa_mode = True
    if api_version is not None:
        config.api_version = ApiVersion(api_version)
    if dry_run:
        config.output.dry_run = True

    try:
        generator = SdkGenerator(Document.load(spec_path), config)
    except (SdkCodegenError, yaml.YAMLError) as e:
        logger.error("Cannot build the API model: %s", e)
        sys.exit(1)

    result = generator.generate([Language(lang) for lang in languages], output)
    if config.output.dry_run:
        for path in result.written:
            click.echo(str(path))
    else:
        logger.info("Wrote %d files to %s", len(result.written), output)
    for language, message in result.failures.items():
        logger.error("%s SDK was not generated: %s", language.value, message)
    if not result.ok:
        sys.exit(1)
