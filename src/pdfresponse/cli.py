import click
import logging
import sys
from pathlib import Path
from typing import Optional

from .exceptions import PdfResponseError
from .constants import OutputDestination
from .response import PdfResponse
from .sources import JinjaTemplate
from .utils import load_config, parse_key_values, setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.argument('source', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o',
              type=click.Path(),
              help='Output PDF filename (derived from the title when omitted)')
@click.option('--title',
              help='Document title')
@click.option('--author',
              help='Document author')
@click.option('--format', 'page_format',
              help='Page format, e.g. A4, Letter, A4-L')
@click.option('--orientation',
              type=click.Choice(['portrait', 'landscape', 'P', 'L'], case_sensitive=False),
              help='Page orientation')
@click.option('--margins',
              help='Margins as "top,right,bottom,left,header,footer" in mm')
@click.option('--zoom',
              help='Initial zoom: fullpage, fullwidth, real, default or a percentage')
@click.option('--layout',
              type=click.Choice(['single', 'continuous', 'two', 'default']),
              help='Initial page layout')
@click.option('--styles',
              type=click.Path(exists=True, dir_okay=False),
              help='Extra stylesheet applied after the document')
@click.option('--ignore-styles',
              is_flag=True,
              help='Drop <style> elements and comments from the source')
@click.option('--multi-language',
              is_flag=True,
              help='Enable bidirectional text handling')
@click.option('--template',
              is_flag=True,
              help='Treat SOURCE as a Jinja2 template')
@click.option('--var', 'variables',
              multiple=True,
              help='Template variable as KEY=VALUE (can be used multiple times)')
@click.option('--print-dialog',
              is_flag=True,
              help='Open the print dialog when the PDF is opened')
@click.option('--config', '-c',
              type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose logging')
def main(source: str,
         output: Optional[str],
         title: Optional[str],
         author: Optional[str],
         page_format: Optional[str],
         orientation: Optional[str],
         margins: Optional[str],
         zoom: Optional[str],
         layout: Optional[str],
         styles: Optional[str],
         ignore_styles: bool,
         multi_language: bool,
         template: bool,
         variables: tuple,
         print_dialog: bool,
         config: Optional[str],
         verbose: bool):
    """Render SOURCE (an HTML file or Jinja2 template) to a PDF file."""
    app_config = load_config(config) if config else load_config()
    if verbose:
        app_config['logging']['level'] = 'DEBUG'
    setup_logging(app_config['logging'])

    try:
        params = parse_key_values(variables)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--var')

    source_path = Path(source)
    if template:
        document = JinjaTemplate.from_file(str(source_path), **params)
    else:
        document = source_path.read_text(encoding='utf-8')

    response = PdfResponse.from_config(document, app_config)
    response.base_url = str(source_path.resolve().parent)
    response.document_title = title or source_path.stem
    if author:
        response.document_author = author
    if page_format:
        response.page_format = page_format
    if orientation:
        response.page_orientation = orientation
    if margins:
        response.page_margins = margins
    if zoom:
        response.display_zoom = zoom
    if layout:
        response.display_layout = layout
    if styles:
        response.styles = Path(styles).read_text(encoding='utf-8')
    if ignore_styles:
        response.ignore_styles_in_html = True
    if multi_language:
        response.multi_language = True
    response.output_name = output
    response.output_destination = OutputDestination.FILE

    try:
        if print_dialog:
            response.open_print_dialog()
        response.send()
    except PdfResponseError as e:
        logger.error(f"PDF generation failed: {e}")
        raise click.ClickException(str(e))

    click.echo(f"✅ PDF written to {response.output_name}")


if __name__ == '__main__':
    sys.exit(main())
