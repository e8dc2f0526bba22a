"""
Command-line interface for pdfopsx.
"""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pdfopsx import __version__
from pdfopsx.exceptions import PdfOpsError
from pdfopsx.files import load_image, open_pdf, write_pdf, write_pdfs, write_protected_pdf
from pdfopsx.forms import flatten_form, set_form_field
from pdfopsx.pages import extract_pages, extract_pages_into_pdfs, parse_page_spec
from pdfopsx.splitter import split_pdf
from pdfopsx.stamps import add_diagonal_text_stamp, add_image_stamp, add_text_stamp
from pdfopsx.tags import find_merge_tags
from pdfopsx.utils import format_file_size, get_logger, get_page_count, pdf_to_text

console = Console()


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


def _done(message, output):
    console.print(f"\n[bold green]✓ {message}[/bold green]")
    console.print(f"[dim]Output: {os.path.abspath(output)}[/dim]\n")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    pdfopsx - Split, merge, stamp, tag and protect PDF files.
    """
    get_logger("pdfopsx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True))
def show_info(input_pdf):
    """
    Display basic information about a PDF file.

    Example:

        pdfopsx info input.pdf
    """
    try:
        content = open_pdf(input_pdf)

        table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", style="green")

        table.add_row("File Path", os.path.abspath(input_pdf))
        table.add_row("File Size", format_file_size(os.path.getsize(input_pdf)))
        table.add_row("Number of Pages", str(get_page_count(content)))

        console.print()
        console.print(table)
        console.print()

    except PdfOpsError as e:
        _fail(e)
    except OSError as e:
        _fail(f"Unable to read {input_pdf}: {e}")


@cli.command(name="text")
@click.argument('input_pdf', type=click.Path(exists=True))
def show_text(input_pdf):
    """
    Print the extracted text of every page.
    """
    try:
        click.echo(pdf_to_text(open_pdf(input_pdf)))
    except Exception as e:
        _fail(e)


@cli.command(name="extract")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option(
    '--pages', '-p',
    required=True,
    help='Pages to extract (e.g. "1,3,5-7")',
    type=str
)
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF path, or output directory with --separate',
    type=click.Path()
)
@click.option(
    '--separate',
    is_flag=True,
    help='Write one PDF per selected page'
)
def extract(input_pdf, pages, output, separate):
    """
    Extract pages into a new PDF.

    Pages outside the document are ignored.

    Examples:

        pdfopsx extract input.pdf -p 1,3,5-7 -o selection.pdf

        pdfopsx extract input.pdf -p 2-4 -o pages/ --separate
    """
    try:
        page_list = parse_page_spec(pages)
        content = open_pdf(input_pdf)

        if separate:
            output_dir = Path(output)
            output_dir.mkdir(parents=True, exist_ok=True)
            documents = extract_pages_into_pdfs(content, page_list)
            for index, document in enumerate(documents, start=1):
                write_pdf(document, output_dir / f"page_{index:03d}.pdf")
            _done(f"Extracted {len(documents)} single-page files", output_dir)
        else:
            write_pdf(extract_pages(content, page_list), output)
            _done("Extracted pages", output)

    except Exception as e:
        _fail(e)


@cli.command(name="split")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option(
    '--size', '-s',
    default=1,
    help='Pages per output document',
    type=int
)
@click.option(
    '--output-dir', '-o',
    default='./output',
    help='Output directory',
    type=click.Path()
)
@click.option(
    '--prefix', '-p',
    default='chunk',
    help='Prefix for output filenames',
    type=str
)
@click.option(
    '--drop-remainder',
    is_flag=True,
    help='Discard trailing pages that do not fill a whole chunk'
)
def split(input_pdf, size, output_dir, prefix, drop_remainder):
    """
    Split a PDF into documents of SIZE pages.

    Examples:

        pdfopsx split input.pdf

        pdfopsx split input.pdf -s 5 -o chunks
    """
    try:
        sections = split_pdf(open_pdf(input_pdf), size, keep_remainder=not drop_remainder)

        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        for index, section in enumerate(sections, start=1):
            write_pdf(section, output_path / f"{prefix}_{index:03d}.pdf")

        _done(f"Successfully split into {len(sections)} files", output_path)

    except Exception as e:
        _fail(e)


@cli.command(name="merge")
@click.argument('input_pdfs', nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    '--output', '-o',
    required=True,
    help='Output PDF path',
    type=click.Path()
)
def merge(input_pdfs, output):
    """
    Merge PDF files in the order given.

    Example:

        pdfopsx merge a.pdf b.pdf c.pdf -o merged.pdf
    """
    try:
        write_pdfs([open_pdf(path) for path in input_pdfs], output)
        _done(f"Merged {len(input_pdfs)} files", output)
    except Exception as e:
        _fail(e)


def _stamp_options(func):
    func = click.option(
        '--each-page', is_flag=True, help='Stamp every page instead of the first only'
    )(func)
    func = click.option(
        '--output', '-o', required=True, help='Output PDF path', type=click.Path()
    )(func)
    return func


@cli.command(name="stamp-text")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('text')
@_stamp_options
def stamp_text(input_pdf, text, output, each_page):
    """
    Add a short bold red note along the top edge.
    """
    try:
        write_pdf(add_text_stamp(open_pdf(input_pdf), text, each_page), output)
        _done("Stamp added", output)
    except Exception as e:
        _fail(e)


@cli.command(name="stamp-diagonal")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('text')
@_stamp_options
def stamp_diagonal(input_pdf, text, output, each_page):
    """
    Add large translucent text across the page diagonal.
    """
    try:
        write_pdf(add_diagonal_text_stamp(open_pdf(input_pdf), text, each_page), output)
        _done("Stamp added", output)
    except Exception as e:
        _fail(e)


@cli.command(name="stamp-image")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('image', type=click.Path(exists=True))
@_stamp_options
def stamp_image(input_pdf, image, output, each_page):
    """
    Add an image to the top-left corner.
    """
    try:
        write_pdf(add_image_stamp(open_pdf(input_pdf), load_image(image), each_page), output)
        _done("Stamp added", output)
    except Exception as e:
        _fail(e)


@cli.command(name="tags")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--start', '-s', 'start_tag', required=True, help='Opening delimiter', type=str)
@click.option('--end', '-e', 'end_tag', required=True, help='Closing delimiter', type=str)
def tags(input_pdf, start_tag, end_tag):
    """
    List the merge tags found between START and END and the pages they are on.

    Example:

        pdfopsx tags input.pdf -s "<<A>>" -e "<</A>>"
    """
    try:
        merge_tags = find_merge_tags(open_pdf(input_pdf), start_tag, end_tag)

        if not merge_tags:
            console.print("\n[yellow]No merge tags found.[/yellow]\n")
            return

        table = Table(title="Merge Tags")
        table.add_column("Tag", style="cyan")
        table.add_column("Pages", style="green")
        for merge_tag in merge_tags:
            table.add_row(merge_tag.tag, ", ".join(map(str, merge_tag.on_pages)))

        console.print()
        console.print(table)
        console.print()

    except Exception as e:
        _fail(e)


@cli.command(name="protect")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, help='Output PDF path', type=click.Path())
@click.option(
    '--password',
    default=None,
    help='Owner password (a random one is generated when omitted)',
    type=str
)
def protect(input_pdf, output, password):
    """
    Restrict a PDF to viewing and printing.

    No password is needed to open the result.
    """
    try:
        write_protected_pdf(open_pdf(input_pdf), output, password)
        _done("PDF protected", output)
    except Exception as e:
        _fail(e)


@cli.command(name="flatten")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, help='Output PDF path', type=click.Path())
def flatten(input_pdf, output):
    """
    Flatten form fields into the page content.
    """
    try:
        write_pdf(flatten_form(open_pdf(input_pdf)), output)
        _done("Form flattened", output)
    except Exception as e:
        _fail(e)


@cli.command(name="set-field")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.argument('field_name')
@click.argument('value')
@click.option('--output', '-o', required=True, help='Output PDF path', type=click.Path())
def set_field(input_pdf, field_name, value, output):
    """
    Set the value of a form field.
    """
    try:
        write_pdf(set_form_field(open_pdf(input_pdf), field_name, value), output)
        _done(f"Field '{field_name}' updated", output)
    except Exception as e:
        _fail(e)


if __name__ == '__main__':
    cli()
