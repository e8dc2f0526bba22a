"""Tests for the command-line interface."""

from io import BytesIO

import pikepdf
import pytest
from click.testing import CliRunner
from pypdf import PdfReader

from pdfopsx.cli import cli


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def report(pdf_file_factory):
    return pdf_file_factory("report.pdf", ["one", "<<A>> acme <</A>>", "three", "<<A>> acme <</A>>", "five"])


def _page_count(path):
    return len(PdfReader(str(path)).pages)


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_info(runner, report):
    result = runner.invoke(cli, ["info", str(report)])

    assert result.exit_code == 0
    assert "Number of Pages" in result.output
    assert "5" in result.output


def test_text(runner, report):
    result = runner.invoke(cli, ["text", str(report)])

    assert result.exit_code == 0
    assert "three" in result.output


def test_split(runner, report, tmp_path):
    out_dir = tmp_path / "chunks"

    result = runner.invoke(cli, ["split", str(report), "-s", "2", "-o", str(out_dir)])

    assert result.exit_code == 0
    files = sorted(out_dir.glob("chunk_*.pdf"))
    assert [_page_count(path) for path in files] == [2, 2, 1]


def test_split_drop_remainder(runner, report, tmp_path):
    out_dir = tmp_path / "chunks"

    result = runner.invoke(
        cli, ["split", str(report), "-s", "2", "-o", str(out_dir), "--drop-remainder"]
    )

    assert result.exit_code == 0
    assert len(list(out_dir.glob("*.pdf"))) == 2


def test_split_invalid_size(runner, report, tmp_path):
    result = runner.invoke(cli, ["split", str(report), "-s", "0", "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_merge(runner, pdf_file_factory, tmp_path):
    first = pdf_file_factory("a.pdf", ["a1", "a2"])
    second = pdf_file_factory("b.pdf", ["b1"])
    output = tmp_path / "merged.pdf"

    result = runner.invoke(cli, ["merge", str(first), str(second), "-o", str(output)])

    assert result.exit_code == 0
    assert _page_count(output) == 3


def test_extract(runner, report, tmp_path):
    output = tmp_path / "selection.pdf"

    result = runner.invoke(cli, ["extract", str(report), "-p", "5,1-2", "-o", str(output)])

    assert result.exit_code == 0
    texts = [page.extract_text().strip() for page in PdfReader(str(output)).pages]
    assert texts[0] == "one"
    assert texts[-1] == "five"
    assert len(texts) == 3


def test_extract_separate(runner, report, tmp_path):
    out_dir = tmp_path / "pages"

    result = runner.invoke(
        cli, ["extract", str(report), "-p", "2-3", "-o", str(out_dir), "--separate"]
    )

    assert result.exit_code == 0
    assert len(list(out_dir.glob("page_*.pdf"))) == 2


def test_tags(runner, report):
    result = runner.invoke(cli, ["tags", str(report), "-s", "<<A>>", "-e", "<</A>>"])

    assert result.exit_code == 0
    assert "acme" in result.output
    assert "2, 4" in result.output


def test_tags_none_found(runner, pdf_file_factory):
    plain = pdf_file_factory("plain.pdf", ["nothing"])

    result = runner.invoke(cli, ["tags", str(plain), "-s", "[[", "-e", "]]"])

    assert result.exit_code == 0
    assert "No merge tags found" in result.output


def test_stamp_text(runner, report, tmp_path):
    output = tmp_path / "stamped.pdf"

    result = runner.invoke(cli, ["stamp-text", str(report), "Approved", "-o", str(output)])

    assert result.exit_code == 0
    reader = PdfReader(str(output))
    assert "Approved" in reader.pages[0].extract_text()


def test_stamp_diagonal_each_page(runner, report, tmp_path):
    output = tmp_path / "draft.pdf"

    result = runner.invoke(
        cli, ["stamp-diagonal", str(report), "DRAFT", "--each-page", "-o", str(output)]
    )

    assert result.exit_code == 0
    assert _page_count(output) == 5


def test_stamp_image(runner, report, image_file_factory, tmp_path):
    logo = image_file_factory("logo.png")
    output = tmp_path / "branded.pdf"

    result = runner.invoke(cli, ["stamp-image", str(report), str(logo), "-o", str(output)])

    assert result.exit_code == 0
    assert _page_count(output) == 5


def test_protect(runner, report, tmp_path):
    output = tmp_path / "locked.pdf"

    result = runner.invoke(cli, ["protect", str(report), "--password", "s3cret", "-o", str(output)])

    assert result.exit_code == 0
    with pikepdf.open(output, password="s3cret") as pdf:
        assert pdf.is_encrypted
        assert pdf.owner_password_matched


def test_set_field_and_flatten(runner, form_pdf, tmp_path):
    source = tmp_path / "form.pdf"
    source.write_bytes(form_pdf)
    filled = tmp_path / "filled.pdf"
    flat = tmp_path / "flat.pdf"

    result = runner.invoke(cli, ["set-field", str(source), "name", "Ada", "-o", str(filled)])
    assert result.exit_code == 0
    assert PdfReader(str(filled)).get_fields()["name"].get("/V") == "Ada"

    result = runner.invoke(cli, ["flatten", str(filled), "-o", str(flat)])
    assert result.exit_code == 0
    assert not PdfReader(str(flat)).get_fields()


def test_rejects_non_pdf_input(runner, tmp_path):
    bogus = tmp_path / "notes.txt"
    bogus.write_text("hello")

    result = runner.invoke(cli, ["info", str(bogus)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_verbose_flag(runner, report):
    result = runner.invoke(cli, ["-v", "info", str(report)])
    assert result.exit_code == 0


def test_round_trip_split_stamp_merge_protect(runner, report, tmp_path):
    chunks = tmp_path / "chunks"
    runner.invoke(cli, ["split", str(report), "-s", "3", "-o", str(chunks)])
    merged = tmp_path / "merged.pdf"
    runner.invoke(cli, ["merge", *sorted(str(p) for p in chunks.glob("*.pdf")), "-o", str(merged)])
    stamped = tmp_path / "stamped.pdf"
    runner.invoke(cli, ["stamp-diagonal", str(merged), "COPY", "-o", str(stamped)])
    locked = tmp_path / "locked.pdf"

    result = runner.invoke(cli, ["protect", str(stamped), "-o", str(locked)])

    assert result.exit_code == 0
    with pikepdf.open(BytesIO(locked.read_bytes())) as pdf:
        assert len(pdf.pages) == 5
        assert pdf.allow.print_highres
