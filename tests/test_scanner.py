import base64
import logging

import pytest

from conftest import make_shipment
from relayhub_uploader.scanner import DirectoryScanner
from relayhub_uploader.utils.exceptions import DocumentReadError, NotFoundError, ScanError


def test_list_subfolders_returns_only_directories(tmp_path):
    make_shipment(tmp_path, "SHIP-1", {})
    make_shipment(tmp_path, "SHIP-2", {})
    (tmp_path / "notes.txt").write_text("x")

    folders = DirectoryScanner().list_subfolders(tmp_path)

    assert sorted(f.name for f in folders) == ["SHIP-1", "SHIP-2"]


def test_list_subfolders_empty_root(tmp_path):
    assert DirectoryScanner().list_subfolders(tmp_path) == []


def test_list_subfolders_missing_root(tmp_path):
    with pytest.raises(NotFoundError):
        DirectoryScanner().list_subfolders(tmp_path / "missing")


def test_list_subfolders_on_a_file(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x")
    with pytest.raises(ScanError):
        DirectoryScanner().list_subfolders(target)


def test_classify_declaration_and_invoice(tmp_path):
    folder = make_shipment(
        tmp_path,
        "SHIP-1",
        {
            "invoice_2025.pdf": b"inv",
            "beyanname_export.xml": b"decl",
            "readme.txt": b"hello",
        },
    )

    documents = DirectoryScanner().classify_files(folder)

    assert documents.declaration.name == "beyanname_export.xml"
    assert documents.invoice.name == "invoice_2025.pdf"
    assert documents.file_count == 3
    assert documents.has_documents
    assert not documents.is_double_match


def test_classification_is_case_insensitive(tmp_path):
    folder = make_shipment(
        tmp_path, "SHIP-1", {"Export_DECLARATION.PDF": b"d", "FATURA-17.pdf": b"i"}
    )

    documents = DirectoryScanner().classify_files(folder)

    assert documents.declaration.name == "Export_DECLARATION.PDF"
    assert documents.invoice.name == "FATURA-17.pdf"


def test_no_matching_files_leaves_both_roles_absent(tmp_path):
    folder = make_shipment(tmp_path, "SHIP-1", {"packing_list.pdf": b"p", "photo.jpg": b"j"})

    documents = DirectoryScanner().classify_files(folder)

    assert documents.declaration is None
    assert documents.invoice is None
    assert documents.file_count == 2
    assert not documents.has_documents


def test_hidden_files_and_subdirectories_are_ignored(tmp_path):
    folder = make_shipment(tmp_path, "SHIP-1", {".beyanname.pdf": b"hidden"})
    (folder / "invoice_archive").mkdir()

    scanner = DirectoryScanner()
    documents = scanner.classify_files(folder)

    assert scanner.list_files(folder) == []
    assert documents.file_count == 0
    assert not documents.has_documents


def test_double_match_fills_both_roles(tmp_path, caplog):
    folder = make_shipment(tmp_path, "SHIP-1", {"beyanname_fatura.pdf": b"both"})

    with caplog.at_level(logging.WARNING, logger="relayhub_uploader"):
        documents = DirectoryScanner().classify_files(folder)

    assert documents.declaration.name == "beyanname_fatura.pdf"
    assert documents.invoice.name == "beyanname_fatura.pdf"
    assert documents.is_double_match
    assert "matches both declaration and invoice keywords" in caplog.text


def test_custom_keywords(tmp_path):
    folder = make_shipment(tmp_path, "SHIP-1", {"customs.pdf": b"d", "bill.pdf": b"i"})

    scanner = DirectoryScanner(declaration_keywords=["customs"], invoice_keywords=["bill"])
    documents = scanner.classify_files(folder)

    assert documents.declaration.name == "customs.pdf"
    assert documents.invoice.name == "bill.pdf"


def test_classify_vanished_folder(tmp_path):
    with pytest.raises(NotFoundError):
        DirectoryScanner().classify_files(tmp_path / "gone")


def test_read_as_encoded_string(tmp_path):
    path = tmp_path / "beyanname.pdf"
    path.write_bytes(b"%PDF-1.7 \x00\xff")

    encoded = DirectoryScanner().read_as_encoded_string(path)

    assert encoded == base64.b64encode(b"%PDF-1.7 \x00\xff").decode("ascii")


def test_read_missing_file_raises_read_error(tmp_path):
    with pytest.raises(DocumentReadError):
        DirectoryScanner().read_as_encoded_string(tmp_path / "missing.pdf")


def test_explicit_empty_keywords_match_nothing(tmp_path):
    folder = make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"d", "fatura.pdf": b"i"})

    documents = DirectoryScanner(declaration_keywords=[]).classify_files(folder)

    assert documents.declaration is None
    assert documents.invoice.name == "fatura.pdf"


def test_single_keyword_string_from_config_is_one_keyword(tmp_path):
    from config import ConfigurationManager

    ConfigurationManager().set("input.declaration_keywords", "beyanname")
    folder = make_shipment(tmp_path, "SHIP-1", {"a.pdf": b"x", "beyanname.pdf": b"d"})

    scanner = DirectoryScanner()

    assert scanner.declaration_keywords == ("beyanname",)
    assert not scanner.is_declaration("a.pdf")
    assert scanner.classify_files(folder).declaration.name == "beyanname.pdf"
