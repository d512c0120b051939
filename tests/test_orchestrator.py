import pytest

from conftest import FakeResponse, FakeSession, make_shipment
from relayhub_uploader.client import SubmissionClient
from relayhub_uploader.payload import PayloadBuilder, SequentialIdAllocator
from relayhub_uploader.pipeline import Orchestrator, OutcomeReason, OutcomeStatus
from relayhub_uploader.scanner import DirectoryScanner
from relayhub_uploader.utils.exceptions import DocumentReadError, SubmissionError


class RecordingClient:
    """Client stand-in recording submissions; fails for chosen folders."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.submitted = []

    def submit(self, submission):
        self.submitted.append(submission)
        folder_name = submission.reference_no.rsplit("_", 1)[0]
        if folder_name in self.fail_for:
            raise SubmissionError(
                submission.reference_no, diagnostic={"error": "rejected"}, status_code=400
            )
        return {"status": "accepted"}


@pytest.fixture
def allocator():
    return SequentialIdAllocator(start=80, width=4)


@pytest.fixture
def builder(allocator, template):
    return PayloadBuilder(allocator, template, invoice_enabled=True, declaration_enabled=True)


def by_folder(summary):
    return {o.folder_name: o for o in summary.outcomes}


def test_each_folder_is_submitted_with_unique_reference(tmp_path, builder, allocator):
    make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"d1", "fatura.pdf": b"i1"})
    make_shipment(tmp_path, "SHIP-2", {"declaration.xml": b"d2"})
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    assert summary.total_folders == 2
    assert summary.submitted == 2
    refs = summary.reference_numbers
    assert len(set(refs)) == 2
    assert sorted(ref.rsplit("_", 1)[1] for ref in refs) == ["0080", "0081"]
    assert allocator.allocated == 2

    outcomes = by_folder(summary)
    assert outcomes["SHIP-1"].documents == ["invoice", "tr_export_declaration"]
    assert outcomes["SHIP-2"].documents == ["tr_export_declaration"]
    assert outcomes["SHIP-1"].details["acknowledgment"] == {"status": "accepted"}


def test_failure_for_one_folder_does_not_stop_the_others(tmp_path, builder, allocator):
    make_shipment(tmp_path, "A", {"beyanname.pdf": b"a"})
    make_shipment(tmp_path, "B", {"beyanname.pdf": b"b"})
    client = RecordingClient(fail_for={"A"})

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    outcomes = by_folder(summary)
    assert outcomes["A"].status == OutcomeStatus.FAILED
    assert outcomes["A"].reason == OutcomeReason.SUBMISSION_ERROR
    assert outcomes["A"].details["diagnostic"] == {"error": "rejected"}
    assert outcomes["B"].status == OutcomeStatus.SUBMITTED
    assert len(client.submitted) == 2
    # The failed submission still consumed its ID
    assert allocator.allocated == 2


def test_folder_without_matching_files_is_skipped(tmp_path, builder, allocator):
    make_shipment(tmp_path, "SHIP-1", {"packing_list.pdf": b"p"})
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    outcome = summary.outcomes[0]
    assert outcome.status == OutcomeStatus.SKIPPED
    assert outcome.reason == OutcomeReason.NO_DOCUMENTS
    assert outcome.details["classification"]["declaration"] is None
    assert client.submitted == []
    assert allocator.allocated == 0


def test_empty_folder_is_skipped(tmp_path, builder):
    make_shipment(tmp_path, "SHIP-1", {".DS_Store": b"x"})
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    assert summary.outcomes[0].reason == OutcomeReason.NO_FILES
    assert client.submitted == []


def test_empty_matched_files_are_skipped(tmp_path, builder, allocator):
    make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"", "fatura.pdf": b""})
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    assert summary.outcomes[0].reason == OutcomeReason.NO_DOCUMENTS
    assert client.submitted == []
    assert allocator.allocated == 0


def test_invoice_disabled_still_submits_with_empty_documents(tmp_path, allocator, template):
    make_shipment(tmp_path, "SHIP-1", {"invoice_2025.pdf": b"i"})
    builder = PayloadBuilder(allocator, template, invoice_enabled=False, declaration_enabled=True)
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    assert summary.submitted == 1
    assert client.submitted[0].documents == []
    assert client.submitted[0].reference_no == "SHIP-1_0080"


def test_read_failure_skips_folder_without_allocating(tmp_path, builder, allocator, monkeypatch):
    make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"d"})
    scanner = DirectoryScanner()

    def broken_read(path):
        raise DocumentReadError(str(path), "permission denied")

    monkeypatch.setattr(scanner, "read_as_encoded_string", broken_read)
    client = RecordingClient()

    summary = Orchestrator(scanner, builder, client).run(tmp_path)

    outcome = summary.outcomes[0]
    assert outcome.status == OutcomeStatus.FAILED
    assert outcome.reason == OutcomeReason.READ_ERROR
    assert outcome.reference_no is None
    assert allocator.allocated == 0
    assert client.submitted == []


def test_unexpected_error_is_isolated(tmp_path, builder, monkeypatch):
    make_shipment(tmp_path, "A", {"beyanname.pdf": b"a"})
    make_shipment(tmp_path, "B", {"beyanname.pdf": b"b"})
    client = RecordingClient()
    orchestrator = Orchestrator(DirectoryScanner(), builder, client)
    original = orchestrator.process_folder

    def flaky(folder):
        if folder.name == "A":
            raise RuntimeError("boom")
        return original(folder)

    monkeypatch.setattr(orchestrator, "process_folder", flaky)

    summary = orchestrator.run(tmp_path)

    outcomes = by_folder(summary)
    assert outcomes["A"].reason == OutcomeReason.UNEXPECTED_ERROR
    assert outcomes["A"].error == "boom"
    assert outcomes["B"].status == OutcomeStatus.SUBMITTED


def test_missing_root_produces_root_error(tmp_path, builder):
    client = RecordingClient()

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path / "missing")

    assert summary.root_error is not None
    assert summary.outcomes == []
    assert summary.finished_at is not None
    assert client.submitted == []


def test_root_without_folders(tmp_path, builder):
    (tmp_path / "loose_beyanname.pdf").write_bytes(b"d")

    summary = Orchestrator(DirectoryScanner(), builder, RecordingClient()).run(tmp_path)

    assert summary.root_error is None
    assert summary.total_folders == 0


def test_vanished_folder_is_skipped(tmp_path, builder):
    orchestrator = Orchestrator(DirectoryScanner(), builder, RecordingClient())

    outcome = orchestrator.process_folder(tmp_path / "gone")

    assert outcome.status == OutcomeStatus.SKIPPED
    assert outcome.reason == OutcomeReason.FOLDER_NOT_FOUND


def test_dry_run_builds_without_sending(tmp_path, builder, allocator):
    make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"d"})
    orchestrator = Orchestrator(DirectoryScanner(), builder)

    summary = orchestrator.run(tmp_path)

    assert orchestrator.dry_run
    assert summary.built == 1
    assert summary.outcomes[0].reference_no == "SHIP-1_0080"
    assert allocator.allocated == 1


def test_allocator_continues_across_roots(tmp_path, builder):
    first_root = tmp_path / "july"
    second_root = tmp_path / "august"
    make_shipment(first_root, "SHIP-1", {"beyanname.pdf": b"d"})
    make_shipment(second_root, "SHIP-2", {"beyanname.pdf": b"d"})
    orchestrator = Orchestrator(DirectoryScanner(), builder, RecordingClient())

    first = orchestrator.run(first_root)
    second = orchestrator.run(second_root)

    assert first.reference_numbers == ["SHIP-1_0080"]
    assert second.reference_numbers == ["SHIP-2_0081"]


def test_end_to_end_with_http_client(tmp_path, builder):
    make_shipment(tmp_path, "SHIP-1", {"beyanname.pdf": b"decl", "fatura.pdf": b"inv"})
    session = FakeSession([FakeResponse(200, {"jobOrderId": "jo-9"})])
    client = SubmissionClient(token="secret", session=session)

    summary = Orchestrator(DirectoryScanner(), builder, client).run(tmp_path)

    assert summary.submitted == 1
    body = session.calls[0]["json"]
    assert body["referenceNo"] == "SHIP-1_0080"
    assert [d["filename"] for d in body["documents"]] == ["fatura.pdf", "beyanname.pdf"]


def test_from_config_dry_run_needs_no_token():
    orchestrator = Orchestrator.from_config(dry_run=True, start_index=5)
    assert orchestrator.client is None
    assert orchestrator.builder.allocator.peek() == "0005"
