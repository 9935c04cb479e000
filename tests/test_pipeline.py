import json
import time

import pytest
from conftest import obs

from scanmeta._logging import configure_logging

from scanmeta.recognition import (
    FailingTextRecognizer,
    MockTextRecognizer,
    NoObservationsError,
    PageInput,
    PagePipeline,
    ProcessingError,
    ScanOptions,
    ScanPipeline,
    build_page_pipeline,
    infer_document_metadata,
)


def _options(**overrides):
    return ScanOptions(use_recognize_documents_request=True, recognition_languages=["en-US"], **overrides)


def test_grid_page_yields_table_and_detected_data(grid_observations):
    metadata = infer_document_metadata(grid_observations, ["en-US"])

    assert len(metadata.tables) == 1
    assert (metadata.tables[0].row_count, metadata.tables[0].column_count) == (4, 2)
    assert metadata.lists == []
    assert [d.text for d in metadata.detected_data] == ["jane@example.com", "555-123-4567", "https://example.com"]
    assert metadata.language == "en-US"
    assert metadata.transcript.splitlines()[0] == "Name"


def test_list_page():
    observations = [
        obs("Shopping", 0.1, 0.9),
        obs("• Milk", 0.1, 0.8),
        obs("- Eggs", 0.1, 0.7),
        obs("1. Bread", 0.1, 0.6),
    ]

    metadata = infer_document_metadata(observations)

    assert metadata.tables == []
    assert [item.text for item in metadata.lists[0].items] == ["• Milk", "- Eggs", "1. Bread"]


def test_embedded_email_and_url():
    metadata = infer_document_metadata(
        [obs("Contact me at jane@example.com", 0.1, 0.9), obs("Visit https://example.com/page today", 0.1, 0.5)]
    )

    assert [(d.text, d.type.value) for d in metadata.detected_data] == [
        ("Visit https://example.com/page today", "url")
    ]


def test_three_observations_give_no_tables():
    observations = [obs("a", 0.1, 0.9), obs("b", 0.5, 0.9), obs("c", 0.1, 0.5)]

    assert infer_document_metadata(observations).tables == []


def test_empty_observations_raise():
    with pytest.raises(NoObservationsError) as excinfo:
        infer_document_metadata([])

    assert excinfo.value.code == "NO_OBSERVATIONS"


def test_disabled_analyses_produce_empty_sequences(grid_observations):
    options = _options(enable_table_detection=False, enable_list_detection=False, enable_data_detection=False)

    metadata = infer_document_metadata(grid_observations, options=options)

    assert metadata.tables == []
    assert metadata.lists == []
    assert metadata.detected_data == []
    assert "jane@example.com" in metadata.transcript


def test_unexpected_failures_are_wrapped(grid_observations):
    class _Broken:
        def classify(self, text):
            raise KeyError(text)

        def classify_all(self, texts):
            return [self.classify(text) for text in texts]

    pipeline = PagePipeline(data_classifier=_Broken())

    with pytest.raises(ProcessingError) as excinfo:
        pipeline.infer(grid_observations, _options(enable_table_detection=False))

    assert excinfo.value.code == "PROCESSING_FAILED"
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_page_observations_skip_the_recognizer():
    recognizer = MockTextRecognizer()
    pipeline = build_page_pipeline(recognizer)
    page = PageInput(page_index=0, observations=[obs("given", 0.1, 0.5)])

    metadata = pipeline.process(page, _options())

    assert metadata.transcript == "given"
    assert recognizer.calls == []


def test_page_without_observations_or_recognizer_fails():
    with pytest.raises(ProcessingError):
        build_page_pipeline().process(PageInput(page_index=0, image_path="scan.png"), _options())


def test_scan_reports_failures_per_page():
    recognizer = FailingTextRecognizer(failing_pages=[1])
    scan = ScanPipeline(page_pipeline=build_page_pipeline(recognizer), max_workers=2)
    pages = [
        PageInput(page_index=0, image_path="scan-0.png"),
        PageInput(page_index=1, image_path="scan-1.png"),
        PageInput(page_index=2, image_path="scan-2.png", observations=[]),
        PageInput(page_index=3, image_path="scan-3.png"),
    ]

    result = scan.process(pages, _options())

    assert result.images == ["scan-0.png", "scan-1.png", "scan-2.png", "scan-3.png"]
    assert [m["transcript"] for m in result.metadata] == ["page 0", "page 3"]
    assert [(e.page_index, e.code) for e in result.errors] == [(1, "IMAGE_DECODE_FAILED"), (2, "NO_OBSERVATIONS")]
    assert not result.ok


def test_scan_keeps_page_order_under_concurrency():
    class _SlowRecognizer(MockTextRecognizer):
        def recognize(self, page, languages):
            time.sleep(0.01 * (5 - page.page_index))
            return super().recognize(page, languages)

    scan = ScanPipeline(page_pipeline=build_page_pipeline(_SlowRecognizer()), max_workers=5)
    pages = [PageInput(page_index=i, image_path=f"scan-{i}.png") for i in reversed(range(5))]

    result = scan.process(pages, _options())

    assert result.ok
    assert [m["transcript"] for m in result.metadata] == [f"page {i}" for i in range(5)]
    assert result.images == [f"scan-{i}.png" for i in range(5)]


def test_legacy_request_returns_images_only():
    recognizer = MockTextRecognizer()
    scan = ScanPipeline(page_pipeline=build_page_pipeline(recognizer), max_workers=2)
    pages = [PageInput(page_index=0, image_path="scan-0.png")]

    result = scan.process(pages, ScanOptions(use_recognize_documents_request=False))

    assert result.images == ["scan-0.png"]
    assert result.metadata == []
    assert recognizer.calls == []


def test_empty_scan():
    result = ScanPipeline(max_workers=1).process([], _options())

    assert result.images == []
    assert result.metadata == []
    assert result.ok


def test_unexpected_recognizer_error_is_isolated_and_logged(monkeypatch, capsys):
    monkeypatch.setenv("SCANMETA_LOG_FORMAT", "json")
    monkeypatch.setenv("SCANMETA_LOG_LEVEL", "INFO")
    configure_logging()

    class _CrashingRecognizer(MockTextRecognizer):
        def recognize(self, page, languages):
            if page.page_index == 1:
                raise RuntimeError("tesseract missing")
            return super().recognize(page, languages)

    scan = ScanPipeline(page_pipeline=build_page_pipeline(_CrashingRecognizer()), max_workers=3)
    pages = [PageInput(page_index=i, image_path=f"scan-{i}.png") for i in range(3)]

    result = scan.process(pages, _options())

    assert [m["transcript"] for m in result.metadata] == ["page 0", "page 2"]
    assert [(e.page_index, e.code, e.reason) for e in result.errors] == [
        (1, "PROCESSING_FAILED", "RuntimeError: tesseract missing")
    ]

    records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
    failed = [r for r in records if r["event"] == "page_inference_failed"]
    assert len(failed) == 1
    assert failed[0]["page_index"] == 1
    assert failed[0]["code"] == "PROCESSING_FAILED"
    assert failed[0]["reason"] == "RuntimeError: tesseract missing"
    completed = [r for r in records if r["event"] == "scan_completed"]
    assert completed[-1]["failed"] == 1
    assert completed[-1]["language"] == "en-US"


def test_data_detection_uses_the_classifier_batch_method():
    class _RecordingClassifier:
        def __init__(self):
            self.batches = []

        def classify(self, text):
            return None

        def classify_all(self, texts):
            self.batches.append(list(texts))
            return []

    classifier = _RecordingClassifier()
    pipeline = PagePipeline(data_classifier=classifier)

    metadata = pipeline.infer([obs("a@b.io", 0.1, 0.9), obs("plain", 0.1, 0.5)], _options())

    assert classifier.batches == [["a@b.io", "plain"]]
    assert metadata.detected_data == []
