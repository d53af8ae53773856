import pytest

from core import metrics


def test_counter_labels_are_order_independent():
    before = metrics.counter("test.hits", a="1", b="2")
    metrics.inc("test.hits", b="2", a="1")
    metrics.inc("test.hits", a="1", b="2", amount=2)
    assert metrics.counter("test.hits", a="1", b="2") == before + 3


def test_timer_records_observation():
    with metrics.timer("test.duration", step="x"):
        pass
    assert metrics.summary("test.duration", step="x").count >= 1


def test_timer_records_failed_blocks():
    before = metrics.summary("test.failing").count
    with pytest.raises(RuntimeError):
        with metrics.timer("test.failing"):
            raise RuntimeError("boom")
    assert metrics.summary("test.failing").count == before + 1


def test_durations_are_summarised_in_constant_space():
    metrics.reset()
    for value in (0.5, 2.0, 1.5):
        metrics.observe("test.upload", value, document_type="gst")
    stored = dict(metrics._summaries)

    for _ in range(1000):
        metrics.observe("test.upload", 0.1, document_type="gst")

    assert metrics._summaries.keys() == stored.keys()
    s = metrics.summary("test.upload", document_type="gst")
    assert s.count == 1003
    assert s.max == 2.0
    assert s.total == pytest.approx(104.0)


def test_summary_is_a_copy():
    metrics.observe("test.copy", 1.0)
    snapshot = metrics.summary("test.copy")
    snapshot.add(100.0)
    assert metrics.summary("test.copy").max < 100.0


def test_unknown_metric_reads_empty():
    assert metrics.summary("test.never").count == 0
    assert metrics.counter("test.never") == 0


@pytest.mark.django_db
def test_healthz_and_request_id(client):
    resp = client.get("/healthz/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp["X-Request-ID"]


@pytest.mark.django_db
def test_request_id_is_echoed(client):
    resp = client.get("/healthz/", HTTP_X_REQUEST_ID="abc123")
    assert resp["X-Request-ID"] == "abc123"
