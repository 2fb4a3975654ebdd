from guest_assistant.infrastructure.telemetry.otel_adapter import (
    NullTelemetry,
    OpenTelemetryAdapter,
    OtelConfig,
)


class _Instrument:
    def __init__(self):
        self.calls = []

    def add(self, value, attributes=None):
        self.calls.append((value, attributes))

    def record(self, value, attributes=None):
        self.calls.append((value, attributes))


class _Meter:
    def __init__(self):
        self.instruments = {}

    def create_counter(self, name, description=""):
        return self.instruments.setdefault(name, _Instrument())

    def create_histogram(self, name, description=""):
        return self.instruments.setdefault(name, _Instrument())


def _adapter_with_fake_meter(monkeypatch):
    monkeypatch.setattr(OpenTelemetryAdapter, "_init_otel", lambda self: None)
    adapter = OpenTelemetryAdapter(OtelConfig())
    adapter._meter = _Meter()
    return adapter


def test_counter_is_created_once_and_incremented(monkeypatch):
    adapter = _adapter_with_fake_meter(monkeypatch)
    adapter.incr("guest_assistant.outcomes", {"kind": "refuse"})
    adapter.incr("guest_assistant.outcomes", {"kind": "answered"})
    calls = adapter._meter.instruments["guest_assistant.outcomes"].calls
    assert calls == [(1, {"kind": "refuse"}), (1, {"kind": "answered"})]


def test_histogram_records_value(monkeypatch):
    adapter = _adapter_with_fake_meter(monkeypatch)
    adapter.observe("guest_assistant.retrieval.best_distance", 0.21)
    calls = adapter._meter.instruments["guest_assistant.retrieval.best_distance"].calls
    assert calls == [(0.21, {})]


def test_metric_errors_never_propagate(monkeypatch):
    adapter = _adapter_with_fake_meter(monkeypatch)

    class _Broken:
        def create_counter(self, **kwargs):
            raise RuntimeError("boom")

    adapter._meter = _Broken()
    adapter.incr("x")  # no exception


def test_without_meter_calls_are_noops(monkeypatch):
    adapter = _adapter_with_fake_meter(monkeypatch)
    adapter._meter = None
    adapter.incr("x")
    adapter.observe("y", 1.0)


def test_null_telemetry():
    t = NullTelemetry()
    assert t.incr("x") is None
    assert t.observe("y", 1.0) is None
