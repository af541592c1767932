from conditions_feed.core.metrics import InMemoryFeedMetricsCollector
from conditions_feed.core.prometheus_exporter import FeedPrometheusExporter


def test_feed_exporter_renders_collected_metrics() -> None:
    metrics = InMemoryFeedMetricsCollector()
    metrics.increment_fetch("open_meteo", "live")
    metrics.increment_fetch("tomtom", "unconfigured")
    metrics.increment_retry("open_meteo")
    metrics.observe_refresh(12.5, "live", "fallback")
    metrics.set_snapshot(0.6, 0.25)

    payload = FeedPrometheusExporter().render(metrics)

    assert 'conditions_fetch_total{provider="open_meteo",result="live"} 1.0' in payload
    assert 'conditions_fetch_total{provider="tomtom",result="unconfigured"} 1.0' in payload
    assert 'conditions_provider_retries_total{provider="open_meteo"} 1.0' in payload
    assert "conditions_refresh_total 1.0" in payload
    assert "conditions_refresh_duration_ms 12.5" in payload
    assert 'conditions_impact_ratio{condition="weather"} 0.6' in payload
    assert 'conditions_impact_ratio{condition="traffic"} 0.25' in payload


def test_feed_exporter_omits_impact_before_first_refresh() -> None:
    payload = FeedPrometheusExporter().render(InMemoryFeedMetricsCollector())

    assert "conditions_refresh_total 0.0" in payload
    assert 'conditions_impact_ratio{condition="weather"}' not in payload
