import json

from ring_scout.aggregator import aggregate_results
from ring_scout.crawler.models import Record, Site
from ring_scout.report import record_lines, render_json, site_lines


def sample_records():
    return [
        Record("title", "Home", "https://a.example", 1),
        Record("h2", "One", "https://a.example", 1),
        Record("h2", "Two", "https://a.example", 1),
        Record("webring-link", "https://b.example", "https://a.example", 1),
        Record("non-webring-link", "https://out.example", "https://a.example", 1),
        Record("para", "Hello there", "https://a.example/post", 0),
    ]


def test_aggregate_groups_facts_per_page():
    report = aggregate_results(sample_records())
    assert report.pages == {
        "https://a.example": {"depth": 1, "facts": {"title": ["Home"], "h2": ["One", "Two"]}},
        "https://a.example/post": {"depth": 0, "facts": {"para": ["Hello there"]}},
    }
    assert report.webring_links == [
        {"source": "https://a.example", "target": "https://b.example", "depth": 1}
    ]
    assert report.non_webring_links == [
        {"source": "https://a.example", "target": "https://out.example", "depth": 1}
    ]
    assert len(report.records) == 6
    assert "records" not in json.loads(report.json())


def test_render_json(tmp_path):
    path = render_json(aggregate_results(sample_records()), tmp_path / "nested" / "report.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert set(data) == {"pages", "webring_links", "non_webring_links"}


def test_line_formats():
    assert record_lines([Record("lang", "en", "https://a.example", 3)]) == [
        "lang en https://a.example 3"
    ]
    assert site_lines([Site("https://a.example", 2)]) == ["https://a.example 2"]
