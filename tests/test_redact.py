from __future__ import annotations

from pybiocache._redact import redact_for_log, redact_query, redact_url


def test_redact_query_masks_sensitive_params() -> None:
    redacted = redact_query("q=*:*&apiKey=secret&email=me@example.org&fq=year:2020")

    assert redacted == "q=*:*&apiKey=<redacted>&email=<redacted>&fq=year:2020"


def test_redact_url_without_query_is_unchanged() -> None:
    assert redact_url("https://biocache.example.org/ws/search/grouped/facets") == (
        "https://biocache.example.org/ws/search/grouped/facets"
    )
    assert redact_url("https://h/ws?q=*:*&apikey=k") == "https://h/ws?q=*:*&apikey=<redacted>"


def test_redact_for_log_truncates_long_strings_and_lists() -> None:
    redacted = redact_for_log({"value": "x" * 600, "items": list(range(30))}, max_string=10, max_items=5)

    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]
    assert redacted["items"] == [0, 1, 2, 3, 4, "<25 more>"]
