from qrsheet.records import QRRecord, build_record, generate_records, summarize


def test_build_record_normalizes_and_flags():
    record = build_record(1, "example.com")

    assert record == QRRecord(id=1, url="https://example.com", is_valid=True, has_warning=False)


def test_build_record_keeps_invalid_candidate():
    record = build_record(3, "not a url at all !!")

    assert record.id == 3
    assert record.url == "https://not a url at all !!"
    assert not record.is_valid


def test_build_record_attaches_advisory():
    record = build_record(1, "https://203.0.113.5/path")

    assert record.is_valid
    assert record.has_warning
    assert record.warning_message == "Warning: IP address detected (verify source)"


def test_generate_records_numbers_densely_in_input_order():
    candidates = ["https://a.com", "javascript:alert(1)", "b.com", "not a url at all !!"]

    batch = generate_records(candidates)

    assert [r.id for r in batch.records] == [1, 2, 3, 4]
    assert [r.url for r in batch.records] == [
        "https://a.com",
        "https://javascript:alert(1)",
        "https://b.com",
        "https://not a url at all !!",
    ]
    assert [r.is_valid for r in batch.records] == [True, False, True, False]


def test_generate_records_is_deterministic():
    candidates = ["https://a.com", "203.0.113.5", "referral?code=1", "https://a.com"]

    assert generate_records(candidates) == generate_records(list(candidates))


def test_generate_records_keeps_duplicates():
    batch = generate_records(["https://a.com", "https://a.com"])

    assert len(batch.records) == 2


def test_generate_records_summary_counts():
    batch = generate_records(
        ["https://a.com", "not a url at all !!", "https://203.0.113.5/x"] + ["https://b.com"] * 7,
        rows=3,
        cols=3,
    )

    assert batch.summary.total == 10
    assert batch.summary.invalid == 1
    assert batch.summary.warnings == 1
    assert batch.summary.pages == 2
    assert not batch.summary.truncated


def test_generate_records_caps_item_count():
    batch = generate_records([f"https://a.com/{i}" for i in range(12)], max_items=5)

    assert [r.id for r in batch.records] == [1, 2, 3, 4, 5]
    assert batch.summary.total == 5
    assert batch.summary.truncated


def test_generate_records_empty_input():
    batch = generate_records([])

    assert batch.records == []
    assert batch.summary.pages == 0


def test_summarize_uses_grid_shape():
    records = [build_record(i, "https://a.com") for i in range(1, 5)]

    assert summarize(records, rows=2, cols=1).pages == 2


def test_record_to_dict_includes_sanitized_display_url():
    data = build_record(1, "https://example.com/<script>x</script>").to_dict()

    assert data["url"] == "https://example.com/<script>x</script>"
    assert data["display_url"] == "https://example.com/"
    assert data["has_warning"] is True
    assert data["warning_message"] == "Script tags detected in URL"


def test_batch_to_dict_shape():
    data = generate_records(["https://a.com"]).to_dict()

    assert data["summary"] == {"total": 1, "invalid": 0, "warnings": 0, "pages": 1, "truncated": False}
    assert data["records"][0]["id"] == 1
