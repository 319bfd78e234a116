import pytest

from qrsheet.csv_extractor import decode_csv_bytes, extract, split_pasted_text
from qrsheet.errors import CsvFormatError


def test_extract_builds_url_from_bare_referral_path():
    assert extract("referral?code=ABC123\n") == ["https://cursor.com/referral?code=ABC123"]


def test_extract_skips_url_header_row():
    assert extract("url\nhttps://a.com\n") == ["https://a.com"]


def test_extract_header_sniff_is_case_insensitive_and_substring():
    text = "Referral URLs,owner\nhttps://a.com,alice\n"

    assert extract(text) == ["https://a.com"]


def test_extract_only_sniffs_header_on_first_row():
    text = "https://a.com\nurl-like-but-not-a-header\n"

    assert extract(text) == ["https://a.com", "url-like-but-not-a-header"]


def test_extract_finds_referral_cell_in_any_column():
    text = "Alice, referral?code=XYZ ,vip\n"

    assert extract(text) == ["https://cursor.com/referral?code=XYZ"]


def test_extract_referral_column_wins_over_url_in_first_cell():
    assert extract("https://other.com,referral?code=R1\n") == ["https://cursor.com/referral?code=R1"]


def test_extract_multiple_referral_cells_picks_first():
    text = "referral?code=FIRST,referral?code=SECOND\n"

    assert extract(text) == ["https://cursor.com/referral?code=FIRST"]


def test_extract_keeps_original_case_of_referral_cell():
    assert extract("Referral?code=AbC\n") == ["https://cursor.com/Referral?code=AbC"]


def test_extract_handles_quoted_commas():
    text = '"Smith, John","referral?code=A,B"\n'

    assert extract(text) == ["https://cursor.com/referral?code=A,B"]


def test_extract_emits_http_first_cell_verbatim():
    assert extract("http://a.com/x,extra\nhttps://b.com\n") == ["http://a.com/x", "https://b.com"]


def test_extract_emits_unknown_format_unchanged():
    assert extract("  example.com  ,foo\nnot a url\n") == ["example.com", "not a url"]


def test_extract_skips_blank_rows_and_preserves_order():
    text = "\n\nurl\n\nhttps://a.com\n,,\n   \nhttps://b.com\n"

    assert extract(text) == ["https://a.com", "https://b.com"]


def test_extract_handles_crlf_line_endings():
    assert extract("url\r\nhttps://a.com\r\nhttps://b.com\r\n") == ["https://a.com", "https://b.com"]


def test_extract_empty_text_has_no_candidates():
    assert extract("") == []
    assert extract("url\n") == []


def test_extract_raises_on_unparseable_csv():
    # a single field over the csv module field size limit
    with pytest.raises(CsvFormatError):
        extract("a" * 200_000)


def test_decode_csv_bytes_drops_bom():
    text = decode_csv_bytes(b"\xef\xbb\xbfurl\nhttps://a.com\n")

    assert extract(text) == ["https://a.com"]


def test_decode_csv_bytes_replaces_undecodable_bytes():
    assert decode_csv_bytes(b"https://a.com/\xff\n") == "https://a.com/�\n"


def test_split_pasted_text_trims_and_discards_blank_lines():
    text = "  https://a.com  \n\n   \nexample.com\r\nreferral?code=1\n"

    assert split_pasted_text(text) == ["https://a.com", "example.com", "referral?code=1"]
