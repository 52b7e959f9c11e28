from laundry_enrich import io_utils


def test_iter_records_reads_strings_in_chunks(write_csv):
    rows = [{"name": f"L{i}", "zip": "00501", "rating": "4.5"} for i in range(5)]
    path = write_csv(rows)

    chunks = list(io_utils.iter_records(str(path), chunk_size=2))

    assert [len(c) for c in chunks] == [2, 2, 1]
    first = chunks[0][0]
    assert first["zip"] == "00501"
    assert first["rating"] == "4.5"
    assert first["phone"] == ""


def test_iter_records_trims_values(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("name,city\n  Bubbles  , Austin \n", encoding="utf-8")
    chunks = list(io_utils.iter_records(str(path)))
    assert chunks == [[{"name": "Bubbles", "city": "Austin"}]]


def test_iter_records_empty_and_header_only(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    header_only = tmp_path / "header.csv"
    header_only.write_text("name,address,city,state,zip\n", encoding="utf-8")

    assert list(io_utils.iter_records(str(empty))) == []
    assert list(io_utils.iter_records(str(header_only))) == []


def test_iter_records_reports_bad_lines(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("name,city\nGood,Austin\nBad,Austin,extra,fields\nAlso Good,Reno\n", encoding="utf-8")
    bad = []

    records = [r for chunk in io_utils.iter_records(str(path), on_bad_line=bad.append) for r in chunk]

    assert [r["name"] for r in records] == ["Good", "Also Good"]
    assert len(bad) == 1
    assert bad[0][0] == "Bad"


def test_count_data_rows(write_csv, tmp_path):
    assert io_utils.count_data_rows(str(write_csv([{"name": "a"}, {"name": "b"}]))) == 2
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    assert io_utils.count_data_rows(str(empty)) == 0


def test_writer_uses_first_record_keys(tmp_path):
    out = tmp_path / "out" / "enriched.csv"
    with io_utils.EnrichedCsvWriter(str(out)) as writer:
        writer.write({"name": "A", "seoTags": ["laundromat", "near me"], "premiumScore": 70})
        writer.write({"name": "B", "unexpected": "dropped"})

    df = io_utils.read_output_csv(str(out))
    assert list(df.columns[:3]) == ["name", "seoTags", "premiumScore"]
    assert "unexpected" not in df.columns
    assert df.loc[0, "seoTags"] == "laundromat, near me"
    assert df.loc[1, "premiumScore"] == ""


def test_writer_with_no_rows_creates_empty_file(tmp_path):
    out = tmp_path / "empty_out.csv"
    with io_utils.EnrichedCsvWriter(str(out)) as writer:
        pass
    assert out.exists()
    assert out.read_text(encoding="utf-8") == ""
    assert writer.rows_written == 0


def test_find_unterminated_row(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text('name,city\nA,Austin\n"B,Austin\n\nC,Austin\n', encoding="utf-8")

    line, swallowed = io_utils.find_unterminated_row(str(path))

    assert line == 3
    assert swallowed == ['"B,Austin', "C,Austin"]


def test_find_unterminated_row_accepts_multiline_quotes(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text('name,notes\nA,"two\nlines"\nB,plain\n', encoding="utf-8")

    assert io_utils.find_unterminated_row(str(path)) == (None, [])
    assert io_utils.count_data_rows(str(path)) == 2


def test_count_data_rows_tolerates_invalid_utf8(tmp_path):
    path = tmp_path / "in.csv"
    path.write_bytes(b"name\nA\nB\xff\nC\n")
    assert io_utils.count_data_rows(str(path)) == 3


def test_writer_opens_output_on_first_write(tmp_path):
    out = tmp_path / "lazy.csv"
    with io_utils.EnrichedCsvWriter(str(out)) as writer:
        assert not out.exists()
        writer.write({"name": "A"})
        assert out.exists()
    assert writer.rows_written == 1
