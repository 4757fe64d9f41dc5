"""Tests for CSV ingestion."""

import pytest

from econ_dashboard.data.csv_parser import parse_csv, parse_number, split_naive, split_quoted


def test_rows_sorted_by_timestamp(sample_csv):
    result = parse_csv(sample_csv)

    dates = [obs.date for obs in result.observations]
    assert dates == ["2020-01-01", "2020-02-01", "2020-03-01"]
    timestamps = [obs.timestamp for obs in result.observations]
    assert timestamps == sorted(timestamps)


def test_values_parsed_as_floats(sample_csv):
    first = parse_csv(sample_csv).observations[0]

    assert first.get("unemployment_rate") == 3.5
    assert first.get("S&P 500") == 3225.0
    assert first.get("CPI") == 258.68
    assert "observation_date" not in first.values


def test_headers_trimmed():
    result = parse_csv(" observation_date , CPI \n2020-01-01,250\n")

    assert result.headers == ("observation_date", "CPI")
    assert result.observations[0].get("CPI") == 250.0


def test_leading_byte_order_mark_ignored():
    result = parse_csv("\ufeffobservation_date,CPI\n2020-01-01,250\n")

    assert result.headers == ("observation_date", "CPI")
    assert result.observations[0].date == "2020-01-01"


def test_mismatched_rows_rejected_and_counted():
    text = (
        "observation_date,unemployment_rate,CPI\n"
        "2020-01-01,3.5,258\n"
        "2020-02-01,3.6\n"
        "2020-03-01,3.7,259,extra\n"
        "2020-04-01,3.8,260\n"
    )

    result = parse_csv(text)

    assert len(result.observations) == 2
    assert result.rejected_rows == 2


def test_blank_lines_skipped_not_rejected():
    text = "observation_date,CPI\n\n2020-01-01,250\n   \n2020-02-01,251\n\n"

    result = parse_csv(text)

    assert len(result.observations) == 2
    assert result.rejected_rows == 0


def test_windows_line_endings():
    result = parse_csv("observation_date,CPI\r\n2020-01-01,250\r\n")

    assert result.headers == ("observation_date", "CPI")
    assert result.observations[0].get("CPI") == 250.0


def test_unparsable_number_is_none_not_zero():
    text = "observation_date,unemployment_rate,fed_rate\n2020-01-01,abc,\n"

    obs = parse_csv(text).observations[0]

    assert obs.get("unemployment_rate") is None
    assert obs.get("fed_rate") is None
    assert "fed_rate" in obs.values


def test_non_finite_values_become_none():
    text = "observation_date,a,b,c\n2020-01-01,nan,inf,-Infinity\n"

    obs = parse_csv(text).observations[0]

    assert obs.values == {"a": None, "b": None, "c": None}


def test_zero_is_missing_only_for_allow_listed_columns():
    text = "observation_date,CPI,gdp,fed_rate\n2020-01-01,0,0.0,0\n"

    obs = parse_csv(text).observations[0]

    assert obs.get("CPI") is None
    assert obs.get("gdp") is None
    assert obs.get("fed_rate") == 0.0


def test_custom_zero_allow_list():
    text = "observation_date,CPI,fed_rate\n2020-01-01,0,0\n"

    obs = parse_csv(text, zero_as_missing=frozenset({"fed_rate"})).observations[0]

    assert obs.get("CPI") == 0.0
    assert obs.get("fed_rate") is None


def test_naive_split_rejects_quoted_commas():
    text = 'observation_date,S&P 500,CPI\n2020-01-01,"3,278.2",258\n'

    result = parse_csv(text)

    assert result.observations == ()
    assert result.rejected_rows == 1


def test_quote_aware_keeps_quoted_commas():
    text = 'observation_date,S&P 500,CPI\n2020-01-01,"3,278.2",258\n'

    result = parse_csv(text, quote_aware=True)

    assert result.rejected_rows == 0
    assert result.observations[0].get("S&P 500") == 3278.2
    assert result.observations[0].get("CPI") == 258.0


def test_duplicate_dates_merge_last_write_wins():
    text = (
        "observation_date,unemployment_rate,CPI\n"
        "2020-01-01,3.5,258\n"
        "2020-02-01,3.6,259\n"
        "1/1/2020,3.9,\n"
    )

    result = parse_csv(text)

    assert len(result.observations) == 2
    assert result.duplicate_dates == 1
    merged = result.observations[0]
    assert merged.date == "2020-01-01"
    assert merged.get("unemployment_rate") == 3.9
    assert merged.get("CPI") == 258.0


def test_unparsable_dates_sort_last():
    text = (
        "observation_date,CPI\n"
        "someday,1\n"
        "2020-02-01,2\n"
        "2020-01-01,3\n"
    )

    result = parse_csv(text)

    assert [obs.date for obs in result.observations] == [
        "2020-01-01",
        "2020-02-01",
        "someday",
    ]
    assert result.observations[-1].timestamp is None


def test_blank_date_rejected():
    result = parse_csv("observation_date,CPI\n,250\n2020-01-01,251\n")

    assert len(result.observations) == 1
    assert result.rejected_rows == 1


def test_extended_variant_date_column():
    text = "Observed Date,Unemployment Rate,GDP\n2/1/2020,3.5,21140\n1/1/2020,3.6,21751\n"

    result = parse_csv(text, date_column="Observed Date")

    assert [obs.date for obs in result.observations] == ["2020-01-01", "2020-02-01"]
    assert result.observations[0].year == 2020


def test_missing_date_column_raises():
    with pytest.raises(ValueError, match="observation_date"):
        parse_csv("date,CPI\n2020-01-01,250\n")


def test_empty_text_yields_nothing():
    result = parse_csv("")

    assert result.observations == ()
    assert result.headers == ()
    assert result.rejected_rows == 0


def test_header_only():
    result = parse_csv("observation_date,CPI\n")

    assert result.observations == ()
    assert result.headers == ("observation_date", "CPI")


def test_split_helpers():
    assert split_naive(' a , "b,c" ') == ["a", '"b', 'c"']
    assert split_quoted('a,"b,c",d') == ["a", "b,c", "d"]


def test_parse_number():
    assert parse_number(" 3.5 ", "x") == 3.5
    assert parse_number("1,234", "x") == 1234.0
    assert parse_number("1_000", "x") is None
    assert parse_number("", "x") is None
    assert parse_number("-0.25", "x") == -0.25
