from pipelines.delimited import parse_delimited
from pipelines.normalize import normalize_all


def test_short_row_is_dropped_without_crashing():
    text = "Presidents;Year;Minimum Wage (in R$)\nItamar Franco;1994;70,00\nFHC;1995\n"

    rows = parse_delimited(text, delimiter=";")

    assert rows == [
        {"Presidents": "Itamar Franco", "Year": "1994", "Minimum Wage (in R$)": "70,00"}
    ]


def test_long_row_is_dropped():
    text = "Presidents,Year\nLula,2003\nLula,2004,extra\n"

    rows = parse_delimited(text)

    assert [row["Year"] for row in rows] == ["2003"]


def test_blank_lines_and_empty_input():
    assert parse_delimited("") == []
    assert parse_delimited("   \n") == []
    assert parse_delimited("Presidents,Year\n\nLula,2003\n\n") == [
        {"Presidents": "Lula", "Year": "2003"}
    ]


def test_naive_split_breaks_on_embedded_commas():
    text = (
        'Presidents,Year,"Exchange Rate (January,R$/USD)"\n'
        "Lula,2003,3.44\n"
    )

    # The quoted header splits into four naive fields, so the data row no longer fits.
    assert parse_delimited(text) == []


def test_quote_aware_mode_handles_embedded_delimiters():
    text = (
        'Presidents,Year,"Exchange Rate (January,R$/USD)","Minimum Wage (in R$)"\n'
        'Lula,2003,3.44,"240,00"\n'
    )

    rows = parse_delimited(text, quote_aware=True)

    assert rows == [
        {
            "Presidents": "Lula",
            "Year": "2003",
            "Exchange Rate (January,R$/USD)": "3.44",
            "Minimum Wage (in R$)": "240,00",
        }
    ]
    record = normalize_all(rows)[0]
    assert record.value("exchange-rate") == 3.44
    assert record.value("minimum-wage") == 240.0
